"""
Couche domaine (core).

Contient les entités, ports (interfaces abstraites), objets valeur et exceptions
du moteur de rapprochement d'import.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, HTTP).

Sous-packages :
- entities/ : Entités métier (Series)
- ports/ : Interfaces abstraites (Scanner, Catalogue, Bibliothèque, Import groupé)
- value_objects/ : Objets valeur immutables (ScanResult, FileMapping, ImportOutcome)
- exceptions : Hiérarchie des erreurs du workflow d'import
"""
