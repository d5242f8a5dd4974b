"""
animport - Rapprochement et import de fichiers video dans une bibliotheque de series.

Ce package scanne un dossier de telechargements via le serveur de bibliotheque,
propose une correspondance fichier -> episode pour chaque video, laisse
l'utilisateur corriger cette selection puis ajoute les series manquantes et
importe les fichiers en un seul appel.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (selection, workflow, commit)
- adapters/ : Couche infrastructure (CLI, client API du serveur)
"""
