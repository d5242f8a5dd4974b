"""
Couche application (cas d'utilisation).

- selection : etat de la revue et politique de reclamation des fichiers
- season_heuristic : saison deduite du titre d'un candidat
- commit : ajout des series manquantes puis import groupe
- import_workflow : orchestration scan -> revue -> commit

Les services dependent des ports de core/, jamais des adaptateurs.
"""
