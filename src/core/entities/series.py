"""
Entite serie de la bibliotheque locale.

Represente une serie telle que retournee par la bibliotheque apres son ajout
(ou lors de son listage).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Series:
    """
    Serie suivie dans la bibliotheque locale.

    Attributes:
        id: ID de la serie (identique a l'ID du catalogue)
        title: Titre principal
        profile_name: Profil de qualite associe
        root_folder: Dossier racine de la serie dans la bibliotheque
        monitored: True si la serie est surveillee
        path: Chemin de la serie sur le disque, si connu
    """

    id: int
    title: str = ""
    profile_name: str = ""
    root_folder: str = ""
    monitored: bool = True
    path: Optional[str] = None
