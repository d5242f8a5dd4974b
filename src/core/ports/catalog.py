"""
Interface port pour la recherche dans le catalogue de series.

Utilisee pour ajouter manuellement un candidat pendant la revue.
"""

from abc import ABC, abstractmethod

from src.core.value_objects.scan import Candidate


class ICatalogSearch(ABC):
    """Interface de recherche dans le catalogue."""

    @abstractmethod
    async def search(self, query: str) -> list[Candidate]:
        """
        Recherche des series par titre.

        Args :
            query : Titre a rechercher

        Retourne :
            Liste des candidats trouves (vide si aucun resultat)
        """
        ...
