"""
Etape de revue du workflow : bascules de candidats et corrections par fichier.

Les operations deleguent a SelectionState, seul detenteur de la table des
correspondances, apres verification de la phase.
"""

import dataclasses

from loguru import logger

from src.core.value_objects.import_outcome import FileMapping
from src.core.value_objects.scan import Candidate
from src.services.selection import SelectionState

from .dataclasses import WorkflowPhase


class ReviewStepMixin:
    """Mixin pour l'etape de revue."""

    def toggle_candidate(self, candidate_id: int) -> bool:
        """Bascule un candidat. Retourne True s'il est actif apres la bascule."""
        return self._review_selection("toggle_candidate").toggle_candidate(candidate_id)

    def add_manual_candidate(self, candidate: Candidate) -> int:
        """Ajoute un candidat issu de la recherche. Retourne le nombre de fichiers reclames."""
        return self._review_selection("add_manual_candidate").add_manual_candidate(candidate)

    def toggle_file(self, source_path: str, series_id: int) -> bool:
        return self._review_selection("toggle_file").toggle_file(source_path, series_id)

    def update_file_series(self, source_path: str, series_id: int) -> bool:
        return self._review_selection("update_file_series").update_file_series(
            source_path, series_id
        )

    def update_file_mapping(self, source_path: str, season: int, episode: int) -> FileMapping:
        return self._review_selection("update_file_mapping").update_file_mapping(
            source_path, season, episode
        )

    async def search_catalog(self, query: str) -> list[Candidate]:
        """
        Recherche des series dans le catalogue.

        Les resultats deja presents dans la bibliotheque (d'apres l'etat
        capture au scan) sont marques already_in_library.

        Args:
            query: Texte recherche (une requete vide ne declenche aucun appel)

        Returns:
            Liste des candidats trouves
        """
        query = query.strip()
        if not query:
            return []

        results = await self._catalog.search(query)
        snapshot = self._state.snapshot
        flagged = [
            candidate
            if candidate.already_in_library or not snapshot.contains(candidate.id)
            else dataclasses.replace(candidate, already_in_library=True)
            for candidate in results
        ]
        logger.debug(f"Recherche '{query}': {len(flagged)} resultat(s)")
        return flagged

    def _review_selection(self, operation: str) -> SelectionState:
        """Verifie la phase de revue et retourne l'etat de selection."""
        self._require_phase(operation, WorkflowPhase.REVIEW)
        return self._state.selection
