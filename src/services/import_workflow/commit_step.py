"""
Etape de commit du workflow : ajout des series manquantes puis import groupe.
"""

from typing import Callable, Optional

from loguru import logger

from src.core.exceptions import (
    CandidateAddFailure,
    EmptySelectionError,
    InvalidPhaseError,
)
from src.core.value_objects.import_outcome import ImportOutcome
from src.services.commit import ImportSubmission

from .dataclasses import WorkflowPhase


class CommitStepMixin:
    """Mixin pour l'etape de commit."""

    async def commit(
        self,
        on_complete: Optional[Callable[[ImportOutcome], None]] = None,
    ) -> Optional[ImportSubmission]:
        """
        Valide la selection : ajoute les series manquantes puis soumet l'import.

        Rend la main des la soumission ; le bilan arrive de facon asynchrone
        et est enregistre dans last_outcome (puis transmis a on_complete) si
        le workflow n'a pas ete reinitialise entre-temps.

        Args:
            on_complete: Callback appele avec le bilan de l'import

        Returns:
            La soumission en cours, ou None si le workflow a ete reinitialise
            pendant l'ajout des series

        Raises:
            EmptySelectionError: Si aucun fichier n'est selectionne
            InvalidPhaseError: Hors revue, ou si un commit est deja en cours
            CandidateAddFailure: Si une serie ne peut pas etre ajoutee ;
                le workflow reste en revue avec sa selection intacte
        """
        self._require_phase("commit", WorkflowPhase.REVIEW)
        if self._state.committing:
            raise InvalidPhaseError("commit", (WorkflowPhase.REVIEW,), "commit en cours")
        selection = self._state.selection
        mappings = selection.finalized_mappings()
        if not mappings:
            raise EmptySelectionError()

        token = self._state.token
        snapshot = self._state.snapshot
        candidates = {candidate.id: candidate for candidate in selection.candidates}

        self._state.committing = True
        try:
            new_ids = await self._coordinator.prepare(mappings, snapshot, candidates)
        except CandidateAddFailure as e:
            if self._is_current(token):
                self._state.snapshot = snapshot.with_series(e.added_series_ids)
            raise
        finally:
            if self._is_current(token):
                self._state.committing = False

        if not self._is_current(token):
            self._discard_stale("commit", token)
            return None
        self._state.snapshot = snapshot.with_series(new_ids)

        self._state.phase = WorkflowPhase.COMMIT
        submission = self._coordinator.submit(mappings)
        self._state.submission = submission
        submission.add_done_callback(
            lambda outcome: self._record_outcome(token, outcome, on_complete)
        )
        return submission

    def _record_outcome(
        self,
        token: int,
        outcome: ImportOutcome,
        on_complete: Optional[Callable[[ImportOutcome], None]],
    ) -> None:
        """Enregistre le bilan s'il concerne encore la session courante."""
        if not self._is_current(token):
            self._discard_stale("import", token)
            return
        self._state.last_outcome = outcome
        logger.debug(f"Bilan enregistre: {outcome.summary()}")
        if on_complete is not None:
            on_complete(outcome)
