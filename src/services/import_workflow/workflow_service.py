"""
Service d'orchestration du workflow d'import.

Ce service enchaine les trois phases du rapprochement :
- Scan d'un dossier (via le Scanner) et capture de l'etat de la bibliotheque
- Revue interactive (bascule de candidats, corrections par fichier)
- Commit (ajout des series manquantes puis import groupe)

Chaque scan, retour au scan ou reinitialisation incremente un jeton ; une reponse
portant un jeton perime est ignoree au lieu d'ecraser l'etat courant.
"""

from typing import Optional

from loguru import logger

from src.core.exceptions import InvalidPhaseError, StaleResponse
from src.core.ports.catalog import ICatalogSearch
from src.core.ports.library import ILibrary
from src.core.ports.scanner import IScanner
from src.core.value_objects.import_outcome import ImportOutcome
from src.core.value_objects.library import LibrarySnapshot
from src.core.value_objects.scan import ScanResult
from src.services.commit import ImportCommitCoordinator, ImportSubmission
from src.services.selection import SelectionState

from .commit_step import CommitStepMixin
from .dataclasses import ImportWorkflowConfig, ImportWorkflowState, WorkflowPhase
from .review_step import ReviewStepMixin
from .scan_step import ScanStepMixin


class ImportWorkflowService(ScanStepMixin, ReviewStepMixin, CommitStepMixin):
    """
    Service d'orchestration du workflow d'import.

    Une instance correspond a une session d'import (le dialogue d'import) :
    un nouveau scan repart d'un etat de selection vierge.

    Utilisation typique:
        workflow = ImportWorkflowService(scanner, catalog, library, coordinator)
        await workflow.scan("/downloads/show")
        workflow.toggle_candidate(2)
        submission = await workflow.commit()
        outcome = await submission
    """

    def __init__(
        self,
        scanner: IScanner,
        catalog: ICatalogSearch,
        library: ILibrary,
        coordinator: ImportCommitCoordinator,
        config: Optional[ImportWorkflowConfig] = None,
    ) -> None:
        """
        Initialise le service de workflow.

        Args:
            scanner: Scanner de dossiers
            catalog: Recherche dans le catalogue (ajout manuel de candidats)
            library: Bibliotheque locale (etat capture au scan)
            coordinator: Coordinateur du commit
            config: Configuration du workflow (defaut : toute la bibliotheque)
        """
        self._scanner = scanner
        self._catalog = catalog
        self._library = library
        self._coordinator = coordinator
        self._config = config or ImportWorkflowConfig()
        self._state = ImportWorkflowState()

    # ------------------------------------------------------------------
    # Lecture de l'etat
    # ------------------------------------------------------------------

    @property
    def config(self) -> ImportWorkflowConfig:
        return self._config

    @property
    def phase(self) -> WorkflowPhase:
        """Phase courante."""
        return self._state.phase

    @property
    def token(self) -> int:
        """Jeton courant."""
        return self._state.token

    @property
    def scan_result(self) -> Optional[ScanResult]:
        return self._state.scan_result

    @property
    def snapshot(self) -> LibrarySnapshot:
        """Etat de la bibliotheque capture au dernier scan."""
        return self._state.snapshot

    @property
    def selection(self) -> Optional[SelectionState]:
        return self._state.selection

    @property
    def submission(self) -> Optional[ImportSubmission]:
        return self._state.submission

    @property
    def last_outcome(self) -> Optional[ImportOutcome]:
        """Bilan du dernier import de cette session, s'il est arrive."""
        return self._state.last_outcome

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def back_to_scan(self) -> None:
        """
        Revient de la revue a la phase de scan en abandonnant la selection.

        Un commit dont l'ajout des series est en cours ne soumettra pas son import.
        """
        self._require_phase("back_to_scan", WorkflowPhase.REVIEW)
        self._discard_scan()
        token = self._next_token()
        logger.debug(f"Retour au scan (jeton {token})")
        self._state.phase = WorkflowPhase.SCAN

    def reset(self) -> None:
        """
        Reinitialise le workflow (fermeture/reouverture du dialogue).

        Les reponses des scans et imports en cours seront ignorees.
        """
        self._state = ImportWorkflowState(token=self._state.token + 1)
        logger.debug(f"Workflow reinitialise (jeton {self._state.token})")

    # ------------------------------------------------------------------
    # Utilitaires partages par les etapes
    # ------------------------------------------------------------------

    def _require_phase(self, operation: str, *phases: WorkflowPhase) -> None:
        """Leve InvalidPhaseError si la phase courante n'est pas autorisee."""
        if self._state.phase not in phases:
            raise InvalidPhaseError(operation, phases, self._state.phase)

    def _next_token(self) -> int:
        self._state.token += 1
        return self._state.token

    def _is_current(self, token: int) -> bool:
        return token == self._state.token

    def _discard_stale(self, operation: str, token: int) -> None:
        """Journalise une reponse perimee ignoree."""
        stale = StaleResponse(token, self._state.token)
        logger.debug(f"{operation}: {stale}")

    def _discard_scan(self) -> None:
        self._state.scan_path = None
        self._state.scan_result = None
        self._state.selection = None
        self._state.snapshot = LibrarySnapshot()
        self._state.committing = False
