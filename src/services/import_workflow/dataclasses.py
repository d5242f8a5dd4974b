"""
Dataclasses et enums du workflow d'import.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from src.core.value_objects.import_outcome import ImportOutcome
from src.core.value_objects.library import LibrarySnapshot
from src.core.value_objects.scan import ScanResult

if TYPE_CHECKING:
    from src.services.commit import ImportSubmission
    from src.services.selection import SelectionState


class WorkflowPhase(str, Enum):
    """Phases du workflow."""

    SCAN = "scan"
    REVIEW = "review"
    COMMIT = "commit"


@dataclass
class ImportWorkflowConfig:
    """Configuration du workflow."""

    # Limite le scan a une serie (import depuis la page d'une serie)
    restrict_to_series_id: Optional[int] = None


@dataclass
class ImportWorkflowState:
    """Etat du workflow pendant son execution."""

    phase: WorkflowPhase = WorkflowPhase.SCAN

    # Jeton courant, incremente a chaque scan et a chaque reinitialisation
    token: int = 0

    # Resultats du scan
    scan_path: Optional[str] = None
    scan_result: Optional[ScanResult] = None
    snapshot: LibrarySnapshot = field(default_factory=LibrarySnapshot)
    selection: Optional["SelectionState"] = None

    # Commit (committing : ajout des series en cours, avant la soumission)
    committing: bool = False
    submission: Optional["ImportSubmission"] = None
    last_outcome: Optional[ImportOutcome] = None
