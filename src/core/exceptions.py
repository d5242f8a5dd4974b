"""
Hierarchie des exceptions du moteur de rapprochement d'import.

    ImportReconciliationError (base)
    ├── ScanFailure - chemin invalide ou illisible, le workflow reste en phase scan
    ├── CandidateAddFailure - ajout d'une serie echoue, le commit est abandonne
    ├── BulkImportFailure - la requete d'import groupe elle-meme a echoue
    ├── StaleResponse - reponse arrivee apres que le workflow a change
    ├── InvalidPhaseError - operation appelee dans la mauvaise phase
    ├── EmptySelectionError - commit sans aucune correspondance
    ├── UnknownCandidateError - serie cible inconnue de la revue
    ├── UnknownFileError - chemin absent du scan
    └── UnmappedFileError - edition d'un fichier sans serie cible

Les echecs d'import par fichier ne sont pas des exceptions : ils sont
rapportes dans ImportOutcome.failed_files.
"""

from typing import Any, Iterable, Optional


class ImportReconciliationError(Exception):
    """Exception de base du moteur de rapprochement."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialise l'exception.

        Args:
            message: Message lisible
            details: Details structures pour le logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ScanFailure(ImportReconciliationError):
    """Le scan du chemin a echoue (chemin invalide ou illisible). Reessayable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Echec du scan de {path}: {reason}",
            details={"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


class CandidateAddFailure(ImportReconciliationError):
    """
    L'ajout d'une serie a la bibliotheque a echoue pendant le commit.

    Attributes:
        series_id: Serie dont l'ajout a echoue
        added_series_ids: Series ajoutees avec succes avant l'echec
    """

    def __init__(
        self,
        series_id: int,
        reason: str,
        added_series_ids: Iterable[int] = (),
    ) -> None:
        super().__init__(
            f"Impossible d'ajouter la serie {series_id}: {reason}",
            details={"series_id": series_id, "reason": reason},
        )
        self.series_id = series_id
        self.reason = reason
        self.added_series_ids = tuple(added_series_ids)


class BulkImportFailure(ImportReconciliationError):
    """La requete d'import groupe a echoue avant de produire un bilan."""

    def __init__(self, reason: str, file_count: int = 0) -> None:
        super().__init__(
            f"Echec de l'import groupe ({file_count} fichier(s)): {reason}",
            details={"reason": reason, "file_count": file_count},
        )
        self.reason = reason
        self.file_count = file_count


class StaleResponse(ImportReconciliationError):
    """Reponse d'un scan ou d'un commit dont le jeton n'est plus courant."""

    def __init__(self, token: int, current_token: int) -> None:
        super().__init__(
            f"Reponse obsolete ignoree (jeton {token}, courant {current_token})",
            details={"token": token, "current_token": current_token},
        )
        self.token = token
        self.current_token = current_token


class InvalidPhaseError(ImportReconciliationError):
    """Operation appelee dans une phase du workflow qui ne l'autorise pas."""

    def __init__(self, operation: str, expected: Iterable[Any], actual: Any) -> None:
        expected_values = ", ".join(str(getattr(p, "value", p)) for p in expected)
        actual_value = getattr(actual, "value", actual)
        super().__init__(
            f"Operation '{operation}' impossible en phase {actual_value} "
            f"(attendu: {expected_values})",
            details={"operation": operation, "actual": str(actual_value)},
        )
        self.operation = operation
        self.actual = actual


class EmptySelectionError(ImportReconciliationError):
    """Aucun fichier selectionne pour l'import."""

    def __init__(self) -> None:
        super().__init__("Aucun fichier selectionne pour l'import")


class UnknownCandidateError(ImportReconciliationError):
    """La serie cible n'est ni un candidat connu ni la serie associee au fichier."""

    def __init__(self, series_id: int) -> None:
        super().__init__(
            f"Serie inconnue de la revue: {series_id}",
            details={"series_id": series_id},
        )
        self.series_id = series_id


class UnknownFileError(ImportReconciliationError):
    """Le chemin ne correspond a aucun fichier du scan."""

    def __init__(self, source_path: str) -> None:
        super().__init__(
            f"Fichier absent du scan: {source_path}",
            details={"source_path": source_path},
        )
        self.source_path = source_path


class UnmappedFileError(ImportReconciliationError):
    """Edition saison/episode d'un fichier qui n'a aucune serie cible."""

    def __init__(self, source_path: str) -> None:
        super().__init__(
            f"Aucune serie cible pour {source_path}: selectionnez d'abord une serie",
            details={"source_path": source_path},
        )
        self.source_path = source_path
