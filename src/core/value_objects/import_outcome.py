"""
Objets valeur de l'import : correspondances fichier -> episode et bilan d'import.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class FileMapping:
    """
    Correspondance d'un fichier vers un episode d'une serie.

    C'est l'unite produite par la revue et soumise a l'import.
    La table des correspondances est indexee par source_path.

    Attributs :
        source_path : Chemin du fichier source
        series_id : ID de la serie cible
        season : Saison cible (None si inconnue)
        episode_number : Numero d'episode cible (entier)
    """

    source_path: str
    series_id: int
    season: Optional[int]
    episode_number: int


@dataclass(frozen=True)
class ImportedFile:
    """Fichier importe avec succes."""

    source_path: str
    destination_path: str
    series_id: int
    episode_number: int


@dataclass(frozen=True)
class FailedImport:
    """Echec d'import d'un fichier, avec l'erreur rapportee pour ce fichier."""

    source_path: str
    error: str


@dataclass(frozen=True)
class ImportOutcome:
    """
    Bilan d'un import groupe.

    Les echecs sont independants et rapportes fichier par fichier :
    un echec ne remet jamais en cause les fichiers importes.
    """

    imported_count: int = 0
    failed_count: int = 0
    imported_files: tuple[ImportedFile, ...] = ()
    failed_files: tuple[FailedImport, ...] = ()

    @classmethod
    def from_files(
        cls,
        imported_files: Iterable[ImportedFile],
        failed_files: Iterable[FailedImport],
    ) -> "ImportOutcome":
        """Construit un bilan en derivant les compteurs des listes de fichiers."""
        imported = tuple(imported_files)
        failed = tuple(failed_files)
        return cls(
            imported_count=len(imported),
            failed_count=len(failed),
            imported_files=imported,
            failed_files=failed,
        )

    @property
    def has_failures(self) -> bool:
        """True si au moins un fichier a echoue."""
        return self.failed_count > 0

    def summary(self) -> str:
        """Resume lisible du bilan."""
        if self.has_failures:
            return f"{self.imported_count} fichier(s) importe(s), {self.failed_count} en echec"
        return f"{self.imported_count} fichier(s) importe(s)"
