"""
Objets valeur immutables representant des concepts du domaine sans identite.

Les objets valeur sont definis par leurs attributs plutot que par une identite.
Ils sont immutables et peuvent etre librement partages et compares par valeur.

Exports :
- CandidateTitle, Candidate : Series candidates du catalogue
- MatchedSeries, ScannedFile, SkippedFile, ScanResult : Resultat d'un scan
- FileMapping : Correspondance fichier -> episode
- ImportedFile, FailedImport, ImportOutcome : Bilan d'un import groupe
- LibrarySnapshot : Instantane de la bibliotheque locale
"""

from src.core.value_objects.import_outcome import (
    FailedImport,
    FileMapping,
    ImportedFile,
    ImportOutcome,
)
from src.core.value_objects.library import DEFAULT_PROFILE_NAME, LibrarySnapshot
from src.core.value_objects.scan import (
    Candidate,
    CandidateTitle,
    MatchedSeries,
    ScannedFile,
    ScanResult,
    SkippedFile,
)

__all__ = [
    "Candidate",
    "CandidateTitle",
    "MatchedSeries",
    "ScannedFile",
    "ScanResult",
    "SkippedFile",
    "FileMapping",
    "ImportedFile",
    "FailedImport",
    "ImportOutcome",
    "LibrarySnapshot",
    "DEFAULT_PROFILE_NAME",
]
