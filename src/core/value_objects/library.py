"""
Instantane de la bibliotheque locale.

Capture une fois pendant la phase de scan, puis injecte dans le coordinateur
d'import plutot que lu depuis un etat global.
"""

from dataclasses import dataclass
from typing import Iterable

# Profil utilise quand la bibliotheque n'en declare aucun
DEFAULT_PROFILE_NAME = "Any"


@dataclass(frozen=True)
class LibrarySnapshot:
    """
    Etat de la bibliotheque au moment du scan.

    Attributs :
        series_ids : IDs des series deja presentes dans la bibliotheque
        profile_names : Noms des profils de qualite, dans l'ordre du serveur
    """

    series_ids: frozenset[int] = frozenset()
    profile_names: tuple[str, ...] = ()

    def contains(self, series_id: int) -> bool:
        """True si la serie est deja dans la bibliotheque."""
        return series_id in self.series_ids

    @property
    def default_profile(self) -> str:
        """Premier profil declare, ou le profil par defaut."""
        return self.profile_names[0] if self.profile_names else DEFAULT_PROFILE_NAME

    def with_series(self, series_ids: Iterable[int]) -> "LibrarySnapshot":
        """Retourne une copie incluant les series ajoutees."""
        return LibrarySnapshot(
            series_ids=self.series_ids | frozenset(series_ids),
            profile_names=self.profile_names,
        )
