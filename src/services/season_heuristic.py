"""
Heuristique de saison d'un candidat.

Deduit le numero de saison vise par une serie du catalogue a partir de son
titre affiche : "Season 2", "2nd Season", "3rd season"... Sans indication,
la saison vaut 1.

Fonctions pures, sans effet de bord et deterministes.
"""

import re
from typing import Optional

from src.core.value_objects.scan import Candidate

# Saison par defaut quand le titre ne mentionne aucune saison
DEFAULT_SEASON = 1

# Patterns evalues dans l'ordre, le premier qui correspond l'emporte
SEASON_PATTERNS = [
    re.compile(r"season\s+(\d+)", re.IGNORECASE),  # Season 2
    re.compile(r"(\d+)(?:nd|rd|th)\s+season", re.IGNORECASE),  # 2nd Season, 4th season
]


def infer_season_from_title(title: Optional[str]) -> int:
    """
    Deduit la saison depuis un titre.

    Args:
        title: Titre a analyser (None ou vide accepte)

    Returns:
        Le numero capture par le premier pattern qui correspond, ou 1
    """
    if not title:
        return DEFAULT_SEASON

    for pattern in SEASON_PATTERNS:
        match = pattern.search(title)
        if match:
            return int(match.group(1))

    return DEFAULT_SEASON


def infer_candidate_season(candidate: Candidate) -> int:
    """Saison visee par un candidat (titre localise, sinon titre principal)."""
    return infer_season_from_title(candidate.display_title)
