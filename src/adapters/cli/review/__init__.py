"""
Package CLI de revue interactive de l'import avec Rich.

Reexporte les symboles principaux (from src.adapters.cli.review import ...).
"""

from rich.console import Console

# Console globale pour tous les affichages
console = Console()

from .display import (
    display_candidates,
    display_files,
    display_help,
    display_outcome,
    display_review,
    display_search_results,
    display_skipped,
    format_episode,
    series_label,
)
from .interactive_loop import ReviewAction, parse_command, review_loop

__all__ = [
    "console",
    "ReviewAction",
    "display_candidates",
    "display_files",
    "display_help",
    "display_outcome",
    "display_review",
    "display_search_results",
    "display_skipped",
    "format_episode",
    "parse_command",
    "review_loop",
    "series_label",
]
