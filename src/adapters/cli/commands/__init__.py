"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.import_commands import (
    import_folder,
    scan_folder,
    search_catalog,
)

__all__ = [
    "import_folder",
    "scan_folder",
    "search_catalog",
]
