"""
Tests unitaires pour les commandes CLI d'import.

Tests couvrant:
- scan: affichage de la pre-selection, echec du scan
- search: recherche dans le catalogue
- import: mode --yes, revue interactive, echecs d'ajout et bilan partiel
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from src.core.value_objects import FailedImport, ImportedFile, ImportOutcome, ScanResult
from src.main import app
from src.services.commit import ImportCommitCoordinator
from src.services.import_workflow import ImportWorkflowService
from tests.fixtures.factories import make_candidate, make_file

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def workflow_factory(mock_scanner, mock_catalog, mock_library, mock_importer):
    """Fabrique de workflows reels branches sur les ports simules."""

    def factory(config=None):
        coordinator = ImportCommitCoordinator(mock_library, mock_importer)
        return ImportWorkflowService(
            mock_scanner, mock_catalog, mock_library, coordinator, config=config
        )

    return factory


@pytest.fixture
def mock_container(workflow_factory):
    """Mock le Container pour les tests.

    Patche Container dans helpers.py car c'est la que le decorateur
    @with_container() l'importe et l'instancie.
    """
    with patch("src.adapters.cli.helpers.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        container_instance.import_workflow_service.side_effect = workflow_factory
        container_instance.bakarr_client.return_value.close = AsyncMock()
        yield container_instance


@pytest.fixture
def matched_scan(mock_scanner) -> ScanResult:
    """Scan dont les deux fichiers sont deja associes a la serie 10."""
    result = ScanResult(
        files=(
            make_file("/dl/Foo - 01.mkv", episode=1, matched=10),
            make_file("/dl/Foo - 02.mkv", episode=2, matched=10),
        ),
        candidates=(make_candidate(10, "Foo"),),
    )
    mock_scanner.scan.return_value = result
    return result


# ============================================================================
# scan
# ============================================================================


class TestScanCommand:
    """Tests pour la commande scan."""

    def test_scan_displays_files(self, mock_container, mock_scanner) -> None:
        result = runner.invoke(app, ["scan", "/downloads/foo"])

        assert result.exit_code == 0
        assert "2 fichier(s) trouve(s)" in result.output
        mock_scanner.scan.assert_awaited_once_with("/downloads/foo", None)
        mock_container.bakarr_client.return_value.close.assert_awaited_once()

    def test_scan_with_series_restriction(self, mock_container, mock_scanner) -> None:
        result = runner.invoke(app, ["scan", "/downloads/foo", "--series-id", "42"])

        assert result.exit_code == 0
        mock_scanner.scan.assert_awaited_once_with("/downloads/foo", 42)

    def test_scan_failure_exits_with_error(self, mock_container, mock_scanner) -> None:
        mock_scanner.scan.side_effect = FileNotFoundError("no such directory")

        result = runner.invoke(app, ["scan", "/missing"])

        assert result.exit_code == 1
        assert "no such directory" in result.output


# ============================================================================
# search
# ============================================================================


class TestSearchCommand:
    """Tests pour la commande search."""

    def test_search_lists_results(self, mock_container, mock_catalog) -> None:
        mock_catalog.search.return_value = [make_candidate(5, "Frieren")]

        result = runner.invoke(app, ["search", "frieren"])

        assert result.exit_code == 0
        assert "Frieren" in result.output
        mock_catalog.search.assert_awaited_once_with("frieren")

    def test_search_without_results(self, mock_container) -> None:
        result = runner.invoke(app, ["search", "zzz"])

        assert result.exit_code == 0
        assert "Aucun resultat" in result.output


# ============================================================================
# import
# ============================================================================


class TestImportCommand:
    """Tests pour la commande import."""

    def test_yes_imports_preselection(
        self, mock_container, matched_scan, mock_library, mock_importer
    ) -> None:
        """--yes importe la pre-selection et ajoute la serie manquante."""
        result = runner.invoke(app, ["import", "/dl", "--yes"])

        assert result.exit_code == 0
        mock_library.add_series.assert_awaited_once()
        assert mock_library.add_series.await_args.args[0] == 10
        sent = mock_importer.import_files.await_args.args[0]
        assert [m.source_path for m in sent] == ["/dl/Foo - 01.mkv", "/dl/Foo - 02.mkv"]

    def test_yes_with_empty_preselection_fails(self, mock_container, mock_importer) -> None:
        result = runner.invoke(app, ["import", "/downloads/foo", "--yes"])

        assert result.exit_code == 1
        assert "Aucun fichier selectionne" in result.output
        mock_importer.import_files.assert_not_called()

    def test_yes_add_failure_exits(
        self, mock_container, matched_scan, mock_library, mock_importer
    ) -> None:
        mock_library.add_series.side_effect = RuntimeError("profil inconnu")

        result = runner.invoke(app, ["import", "/dl", "--yes"])

        assert result.exit_code == 1
        assert "profil inconnu" in result.output
        mock_importer.import_files.assert_not_called()

    def test_partial_failure_reported(
        self, mock_container, matched_scan, mock_importer
    ) -> None:
        """Les echecs par fichier sont affiches et donnent un code de sortie 1."""
        mock_importer.import_files.return_value = ImportOutcome.from_files(
            [ImportedFile("/dl/Foo - 01.mkv", "/lib/Foo/S01E01.mkv", 10, 1)],
            [FailedImport("/dl/Foo - 02.mkv", "disk full")],
        )

        result = runner.invoke(app, ["import", "/dl", "--yes"])

        assert result.exit_code == 1
        assert "disk full" in result.output
        assert "/lib/Foo/S01E01.mkv" in result.output

    def test_interactive_quit(self, mock_container, mock_importer) -> None:
        result = runner.invoke(app, ["import", "/downloads/foo"], input="q\n")

        assert result.exit_code == 0
        assert "Import annule" in result.output
        mock_importer.import_files.assert_not_called()

    def test_interactive_toggle_then_import(
        self, mock_container, mock_library, mock_importer
    ) -> None:
        """Activer le candidat 1 puis importer envoie les deux fichiers."""
        result = runner.invoke(app, ["import", "/downloads/foo"], input="t 1\ni\n")

        assert result.exit_code == 0
        assert mock_library.add_series.await_args.args[0] == 1
        sent = mock_importer.import_files.await_args.args[0]
        assert {m.source_path for m in sent} == {"a", "b"}

    def test_interactive_empty_selection_returns_to_review(
        self, mock_container, mock_importer
    ) -> None:
        result = runner.invoke(app, ["import", "/downloads/foo"], input="i\nq\n")

        assert result.exit_code == 0
        assert "Aucun fichier selectionne" in result.output
        mock_importer.import_files.assert_not_called()


class TestInfoCommands:
    """Tests pour info et version."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "animport v" in result.output
