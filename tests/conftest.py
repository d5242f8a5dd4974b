"""
Fixtures pytest partagees pour les tests animport.

Ce module contient les fixtures communes utilisees dans les tests:
- Fabriques d'objets valeur (candidats, fichiers scannes, resultats de scan)
- Mocks des ports (IScanner, ICatalogSearch, ILibrary, IBulkImporter)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.config import Settings
from src.core.entities.series import Series
from src.core.ports.catalog import ICatalogSearch
from src.core.ports.library import IBulkImporter, ILibrary
from src.core.ports.scanner import IScanner
from src.core.value_objects import Candidate, ImportOutcome, ScanResult
from tests.fixtures.factories import make_candidate, make_file


@pytest.fixture
def foo_candidates() -> list[Candidate]:
    """Candidats "Foo" (saison 1) et "Foo Season 2"."""
    return [
        make_candidate(1, "Foo"),
        make_candidate(2, "Foo Season 2"),
    ]


@pytest.fixture
def foo_scan(foo_candidates: list[Candidate]) -> ScanResult:
    """Scan avec un fichier sans saison (a) et un fichier de saison 2 (b)."""
    return ScanResult(
        files=(
            make_file("a", episode=1, season=None),
            make_file("b", episode=1, season=2),
        ),
        candidates=tuple(foo_candidates),
    )


@pytest.fixture
def mock_scanner(foo_scan: ScanResult) -> AsyncMock:
    """Mock de IScanner retournant le scan "Foo" par defaut."""
    mock = AsyncMock(spec=IScanner)
    mock.scan.return_value = foo_scan
    return mock


@pytest.fixture
def mock_catalog() -> AsyncMock:
    """Mock de ICatalogSearch (aucun resultat par defaut)."""
    mock = AsyncMock(spec=ICatalogSearch)
    mock.search.return_value = []
    return mock


@pytest.fixture
def mock_library() -> AsyncMock:
    """
    Mock de ILibrary.

    Bibliotheque vide avec un profil "HD" ; add_series retourne la serie creee.
    """
    mock = AsyncMock(spec=ILibrary)
    mock.list_series_ids.return_value = set()
    mock.list_profile_names.return_value = ["HD", "SD"]

    async def add_series(series_id, profile_name, root_folder, monitored=True, monitor_and_search=False):
        return Series(
            id=series_id,
            profile_name=profile_name,
            root_folder=root_folder,
            monitored=monitored,
        )

    mock.add_series.side_effect = add_series
    return mock


@pytest.fixture
def mock_importer() -> AsyncMock:
    """Mock de IBulkImporter retournant un bilan vide."""
    mock = AsyncMock(spec=IBulkImporter)
    mock.import_files.return_value = ImportOutcome()
    return mock


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler le cache et les logs.
    """
    return Settings(
        api_url="http://bakarr.test",
        api_key="test-key",
        request_timeout=5,
        max_retries=2,
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
    )
