"""
Tests unitaires pour APICache.

Ces tests verifient:
- Stockage et recuperation de valeurs
- Cle de recherche insensible a la casse et aux espaces
- Conservation des candidats entre deux lectures
- Nettoyage du cache
"""

from pathlib import Path

import pytest

from src.adapters.api.cache import APICache
from tests.fixtures.factories import make_candidate


class TestAPICache:
    """Tests pour la classe APICache."""

    @pytest.fixture
    def cache(self, tmp_path: Path) -> APICache:
        """Cree un cache avec un repertoire temporaire."""
        cache = APICache(cache_dir=str(tmp_path / "test_cache"))
        yield cache
        cache.close()

    @pytest.mark.asyncio
    async def test_get_returns_none_for_missing_key(self, cache: APICache) -> None:
        assert await cache.get("nonexistent_key") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: APICache) -> None:
        await cache.set("key", {"id": 1}, ttl=3600)

        assert await cache.get("key") == {"id": 1}

    def test_search_ttl_uses_24_hours(self) -> None:
        """SEARCH_TTL est defini a 24 heures (86400 secondes)."""
        assert APICache.SEARCH_TTL == 86400

    def test_search_key_normalizes_query(self) -> None:
        assert APICache.search_key("  Sousou   no FRIEREN ") == "catalog:search:sousou no frieren"

    @pytest.mark.asyncio
    async def test_search_results_survive_storage(self, cache: APICache) -> None:
        """Les candidats stockes sont relus a l'identique."""
        candidates = [make_candidate(1, "Frieren"), make_candidate(2, "Frieren Season 2")]

        await cache.set_search("Frieren", candidates)

        assert await cache.get_search("frieren") == candidates

    @pytest.mark.asyncio
    async def test_clear_removes_all_entries(self, cache: APICache) -> None:
        await cache.set("k1", "v1", ttl=3600)
        await cache.set_search("foo", [])

        await cache.clear()

        assert await cache.get("k1") is None
        assert await cache.get_search("foo") is None
