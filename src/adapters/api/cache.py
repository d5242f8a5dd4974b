"""
Cache persistant des recherches dans le catalogue.

Le cache utilise diskcache pour la persistence sur disque, ce qui permet
de conserver les resultats entre deux sessions d'import.

Seules les recherches sont cachees (SEARCH_TTL: 24 heures) : l'etat de la
bibliotheque et les scans doivent toujours etre lus a jour.
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache

from src.core.value_objects.scan import Candidate


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_search("frieren", candidates)
        cached = await cache.get_search("Frieren")
    """

    SEARCH_TTL = 24 * 60 * 60  # 24 heures en secondes

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    @staticmethod
    def search_key(query: str) -> str:
        """Cle de cache d'une recherche (insensible a la casse et aux espaces)."""
        return f"catalog:search:{' '.join(query.lower().split())}"

    async def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur du cache, None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur dans le cache avec un TTL en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def get_search(self, query: str) -> Optional[list[Candidate]]:
        """Resultats caches d'une recherche, ou None."""
        return await self.get(self.search_key(query))

    async def set_search(self, query: str, candidates: list[Candidate]) -> None:
        """Stocke les resultats d'une recherche (TTL de 24h)."""
        await self.set(self.search_key(query), list(candidates), self.SEARCH_TTL)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
