"""
Client de l'API REST du serveur de bibliotheque.

Implemente les quatre ports du moteur d'import (IScanner, ICatalogSearch,
ILibrary, IBulkImporter) contre l'API du serveur. Toutes les reponses sont
enveloppees dans {success, data, error} ; l'authentification passe par le
header X-Api-Key.

Usage:
    cache = APICache()
    client = BakarrClient("http://localhost:6789", api_key="xxx", cache=cache)
    result = await client.scan("/downloads/show")
    outcome = await client.import_files(mappings)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from src.adapters.api.cache import APICache
from src.adapters.api.retry import ApiError, request_with_retry
from src.core.entities.series import Series
from src.core.ports.catalog import ICatalogSearch
from src.core.ports.library import IBulkImporter, ILibrary
from src.core.ports.scanner import IScanner
from src.core.value_objects.import_outcome import (
    FailedImport,
    FileMapping,
    ImportedFile,
    ImportOutcome,
)
from src.core.value_objects.scan import (
    Candidate,
    CandidateTitle,
    MatchedSeries,
    ScannedFile,
    ScanResult,
    SkippedFile,
)

# ============================================================================
# Conversion JSON -> objets valeur
# ============================================================================


def parse_title(payload: Any) -> CandidateTitle:
    """Titres d'une serie ({romaji, english, native} ou simple chaine)."""
    if isinstance(payload, str):
        return CandidateTitle(romaji=payload)
    payload = payload or {}
    return CandidateTitle(
        romaji=payload.get("romaji") or "",
        english=payload.get("english"),
        native=payload.get("native"),
    )


def parse_candidate(item: dict) -> Candidate:
    """Candidat depuis un resultat de recherche du catalogue."""
    return Candidate(
        id=int(item["id"]),
        title=parse_title(item.get("title")),
        format=item.get("format"),
        episode_count=item.get("episode_count"),
        status=item.get("status"),
        cover_image=item.get("cover_image"),
        already_in_library=bool(item.get("already_in_library", False)),
    )


def parse_scanned_file(item: dict) -> ScannedFile:
    """Fichier scanne ; matched_anime devient matched_series."""
    matched = item.get("matched_anime")
    suggested = item.get("suggested_candidate_id")
    return ScannedFile(
        source_path=item["source_path"],
        filename=item.get("filename", ""),
        parsed_title=item.get("parsed_title", ""),
        episode_number=float(item.get("episode_number") or 0),
        season=item.get("season"),
        group=item.get("group"),
        resolution=item.get("resolution"),
        matched_series=(
            MatchedSeries(id=int(matched["id"]), title=matched.get("title", ""))
            if matched
            else None
        ),
        suggested_candidate_id=int(suggested) if suggested is not None else None,
    )


def parse_scan_result(data: dict) -> ScanResult:
    data = data or {}
    return ScanResult(
        files=tuple(parse_scanned_file(f) for f in data.get("files", [])),
        skipped=tuple(
            SkippedFile(path=s["path"], reason=s.get("reason", ""))
            for s in data.get("skipped", [])
        ),
        candidates=tuple(parse_candidate(c) for c in data.get("candidates", [])),
    )


def parse_series(item: dict) -> Series:
    """Serie de la bibliotheque (reponse de l'ajout ou du listage)."""
    return Series(
        id=int(item["id"]),
        title=parse_title(item.get("title")).display_title,
        profile_name=item.get("profile_name", ""),
        root_folder=item.get("root_folder", ""),
        monitored=bool(item.get("monitored", True)),
        path=item.get("path"),
    )


def parse_import_outcome(data: dict) -> ImportOutcome:
    """
    Bilan d'import.

    Les compteurs du serveur sont conserves tels quels ; s'ils sont absents
    ils sont derives des listes de fichiers.
    """
    data = data or {}
    imported_files = tuple(
        ImportedFile(
            source_path=f["source_path"],
            destination_path=f.get("destination_path", ""),
            series_id=int(f["anime_id"]),
            episode_number=int(f.get("episode_number", 0)),
        )
        for f in data.get("imported_files", [])
    )
    failed_files = tuple(
        FailedImport(source_path=f["source_path"], error=f.get("error", ""))
        for f in data.get("failed_files", [])
    )
    return ImportOutcome(
        imported_count=int(data.get("imported", len(imported_files))),
        failed_count=int(data.get("failed", len(failed_files))),
        imported_files=imported_files,
        failed_files=failed_files,
    )


def mapping_to_request(mapping: FileMapping) -> dict:
    """Requete d'import d'un fichier."""
    return {
        "source_path": mapping.source_path,
        "anime_id": mapping.series_id,
        "episode_number": mapping.episode_number,
        "season": mapping.season,
    }


# ============================================================================
# Client
# ============================================================================


class BakarrClient(IScanner, ICatalogSearch, ILibrary, IBulkImporter):
    """
    Client API du serveur de bibliotheque.

    Implemente les quatre ports du moteur avec:
    - Scan d'un dossier d'import
    - Recherche dans le catalogue (cache 24h)
    - Listage des series et profils, ajout d'une serie
    - Import groupe de fichiers
    - Retry automatique sur rate limiting (429)
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        cache: Optional[APICache] = None,
        timeout: float = 30.0,
        max_retries: int = 5,
    ) -> None:
        """
        Initialise le client.

        Args:
            base_url: URL du serveur (ex: http://localhost:6789)
            api_key: Cle API (header X-Api-Key), optionnelle
            cache: Cache des recherches (pas de cache si None)
            timeout: Timeout des requetes en secondes
            max_retries: Nombre maximum de tentatives sur 429
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._cache = cache
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["X-Api-Key"] = self._api_key
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
            )
        return self._client

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Execute une requete et deballe l'enveloppe {success, data, error}.

        Une reponse sans enveloppe est retournee telle quelle.

        Raises:
            ApiError: Erreur HTTP, de transport ou enveloppe en echec
        """
        response = await request_with_retry(
            self._get_client(), method, path, max_attempts=self._max_retries, **kwargs
        )
        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(
                f"Reponse invalide de {path}", status_code=response.status_code
            ) from e

        if isinstance(payload, dict) and "success" in payload and "data" in payload:
            if not payload["success"]:
                raise ApiError(payload.get("error") or "Erreur API inconnue")
            return payload["data"]
        return payload

    # ------------------------------------------------------------------
    # IScanner
    # ------------------------------------------------------------------

    async def scan(self, path: str, series_id_hint: Optional[int] = None) -> ScanResult:
        """Scanne un dossier d'import cote serveur."""
        data = await self._request(
            "POST",
            "/api/library/import/scan",
            json={"path": path, "anime_id": series_id_hint},
        )
        return parse_scan_result(data)

    # ------------------------------------------------------------------
    # ICatalogSearch
    # ------------------------------------------------------------------

    async def search(self, query: str) -> list[Candidate]:
        """
        Recherche des series dans le catalogue.

        Utilise le pattern cache-first : les resultats sont caches 24 heures.
        """
        if self._cache is not None:
            cached = await self._cache.get_search(query)
            if cached is not None:
                logger.debug(f"Recherche '{query}' servie depuis le cache")
                return cached

        data = await self._request("GET", "/api/anime/search", params={"q": query})
        results = [parse_candidate(item) for item in data or []]

        if self._cache is not None:
            await self._cache.set_search(query, results)
        return results

    # ------------------------------------------------------------------
    # ILibrary
    # ------------------------------------------------------------------

    async def list_series_ids(self) -> set[int]:
        data = await self._request("GET", "/api/anime")
        return {int(item["id"]) for item in data or []}

    async def list_profile_names(self) -> list[str]:
        data = await self._request("GET", "/api/profiles")
        return [item["name"] for item in data or []]

    async def add_series(
        self,
        series_id: int,
        profile_name: str,
        root_folder: str,
        monitored: bool = True,
        monitor_and_search: bool = False,
    ) -> Series:
        data = await self._request(
            "POST",
            "/api/anime",
            json={
                "id": series_id,
                "profile_name": profile_name,
                "root_folder": root_folder,
                "monitored": monitored,
                "monitor_and_search": monitor_and_search,
                "release_profile_ids": [],
            },
        )
        if not data:
            return Series(
                id=series_id,
                profile_name=profile_name,
                root_folder=root_folder,
                monitored=monitored,
            )
        return parse_series(data)

    # ------------------------------------------------------------------
    # IBulkImporter
    # ------------------------------------------------------------------

    async def import_files(self, mappings: list[FileMapping]) -> ImportOutcome:
        data = await self._request(
            "POST",
            "/api/library/import",
            json={"files": [mapping_to_request(m) for m in mappings]},
        )
        return parse_import_outcome(data)

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
