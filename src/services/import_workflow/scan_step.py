"""
Etape de scan du workflow : appel du Scanner et capture de la bibliotheque.
"""

from typing import Optional

from loguru import logger

from src.core.exceptions import ScanFailure
from src.core.value_objects.library import LibrarySnapshot
from src.core.value_objects.scan import ScanResult
from src.services.selection import SelectionState

from .dataclasses import WorkflowPhase


class ScanStepMixin:
    """Mixin pour l'etape de scan."""

    async def scan(self, path: str) -> Optional[ScanResult]:
        """
        Scanne un dossier et passe en revue avec la pre-selection du Scanner.

        Un nouveau scan (y compris depuis la revue) repart d'une selection vierge.

        Args:
            path: Dossier a scanner

        Returns:
            Le resultat du scan, ou None si la reponse est arrivee apres
            un scan plus recent ou une reinitialisation

        Raises:
            ScanFailure: Si le chemin est invalide ou le scan echoue ;
                le workflow reste en phase de scan
        """
        self._require_phase("scan", WorkflowPhase.SCAN, WorkflowPhase.REVIEW)
        path = path.strip()
        if not path:
            raise ScanFailure(path, "chemin vide")

        self._discard_scan()
        self._state.phase = WorkflowPhase.SCAN
        token = self._next_token()
        logger.info(f"Scan de {path}")

        try:
            result, snapshot = await self._fetch_scan(path)
        except ScanFailure as e:
            if not self._is_current(token):
                self._discard_stale("scan", token)
                return None
            logger.warning(f"{e}")
            raise
        except Exception as e:
            if not self._is_current(token):
                self._discard_stale("scan", token)
                return None
            logger.warning(f"Echec du scan de {path}: {e}")
            raise ScanFailure(path, str(e)) from e

        if not self._is_current(token):
            self._discard_stale("scan", token)
            return None

        selection = SelectionState(result)
        selection.preselect()

        self._state.scan_path = path
        self._state.scan_result = result
        self._state.snapshot = snapshot
        self._state.selection = selection
        self._state.phase = WorkflowPhase.REVIEW

        logger.info(
            f"Scan termine: {len(result.files)} fichier(s), "
            f"{len(result.skipped)} ignore(s), {len(result.candidates)} candidat(s)"
        )
        return result

    async def _fetch_scan(self, path: str) -> tuple[ScanResult, LibrarySnapshot]:
        """Appelle le Scanner puis capture l'etat de la bibliotheque."""
        result = await self._scanner.scan(path, self._config.restrict_to_series_id)
        series_ids = await self._library.list_series_ids()
        profile_names = await self._library.list_profile_names()
        snapshot = LibrarySnapshot(
            series_ids=frozenset(series_ids),
            profile_names=tuple(profile_names),
        )
        return result, snapshot
