"""
Coordinateur du commit d'import.

Transforme une table de correspondances finalisee en mutations de la
bibliotheque puis en un import groupe :

1. Partition des series cibles : deja dans la bibliotheque / a ajouter
2. Ajout sequentiel des series manquantes (surveillees, sans recherche
   automatique) AVANT tout import. Le premier echec abandonne le commit.
3. Soumission de toutes les correspondances en un seul import groupe.
   La soumission rend la main immediatement, le bilan arrive plus tard.
4. Agregation du bilan : les echecs par fichier sont rapportes un par un,
   sans annuler les fichiers importes.
"""

import asyncio
from typing import Callable, Generator, Iterable, Mapping, Optional

from loguru import logger

from src.core.entities.series import Series
from src.core.exceptions import BulkImportFailure, CandidateAddFailure
from src.core.ports.library import IBulkImporter, ILibrary
from src.core.value_objects.import_outcome import FileMapping, ImportOutcome
from src.core.value_objects.library import LibrarySnapshot
from src.core.value_objects.scan import Candidate

OutcomeCallback = Callable[[ImportOutcome], None]


class ImportSubmission:
    """
    Import groupe soumis, dont le bilan arrive de facon asynchrone.

    L'objet est awaitable : `outcome = await submission`. Les callbacks
    enregistres recoivent le bilan ; ils ne sont pas appeles si la requete
    d'import echoue (l'attente leve alors BulkImportFailure).
    """

    def __init__(self, task: "asyncio.Task[ImportOutcome]", file_count: int) -> None:
        self._task = task
        self.file_count = file_count

    def __await__(self) -> Generator[None, None, ImportOutcome]:
        return self._task.__await__()

    def done(self) -> bool:
        """True si le bilan (ou l'echec) est arrive."""
        return self._task.done()

    def outcome(self) -> Optional[ImportOutcome]:
        """Bilan de l'import, None tant qu'il n'est pas arrive ou si l'import a echoue."""
        if not self._task.done() or self._task.cancelled():
            return None
        if self._task.exception() is not None:
            return None
        return self._task.result()

    def add_done_callback(self, callback: OutcomeCallback) -> None:
        """Enregistre un callback appele avec le bilan a son arrivee."""

        def _dispatch(task: "asyncio.Task[ImportOutcome]") -> None:
            if task.cancelled() or task.exception() is not None:
                return
            callback(task.result())

        self._task.add_done_callback(_dispatch)


class ImportCommitCoordinator:
    """
    Coordonne l'ajout des series manquantes puis l'import groupe.

    Example:
        coordinator = ImportCommitCoordinator(library=client, importer=client)
        submission = await coordinator.commit(mappings, snapshot, candidates)
        outcome = await submission
    """

    def __init__(
        self,
        library: ILibrary,
        importer: IBulkImporter,
        profile_name: Optional[str] = None,
        root_folder: str = "",
    ) -> None:
        """
        Initialise le coordinateur.

        Args:
            library: Bibliotheque locale (ajout des series)
            importer: Service d'import groupe
            profile_name: Profil de qualite des series ajoutees
                (None : premier profil de la bibliotheque)
            root_folder: Dossier racine des series ajoutees (vide : defaut serveur)
        """
        self._library = library
        self._importer = importer
        self._profile_name = profile_name
        self._root_folder = root_folder

    def partition_series(
        self,
        mappings: Iterable[FileMapping],
        snapshot: LibrarySnapshot,
        candidates: Optional[Mapping[int, Candidate]] = None,
    ) -> tuple[list[int], list[int]]:
        """
        Separe les series cibles en (existantes, a ajouter).

        L'ordre est celui de la premiere apparition dans les correspondances.
        Un candidat marque already_in_library compte comme existant.
        """
        candidates = candidates or {}
        existing: list[int] = []
        new: list[int] = []
        for mapping in mappings:
            series_id = mapping.series_id
            if series_id in existing or series_id in new:
                continue
            candidate = candidates.get(series_id)
            in_library = snapshot.contains(series_id) or (
                candidate is not None and candidate.already_in_library
            )
            (existing if in_library else new).append(series_id)
        return existing, new

    async def provision_series(
        self,
        series_ids: Iterable[int],
        snapshot: LibrarySnapshot,
        candidates: Optional[Mapping[int, Candidate]] = None,
    ) -> list[Series]:
        """
        Ajoute les series manquantes a la bibliotheque, une par une.

        Raises:
            CandidateAddFailure: Au premier echec ; les series deja ajoutees
                sont listees dans added_series_ids
        """
        candidates = candidates or {}
        profile_name = self._profile_name or snapshot.default_profile
        added: list[Series] = []

        for series_id in series_ids:
            candidate = candidates.get(series_id)
            label = candidate.display_title if candidate else str(series_id)
            logger.info(f"Ajout de la serie a la bibliotheque: {label}")
            try:
                series = await self._library.add_series(
                    series_id,
                    profile_name=profile_name,
                    root_folder=self._root_folder,
                    monitored=True,
                    monitor_and_search=False,
                )
            except Exception as e:
                logger.error(f"Echec de l'ajout de {label}: {e}")
                raise CandidateAddFailure(
                    series_id,
                    str(e),
                    added_series_ids=[s.id for s in added],
                ) from e
            added.append(series)

        return added

    def submit(self, mappings: list[FileMapping]) -> ImportSubmission:
        """
        Soumet l'import groupe et rend la main immediatement.

        Doit etre appele depuis une boucle asyncio en cours d'execution.
        """
        files = list(mappings)
        logger.info(f"Import de {len(files)} fichier(s) soumis")
        task = asyncio.get_running_loop().create_task(self._run_import(files))
        task.add_done_callback(self._log_failure)
        return ImportSubmission(task, len(files))

    async def prepare(
        self,
        mappings: Iterable[FileMapping],
        snapshot: LibrarySnapshot,
        candidates: Optional[Mapping[int, Candidate]] = None,
    ) -> list[int]:
        """
        Ajoute les series cibles absentes de la bibliotheque.

        Returns:
            Identifiants des series ajoutees, dans l'ordre d'ajout

        Raises:
            CandidateAddFailure: Si une serie ne peut pas etre ajoutee
        """
        _, new_ids = self.partition_series(mappings, snapshot, candidates)
        if new_ids:
            await self.provision_series(new_ids, snapshot, candidates)
        return new_ids

    async def commit(
        self,
        mappings: list[FileMapping],
        snapshot: LibrarySnapshot,
        candidates: Optional[Mapping[int, Candidate]] = None,
    ) -> ImportSubmission:
        """
        Execute le commit complet : partition, ajout des series, soumission.

        Raises:
            CandidateAddFailure: Si une serie ne peut pas etre ajoutee ;
                aucun fichier n'est alors soumis
        """
        await self.prepare(mappings, snapshot, candidates)
        return self.submit(mappings)

    def aggregate(self, outcome: ImportOutcome) -> ImportOutcome:
        """Journalise le bilan fichier par fichier et le retourne tel quel."""
        for failed in outcome.failed_files:
            logger.warning(f"Echec d'import: {failed.source_path} ({failed.error})")
        logger.info(f"Import termine: {outcome.summary()}")
        return outcome

    async def _run_import(self, mappings: list[FileMapping]) -> ImportOutcome:
        """Appelle l'import groupe et agrege son bilan."""
        try:
            outcome = await self._importer.import_files(mappings)
        except Exception as e:
            raise BulkImportFailure(str(e), file_count=len(mappings)) from e
        return self.aggregate(outcome)

    @staticmethod
    def _log_failure(task: "asyncio.Task[ImportOutcome]") -> None:
        """Journalise l'echec de la requete d'import (et consomme l'exception)."""
        if task.cancelled():
            logger.warning("Import annule avant son terme")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"{error}")
