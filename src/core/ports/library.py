"""
Interfaces ports pour la bibliotheque locale et l'import groupe.

- ILibrary : lecture des series existantes et ajout d'une nouvelle serie
- IBulkImporter : import groupe d'une liste de correspondances
"""

from abc import ABC, abstractmethod

from src.core.entities.series import Series
from src.core.value_objects.import_outcome import FileMapping, ImportOutcome


class ILibrary(ABC):
    """
    Interface de la bibliotheque locale.

    Definit les operations dont le moteur a besoin pour savoir quelles series
    existent deja et pour ajouter celles qui manquent avant l'import.
    """

    @abstractmethod
    async def list_series_ids(self) -> set[int]:
        """Retourne les IDs des series presentes dans la bibliotheque."""
        ...

    @abstractmethod
    async def list_profile_names(self) -> list[str]:
        """Retourne les noms des profils de qualite, dans l'ordre du serveur."""
        ...

    @abstractmethod
    async def add_series(
        self,
        series_id: int,
        profile_name: str,
        root_folder: str,
        monitored: bool = True,
        monitor_and_search: bool = False,
    ) -> Series:
        """
        Ajoute une serie du catalogue a la bibliotheque.

        Args :
            series_id : ID de la serie dans le catalogue
            profile_name : Profil de qualite a appliquer
            root_folder : Dossier racine (vide pour le dossier par defaut)
            monitored : Surveiller la serie
            monitor_and_search : Lancer une recherche automatique apres l'ajout

        Retourne :
            La serie creee

        Leve :
            Exception si l'ajout echoue
        """
        ...


class IBulkImporter(ABC):
    """Interface de l'import groupe de fichiers."""

    @abstractmethod
    async def import_files(self, mappings: list[FileMapping]) -> ImportOutcome:
        """
        Importe les fichiers selon leurs correspondances.

        Les echecs par fichier sont rapportes dans ImportOutcome.failed_files,
        ils ne levent pas d'exception.

        Args :
            mappings : Correspondances a importer

        Retourne :
            Bilan de l'import
        """
        ...
