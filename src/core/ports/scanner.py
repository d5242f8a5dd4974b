"""
Interface port pour le Scanner de repertoires d'import.

Le Scanner parcourt un repertoire, parse les noms de fichiers video et
propose des series candidates. Son implementation (parcours disque,
parsing, matching) est hors du moteur de rapprochement.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.value_objects.scan import ScanResult


class IScanner(ABC):
    """
    Interface du Scanner.

    Un appel correspond a un scan : il produit un ScanResult immutable.
    """

    @abstractmethod
    async def scan(
        self, path: str, series_id_hint: Optional[int] = None
    ) -> ScanResult:
        """
        Scanne un repertoire (ou un fichier) a importer.

        Args :
            path : Chemin du repertoire a scanner
            series_id_hint : Restreint le scan a une serie de la bibliotheque :
                tous les fichiers lui sont associes

        Retourne :
            ScanResult avec les fichiers parses, ignores et les candidats

        Leve :
            Exception si le chemin est invalide ou illisible
        """
        ...
