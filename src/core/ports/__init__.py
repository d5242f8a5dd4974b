"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le moteur de rapprochement a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

- IScanner : Scan d'un repertoire d'import
- ICatalogSearch : Recherche de series dans le catalogue
- ILibrary : Series existantes, profils et ajout de series
- IBulkImporter : Import groupe des fichiers
"""

from src.core.ports.catalog import ICatalogSearch
from src.core.ports.library import IBulkImporter, ILibrary
from src.core.ports.scanner import IScanner

__all__ = [
    "IScanner",
    "ICatalogSearch",
    "ILibrary",
    "IBulkImporter",
]
