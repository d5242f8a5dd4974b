"""
Objets valeur representant le resultat d'un scan de repertoire d'import.

Le Scanner externe parcourt un repertoire, parse les noms de fichiers et
propose des series candidates. Son resultat est un instantane immutable :
le moteur de rapprochement ne le modifie jamais.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CandidateTitle:
    """
    Titres d'une serie du catalogue.

    Attributs :
        romaji : Titre principal (romanise)
        english : Titre localise/alternatif (optionnel)
        native : Titre dans la langue d'origine (optionnel)
    """

    romaji: str = ""
    english: Optional[str] = None
    native: Optional[str] = None

    @property
    def display_title(self) -> str:
        """Titre a afficher : le titre localise s'il existe, sinon le titre principal."""
        return self.english or self.romaji or ""


@dataclass(frozen=True)
class Candidate:
    """
    Serie du catalogue pouvant recevoir des fichiers pendant la revue.

    Un candidat provient soit des suggestions du scan, soit d'une recherche
    manuelle dans le catalogue. Il peut deja exister dans la bibliotheque
    locale (already_in_library) ou non : les deux etats sont selectionnables.

    Attributs :
        id : ID de la serie dans le catalogue (cle unique)
        title : Titres de la serie
        format : Format de diffusion (TV, OVA, MOVIE...)
        episode_count : Nombre d'episodes annonce
        status : Statut de diffusion
        cover_image : URL de l'affiche
        already_in_library : True si la serie est deja dans la bibliotheque
    """

    id: int
    title: CandidateTitle = field(default_factory=CandidateTitle)
    format: Optional[str] = None
    episode_count: Optional[int] = None
    status: Optional[str] = None
    cover_image: Optional[str] = None
    already_in_library: bool = False

    @property
    def display_title(self) -> str:
        """Titre a afficher pour ce candidat."""
        return self.title.display_title


@dataclass(frozen=True)
class MatchedSeries:
    """Serie deja cataloguee a laquelle le Scanner a associe un fichier avec confiance."""

    id: int
    title: str = ""


@dataclass(frozen=True)
class ScannedFile:
    """
    Fichier video trouve par le Scanner.

    Attributs :
        source_path : Chemin du fichier (cle unique dans un scan)
        filename : Nom du fichier (affichage)
        parsed_title : Titre extrait du nom de fichier (affichage)
        episode_number : Numero d'episode, peut etre fractionnaire (specials)
        season : Numero de saison, None si inconnu
        group : Groupe de release
        resolution : Resolution detectee (ex: "1080p")
        matched_series : Serie associee avec confiance, si elle existe
        suggested_candidate_id : Candidat suggere quand la confiance est moindre
    """

    source_path: str
    filename: str = ""
    parsed_title: str = ""
    episode_number: float = 0.0
    season: Optional[int] = None
    group: Optional[str] = None
    resolution: Optional[str] = None
    matched_series: Optional[MatchedSeries] = None
    suggested_candidate_id: Optional[int] = None

    @property
    def effective_season(self) -> int:
        """Saison utilisee pour le rapprochement : une saison absente vaut 1."""
        return self.season if self.season is not None else 1


@dataclass(frozen=True)
class SkippedFile:
    """Fichier ignore par le Scanner, avec la raison."""

    path: str
    reason: str


@dataclass(frozen=True)
class ScanResult:
    """
    Instantane immutable retourne par le Scanner.

    Attributs :
        files : Fichiers parses
        skipped : Fichiers ignores avec leur raison
        candidates : Series candidates proposees par le scan
    """

    files: tuple[ScannedFile, ...] = ()
    skipped: tuple[SkippedFile, ...] = ()
    candidates: tuple[Candidate, ...] = ()

    def sorted_files(self) -> list[ScannedFile]:
        """Fichiers tries par saison puis par numero d'episode (affichage)."""
        return sorted(
            self.files,
            key=lambda f: (f.season or 0, f.episode_number),
        )
