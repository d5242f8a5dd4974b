"""
Etat de selection de la revue d'import.

SelectionState maintient les candidats actifs et la table des correspondances
fichier -> episode derivee, pendant que l'utilisateur active/desactive des
candidats ou corrige un fichier a la main.

Politique de desambiguisation a l'activation d'un candidat (par fichier,
independante de l'ordre des fichiers) :

    saison candidat | saison fichier          | deja associe ? | action
    ----------------+-------------------------+----------------+-------------------
    > 1             | == saison candidat      | indifferent    | reclamer (ecrase)
    > 1             | 1 (ou non renseignee)   | non            | reclamer
    > 1             | 1 (ou non renseignee)   | oui            | ignorer
    <= 1            | indifferente            | non            | reclamer
    <= 1            | indifferente            | oui            | ignorer

La desactivation retire uniquement les correspondances du candidat.
Les corrections manuelles ne sont jamais revisitees par une bascule ulterieure :
une bascule n'agit que sur la table au moment ou elle s'execute.
"""

import math
from types import MappingProxyType
from typing import Mapping, Optional

from loguru import logger

from src.core.exceptions import (
    UnknownCandidateError,
    UnknownFileError,
    UnmappedFileError,
)
from src.core.value_objects.import_outcome import FileMapping
from src.core.value_objects.scan import Candidate, ScannedFile, ScanResult
from src.services.season_heuristic import infer_candidate_season


def should_claim(candidate_season: int, file_season: int, already_mapped: bool) -> bool:
    """
    Decide si un candidat reclame un fichier a son activation.

    Args:
        candidate_season: Saison deduite du titre du candidat
        file_season: Saison du fichier (1 si non renseignee)
        already_mapped: True si le fichier a deja une correspondance

    Returns:
        True si le fichier doit etre associe au candidat
    """
    if candidate_season > 1:
        if file_season == candidate_season:
            return True
        return file_season == 1 and not already_mapped
    return not already_mapped


def build_mapping(scanned: ScannedFile, series_id: int) -> FileMapping:
    """Correspondance par defaut d'un fichier vers une serie (episode arrondi a l'entier inferieur)."""
    return FileMapping(
        source_path=scanned.source_path,
        series_id=series_id,
        season=scanned.season,
        episode_number=math.floor(scanned.episode_number),
    )


class SelectionState:
    """
    Etat mutable de la revue : candidats actifs et table des correspondances.

    Invariants :
    - au plus une correspondance par source_path (table indexee par chemin)
    - toute serie cible est un candidat actif ou la serie associee au fichier

    Toutes les mutations passent par les operations de bascule et de correction.

    Example:
        state = SelectionState(scan_result)
        state.preselect()
        state.toggle_candidate(2)
        mappings = state.finalized_mappings()
    """

    def __init__(self, scan_result: ScanResult) -> None:
        """
        Initialise l'etat depuis un resultat de scan.

        Args:
            scan_result: Instantane du scan (jamais modifie)
        """
        self._scan_result = scan_result
        self._files: dict[str, ScannedFile] = {
            scanned.source_path: scanned for scanned in scan_result.files
        }
        self._candidates: dict[int, Candidate] = {}
        for candidate in scan_result.candidates:
            self._candidates.setdefault(candidate.id, candidate)
        self._manual_ids: list[int] = []
        self._active_ids: set[int] = set()
        self._mappings: dict[str, FileMapping] = {}

    # ------------------------------------------------------------------
    # Lecture
    # ------------------------------------------------------------------

    @property
    def scan_result(self) -> ScanResult:
        """Resultat de scan a l'origine de cet etat."""
        return self._scan_result

    @property
    def candidates(self) -> list[Candidate]:
        """Candidats du scan puis candidats ajoutes manuellement."""
        return list(self._candidates.values())

    @property
    def manual_candidates(self) -> list[Candidate]:
        """Candidats ajoutes via la recherche dans le catalogue."""
        return [self._candidates[cid] for cid in self._manual_ids]

    @property
    def active_candidate_ids(self) -> frozenset[int]:
        """IDs des candidats actifs."""
        return frozenset(self._active_ids)

    @property
    def mappings(self) -> Mapping[str, FileMapping]:
        """Vue en lecture seule de la table des correspondances."""
        return MappingProxyType(self._mappings)

    @property
    def selected_count(self) -> int:
        """Nombre de fichiers selectionnes pour l'import."""
        return len(self._mappings)

    def get_candidate(self, candidate_id: int) -> Optional[Candidate]:
        """Retourne le candidat connu, ou None."""
        return self._candidates.get(candidate_id)

    def is_active(self, candidate_id: int) -> bool:
        """True si le candidat est actif."""
        return candidate_id in self._active_ids

    def is_manual(self, candidate_id: int) -> bool:
        """True si le candidat a ete ajoute manuellement."""
        return candidate_id in self._manual_ids

    def mapping_for(self, source_path: str) -> Optional[FileMapping]:
        """Correspondance courante d'un fichier, ou None."""
        return self._mappings.get(source_path)

    def finalized_mappings(self) -> list[FileMapping]:
        """Correspondances a importer, dans l'ordre d'affichage des fichiers."""
        result = []
        seen: set[str] = set()
        for scanned in self._scan_result.sorted_files():
            path = scanned.source_path
            if path in self._mappings and path not in seen:
                seen.add(path)
                result.append(self._mappings[path])
        return result

    # ------------------------------------------------------------------
    # Pre-selection a la fin du scan
    # ------------------------------------------------------------------

    def preselect(self) -> None:
        """
        Pre-remplit la table avec les indications du Scanner.

        - fichier associe avec confiance (matched_series) : associe a cette serie
        - sinon, fichier avec un candidat suggere : associe a ce candidat,
          qui devient actif
        """
        self._mappings.clear()
        self._active_ids.clear()

        for scanned in self._scan_result.files:
            if scanned.matched_series is not None:
                self._mappings[scanned.source_path] = build_mapping(
                    scanned, scanned.matched_series.id
                )
            elif scanned.suggested_candidate_id is not None:
                self._mappings[scanned.source_path] = build_mapping(
                    scanned, scanned.suggested_candidate_id
                )
                self._active_ids.add(scanned.suggested_candidate_id)

        logger.debug(
            f"Pre-selection: {len(self._mappings)} fichier(s), "
            f"{len(self._active_ids)} candidat(s) actif(s)"
        )

    # ------------------------------------------------------------------
    # Bascule des candidats
    # ------------------------------------------------------------------

    def toggle_candidate(self, candidate_id: int, force_on: bool = False) -> bool:
        """
        Bascule un candidat.

        Args:
            candidate_id: ID du candidat
            force_on: Force l'activation (et la passe de reclamation)
                meme si le candidat est deja actif

        Returns:
            True si le candidat est actif apres la bascule
        """
        if candidate_id in self._active_ids and not force_on:
            self.deactivate_candidate(candidate_id)
            return False
        self.activate_candidate(candidate_id)
        return True

    def activate_candidate(self, candidate_id: int) -> int:
        """
        Active un candidat et lui fait reclamer les fichiers selon la politique.

        Returns:
            Nombre de fichiers reclames

        Raises:
            UnknownCandidateError: Si le candidat n'est pas connu
        """
        candidate = self._candidates.get(candidate_id)
        if candidate is None:
            raise UnknownCandidateError(candidate_id)

        self._active_ids.add(candidate_id)
        candidate_season = infer_candidate_season(candidate)

        claimed = 0
        for scanned in self._scan_result.files:
            already_mapped = scanned.source_path in self._mappings
            if should_claim(candidate_season, scanned.effective_season, already_mapped):
                self._mappings[scanned.source_path] = build_mapping(scanned, candidate_id)
                claimed += 1

        logger.debug(
            f"Candidat active: {candidate.display_title} ({candidate_id}), "
            f"saison {candidate_season}, {claimed} fichier(s) reclame(s)"
        )
        return claimed

    def deactivate_candidate(self, candidate_id: int) -> int:
        """
        Desactive un candidat et retire toutes ses correspondances.

        Returns:
            Nombre de correspondances retirees
        """
        self._active_ids.discard(candidate_id)
        released = [
            path
            for path, mapping in self._mappings.items()
            if mapping.series_id == candidate_id
        ]
        for path in released:
            del self._mappings[path]

        logger.debug(
            f"Candidat desactive: {candidate_id}, {len(released)} fichier(s) libere(s)"
        )
        return len(released)

    def add_manual_candidate(self, candidate: Candidate) -> int:
        """
        Ajoute un candidat trouve via la recherche et l'active.

        Un candidat deja connu n'est pas duplique, mais la passe de
        reclamation est relancee.

        Returns:
            Nombre de fichiers reclames
        """
        if candidate.id not in self._candidates:
            self._candidates[candidate.id] = candidate
            self._manual_ids.append(candidate.id)
            logger.debug(f"Candidat ajoute manuellement: {candidate.display_title} ({candidate.id})")
        return self.activate_candidate(candidate.id)

    # ------------------------------------------------------------------
    # Corrections manuelles par fichier
    # ------------------------------------------------------------------

    def toggle_file(self, source_path: str, series_id: int) -> bool:
        """
        Selectionne ou deselectionne un fichier.

        Args:
            source_path: Chemin du fichier
            series_id: Serie cible si le fichier est selectionne

        Returns:
            True si le fichier est selectionne apres l'operation
        """
        scanned = self._get_file(source_path)
        if source_path in self._mappings:
            del self._mappings[source_path]
            return False

        self._check_target(scanned, series_id)
        self._mappings[source_path] = build_mapping(scanned, series_id)
        return True

    def update_file_series(self, source_path: str, series_id: int) -> bool:
        """
        Change la serie cible d'un fichier deja selectionne.

        Returns:
            True si la correspondance a ete modifiee, False si le fichier
            n'est pas selectionne
        """
        scanned = self._get_file(source_path)
        current = self._mappings.get(source_path)
        if current is None:
            return False

        self._check_target(scanned, series_id)
        self._mappings[source_path] = FileMapping(
            source_path=current.source_path,
            series_id=series_id,
            season=current.season,
            episode_number=current.episode_number,
        )
        return True

    def update_file_mapping(self, source_path: str, season: int, episode: int) -> FileMapping:
        """
        Corrige la saison et l'episode cibles d'un fichier.

        Un fichier non selectionne est associe a sa serie detectee par le Scanner.

        Returns:
            La correspondance mise a jour

        Raises:
            ValueError: Si la saison ou l'episode est negatif
            UnmappedFileError: Si le fichier n'a ni correspondance ni serie associee
        """
        if season < 0 or episode < 0:
            raise ValueError(f"Saison/episode invalides: S{season} E{episode}")

        scanned = self._get_file(source_path)
        current = self._mappings.get(source_path)
        if current is None:
            if scanned.matched_series is None:
                raise UnmappedFileError(source_path)
            current = build_mapping(scanned, scanned.matched_series.id)

        updated = FileMapping(
            source_path=current.source_path,
            series_id=current.series_id,
            season=season,
            episode_number=episode,
        )
        self._mappings[source_path] = updated
        return updated

    def _get_file(self, source_path: str) -> ScannedFile:
        """Retourne le fichier du scan ou leve UnknownFileError."""
        scanned = self._files.get(source_path)
        if scanned is None:
            raise UnknownFileError(source_path)
        return scanned

    def _check_target(self, scanned: ScannedFile, series_id: int) -> None:
        """
        Verifie qu'une serie peut etre cible d'une correspondance manuelle.

        Un candidat connu devient actif sans passe de reclamation.
        """
        if scanned.matched_series is not None and scanned.matched_series.id == series_id:
            return
        if series_id not in self._candidates:
            raise UnknownCandidateError(series_id)
        self._active_ids.add(series_id)
