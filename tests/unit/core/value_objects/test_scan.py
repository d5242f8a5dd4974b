"""
Tests unitaires pour les objets valeur du scan et de la bibliotheque.
"""

import pytest

from src.core.value_objects import (
    Candidate,
    CandidateTitle,
    FailedImport,
    ImportedFile,
    ImportOutcome,
    LibrarySnapshot,
    ScanResult,
)
from tests.fixtures.factories import make_file


class TestCandidateTitle:
    """Tests pour le titre affiche d'un candidat."""

    def test_english_title_preferred(self) -> None:
        title = CandidateTitle(romaji="Shingeki no Kyojin", english="Attack on Titan")
        assert title.display_title == "Attack on Titan"

    def test_falls_back_to_romaji(self) -> None:
        assert CandidateTitle(romaji="Shingeki no Kyojin").display_title == "Shingeki no Kyojin"

    def test_candidate_delegates_to_title(self) -> None:
        candidate = Candidate(id=1, title=CandidateTitle(romaji="Foo", english="Bar"))
        assert candidate.display_title == "Bar"


class TestScannedFile:
    """Tests pour ScannedFile.effective_season."""

    @pytest.mark.parametrize("season,expected", [(None, 1), (0, 0), (1, 1), (3, 3)])
    def test_effective_season(self, season, expected) -> None:
        """Une saison absente vaut 1 ; une saison 0 explicite est conservee."""
        assert make_file("a", season=season).effective_season == expected


class TestScanResult:
    """Tests pour ScanResult."""

    def test_sorted_files_by_season_then_episode(self) -> None:
        result = ScanResult(
            files=(
                make_file("s2e1", episode=1, season=2),
                make_file("e3", episode=3),
                make_file("e1", episode=1),
                make_file("e1.5", episode=1.5),
            )
        )

        assert [f.source_path for f in result.sorted_files()] == ["e1", "e1.5", "e3", "s2e1"]


class TestImportOutcome:
    """Tests pour ImportOutcome."""

    def test_from_files_derives_counts(self) -> None:
        outcome = ImportOutcome.from_files(
            [ImportedFile("a", "/lib/a", 1, 1), ImportedFile("b", "/lib/b", 1, 2)],
            [FailedImport("c", "disk full")],
        )

        assert outcome.imported_count == 2
        assert outcome.failed_count == 1
        assert outcome.has_failures

    def test_summary_without_failures(self) -> None:
        outcome = ImportOutcome.from_files([ImportedFile("a", "/lib/a", 1, 1)], [])

        assert not outcome.has_failures
        assert outcome.summary() == "1 fichier(s) importe(s)"


class TestLibrarySnapshot:
    """Tests pour LibrarySnapshot."""

    def test_default_profile(self) -> None:
        assert LibrarySnapshot(profile_names=("HD", "SD")).default_profile == "HD"
        assert LibrarySnapshot().default_profile == "Any"

    def test_with_series_returns_copy(self) -> None:
        snapshot = LibrarySnapshot(series_ids=frozenset({1}), profile_names=("HD",))

        updated = snapshot.with_series([2, 3])

        assert updated.contains(3)
        assert not snapshot.contains(2)
        assert updated.profile_names == ("HD",)
