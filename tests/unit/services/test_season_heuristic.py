"""
Tests unitaires pour l'heuristique de saison des candidats.

Ces tests verifient:
- Les formes "Season N" et "Nnd/rd/th Season" (insensibles a la casse)
- La saison par defaut (1) sans indication
- L'utilisation du titre localise en priorite
"""

import pytest

from src.core.value_objects import Candidate, CandidateTitle
from src.services.season_heuristic import (
    DEFAULT_SEASON,
    infer_candidate_season,
    infer_season_from_title,
)


class TestInferSeasonFromTitle:
    """Tests pour infer_season_from_title."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Foo Season 2", 2),
            ("Foo season 3", 3),
            ("FOO SEASON 10", 10),
            ("Foo 2nd Season", 2),
            ("Foo 3rd season", 3),
            ("Foo 4th Season", 4),
            ("Foo Season  5", 5),
        ],
    )
    def test_detects_season(self, title: str, expected: int) -> None:
        """Les deux formes de mention de saison sont reconnues."""
        assert infer_season_from_title(title) == expected

    @pytest.mark.parametrize(
        "title",
        ["Foo", "Foo: The Movie", "Season", "Foo 1st Season", "Foo S2"],
    )
    def test_defaults_to_one(self, title: str) -> None:
        """Sans mention reconnue, la saison vaut 1."""
        assert infer_season_from_title(title) == DEFAULT_SEASON == 1

    def test_empty_or_none_title(self) -> None:
        """Un titre vide ou absent donne la saison par defaut."""
        assert infer_season_from_title("") == 1
        assert infer_season_from_title(None) == 1

    def test_season_n_form_takes_precedence(self) -> None:
        """La forme "Season N" est cherchee avant la forme ordinale."""
        assert infer_season_from_title("Foo 2nd Season Season 3") == 3
        assert infer_season_from_title("Foo Season 3 2nd Season") == 3

    def test_season_zero_is_kept(self) -> None:
        """Une saison 0 explicite est retournee telle quelle."""
        assert infer_season_from_title("Foo Season 0") == 0


class TestInferCandidateSeason:
    """Tests pour infer_candidate_season."""

    def test_prefers_english_title(self) -> None:
        """Le titre localise est utilise en priorite."""
        candidate = Candidate(
            id=1,
            title=CandidateTitle(romaji="Foo", english="Foo Season 2"),
        )
        assert infer_candidate_season(candidate) == 2

    def test_english_title_without_season_hides_romaji(self) -> None:
        """Un titre localise sans saison masque la saison du titre principal."""
        candidate = Candidate(
            id=1,
            title=CandidateTitle(romaji="Foo 2nd Season", english="Foo II"),
        )
        assert infer_candidate_season(candidate) == 1

    def test_falls_back_to_romaji(self) -> None:
        """Sans titre localise, le titre principal est utilise."""
        candidate = Candidate(id=1, title=CandidateTitle(romaji="Foo 3rd Season"))
        assert infer_candidate_season(candidate) == 3
