"""
Tests unitaires pour le parsing des noms de fichiers.

Ces tests verifient:
- La classification film / episode
- L'extraction titre, annee et reste des films (ordre des regles d'annee)
- Le tag [tmdbid-N] explicite
- L'extraction saison/episode, titre d'episode et annee des series
- La table series.json
- Les echecs de parsing (extension, annee, saison/episode)
"""

from unittest.mock import MagicMock

import pytest

from move2jelly.core.exceptions import ParseError
from move2jelly.core.value_objects.parsed_info import MediaType, ParseFailure
from move2jelly.services.parser import FilenameParser, classify
from move2jelly.services.series_overrides import SeriesOverrideTable


@pytest.fixture
def parser() -> FilenameParser:
    return FilenameParser()


# ====================
# classify
# ====================


class TestClassify:
    """Tests pour classify()."""

    @pytest.mark.parametrize(
        "filename",
        [
            "Show.Name.S01E02.Episode.Title.mkv",
            "Show Name 1x2 Episode Title.mkv",
            "show_name_s01e02.mkv",
            "Show Name s1e100.mkv",
        ],
    )
    def test_episode_markers(self, filename: str) -> None:
        assert classify(filename) == MediaType.SERIES

    @pytest.mark.parametrize(
        "filename",
        [
            "The Matrix (1999).mkv",
            "Movie.2010.1920x1080.mkv",
            "1917 (2019).mp4",
        ],
    )
    def test_movies(self, filename: str) -> None:
        assert classify(filename) == MediaType.MOVIE


# ====================
# parse_movie
# ====================


class TestParseMovie:
    """Tests pour FilenameParser.parse_movie()."""

    def test_title_year_remainder(self, parser: FilenameParser) -> None:
        query = parser.parse_movie("Inception (2010) BluRay.mkv")

        assert query.title == "Inception"
        assert query.year == 2010
        assert query.remainder == "BluRay"
        assert query.file_extension == "mkv"
        assert query.explicit_id is None

    def test_bracketed_year_wins_over_bare_year(self, parser: FilenameParser) -> None:
        """"2001" dans le titre ne doit pas etre pris pour l'annee."""
        query = parser.parse_movie("2001 A Space Odyssey (1968) Remastered.mkv")

        assert query.title == "2001 A Space Odyssey"
        assert query.year == 1968
        assert query.remainder == "Remastered"

    def test_year_after_text_in_parentheses(self, parser: FilenameParser) -> None:
        query = parser.parse_movie("Blade Runner (Ridley Scott, 1982).mkv")

        assert query.title == "Blade Runner"
        assert query.year == 1982
        assert query.remainder == ""

    def test_bare_year(self, parser: FilenameParser) -> None:
        query = parser.parse_movie("Alien.1979.Directors.Cut.avi")

        assert query.title == "Alien"
        assert query.year == 1979
        assert query.remainder == "Directors Cut"
        assert query.file_extension == "avi"

    def test_explicit_id(self, parser: FilenameParser) -> None:
        query = parser.parse_movie("Movie [tmdbid-27205] extra.mkv")

        assert query.explicit_id == "27205"
        assert query.title == "Movie"
        assert query.remainder == "extra"
        assert query.year is None

    def test_explicit_id_is_case_insensitive(self, parser: FilenameParser) -> None:
        query = parser.parse_movie("Movie (2010) [TMDBID-42].mkv")
        assert query.explicit_id == "42"

    def test_no_extension(self, parser: FilenameParser) -> None:
        with pytest.raises(ParseError) as exc_info:
            parser.parse_movie("Inception (2010)")
        assert exc_info.value.reason == ParseFailure.NO_EXTENSION

    def test_no_year(self, parser: FilenameParser) -> None:
        with pytest.raises(ParseError) as exc_info:
            parser.parse_movie("Some Movie Without Year.mkv")
        assert exc_info.value.reason == ParseFailure.NO_YEAR_FOUND


# ====================
# parse_episode
# ====================


class TestParseEpisode:
    """Tests pour FilenameParser.parse_episode()."""

    @pytest.mark.parametrize(
        "filename",
        ["Show.Name.S01E02.Episode.Title.mkv", "Show Name 1x2 Episode Title.mkv"],
    )
    def test_both_token_styles(self, parser: FilenameParser, filename: str) -> None:
        query = parser.parse_episode(filename)

        assert query.title == "Show Name"
        assert query.season == 1
        assert query.episode == 2
        assert query.episode_title_guess == "Episode Title"
        assert query.remainder == ""
        assert query.file_extension == "mkv"

    def test_year_hint_and_remainder(self, parser: FilenameParser) -> None:
        query = parser.parse_episode("Doctor Who (2005) S01E01 Rose [1080p].mkv")

        assert query.title == "Doctor Who"
        assert query.year == 2005
        assert query.episode_title_guess == "Rose"
        assert query.remainder == "[1080p]"

    def test_no_episode_title(self, parser: FilenameParser) -> None:
        query = parser.parse_episode("Breaking.Bad.S05E14.mkv")

        assert query.title == "Breaking Bad"
        assert query.season == 5
        assert query.episode == 14
        assert query.episode_title_guess == ""
        assert query.remainder == ""

    def test_three_digit_episode(self, parser: FilenameParser) -> None:
        query = parser.parse_episode("One Piece S01E105.mkv")
        assert query.episode == 105

    def test_explicit_id_is_removed_from_title(self) -> None:
        output = MagicMock()
        parser = FilenameParser(output=output)

        query = parser.parse_episode("The Office [tmdbid-2316] S02E01 The Dundies.mkv")

        assert query.explicit_id == "2316"
        assert query.title == "The Office"
        assert query.episode_title_guess == "The Dundies"
        output.action.assert_any_call("Found TMDB ID in filename: 2316")

    def test_override_table(self) -> None:
        output = MagicMock()
        overrides = SeriesOverrideTable({"The Office (US)": {"tmdbid": "2316"}})
        parser = FilenameParser(overrides=overrides, output=output)

        query = parser.parse_episode("The.Office.(US).S02E01.mkv")

        assert query.explicit_id == "2316"
        output.action.assert_any_call("Found TMDB ID in series.json: 2316")

    def test_filename_tag_wins_over_override(self) -> None:
        overrides = SeriesOverrideTable({"The Office": {"tmdbid": "9999"}})
        parser = FilenameParser(overrides=overrides)

        query = parser.parse_episode("The Office [tmdbid-2316] S01E01.mkv")

        assert query.explicit_id == "2316"

    def test_no_season_episode(self, parser: FilenameParser) -> None:
        with pytest.raises(ParseError) as exc_info:
            parser.parse_episode("Show Name Episode.mkv")
        assert exc_info.value.reason == ParseFailure.NO_SEASON_EPISODE

    def test_no_extension(self, parser: FilenameParser) -> None:
        with pytest.raises(ParseError) as exc_info:
            parser.parse_episode("Show Name S01E01")
        assert exc_info.value.reason == ParseFailure.NO_EXTENSION
