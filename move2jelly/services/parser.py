"""
Parsing des noms de fichiers video.

Extrait les champs d'identification d'un nom de fichier : tag
[tmdbid-N], annee, saison/episode, titre d'episode. Les regles sont
des expressions regulieres appliquees dans un ordre fixe : l'ordre
decide quelle regle l'emporte sur un nom ambigu (annee entre
parentheses avant annee nue, SxxEyy avant NxM).
"""

import re
from typing import Optional

from loguru import logger

from move2jelly.core.exceptions import ParseError
from move2jelly.core.value_objects.parsed_info import (
    EpisodeQuery,
    MediaType,
    MovieQuery,
    ParseFailure,
)
from move2jelly.services.normalizer import clean_title, normalize, split_extension
from move2jelly.services.series_overrides import SeriesOverrideTable
from move2jelly.utils.output import RunOutput

# Tag d'identification explicite dans le nom de fichier
TMDB_ID_PATTERN = re.compile(r"\[tmdbid-(\d+)\]", re.IGNORECASE)

# Annee 1900-2099, par ordre de priorite :
# seule entre () ou [], puis precedee de texte "(Realisateur, 2010)", puis nue
YEAR_PATTERNS = (
    re.compile(r"[\(\[](19|20)\d{2}[\)\]]"),
    re.compile(r"[\(\[]\D*(19|20)\d{2}[\)\]]"),
    re.compile(r"(19|20)\d{2}"),
)

# Token saison/episode, par ordre de priorite
SEASON_EPISODE_PATTERNS = (
    re.compile(r"\bS(\d{1,2})E(\d{1,3})\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,2})x(\d{1,3})\b", re.IGNORECASE),
)

# Detection episode sur le nom en minuscules
_EPISODE_MARKERS = (
    re.compile(r"\b\d{1,2}x\d{1,3}\b"),
    re.compile(r"\bs\d{1,2}e\d{1,3}\b"),
)


def classify(filename: str) -> MediaType:
    """
    Determine si un fichier est un film ou un episode.

    Un nom contenant un token NxM ou SxxEyy (mot entier, insensible a la
    casse, underscores lus comme des espaces) est un episode.
    """
    lower = filename.lower().replace("_", " ")
    if any(marker.search(lower) for marker in _EPISODE_MARKERS):
        return MediaType.SERIES
    return MediaType.MOVIE


def _year_from(match: re.Match) -> int:
    return int(re.sub(r"\D", "", match.group(0)))


class FilenameParser:
    """
    Parser de noms de fichiers films et episodes.

    Utilisation:
        parser = FilenameParser(overrides=SeriesOverrideTable.load(path))
        query = parser.parse_movie("Inception (2010) BluRay.mkv")
        # MovieQuery(title="Inception", year=2010, remainder="BluRay", ...)
    """

    def __init__(
        self,
        overrides: Optional[SeriesOverrideTable] = None,
        output: Optional[RunOutput] = None,
    ) -> None:
        """
        Args:
            overrides: Table series.json (IDs TMDB forces par titre de serie)
            output: Sortie operateur pour les actions (optionnelle)
        """
        self._overrides = overrides or SeriesOverrideTable()
        self._output = output

    def _action(self, message: str) -> None:
        if self._output is not None:
            self._output.action(message)

    def parse_movie(self, filename: str) -> MovieQuery:
        """
        Parse un nom de fichier de film.

        Args:
            filename: Nom du fichier (sans le chemin)

        Returns:
            MovieQuery

        Raises:
            ParseError: NO_EXTENSION ou NO_YEAR_FOUND
        """
        raw = normalize(filename)
        parts = split_extension(raw)
        if parts is None:
            raise ParseError(
                ParseFailure.NO_EXTENSION,
                f'No file extension found in filename: "{filename}"',
            )
        extension = parts[1]
        clean = clean_title(raw)

        id_match = TMDB_ID_PATTERN.search(clean)
        if id_match:
            return MovieQuery(
                title=clean[: id_match.start()].strip(),
                remainder=clean[id_match.end():].strip(),
                file_extension=extension,
                explicit_id=id_match.group(1),
            )

        year_match = None
        for pattern in YEAR_PATTERNS:
            year_match = pattern.search(clean)
            if year_match:
                break
        if year_match is None:
            raise ParseError(
                ParseFailure.NO_YEAR_FOUND,
                'No year found in filename. Expected format: "Movie Title (year) extra info.ext"',
            )

        query = MovieQuery(
            title=clean[: year_match.start()].strip(),
            remainder=clean[year_match.end():].strip(),
            file_extension=extension,
            year=_year_from(year_match),
        )
        logger.debug("Film parse", filename=filename, title=query.title, year=query.year)
        return query

    def parse_episode(self, filename: str) -> EpisodeQuery:
        """
        Parse un nom de fichier d'episode.

        Etapes:
        1. Extraction et suppression du tag [tmdbid-N]
        2. Extension obligatoire
        3. Token SxxEyyy puis NxMMM
        4. Titre de serie avant le token, reste apres
        5. ID depuis series.json si pas de tag
        6. Titre d'episode : reste jusqu'au premier "(" ou "["
        7. Annee entre () ou [] dans le titre de serie

        Raises:
            ParseError: NO_EXTENSION ou NO_SEASON_EPISODE
        """
        raw = normalize(filename)

        explicit_id: Optional[str] = None
        id_match = TMDB_ID_PATTERN.search(raw)
        if id_match:
            explicit_id = id_match.group(1)
            self._action(f"Found TMDB ID in filename: {explicit_id}")
            raw = raw[: id_match.start()] + raw[id_match.end():].strip()

        parts = split_extension(raw)
        if parts is None:
            raise ParseError(
                ParseFailure.NO_EXTENSION,
                f'No file extension found in filename: "{filename}"',
            )
        extension = parts[1]
        clean = clean_title(raw)

        token = None
        for pattern in SEASON_EPISODE_PATTERNS:
            token = pattern.search(clean)
            if token:
                break
        if token is None:
            raise ParseError(
                ParseFailure.NO_SEASON_EPISODE,
                "No season/episode info found in filename",
            )
        season = int(token.group(1))
        episode = int(token.group(2))

        title = re.sub(r"[._]", " ", clean[: token.start()]).strip()
        remainder = clean[token.end():].strip()

        if explicit_id is None:
            explicit_id = self._overrides.lookup(title)
            if explicit_id:
                self._action(f"Found TMDB ID in series.json: {explicit_id}")

        episode_title = re.split(r"[\(\[]", remainder)[0].strip()
        if episode_title:
            remainder = remainder[len(episode_title):].strip()

        year: Optional[int] = None
        year_match = YEAR_PATTERNS[0].search(title)
        if year_match:
            year = _year_from(year_match)
            title = title[: year_match.start()].strip()

        query = EpisodeQuery(
            title=title,
            season=season,
            episode=episode,
            episode_title_guess=episode_title,
            remainder=remainder,
            file_extension=extension,
            year=year,
            explicit_id=explicit_id,
        )
        logger.debug(
            "Episode parse",
            filename=filename,
            title=title,
            season=season,
            episode=episode,
        )
        return query
