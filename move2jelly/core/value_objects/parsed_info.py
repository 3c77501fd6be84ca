"""
Objets valeur pour les informations de parsing de noms de fichiers.

Objets valeur immutables representant les requetes extraites d'un nom
de fichier video (film ou episode) et la classification du type de media.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaType(Enum):
    """Type de media detecte depuis le nom de fichier.

    Valeurs:
        MOVIE: Film (long-metrage)
        SERIES: Episode de serie TV (avec saison/episode)
    """

    MOVIE = "movie"
    SERIES = "series"


class ParseFailure(Enum):
    """Raison d'echec du parsing d'un nom de fichier."""

    NO_EXTENSION = "no_extension"
    NO_YEAR_FOUND = "no_year_found"
    NO_SEASON_EPISODE = "no_season_episode"


@dataclass(frozen=True)
class MovieQuery:
    """
    Requete de recherche d'un film extraite du nom de fichier.

    Soit explicit_id est renseigne (tag [tmdbid-N] dans le nom) et la
    resolution se fait par ID, soit title + year pilotent la recherche.

    Attributs:
        title: Titre a rechercher (texte avant l'annee)
        remainder: Texte restant apres l'annee ou le tag (qualite, edition...)
        file_extension: Extension du fichier, sans le point
        year: Annee extraite du nom de fichier
        explicit_id: ID TMDB force par le tag [tmdbid-N]
    """

    title: str
    remainder: str
    file_extension: str
    year: Optional[int] = None
    explicit_id: Optional[str] = None


@dataclass(frozen=True)
class EpisodeQuery:
    """
    Requete de recherche d'un episode extraite du nom de fichier.

    Attributs:
        title: Titre de la serie (texte avant le token SxxEyy / NxM)
        season: Numero de saison (1-indexe)
        episode: Numero d'episode (1-indexe, jusqu'a 3 chiffres)
        episode_title_guess: Titre d'episode lu dans le nom de fichier (peut etre vide)
        remainder: Texte restant apres le titre d'episode
        file_extension: Extension du fichier, sans le point
        year: Annee entre parentheses/crochets dans le titre de la serie
        explicit_id: ID TMDB de la serie (tag [tmdbid-N] ou series.json)
    """

    title: str
    season: int
    episode: int
    episode_title_guess: str
    remainder: str
    file_extension: str
    year: Optional[int] = None
    explicit_id: Optional[str] = None
