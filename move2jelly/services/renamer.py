"""
Service de renommage des fichiers medias.

Ce module fournit les fonctions de generation des chemins canoniques
Jellyfin pour les films, les episodes et leurs fichiers annexes.

Format films :
    Titre (Annee) [tmdbid-ID]/Titre (Annee) [tmdbid-ID] - Reste.ext
Format series :
    Serie (Annee) [tmdbid-ID]/Season XX/Serie (AnneeEpisode) SxxEyy Titre - Reste.ext
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pathvalidate import validate_filename

from move2jelly.core.entities.media import ResolvedEpisode, ResolvedMovie
from move2jelly.core.value_objects.parsed_info import MediaType
from move2jelly.services.normalizer import sanitize_for_filesystem, split_extension
from move2jelly.utils.constants import METADATA_SUFFIXES, SUBTITLE_EXTENSIONS, SUBTITLE_FLAGS

# Suffixe de sous-titre : segments de langue/drapeaux optionnels puis extension
_SUBTITLE_SUFFIX = re.compile(
    r"^(?:\.(?:[a-z]{2,3}(?:[-_][a-z0-9]{2,4})?|"
    + "|".join(sorted(SUBTITLE_FLAGS))
    + r")){0,3}\.(?:"
    + "|".join(sorted(SUBTITLE_EXTENSIONS))
    + r")$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class DestinationName:
    """
    Dossier et nom de fichier calcules pour un media.

    Attributs:
        folder: Dossier relatif a la racine de la bibliotheque
        filename: Nom du fichier video
    """

    folder: Path
    filename: str


def _check(component: str) -> str:
    """Valide un composant de chemin (longueur, caracteres reserves POSIX)."""
    validate_filename(component, platform="POSIX")
    return component


def build_movie_path(movie: ResolvedMovie, remainder: str, extension: str) -> DestinationName:
    """
    Genere le dossier et le nom de fichier d'un film.

    Les " - " du titre TMDB deviennent ". " pour ne pas se confondre
    avec le separateur du reste.

    Args:
        movie: Film resolu
        remainder: Texte du nom d'origine apres l'annee (peut etre vide)
        extension: Extension sans le point

    Returns:
        DestinationName

    Raises:
        pathvalidate.ValidationError: Nom invalide (trop long...)
    """
    title = sanitize_for_filesystem(movie.title.replace(" - ", ". "))
    base = f"{title} ({movie.year}) [tmdbid-{movie.id}]"
    filename = f"{base} - {sanitize_for_filesystem(remainder)}.{extension}"
    return DestinationName(folder=Path(_check(base)), filename=_check(filename))


def build_episode_path(
    episode: ResolvedEpisode,
    remainder: str,
    episode_title: str,
    extension: str,
) -> DestinationName:
    """
    Genere le dossier et le nom de fichier d'un episode.

    Args:
        episode: Episode resolu
        remainder: Texte restant apres le titre d'episode (peut etre vide)
        episode_title: Titre d'episode retenu (fichier ou TMDB)
        extension: Extension sans le point

    Returns:
        DestinationName (dossier "Serie (Annee) [tmdbid-ID]/Season XX")
    """
    show = sanitize_for_filesystem(episode.show_name)
    show_folder = f"{show} ({episode.show_first_year}) [tmdbid-{episode.show_id}]"
    season_folder = f"Season {episode.season:02d}"

    rest = f" - {remainder}" if remainder else ""
    filename = (
        f"{show} ({episode.episode_year}) "
        f"S{episode.season:02d}E{episode.episode:02d} "
        f"{sanitize_for_filesystem(episode_title)}"
        f"{sanitize_for_filesystem(rest)}.{extension}"
    )
    return DestinationName(
        folder=Path(_check(show_folder)) / season_folder,
        filename=_check(filename),
    )


def match_sidecar_suffix(name: str, source_base: str) -> Optional[str]:
    """
    Determine si un fichier est une annexe du fichier video.

    Une annexe partage le nom de base du fichier video, suivi d'un
    suffixe connu : sous-titre (avec langue optionnelle), .nfo,
    .trickplay ou illustration (-poster.jpg...).

    Args:
        name: Nom de l'entree du repertoire
        source_base: Nom du fichier video sans extension

    Returns:
        Le suffixe (ex: ".en.srt", "-poster.jpg"), ou None
    """
    if not name.startswith(source_base) or name == source_base:
        return None
    suffix = name[len(source_base):]
    if suffix in METADATA_SUFFIXES:
        return suffix
    if _SUBTITLE_SUFFIX.match(suffix):
        return suffix
    return None


def build_sidecar_name(suffix: str, destination_filename: str, media_type: MediaType) -> str:
    """
    Calcule le nom de destination d'une annexe.

    Regles:
    - .nfo : "movie.nfo" pour un film, "<nouveau nom>.nfo" pour un episode
    - illustrations : "poster.jpg"... pour un film, "<nouveau nom>-poster.jpg" sinon
    - sous-titres et .trickplay : "<nouveau nom><suffixe>"

    Args:
        suffix: Suffixe retourne par match_sidecar_suffix
        destination_filename: Nouveau nom du fichier video
        media_type: Film ou episode

    Returns:
        Nom de fichier de l'annexe
    """
    parts = split_extension(destination_filename)
    base = parts[0] if parts else destination_filename

    if media_type == MediaType.MOVIE:
        if suffix == ".nfo":
            return "movie.nfo"
        if suffix.startswith("-"):
            return suffix[1:]
    return _check(f"{base}{suffix}")
