"""
Hierarchie d'exceptions de move2jelly.

- ParseError : nom de fichier inexploitable (saut du fichier)
- ResolutionError : TMDB ne permet pas d'identifier le media (saut du fichier)
- TransferError : echec d'une operation sur le systeme de fichiers (fichier en echec)
- ConfigError : configuration invalide detectee au demarrage (arret de l'execution)
"""

from pathlib import Path

from move2jelly.core.entities.media import CandidateSummary
from move2jelly.core.value_objects.parsed_info import ParseFailure


class Move2JellyError(Exception):
    """Exception de base de l'application."""


class ParseError(Move2JellyError):
    """
    Le nom de fichier ne contient pas les informations attendues.

    Attributes:
        reason: Raison de l'echec (ParseFailure)
    """

    def __init__(self, reason: ParseFailure, message: str) -> None:
        self.reason = reason
        super().__init__(message)


class ResolutionError(Move2JellyError):
    """Les donnees TMDB sont absentes, incompletes ou ambigues."""


class NotFoundError(ResolutionError):
    """Aucun film, serie ou episode correspondant sur TMDB."""


class MissingAirDateError(ResolutionError):
    """La fiche TMDB existe mais n'a pas de date de sortie / premiere diffusion."""


class AmbiguousMatchError(ResolutionError):
    """
    Plusieurs candidats TMDB restent apres le departage.

    Attributes:
        candidates: Candidats a presenter a l'operateur
        kind: "movie" ou "tv"
    """

    def __init__(self, candidates: list[CandidateSummary], kind: str) -> None:
        self.candidates = candidates
        self.kind = kind
        label = "titles" if kind == "movie" else "TV shows"
        super().__init__(f"Multiple {label} found ({len(candidates)})")


class TransferError(Move2JellyError):
    """
    Une operation de transfert a echoue.

    Attributes:
        source: Fichier source
        destination: Destination prevue
    """

    def __init__(self, source: Path, destination: Path, message: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(message)


class ConfigError(Move2JellyError):
    """Configuration invalide : credential TMDB absent, chemin inexistant..."""
