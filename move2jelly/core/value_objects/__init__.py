"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports:
- MediaType : Type de media (MOVIE, SERIES)
- ParseFailure : Raison d'echec du parsing
- MovieQuery : Requete film extraite d'un nom de fichier
- EpisodeQuery : Requete episode extraite d'un nom de fichier
- TransferMode : Deplacement ou lien physique
- RunConfig : Parametres immutables d'une execution
"""

from move2jelly.core.value_objects.parsed_info import (
    EpisodeQuery,
    MediaType,
    MovieQuery,
    ParseFailure,
)
from move2jelly.core.value_objects.run_config import RunConfig, TransferMode

__all__ = [
    "MediaType",
    "ParseFailure",
    "MovieQuery",
    "EpisodeQuery",
    "TransferMode",
    "RunConfig",
]
