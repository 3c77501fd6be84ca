"""
Configuration d'une execution de rangement.

RunConfig regroupe les chemins et options d'une execution. Elle est
construite une fois par la CLI puis transmise aux services : aucun
etat global n'est partage entre les etapes.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class TransferMode(str, Enum):
    """Mode de transfert applique a tous les fichiers d'une execution."""

    MOVE = "move"
    LINK = "link"


@dataclass(frozen=True)
class RunConfig:
    """
    Parametres immutables d'une execution.

    Attributs:
        incoming_dir: Repertoire d'arrivee a scanner
        movies_dir: Racine de la bibliotheque films
        series_dir: Racine de la bibliotheque series
        extensions: Extensions video acceptees (minuscules, sans point)
        language: Langue des requetes TMDB (ex: "fr-FR")
        transfer_mode: Deplacement ou lien physique
        keep_file_episode: Garder le titre d'episode du nom de fichier
        dry_run: Simuler sans modifier le systeme de fichiers
    """

    incoming_dir: Path
    movies_dir: Path
    series_dir: Path
    extensions: tuple[str, ...] = ("mkv", "avi", "mp4", "mov")
    language: str = "en-US"
    transfer_mode: TransferMode = TransferMode.MOVE
    keep_file_episode: bool = False
    dry_run: bool = False

    @property
    def link_mode(self) -> bool:
        """Indique si les fichiers sont lies plutot que deplaces."""
        return self.transfer_mode == TransferMode.LINK
