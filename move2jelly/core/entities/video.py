"""
Entites fichier video.

ParsedVideo est le resultat du pipeline complet pour un fichier :
ou il doit aller et sous quel nom. ItemOutcome decrit l'etat terminal
d'un fichier apres son passage dans le moteur de placement.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from move2jelly.core.value_objects.parsed_info import MediaType


class ItemStatus(Enum):
    """Etat terminal d'un fichier traite."""

    PLACED = "placed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ParsedVideo:
    """
    Destination calculee pour un fichier video.

    Attributs:
        source_filename: Nom du fichier tel que liste dans le repertoire d'arrivee
        destination_folder: Dossier relatif a la racine de la bibliotheque
        destination_filename: Nouveau nom du fichier video
        media_type: Film ou episode (choisit la racine et les regles des annexes)
    """

    source_filename: str
    destination_folder: Path
    destination_filename: str
    media_type: MediaType


@dataclass(frozen=True)
class ItemOutcome:
    """
    Resultat du traitement d'un fichier.

    Attributs:
        filename: Nom du fichier source
        status: PLACED, SKIPPED ou FAILED
        reason: Raison du saut ou de l'echec
        destination: Chemin final du fichier video (si place)
    """

    filename: str
    status: ItemStatus
    reason: Optional[str] = None
    destination: Optional[Path] = None
