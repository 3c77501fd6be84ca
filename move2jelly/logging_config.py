"""
Journal de diagnostic de move2jelly (loguru).

Les messages destines a l'operateur (Processing, actions "> ...",
candidats) sont ecrits par utils/output.py sur stdout. loguru ne
recoit que le diagnostic, sur deux sorties:
- stderr, en couleur, filtre par log_level (WARNING par defaut, -v / -vv)
- un fichier JSON ligne par ligne, toujours au niveau DEBUG, avec rotation
"""

import sys
from pathlib import Path

from loguru import logger

STDERR_FORMAT = (
    "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> "
    "<cyan>{name}</cyan> {message}"
)


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path = Path("logs/move2jelly.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Remplace les sorties loguru par defaut par celles de move2jelly.

    Si le repertoire du journal ne peut pas etre cree, seule la sortie
    stderr est installee et un avertissement le signale.

    Args:
        log_level: Seuil de la sortie stderr
        log_file: Fichier JSON (cree avec ses parents)
        rotation_size: Taille declenchant la rotation, au format loguru ("10 MB")
        retention_count: Nombre d'archives zip conservees
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level, format=STDERR_FORMAT, colorize=True)

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Journal fichier desactive ({log_file.parent}): {e}")
        return

    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )
    logger.debug("Journal fichier actif", path=str(log_file), level=log_level)
