"""
Utilitaires et constantes pour move2jelly.

Ce module contient les constantes et la sortie console partagees.
"""

from move2jelly.utils.constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_LANGUAGE,
    METADATA_SUFFIXES,
    SUBTITLE_EXTENSIONS,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "DEFAULT_LANGUAGE",
    "METADATA_SUFFIXES",
    "SUBTITLE_EXTENSIONS",
]
