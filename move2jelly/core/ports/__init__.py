"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports client catalogue :
- ICatalogClient : Recherche et lecture films/series/episodes
- MovieRecord, ShowRecord, EpisodeRecord : Enregistrements du catalogue

Ports systeme de fichiers :
- IFileSystem : Operations fichiers (liste, deplacement, lien physique)
- FileIdentity : Taille, nombre de liens et inode d'un fichier
"""

from move2jelly.core.ports.api_clients import (
    EpisodeRecord,
    ICatalogClient,
    MovieRecord,
    ShowRecord,
)
from move2jelly.core.ports.file_system import FileIdentity, IFileSystem

__all__ = [
    # Catalogue
    "ICatalogClient",
    "MovieRecord",
    "ShowRecord",
    "EpisodeRecord",
    # Systeme de fichiers
    "IFileSystem",
    "FileIdentity",
]
