"""
Interfaces ports pour le systeme de fichiers.

Interface abstraite (port) definissant les operations fichiers dont le
moteur de placement a besoin : enumeration, creation de dossiers,
deplacement, lien physique et identite des fichiers (inode).

Les operations qui modifient le disque levent OSError en cas d'echec.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator


@dataclass(frozen=True)
class FileIdentity:
    """
    Identite physique d'un fichier.

    Attributs:
        link_count: Nombre de liens physiques
        inode: Numero d'inode
        device: Peripherique contenant l'inode
    """

    link_count: int
    inode: int
    device: int

    @property
    def key(self) -> tuple[int, int]:
        """Cle (device, inode) identifiant le contenu sur le disque."""
        return (self.device, self.inode)


class IFileSystem(ABC):
    """
    Interface pour les operations sur les fichiers.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        ...

    @abstractmethod
    def list_files(self, directory: Path, extensions: Iterable[str]) -> list[str]:
        """
        Liste les fichiers d'un repertoire (non recursif) filtres par extension.

        Args:
            directory: Repertoire a lister
            extensions: Extensions acceptees, en minuscules et sans point

        Returns:
            Noms de fichiers tries
        """
        ...

    @abstractmethod
    def list_names(self, directory: Path) -> list[str]:
        """Liste tous les noms d'entrees d'un repertoire, tries."""
        ...

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        """Cree un repertoire et ses parents (idempotent)."""
        ...

    @abstractmethod
    def move(self, source: Path, destination: Path) -> None:
        """Deplace un fichier ou un repertoire."""
        ...

    @abstractmethod
    def hard_link(self, source: Path, destination: Path) -> None:
        """
        Cree un lien physique de source vers destination.

        Pour un repertoire, l'arborescence est recreee et chaque fichier lie.
        """
        ...

    @abstractmethod
    def stat(self, path: Path) -> FileIdentity:
        """Retourne l'identite physique d'un fichier."""
        ...

    @abstractmethod
    def walk_files(self, root: Path) -> Iterator[Path]:
        """Parcourt recursivement les fichiers reguliers sous root."""
        ...
