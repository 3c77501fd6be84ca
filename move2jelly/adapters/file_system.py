"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem pour les operations fichiers reelles.
Les erreurs du systeme (permissions, disque plein, lien entre peripheriques)
remontent sous forme d'OSError ; le service de transfert les convertit.
"""

import os
import shutil
import uuid
from pathlib import Path
from typing import Iterable, Iterator

from move2jelly.core.ports.file_system import FileIdentity, IFileSystem


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe (un lien symbolique casse compte)."""
        return path.exists() or path.is_symlink()

    def list_files(self, directory: Path, extensions: Iterable[str]) -> list[str]:
        """
        Liste les fichiers d'un repertoire filtres par extension.

        La comparaison des extensions est insensible a la casse.
        Les sous-repertoires ne sont pas parcourus.
        """
        wanted = {ext.lower().lstrip(".") for ext in extensions}
        names = []
        with os.scandir(directory) as entries:
            for entry in entries:
                if not entry.is_file():
                    continue
                extension = entry.name.rsplit(".", 1)[-1].lower() if "." in entry.name else ""
                if extension in wanted:
                    names.append(entry.name)
        return sorted(names)

    def list_names(self, directory: Path) -> list[str]:
        """Liste toutes les entrees d'un repertoire."""
        return sorted(os.listdir(directory))

    def make_dirs(self, path: Path) -> None:
        """Cree le repertoire et ses parents si necessaire."""
        path.mkdir(parents=True, exist_ok=True)

    def move(self, source: Path, destination: Path) -> None:
        """
        Deplace un fichier ou un repertoire.

        Utilise os.replace pour un deplacement atomique sur le meme filesystem.
        Pour un fichier cross-filesystem, copie d'abord vers un nom temporaire
        puis renomme, pour ne jamais laisser de destination partielle.
        """
        destination.parent.mkdir(parents=True, exist_ok=True)

        if source.is_dir():
            shutil.move(str(source), str(destination))
            return

        try:
            os.replace(source, destination)
        except OSError:
            # Cross-filesystem: copie intermediaire avec fichier temporaire
            temp = destination.with_name(f".tmp_{uuid.uuid4().hex}_{destination.name}")
            try:
                shutil.copy2(source, temp)
                os.replace(temp, destination)
            except OSError:
                if temp.exists():
                    temp.unlink()
                raise
            source.unlink()

    def hard_link(self, source: Path, destination: Path) -> None:
        """
        Cree un lien physique.

        Pour un repertoire (ex: dossier .trickplay), l'arborescence est
        recreee et chaque fichier est lie individuellement.
        """
        destination.parent.mkdir(parents=True, exist_ok=True)

        if not source.is_dir():
            os.link(source, destination)
            return

        for current, _dirs, files in os.walk(source):
            target_dir = destination / Path(current).relative_to(source)
            target_dir.mkdir(parents=True, exist_ok=True)
            for name in files:
                os.link(Path(current) / name, target_dir / name)

    def stat(self, path: Path) -> FileIdentity:
        """Retourne nombre de liens, inode et peripherique (sans suivre les liens symboliques)."""
        result = path.lstat()
        return FileIdentity(
            link_count=result.st_nlink,
            inode=result.st_ino,
            device=result.st_dev,
        )

    def walk_files(self, root: Path) -> Iterator[Path]:
        """
        Parcourt recursivement les fichiers reguliers sous root.

        Les liens symboliques sont ignores : seuls les liens physiques
        partagent l'inode de la source.
        """
        for current, _dirs, files in os.walk(root):
            for name in files:
                path = Path(current) / name
                if path.is_symlink():
                    continue
                yield path
