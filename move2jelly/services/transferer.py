"""
Service de transfert des fichiers vers la bibliotheque.

Ce module fournit le placement d'un fichier video resolu et de ses
annexes dans son dossier de destination avec:
- Verification de toutes les destinations avant la premiere modification
- Creation idempotente du dossier
- Deplacement ou lien physique (meme mode pour tous les fichiers d'un element)
- Mode simulation (dry-run) : les actions sont affichees, rien n'est modifie
- Detection des fichiers deja lies dans la bibliotheque (mode lien)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger
from pathvalidate import ValidationError

from move2jelly.core.entities.video import ParsedVideo
from move2jelly.core.exceptions import TransferError
from move2jelly.core.ports.file_system import IFileSystem
from move2jelly.core.value_objects.run_config import TransferMode
from move2jelly.services.normalizer import split_extension
from move2jelly.services.renamer import build_sidecar_name, match_sidecar_suffix
from move2jelly.utils.output import RunOutput


class LinkedInodeIndex:
    """
    Index des inodes presents dans les arborescences de destination.

    Le parcours recursif n'est fait qu'une fois, au premier appel ;
    chaque fichier lie ensuite est ajoute a l'index pour garder
    le meme resultat qu'un nouveau parcours.

    Les fichiers places directement dans ignored_dir (le repertoire
    d'arrivee) ne comptent pas : quand les racines films/series valent
    le repertoire d'arrivee, le parcours y retrouve la source elle-meme
    et ses voisins, qui ne sont pas encore ranges.
    """

    def __init__(
        self,
        file_system: IFileSystem,
        roots: Iterable[Path],
        ignored_dir: Optional[Path] = None,
    ) -> None:
        self._fs = file_system
        self._roots = tuple(dict.fromkeys(roots))
        self._ignored_dir = ignored_dir
        self._paths: Optional[dict[tuple[int, int], set[Path]]] = None

    def _scan(self) -> dict[tuple[int, int], set[Path]]:
        paths: dict[tuple[int, int], set[Path]] = {}
        for root in self._roots:
            if not self._fs.exists(root):
                continue
            for path in self._fs.walk_files(root):
                try:
                    paths.setdefault(self._fs.stat(path).key, set()).add(path)
                except OSError:
                    logger.debug("Fichier illisible ignore", path=str(path))
        logger.debug("Index des inodes construit", roots=len(self._roots), files=len(paths))
        return paths

    def is_linked(self, source: Path) -> bool:
        """
        Verifie si source est deja lie ailleurs dans une arborescence de destination.

        Un fichier avec un seul lien ne peut pas l'etre : le parcours
        n'est alors pas necessaire.
        """
        identity = self._fs.stat(source)
        if identity.link_count <= 1:
            return False
        if self._paths is None:
            self._paths = self._scan()
        return any(
            path != source and path.parent != self._ignored_dir
            for path in self._paths.get(identity.key, ())
        )

    def add(self, path: Path) -> None:
        """Enregistre un fichier nouvellement lie."""
        if self._paths is not None:
            self._paths.setdefault(self._fs.stat(path).key, set()).add(path)


@dataclass(frozen=True)
class PlannedTransfer:
    """Un fichier a transferer : label "file" pour la video, sinon le suffixe de l'annexe."""

    label: str
    source: Path
    destination: Path


class TransfererService:
    """
    Service de placement des fichiers dans la bibliotheque.

    Utilisation:
        transferer = TransfererService(file_system, TransferMode.MOVE, dry_run=False)
        final_path = transferer.place(video, incoming_dir, movies_dir)
    """

    def __init__(
        self,
        file_system: IFileSystem,
        transfer_mode: TransferMode = TransferMode.MOVE,
        dry_run: bool = False,
        output: Optional[RunOutput] = None,
        link_index: Optional[LinkedInodeIndex] = None,
    ) -> None:
        """
        Initialise le service de transfert.

        Args:
            file_system: Adaptateur systeme de fichiers
            transfer_mode: Deplacement ou lien physique
            dry_run: Affiche les actions sans modifier le disque
            output: Sortie operateur
            link_index: Index des inodes de destination (mode lien)
        """
        self._fs = file_system
        self._mode = transfer_mode
        self._dry_run = dry_run
        self._output = output or RunOutput()
        self._link_index = link_index

    @property
    def _verb(self) -> str:
        return "Link" if self._mode == TransferMode.LINK else "Move"

    def plan(
        self, video: ParsedVideo, source_dir: Path, library_root: Path
    ) -> list[PlannedTransfer]:
        """
        Calcule les transferts d'un element sans rien modifier.

        La video vient en premier, suivie de ses annexes. Chaque nom
        d'annexe est valide et aucune destination ne doit exister ni
        etre visee deux fois.

        Raises:
            TransferError: Nom d'annexe invalide ou destination deja occupee
        """
        folder = library_root / video.destination_folder
        transfers = [
            PlannedTransfer(
                "file", source_dir / video.source_filename, folder / video.destination_filename
            )
        ]
        for sidecar, suffix in self.find_sidecars(source_dir, video.source_filename):
            try:
                name = build_sidecar_name(suffix, video.destination_filename, video.media_type)
            except ValidationError as e:
                raise TransferError(
                    source_dir / sidecar, folder, f'Invalid name for "{sidecar}": {e}'
                ) from e
            transfers.append(PlannedTransfer(suffix, source_dir / sidecar, folder / name))

        seen: set[Path] = set()
        for transfer in transfers:
            if transfer.destination in seen or self._fs.exists(transfer.destination):
                raise TransferError(
                    transfer.source,
                    transfer.destination,
                    f'Destination already exists: "{transfer.destination}"',
                )
            seen.add(transfer.destination)
        return transfers

    def place(self, video: ParsedVideo, source_dir: Path, library_root: Path) -> Path:
        """
        Place le fichier video et ses annexes dans la bibliotheque.

        Operations effectuees:
        1. Calcul et verification de toutes les destinations (plan)
        2. Creation du dossier de destination
        3. Transfert du fichier video puis de chaque annexe

        Un element refuse a l'etape 1 laisse le disque intact.

        Args:
            video: Destination calculee
            source_dir: Repertoire d'arrivee
            library_root: Racine films ou series

        Returns:
            Chemin final du fichier video

        Raises:
            TransferError: Si une operation echoue ou si une destination existe deja
        """
        transfers = self.plan(video, source_dir, library_root)

        folder = library_root / video.destination_folder
        self._output.action(f'Create folder: "{folder}"')
        if not self._dry_run:
            try:
                self._fs.make_dirs(folder)
            except OSError as e:
                raise TransferError(folder, folder, f'Cannot create folder "{folder}": {e}') from e

        primary, *sidecars = transfers
        self._output.action(f'{self._verb} file to: "{primary.destination}"')
        self._transfer(primary.source, primary.destination)
        if self._link_index is not None and self._mode == TransferMode.LINK and not self._dry_run:
            self._link_index.add(primary.destination)

        for sidecar in sidecars:
            self._output.action(f'{self._verb} {sidecar.label} to: "{sidecar.destination}"')
            self._transfer(sidecar.source, sidecar.destination)

        return primary.destination

    def find_sidecars(self, source_dir: Path, source_filename: str) -> list[tuple[str, str]]:
        """
        Liste les annexes d'un fichier video dans le repertoire d'arrivee.

        Returns:
            Liste de (nom de l'annexe, suffixe)
        """
        parts = split_extension(source_filename)
        if parts is None:
            return []
        base = parts[0]
        sidecars = []
        for name in self._fs.list_names(source_dir):
            if name == source_filename:
                continue
            suffix = match_sidecar_suffix(name, base)
            if suffix is not None:
                sidecars.append((name, suffix))
        return sidecars

    def _transfer(self, source: Path, destination: Path) -> None:
        """Deplace ou lie un fichier, sans jamais ecraser une destination existante."""
        if self._fs.exists(destination):
            raise TransferError(
                source, destination, f'Destination already exists: "{destination}"'
            )
        if self._dry_run:
            return
        try:
            if self._mode == TransferMode.LINK:
                self._fs.hard_link(source, destination)
            else:
                self._fs.move(source, destination)
        except OSError as e:
            raise TransferError(
                source, destination, f'{self._verb} failed for "{destination}": {e}'
            ) from e
        logger.debug(
            "Fichier transfere",
            mode=self._mode.value,
            source=str(source),
            destination=str(destination),
        )
