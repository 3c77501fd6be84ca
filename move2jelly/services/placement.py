"""
Service d'orchestration du rangement des fichiers video.

Pour chaque fichier du repertoire d'arrivee, dans l'ordre d'enumeration :
classification -> parsing -> resolution TMDB -> calcul du chemin -> placement.

Un echec de parsing ou de resolution fait sauter le fichier, un echec
de transfert le marque en erreur ; dans tous les cas le traitement passe
au fichier suivant. Les fichiers sont traites strictement l'un apres
l'autre pour que l'ordre des affichages suive l'ordre des fichiers.
"""

from dataclasses import dataclass, field
from typing import Optional

import httpx
from loguru import logger
from pathvalidate import ValidationError

from move2jelly.core.entities.video import ItemOutcome, ItemStatus, ParsedVideo
from move2jelly.core.exceptions import (
    AmbiguousMatchError,
    ParseError,
    ResolutionError,
    TransferError,
)
from move2jelly.core.ports.file_system import IFileSystem
from move2jelly.core.value_objects.parsed_info import MediaType
from move2jelly.core.value_objects.run_config import RunConfig
from move2jelly.services.parser import FilenameParser, classify
from move2jelly.services.renamer import build_episode_path, build_movie_path
from move2jelly.services.resolver import ResolverService
from move2jelly.services.series_overrides import SeriesOverrideTable
from move2jelly.services.transferer import LinkedInodeIndex, TransfererService
from move2jelly.utils.output import RunOutput


@dataclass
class RunSummary:
    """Resultat d'une execution complete."""

    outcomes: list[ItemOutcome] = field(default_factory=list)

    def _count(self, status: ItemStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def placed(self) -> int:
        """Nombre de fichiers places."""
        return self._count(ItemStatus.PLACED)

    @property
    def skipped(self) -> int:
        """Nombre de fichiers sautes."""
        return self._count(ItemStatus.SKIPPED)

    @property
    def failed(self) -> int:
        """Nombre de fichiers en echec."""
        return self._count(ItemStatus.FAILED)


class PlacementService:
    """
    Moteur de placement : traite un fichier ou tout le repertoire d'arrivee.

    Utilisation typique:
        service = PlacementService(run_config, file_system, resolver)
        summary = await service.run()
    """

    def __init__(
        self,
        run_config: RunConfig,
        file_system: IFileSystem,
        resolver: ResolverService,
        overrides: Optional[SeriesOverrideTable] = None,
        output: Optional[RunOutput] = None,
        parser: Optional[FilenameParser] = None,
        transferer: Optional[TransfererService] = None,
    ) -> None:
        """
        Initialise le moteur de placement.

        Args:
            run_config: Configuration immutable de l'execution
            file_system: Adaptateur systeme de fichiers
            resolver: Service de resolution TMDB
            overrides: Table series.json
            output: Sortie operateur (creee si None)
            parser: FilenameParser (optionnel, pour les tests)
            transferer: TransfererService (optionnel, pour les tests)
        """
        self._config = run_config
        self._fs = file_system
        self._resolver = resolver
        self._output = output or RunOutput()
        self._parser = parser or FilenameParser(overrides=overrides, output=self._output)

        self._link_index: Optional[LinkedInodeIndex] = None
        if run_config.link_mode:
            self._link_index = LinkedInodeIndex(
                file_system,
                (run_config.movies_dir, run_config.series_dir),
                ignored_dir=run_config.incoming_dir,
            )
        self._transferer = transferer or TransfererService(
            file_system,
            transfer_mode=run_config.transfer_mode,
            dry_run=run_config.dry_run,
            output=self._output,
            link_index=self._link_index,
        )

    async def run(self) -> RunSummary:
        """
        Traite tous les fichiers video du repertoire d'arrivee.

        Returns:
            RunSummary avec le resultat de chaque fichier
        """
        config = self._config
        summary = RunSummary()
        files = self._fs.list_files(config.incoming_dir, config.extensions)

        if not files:
            self._output.action(
                f"No video files ({', '.join(config.extensions)}) found in: "
                f'"{config.incoming_dir}"'
            )
            return summary

        for filename in files:
            outcome = await self.process_item(filename)
            summary.outcomes.append(outcome)
            self._output.action()

        self._output.summary(summary.placed, summary.skipped, summary.failed)
        return summary

    async def process_item(self, filename: str) -> ItemOutcome:
        """
        Traite un fichier : Discovered -> Classified -> Parsed -> Resolved -> PathBuilt -> Placed.

        Args:
            filename: Nom du fichier dans le repertoire d'arrivee

        Returns:
            ItemOutcome (PLACED, SKIPPED ou FAILED)
        """
        dry = " [dry run]" if self._config.dry_run else ""
        self._output.info(f'Processing{dry}: "{filename}"')

        if self._link_index is not None and self._is_already_linked(filename):
            return self._skip(filename, "Already linked into the library")

        try:
            media_type = classify(filename)
            if media_type == MediaType.SERIES:
                video = await self._prepare_episode(filename)
            else:
                video = await self._prepare_movie(filename)
        except AmbiguousMatchError as e:
            self._output.candidates(e.candidates, e.kind)
            return self._skip(filename, str(e))
        except (ParseError, ResolutionError) as e:
            self._output.error(str(e))
            return self._skip(filename, str(e))
        except ValidationError as e:
            self._output.error(f"Invalid destination name: {e}")
            return self._skip(filename, str(e))
        except httpx.HTTPError as e:
            logger.exception(f"Erreur TMDB pour {filename}")
            self._output.error(f"TMDB request failed: {e}")
            return ItemOutcome(filename=filename, status=ItemStatus.FAILED, reason=str(e))

        root = (
            self._config.series_dir
            if video.media_type == MediaType.SERIES
            else self._config.movies_dir
        )
        try:
            destination = self._transferer.place(video, self._config.incoming_dir, root)
        except TransferError as e:
            logger.error(f"Transfert en echec: {e}")
            self._output.error(str(e))
            return ItemOutcome(filename=filename, status=ItemStatus.FAILED, reason=str(e))

        return ItemOutcome(filename=filename, status=ItemStatus.PLACED, destination=destination)

    async def _prepare_movie(self, filename: str) -> ParsedVideo:
        """Parse, resout et nomme un film."""
        query = self._parser.parse_movie(filename)
        movie = await self._resolver.resolve_movie(query)
        name = build_movie_path(movie, query.remainder, query.file_extension)
        return ParsedVideo(
            source_filename=filename,
            destination_folder=name.folder,
            destination_filename=name.filename,
            media_type=MediaType.MOVIE,
        )

    async def _prepare_episode(self, filename: str) -> ParsedVideo:
        """Parse, resout et nomme un episode."""
        keep = self._config.keep_file_episode
        query = self._parser.parse_episode(filename)
        episode = await self._resolver.resolve_episode(query, keep_file_episode=keep)
        if keep and query.episode_title_guess:
            title = query.episode_title_guess
        else:
            title = episode.episode_name
        name = build_episode_path(episode, query.remainder, title, query.file_extension)
        return ParsedVideo(
            source_filename=filename,
            destination_folder=name.folder,
            destination_filename=name.filename,
            media_type=MediaType.SERIES,
        )

    def _is_already_linked(self, filename: str) -> bool:
        source = self._config.incoming_dir / filename
        try:
            return self._link_index.is_linked(source)
        except OSError as e:
            logger.warning(f"Impossible de lire {source}: {e}")
            return False

    def _skip(self, filename: str, reason: str) -> ItemOutcome:
        self._output.action("Skipping file")
        return ItemOutcome(filename=filename, status=ItemStatus.SKIPPED, reason=reason)
