"""
Commande CLI principale : range le contenu du repertoire d'arrivee.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger

from move2jelly.adapters.cli.helpers import build_run_config, with_container
from move2jelly.core.exceptions import ConfigError
from move2jelly.services.placement import PlacementService
from move2jelly.services.series_overrides import SeriesOverrideTable
from move2jelly.utils.constants import DEFAULT_EXTENSIONS, SERIES_OVERRIDE_FILENAME


def run(
    incoming: Annotated[
        Optional[Path],
        typer.Option(
            "--incoming", "-i",
            help="Repertoire d'arrivee (defaut: repertoire courant)",
        ),
    ] = None,
    extensions: Annotated[
        Optional[str],
        typer.Option(
            "--extensions", "-e",
            help=f"Extensions video separees par des virgules (defaut: {','.join(DEFAULT_EXTENSIONS)})",
        ),
    ] = None,
    movies_path: Annotated[
        Optional[Path],
        typer.Option("--movies-path", "-m", help="Racine des films (defaut: repertoire d'arrivee)"),
    ] = None,
    series_path: Annotated[
        Optional[Path],
        typer.Option("--series-path", "-s", help="Racine des series (defaut: repertoire d'arrivee)"),
    ] = None,
    link: Annotated[
        bool,
        typer.Option("--link", "-l", help="Creer des liens physiques au lieu de deplacer"),
    ] = False,
    keep_file_episode: Annotated[
        bool,
        typer.Option("--keep-file-episode", "-k", help="Garder le titre d'episode du fichier"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-d", help="Simule sans modifier les fichiers"),
    ] = False,
) -> None:
    """Identifie les videos du repertoire d'arrivee sur TMDB et les range."""
    asyncio.run(
        _run_async(
            incoming, extensions, movies_path, series_path, link, keep_file_episode, dry_run
        )
    )


@with_container()
async def _run_async(
    container,
    incoming: Optional[Path],
    extensions: Optional[str],
    movies_path: Optional[Path],
    series_path: Optional[Path],
    link: bool,
    keep_file_episode: bool,
    dry_run: bool,
) -> None:
    """Implementation async de la commande run."""
    settings = container.config()
    output = container.output()

    try:
        run_config = build_run_config(
            settings,
            incoming=incoming,
            extensions=extensions,
            movies_path=movies_path,
            series_path=series_path,
            link=link,
            keep_file_episode=keep_file_episode,
            dry_run=dry_run,
        )
        overrides = SeriesOverrideTable.load(run_config.incoming_dir / SERIES_OVERRIDE_FILENAME)
    except ConfigError as e:
        output.error(str(e))
        raise typer.Exit(1)

    logger.info(
        "Execution",
        incoming=str(run_config.incoming_dir),
        mode=run_config.transfer_mode.value,
        dry_run=run_config.dry_run,
        language=run_config.language,
    )

    placement = PlacementService(
        run_config,
        container.file_system(),
        container.resolver_service(language=run_config.language),
        overrides=overrides,
        output=output,
    )
    try:
        await placement.run()
    finally:
        await container.tmdb_client().close()
        container.api_cache().close()
