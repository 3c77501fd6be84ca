"""
Utilitaires partages pour les commandes CLI de move2jelly.

Ce module fournit :
- with_container : decorateur injectant un container initialise
- build_run_config : construction et verification de la configuration d'execution
"""

from functools import wraps
from pathlib import Path
from typing import Optional

from move2jelly.config import Settings, parse_extensions
from move2jelly.container import Container
from move2jelly.core.exceptions import ConfigError
from move2jelly.core.value_objects.run_config import RunConfig, TransferMode


def with_container():
    """
    Decorateur qui injecte un container initialise en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def build_run_config(
    settings: Settings,
    incoming: Optional[Path] = None,
    extensions: Optional[str] = None,
    movies_path: Optional[Path] = None,
    series_path: Optional[Path] = None,
    link: bool = False,
    keep_file_episode: bool = False,
    dry_run: bool = False,
) -> RunConfig:
    """
    Construit la RunConfig a partir des options CLI et des Settings.

    Les repertoires films et series valent par defaut le repertoire
    d'arrivee, lui-meme le repertoire courant par defaut.

    Raises:
        ConfigError: Si le jeton TMDB manque ou si un repertoire n'existe pas
    """
    if not settings.tmdb_enabled:
        raise ConfigError("Error: TMDB_API_ACCESS_TOKEN environment variable is not set.")

    incoming_dir = (incoming or Path.cwd()).expanduser()
    movies_dir = (movies_path or incoming_dir).expanduser()
    series_dir = (series_path or incoming_dir).expanduser()

    if not incoming_dir.is_dir():
        raise ConfigError(f'Incoming path does not exist: "{incoming_dir}"')
    if not movies_dir.exists():
        raise ConfigError(f'Movies path does not exist: "{movies_dir}"')
    if not series_dir.exists():
        raise ConfigError(f'Series path does not exist: "{series_dir}"')

    return RunConfig(
        incoming_dir=incoming_dir,
        movies_dir=movies_dir,
        series_dir=series_dir,
        extensions=parse_extensions(extensions) if extensions else settings.extensions,
        language=settings.language,
        transfer_mode=TransferMode.LINK if link else TransferMode.MOVE,
        keep_file_episode=keep_file_episode,
        dry_run=dry_run,
    )
