"""
Assemblage des composants de move2jelly avec dependency-injector.

Centralise la construction des adaptateurs (cache, client TMDB, systeme
de fichiers) et des services utilises par la CLI.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.file_system import FileSystemAdapter
from .config import Settings
from .services.resolver import ResolverService
from .utils.output import RunOutput


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation:
        container = Container()
        resolver = container.resolver_service()
        await container.tmdb_client().close()
    """

    # Settings lus une fois (environnement puis .env)
    config = providers.Singleton(Settings)

    # Sortie operateur partagee par tous les services
    output = providers.Singleton(RunOutput)

    # IFileSystem
    file_system = providers.Singleton(FileSystemAdapter)

    # Un seul cache disque par processus
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
        enabled=config.provided.cache_enabled,
    )

    # Client TMDB - le jeton est verifie par la commande avant utilisation
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
    )

    # Factory : la commande run peut fixer la langue
    resolver_service = providers.Factory(
        ResolverService,
        catalog=tmdb_client,
        language=config.provided.language,
        output=output,
    )
