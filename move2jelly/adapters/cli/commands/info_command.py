"""
Commande CLI d'affichage de la configuration effective.
"""

import asyncio

from rich.table import Table

from move2jelly.adapters.cli.helpers import with_container


def info() -> None:
    """Affiche la configuration effective (langue, extensions, cache, logs)."""
    asyncio.run(_info_async())


@with_container()
async def _info_async(container) -> None:
    settings = container.config()
    console = container.output().console

    table = Table(title="move2jelly", show_header=False)
    table.add_column("Parametre", style="cyan")
    table.add_column("Valeur")
    table.add_row("TMDB token", "configured" if settings.tmdb_enabled else "missing")
    table.add_row("Language", settings.language)
    table.add_row("Extensions", ", ".join(settings.extensions))
    table.add_row("Cache", str(settings.cache_dir) if settings.cache_enabled else "disabled")
    table.add_row("Log file", str(settings.log_file))
    table.add_row("Log level", settings.log_level)
    console.print(table)
