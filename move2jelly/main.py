"""
Point d'entree CLI de move2jelly.

Configure le logging et monte les commandes CLI.
"""

from typing import Annotated

import typer

from move2jelly import __version__
from move2jelly.adapters.cli.commands import info, run
from move2jelly.config import Settings
from move2jelly.logging_config import configure_logging

app = typer.Typer(
    name="move2jelly",
    help="Range films et episodes dans une bibliotheque au format Jellyfin, via TMDB",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"),
    ] = 0,
) -> None:
    """move2jelly - Rangement de videos pour Jellyfin."""
    settings = Settings()
    level = settings.log_level
    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    configure_logging(
        log_level=level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command()(run)
app.command()(info)


@app.command()
def version() -> None:
    """Affiche la version de move2jelly."""
    typer.echo(f"move2jelly {__version__}")


def main() -> None:
    """Point d'entree du script move2jelly."""
    app()


if __name__ == "__main__":
    main()
