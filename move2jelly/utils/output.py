"""
Sortie operateur sur la console Rich.

Chaque fichier traite affiche son nom, chaque decision ou action
(prefixee par "> " et grisee) et, en cas d'echec, une raison lisible.
Les listes de candidats ambigus sont formatees pour qu'un humain
choisisse puis relance avec un tag [tmdbid-N].

Les noms de fichiers contiennent souvent des crochets : le markup Rich
est desactive pour tous les messages.
"""

from typing import Optional

from loguru import logger
from rich.console import Console
from rich.table import Table

from move2jelly.core.entities.media import CandidateSummary
from move2jelly.utils.constants import OVERVIEW_SNIPPET_LENGTH


class RunOutput:
    """
    Facade d'affichage pour une execution.

    Les messages sont aussi envoyes a loguru (niveau DEBUG pour les actions)
    afin que le fichier de log garde la trace complete de l'execution.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console(highlight=False)

    @property
    def console(self) -> Console:
        """Console Rich sous-jacente."""
        return self._console

    def _print(self, message: str, style: Optional[str] = None) -> None:
        self._console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)

    def info(self, message: str = "") -> None:
        """Message narratif (nom du fichier en cours...)."""
        logger.info(message)
        self._print(message, "cyan")

    def action(self, message: str = "") -> None:
        """Action ou decision, affichee en gris avec le prefixe "> "."""
        if message:
            logger.debug(message)
            self._print(f"> {message}", "grey50")
        else:
            self._print("")

    def warning(self, message: str) -> None:
        """Avertissement non bloquant."""
        logger.warning(message)
        self._print(message, "yellow")

    def error(self, message: str = "") -> None:
        """Raison d'un echec."""
        if message:
            logger.error(message)
        self._print(message, "red")

    def candidates(self, candidates: list[CandidateSummary], kind: str) -> None:
        """
        Affiche les candidats TMDB non departages.

        Args:
            candidates: Candidats restants
            kind: "movie" ou "tv"
        """
        self.error("Multiple titles found:" if kind == "movie" else "Multiple TV shows found:")
        self.error()
        for index, candidate in enumerate(candidates, start=1):
            snippet = (candidate.overview or "")[:OVERVIEW_SNIPPET_LENGTH]
            self._print(
                f"{index}. {candidate.title} ({candidate.year}) [tmdbid-{candidate.id}] ",
                "red",
            )
            self._print(f"   {candidate.url}", "red")
            self._print(f"   {snippet}...", "red")
            self._print("")
        self.error('Add "[tmdbid-xxxx]" to the filename to specify the correct one.')
        self.error()

    def summary(self, placed: int, skipped: int, failed: int) -> None:
        """Affiche le tableau recapitulatif de l'execution."""
        table = Table(title="Summary", show_header=True)
        table.add_column("Placed", justify="right", style="green")
        table.add_column("Skipped", justify="right", style="yellow")
        table.add_column("Failed", justify="right", style="red")
        table.add_row(str(placed), str(skipped), str(failed))
        self._console.print(table)
