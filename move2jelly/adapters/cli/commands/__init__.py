"""
Commandes CLI de move2jelly.

- run : range le contenu du repertoire d'arrivee
- info : affiche la configuration effective
"""

from move2jelly.adapters.cli.commands.info_command import info
from move2jelly.adapters.cli.commands.run_command import run

__all__ = [
    "info",
    "run",
]
