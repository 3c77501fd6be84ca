"""
Couche adaptateurs (infrastructure).

Les adaptateurs implementent les ports definis dans core/ports/ et fournissent
des implementations concretes pour les systemes externes :

- api/ : Client TMDB (httpx), cache disque et retry
- cli/ : Interface ligne de commande (Typer)
- file_system : Operations sur le systeme de fichiers

Chaque adaptateur depend de core/ mais core/ ne depend jamais des adaptateurs.
"""

from move2jelly.adapters.file_system import FileSystemAdapter

__all__ = [
    "FileSystemAdapter",
]
