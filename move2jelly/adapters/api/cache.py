"""
Cache disque des reponses TMDB.

Relancer l'outil apres avoir ajoute un tag [tmdbid-N] a un nom de fichier
ne refait pas les requetes deja resolues lors du passage precedent.
Les cles incluent la langue : une fiche francaise et une fiche anglaise
sont deux entrees distinctes.

Durees de vie:
- Recherches (SEARCH_TTL): 24 heures
- Fiches par ID et episodes (DETAILS_TTL): 7 jours
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Callable, Optional

from diskcache import Cache


def cache_key(*parts: object) -> str:
    """
    Construit une cle de cache a partir de ses composants.

    None devient une chaine vide : ("tmdb", "search_tv", "en-US", "lost", None)
    donne "tmdb:search_tv:en-US:lost:".
    """
    return ":".join("" if part is None else str(part) for part in parts)


class APICache:
    """
    Facade asynchrone sur diskcache.Cache.

    Les acces disque passent par l'executor par defaut de la boucle.
    Construit avec enabled=False, le cache ne cree aucun repertoire,
    ignore les ecritures et manque a chaque lecture.
    """

    SEARCH_TTL = 86400  # 24h
    DETAILS_TTL = 604800  # 7j

    def __init__(self, cache_dir: str | Path = ".cache/api", enabled: bool = True) -> None:
        self._store: Optional[Cache] = Cache(str(cache_dir)) if enabled else None

    @property
    def enabled(self) -> bool:
        return self._store is not None

    async def _offload(self, operation: Callable[[], Any]) -> Any:
        return await asyncio.get_running_loop().run_in_executor(None, operation)

    async def get(self, key: str) -> Optional[Any]:
        """Valeur associee a key, None si absente, expiree ou cache inactif."""
        if self._store is None:
            return None
        return await self._offload(partial(self._store.get, key))

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Enregistre value (picklable) pour ttl secondes."""
        if self._store is not None:
            await self._offload(partial(self._store.set, key, value, expire=ttl))

    async def set_search(self, key: str, value: Any) -> None:
        await self.set(key, value, self.SEARCH_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        await self.set(key, value, self.DETAILS_TTL)

    async def clear(self) -> None:
        """Vide le cache."""
        if self._store is not None:
            await self._offload(self._store.clear)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
