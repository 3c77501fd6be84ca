"""
Client TMDB pour la recherche et la lecture des fiches films, series et episodes.

Implemente l'interface ICatalogClient pour TMDB (The Movie Database).
Utilise le cache persistant et le mecanisme de retry pour gerer
le rate limiting et les erreurs passageres.

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_token", cache=cache)
    movies = await client.search_movies("The Matrix", 1999, "en-US")
    show = await client.get_show_by_id("1399", "en-US")
    await client.close()
"""

from typing import Any, Callable, Optional

import httpx
from loguru import logger

from move2jelly.adapters.api.cache import APICache, cache_key
from move2jelly.adapters.api.retry import request_with_retry
from move2jelly.core.ports.api_clients import (
    EpisodeRecord,
    ICatalogClient,
    MovieRecord,
    ShowRecord,
)


class TMDBClient(ICatalogClient):
    """
    Client API TMDB v3.

    Implemente ICatalogClient avec:
    - Recherche de films et de series par titre (annee optionnelle)
    - Lecture d'un film ou d'une serie par ID
    - Details d'un episode (saison, numero)
    - Cache persistant (24h recherches, 7j fiches)
    - Retry automatique sur rate limiting (429) et erreurs 5xx passageres

    Les lectures par ID retournent None sur 404 ; les autres erreurs
    HTTP remontent en httpx.HTTPError.
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(self, api_key: str, cache: APICache, timeout: float = 30.0) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Read Access Token v4 ou cle API v3
            cache: Instance APICache pour le caching des resultats
            timeout: Delai maximum d'une requete en secondes
        """
        self._api_key = api_key
        self._cache = cache
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            params = {}

            if len(self._api_key) > 40:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await request_with_retry(self._get_client(), "GET", url, params=params)
        return response.json()

    async def _get_optional_json(
        self, url: str, params: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        """GET qui retourne None sur 404."""
        try:
            return await self._get_json(url, params)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.debug("Fiche TMDB introuvable", url=url)
                return None
            raise

    async def _lookup(
        self,
        key: str,
        url: str,
        language: str,
        convert: Callable[[dict[str, Any]], Any],
    ) -> Optional[Any]:
        """Lecture d'une fiche par ID, cache 7 jours, None sur 404."""
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        data = await self._get_optional_json(url, {"language": language})
        if data is None:
            return None

        record = convert(data)
        await self._cache.set_details(key, record)
        return record

    async def _search(
        self,
        kind: str,
        title: str,
        year: Optional[int],
        language: str,
        convert: Callable[[dict[str, Any]], Any],
    ) -> list:
        """Recherche par titre, cache 24 heures ; une liste vide n'est pas conservee."""
        key = cache_key("tmdb", f"search_{kind}", language, title.lower(), year)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        params: dict[str, Any] = {
            "query": title,
            "language": language,
            "include_adult": "false",
        }
        if year is not None:
            params["year"] = year

        data = await self._get_json(f"/search/{kind}", params)
        results = [convert(item) for item in data.get("results", [])]
        logger.debug(f"Recherche TMDB /search/{kind}", query=title, year=year, count=len(results))

        if results:
            await self._cache.set_search(key, results)
        return results

    async def get_movie_by_id(self, movie_id: str, language: str) -> Optional[MovieRecord]:
        return await self._lookup(
            cache_key("tmdb", "movie", language, movie_id),
            f"/movie/{movie_id}",
            language,
            _movie_from_json,
        )

    async def search_movies(
        self, title: str, year: Optional[int], language: str
    ) -> list[MovieRecord]:
        return await self._search("movie", title, year, language, _movie_from_json)

    async def get_show_by_id(self, show_id: str, language: str) -> Optional[ShowRecord]:
        return await self._lookup(
            cache_key("tmdb", "tv", language, show_id),
            f"/tv/{show_id}",
            language,
            _show_from_json,
        )

    async def search_shows(
        self, title: str, year: Optional[int], language: str
    ) -> list[ShowRecord]:
        return await self._search("tv", title, year, language, _show_from_json)

    async def get_episode(
        self, show_id: str, season: int, episode: int, language: str
    ) -> Optional[EpisodeRecord]:
        return await self._lookup(
            cache_key("tmdb", "episode", language, show_id, season, episode),
            f"/tv/{show_id}/season/{season}/episode/{episode}",
            language,
            _episode_from_json,
        )

    async def close(self) -> None:
        """Ferme le client HTTP ; il sera recree a la prochaine requete."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


def _movie_from_json(data: dict[str, Any]) -> MovieRecord:
    return MovieRecord(
        id=str(data["id"]),
        title=data.get("title") or data.get("original_title") or "",
        release_date=data.get("release_date") or "",
        overview=data.get("overview") or None,
    )


def _show_from_json(data: dict[str, Any]) -> ShowRecord:
    return ShowRecord(
        id=str(data["id"]),
        name=data.get("name") or data.get("original_name") or "",
        first_air_date=data.get("first_air_date") or None,
        overview=data.get("overview") or None,
    )


def _episode_from_json(data: dict[str, Any]) -> EpisodeRecord:
    return EpisodeRecord(name=data.get("name") or "", air_date=data.get("air_date") or None)
