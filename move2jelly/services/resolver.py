"""
Resolution des candidats TMDB.

ResolverService interroge le catalogue (par ID ou par recherche) et reduit
la liste des candidats a un seul :

Films:
1. Meme titre simplifie ET date de sortie commencant par l'annee du fichier
2. Parmi ce premier filtre, candidats avec un synopsis non vide
Chaque filtre n'est adopte que s'il laisse exactement un candidat.

Series:
1. Meme nom simplifie

Sans candidat unique, une AmbiguousMatchError porte la liste complete
pour que l'operateur ajoute un tag [tmdbid-N] au nom du fichier.
"""

import json
from typing import Optional

from loguru import logger

from move2jelly.core.entities.media import CandidateSummary, ResolvedEpisode, ResolvedMovie
from move2jelly.core.exceptions import AmbiguousMatchError, MissingAirDateError, NotFoundError
from move2jelly.core.ports.api_clients import ICatalogClient, MovieRecord, ShowRecord
from move2jelly.core.value_objects.parsed_info import EpisodeQuery, MovieQuery
from move2jelly.services.normalizer import simplify
from move2jelly.utils.constants import DEFAULT_LANGUAGE, TMDB_MOVIE_URL, TMDB_TV_URL
from move2jelly.utils.output import RunOutput


def narrow_movies(candidates: list[MovieRecord], query: MovieQuery) -> list[MovieRecord]:
    """
    Departage une liste de films candidats.

    Le filtre synopsis s'applique au resultat du filtre titre/annee,
    pas a la liste d'origine. Si aucun filtre ne donne un candidat
    unique, la liste d'origine est retournee.

    Args:
        candidates: Films retournes par le catalogue
        query: Requete issue du nom de fichier

    Returns:
        Liste a un element si le departage a reussi, sinon candidates
    """
    if len(candidates) <= 1:
        return candidates

    wanted_title = simplify(query.title)
    year_prefix = str(query.year) if query.year is not None else ""
    same_title = [
        movie
        for movie in candidates
        if simplify(movie.title) == wanted_title and movie.release_date.startswith(year_prefix)
    ]
    if len(same_title) == 1:
        return same_title

    with_overview = [movie for movie in same_title if movie.overview]
    if len(with_overview) == 1:
        return with_overview

    return candidates


def narrow_shows(candidates: list[ShowRecord], title: str) -> list[ShowRecord]:
    """Departage des series par nom simplifie (adopte seulement si unique)."""
    if len(candidates) <= 1:
        return candidates
    wanted = simplify(title)
    same_name = [show for show in candidates if simplify(show.name) == wanted]
    if len(same_name) == 1:
        return same_name
    return candidates


def _movie_summary(movie: MovieRecord) -> CandidateSummary:
    return CandidateSummary(
        id=movie.id,
        title=movie.title,
        year=str(movie.year) if movie.year is not None else "N/A",
        url=TMDB_MOVIE_URL.format(id=movie.id),
        overview=movie.overview,
    )


def _show_summary(show: ShowRecord) -> CandidateSummary:
    return CandidateSummary(
        id=show.id,
        title=show.name,
        year=str(show.first_air_year) if show.first_air_year is not None else "N/A",
        url=TMDB_TV_URL.format(id=show.id),
        overview=show.overview,
    )


class ResolverService:
    """
    Service de resolution des requetes films/episodes sur le catalogue.

    Les requetes sont attendues une par une : aucune requete concurrente,
    l'ordre des affichages suit l'ordre des fichiers.

    Utilisation:
        resolver = ResolverService(catalog=tmdb_client, language="fr-FR")
        movie = await resolver.resolve_movie(query)
    """

    def __init__(
        self,
        catalog: ICatalogClient,
        language: str = DEFAULT_LANGUAGE,
        output: Optional[RunOutput] = None,
    ) -> None:
        """
        Args:
            catalog: Client du catalogue (TMDB)
            language: Langue des requetes
            output: Sortie operateur pour les actions et avertissements
        """
        self._catalog = catalog
        self._language = language
        self._output = output or RunOutput()

    def _describe(self, title: str, year: Optional[int]) -> str:
        """Parametres de recherche au format JSON, pour l'affichage."""
        params: dict = {"query": title}
        if year is not None:
            params["year"] = year
        params["language"] = self._language
        return json.dumps(params, ensure_ascii=False)

    async def resolve_movie(self, query: MovieQuery) -> ResolvedMovie:
        """
        Identifie le film correspondant a la requete.

        Raises:
            NotFoundError: Aucun film (ou ID inexistant)
            AmbiguousMatchError: Plusieurs films apres departage
            MissingAirDateError: Film sans date de sortie ni annee dans le nom
        """
        if query.explicit_id:
            self._output.action(f"Get from TMDB by id: {query.explicit_id}")
            movie = await self._catalog.get_movie_by_id(query.explicit_id, self._language)
            if movie is None:
                raise NotFoundError(f"Movie with TMDB ID {query.explicit_id} not found")
            candidates = [movie]
        else:
            self._output.action(f"Search TMDB: {self._describe(query.title, query.year)}")
            candidates = await self._catalog.search_movies(
                query.title, query.year, self._language
            )

        narrowed = narrow_movies(candidates, query)
        logger.debug(
            "Candidats films",
            title=query.title,
            found=len(candidates),
            narrowed=len(narrowed),
        )

        if not narrowed:
            raise NotFoundError(f'No titles found for "{query.title}"')
        if len(narrowed) > 1:
            raise AmbiguousMatchError([_movie_summary(m) for m in narrowed], kind="movie")

        movie = narrowed[0]
        year = movie.year if movie.year is not None else query.year
        if year is None:
            raise MissingAirDateError(f'Movie "{movie.title}" has no release date')
        return ResolvedMovie(id=movie.id, title=movie.title, year=year)

    async def resolve_episode(
        self, query: EpisodeQuery, keep_file_episode: bool = False
    ) -> ResolvedEpisode:
        """
        Identifie la serie puis l'episode correspondant a la requete.

        Un titre d'episode du nom de fichier different de celui de TMDB
        produit un avertissement indiquant la source retenue, jamais un echec.

        Args:
            query: Requete issue du nom de fichier
            keep_file_episode: Le titre du fichier l'emporte sur celui de TMDB

        Raises:
            NotFoundError: Serie ou episode introuvable
            AmbiguousMatchError: Plusieurs series apres departage
            MissingAirDateError: Serie sans date de premiere diffusion
        """
        show = await self._resolve_show(query)

        first_year = show.first_air_year
        if first_year is None:
            logger.debug("Serie sans date de premiere diffusion", show=repr(show))
            raise MissingAirDateError(f'TV show first air date not found for "{show.name}"')

        self._output.action(
            f'Get TV episode details {{"tvShowID": {show.id}, '
            f'"seasonNumber": {query.season}, "episodeNumber": {query.episode}}}'
        )
        episode = await self._catalog.get_episode(
            show.id, query.season, query.episode, self._language
        )
        if episode is None:
            raise NotFoundError(
                f"TV episode S{query.season:02d}E{query.episode:02d} not found"
            )

        guess = query.episode_title_guess
        if guess and simplify(guess) != simplify(episode.name):
            source = "file" if keep_file_episode else "TMDB"
            self._output.warning(
                f'Warning: Episode title from filename ("{guess}") does not match '
                f'TMDB title ("{episode.name}"). Using title from {source}.'
            )

        if episode.air_year is not None:
            episode_year = episode.air_year
        elif query.year is not None:
            episode_year = query.year
        else:
            episode_year = first_year

        return ResolvedEpisode(
            show_id=show.id,
            show_name=show.name,
            show_first_year=first_year,
            episode_name=episode.name,
            episode_year=episode_year,
            season=query.season,
            episode=query.episode,
        )

    async def _resolve_show(self, query: EpisodeQuery) -> ShowRecord:
        """Identifie la serie par ID ou par recherche."""
        if query.explicit_id:
            self._output.action(f"Get TV show from TMDB by id: {query.explicit_id}")
            show = await self._catalog.get_show_by_id(query.explicit_id, self._language)
            if show is None:
                raise NotFoundError(f"TV show with TMDB ID {query.explicit_id} not found")
            return show

        self._output.action(f"Search TMDB TV show: {self._describe(query.title, query.year)}")
        results = await self._catalog.search_shows(query.title, query.year, self._language)
        if not results:
            raise NotFoundError(f'No TV show found for "{query.title}"')

        narrowed = narrow_shows(results, query.title)
        if len(narrowed) > 1:
            raise AmbiguousMatchError([_show_summary(s) for s in narrowed], kind="tv")
        return narrowed[0]
