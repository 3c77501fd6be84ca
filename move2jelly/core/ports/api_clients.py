"""
Interfaces ports pour le catalogue de metadonnees.

Interface abstraite (port) definissant le contrat du catalogue distant
(TMDB) : recherche par titre, lecture par ID, details d'episode.
Les enregistrements ne portent que les champs utiles a l'identification,
avec des champs optionnels la ou l'API peut les omettre.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MovieRecord:
    """
    Film tel que retourne par le catalogue.

    Attributs:
        id: ID TMDB
        title: Titre localise
        release_date: Date de sortie "YYYY-MM-DD" (chaine vide si inconnue)
        overview: Synopsis
    """

    id: str
    title: str
    release_date: str = ""
    overview: Optional[str] = None

    @property
    def year(self) -> Optional[int]:
        """Annee de sortie, ou None si la date est absente."""
        return _year_of(self.release_date)


@dataclass(frozen=True)
class ShowRecord:
    """
    Serie TV telle que retournee par le catalogue.

    Attributs:
        id: ID TMDB
        name: Nom localise
        first_air_date: Date de premiere diffusion "YYYY-MM-DD"
        overview: Synopsis
    """

    id: str
    name: str
    first_air_date: Optional[str] = None
    overview: Optional[str] = None

    @property
    def first_air_year(self) -> Optional[int]:
        """Annee de premiere diffusion, ou None si absente."""
        return _year_of(self.first_air_date)


@dataclass(frozen=True)
class EpisodeRecord:
    """
    Episode tel que retourne par le catalogue.

    Attributs:
        name: Titre de l'episode
        air_date: Date de diffusion "YYYY-MM-DD"
    """

    name: str
    air_date: Optional[str] = None

    @property
    def air_year(self) -> Optional[int]:
        """Annee de diffusion, ou None si absente."""
        return _year_of(self.air_date)


def _year_of(date_str: Optional[str]) -> Optional[int]:
    """Extrait l'annee d'une date TMDB "YYYY-MM-DD"."""
    if not date_str:
        return None
    head = date_str.split("-")[0]
    return int(head) if head.isdigit() else None


class ICatalogClient(ABC):
    """
    Interface du catalogue de metadonnees films/series.

    Toutes les methodes recoivent la langue des resultats (ex: "fr-FR").
    Les lectures par ID retournent None quand la fiche n'existe pas.
    """

    @abstractmethod
    async def get_movie_by_id(self, movie_id: str, language: str) -> Optional[MovieRecord]:
        """Recupere un film par son ID TMDB."""
        ...

    @abstractmethod
    async def search_movies(
        self, title: str, year: Optional[int], language: str
    ) -> list[MovieRecord]:
        """
        Recherche des films par titre.

        Args:
            title: Titre a rechercher
            year: Annee de sortie pour filtrer (optionnelle)
            language: Langue des resultats

        Returns:
            Liste des candidats (vide si aucun resultat)
        """
        ...

    @abstractmethod
    async def get_show_by_id(self, show_id: str, language: str) -> Optional[ShowRecord]:
        """Recupere une serie par son ID TMDB."""
        ...

    @abstractmethod
    async def search_shows(
        self, title: str, year: Optional[int], language: str
    ) -> list[ShowRecord]:
        """Recherche des series par nom (annee de premiere diffusion optionnelle)."""
        ...

    @abstractmethod
    async def get_episode(
        self, show_id: str, season: int, episode: int, language: str
    ) -> Optional[EpisodeRecord]:
        """
        Recupere les details d'un episode.

        Args:
            show_id: ID TMDB de la serie
            season: Numero de saison
            episode: Numero d'episode
            language: Langue des resultats

        Returns:
            EpisodeRecord, ou None si l'episode n'existe pas
        """
        ...
