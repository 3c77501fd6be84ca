"""
Entites media resolues.

Un film ou un episode n'est resolu que lorsque le resolveur a reduit
les candidats TMDB a un seul. Les candidats restants d'une recherche
ambigue sont decrits par CandidateSummary pour l'affichage operateur.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ResolvedMovie:
    """
    Film identifie de maniere unique sur TMDB.

    Attributes:
        id: ID TMDB du film
        title: Titre localise depuis TMDB
        year: Annee de sortie
    """

    id: str
    title: str
    year: int


@dataclass(frozen=True)
class ResolvedEpisode:
    """
    Episode identifie de maniere unique sur TMDB.

    Attributes:
        show_id: ID TMDB de la serie
        show_name: Nom localise de la serie
        show_first_year: Annee de premiere diffusion de la serie
        episode_name: Titre de l'episode depuis TMDB
        episode_year: Annee de diffusion de l'episode (ou repli)
        season: Numero de saison
        episode: Numero d'episode
    """

    show_id: str
    show_name: str
    show_first_year: int
    episode_name: str
    episode_year: int
    season: int
    episode: int


@dataclass(frozen=True)
class CandidateSummary:
    """
    Resume d'un candidat TMDB non departage.

    Attributes:
        id: ID TMDB
        title: Titre du film ou nom de la serie
        year: Annee de sortie / premiere diffusion ("N/A" si inconnue)
        url: Page TMDB du candidat
        overview: Synopsis (peut etre absent)
    """

    id: str
    title: str
    year: str
    url: str
    overview: Optional[str] = None
