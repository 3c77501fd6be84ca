"""
Entites metier representant les concepts du domaine.

Exports:
- ResolvedMovie: Film identifie sur TMDB
- ResolvedEpisode: Episode identifie sur TMDB
- CandidateSummary: Candidat non departage d'une recherche ambigue
- ParsedVideo: Destination calculee pour un fichier video
- ItemOutcome / ItemStatus: Resultat du traitement d'un fichier
"""

from move2jelly.core.entities.media import CandidateSummary, ResolvedEpisode, ResolvedMovie
from move2jelly.core.entities.video import ItemOutcome, ItemStatus, ParsedVideo

__all__ = [
    "ResolvedMovie",
    "ResolvedEpisode",
    "CandidateSummary",
    "ParsedVideo",
    "ItemOutcome",
    "ItemStatus",
]
