"""
Constantes globales pour move2jelly.

Ce module contient les constantes utilisees dans l'application:
- Extensions video et langue par defaut
- Suffixes des fichiers annexes (sous-titres, .nfo, trickplay, illustrations)
- URLs des fiches TMDB
"""

# Extensions video traitees par defaut (sans point)
DEFAULT_EXTENSIONS = ("mkv", "avi", "mp4", "mov")

# Langue des requetes TMDB si LANG n'est pas defini
DEFAULT_LANGUAGE = "en-US"

# Table de correspondance series -> ID TMDB, dans le repertoire d'arrivee
SERIES_OVERRIDE_FILENAME = "series.json"

# Extensions de sous-titres reconnues comme annexes
SUBTITLE_EXTENSIONS = frozenset({
    "srt",
    "ass",
    "ssa",
    "sub",
    "idx",
    "vtt",
    "sup",
})

# Segments autorises entre le nom de base et l'extension d'un sous-titre
# (ex: "Film.en.srt", "Film.fr.forced.srt", "Film.pt-BR.srt")
SUBTITLE_FLAGS = frozenset({"forced", "sdh", "cc", "hi", "default"})

# Annexes a suffixe fixe (metadonnees et illustrations Jellyfin)
METADATA_SUFFIXES = (
    ".nfo",
    ".trickplay",
    "-backdrop.jpg",
    "-backdrop.webp",
    "-poster.jpg",
    "-poster.webp",
    "-logo.jpg",
    "-logo.png",
    "-logo.webp",
    "-landscape.jpg",
    "-landscape.webp",
)

# Pages publiques TMDB (affichage des candidats ambigus)
TMDB_MOVIE_URL = "https://www.themoviedb.org/movie/{id}"
TMDB_TV_URL = "https://www.themoviedb.org/tv/{id}"

# Longueur de l'extrait de synopsis affiche pour un candidat
OVERVIEW_SNIPPET_LENGTH = 120
