"""
move2jelly - Rangement de fichiers video dans une bibliotheque Jellyfin.

Ce package identifie les films et episodes deposes dans un repertoire
d'arrivee a partir de leur nom de fichier, les retrouve sur TMDB,
puis les deplace (ou les lie) sous un nom canonique.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (normalisation, parsing, resolution, placement)
- adapters/ : Couche infrastructure (CLI, client TMDB, systeme de fichiers)
"""

__version__ = "0.1.0"
