"""
Couche application (cas d'utilisation).

Les services orchestrent la logique du domaine :
- normalizer : nettoyage des noms de fichiers
- parser : extraction des requetes film/episode
- resolver : departage des candidats TMDB
- renamer : chemins canoniques Jellyfin
- transferer / placement : placement des fichiers et de leurs annexes

Les services dependent des ports (interfaces) de core/, jamais des
implementations concretes de adapters/.
"""
