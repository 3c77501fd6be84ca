"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), objets valeur
et la hierarchie d'exceptions. Cette couche n'a AUCUNE dependance vers
l'infrastructure (adapters, clients HTTP, console).

Sous-packages :
- entities/ : Entites resolues (ResolvedMovie, ResolvedEpisode, ParsedVideo)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (requetes de parsing, configuration d'execution)
"""
