"""
Table de correspondance series -> ID TMDB.

Le fichier series.json, place dans le repertoire d'arrivee, associe un
titre de serie a un ID TMDB fixe pour les series que la recherche ne
sait pas departager :

    {"The Office (US)": {"tmdbid": "2316"}, "Doctor Who": {"tmdbid": "57243"}}

La table est chargee une fois par execution puis lue seulement.
"""

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from loguru import logger

from move2jelly.core.exceptions import ConfigError
from move2jelly.services.normalizer import simplify


class SeriesOverrideTable:
    """
    Table en lecture seule titre de serie -> ID TMDB.

    Les titres sont compares sous forme simplifiee (voir simplify),
    les entrees sans "tmdbid" sont ignorees.
    """

    def __init__(self, entries: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._ids: dict[str, str] = {}
        for title, value in (entries or {}).items():
            tmdb_id = value.get("tmdbid") if isinstance(value, Mapping) else None
            key = simplify(title)
            if tmdb_id and key not in self._ids:
                self._ids[key] = str(tmdb_id)

    @classmethod
    def load(cls, path: Path) -> "SeriesOverrideTable":
        """
        Charge la table depuis un fichier JSON.

        Un fichier absent donne une table vide.

        Raises:
            ConfigError: Si le fichier n'est pas un objet JSON valide.
        """
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f'Cannot read series overrides "{path}": {e}') from e
        if not isinstance(data, dict):
            raise ConfigError(f'Series overrides "{path}" must be a JSON object')
        table = cls(data)
        logger.debug("Table series.json chargee", path=str(path), entries=len(table))
        return table

    def lookup(self, title: str) -> Optional[str]:
        """Retourne l'ID TMDB associe au titre, ou None."""
        return self._ids.get(simplify(title))

    def __len__(self) -> int:
        return len(self._ids)
