"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe
MOVE2JELLY_, et peut optionnellement etre fournie via un fichier .env.

Deux variables historiques sont aussi lues sans prefixe :
- TMDB_API_ACCESS_TOKEN : jeton d'acces TMDB
- LANG : locale systeme, convertie en code de langue TMDB (fr_FR.UTF-8 -> fr-FR)
"""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from move2jelly.utils.constants import DEFAULT_EXTENSIONS, DEFAULT_LANGUAGE

# Locales sans langue exploitable
_NEUTRAL_LOCALES = {"C", "POSIX"}


def locale_to_language(value: Optional[str]) -> str:
    """
    Convertit une locale systeme en code de langue TMDB.

    Exemples : "fr_FR.UTF-8" -> "fr-FR", "de_DE" -> "de-DE", "" -> "en-US".
    """
    if not value:
        return DEFAULT_LANGUAGE
    language = value.split(".")[0].split("@")[0].replace("_", "-", 1)
    if not language or language in _NEUTRAL_LOCALES:
        return DEFAULT_LANGUAGE
    return language


def parse_extensions(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Decoupe une liste d'extensions "mkv,avi" en tuple normalise (sans point, minuscules)."""
    items = value.split(",") if isinstance(value, str) else value
    extensions = tuple(
        item.strip().lstrip(".").lower() for item in items if item.strip().lstrip(".")
    )
    return extensions or DEFAULT_EXTENSIONS


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe MOVE2JELLY_.
    Exemple : MOVE2JELLY_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVE2JELLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        validate_default=True,
    )

    # TMDB (obligatoire pour la commande run, verifie au lancement)
    tmdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("MOVE2JELLY_TMDB_API_KEY", "TMDB_API_ACCESS_TOKEN"),
    )
    language: str = Field(
        default=DEFAULT_LANGUAGE,
        validation_alias=AliasChoices("MOVE2JELLY_LANGUAGE", "LANG"),
    )

    # Traitement
    extensions_csv: str = Field(
        default=",".join(DEFAULT_EXTENSIONS),
        validation_alias="MOVE2JELLY_EXTENSIONS",
    )

    # Cache des reponses TMDB
    cache_dir: Path = Field(default=Path("~/.cache/move2jelly"))
    cache_enabled: bool = Field(default=True)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="WARNING")
    log_file: Path = Field(default=Path("~/.local/state/move2jelly/move2jelly.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5, ge=1)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("language", mode="before")
    @classmethod
    def normalize_language(cls, v: Optional[str]) -> str:
        """Accepte une locale systeme ou un code TMDB."""
        return locale_to_language(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        """Normalise le niveau de log en majuscules."""
        return str(v).upper()

    @property
    def extensions(self) -> tuple[str, ...]:
        """Extensions video par defaut, sans point et en minuscules."""
        return parse_extensions(self.extensions_csv)

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si le jeton TMDB est configure."""
        return bool(self.tmdb_api_key)
