"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe ANIMETA_,
et peut optionnellement etre fournie via un fichier .env.

Le client AniDB est optionnel : sans lui, la source AniDB ne contribue pas.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env a la racine du projet (parent de animeta/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe ANIMETA_.
    Exemple : ANIMETA_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMETA_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Cache des documents telecharges
    cache_dir: Path = Field(default=Path("~/.cache/animeta"))

    # Client AniDB (OPTIONNEL - source AniDB inactive si non defini)
    anidb_client: Optional[str] = Field(default=None)
    anidb_client_version: int = Field(default=1, ge=1)

    # Transport
    http_timeout: float = Field(default=30.0, gt=0)
    anidb_min_interval: float = Field(default=2.0, ge=2.0)
    anilist_min_interval: float = Field(default=0.7, ge=0)
    jikan_min_interval: float = Field(default=1.0, ge=0)

    # Reconciliation
    title_preference: Literal["romaji", "english", "native"] = Field(default="romaji")
    match_score_threshold: int = Field(default=85, ge=0, le=100)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/animeta.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def anidb_enabled(self) -> bool:
        """Verifie si un client AniDB est configure."""
        return bool(self.anidb_client)
