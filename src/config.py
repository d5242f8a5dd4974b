"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe ANIMPORT_,
et peut optionnellement être fournie via un fichier .env.

La clé API est optionnelle : un serveur sans authentification est accepté.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe ANIMPORT_.
    Exemple : ANIMPORT_API_URL=http://nas:6789

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMPORT_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Serveur
    api_url: str = Field(default="http://localhost:6789")
    api_key: Optional[str] = Field(default=None)
    request_timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=5, ge=1)

    # Cache des recherches
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Séries ajoutées pendant l'import (profil vide : premier profil du serveur)
    quality_profile: Optional[str] = Field(default=None)
    root_folder: str = Field(default="")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/animport.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Supprime le / final de l'URL du serveur."""
        return v.rstrip("/")

    @property
    def auth_enabled(self) -> bool:
        """Vérifie si une clé API est configurée."""
        return bool(self.api_key)
