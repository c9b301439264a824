"""
Configuration.

Two sources, kept apart:
- Per-host values (Pi-hole URL and API token) come from the environment
  or a .env file via pydantic-settings.
- Logging settings come from YAML files under config/settings/ in the
  project root.

Core code never reads either source directly. The CLI builds a
PiholeConfig once at startup and passes it into the API client.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT_MARKER = ".project_root"
CONFIG_DIR = Path("config") / "settings"


class Settings(BaseSettings):
    """Per-host settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # PIHOLE_STATS_* are the names used by earlier releases
    url: str = Field(
        default="",
        validation_alias=AliasChoices("PIHOLE_URL", "PIHOLE_STATS_URL"),
    )
    auth: str = Field(
        default="",
        validation_alias=AliasChoices("PIHOLE_AUTH", "PIHOLE_STATS_AUTH"),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class PiholeConfig:
    """Connection details for one Pi-hole instance."""

    base_url: str
    credential: str

    def __repr__(self) -> str:
        return f"PiholeConfig(base_url={self.base_url!r}, credential='***')"


def load_pihole_config(
    url: str | None = None,
    auth: str | None = None,
    settings: Settings | None = None,
) -> PiholeConfig:
    """
    Build the connection config, explicit values winning over settings.

    The URL is not validated here; a malformed one fails at request time.
    """
    settings = settings or get_settings()
    return PiholeConfig(
        base_url=url if url is not None else settings.url,
        credential=auth if auth is not None else settings.auth,
    )


def find_project_root() -> Path:
    """
    Locate the project root by walking up to the .project_root marker.

    Raises:
        FileNotFoundError: If no marker exists above this package
    """
    start = Path(__file__).resolve().parent
    for candidate in (start, *start.parents):
        if (candidate / PROJECT_ROOT_MARKER).exists():
            return candidate
    raise FileNotFoundError(
        f"Could not find {PROJECT_ROOT_MARKER} above {start}"
    )


def load_yaml_config(filename: str) -> dict[str, Any]:
    """
    Load one YAML file from config/settings/.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = find_project_root() / CONFIG_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with open(path) as f:
        return yaml.safe_load(f) or {}
