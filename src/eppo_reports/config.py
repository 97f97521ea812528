from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_BASE_URL = "https://eppo.cloud/api/v1"


class ConfigError(ValueError):
    """Missing or invalid configuration value."""


class PathsConfig(BaseModel):
    output_dir: Path = Field(default=Path("."))
    logs_dir: Path = Field(default=Path("logs"))


class EppoConfig(BaseModel):
    # Read from EPPO_API_KEY; keep it out of committed YAML files.
    api_key: Optional[str] = Field(default=None)

    base_url: str = Field(default=DEFAULT_BASE_URL)

    timeout_s: float = Field(default=30.0, gt=0)


class Settings(BaseModel):
    """Application settings.

    Credentials:
    - eppo.api_key is required for every command (EPPO_API_KEY).
    - team_id is only required by the team report (TEAM_ID).
    """

    eppo: EppoConfig = Field(default_factory=EppoConfig)

    team_id: Optional[str] = Field(default=None)

    paths: PathsConfig = Field(default_factory=PathsConfig)

    @field_validator("team_id", mode="before")
    @classmethod
    def _team_id_as_text(cls, value: Any) -> Any:
        # YAML turns `team_id: 123` into an int
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from .env + optional YAML.

    Precedence:
      1) defaults
      2) .env / process environment (EPPO_API_KEY, EPPO_BASE_URL, TEAM_ID, EPPO_TIMEOUT_S)
      3) YAML file (if provided)

    Only the local `.env` is loaded so that unrelated files from parent
    directories never leak into a run. Values already present in the process
    environment win over `.env`.
    """

    load_dotenv(dotenv_path=Path(".env"), override=False)

    merged: Dict[str, Any] = Settings().model_dump(mode="python")

    env_api_key = _getenv("EPPO_API_KEY")
    env_base_url = _getenv("EPPO_BASE_URL")
    env_timeout = _getenv("EPPO_TIMEOUT_S")
    env_team_id = _getenv("TEAM_ID")

    if env_api_key is not None:
        merged["eppo"]["api_key"] = env_api_key
    if env_base_url is not None:
        merged["eppo"]["base_url"] = env_base_url
    if env_timeout is not None:
        merged["eppo"]["timeout_s"] = env_timeout
    if env_team_id is not None:
        merged["team_id"] = env_team_id

    if config_path is not None:
        cfg = _load_yaml(config_path)
        merged = _deep_merge(merged, cfg)

    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def require_api_key(settings: Settings) -> str:
    api_key = (settings.eppo.api_key or "").strip()
    if not api_key:
        raise ConfigError("EPPO_API_KEY environment variable is required")
    return api_key


def require_team_id(settings: Settings) -> str:
    team_id = (settings.team_id or "").strip()
    if not team_id:
        raise ConfigError("TEAM_ID environment variable is required")
    return team_id


def _getenv(key: str) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(str(path))
    raw = path.read_text(encoding="utf-8")
    parsed = yaml.safe_load(raw) or {}
    if not isinstance(parsed, dict):
        raise ConfigError("YAML config must be a mapping/object at the top level")
    return parsed


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if (
            k in out
            and isinstance(out[k], dict)
            and isinstance(v, dict)
        ):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out
