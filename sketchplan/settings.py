from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from sketchplan.config import RecognitionConfig
from sketchplan.exceptions import ConfigurationError

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        if value is None:
            return "INFO"
        level = str(value).upper().strip()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level


class Settings(BaseModel):
    recognition: RecognitionConfig = Field(default_factory=RecognitionConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.
        
        Args:
            path: Optional path to configuration file. If not provided, uses
                SKETCHPLAN_CONFIG environment variable or defaults to config/default.yaml.
        
        Returns:
            Settings instance with loaded configuration.
        
        Raises:
            ConfigurationError: If the file does not exist or its content is invalid.
        """
        config_path = path or Path(os.getenv("SKETCHPLAN_CONFIG", "config/default.yaml"))
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)},
            )
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Malformed YAML: {exc}", {"path": str(config_path)}) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError("Configuration root must be a mapping", {"path": str(config_path)})
        try:
            return cls(**payload)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "LoggingSettings",
    "get_settings",
]
