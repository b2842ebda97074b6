"""Configuration loading and validation for docmirror."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from docmirror.core.errors import ConfigError

DEFAULT_CONFIG_PATH = "docmirror.yaml"


class MirrorConfig(BaseModel):
    """Top-level docmirror configuration."""

    source: str = Field(default="docs", description="Source directory to mirror")
    site_dir: str = Field(default="site", description="Output directory")
    source_extension: str = Field(default="md", description="Extension that gets converted")
    output_extension: str = Field(default="html", description="Extension of converted files")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("source_extension", "output_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Accept "md" or ".md"; reject empty or dotted/pathlike extensions."""
        ext = v[1:] if v.startswith(".") else v
        if not ext or "." in ext or "/" in ext or "\\" in ext:
            raise ValueError(f"Invalid extension: {v!r}. Expected something like 'md'.")
        return ext

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v!r}")
        return level

    @property
    def source_suffix(self) -> str:
        """Suffix of files that get converted (".md")."""
        return f".{self.source_extension}"

    @property
    def output_suffix(self) -> str:
        """Suffix of converted files (".html")."""
        return f".{self.output_extension}"

    def with_overrides(self, **values: Any) -> MirrorConfig:
        """Return a copy with the given fields replaced, ignoring None values."""
        updates = {k: v for k, v in values.items() if v is not None}
        if not updates:
            return self
        try:
            return MirrorConfig(**{**self.model_dump(), **updates})
        except Exception as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: str | None = None) -> MirrorConfig:
    """Load and validate configuration from a YAML file.

    Without an explicit path, ``./docmirror.yaml`` is used if present and
    the built-in defaults otherwise.

    Environment variable overrides:
        DOCMIRROR_SOURCE: overrides source
        DOCMIRROR_SITE_DIR: overrides site_dir

    Args:
        path: Path to config file.

    Returns:
        Validated MirrorConfig.

    Raises:
        ConfigError: If an explicit config file is missing, or any config
            file is unreadable or invalid.
    """
    config_path = Path(path or DEFAULT_CONFIG_PATH).expanduser()

    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            raw = config_path.read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}") from e

        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError("Config file must contain a YAML mapping")
        data = loaded or {}
    elif path is not None:
        raise ConfigError(f"Config file not found: {config_path}")

    env_source = os.environ.get("DOCMIRROR_SOURCE")
    if env_source:
        data["source"] = env_source

    env_site_dir = os.environ.get("DOCMIRROR_SITE_DIR")
    if env_site_dir:
        data["site_dir"] = env_site_dir

    try:
        return MirrorConfig(**data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
