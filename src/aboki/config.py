"""Configuration handling for the aboki client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from aboki.fetcher import DEFAULT_BASE_URL


class ConfigError(ValueError):
    """Raised when configuration files are invalid or incomplete."""


@dataclass
class SourceSettings:
    """Where and how rate pages are fetched."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    max_retries: int = 3


@dataclass
class OutputSettings:
    """Output configuration section."""

    format: str = "table"


@dataclass
class LoggingSettings:
    """Logging configuration section."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Container for all runtime settings."""

    source: SourceSettings = field(default_factory=SourceSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name} section must be a mapping.")
    return section


def load_settings(path: str | None = None) -> Settings:
    """Load application settings from a YAML file, or defaults when no path is given."""
    if path is None:
        return Settings()

    raw = yaml.safe_load(_read_file(path)) or {}
    if not isinstance(raw, dict):
        raise ConfigError("Settings YAML must be a mapping/object.")

    source_section = _section(raw, "source")
    output_section = _section(raw, "output")
    logging_section = _section(raw, "logging")

    try:
        source_settings = SourceSettings(
            base_url=str(source_section.get("base_url", SourceSettings().base_url)),
            timeout=float(source_section.get("timeout", SourceSettings().timeout)),
            max_retries=int(source_section.get("max_retries", SourceSettings().max_retries)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid source settings: {exc}") from exc

    output_settings = OutputSettings(
        format=str(output_section.get("format", OutputSettings().format)).lower(),
    )
    logging_settings = LoggingSettings(
        level=str(logging_section.get("level", LoggingSettings().level)).upper(),
    )

    return Settings(source=source_settings, output=output_settings, logging=logging_settings)


def _read_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {path}") from exc
