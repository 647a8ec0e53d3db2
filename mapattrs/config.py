"""Configuration management for mapattrs.

Config sections:
- resolver: where the default attribute set comes from
- data: default map data file for CLI commands
- cli: output mode and log level

Config resolution order (highest priority first):
1. Programmatic (MapAttrsConfig constructed in code, configure())
2. Environment variables (MAPATTRS_DEFAULTS_FILE, MAPATTRS_DATA_PATH, ...)
3. Config file (~/.config/mapattrs/config.json, managed by `mapattrs config`)
4. Hardcoded defaults

Library code never reads the global config; it is used by the CLI to build
resolvers and registries.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from .core.models import AttributeSet
from .resolving.defaults import DEFAULT_ATTRIBUTES, load_default_attributes


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "mapattrs"
CONFIG_FILE = CONFIG_DIR / "config.json"

CLI_MODES = ("human", "agent")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class ResolverConfig:
    """Resolver configuration.

    - defaults_file: YAML file holding a complete default attribute set.
      Empty = use the built-in defaults.
    """

    defaults_file: str = ""


@dataclass
class DataConfig:
    """Map data configuration."""

    path: str = ""  # empty = data file must be passed on the command line


@dataclass
class CliConfig:
    """CLI behaviour."""

    mode: str = "human"  # "human" or "agent" (agent = JSON output)
    log_level: str = "WARNING"


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class MapAttrsConfig:
    """Top-level mapattrs configuration.

    Examples:
        # Package use, no files needed
        config = MapAttrsConfig(resolver=ResolverConfig(defaults_file="defaults.yaml"))

        # CLI use, loads from ~/.config/mapattrs/config.json
        config = MapAttrsConfig.load()
    """

    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    data: DataConfig = field(default_factory=DataConfig)
    cli: CliConfig = field(default_factory=CliConfig)

    @classmethod
    def load(cls) -> "MapAttrsConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("MAPATTRS_DEFAULTS_FILE"):
            config.resolver.defaults_file = val
        if val := os.environ.get("MAPATTRS_DATA_PATH"):
            config.data.path = val
        if val := os.environ.get("MAPATTRS_CLI_MODE"):
            if val in CLI_MODES:
                config.cli.mode = val
            else:
                logger.warning("Invalid MAPATTRS_CLI_MODE=%r, ignoring", val)
        if val := os.environ.get("MAPATTRS_LOG_LEVEL"):
            if val.upper() in LOG_LEVELS:
                config.cli.log_level = val.upper()
            else:
                logger.warning("Invalid MAPATTRS_LOG_LEVEL=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/mapattrs/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "resolver": asdict(self.resolver),
            "data": asdict(self.data),
            "cli": asdict(self.cli),
        }

    def resolve_default_attributes(self) -> AttributeSet:
        """Return the configured default attribute set.

        Raises:
            DefaultAttributesError: If the configured file leaves fields unset.
            MapDataError: If the configured file cannot be loaded.
        """
        if not self.resolver.defaults_file:
            return DEFAULT_ATTRIBUTES
        return load_default_attributes(self.resolver.defaults_file)


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: MapAttrsConfig, data: dict) -> None:
    """Apply a dict of values onto a MapAttrsConfig, ignoring unknown keys."""
    for section_name in ("resolver", "data", "cli"):
        section_data = data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        section = getattr(config, section_name)
        for k, v in section_data.items():
            if hasattr(section, k):
                setattr(section, k, v)


# =============================================================================
# Global config singleton
# =============================================================================

_config: MapAttrsConfig | None = None


def get_config() -> MapAttrsConfig:
    """Get the global MapAttrsConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    """
    global _config
    if _config is None:
        _config = MapAttrsConfig.load()
    return _config


def configure(config: MapAttrsConfig) -> None:
    """Set the global MapAttrsConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
