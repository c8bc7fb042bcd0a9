"""Configuration management for orcid-profile.

Loads settings from YAML configuration file with sensible defaults.
Supports environment variable overrides for deployment-specific settings.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from orcid_profile import VALID_API_VERSIONS, ApiVersion

# Module logger
logger = logging.getLogger("orcid_profile.config")

ORCID_HOSTNAME = "orcid.org"

VALID_ENVIRONMENTS = ["production", "sandbox"]

# "api" is the member API (read/write), "pub" the public read-only API
VALID_LEVELS = ["api", "pub"]

# Default configuration values
DEFAULT_CONFIG = {
    "api": {
        "environment": "production",
        "level": "api",
        "version": ApiVersion.V2_0.value,
        "timeout": 60,
        "write_timeout": 60,
    },
}


class Config:
    """Configuration manager for orcid-profile."""

    def __init__(self, config_file: Path | None = None):
        """Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if config_file and config_file.exists():
            self._load_from_file(config_file)

        # Apply environment variable overrides
        self._apply_env_overrides()

    def _load_from_file(self, config_file: Path) -> None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, 'r') as f:
                user_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_file}: {e}")
            return

        if user_config is not None:
            self._merge_config(user_config)

    def _merge_config(self, user_config: dict) -> None:
        """Merge user configuration with defaults.

        Args:
            user_config: User-provided configuration dict
        """
        if not isinstance(user_config, dict):
            logger.warning(f"Ignoring config file: expected a mapping, got {type(user_config).__name__}")
            return

        for section, values in user_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

        self._validate_config()

    def _validate_config(self) -> None:
        """Reset values ORCID would not understand to their defaults."""
        api = self._config.get("api")
        if not isinstance(api, dict):
            logger.warning(f"Ignoring api section: expected a mapping, got {type(api).__name__}")
            self._config["api"] = copy.deepcopy(DEFAULT_CONFIG["api"])
            return

        if api.get("environment") not in VALID_ENVIRONMENTS:
            logger.warning(f"Rejecting unknown api.environment: {api.get('environment')}")
            api["environment"] = DEFAULT_CONFIG["api"]["environment"]

        if api.get("level") not in VALID_LEVELS:
            logger.warning(f"Rejecting unknown api.level: {api.get('level')}")
            api["level"] = DEFAULT_CONFIG["api"]["level"]

        # YAML reads an unquoted 2.0 as a float
        version = str(api.get("version"))
        if version not in VALID_API_VERSIONS:
            logger.warning(f"Rejecting unsupported api.version: {version}")
            version = DEFAULT_CONFIG["api"]["version"]
        api["version"] = version

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides.

        Supports:
        - ORCID_ENVIRONMENT
        - ORCID_API_LEVEL
        - ORCID_API_VERSION
        - ORCID_API_TIMEOUT
        """
        if environment := os.getenv("ORCID_ENVIRONMENT"):
            if environment in VALID_ENVIRONMENTS:
                self._config["api"]["environment"] = environment

        if level := os.getenv("ORCID_API_LEVEL"):
            if level in VALID_LEVELS:
                self._config["api"]["level"] = level

        if version := os.getenv("ORCID_API_VERSION"):
            if version in VALID_API_VERSIONS:
                self._config["api"]["version"] = version

        if timeout := os.getenv("ORCID_API_TIMEOUT"):
            try:
                self._config["api"]["timeout"] = int(timeout)
            except ValueError:
                pass

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            section: Configuration section (e.g., 'api')
            key: Configuration key within section
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(section, {}).get(key, default)

    @property
    def environment(self) -> str:
        """Get ORCID environment ("production" or "sandbox")."""
        return self.get("api", "environment")

    @property
    def api_level(self) -> str:
        """Get API level ("api" for member, "pub" for public)."""
        return self.get("api", "level")

    @property
    def api_version(self) -> str:
        """Get default API version."""
        return self.get("api", "version")

    @property
    def api_timeout(self) -> int:
        """Get profile read timeout in seconds."""
        return self.get("api", "timeout")

    @property
    def write_timeout(self) -> int:
        """Get profile write timeout in seconds."""
        return self.get("api", "write_timeout")

    @property
    def api_host(self) -> str:
        """Get API hostname, e.g. api.sandbox.orcid.org."""
        parts = [self.api_level]
        if self.environment == "sandbox":
            parts.append("sandbox")
        parts.append(ORCID_HOSTNAME)
        return ".".join(parts)


# Global default config instance
_default_config = None


def get_config(config_file: Path | None = None) -> Config:
    """Get configuration instance.

    Args:
        config_file: Optional path to config file

    Returns:
        Config instance
    """
    global _default_config

    if config_file:
        _default_config = Config(config_file)
        return _default_config

    if _default_config is None:
        # Try to load from default locations
        default_paths = [
            Path.cwd() / ".orcid-profile.yaml",
            Path.home() / ".orcid-profile.yaml",
            Path("/etc/orcid-profile/config.yaml"),
        ]

        for path in default_paths:
            if path.exists():
                _default_config = Config(path)
                break

        if _default_config is None:
            _default_config = Config()

    return _default_config
