"""
Configuration management for the Mapbox client tools.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils
from lib.mapbox.constants import API_BASE_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "MAPBOX_TOKEN"

ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""


def substituteEnvVars(value: Any) -> Any:
    """Replace ``${VAR}`` placeholders in strings, nested dicts and lists.

    Placeholders for unset variables are left as is.
    """
    if isinstance(value, str):
        return ENV_PLACEHOLDER_RE.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {key: substituteEnvVars(item) for key, item in value.items()}
    if isinstance(value, list):
        return list(map(substituteEnvVars, value))
    return value


def findTomlFiles(directory: str) -> List[Path]:
    """List ``*.toml`` files under directory, recursively, in path order."""
    root = Path(directory)
    if not root.is_dir():
        logger.warning(f"Config directory {directory} is missing or not a directory, skipping")
        return []
    return sorted(path for path in root.rglob("*.toml") if path.is_file())


def mergeConfigs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base; tables merge, other values replace."""
    ret = dict(base)
    for key, value in override.items():
        current = ret.get(key)
        ret[key] = mergeConfigs(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return ret


class ConfigManager:
    """Loads TOML configuration for the Mapbox client tools.

    The main config file is optional: without it (and without config
    directories) the configuration is empty and the access token is taken
    from the MAPBOX_TOKEN environment variable.

    Example config.toml::

        [mapbox]
        token = "${MAPBOX_TOKEN}"
        base-url = "https://api.mapbox.com"
        timeout = 30

        [logging]
        level = "INFO"
        console = true
    """

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories.

        Raises:
            ConfigError: If an existing config file is not valid TOML.
        """
        self.config_path = configPath
        self.config_dirs = configDirs or []
        if Path(dotEnvFile).is_file():
            utils.load_dotenv(path=dotEnvFile)
        self.config = substituteEnvVars(self._loadConfig())

    def _loadTomlFile(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "rb") as f:
                return tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            logger.error(f"Failed to load config file {path}: {e}")
            raise ConfigError(f"Failed to load config file {path}: {e}") from e

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories."""
        config: Dict[str, Any] = {}

        config_file = Path(self.config_path)
        if config_file.exists():
            config = self._loadTomlFile(config_file)
            logger.info(f"Loaded main config from {self.config_path}")
        else:
            logger.debug(f"Configuration file {self.config_path} not found, using defaults")

        for configDir in self.config_dirs:
            for tomlFile in findTomlFiles(configDir):
                config = mergeConfigs(config, self._loadTomlFile(tomlFile))
                logger.info(f"Merged config from {tomlFile}")

        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getMapboxConfig(self) -> Dict[str, Any]:
        """
        Get Mapbox client configuration

        Returns:
            Dict with keys token, base-url and timeout, defaults filled in
        """
        ret: Dict[str, Any] = {
            "base-url": API_BASE_URL,
            "timeout": DEFAULT_TIMEOUT,
        }
        ret.update(self.get("mapbox", {}))
        return ret

    def getMapboxToken(self) -> str:
        """Get Mapbox access token from configuration, falling back to MAPBOX_TOKEN.

        Returns an empty string when no token is configured; MapboxClient rejects it.
        """
        token = self.get("mapbox", {}).get("token")
        token = "" if token is None else str(token)
        # Unresolved placeholder means the variable is not set
        if not token or token.startswith("${"):
            token = os.getenv(TOKEN_ENV_VAR, "")
        return token
