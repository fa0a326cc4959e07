"""Configuration file storage for autoloader."""

import json
import os
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Any

from .errors import (
    ConfigExistsError,
    ConfigNotFoundError,
    InvalidConfigError,
    InvalidSchemaVersionError,
)
from .models import AutoloaderConfig

SCHEMA_VERSION = 1

# Can be overridden via AUTOLOADER_CONFIG environment variable
CONFIG_FILE = "autoload.json"
CONFIG_ENV_VAR = "AUTOLOADER_CONFIG"

# Expected JSON types of the stored fields
_FIELD_TYPES: dict[str, type] = {
    "root_directory": str,
    "file_extension": str,
    "file_prefixes": list,
    "uses_snake_case": bool,
    "underscore_to_dash": bool,
    "uses_namespaces": bool,
    "strip_root_namespace": bool,
    "namespace_separator": str,
}


def default_config_path() -> Path:
    """Config path from the environment, or autoload.json in the working directory."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / CONFIG_FILE


class ConfigStore:
    """Manages reading and writing the autoloader configuration file."""

    def __init__(self, config_path: Path | None = None):
        """
        Initialize ConfigStore.

        Args:
            config_path: Override config file location (for testing).
        """
        self.config_path = Path(config_path) if config_path else default_config_path()

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> AutoloaderConfig:
        """
        Load configuration from disk.

        A relative root_directory is taken relative to the config file.

        Raises:
            ConfigNotFoundError: If config doesn't exist.
            InvalidSchemaVersionError: If schema version is unsupported.
            InvalidConfigError: If the file cannot be read, is not valid UTF-8
                JSON, or a field has the wrong type.
        """
        if not self.exists():
            raise ConfigNotFoundError(str(self.config_path))

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfigError(str(self.config_path), f"not valid JSON ({e})")
        except UnicodeDecodeError as e:
            raise InvalidConfigError(str(self.config_path), f"not valid UTF-8 ({e})")
        except OSError as e:
            raise InvalidConfigError(str(self.config_path), f"cannot be read ({e.strerror})")

        if not isinstance(data, dict):
            raise InvalidConfigError(str(self.config_path), "expected a JSON object")

        version = data.get("schema_version", 0)
        if version != SCHEMA_VERSION:
            raise InvalidSchemaVersionError(version, SCHEMA_VERSION)

        settings = data.get("autoloader", {})
        self._check_types(settings)

        config = AutoloaderConfig.from_dict(settings)
        root = Path(config.root_directory)
        if "root_directory" in settings and not root.is_absolute():
            root = self.config_path.parent / root
            config = replace(config, root_directory=str(root))
        return config

    def _check_types(self, settings: Any) -> None:
        if not isinstance(settings, dict):
            raise InvalidConfigError(str(self.config_path), "'autoloader' must be an object")
        for key, expected in _FIELD_TYPES.items():
            if key in settings and not isinstance(settings[key], expected):
                raise InvalidConfigError(
                    str(self.config_path),
                    f"'{key}' must be of type {expected.__name__}",
                )
        prefixes = settings.get("file_prefixes", [])
        if not all(isinstance(p, str) for p in prefixes):
            raise InvalidConfigError(
                str(self.config_path), "'file_prefixes' must contain only strings"
            )

    def save(self, config: AutoloaderConfig) -> None:
        """
        Write the resolver settings, replacing any previous file in one step.

        A resolver reading the file concurrently sees either the old or the
        new settings, never a partial document.
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        document = json.dumps(
            {"schema_version": SCHEMA_VERSION, "autoloader": config.to_dict()},
            indent=2,
        )

        fd, staging = tempfile.mkstemp(
            dir=self.config_path.parent, prefix=".autoload_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document + "\n")
            os.replace(staging, self.config_path)
        except BaseException:
            # staging may already be gone if os.replace got that far
            if os.path.exists(staging):
                os.unlink(staging)
            raise

    def init(self, config: AutoloaderConfig, force: bool = False) -> AutoloaderConfig:
        """
        Write a new configuration file.

        Args:
            config: The configuration to store.
            force: If True, overwrite existing config.

        Returns:
            The stored config.

        Raises:
            ConfigExistsError: If config exists and force=False.
        """
        if self.exists() and not force:
            raise ConfigExistsError(str(self.config_path))

        self.save(config)
        return config
