"""
SectorFS Configuration Loader

Configuration management for the file system:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Runtime configuration updates

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from sectorfs.exceptions import BootFailureError, ConfigValidationError


ALLOCATION_POLICIES = ("scan", "first_gap")
LOG_LEVELS = ("DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SystemConfig:
    """Identification settings."""
    name: str = "SectorFS"
    version: str = "1.0.0"
    boot_message: str = "[INIT] Initialized"


@dataclass
class StorageConfig:
    """Storage medium and index settings."""
    root_path: str = "."
    index_file: str = "index.txt"
    line_terminator: str = "\n"
    allocation_policy: str = "scan"
    check_medium: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = True


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    prompt: str = "> "
    history_size: int = 1000


@dataclass
class Config:
    """
    Main configuration container.

    Holds every configuration section; each section falls back to
    its defaults when absent from the loaded file.
    """
    system: SystemConfig = field(default_factory=SystemConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)


_SECTIONS = {
    'system': SystemConfig,
    'storage': StorageConfig,
    'logging': LoggingConfig,
    'shell': ShellConfig,
}


class ConfigLoader:
    """
    Configuration loader and manager.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('sectorfs.json')
        >>> print(config.storage.index_file)
        index.txt
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            BootFailureError: If the file cannot be loaded or parsed
            ConfigValidationError: If a value is invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise BootFailureError(
                f"Configuration file not found: {config_path}",
                stage="config"
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise BootFailureError(
                f"Invalid JSON in configuration file: {e}",
                stage="config"
            ) from e
        except OSError as e:
            raise BootFailureError(
                f"Cannot read configuration file: {e}",
                stage="config"
            ) from e

        if not isinstance(data, dict):
            raise BootFailureError(
                "Configuration root must be a JSON object",
                stage="config"
            )

        config = self._parse_config(data)
        self.validate(config)

        self._config = config
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into a Config object."""
        config = Config()

        for section_name, section_cls in _SECTIONS.items():
            section_data = data.get(section_name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Section '{section_name}' must be an object",
                    key=section_name
                )

            defaults = getattr(config, section_name)
            known = {f.name for f in fields(section_cls)}
            unknown = set(section_data) - known
            if unknown:
                raise ConfigValidationError(
                    f"Unknown keys in section '{section_name}': {', '.join(sorted(unknown))}",
                    key=section_name
                )

            values = {
                name: section_data.get(name, getattr(defaults, name))
                for name in known
            }
            setattr(config, section_name, section_cls(**values))

        return config

    @staticmethod
    def validate(config: Config) -> None:
        """
        Check values that the dataclass types do not constrain.

        Raises:
            ConfigValidationError: On the first invalid value
        """
        storage = config.storage

        if storage.allocation_policy not in ALLOCATION_POLICIES:
            raise ConfigValidationError(
                f"Unknown allocation policy: {storage.allocation_policy}",
                key="storage.allocation_policy"
            )

        if not storage.index_file or '/' in storage.index_file:
            raise ConfigValidationError(
                f"Index file must be a plain file name: {storage.index_file!r}",
                key="storage.index_file"
            )

        if storage.index_file.isdigit():
            # Would collide with a sector file
            raise ConfigValidationError(
                f"Index file name cannot be numeric: {storage.index_file}",
                key="storage.index_file"
            )

        if storage.line_terminator not in ("\n", "\r\n"):
            raise ConfigValidationError(
                f"Unsupported line terminator: {storage.line_terminator!r}",
                key="storage.line_terminator"
            )

        level = config.logging.level
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"Unknown log level: {config.logging.level}",
                key="logging.level"
            )

        if not isinstance(config.shell.history_size, int) or config.shell.history_size < 0:
            raise ConfigValidationError(
                "History size cannot be negative",
                key="shell.history_size"
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if not self._loaded:
            return Config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'storage.index_file')
            default: Default value if key not found
        """
        obj: Any = self.config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        The change is validated but never written back to disk.
        """
        parts = key.split('.')
        if not self._loaded:
            self._config = Config()
            self._loaded = True

        obj: Any = self._config
        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if len(parts) < 2 or not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self.validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reset(self) -> None:
        """Drop any loaded configuration and return to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            name: {f.name: getattr(getattr(self.config, name), f.name) for f in fields(section_cls)}
            for name, section_cls in _SECTIONS.items()
        }


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
