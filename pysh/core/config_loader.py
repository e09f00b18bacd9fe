"""
pysh Configuration Loader

Configuration management for the shell:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Runtime configuration updates (command-line overrides)

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import threading

from pysh.exceptions import ConfigError
from pysh.logger import LogLevel


@dataclass
class ShellConfig:
    """Shell loop settings."""
    prompt_template: str = "{cwd} [{user}] $ "
    exit_message: str = "exiting gracefully..."
    exit_on_eof: bool = False
    exit_signal_capacity: int = 2


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = False


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the shell.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """
        Check the settings for consistency.

        Raises:
            ConfigError: If any setting is out of range
        """
        if self.shell.exit_signal_capacity < 2:
            raise ConfigError(
                "shell.exit_signal_capacity must be at least 2",
                context={'value': self.shell.exit_signal_capacity}
            )

        if str(self.logging.level).upper() not in LogLevel.__members__:
            raise ConfigError(
                f"Unknown log level: {self.logging.level}",
                context={'valid': ", ".join(LogLevel.__members__)}
            )

        try:
            self.shell.prompt_template.format(cwd="", user="")
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError(
                f"Invalid prompt template: {e}",
                context={'template': self.shell.prompt_template}
            )

    @property
    def log_level(self) -> int:
        return LogLevel[str(self.logging.level).upper()]


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating
    settings, and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('pysh.json')
        >>> print(config.shell.exit_message)
        exiting gracefully...
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
            ConfigError: If the file cannot be loaded, parsed or validated
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file: {e}")

        if not isinstance(data, dict):
            raise ConfigError("Configuration file must contain a JSON object")

        config = self._parse_config(data)
        config.validate()

        self._config = config
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        if 'shell' in data:
            shell_data = self._section(data, 'shell')
            config.shell = ShellConfig(
                prompt_template=self._value(shell_data, 'shell.prompt_template',
                                            config.shell.prompt_template, str),
                exit_message=self._value(shell_data, 'shell.exit_message',
                                         config.shell.exit_message, str),
                exit_on_eof=self._value(shell_data, 'shell.exit_on_eof',
                                        config.shell.exit_on_eof, bool),
                exit_signal_capacity=self._value(shell_data, 'shell.exit_signal_capacity',
                                                 config.shell.exit_signal_capacity, int),
            )

        if 'logging' in data:
            log_data = self._section(data, 'logging')
            config.logging = LoggingConfig(
                level=self._value(log_data, 'logging.level',
                                  config.logging.level, str),
                log_file=self._value(log_data, 'logging.log_file',
                                     config.logging.log_file, str, nullable=True),
                console_output=self._value(log_data, 'logging.console_output',
                                           config.logging.console_output, bool),
            )

        return config

    @staticmethod
    def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
        section = data[name]
        if not isinstance(section, dict):
            raise ConfigError(
                f"Configuration section '{name}' must be a JSON object",
                context={'found': type(section).__name__}
            )
        return section

    @staticmethod
    def _value(section: dict[str, Any], key: str, default: Any,
               expected: type, nullable: bool = False) -> Any:
        """Fetch one setting, rejecting values of the wrong JSON type."""
        value = section.get(key.rsplit('.', 1)[-1], default)
        if value is None and nullable:
            return value
        # bool is an int subclass; true/false is not a number here
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(
                f"{key} must be of type {expected.__name__}",
                context={'found': type(value).__name__}
            )
        return value

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'shell.exit_message')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Args:
            key: Dot-notation key (e.g., 'logging.level')
            value: Value to set

        Note:
            Changes are not persisted to disk.
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigError(f"Invalid configuration key: {key}")

        final_key = parts[-1]
        if hasattr(obj, final_key):
            setattr(obj, final_key, value)
        else:
            raise ConfigError(f"Invalid configuration key: {key}")

    def reset(self) -> None:
        """Drop any loaded settings and return to the defaults."""
        self._config = Config()
        self._loaded = False


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
