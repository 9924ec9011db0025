"""
Configuration Management

Loads engine configuration from a YAML file and environment variables.
Engine classes take plain dicts; this module is only used by entry points
such as the CLI to assemble those dicts.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from .exceptions import ConfigError
from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).resolve().parent / 'engine_config.yaml'

# (environment variable, dotted config key, converter)
ENV_OVERRIDES = (
    ('LOG_LEVEL', 'logging.level', str),
    ('MAX_SAMPLE_SIZE', 'sampler.max_sample_size', int),
    ('RECENCY_TAIL', 'sampler.recency_tail', int),
    ('FORECAST_PERIODS', 'forecaster.periods', int),
)


class Config:
    """
    Engine configuration manager.

    Loads configuration from:
    1. YAML file (engine_config.yaml shipped with the package, or a given path)
    2. Environment variables (.env in the working directory, then the process env)

    Example:
        >>> config = Config()
        >>> print(config.get('sampler.max_sample_size'))
        2000
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)

        Raises:
            ConfigError: If an explicitly given config file is missing or malformed
        """
        env_path = Path.cwd() / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        self.config: Dict[str, Any] = {}

        if config_file is not None:
            if not Path(config_file).exists():
                raise ConfigError(f"Config file not found: {config_file}")
            self.config = load_yaml_config(config_file)
            logger.info(f"Loaded config from: {config_file}")
        elif DEFAULT_CONFIG_FILE.exists():
            self.config = load_yaml_config(DEFAULT_CONFIG_FILE)
            logger.info(f"Loaded config from: {DEFAULT_CONFIG_FILE}")
        else:
            logger.debug("No config file found, using built-in defaults")

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        for env_name, key, convert in ENV_OVERRIDES:
            raw = os.getenv(env_name)
            if not raw:
                continue
            try:
                self.set(key, convert(raw))
            except ValueError as e:
                raise ConfigError(f"Invalid value for {env_name}: {raw!r}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'sampler.recency_tail')
            default: Default value if key not found

        Returns:
            Configuration value

        Example:
            >>> config.get('forecaster.periods')
            3
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'sampler.exact_fill')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            config = config.setdefault(k, {})

        config[keys[-1]] = value

    def get_stage_config(self, stage: str) -> Dict[str, Any]:
        """
        Get configuration for one component.

        Args:
            stage: Section name ('summarizer', 'sampler', 'forecaster', 'logging', ...)

        Returns:
            Section dictionary (empty if absent)
        """
        return dict(self.config.get(stage) or {})

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the full configuration as a dictionary.

        Returns:
            Complete configuration dictionary
        """
        return self.config.copy()


_global_config = None


def get_config(config_file: Optional[str] = None) -> Config:
    """
    Get or create the shared configuration instance for entry points.

    Args:
        config_file: Path to config file (only used on first call)

    Returns:
        Config instance
    """
    global _global_config

    if _global_config is None:
        _global_config = Config(config_file)

    return _global_config


def require_int(section: str, settings: Dict[str, Any], key: str, minimum: int) -> int:
    """
    Check that ``settings[key]`` is an integer no smaller than ``minimum``.

    Raises:
        ConfigError: If the value is missing, not an integer, or too small
    """
    value = settings.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigError(
            f"{section}.{key} must be an integer >= {minimum}, got {value!r}"
        )
    return value
