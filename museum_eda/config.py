"""
Configuration Management

Loads and manages report configuration from YAML files and environment
variables, and turns the per-collection entries into CollectionSpecs.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
from dotenv import load_dotenv

from .models import CollectionSpec
from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_FILE = PROJECT_ROOT / 'config' / 'pipeline_config.yaml'


class Config:
    """
    Report configuration manager.

    Loads configuration from:
    1. YAML file (config/pipeline_config.yaml)
    2. Environment variables (.env)
    3. Command-line overrides

    Example:
        >>> config = Config()
        >>> print(config.get('data.raw_dir'))
        data/raw
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        env_path = PROJECT_ROOT / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        self.config_file = Path(config_file)
        self.config: Dict[str, Any] = {}
        if self.config_file.exists():
            self.config = load_yaml_config(self.config_file)
        else:
            logger.warning(f"Config file not found: {self.config_file}")

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        if os.getenv('MUSEUM_EDA_DATA_DIR'):
            self.set('data.raw_dir', os.getenv('MUSEUM_EDA_DATA_DIR'))

        if os.getenv('MUSEUM_EDA_OUTPUT_DIR'):
            self.set('data.summaries_dir', os.getenv('MUSEUM_EDA_OUTPUT_DIR'))

        if os.getenv('SAMPLE_SIZE'):
            self.set('loader.sample_size', int(os.getenv('SAMPLE_SIZE')))

        if os.getenv('LOG_LEVEL'):
            self.set('logging.level', os.getenv('LOG_LEVEL'))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'data.raw_dir')
            default: Default value if key not found

        Returns:
            Configuration value

        Example:
            >>> config.get('data.raw_dir')
            'data/raw'
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'data.raw_dir')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_stage_config(self, stage: str) -> Dict[str, Any]:
        """
        Get configuration for one part of the report.

        Args:
            stage: Block name ('data', 'loader', 'summarizer', 'report', 'logging')

        Returns:
            Configuration dictionary for that block (empty if absent)
        """
        return self.config.get(stage) or {}

    def collection_specs(self, names: Optional[Sequence[str]] = None) -> List[CollectionSpec]:
        """
        Validate the ``collections`` entries into CollectionSpecs.

        Relative dataset paths are resolved against ``data.raw_dir``.

        Args:
            names: Only return these collections, in config order (None = all)

        Returns:
            List of CollectionSpecs in config order

        Raises:
            ValueError: If an entry is malformed or a requested name is unknown
        """
        raw_dir = Path(self.get('data.raw_dir', 'data/raw'))
        specs = []

        for entry in self.config.get('collections') or []:
            spec = CollectionSpec(**entry)
            if not spec.path.is_absolute():
                spec.path = raw_dir / spec.path
            specs.append(spec)

        if names is not None:
            known = {spec.name for spec in specs}
            unknown = [name for name in names if name not in known]
            if unknown:
                raise ValueError(f"Unknown collections: {', '.join(unknown)}")
            specs = [spec for spec in specs if spec.name in names]

        return specs

    def to_dict(self) -> Dict[str, Any]:
        """
        Get the full configuration as a dictionary.

        Returns:
            Complete configuration dictionary
        """
        return self.config.copy()


# Global config instance
_global_config = None


def get_config(config_file: Optional[Union[str, Path]] = None) -> Config:
    """
    Get or create the global configuration instance.

    Args:
        config_file: Path to config file (only used on first call)

    Returns:
        Config instance
    """
    global _global_config

    if _global_config is None:
        _global_config = Config(config_file)

    return _global_config


def reset_config():
    """Drop the global configuration instance so the next get_config reloads."""
    global _global_config
    _global_config = None
