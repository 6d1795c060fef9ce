# fogmap/config/config.py
"""Configuration manager with YAML override support."""

import copy
import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from . import defaults

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager with YAML override support."""

    def __init__(self, config_file: Optional[Path] = None):
        self.settings = self.load_defaults()

        if config_file is not None:
            # An explicit file is always honoured, also under test
            self._load_yaml_config(Path(config_file))
        elif self._is_test_mode():
            logger.debug("Test mode detected - ignoring config.yml discovery")
        else:
            config_file = self._find_config_file()
            if config_file is not None:
                try:
                    self._load_yaml_config(config_file)
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Config file loading failed: {e} - using defaults")
            else:
                logger.debug("No config.yml found - using defaults only")

    def _find_config_file(self) -> Optional[Path]:
        """Find config.yml with multiple fallback locations."""
        project_root = Path(__file__).parent.parent.parent

        potential_locations = [
            project_root / 'config.yml',
            project_root / 'config' / 'config.yml',
            Path.cwd() / 'config.yml',
            Path.home() / '.fogmap' / 'config.yml',
        ]

        for location in potential_locations:
            if location.exists() and location.is_file():
                return location

        return None

    def _is_test_mode(self) -> bool:
        """Detect if we're running under pytest or with test mode forced."""
        return (
            os.environ.get('FORCE_TEST_MODE', 'false').lower() == 'true' or
            os.environ.get('PYTEST_CURRENT_TEST') is not None
        )

    def load_defaults(self) -> Dict[str, Any]:
        """Load default configuration settings."""
        return {
            'fog_grid': copy.deepcopy(defaults.FOG_GRID),
            'level_of_detail': copy.deepcopy(defaults.LEVEL_OF_DETAIL),
            'regions': copy.deepcopy(defaults.REGIONS),
            'logging': defaults.LOGGING.copy(),
            'paths': defaults.PATHS.copy(),
        }

    def _load_yaml_config(self, config_file: Path):
        """Load and merge configuration from a YAML file."""
        with open(config_file, 'r') as file:
            yaml_config = yaml.safe_load(file)
            if yaml_config:
                self._deep_merge(self.settings, yaml_config)
        logger.info(f"Loaded configuration from {config_file}")

    def _deep_merge(self, base: dict, override: dict):
        """Deep merge override into base dictionary."""
        for key, value in override.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self.settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any):
        """Set configuration value using dot notation."""
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value

    @property
    def fog_grid(self) -> Dict[str, Any]:
        return self.settings['fog_grid']

    @property
    def level_of_detail(self) -> Dict[str, Any]:
        return self.settings['level_of_detail']

    @property
    def regions(self) -> Dict[str, Any]:
        return self.settings['regions']

    @property
    def logging(self) -> Dict[str, Any]:
        return self.settings['logging']

    @property
    def paths(self) -> Dict[str, Any]:
        return self.settings['paths']


# Global configuration instance
config = Config()
