"""Configuration management"""
import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any
from feature2docx.core.exceptions import ConfigurationError
from feature2docx.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'server': {
        'host': '127.0.0.1',
        'port': 3000,
        'debug': False,
    },
    'upload': {
        'max_size_mb': 10,
        'field_name': 'featureFile',
    },
    'cache': {
        'ttl_seconds': 600,
    },
    'logging': {
        'level': 'INFO',
    },
}


class ConfigManager:
    """Manages configuration loading and merging"""

    def __init__(self, config_path: str, environment: str):
        self.config_path = Path(config_path)
        self.environment = environment
        self.config = {}

    def load_config(self) -> Dict[str, Any]:
        """Load and merge configuration files"""
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        # Load main config
        if self.config_path.exists():
            self.config = self._merge_configs(self.config, self._read_yaml(self.config_path))
        else:
            logger.warning(f"Config file not found, using defaults: {self.config_path}")

        # Load environment specific config
        env_config_path = self.config_path.parent / 'environments' / f'{self.environment}.yaml'
        if env_config_path.exists():
            env_config = self._read_yaml(env_config_path)

            # Handle overrides section specially
            if 'overrides' in env_config:
                overrides = env_config.pop('overrides')
                self._apply_overrides(self.config, overrides)

            self.config = self._merge_configs(self.config, env_config)
        else:
            logger.warning(f"Environment config not found: {env_config_path}")

        # Process environment variables
        self.config = self._process_env_vars(self.config)

        logger.info(f"Configuration loaded for environment: {self.environment}")
        return self.config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file {path}", {'error': str(e)}) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def _merge_configs(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_overrides(self, base: Dict, overrides: Dict) -> None:
        """Apply overrides from environment config to base config"""
        for section, values in overrides.items():
            if section in base and isinstance(values, dict) and isinstance(base[section], dict):
                base[section].update(values)
            else:
                base[section] = values

    def _process_env_vars(self, config: Any) -> Any:
        """Replace ${VAR} or ${VAR:default} with environment variables"""
        if isinstance(config, dict):
            return {k: self._process_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._process_env_vars(item) for item in config]
        elif isinstance(config, str) and config.startswith('${') and config.endswith('}'):
            var_name, has_default, default = config[2:-1].partition(':')
            return os.environ.get(var_name, default if has_default else config)
        else:
            return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)"""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value
