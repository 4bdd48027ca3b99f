import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigError

DEFAULT_BASE_URL = "https://connect.mailerlite.com/api"
DEFAULT_USER_AGENT = "Mailerlite-Client-Python-v1"
ENV_PREFIX = "MAILERLITE_"

class Config:
    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = {}
        self._load_defaults()
        self._load_environment_variables()
        if config_path:
            self.load(config_path)
        self.validate(self._config)

    def _load_defaults(self) -> None:
        """Load default configuration values"""
        self._config = {
            "api": {
                "base_url": DEFAULT_BASE_URL,
                "key": "",
                "user_agent": DEFAULT_USER_AGENT,
                "timeout": 30.0
            },
            "logging": {
                "level": "INFO",
                "file": None,
                "console_output": False
            }
        }

    def load(self, path: Path) -> None:
        """Load configuration from JSON file"""
        try:
            with open(path, 'r') as f:
                file_config = json.load(f)
                self.update(file_config)
        except Exception as e:
            raise ConfigError(f"Failed to load config from {path}: {str(e)}")

    def save(self, path: Path) -> None:
        """Save configuration to JSON file"""
        with open(path, 'w') as f:
            json.dump(self._config, f, indent=2)

    def _load_environment_variables(self) -> None:
        """Load configuration from environment variables"""
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                # MAILERLITE_API_BASE_URL -> api.base_url
                parts = key[len(ENV_PREFIX):].lower().split('_')

                if len(parts) > 2:
                    config_key = f"{parts[0]}.{'_'.join(parts[1:])}"
                else:
                    config_key = '.'.join(parts)

                # API keys stay strings even when they look numeric
                if config_key == "api.key":
                    self.set(config_key, value)
                else:
                    self.set(config_key, self._convert_value(value))

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot notation key"""
        try:
            value = self._config
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dot notation key"""
        keys = key.split('.')
        d = self._config
        for k in keys[:-1]:
            if k not in d:
                d[k] = {}
            d = d[k]
        d[keys[-1]] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration with dictionary"""
        def update_recursive(d1, d2):
            for k, v in d2.items():
                if isinstance(v, dict):
                    if k not in d1:
                        d1[k] = {}
                    update_recursive(d1[k], v)
                else:
                    d1[k] = v
            return d1

        update_recursive(self._config, config_dict)

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        if "api" in config:
            api_config = config["api"]
            if "timeout" in api_config and api_config["timeout"] is not None:
                if api_config["timeout"] <= 0:
                    raise ConfigError("timeout must be positive")
            if "base_url" in api_config:
                base_url = api_config["base_url"]
                if not isinstance(base_url, str) or not base_url.startswith(("http://", "https://")):
                    raise ConfigError("base_url must be an http(s) URL")

    @staticmethod
    def _convert_value(value: str) -> Any:
        """Convert string value to appropriate type"""
        if value.lower() == "true":
            return True
        if value.lower() == "false":
            return False

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            return value
