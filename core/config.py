import copy
import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config.yaml"
CONFIG_ENV_VAR = "GRAPH_GUIDANCE_CONFIG"

DEFAULTS = {
    "server_name": "kusto-graph-guidance",
    "resources_dir": "resources",
    "topics_dir": "resources/topics",
    "json_indent": 2,
    "logging": {
        "dir": "logs",
        "file_name": "server.log",
        "level": "INFO",
    },
}

logger = logging.getLogger(__name__)


class ConfigLoader:
    _instance = None
    _config = None
    _path = None

    def __new__(cls, path=None):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config(path)
        return cls._instance

    @classmethod
    def _load_config(cls, path=None):
        """
        Load the configuration into the class variable _config.

        The file is taken from `path`, then from $GRAPH_GUIDANCE_CONFIG (a .env
        file is honoured), then from config.yaml at the project root. Keys
        missing from the file keep their defaults.
        """
        load_dotenv()
        explicit = path or os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(explicit).expanduser().resolve() if explicit else DEFAULT_CONFIG_PATH

        data = {}
        if config_path.is_file():
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Configuration file {config_path} must contain a mapping")
        elif explicit:
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        else:
            logger.warning("No config.yaml found at %s; using defaults", config_path)

        cls._path = config_path
        cls._config = merge_config(DEFAULTS, data)

    @classmethod
    def reset(cls):
        """
        Drop the cached instance so the next access reloads the configuration.
        """
        cls._instance = None
        cls._config = None
        cls._path = None

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def merge_config(defaults, overrides):
    """
    Return a deep copy of `defaults` updated with `overrides`, merging nested mappings.
    """
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config(path=None):
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader(path).get_config()
