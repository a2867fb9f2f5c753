import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = ".changelog.yml"

DEFAULT_CONFIG: dict = {
    "output": "CHANGELOG.md",
    "remote": "origin",
    "repository_url": None,  # None = derive from the remote; set to substitute a base URL
    "title": "Changelog",
    "log_level": "WARNING",
}


def load_config(config_path: Optional[str] = None, cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .changelog.yml in the current directory (or $CHANGELOG_CONFIG)
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    if config_path is None:
        config_path = os.environ.get("CHANGELOG_CONFIG", DEFAULT_CONFIG_PATH)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config
