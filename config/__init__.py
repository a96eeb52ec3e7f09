"""Configuration: environment settings and bundled YAML data files."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path(__file__).parent


@lru_cache(maxsize=8)
def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML data file from the config/ directory.

    Results are cached per filename; callers must not mutate them.
    """
    with open(CONFIG_DIR / filename) as f:
        return yaml.safe_load(f) or {}
