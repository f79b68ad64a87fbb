"""
Module: side_length_config
Description: Settings for the CLIs and the experiment.
             - side_length_config.yaml next to this module (or an explicit path)
             - deep merged over DEFAULTS; a missing file means defaults only
             - logging setup from the `logging` section
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from max_side_length import InputError

DEFAULT_PATH = Path(__file__).parent / "side_length_config.yaml"

DEFAULTS: dict = {
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
    'experiment': {
        'sizes': [1000, 2000, 4000, 8000, 16000, 32000],
        'repeats': 3,
        'seed': 42,
        'coord_low': -10_000_000,
        'coord_high': 10_000_000,
        'brute_force_max_n': 2000,
    },
    'plot': {'dpi': 120, 'square_alpha': 0.25},
}


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


class Config:
    """YAML settings merged over DEFAULTS. A missing file means defaults only."""

    def __init__(self, path: Optional[Path | str] = None):
        self.path = Path(path) if path is not None else DEFAULT_PATH
        self._data = self._load()

    def __getitem__(self, key: str):
        return self._data.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"Config(path={str(self.path)!r}, keys={list(self._data.keys())})"

    def _load(self) -> dict:
        if not self.path.exists():
            return copy.deepcopy(DEFAULTS)
        try:
            loaded = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise InputError(f"config {self.path} is not valid YAML: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"cannot read config {self.path}: {e}") from e
        if not isinstance(loaded, dict):
            raise InputError(f"config {self.path} must hold a mapping at the top level")
        return _merge(DEFAULTS, loaded)

    def get_nested(self, *keys: str) -> Any:
        result: Any = self._data
        try:
            for key in keys:
                result = result[key]
        except (KeyError, TypeError):
            return None
        return result


def configure_logging(cfg: Optional[Config] = None, verbose: bool = False) -> None:
    """
    basicConfig from the config's `logging` section.
    Without a config (e.g. it failed to load) the built-in defaults apply.
    """
    section = cfg['logging'] if cfg is not None else DEFAULTS['logging']
    level = logging.DEBUG if verbose else str(section['level']).upper()
    logging.basicConfig(level=level, format=section['format'])
