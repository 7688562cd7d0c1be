import os
import logging
from dataclasses import dataclass, replace, fields, asdict
from typing import Any, Dict, Optional, Tuple
from contextlib import contextmanager

import yaml

from python_powerset.powerset import strategies

DEFAULT_CONFIG_FILE = "python-powerset.cfg"


# ---------------------------------------------------------------------------#
# Immutable configuration object
# ---------------------------------------------------------------------------#
@dataclass(frozen=True, slots=True)
class Config:
    input_size: int = 20
    iterations: int = 5
    strategies: Tuple[str, ...] = ("iterative", "doubling")


_cfg: Config = Config()


def get() -> Config:
    """Return the benchmark settings in effect."""
    return _cfg


def update(**kwargs) -> None:
    """Swap in a copy of the settings with the given fields changed."""
    global _cfg
    if 'strategies' in kwargs:
        kwargs['strategies'] = tuple(kwargs['strategies'])
    _cfg = replace(_cfg, **kwargs)


@contextmanager
def temporary_config(**kwargs):
    """Run a *with* block under modified settings, restoring them afterwards."""
    old = _cfg
    update(**kwargs)
    try:
        yield
    finally:
        update(**{f.name: getattr(old, f.name) for f in fields(old)})


# ---------------------------------------------------------------------------#
# YAML configuration files
# ---------------------------------------------------------------------------#
def load_from_file(path: str) -> Dict[str, Any]:
    """
    Read a YAML configuration file and return its settings as a dict.

    Raises FileNotFoundError if the file does not exist and ValueError if it
    is not valid YAML. Unknown settings are dropped with a warning.
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML in config file {path}: expected a mapping")
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        logging.warning("Ignoring unknown configuration keys in %s: %s", path, unknown)
    return {k: v for k, v in data.items() if k in known}


def _validate(data: Dict[str, Any]) -> Dict[str, Any]:
    if "input_size" in data:
        size = data["input_size"]
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            raise ValueError(f"Invalid input_size: {size!r}. Must be a non-negative integer")
    if "iterations" in data:
        iterations = data["iterations"]
        if not isinstance(iterations, int) or isinstance(iterations, bool) or iterations < 1:
            raise ValueError(f"Invalid iterations: {iterations!r}. Must be a positive integer")
    if "strategies" in data:
        names = data["strategies"]
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list) or not names or any(n not in strategies for n in names):
            raise ValueError(
                f"Invalid strategies: {data['strategies']!r}. Must be a non-empty list of {list(strategies)}")
        data = {**data, "strategies": tuple(names)}
    return data


def load_config_file(path: Optional[str] = None) -> None:
    """
    Apply settings from a config file. Without an explicit path, use
    python-powerset.cfg in the current directory if it exists.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_FILE):
            return
        path = DEFAULT_CONFIG_FILE
    data = _validate(load_from_file(path))
    if data:
        update(**data)


def to_yaml() -> str:
    """Render the effective configuration as a YAML config file."""
    data = asdict(_cfg)
    data['strategies'] = list(data['strategies'])
    header = "# python-powerset configuration file\n"
    return header + yaml.safe_dump(data, sort_keys=False)
