from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .core.inputs import ParameterSet

logger = logging.getLogger(__name__)

# Directory holding the packaged defaults
BASE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG = BASE_DIR / "config.yaml"


class ConfigError(ValueError):
    """The assumptions file cannot be turned into a ParameterSet."""


def _load_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of assumptions")
    return data


def load_parameters(path: Optional[Union[str, Path]] = None, **overrides: Any) -> ParameterSet:
    """Build a ParameterSet from a YAML file, keyword overrides taking precedence.

    Keys are ParameterSet field names; missing keys keep their defaults.
    """
    path = Path(path) if path is not None else DEFAULT_CONFIG
    logger.debug("Loading assumptions from %s", path)
    data = _load_yaml(path)
    data.update(overrides)

    known = {f.name for f in fields(ParameterSet)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown assumption(s) in {path}: {', '.join(unknown)}")
    return ParameterSet(**data)
