"""Configuration handling for fortuner.

A YAML file may provide default ``sources``, ``pattern``, ``insensitive``
and ``seed`` values.  Options given on the command line take precedence.
The resulting ``Config`` carries a compiled pattern, so an invalid regular
expression is reported here rather than by the pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigurationError

MAX_SEED = 2 ** 64 - 1

_KEY_TYPES = {
    'sources': list,
    'pattern': str,
    'insensitive': bool,
    'seed': int,
}


@dataclass
class Config:
    sources: List[str] = field(default_factory=list)
    pattern: Optional[re.Pattern] = None
    seed: Optional[int] = None


def load_config(path: Path) -> Dict[str, Any]:
    """Load and validate a YAML configuration file.

    Unknown keys are ignored.  Returns an empty mapping for an empty file.

    Raises:
        ConfigurationError: if the file cannot be read, is not valid YAML, or
            holds a value of the wrong type.
    """
    try:
        with path.open('r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f'{path}: {exc.strerror or exc}') from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f'{path}: invalid YAML: {exc}') from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f'{path}: top level must be a mapping')
    for key, expected in _KEY_TYPES.items():
        value = data.get(key)
        if value is None:
            continue
        # bool is a subclass of int; a seed of ``true`` is still wrong
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigurationError(f'{path}: {key!r} must be of type {expected.__name__}')
    if 'sources' in data and data['sources'] is not None:
        data['sources'] = [str(s) for s in data['sources']]
    return data


def compile_pattern(pattern: str, insensitive: bool = False) -> re.Pattern:
    flags = re.IGNORECASE if insensitive else 0
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise ConfigurationError(f'Invalid --pattern "{pattern}"') from exc


def build_config(
    sources: Sequence[str],
    pattern: Optional[str] = None,
    insensitive: bool = False,
    seed: Optional[int] = None,
) -> Config:
    """Validate raw option values and return a ``Config``.

    Raises:
        ConfigurationError: for an invalid pattern or an out-of-range seed.
    """
    if seed is not None and not 0 <= seed <= MAX_SEED:
        raise ConfigurationError(f'Invalid --seed "{seed}"')
    compiled = compile_pattern(pattern, insensitive) if pattern is not None else None
    return Config(sources=list(sources), pattern=compiled, seed=seed)


def merge_options(file_values: Dict[str, Any], **cli_values: Any) -> Dict[str, Any]:
    """Overlay command-line values on top of configuration file values.

    ``None`` and empty sequences on the command line leave the file value in
    place, so an explicit ``insensitive=False`` overrides a file that turns it
    on.
    """
    merged = {
        'sources': list(file_values.get('sources') or []),
        'pattern': file_values.get('pattern'),
        'insensitive': bool(file_values.get('insensitive', False)),
        'seed': file_values.get('seed'),
    }
    for key, value in cli_values.items():
        if value is not None and value != () and value != []:
            merged[key] = list(value) if key == 'sources' else value
    return merged
