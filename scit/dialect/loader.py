"""
Dialect Loader — Load and parse interface dialects from YAML files.

Dialects live in `scit/dialect/dialects/<name>.yaml`. Each file has four
sections (dialect, syntax, types, validation) which are flattened into a
single `Dialect` model.
"""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from scit.core.logging import LogChannel, get_logger
from scit.dialect.models import Dialect

log = get_logger(LogChannel.CONFIG)

# Default dialect directory
DIALECTS_DIR = Path(__file__).parent / "dialects"

DEFAULT_DIALECT = "soroban"

_SECTIONS = ("syntax", "types", "validation")


class DialectError(ValueError):
    """A dialect file exists but does not describe a valid dialect."""


def load_dialect(name: str = DEFAULT_DIALECT) -> Dialect:
    """
    Load a dialect by name.

    Args:
        name: Dialect name (without .yaml extension)

    Returns:
        Parsed Dialect

    Raises:
        FileNotFoundError: If the dialect file doesn't exist
        DialectError: If the dialect is invalid
    """
    path = DIALECTS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Dialect not found: {path}")
    return load_dialect_from_path(path)


def load_dialect_from_path(path: Union[str, Path]) -> Dialect:
    """Load a dialect from an arbitrary path."""
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DialectError(f"Dialect {path} is not valid YAML: {e}") from e

    dialect = parse_dialect(data or {}, source=str(path))
    log.verbose("dialect_loaded", dialect=dialect.name, path=str(path))
    return dialect


def parse_dialect(data: dict, source: str = "<dict>") -> Dialect:
    """Parse a dialect from its sectioned dictionary form."""
    if not isinstance(data, dict):
        raise DialectError(f"Dialect {source} must be a mapping, got {type(data).__name__}")

    flat: dict = {}
    info = data.get("dialect", {}) or {}
    for key in ("name", "version", "description"):
        if key in info:
            flat[key] = info[key]

    for section in _SECTIONS:
        values = data.get(section, {}) or {}
        if not isinstance(values, dict):
            raise DialectError(f"Dialect {source}: section '{section}' must be a mapping")
        flat.update(values)

    try:
        return Dialect(**flat)
    except PydanticValidationError as e:
        raise DialectError(f"Dialect {source} is invalid: {e}") from e


def list_dialects() -> list[str]:
    """List available dialect names."""
    return sorted(p.stem for p in DIALECTS_DIR.glob("*.yaml"))


# Cache for loaded dialects
_cache: dict[str, Dialect] = {}


def get_dialect(name: Optional[str] = None, use_cache: bool = True) -> Dialect:
    """
    Get a dialect, using cache by default.

    With no name, SCIT_DIALECT selects the dialect (default: soroban).
    """
    if name is None:
        name = os.environ.get("SCIT_DIALECT", DEFAULT_DIALECT)

    if use_cache and name in _cache:
        return _cache[name]

    dialect = load_dialect(name)
    _cache[name] = dialect
    return dialect


def clear_cache() -> None:
    """Clear the dialect cache."""
    _cache.clear()
