"""
Dialect — Keywords, sentinels, and limits of the interface text.

The extractor never hard-codes `soroban_sdk::` or `Env`; it reads them
from the active dialect.
"""

from scit.dialect.loader import (
    DEFAULT_DIALECT,
    DialectError,
    clear_cache,
    get_dialect,
    list_dialects,
    load_dialect,
    load_dialect_from_path,
    parse_dialect,
)
from scit.dialect.models import Dialect

__all__ = [
    "DEFAULT_DIALECT",
    "Dialect",
    "DialectError",
    "clear_cache",
    "get_dialect",
    "list_dialects",
    "load_dialect",
    "load_dialect_from_path",
    "parse_dialect",
]
