"""
Logging level to minifier directive resolution.

Functions are compiled with their console calls marked as pure up to the
requested verbosity, so the minifier drops calls whose output would never be
wanted at that level. Each level strips everything the level below strips,
plus the calls of the next severity.
"""

from typing import Dict, Optional, Tuple

LOGGING_LEVELS: Tuple[str, ...] = ("debug", "info", "warn", "error")

# Calls that only produce output below the given level.
_CALLS_BELOW_LEVEL: Dict[str, Tuple[str, ...]] = {
    "debug": (),
    "info": ("console.debug", "console.log"),
    "warn": ("console.info",),
    "error": ("console.warn",),
}

# Used when logging is disabled entirely.
_SILENT_CALLS: Tuple[str, ...] = ("console.error",)


def _build_table() -> Dict[str, Tuple[str, ...]]:
    table: Dict[str, Tuple[str, ...]] = {}
    eliminable: Tuple[str, ...] = ()
    for level in LOGGING_LEVELS:
        eliminable = eliminable + _CALLS_BELOW_LEVEL[level]
        table[level] = eliminable
    return table


_PURE_FUNCS_BY_LEVEL = _build_table()
_PURE_FUNCS_SILENT = _PURE_FUNCS_BY_LEVEL["error"] + _SILENT_CALLS


def resolve_pure_funcs(level: Optional[str]) -> Tuple[str, ...]:
    """
    Return the logging calls that can be eliminated at the given level.

    Args:
        level: One of LOGGING_LEVELS, or None when logging is disabled.
               Unknown values are treated like None.

    Returns:
        Ordered tuple of call expressions (e.g. "console.log").

    Example:
        >>> resolve_pure_funcs("warn")
        ('console.debug', 'console.log', 'console.info')
        >>> resolve_pure_funcs(None)[-1]
        'console.error'
    """
    return _PURE_FUNCS_BY_LEVEL.get(level or "", _PURE_FUNCS_SILENT)


def is_valid_level(level: str) -> bool:
    return level in LOGGING_LEVELS
