"""Shared constants for datefield.

This module provides centralized configuration constants used across the
adapter, sections and state packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Expansion limits: Guard against adapters whose format macros never settle
- Cache limits: Memory bounds for adapter and pattern caches
- Layout: Bidi isolation marks and spacious-density delimiters
- Locale defaults: Fallback locale for unknown locale codes

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Expansion limits
    "MAX_FORMAT_EXPANSIONS",
    # Cache limits
    "MAX_ADAPTER_CACHE_SIZE",
    "MAX_PATTERN_CACHE_SIZE",
    # Layout
    "LRI",
    "PDI",
    "BIDI_ISOLATION_MARKS",
    "SPACIOUS_DELIMITERS",
    # Locale defaults
    "DEFAULT_LOCALE",
]

# ============================================================================
# EXPANSION LIMITS
# ============================================================================

# Extra expansion passes allowed after the first one before the format is
# declared cyclic. CLDR macros settle after a single pass; anything still
# changing after ten passes is a broken adapter rule.
MAX_FORMAT_EXPANSIONS: int = 10

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached BabelCalendarAdapter instances (one per locale).
MAX_ADAPTER_CACHE_SIZE: int = 128

# Maximum compiled parse patterns kept per process (locale x format).
MAX_PATTERN_CACHE_SIZE: int = 1024

# ============================================================================
# LAYOUT
# ============================================================================

# LEFT-TO-RIGHT ISOLATE / POP DIRECTIONAL ISOLATE.
# RTL separators containing whitespace are wrapped as PDI + sep + LRI.
LRI: str = "\u2066"
PDI: str = "\u2069"

# Every isolation mark that may appear in a rendered field string.
BIDI_ISOLATION_MARKS: frozenset[str] = frozenset({"\u2066", "\u2067", "\u2068", "\u2069"})

# Single-character separators padded with spaces in spacious density.
SPACIOUS_DELIMITERS: frozenset[str] = frozenset({"/", ".", "-"})

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

DEFAULT_LOCALE: str = "en_US"
