"""
Library-level constants for hardcoded pagination behavior.

These values define how field names are matched and how pages are numbered.
They are not meant to be changed through environment variables.

For configurable values (default page size, sort field policy, logging),
see paginator/settings.py where values can be overridden via environment
variables.
"""

from enum import Enum

# ============================================================================
# Page Geometry
# ============================================================================

# Page numbers are 1-indexed
FIRST_PAGE = 1

# Smallest accepted page size; zero is rejected rather than coerced
MIN_PAGE_SIZE = 1


# ============================================================================
# Sort Field Resolution
# ============================================================================


class SortFieldPolicy(str, Enum):
    """How an unknown sort field name is handled."""

    STRICT = "strict"
    FALLBACK = "fallback"


# Candidates tried, in order, by the fallback policy
DEFAULT_SORT_FALLBACK_FIELDS = ("id", "date_created")

# Top-level packages whose classes hold framework internals, not entity fields
FRAMEWORK_MODULES = frozenset(
    {"builtins", "pydantic", "sqlalchemy", "sqlmodel", "typing"}
)


def normalize_field_name(field_name: str) -> str:
    """Case-insensitive key used for field lookups and cache entries."""
    return field_name.strip().casefold()
