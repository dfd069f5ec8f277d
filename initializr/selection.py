"""Dependency selection and enterprise locking.

The enterprise structure forces a fixed set of catalog ids on and locks
them.  Rather than mutating the stored selection whenever the structure
changes, the effective selection is derived from the manual picks on every
call, which keeps structure toggles lossless.
"""

from __future__ import annotations

from typing import Iterable

from initializr.catalog import catalog_position

ENTERPRISE_STRUCTURE = "enterprise"

# ORM, migrations, settings, JWT, password hashing, multipart parsing,
# email validation, async Postgres driver, structured logging.
ENTERPRISE_DEPENDENCY_IDS: frozenset[str] = frozenset({
    "sqlalchemy",
    "alembic",
    "pydantic_settings",
    "python_jose",
    "passlib",
    "python_multipart",
    "email_validator",
    "asyncpg",
    "structlog",
})


def derive_effective_selection(
    structure: str, manual_picks: Iterable[str]
) -> tuple[tuple[str, ...], frozenset[str]]:
    """Compute the effective selection and the locked ids for *structure*.

    Args:
        structure: Structure value (``"simple"``, ``"structured"`` or
            ``"enterprise"``).
        manual_picks: Catalog ids the user selected by hand.

    Returns:
        ``(effective, locked)`` where *effective* is the union of the manual
        picks and the forced ids, sorted by catalog position, and *locked* is
        the set of forced ids (empty unless *structure* is enterprise).
    """
    picks = set(manual_picks)
    locked: frozenset[str] = frozenset()
    if structure == ENTERPRISE_STRUCTURE:
        locked = ENTERPRISE_DEPENDENCY_IDS
        picks |= locked
    effective = tuple(sorted(picks, key=catalog_position))
    return effective, locked
