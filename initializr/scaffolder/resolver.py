"""Dependency resolution.

Turns a ``ProjectConfig`` into the ordered, de-duplicated list of package
specifiers declared by the generated project's manifest.
"""

from __future__ import annotations

from typing import Iterable

from initializr.catalog import get_entry
from initializr.config import ProjectConfig, Structure


BASE_DEPENDENCIES: tuple[str, ...] = ("fastapi", "uvicorn[standard]")

STRUCTURED_DEPENDENCIES: tuple[str, ...] = ("python-dotenv",)

ENTERPRISE_DEPENDENCIES: tuple[str, ...] = (
    "sqlalchemy[asyncio]",
    "alembic",
    "pydantic-settings",
    "python-jose[cryptography]",
    "passlib[bcrypt]",
    "python-multipart",
    "email-validator",
    "asyncpg",
    "structlog",
)

# sqlite and none need no extra driver.
DATABASE_DRIVERS: dict[str, str] = {
    "postgres": "psycopg2-binary",
    "mysql": "pymysql",
    "mongodb": "motor",
}


def resolve(config: ProjectConfig) -> list[str]:
    """Return the package specifiers for *config*.

    Order: base packages, selected catalog entries (catalog order),
    structure-mandated packages, database driver.  Exact duplicates are
    dropped, keeping the first occurrence.
    """
    specifiers: list[str] = list(BASE_DEPENDENCIES)
    specifiers.extend(get_entry(dep_id).package for dep_id in config.effective_dependencies)

    if config.structure is Structure.STRUCTURED:
        specifiers.extend(STRUCTURED_DEPENDENCIES)
    elif config.structure is Structure.ENTERPRISE:
        specifiers.extend(ENTERPRISE_DEPENDENCIES)

    driver = DATABASE_DRIVERS.get(config.database.value)
    if driver:
        specifiers.append(driver)

    return dedupe(specifiers)


def dedupe(specifiers: Iterable[str]) -> list[str]:
    """Drop repeated specifiers while preserving first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for spec in specifiers:
        if spec in seen:
            continue
        seen.add(spec)
        result.append(spec)
    return result
