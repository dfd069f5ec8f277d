"""Dependency catalog.

Static, read-only list of the packages a user can pick.  Catalog order is
significant: resolved manifests list user picks in this order, not in the
order they were selected.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

CATEGORIES: tuple[str, ...] = (
    "database",
    "auth",
    "api",
    "testing",
    "monitoring",
    "async",
    "config",
    "templates",
    "validation",
    "utils",
)


class DependencyEntry(BaseModel):
    """A single pickable package."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable identifier used by selections")
    name: str = Field(..., description="Display name")
    package: str = Field(..., description="Specifier written verbatim into manifests")
    description: str = Field(default="")
    category: str = Field(...)


def _entry(id: str, name: str, package: str, description: str, category: str) -> DependencyEntry:
    return DependencyEntry(
        id=id, name=name, package=package, description=description, category=category
    )


CATALOG: tuple[DependencyEntry, ...] = (
    _entry("sqlalchemy", "SQLAlchemy", "sqlalchemy", "SQL toolkit and ORM", "database"),
    _entry("alembic", "Alembic", "alembic", "Database migration tool", "database"),
    _entry("tortoise_orm", "Tortoise ORM", "tortoise-orm", "Async ORM inspired by Django", "database"),
    _entry("sqlmodel", "SQLModel", "sqlmodel", "SQL databases with Python types", "database"),
    _entry("databases", "Databases", "databases", "Async database support", "database"),
    _entry("motor", "Motor", "motor", "Async MongoDB driver", "database"),
    _entry("redis", "Redis", "redis", "Redis client for caching", "database"),
    _entry("pymongo", "PyMongo", "pymongo", "MongoDB driver", "database"),
    _entry("psycopg2_binary", "Psycopg2", "psycopg2-binary", "PostgreSQL adapter", "database"),
    _entry("asyncpg", "AsyncPG", "asyncpg", "Fast PostgreSQL driver", "database"),
    _entry("aiomysql", "AioMySQL", "aiomysql", "Async MySQL driver", "database"),

    _entry("python_jose", "JWT Auth", "python-jose[cryptography]", "JSON Web Token authentication", "auth"),
    _entry("passlib", "Passlib", "passlib[bcrypt]", "Secure password hashing", "auth"),
    _entry("authlib", "Authlib", "authlib", "OAuth and OpenID Connect", "auth"),
    _entry("pyjwt", "PyJWT", "pyjwt", "JWT implementation", "auth"),
    _entry("python_multipart", "Multipart", "python-multipart", "Form data parsing", "auth"),

    _entry("httpx", "HTTPX", "httpx", "Async HTTP client", "api"),
    _entry("requests", "Requests", "requests", "HTTP library", "api"),
    _entry("aiohttp", "Aiohttp", "aiohttp", "Async HTTP client/server", "api"),
    _entry("websockets", "WebSockets", "websockets", "WebSocket support", "api"),
    _entry("graphene", "Graphene", "graphene", "GraphQL framework", "api"),
    _entry("strawberry_graphql", "Strawberry", "strawberry-graphql", "Type-safe GraphQL", "api"),
    _entry("email_validator", "Email Validator", "email-validator", "Email validation", "api"),
    _entry("python_slugify", "Slugify", "python-slugify", "Slug generation", "api"),

    _entry("pytest", "Pytest", "pytest", "Testing framework", "testing"),
    _entry("pytest_asyncio", "Pytest Asyncio", "pytest-asyncio", "Async testing support", "testing"),
    _entry("pytest_cov", "Pytest Coverage", "pytest-cov", "Code coverage plugin", "testing"),
    _entry("faker", "Faker", "faker", "Test data generation", "testing"),
    _entry("factory_boy", "Factory Boy", "factory-boy", "Test fixtures", "testing"),
    _entry("hypothesis", "Hypothesis", "hypothesis", "Property-based testing", "testing"),

    _entry("prometheus_client", "Prometheus", "prometheus-client", "Metrics and monitoring", "monitoring"),
    _entry("sentry_sdk", "Sentry", "sentry-sdk", "Error tracking", "monitoring"),
    _entry("structlog", "Structlog", "structlog", "Structured logging", "monitoring"),
    _entry("loguru", "Loguru", "loguru", "Easy logging", "monitoring"),
    _entry("opentelemetry_api", "OpenTelemetry", "opentelemetry-api", "Observability framework", "monitoring"),

    _entry("celery", "Celery", "celery", "Distributed task queue", "async"),
    _entry("arq", "ARQ", "arq", "Fast async job queues", "async"),
    _entry("dramatiq", "Dramatiq", "dramatiq", "Task processing", "async"),
    _entry("rq", "RQ", "rq", "Simple job queues", "async"),

    _entry("pydantic_settings", "Pydantic Settings", "pydantic-settings", "Settings management", "config"),
    _entry("python_decouple", "Python Decouple", "python-decouple", "Settings from env", "config"),
    _entry("dynaconf", "Dynaconf", "dynaconf", "Dynamic configuration", "config"),

    _entry("jinja2", "Jinja2", "jinja2", "Templating engine", "templates"),
    _entry("aiofiles", "Aiofiles", "aiofiles", "Async file operations", "templates"),
    _entry("pillow", "Pillow", "pillow", "Image processing", "templates"),

    _entry("marshmallow", "Marshmallow", "marshmallow", "Object serialization", "validation"),

    _entry("arrow", "Arrow", "arrow", "Better dates and times", "utils"),
    _entry("python_dateutil", "Dateutil", "python-dateutil", "Date/time utilities", "utils"),
    _entry("click", "Click", "click", "CLI creation", "utils"),
    _entry("typer", "Typer", "typer", "Modern CLI framework", "utils"),
    _entry("rich", "Rich", "rich", "Rich text and formatting", "utils"),
)


@lru_cache(maxsize=1)
def _index() -> dict[str, tuple[int, DependencyEntry]]:
    return {entry.id: (position, entry) for position, entry in enumerate(CATALOG)}


def catalog_ids() -> frozenset[str]:
    """Return every known dependency id."""
    return frozenset(_index())


def get_entry(dep_id: str) -> DependencyEntry:
    """Return the catalog entry for *dep_id*.

    Raises:
        KeyError: If the id is not in the catalog.
    """
    return _index()[dep_id][1]


def catalog_position(dep_id: str) -> int:
    """Return the position of *dep_id* in catalog order."""
    return _index()[dep_id][0]


def entries_by_category(category: str | None = None) -> list[DependencyEntry]:
    """List catalog entries, optionally restricted to one category."""
    if category is None:
        return list(CATALOG)
    return [entry for entry in CATALOG if entry.category == category]
