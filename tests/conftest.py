"""Shared pytest fixtures for the FastAPI Initializr test suite.

Provides reusable fixtures for:
- Project configurations for each structure
- A real template renderer bound to the packaged templates
- A mocked renderer for tests that only inspect planning
- Helpers for unpacking generated archives
"""

from __future__ import annotations

import io
import zipfile
from unittest.mock import AsyncMock, MagicMock

import pytest

from initializr.config import ProjectConfig
from initializr.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def simple_config() -> ProjectConfig:
    """Minimal simple-structure config with no picks."""
    return ProjectConfig(
        project_name="demo",
        description="A demo API",
        structure="simple",
        packaging="pip",
    )


@pytest.fixture
def structured_config() -> ProjectConfig:
    """Structured config with an auth library and a database."""
    return ProjectConfig(
        project_name="shop-api",
        description="Shop backend",
        structure="structured",
        packaging="uv",
        database="postgres",
        dependencies=("sqlalchemy", "python_jose"),
    )


@pytest.fixture
def enterprise_config() -> ProjectConfig:
    """Enterprise config; the database is forced to postgres."""
    return ProjectConfig(
        project_name="demo2",
        description="Enterprise demo",
        structure="enterprise",
        packaging="uv",
    )


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    """A renderer over the packaged template directory."""
    return TemplateRenderer()


@pytest.fixture
def mock_renderer() -> MagicMock:
    """A mock TemplateRenderer whose output names the template it rendered."""
    mock = MagicMock(spec=TemplateRenderer)

    def _render(template_id: str, context=None) -> str:
        return f"# Rendered from {template_id}\n"

    mock.render = MagicMock(side_effect=_render)
    mock.render_async = AsyncMock(side_effect=_render)
    return mock


# ---------------------------------------------------------------------------
# Archive helpers
# ---------------------------------------------------------------------------


def unzip(data: bytes) -> dict[str, str]:
    """Return ``{member name: text}`` for a zip archive held in memory."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name).decode("utf-8") for name in zf.namelist()}


@pytest.fixture
def read_archive():
    """Expose :func:`unzip` to tests as a fixture."""
    return unzip
