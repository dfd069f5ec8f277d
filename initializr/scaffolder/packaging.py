"""Packaging manifest selection.

Each packaging manager gets one manifest file (``pyproject.toml``,
``requirements.txt`` or ``Pipfile``) plus a set of shell commands quoted by
the generated READMEs and Dockerfile.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, assert_never

from initializr.config import Packaging, ProjectConfig, Structure

from .models import FileSpec, GeneratedFile
from .templates import TemplateRenderer


@dataclass(frozen=True)
class PackagingProfile:
    """Per-manager file names and commands."""

    manifest: str
    template: str
    install: str
    run_prefix: str


def profile_for(packaging: Packaging) -> PackagingProfile:
    """Return the profile for *packaging*."""
    match packaging:
        case Packaging.UV:
            return PackagingProfile(
                manifest="pyproject.toml",
                template="common/packaging/uv-pyproject.toml.j2",
                install="uv sync",
                run_prefix="uv run ",
            )
        case Packaging.POETRY:
            return PackagingProfile(
                manifest="pyproject.toml",
                template="common/packaging/poetry-pyproject.toml.j2",
                install="poetry install",
                run_prefix="poetry run ",
            )
        case Packaging.PIP:
            return PackagingProfile(
                manifest="requirements.txt",
                template="common/packaging/requirements.txt.j2",
                install="pip install -r requirements.txt",
                run_prefix="",
            )
        case Packaging.PIPENV:
            return PackagingProfile(
                manifest="Pipfile",
                template="common/packaging/Pipfile.j2",
                install="pipenv install",
                run_prefix="pipenv run ",
            )
        case _:
            assert_never(packaging)


def wheel_package(structure: Structure) -> str | None:
    """Source package a uv build must include, if the layout has one."""
    match structure:
        case Structure.SIMPLE:
            return None
        case Structure.STRUCTURED:
            return "src"
        case Structure.ENTERPRISE:
            return "app"
        case _:
            assert_never(structure)


# Lower bounds for the uv dev-dependency table.
DEV_PINS: dict[str, str] = {
    "pytest": ">=7.4.0",
    "pytest-asyncio": ">=0.21.0",
    "httpx": ">=0.25.0",
    "black": ">=23.0.0",
    "ruff": ">=0.1.0",
}


def dev_dependencies(config: ProjectConfig) -> list[str]:
    """Development-only packages added next to the production list.

    ``pytest`` and ``pytest-asyncio`` are skipped when the user already picked
    them.  Enterprise projects also need ``httpx`` for their seeded API test.
    """
    selected = config.effective_dependencies
    dev: list[str] = []
    if "pytest" not in selected:
        dev.append("pytest")
    if "pytest" not in selected and "pytest_asyncio" not in selected:
        dev.append("pytest-asyncio")
    if config.structure is Structure.ENTERPRISE and "httpx" not in selected:
        dev.append("httpx")
    dev.extend(["black", "ruff"])
    return dev


_SPECIFIER_PATTERN = re.compile(r"^(?P<name>[A-Za-z0-9._-]+)(?:\[(?P<extras>[^\]]*)\])?")


def split_specifier(spec: str) -> tuple[str, list[str]]:
    """Split ``"uvicorn[standard]"`` into ``("uvicorn", ["standard"])``."""
    match = _SPECIFIER_PATTERN.match(spec.strip())
    if not match:
        return spec.strip(), []
    extras = [e.strip() for e in (match.group("extras") or "").split(",") if e.strip()]
    return match.group("name"), extras


def table_entries(specifiers: list[str]) -> list[dict[str, Any]]:
    """Group specifiers by distribution for TOML tables keyed by package name.

    ``sqlalchemy`` and ``sqlalchemy[asyncio]`` collapse into one entry with
    the union of their extras, since a TOML table cannot repeat a key.
    """
    merged: dict[str, list[str]] = {}
    for spec in specifiers:
        name, extras = split_specifier(spec)
        bucket = merged.setdefault(name, [])
        for extra in extras:
            if extra not in bucket:
                bucket.append(extra)
    return [{"name": name, "extras": extras} for name, extras in merged.items()]


class ManifestGenerator:
    """Plans and renders the packaging manifest selected by ``config.packaging``."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def context(self, config: ProjectConfig, dependencies: list[str]) -> dict[str, Any]:
        """Template context for the manifest; *dependencies* is not modified."""
        dev = dev_dependencies(config)
        return {
            "project_name": config.project_name,
            "description": config.description,
            "python_version": config.python_version.value,
            "structure": config.structure.value,
            "dependencies": list(dependencies),
            "dependency_entries": table_entries(dependencies),
            "dev_dependencies": dev,
            "dev_entries": table_entries(dev),
            "wheel_package": wheel_package(config.structure),
            "dev_pins": DEV_PINS,
        }

    def spec(self, config: ProjectConfig, dependencies: list[str]) -> FileSpec:
        """Plan the manifest file without rendering it."""
        profile = profile_for(config.packaging)
        return FileSpec(profile.manifest, profile.template, self.context(config, dependencies))

    def render(self, config: ProjectConfig, dependencies: list[str]) -> GeneratedFile:
        """Render the manifest file."""
        spec = self.spec(config, dependencies)
        return GeneratedFile(path=spec.path, content=self.renderer.render(spec.template, spec.context))
