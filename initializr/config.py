"""FastAPI Initializr configuration.

Typed models describing one generation request (``ProjectConfig``) and the
process-wide tool settings (``Settings``).  Both use Pydantic v2 so they are
validated at construction time and serialise to/from JSON without
boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from initializr.catalog import catalog_ids
from initializr.selection import derive_effective_selection


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PythonVersion(str, Enum):
    """Python versions a generated project may target."""
    PY39 = "3.9"
    PY310 = "3.10"
    PY311 = "3.11"
    PY312 = "3.12"


class Packaging(str, Enum):
    """Packaging manager whose manifest format is emitted."""
    UV = "uv"
    POETRY = "poetry"
    PIP = "pip"
    PIPENV = "pipenv"


class Structure(str, Enum):
    """Output tree shape."""
    SIMPLE = "simple"
    STRUCTURED = "structured"
    ENTERPRISE = "enterprise"


class Database(str, Enum):
    """Database backend wired into the generated project."""
    NONE = "none"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    SQLITE = "sqlite"


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "python_version": PythonVersion,
    "packaging": Packaging,
    "structure": Structure,
    "database": Database,
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnknownEnumValueError(ValueError):
    """Raised when a form payload carries a value outside an enum field's range."""

    def __init__(self, field: str, value: Any, allowed: list[str]) -> None:
        self.field = field
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Unknown value {value!r} for '{field}' (expected one of: {', '.join(allowed)})"
        )


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """One generation request, immutable for the duration of a run.

    ``dependencies`` holds the caller's manual picks as catalog ids.  The
    enterprise-mandated ids are never written into it; they are derived on
    every access through :attr:`effective_dependencies`, so switching the
    structure back and forth never loses a manual pick.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    project_name: str = Field(..., description="Project name, also the archive root directory")
    description: str = Field(default="", description="Short project description")
    package_name: str = Field(default="app", description="Package name shown in the run command")
    python_version: PythonVersion = Field(default=PythonVersion.PY312)
    packaging: Packaging = Field(default=Packaging.UV)
    structure: Structure = Field(default=Structure.SIMPLE)
    database: Database = Field(default=Database.NONE)
    dependencies: tuple[str, ...] = Field(
        default=(),
        description="Manually selected catalog ids, without duplicates",
    )

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError("project name must not contain path separators")
        if not value.strip("."):
            raise ValueError("project name must not consist only of dots")
        return value

    @field_validator("dependencies")
    @classmethod
    def _check_dependencies(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        known = catalog_ids()
        for dep_id in value:
            if dep_id in seen:
                raise ValueError(f"dependency '{dep_id}' selected more than once")
            if dep_id not in known:
                raise ValueError(f"unknown dependency id '{dep_id}'")
            seen.add(dep_id)
        return value

    @model_validator(mode="before")
    @classmethod
    def _lock_enterprise_database(cls, data: Any) -> Any:
        # Enterprise projects always target PostgreSQL.
        if isinstance(data, Mapping) and data.get("structure") == Structure.ENTERPRISE.value:
            data = {**data, "database": Database.POSTGRES.value}
        return data

    # -- Derived selection ---------------------------------------------------

    @property
    def effective_dependencies(self) -> tuple[str, ...]:
        """Manual picks plus forced ids, in catalog order."""
        effective, _ = derive_effective_selection(self.structure.value, self.dependencies)
        return effective

    @property
    def locked_dependencies(self) -> frozenset[str]:
        """Ids that are forced on and cannot be removed for this structure."""
        _, locked = derive_effective_selection(self.structure.value, self.dependencies)
        return locked

    # -- Construction / serialisation -----------------------------------------

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "ProjectConfig":
        """Build a config from a raw form payload.

        Accepts both the snake_case field names and the camelCase keys used
        by the web form (``projectName``, ``pythonVersion``, ...).

        Raises:
            UnknownEnumValueError: If an enum field holds an unknown value.
        """
        payload = {_FORM_ALIASES.get(key, key): value for key, value in data.items()}
        for field, enum_cls in _ENUM_FIELDS.items():
            if field not in payload:
                continue
            raw = payload[field]
            allowed = [member.value for member in enum_cls]
            if isinstance(raw, Enum):
                raw = raw.value
            if raw not in allowed:
                raise UnknownEnumValueError(field, raw, allowed)
        if "dependencies" in payload:
            payload["dependencies"] = tuple(payload["dependencies"])
        return cls.model_validate(payload)

    def save(self, path: Path) -> Path:
        """Persist the configuration as JSON and return the written path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load a configuration previously written by :meth:`save`."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)


_FORM_ALIASES: dict[str, str] = {
    "projectName": "project_name",
    "packageName": "package_name",
    "pythonVersion": "python_version",
}


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Process-wide settings for the CLI and the generator."""

    output_dir: Path = Field(default=Path("./output"))
    template_dir: Path | None = Field(
        default=None, description="Override the packaged template directory"
    )
    python_version: PythonVersion = Field(default=PythonVersion.PY312)
    packaging: Packaging = Field(default=Packaging.UV)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            INITIALIZR_OUTPUT_DIR, INITIALIZR_TEMPLATE_DIR,
            INITIALIZR_PYTHON_VERSION, INITIALIZR_PACKAGING.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("INITIALIZR_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["INITIALIZR_OUTPUT_DIR"])
        if os.environ.get("INITIALIZR_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["INITIALIZR_TEMPLATE_DIR"])
        if os.environ.get("INITIALIZR_PYTHON_VERSION"):
            kwargs["python_version"] = os.environ["INITIALIZR_PYTHON_VERSION"]
        if os.environ.get("INITIALIZR_PACKAGING"):
            kwargs["packaging"] = os.environ["INITIALIZR_PACKAGING"]
        return cls(**kwargs)
