"""Form state for interactive configuration.

Mirrors the rules of the configuration form: entering the enterprise
structure forces PostgreSQL and locks the enterprise dependency set, leaving
it resets the database.  Manual picks are stored separately from the
effective selection and survive structure toggles.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from initializr.catalog import catalog_position, get_entry
from initializr.config import Database, Packaging, ProjectConfig, PythonVersion, Structure
from initializr.selection import derive_effective_selection


class LockedSelectionError(ValueError):
    """Raised when a locked field or dependency is changed."""


class FormState(BaseModel):
    """Mutable form state from which a ``ProjectConfig`` is built on demand."""

    project_name: str = Field(default="my-fastapi-project")
    description: str = Field(default="A FastAPI application")
    package_name: str = Field(default="app")
    python_version: PythonVersion = Field(default=PythonVersion.PY312)
    packaging: Packaging = Field(default=Packaging.UV)
    structure: Structure = Field(default=Structure.SIMPLE)
    database: Database = Field(default=Database.NONE)
    manual_picks: list[str] = Field(default_factory=list)

    # -- Derived ------------------------------------------------------------

    @property
    def effective_selection(self) -> tuple[str, ...]:
        effective, _ = derive_effective_selection(self.structure.value, self.manual_picks)
        return effective

    @property
    def locked_ids(self) -> frozenset[str]:
        _, locked = derive_effective_selection(self.structure.value, self.manual_picks)
        return locked

    # -- Transitions ----------------------------------------------------------

    def set_structure(self, structure: Structure | str) -> None:
        """Switch the structure, applying the database rules."""
        new = Structure(structure)
        old = self.structure
        self.structure = new
        if new is Structure.ENTERPRISE:
            self.database = Database.POSTGRES
        elif old is Structure.ENTERPRISE:
            self.database = Database.NONE

    def set_database(self, database: Database | str) -> None:
        """Select a database; rejected while the enterprise structure is active."""
        new = Database(database)
        if self.structure is Structure.ENTERPRISE and new is not Database.POSTGRES:
            raise LockedSelectionError("database is locked to postgres for enterprise projects")
        self.database = new

    def toggle_dependency(self, dep_id: str) -> bool:
        """Toggle a manual pick and return whether it is now selected.

        Raises:
            KeyError: If *dep_id* is not in the catalog.
            LockedSelectionError: If *dep_id* is locked by the current structure.
        """
        get_entry(dep_id)
        if dep_id in self.locked_ids:
            raise LockedSelectionError(
                f"dependency '{dep_id}' is required by the {self.structure.value} structure"
            )
        if dep_id in self.manual_picks:
            self.manual_picks.remove(dep_id)
            return False
        self.manual_picks.append(dep_id)
        return True

    def to_config(self) -> ProjectConfig:
        """Build the immutable config for one generation run."""
        return ProjectConfig(
            project_name=self.project_name,
            description=self.description,
            package_name=self.package_name,
            python_version=self.python_version,
            packaging=self.packaging,
            structure=self.structure,
            database=self.database,
            dependencies=tuple(sorted(self.manual_picks, key=catalog_position)),
        )
