"""Unit tests for ProjectConfig and Settings (initializr.config).

Tests cover:
- ProjectConfig defaults and validation
- Enterprise database forcing
- Effective and locked dependency derivation
- from_form aliases and UnknownEnumValueError
- save/load round trip
- Settings defaults and from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from initializr.config import (
    Database,
    Packaging,
    ProjectConfig,
    PythonVersion,
    Settings,
    Structure,
    UnknownEnumValueError,
)
from initializr.selection import ENTERPRISE_DEPENDENCY_IDS


# ---------------------------------------------------------------------------
# ProjectConfig
# ---------------------------------------------------------------------------


class TestProjectConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = ProjectConfig(project_name="demo")
        assert config.description == ""
        assert config.package_name == "app"
        assert config.python_version is PythonVersion.PY312
        assert config.packaging is Packaging.UV
        assert config.structure is Structure.SIMPLE
        assert config.database is Database.NONE
        assert config.dependencies == ()

    @pytest.mark.unit
    def test_is_frozen(self):
        config = ProjectConfig(project_name="demo")
        with pytest.raises(ValidationError):
            config.project_name = "other"

    @pytest.mark.unit
    def test_project_name_is_stripped(self):
        assert ProjectConfig(project_name="  demo  ").project_name == "demo"


class TestProjectConfigValidation:
    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_project_name_rejected(self, name):
        with pytest.raises(ValidationError):
            ProjectConfig(project_name=name)

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["a/b", "a\\b"])
    def test_path_separators_rejected(self, name):
        with pytest.raises(ValidationError):
            ProjectConfig(project_name=name)

    @pytest.mark.unit
    @pytest.mark.parametrize("name", [".", "..", "...", " .. "])
    def test_dot_only_names_rejected(self, name):
        with pytest.raises(ValidationError, match="only of dots"):
            ProjectConfig(project_name=name)

    @pytest.mark.unit
    def test_name_with_dots_accepted(self):
        assert ProjectConfig(project_name="my.api").project_name == "my.api"

    @pytest.mark.unit
    def test_duplicate_dependency_rejected(self):
        with pytest.raises(ValidationError, match="more than once"):
            ProjectConfig(project_name="demo", dependencies=("redis", "redis"))

    @pytest.mark.unit
    def test_unknown_dependency_rejected(self):
        with pytest.raises(ValidationError, match="unknown dependency"):
            ProjectConfig(project_name="demo", dependencies=("left-pad",))

    @pytest.mark.unit
    def test_unknown_packaging_rejected_by_model(self):
        with pytest.raises(ValidationError):
            ProjectConfig(project_name="demo", packaging="conda")


class TestEnterpriseLocking:
    @pytest.mark.unit
    @pytest.mark.parametrize("database", ["none", "mysql", "mongodb", "sqlite", "postgres"])
    def test_enterprise_forces_postgres(self, database):
        config = ProjectConfig(project_name="demo", structure="enterprise", database=database)
        assert config.database is Database.POSTGRES

    @pytest.mark.unit
    def test_enterprise_forces_postgres_with_enum_input(self):
        config = ProjectConfig(
            project_name="demo", structure=Structure.ENTERPRISE, database=Database.MYSQL
        )
        assert config.database is Database.POSTGRES

    @pytest.mark.unit
    def test_other_structures_keep_database(self):
        config = ProjectConfig(project_name="demo", structure="structured", database="mysql")
        assert config.database is Database.MYSQL

    @pytest.mark.unit
    def test_enterprise_effective_includes_locked_set(self):
        config = ProjectConfig(project_name="demo", structure="enterprise", dependencies=("redis",))
        assert ENTERPRISE_DEPENDENCY_IDS <= set(config.effective_dependencies)
        assert "redis" in config.effective_dependencies
        assert config.locked_dependencies == ENTERPRISE_DEPENDENCY_IDS
        # Manual picks are stored unchanged.
        assert config.dependencies == ("redis",)

    @pytest.mark.unit
    def test_non_enterprise_has_no_locked_ids(self):
        config = ProjectConfig(project_name="demo", dependencies=("sqlalchemy",))
        assert config.effective_dependencies == ("sqlalchemy",)
        assert config.locked_dependencies == frozenset()


# ---------------------------------------------------------------------------
# from_form
# ---------------------------------------------------------------------------


class TestFromForm:
    @pytest.mark.unit
    def test_accepts_camel_case_keys(self):
        config = ProjectConfig.from_form({
            "projectName": "demo",
            "packageName": "demo_pkg",
            "pythonVersion": "3.11",
            "packaging": "poetry",
            "structure": "structured",
            "database": "sqlite",
            "dependencies": ["redis", "httpx"],
        })
        assert config.project_name == "demo"
        assert config.package_name == "demo_pkg"
        assert config.python_version is PythonVersion.PY311
        assert config.packaging is Packaging.POETRY
        assert config.database is Database.SQLITE
        assert config.dependencies == ("redis", "httpx")

    @pytest.mark.unit
    def test_unknown_database_raises(self):
        with pytest.raises(UnknownEnumValueError) as exc_info:
            ProjectConfig.from_form({"project_name": "demo", "database": "oracle"})
        err = exc_info.value
        assert err.field == "database"
        assert err.value == "oracle"
        assert "postgres" in err.allowed
        assert isinstance(err, ValueError)

    @pytest.mark.unit
    def test_unknown_packaging_raises(self):
        with pytest.raises(UnknownEnumValueError, match="packaging"):
            ProjectConfig.from_form({"project_name": "demo", "packaging": "conda"})


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class TestSaveLoad:
    @pytest.mark.unit
    def test_round_trip(self, tmp_path: Path, structured_config):
        path = structured_config.save(tmp_path / "nested" / "config.json")
        assert path.exists()
        loaded = ProjectConfig.load(path)
        assert loaded == structured_config

    @pytest.mark.unit
    def test_load_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ProjectConfig.load(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    @pytest.mark.unit
    def test_defaults(self):
        settings = Settings()
        assert settings.output_dir == Path("./output")
        assert settings.template_dir is None
        assert settings.python_version is PythonVersion.PY312
        assert settings.packaging is Packaging.UV

    @pytest.mark.unit
    def test_from_env(self, tmp_path: Path):
        env = {
            "INITIALIZR_OUTPUT_DIR": str(tmp_path / "out"),
            "INITIALIZR_TEMPLATE_DIR": str(tmp_path / "templates"),
            "INITIALIZR_PYTHON_VERSION": "3.10",
            "INITIALIZR_PACKAGING": "pipenv",
        }
        with patch.dict(os.environ, env):
            settings = Settings.from_env()
        assert settings.output_dir == tmp_path / "out"
        assert settings.template_dir == tmp_path / "templates"
        assert settings.python_version is PythonVersion.PY310
        assert settings.packaging is Packaging.PIPENV

    @pytest.mark.unit
    def test_from_env_ignores_unset(self):
        keys = [
            "INITIALIZR_OUTPUT_DIR",
            "INITIALIZR_TEMPLATE_DIR",
            "INITIALIZR_PYTHON_VERSION",
            "INITIALIZR_PACKAGING",
        ]
        clean = {k: v for k, v in os.environ.items() if k not in keys}
        with patch.dict(os.environ, clean, clear=True):
            settings = Settings.from_env()
        assert settings == Settings()
