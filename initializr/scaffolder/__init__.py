"""FastAPI Initializr scaffolder -- turns a configuration into a project archive.

This package takes a ``ProjectConfig``, resolves the package specifiers the
generated project needs and renders one of three project trees (simple,
structured, enterprise) into a deterministic zip archive.

Quick usage::

    from initializr.config import ProjectConfig
    from initializr.scaffolder import ProjectGenerator

    config = ProjectConfig(
        project_name="my-project",
        structure="structured",
        packaging="uv",
        dependencies=("sqlalchemy", "python_jose"),
    )
    generator = ProjectGenerator(config)
    archive_path = await generator.generate("/tmp/output")
"""

from initializr.scaffolder.archive import (
    ArchiveSerializationError,
    DuplicateFileError,
    ZipArchive,
    create_archive,
)
from initializr.scaffolder.generator import ProjectGenerator, command_preview
from initializr.scaffolder.models import FileSpec, GeneratedFile
from initializr.scaffolder.resolver import resolve
from initializr.scaffolder.templates import TemplateNotFoundError, TemplateRenderer

__all__ = [
    "ArchiveSerializationError",
    "DuplicateFileError",
    "FileSpec",
    "GeneratedFile",
    "ProjectGenerator",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "ZipArchive",
    "command_preview",
    "create_archive",
    "resolve",
]
