"""Dockerfile and Docker Compose generation for enterprise projects.

The Dockerfile comes in one variant per packaging manager.  All variants
extend ``enterprise/docker/Dockerfile.base.j2`` and only override the
dependency installation block, so each one copies a different manifest and
lockfile and runs a different install command.
"""

from __future__ import annotations

from typing import Any, assert_never

from initializr.config import Packaging

from .models import FileSpec


class DockerGenerator:
    """Plans the container files of an enterprise project."""

    # Output file name -> template id
    _COMPOSE_FILES: dict[str, str] = {
        "docker-compose.yml": "enterprise/docker/docker-compose.yml.j2",
    }

    @staticmethod
    def dockerfile_template(packaging: Packaging) -> str:
        """Return the Dockerfile template id for *packaging*."""
        match packaging:
            case Packaging.UV:
                return "enterprise/docker/Dockerfile.uv.j2"
            case Packaging.POETRY:
                return "enterprise/docker/Dockerfile.poetry.j2"
            case Packaging.PIPENV:
                return "enterprise/docker/Dockerfile.pipenv.j2"
            case Packaging.PIP:
                return "enterprise/docker/Dockerfile.pip.j2"
            case _:
                assert_never(packaging)

    def specs(self, packaging: Packaging, context: dict[str, Any]) -> list[FileSpec]:
        """Plan the Dockerfile followed by the Compose files.

        Args:
            packaging: Packaging manager that selects the Dockerfile variant.
            context: Template rendering context (``python_version`` etc.).

        Returns:
            ``FileSpec`` entries in a fixed order.
        """
        planned = [FileSpec("Dockerfile", self.dockerfile_template(packaging), context)]
        for output_name, template_id in self._COMPOSE_FILES.items():
            planned.append(FileSpec(output_name, template_id, context))
        return planned
