"""Value types passed between the tree builder, renderer and archive."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FileSpec:
    """A planned file: where it goes and how to render it.

    ``template`` is ``None`` for files that are always empty (package
    markers, ``.gitkeep``).
    """

    path: str
    template: str | None = None
    context: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class GeneratedFile:
    """One rendered file destined for the archive."""

    path: str
    content: str
