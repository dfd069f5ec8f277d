"""Zip archive assembly.

Files are stored under a single root directory named after the project.
Timestamps and permissions are fixed so that identical input produces
byte-identical archives.
"""

from __future__ import annotations

import io
import zipfile
from pathlib import PurePosixPath

# Earliest timestamp the zip format can represent.
_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o644


class DuplicateFileError(ValueError):
    """Raised when two files resolve to the same path within one archive."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Duplicate file in generated project: {path}")


class ArchiveSerializationError(RuntimeError):
    """Raised when the zip library fails to serialise the archive."""


class ZipArchive:
    """In-memory zip archive rooted at ``root_dir``."""

    def __init__(self, root_dir: str) -> None:
        if not root_dir.strip(".") or "/" in root_dir or "\\" in root_dir:
            raise ValueError(f"invalid archive root directory: {root_dir!r}")
        self.root_dir = root_dir
        self._files: dict[str, str] = {}

    def add_file(self, path: str, content: str) -> None:
        """Queue *content* at *path* (relative to the root directory).

        Raises:
            DuplicateFileError: If *path* was already added.
            ValueError: If *path* is absolute or escapes the root directory.
        """
        normalized = _normalize(path)
        if normalized in self._files:
            raise DuplicateFileError(normalized)
        self._files[normalized] = content

    def serialize(self) -> bytes:
        """Write the archive and return its bytes.

        Raises:
            ArchiveSerializationError: If the zip library fails.
        """
        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for path, content in self._files.items():
                    info = zipfile.ZipInfo(f"{self.root_dir}/{path}", date_time=_FIXED_DATE_TIME)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    info.external_attr = _FILE_MODE << 16
                    zf.writestr(info, content.encode("utf-8"))
        except (OSError, ValueError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            raise ArchiveSerializationError(f"Failed to build archive '{self.root_dir}': {exc}") from exc
        return buffer.getvalue()


def create_archive(root_dir: str) -> ZipArchive:
    """Create an empty archive rooted at *root_dir*."""
    return ZipArchive(root_dir)


def _normalize(path: str) -> str:
    pure = PurePosixPath(path.replace("\\", "/"))
    if pure.is_absolute() or ".." in pure.parts or not pure.parts:
        raise ValueError(f"invalid archive path: {path!r}")
    return pure.as_posix()
