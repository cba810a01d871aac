"""Output filesystems the materializer writes to.

The engine only needs two operations: create a directory (with parents,
idempotently) and write a file with truncate semantics.  ``LocalFilesystem``
writes to disk; ``MemoryFilesystem`` keeps everything in dictionaries and is
used for dry runs.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Protocol

from .errors import FilesystemError


class OutputFilesystem(Protocol):
    """Writable hierarchical store."""

    def make_dirs(self, path: Path) -> None:
        """Create *path* and any missing parents. Existing directories are fine."""
        ...

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Create or truncate *path* and write *data* to it."""
        ...


class LocalFilesystem:
    """Writes to the local disk."""

    def make_dirs(self, path: Path) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Directory creation failed for {path}: {exc}", str(path)) from exc

    def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            with open(path, "wb") as fh:
                written = fh.write(data)
        except OSError as exc:
            raise FilesystemError(f"Cannot write file {path}: {exc}", str(path)) from exc
        if written != len(data):
            raise FilesystemError(
                f"Wrong number of bytes written to {path}: expected {len(data)}, got {written}",
                str(path),
            )


class MemoryFilesystem:
    """In-memory filesystem keyed by posix path strings."""

    def __init__(self) -> None:
        self.directories: set[str] = set()
        self.files: dict[str, bytes] = {}

    def make_dirs(self, path: Path) -> None:
        p = PurePosixPath(Path(path).as_posix())
        key = str(p)
        if key in self.files:
            raise FilesystemError(f"Directory creation failed for {key}: a file exists there", key)
        self.directories.add(key)
        self.directories.update(str(parent) for parent in p.parents)

    def write_bytes(self, path: Path, data: bytes) -> None:
        key = Path(path).as_posix()
        parent = str(PurePosixPath(key).parent)
        if parent not in self.directories:
            raise FilesystemError(f"Cannot write file {key}: parent directory does not exist", key)
        if key in self.directories:
            raise FilesystemError(f"Cannot write file {key}: is a directory", key)
        self.files[key] = bytes(data)

    def read_bytes(self, path: Path) -> bytes:
        return self.files[Path(path).as_posix()]

    def exists(self, path: Path) -> bool:
        key = Path(path).as_posix()
        return key in self.files or key in self.directories
