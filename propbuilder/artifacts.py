"""
artifacts.py

Responsibility: Create generated source files, keyed by fully qualified name.

Rules:
- One open-write-close cycle per artifact; the writer is always closed.
- `DirectoryArtifactSink` replaces a file only once its write completes.
- `DirectoryArtifactSink` overwrites existing files so repeated passes are idempotent.
- Failures surface as `OSError`; callers decide how to report them.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, Protocol, TextIO

log = logging.getLogger(__name__)


class ArtifactSink(Protocol):
    def create_source_file(self, qualified_name: str) -> ContextManager[TextIO]:
        ...


class DirectoryArtifactSink:
    """Write artifacts under `root`, one directory level per namespace segment."""

    def __init__(self, root: str | Path, extension: str) -> None:
        self._root = Path(root)
        self._extension = extension

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, qualified_name: str) -> Path:
        parts = qualified_name.split(".")
        return self._root.joinpath(*parts[:-1], parts[-1] + self._extension)

    @contextmanager
    def create_source_file(self, qualified_name: str) -> Iterator[TextIO]:
        path = self.path_for(qualified_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the destination and swap in on success; a failed
        # rewrite leaves the previous artifact untouched.
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                yield fh
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
        log.debug("Wrote %s", path)


class MemoryArtifactSink:
    """Keep artifacts in memory; a file is stored only if its write completes."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}

    @contextmanager
    def create_source_file(self, qualified_name: str) -> Iterator[TextIO]:
        buf = io.StringIO()
        try:
            yield buf
            self.files[qualified_name] = buf.getvalue()
        finally:
            buf.close()
