from __future__ import annotations

import os
from pathlib import Path, PurePosixPath


def normalize_path(path: str | os.PathLike[str], *, base: Path | None = None) -> Path:
    """Absolute, lexically normalized path; symlinks are not resolved.

    Relative paths are anchored at *base* when given, else the working dir.
    """
    raw = os.fspath(path)
    if base is not None and not os.path.isabs(raw):
        raw = os.path.join(os.fspath(base), raw)
    return Path(os.path.normpath(os.path.abspath(raw)))


def relativize(path: str | os.PathLike[str], *, base: Path) -> str:
    """Return *path* relative to *base* with forward slashes.

    Raises ValueError when *path* is not located under *base*.
    """
    relative = normalize_path(path).relative_to(normalize_path(base))
    return PurePosixPath(*relative.parts).as_posix()

