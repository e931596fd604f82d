"""Filesystem crawl for sources the build model does not declare."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from scanbridge.paths import normalize_path

logger = logging.getLogger(__name__)

# Languages whose analysis needs compiled output; only discoverable when the
# user hands the engine binaries and libraries explicitly.
BINARY_LANGUAGE_EXTENSIONS: frozenset[str] = frozenset({".java", ".jav", ".kt", ".kts"})

SOURCE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".c", ".cc", ".cpp", ".cxx", ".h", ".hh", ".hpp",
        ".cs", ".go", ".rb", ".php", ".py", ".scala", ".swift", ".groovy",
        ".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".vue",
        ".html", ".htm", ".css", ".scss", ".less",
        ".xml", ".json", ".yaml", ".yml", ".tf", ".sql", ".sh", ".bash",
        ".properties", ".gradle",
    }
)

# Dot-directories (.git, .idea, .github, ...) are always pruned as well.
DEFAULT_EXCLUDED_DIR_NAMES: frozenset[str] = frozenset(
    {"node_modules", "__pycache__", "venv"}
)


def _frozen_paths(paths: Iterable[str | os.PathLike[str]], base: Path) -> frozenset[Path]:
    return frozenset(normalize_path(path, base=base) for path in paths)


@dataclass(frozen=True)
class DiscoveryScope:
    """Everything one walk needs; all paths absolute and normalized."""

    root: Path
    declared_sources: frozenset[Path] = frozenset()
    skipped_dirs: frozenset[Path] = frozenset()
    excluded_report_files: frozenset[Path] = frozenset()
    include_binary_languages: bool = False
    excluded_dir_names: frozenset[str] = DEFAULT_EXCLUDED_DIR_NAMES

    @classmethod
    def build(
        cls,
        root: str | os.PathLike[str],
        *,
        declared_sources: Iterable[str | os.PathLike[str]] = (),
        skipped_dirs: Iterable[str | os.PathLike[str]] = (),
        excluded_report_files: Iterable[str | os.PathLike[str]] = (),
        include_binary_languages: bool = False,
        extra_excluded_dir_names: Iterable[str] = (),
    ) -> DiscoveryScope:
        base = normalize_path(root)
        return cls(
            root=base,
            declared_sources=_frozen_paths(declared_sources, base),
            skipped_dirs=_frozen_paths(skipped_dirs, base),
            excluded_report_files=_frozen_paths(excluded_report_files, base),
            include_binary_languages=include_binary_languages,
            excluded_dir_names=DEFAULT_EXCLUDED_DIR_NAMES | frozenset(extra_excluded_dir_names),
        )

    def prunes(self, directory: Path) -> bool:
        return (
            directory.name.startswith(".")
            or directory.name in self.excluded_dir_names
            or directory in self.skipped_dirs
            or directory in self.declared_sources
        )


def is_interesting_file(path: Path, *, include_binary_languages: bool) -> bool:
    extension = path.suffix.lower()
    if extension in BINARY_LANGUAGE_EXTENSIONS:
        return include_binary_languages
    return extension in SOURCE_EXTENSIONS


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def iter_discovered_sources(scope: DiscoveryScope) -> Iterator[Path]:
    """Yield undeclared source files under ``scope.root`` in pre-order.

    Directories are pruned before descent. Entries are visited in sorted
    order. Symlinks are never followed: symlinked directories are not
    descended into and symlinked files are ignored, so each file is counted
    once and nothing outside the root is reached. Raises OSError when the
    tree cannot be walked; files yielded before the failure stay valid.
    """
    root = scope.root
    if root in scope.skipped_dirs or root in scope.declared_sources:
        logger.debug("Skipping discovery root %s", root)
        return
    for current, dirnames, filenames in os.walk(
        root, topdown=True, onerror=_raise_walk_error, followlinks=False
    ):
        current_dir = Path(current)
        kept: list[str] = []
        for name in sorted(dirnames):
            candidate = current_dir / name
            if scope.prunes(candidate):
                logger.debug("Not descending into %s", candidate)
                continue
            kept.append(name)
        dirnames[:] = kept
        for name in sorted(filenames):
            candidate = current_dir / name
            if candidate in scope.declared_sources:
                continue
            if candidate in scope.excluded_report_files:
                continue
            if not is_interesting_file(
                candidate, include_binary_languages=scope.include_binary_languages
            ):
                continue
            if candidate.is_symlink():
                continue
            yield candidate
