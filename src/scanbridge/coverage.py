from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from scanbridge.csv_codec import join_csv, split_csv
from scanbridge.paths import relativize


def compute_coverage_exclusions(
    base_dir: str | os.PathLike[str],
    original_exclusions: str | None,
    discovered_sources: Iterable[str | os.PathLike[str]],
) -> str:
    """Append discovered sources, relative to *base_dir*, to the exclusions CSV.

    Coverage exclusions only match relative patterns. Original entries keep
    their order and come first. Raises ValueError for a discovered path that
    is not under *base_dir*.
    """
    base = Path(base_dir)
    merged = split_csv(original_exclusions)
    merged.extend(relativize(source, base=base) for source in discovered_sources)
    return join_csv(merged)
