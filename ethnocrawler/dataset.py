"""
Result Writer
=============
Reads every record Crawlee persisted to the dataset directory and writes
them as one JSON array.

Crawlee stores each pushed item as its own zero-padded file
(``000000001.json``, ...) next to a ``__metadata__.json`` bookkeeping file,
so sorted name order is push order and metadata files are skipped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Union

from .run_config import ScraperConfig

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def iter_record_files(dataset_dir: PathLike) -> List[Path]:
    """Return the dataset's record files in enumeration order."""
    path = Path(dataset_dir)
    if not path.is_dir():
        logger.warning(f"[WRITE] Dataset directory {path} does not exist")
        return []
    return sorted(
        p for p in path.glob("*.json")
        if p.is_file() and not p.name.startswith("__")
    )


def read_records(dataset_dir: PathLike) -> List[dict]:
    """Parse every record file.  Malformed JSON raises ``JSONDecodeError``."""
    records = []
    for file in iter_record_files(dataset_dir):
        records.append(json.loads(file.read_text(encoding="utf-8")))
    return records


def write_report(records: List[dict], filepath: PathLike) -> str:
    """Write *records* as a two-space indented JSON array, overwriting."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)
    return str(path.absolute())


def write(config: ScraperConfig) -> str:
    """Concatenate the dataset into ``config.output_file_name``.

    Returns:
        Absolute path of the written report.
    """
    records = read_records(config.dataset_dir)
    output = write_report(records, config.output_file_name)
    logger.info(f"[WRITE] {len(records)} records → {output}")
    return output
