# pension_model/data/readers.py
"""
Functions for reading the reference tables from disk.

The engine never touches the filesystem. Whoever owns the process lifecycle
(the CLI, a web worker) calls ``get_reference_data`` once; the result is
memoised for the lifetime of the process and handed to every projection.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Union

from pension_model.reference import ReferenceData, ReferenceDataLoadError, load_reference_data

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_REFERENCE_DIR = Path(__file__).resolve().parent / "reference"
DEFAULT_LIFESPAN_FILE = DEFAULT_REFERENCE_DIR / "lifespan.csv"
DEFAULT_INDEXATION_FILE = DEFAULT_REFERENCE_DIR / "indexation.csv"


def read_reference_text(file_path: PathLike, encoding: str = "utf-8") -> str:
    """
    Reads the raw text of one reference table.

    Args:
        file_path: Path of the delimited text file.
        encoding: Text encoding; a UTF-8 byte-order mark is tolerated.

    Returns:
        The file contents.

    Raises:
        ReferenceDataLoadError: If the file is missing or cannot be read.
    """
    if not isinstance(file_path, Path):
        file_path = Path(file_path)

    logger.info(f"Attempting to read reference table from: {file_path}")

    if not file_path.is_file():
        logger.error(f"Reference table not found: {file_path}")
        raise ReferenceDataLoadError(f"Reference table not found: {file_path}")

    try:
        text = file_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading reference table {file_path}: {e}")
        raise ReferenceDataLoadError(f"Error reading reference table {file_path}") from e

    return text.lstrip("\ufeff")


def read_reference_data(
    lifespan_path: PathLike = DEFAULT_LIFESPAN_FILE,
    indexation_path: PathLike = DEFAULT_INDEXATION_FILE,
) -> ReferenceData:
    """Read and parse both reference tables without caching."""
    return load_reference_data(
        read_reference_text(lifespan_path),
        read_reference_text(indexation_path),
    )


@lru_cache(maxsize=None)
def _cached_reference_data(lifespan_path: str, indexation_path: str) -> ReferenceData:
    logger.info("Loading reference data (first use in this process)")
    return read_reference_data(lifespan_path, indexation_path)


def get_reference_data(
    lifespan_path: PathLike = DEFAULT_LIFESPAN_FILE,
    indexation_path: PathLike = DEFAULT_INDEXATION_FILE,
) -> ReferenceData:
    """
    Return the process-wide reference data, loading it lazily on first use.

    Failed loads are not cached, so a later call retries. A restart is the only
    way to pick up changed files.
    """
    return _cached_reference_data(
        str(Path(lifespan_path).resolve()),
        str(Path(indexation_path).resolve()),
    )


def clear_reference_cache() -> None:
    """Forget the memoised tables (tests only)."""
    _cached_reference_data.cache_clear()


__all__ = [
    "DEFAULT_LIFESPAN_FILE",
    "DEFAULT_INDEXATION_FILE",
    "read_reference_text",
    "read_reference_data",
    "get_reference_data",
    "clear_reference_cache",
]
