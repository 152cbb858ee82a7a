"""Read digest text files from disk."""

import gzip
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_digest(path: str | Path) -> str:
    """Read a digest file (plain or gzip) as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no text.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Digest file not found: {path}")

    opener = gzip.open if path.suffix == ".gz" else open
    with opener(path, "rt", encoding="utf-8", errors="replace") as f:
        text = f.read()

    if not text.strip():
        raise ValueError(f"Digest file is empty: {path}")

    logger.info("Read %d characters from %s", len(text), path)
    return text
