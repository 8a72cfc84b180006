"""File helpers used before a store reads its backing file."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def create_new_file(path: Path) -> bool:
    """Create an empty file (and its parent directories) if it does not exist.

    Returns True when the file was created, False when it already existed.
    Errors (permissions, a directory in the way) propagate.
    """
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)
    logger.info("Created empty properties file %s", path)
    return True
