"""
Scoped temporary files for tfsbridge.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
import logging

logger = logging.getLogger(__name__)


@contextmanager
def scoped_temp_file(suffix: str = "", dir: Optional[str] = None) -> Iterator[Path]:
    """
    Create an empty temporary file and delete it when the block exits.

    The file is removed whether the block finishes or raises.

    Example:
        with scoped_temp_file() as path:
            path.write_bytes(data)
            client.run("hash-object", "-w", path)
    """
    fd, name = tempfile.mkstemp(prefix="tfsbridge-", suffix=suffix, dir=dir)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"Temporary file already removed: {path}")
