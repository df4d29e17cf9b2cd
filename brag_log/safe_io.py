"""File I/O for daily logs, monthly summaries and the daily template.

Every journal command reads a whole log, edits it in memory and writes it
back. Writes go to a temporary file beside the log and are then atomically
renamed over it, so a failed add or polish never leaves a half-written log.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from .errors import StorageError

logger = logging.getLogger(__name__)


def read_text(path: Path | str, encoding: str = "utf-8") -> str:
    """Read a whole file as text.

    Raises:
        StorageError: If the file can't be read (wraps underlying OSError).
    """
    target = Path(path)
    try:
        return target.read_text(encoding=encoding)
    except OSError as exc:
        raise StorageError(f"Failed to read {target}: {exc}") from exc


def atomic_write(path: Path | str, content: str, encoding: str = "utf-8") -> None:
    """Replace a daily log or summary with new content in one step.

    The content is written and fsynced to a temp file in the log's own
    directory, then moved over the target with os.replace. Line endings are
    written as given so a log edited on another platform keeps its newlines.
    If anything fails, the previous version of the log is left in place.

    Args:
        path: Log or summary path. Missing parent directories (a fresh
            LOGS_DIR or SUMMARIES_DIR) are created.
        content: Full document text.
        encoding: File encoding (default utf-8).

    Raises:
        StorageError: If the write fails (wraps underlying OSError).
    """
    target = Path(path)

    fd = None
    tmp_path = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            fd = None  # os.fdopen takes ownership of the fd
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    except OSError as exc:
        # Clean up temp file on failure
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        if fd is not None:
            os.close(fd)
        raise StorageError(f"Failed to write {target}: {exc}") from exc
    logger.debug("Wrote %d chars to %s", len(content), target)


def copy_template(template_path: Path | str, target: Path | str) -> None:
    """Create target as a copy of a template file.

    Raises:
        StorageError: If the template is missing or the copy fails.
    """
    source = Path(template_path)
    destination = Path(target)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise StorageError(f"Failed to copy template {source.name}: {exc}") from exc
