"""Atomic file writing utilities for result exports."""

import tempfile
from pathlib import Path

from filelock import FileLock


def write_text_atomic(path: str | Path, content: str) -> None:
    """Write text to a file atomically.

    Uses file locking and atomic write (write to temp, then rename) so a
    reader never sees a half-written export and an interrupted run leaves
    the previous file in place.

    Args:
        path: Destination file path
        content: Full file content
    """
    path = Path(path)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    lock_path = path.with_suffix(path.suffix + ".lock")
    with FileLock(lock_path):
        # Write to a temporary file in same directory for atomic rename
        fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        temp_path = Path(temp_path_str)
        try:
            with open(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            temp_path.replace(path)
        finally:
            # Clean up temp file on error
            if temp_path.exists():
                temp_path.unlink()


def write_files_atomic(files: dict[Path, str]) -> list[Path]:
    """Write several fully rendered files, each atomically.

    Args:
        files: Mapping of destination path to file content

    Returns:
        The written paths, in mapping order
    """
    written: list[Path] = []
    for path, content in files.items():
        write_text_atomic(path, content)
        written.append(path)
    return written
