"""File utilities for safe file operations."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


def atomic_write(file_path: Union[str, Path], content: str) -> None:
    """Write content to a file atomically to prevent corruption from concurrent writes.

    Content goes to a temporary file in the target directory first, then is
    renamed over the target, so readers always see a complete file.

    Args:
        file_path: Path to the target file
        content: Content to write to the file
    """
    file_path = Path(file_path)

    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory as the target keeps the rename on one filesystem
    fd, temp_path = tempfile.mkstemp(
        dir=file_path.parent,
        prefix=f".{file_path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w') as f:
            f.write(content)

        os.replace(temp_path, file_path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def write_json(file_path: Union[str, Path], data: Any) -> None:
    """Serialize ``data`` as indented JSON and write it atomically."""
    atomic_write(file_path, json.dumps(data, indent=2, sort_keys=True) + "\n")


def read_json(file_path: Union[str, Path], default: Any = None) -> Any:
    """Read a JSON file, returning ``default`` when it is missing or corrupt.

    Args:
        file_path: Path to the JSON file
        default: Value returned when the file cannot be read
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return default

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, IOError) as err:
        logger.warning(f"Could not read {file_path}: {err}")
        return default
