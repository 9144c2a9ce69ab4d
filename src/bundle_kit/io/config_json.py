"""I/O operations for the host tool's JSON config file.

This module provides the read, backup, and atomic write primitives used by
the installer. All writes go through a temporary file followed by a rename
so a crash mid-write never corrupts the existing file.
"""

import json
import logging
import os
import shutil
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from bundle_kit.errors import MalformedExistingConfigError
from bundle_kit.models.config import ConfigDocument, parse_config_document

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S%fZ"


def load_config(config_path: Path) -> ConfigDocument | None:
    """Load the config document from disk.

    Args:
        config_path: Path to the JSON config file

    Returns:
        Parsed document, or None if the file doesn't exist

    Raises:
        MalformedExistingConfigError: If the file exists but cannot be read as
            UTF-8 text or is not a JSON object
    """
    if not config_path.exists():
        return None

    try:
        json_str = config_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedExistingConfigError(config_path, f"not UTF-8 text: {e.reason}") from e
    except OSError as e:
        raise MalformedExistingConfigError(config_path, f"unreadable: {e.strerror or e}") from e

    try:
        return parse_config_document(json_str)
    except ValidationError as e:
        errors = e.errors()
        detail = errors[0]["msg"] if errors else str(e)
        raise MalformedExistingConfigError(config_path, detail) from e


def serialize_config(document: ConfigDocument) -> str:
    """Serialize a document deterministically, preserving key order."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def save_config(config_path: Path, document: ConfigDocument) -> None:
    """Save the config document to disk atomically.

    Writes to a temporary file first, then renames to avoid corruption.
    Creates parent directories if they don't exist. The temporary file is
    removed if the write fails. A symlinked config_path is resolved first so
    the link survives and its target receives the new content.

    Args:
        config_path: Path to the JSON config file
        document: Document to save
    """
    if config_path.is_symlink():
        config_path = config_path.resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = config_path.with_name(config_path.name + ".tmp")
    content = serialize_config(document)

    try:
        with temp_path.open("w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, config_path)
    except OSError:
        if temp_path.is_file():
            temp_path.unlink()
        raise

    logger.debug("Wrote %d bytes to %s", len(content), config_path)


def backup_path_for(config_path: Path, backup_dir: Path, timestamp: datetime) -> Path:
    """Get a backup path tagged with timestamp that does not collide.

    Returns:
        <backup_dir>/<config name>.<timestamp>.bak, with a numeric suffix
        appended if that name is taken
    """
    stamp = timestamp.strftime(BACKUP_TIMESTAMP_FORMAT)
    candidate = backup_dir / f"{config_path.name}.{stamp}.bak"
    counter = 1
    while candidate.exists():
        candidate = backup_dir / f"{config_path.name}.{stamp}.{counter}.bak"
        counter += 1
    return candidate


def write_backup(config_path: Path, backup_dir: Path, timestamp: datetime | None = None) -> Path:
    """Copy the config file verbatim into backup_dir.

    Args:
        config_path: Existing config file to back up
        backup_dir: Directory for backup files (created if missing)
        timestamp: Run timestamp (defaults to now, UTC)

    Returns:
        Path to the written backup file

    Raises:
        OSError: If the backup could not be written
    """
    if timestamp is None:
        timestamp = datetime.now(UTC)

    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = backup_path_for(config_path, backup_dir, timestamp)
    shutil.copyfile(config_path, backup_path)
    return backup_path
