"""
Idempotent file writes.

Generated files are compared byte-for-byte with what is already on disk and
left alone when nothing changed, so their mtime does not trigger rebuilds
downstream. When they do change, the new content is written to a temporary
file next to the target and moved into place with os.replace.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from ..core.exceptions import ArtifactIOError


def same_content_as(path: Path, content: bytes) -> bool:
    """Check whether path exists and holds exactly content.

    Raises:
        ArtifactIOError: If an existing file cannot be read.
    """
    try:
        current = path.read_bytes()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ArtifactIOError(
            "Cannot read existing file", path=str(path), operation="read", cause=e
        ) from e
    return current == content


def write_if_changed(path: Path, text: str) -> bool:
    """
    Write text to path unless the file already holds the same bytes.

    Args:
        path: Destination file
        text: Content, encoded as UTF-8

    Returns:
        True if the file was written, False if it was already up to date

    Raises:
        ArtifactIOError: On any filesystem failure.
    """
    path = Path(path)
    content = text.encode("utf-8")

    if same_content_as(path, content):
        return False

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        # mkstemp creates the file owner-only
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise ArtifactIOError(
            "Cannot write file", path=str(path), operation="write", cause=e
        ) from e

    return True
