"""File digests for the /hash command."""

import hashlib
import logging
from pathlib import Path
from typing import Union

from .clipboard import copy_to_clipboard
from .exceptions import ClipboardError, NotFoundError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def compute_digest(path: Path) -> str:
    """SHA-256 of the file contents as uppercase hex."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest().upper()


def hash_file(path: Union[str, Path], copy: bool = True) -> str:
    """Hash a file and optionally put the digest on the clipboard.

    Args:
        path: File to hash. Must exist.
        copy: Copy the digest to the system clipboard.

    Returns:
        The digest string.

    Raises:
        NotFoundError: If the path does not exist. The clipboard is untouched.
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise NotFoundError(path)

    digest = compute_digest(path)

    if copy:
        try:
            copy_to_clipboard(digest)
        except ClipboardError as e:
            logger.warning("Digest not copied to clipboard: %s", e)

    return digest
