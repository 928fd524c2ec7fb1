"""System clipboard access through the platform's clipboard tools."""

import logging
import platform
import shutil
import subprocess
from typing import List, Optional

from .exceptions import ClipboardError

logger = logging.getLogger(__name__)

# Candidate commands per platform, tried in order.
CLIPBOARD_COMMANDS = {
    "Windows": [["clip"]],
    "Darwin": [["pbcopy"]],
    "Linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
}


def find_clipboard_command(system: Optional[str] = None) -> Optional[List[str]]:
    """Return the first clipboard command available on this platform."""
    system = system or platform.system()
    for candidate in CLIPBOARD_COMMANDS.get(system, CLIPBOARD_COMMANDS["Linux"]):
        if shutil.which(candidate[0]):
            return candidate
    return None


def copy_to_clipboard(text: str, timeout: int = 10) -> None:
    """Place text on the system clipboard."""
    cmd_args = find_clipboard_command()
    if cmd_args is None:
        raise ClipboardError("No clipboard tool found (tried clip, pbcopy, wl-copy, xclip, xsel)")

    try:
        result = subprocess.run(
            cmd_args,
            input=text,
            capture_output=True,
            text=True,
            timeout=timeout,
            shell=False,
        )
    except subprocess.TimeoutExpired:
        raise ClipboardError(f"{cmd_args[0]} timed out after {timeout} seconds")

    if result.returncode != 0:
        raise ClipboardError(
            f"{cmd_args[0]} failed with exit code {result.returncode}: {result.stderr.strip()}"
        )
    logger.debug("Copied %d characters with %s", len(text), cmd_args[0])
