"""Prompt theming initializer: run it and evaluate the variables it exports."""

import logging
import re
import shlex
import shutil
import subprocess
from typing import Dict, List

from .exceptions import ProfileError

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_exports(output: str) -> Dict[str, str]:
    """Collect `export NAME=value` assignments with literal values.

    Values that need the shell to expand them are skipped.
    """
    environment = {}
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line.startswith("export "):
            continue
        try:
            tokens = shlex.split(line[len("export "):], comments=True)
        except ValueError:
            logger.debug("Skipping unparseable export line: %s", line)
            continue

        for token in tokens:
            name, sep, value = token.partition("=")
            if not sep or not NAME_PATTERN.match(name):
                continue
            if "$" in value or "`" in value:
                logger.debug("Skipping %s: value needs shell expansion", name)
                continue
            environment[name] = value
    return environment


def run_theme_initializer(command: List[str], timeout: int = 30) -> Dict[str, str]:
    """Run the initializer and return the environment it exports.

    Raises:
        ProfileError: If the tool is missing, times out or fails.
    """
    if not command:
        raise ProfileError("No prompt theming initializer configured")
    if shutil.which(command[0]) is None:
        raise ProfileError(f"Prompt theming initializer not found: {command[0]}")

    try:
        result = subprocess.run(
            command, capture_output=True, text=True, timeout=timeout, shell=False
        )
    except subprocess.TimeoutExpired:
        raise ProfileError(f"{command[0]} timed out after {timeout} seconds")

    if result.returncode != 0:
        raise ProfileError(
            f"{' '.join(command)} failed with exit code {result.returncode}: "
            f"{(result.stderr or '').strip()}"
        )

    return parse_exports(result.stdout or "")
