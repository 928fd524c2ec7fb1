"""Hash command implementation for file digests."""

from typing import List

from ..command_proxy import Command
from ..config import ProfileConfig
from ..hashing import hash_file


class HashCommand(Command):
    """Command to hash a file and copy the digest to the clipboard."""

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        """Hash the file named by the first non-flag argument."""
        copy = "--no-copy" not in args
        paths = [arg for arg in args if arg != "--no-copy"]
        return hash_file(paths[0], copy=copy)

    def validate_args(self, args: List[str]) -> bool:
        return len([arg for arg in args if arg != "--no-copy"]) == 1

    def get_help(self) -> str:
        """Get help text for the hash command."""
        return """Compute the SHA-256 digest of a file:
  /hash <path>             - Print the digest and copy it to the clipboard
  /hash <path> --no-copy   - Print the digest only

Examples:
  /hash setup.exe
  /hash ~/Downloads/image.iso --no-copy"""
