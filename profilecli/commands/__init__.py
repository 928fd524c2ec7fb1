"""Built-in command implementations for command proxy mode."""

from .config import ConfigCommand
from .edit import EditProfileCommand, OpenHistoryCommand
from .elevate import ElevateCommand
from .hash import HashCommand
from .help import HelpCommand
from .navigate import RepoRootCommand, SuperRootCommand
from .session import SessionCommand

__all__ = [
    "HashCommand",
    "EditProfileCommand",
    "OpenHistoryCommand",
    "HelpCommand",
    "ConfigCommand",
    "RepoRootCommand",
    "SuperRootCommand",
    "ElevateCommand",
    "SessionCommand",
]
