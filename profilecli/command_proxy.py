"""Command proxy system for handling slash-prefixed commands."""

import logging
import shlex
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional

from .config import ProfileConfig
from .exceptions import ProfileError
from .ui import console

logger = logging.getLogger(__name__)


class Command(ABC):
    """Abstract base class for all commands."""

    @abstractmethod
    def execute(self, args: List[str], config: ProfileConfig) -> str:
        """Execute the command with given arguments."""
        pass

    @abstractmethod
    def get_help(self) -> str:
        """Get help text for this command."""
        pass

    def validate_args(self, args: List[str]) -> bool:
        """Validate command arguments. Override if needed."""
        return True


class CommandProxy:
    """Main command proxy that routes slash commands to their handlers."""

    def __init__(self, config: ProfileConfig, extra_commands: Optional[Mapping[str, Command]] = None):
        self.config = config
        self.commands = self._register_commands()
        self.aliases: Dict[str, str] = {}
        self.last_status = 0
        if extra_commands:
            self.commands.update(extra_commands)

    def execute(self, command_line: str) -> str:
        """Execute a slash command and record its exit status."""
        command_line = command_line.lstrip().lstrip("/")

        if not command_line:
            self.last_status = 1
            return "No command specified. Use /help for available commands."

        # Parse command and arguments safely
        try:
            parts = shlex.split(command_line)
        except ValueError as e:
            self.last_status = 1
            return f"Error parsing command: {e}"

        cmd = parts[0]
        args = parts[1:]

        if cmd not in self.commands:
            self.last_status = 1
            return f"Unknown command: /{cmd}\nUse /help for available commands."

        handler = self.commands[cmd]

        if not handler.validate_args(args):
            self.last_status = 1
            return f"Invalid arguments for /{cmd}\n{handler.get_help()}"

        try:
            result = handler.execute(args, self.config)
        except (ProfileError, OSError) as e:
            self.last_status = 1
            logger.debug("/%s failed", cmd, exc_info=True)
            return f"Error: {e}"
        except Exception as e:
            self.last_status = 1
            if self.config.show_debug:
                import traceback

                return f"Command execution error: {e}\n{traceback.format_exc()}"
            return f"Command execution error: {e}"

        self.last_status = 0
        return result

    def _register_commands(self) -> Dict[str, Command]:
        """Register all available commands."""
        from .commands import (
            ConfigCommand,
            EditProfileCommand,
            HashCommand,
            HelpCommand,
            OpenHistoryCommand,
        )

        return {
            "hash": HashCommand(),
            "edit-profile": EditProfileCommand(),
            "open-history": OpenHistoryCommand(),
            "help": HelpCommand(self),
            "config": ConfigCommand(),
            "exit": ExitCommand(),
            "quit": ExitCommand(),
        }

    def register(self, name: str, command: Command) -> None:
        """Add a command for the rest of the session."""
        self.commands[name] = command

    def register_aliases(self, aliases: Mapping[str, str]) -> None:
        """Register alias name -> command line mappings."""
        self.aliases.update(aliases)

    def expand_alias(self, line: str) -> str:
        """Replace a leading alias with its command line. One level only."""
        stripped = line.strip()
        if not stripped:
            return stripped
        name, _, rest = stripped.partition(" ")
        target = self.aliases.get(name)
        if target is None:
            return stripped
        return f"{target} {rest}".strip()

    def is_command(self, name: str) -> bool:
        return name.lstrip("/") in self.commands

    def get_available_commands(self) -> List[str]:
        """Get list of available command names."""
        return sorted(self.commands.keys())

    def get_command_help(self, command: str) -> Optional[str]:
        """Get help for a specific command."""
        if command in self.commands:
            return self.commands[command].get_help()
        return None


class SystemCommand(Command):
    """Base class for commands that shell out to an external tool."""

    def run_system_command(self, cmd_args: List[str], config: ProfileConfig) -> str:
        """Run a tool and return its stripped stdout.

        Raises:
            ProfileError: If the tool is missing, times out or exits non-zero.
        """
        try:
            result = subprocess.run(
                cmd_args,
                capture_output=True,
                text=True,
                timeout=config.command_timeout,
                shell=False,
            )
        except subprocess.TimeoutExpired:
            raise ProfileError(f"Command timed out after {config.command_timeout} seconds")
        except FileNotFoundError:
            raise ProfileError(f"Command not found: {cmd_args[0] if cmd_args else 'unknown'}")

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ProfileError(
                stderr or f"Command failed with exit code {result.returncode}"
            )

        return (result.stdout or "").strip()


class ExitCommand(Command):
    """Command to end the session."""

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        console.print("[yellow]Goodbye![/yellow]")
        sys.exit(0)

    def get_help(self) -> str:
        return "End the profilecli session."
