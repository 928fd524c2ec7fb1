"""Help command implementation for showing available commands."""

from typing import List, Optional

from ..command_proxy import Command, CommandProxy
from ..config import ProfileConfig


class HelpCommand(Command):
    """Command to show help information."""

    def __init__(self, proxy: Optional[CommandProxy] = None):
        self.proxy = proxy

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        """Show help information."""

        if args and args[0] != "":
            return self._show_command_help(args[0].lstrip("/"), config)
        else:
            return self._show_general_help()

    def _show_general_help(self) -> str:
        """Show general help with all available commands."""
        help_text = """profilecli - Personal Shell Session

USAGE:
  profilecli                  - Start an interactive session (runs the profile)
  profilecli /<command>       - Run one command and exit

AVAILABLE COMMANDS:
  /hash <path>                - SHA-256 of a file, copied to the clipboard
  /edit-profile               - Open the profile in the editor
  /open-history               - Open the command history in the editor
  /config [options]           - Show or save the configuration
  /session                    - Show the session state (interactive only)
  /help [command]             - Show help (this message)
  /exit, /quit                - End the session

PLATFORM COMMANDS:
  /repo-root, /super-root     - cd to the git repository root (Linux, macOS)
  /sudo <command>             - Run a command elevated (Windows)

INSIDE A SESSION:
  Lines without a leading / run as programs; aliases expand first.
  cd <dir> changes the session directory.

EXAMPLES:
  profilecli /hash installer.msi
  profilecli /edit-profile
  profilecli /help hash

For command-specific help: /help <command>"""

        return help_text

    def _show_command_help(self, command_name: str, config: ProfileConfig) -> str:
        """Show help for a specific command."""
        # Import here to avoid circular imports
        from ..platform_setup import detect_platform

        proxy = self.proxy
        if proxy is None:
            proxy = CommandProxy(config, extra_commands=detect_platform().commands())

        command_help = proxy.get_command_help(command_name)

        if command_help:
            return f"Help for /{command_name}:\n\n{command_help}"
        else:
            available_commands = ", ".join(proxy.get_available_commands())
            return f"Unknown command: /{command_name}\n\nAvailable commands: {available_commands}\n\nUse '/help' for full help."

    def get_help(self) -> str:
        """Get help text for the help command."""
        return """Show help information:
  /help                    - Show general help and all commands
  /help <command>          - Show help for specific command

Examples:
  /help                    - Show this help
  /help hash               - Show help for the hash command"""
