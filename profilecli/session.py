"""The interactive profilecli session."""

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Optional

from .bootstrap import SessionBootstrapper, SessionConfig, SessionEnvironment
from .command_proxy import CommandProxy
from .commands import EditProfileCommand, OpenHistoryCommand, SessionCommand
from .config import ProfileConfig
from .line_editing import append_history_line
from .ui import console

logger = logging.getLogger(__name__)


class InteractiveSession:
    """Bootstraps once, then reads and dispatches lines until EOF or /exit."""

    def __init__(
        self,
        config: ProfileConfig,
        proxy: Optional[CommandProxy] = None,
        bootstrapper: Optional[SessionBootstrapper] = None,
        input_func: Callable[[str], str] = input,
    ):
        self.config = config
        self.proxy = proxy or CommandProxy(config)
        self.bootstrapper = bootstrapper or SessionBootstrapper(config)
        self.environment = SessionEnvironment(self.proxy)
        self.input_func = input_func
        self.session_config: Optional[SessionConfig] = None
        self.last_status = 0

    def start(self) -> SessionConfig:
        """Run the bootstrap sequence and register session-bound commands."""
        self.session_config = self.bootstrapper.run(self.environment)
        target = self.session_config.editor_target
        self.proxy.register("edit-profile", EditProfileCommand(target))
        self.proxy.register("open-history", OpenHistoryCommand(target))
        self.proxy.register("session", SessionCommand(self.session_config))
        return self.session_config

    def record(self, line: str) -> None:
        editor = self.environment.line_editor
        if editor is not None:
            editor.add_history(line)
        else:
            append_history_line(
                self.config.history_file, line, self.config.history_no_duplicates
            )

    def run_line(self, line: str) -> Optional[str]:
        """Dispatch one input line; returns any command output."""
        line = self.proxy.expand_alias(line)
        if not line:
            return None

        if line.startswith("/"):
            output = self.proxy.execute(line)
            self.last_status = self.proxy.last_status
            return output

        self.last_status = self.run_external(line)
        return None

    def run_external(self, line: str) -> int:
        """Run a non-slash line as an external program and return its status."""
        try:
            parts = shlex.split(line, posix=os.name != "nt")
        except ValueError as e:
            console.print(f"[red]Error parsing command:[/red] {e}")
            return 1

        if not parts or not parts[0]:
            return 0
        if parts[0] == "cd":
            return self.change_directory(parts[1:])

        try:
            return subprocess.run(parts, shell=False).returncode
        except FileNotFoundError:
            console.print(f"[red]Command not found:[/red] {parts[0]}")
            return 127
        except OSError as e:
            console.print(f"[red]{parts[0]}:[/red] {e}")
            return 126
        except KeyboardInterrupt:
            return 130

    def change_directory(self, args) -> int:
        target = Path(args[0]).expanduser() if args else Path.home()
        try:
            os.chdir(target)
        except OSError as e:
            console.print(f"[red]cd:[/red] {e}")
            return 1
        return 0

    def loop(self) -> None:
        """Read lines until EOF or /exit; history is saved on the way out."""
        try:
            while True:
                try:
                    line = self.input_func(self.environment.prompt.render(self.last_status))
                except EOFError:
                    console.print()
                    break
                except KeyboardInterrupt:
                    console.print()
                    continue

                if not line.strip():
                    continue
                self.record(line)
                output = self.run_line(line)
                if output:
                    console.print(output)
        finally:
            if self.environment.line_editor is not None:
                self.environment.line_editor.save()

    def run(self) -> None:
        self.start()
        self.loop()
