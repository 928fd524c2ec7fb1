"""Editor dispatch: open a file in whichever editor hosts this session."""

import logging
import os
import platform
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Union
from urllib.parse import quote

import typer

from .config import ProfileConfig
from .exceptions import NotFoundError, ProfileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegratedHostTarget:
    """The VS Code integrated terminal; files open through its URI handler."""

    scheme: str = "vscode"

    def open(self, path: Path) -> None:
        location = quote(path.resolve().as_posix().lstrip("/"), safe="/:")
        uri = f"{self.scheme}://file/{location}"
        logger.debug("Opening %s via %s", path, uri)
        status = typer.launch(uri)
        if status != 0:
            raise ProfileError(f"Could not open {uri} (exit code {status})")


@dataclass(frozen=True)
class ScriptingHostTarget:
    """A Neovim terminal; files open through the editor's remote command."""

    server: str
    executable: str = "nvim"

    def command_for(self, path: Path) -> List[str]:
        return [self.executable, "--server", self.server, "--remote", str(path)]

    def open(self, path: Path) -> None:
        subprocess.run(self.command_for(path), check=False, shell=False)


@dataclass(frozen=True)
class FallbackEditorTarget:
    """A plain-text editor started as its own process."""

    command: List[str]
    wait: bool = True

    def open(self, path: Path) -> None:
        process = subprocess.Popen([*self.command, str(path)], shell=False)
        if self.wait:
            process.wait()


EditorTarget = Union[IntegratedHostTarget, ScriptingHostTarget, FallbackEditorTarget]


def default_text_editor(env: Mapping[str, str], system: Optional[str] = None) -> str:
    """The platform's plain-text editor."""
    system = system or platform.system()
    if system == "Windows":
        system_root = env.get("SystemRoot", r"C:\Windows")
        return str(Path(system_root) / "system32" / "notepad.exe")
    return "vi"


def resolve_editor_target(
    config: ProfileConfig,
    env: Optional[Mapping[str, str]] = None,
    system: Optional[str] = None,
) -> EditorTarget:
    """Probe the current host once and pick how files get opened."""
    env = os.environ if env is None else env

    if env.get("TERM_PROGRAM") == "vscode":
        return IntegratedHostTarget()

    if env.get("NVIM"):
        return ScriptingHostTarget(server=env["NVIM"])

    editor = config.editor or env.get("VISUAL") or env.get("EDITOR")
    if editor:
        command = shlex.split(editor, posix=(system or platform.system()) != "Windows")
    else:
        command = [default_text_editor(env, system)]
    return FallbackEditorTarget(command=command, wait=config.editor_wait)


def describe_target(target: EditorTarget) -> str:
    if isinstance(target, IntegratedHostTarget):
        return "VS Code integrated terminal"
    if isinstance(target, ScriptingHostTarget):
        return f"Neovim ({target.server})"
    return " ".join(target.command)


def open_in_editor(path: Union[str, Path], target: EditorTarget) -> None:
    """Open one editor session on an existing path."""
    path = Path(path).expanduser()
    if not path.exists():
        raise NotFoundError(path)
    target.open(path)
