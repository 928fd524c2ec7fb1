"""Privilege elevation shim for Windows sessions."""

import os
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional

from ..command_proxy import Command
from ..config import ProfileConfig
from ..exceptions import ProfileError


def quote_powershell(value: str) -> str:
    """Single-quote a value for a PowerShell command line."""
    return "'" + value.replace("'", "''") + "'"


def powershell_executable(env: Mapping[str, str]) -> str:
    system_root = env.get("SystemRoot", r"C:\Windows")
    return str(
        Path(system_root) / "System32" / "WindowsPowerShell" / "v1.0" / "powershell.exe"
    )


def build_elevation_command(args: List[str], env: Optional[Mapping[str, str]] = None) -> List[str]:
    """Relaunch args with an elevation request, waiting for the exit code."""
    env = os.environ if env is None else env
    script = f"$p = Start-Process -FilePath {quote_powershell(args[0])}"
    if len(args) > 1:
        script += " -ArgumentList " + ",".join(quote_powershell(a) for a in args[1:])
    script += " -Verb RunAs -Wait -PassThru; exit $p.ExitCode"
    return [powershell_executable(env), "-NoProfile", "-NonInteractive", "-Command", script]


class ElevateCommand(Command):
    """Run a command elevated and block until it exits."""

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        result = subprocess.run(build_elevation_command(args), shell=False)
        if result.returncode != 0:
            raise ProfileError(f"{args[0]} exited with code {result.returncode}")
        return f"{args[0]} finished"

    def validate_args(self, args: List[str]) -> bool:
        return len(args) > 0

    def get_help(self) -> str:
        return """Run a command with administrator rights (UAC prompt):
  /sudo <command> [args]   - Relaunch elevated and wait for it to exit

Examples:
  /sudo notepad C:\\Windows\\System32\\drivers\\etc\\hosts
  /sudo winget upgrade --all"""
