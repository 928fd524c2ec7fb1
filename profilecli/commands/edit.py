"""Commands that open session files in the host editor."""

from pathlib import Path
from typing import List, Optional

from ..command_proxy import Command
from ..config import ProfileConfig
from ..editor import EditorTarget, describe_target, open_in_editor, resolve_editor_target


class EditorCommand(Command):
    """Base class for commands that open one file in the editor."""

    def __init__(self, target: Optional[EditorTarget] = None):
        self.target = target

    def get_target(self, config: ProfileConfig) -> EditorTarget:
        if self.target is None:
            self.target = resolve_editor_target(config)
        return self.target

    def get_path(self, config: ProfileConfig) -> Path:
        raise NotImplementedError

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        path = self.get_path(config)
        target = self.get_target(config)
        open_in_editor(path, target)
        return f"Opened {path} in {describe_target(target)}"

    def validate_args(self, args: List[str]) -> bool:
        return not args


class EditProfileCommand(EditorCommand):
    """Open the profile (configuration) file."""

    def get_path(self, config: ProfileConfig) -> Path:
        return config.get_profile_path()

    def get_help(self) -> str:
        return """Open the profile file in the editor:
  /edit-profile            - Edit the settings applied at session start"""


class OpenHistoryCommand(EditorCommand):
    """Open the session history file."""

    def get_path(self, config: ProfileConfig) -> Path:
        return config.history_file

    def get_help(self) -> str:
        return """Open the command history file in the editor:
  /open-history            - Browse or prune previous session input"""
