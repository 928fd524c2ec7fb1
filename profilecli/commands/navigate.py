"""Directory navigation helpers backed by git."""

import os
from typing import List

from ..command_proxy import SystemCommand
from ..config import ProfileConfig
from ..exceptions import ProfileError


class GitDirectoryCommand(SystemCommand):
    """Change into a directory reported by git."""

    git_args: List[str] = []
    description = ""

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        target = self.run_system_command(["git", *self.git_args], config)
        if not target:
            raise ProfileError(f"Not inside a {self.description}.")
        os.chdir(target)
        return target

    def validate_args(self, args: List[str]) -> bool:
        return not args


class RepoRootCommand(GitDirectoryCommand):
    """Go to the top of the current git work tree."""

    git_args = ["rev-parse", "--show-toplevel"]
    description = "git work tree"

    def get_help(self) -> str:
        return """Change to the root of the current git repository:
  /repo-root               - cd to `git rev-parse --show-toplevel`"""


class SuperRootCommand(GitDirectoryCommand):
    """Go to the superproject containing the current submodule."""

    git_args = ["rev-parse", "--show-superproject-working-tree"]
    description = "git submodule"

    def get_help(self) -> str:
        return """Change to the superproject of the current git submodule:
  /super-root              - cd to `git rev-parse --show-superproject-working-tree`"""
