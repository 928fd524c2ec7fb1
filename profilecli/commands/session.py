"""Session command implementation for showing the applied session state."""

import os
from typing import List

from ..command_proxy import Command
from ..config import ProfileConfig
from ..editor import describe_target


class SessionCommand(Command):
    """Command to show what the bootstrap sequence set up."""

    def __init__(self, session):
        self.session = session

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        session = self.session
        output = "Session:\n\n"
        output += f"  Title: {session.window_title}\n"
        output += f"  Platform: {session.platform}\n"
        output += f"  Editor: {describe_target(session.editor_target)}\n"
        output += f"  Prompt: {session.prompt_style.value}\n"

        if session.line_editing is not None:
            options = session.line_editing
            output += "  Line editing: readline\n"
            output += f"    History: {options.history_file}\n"
            output += f"    No duplicates: {'Yes' if options.no_duplicates else 'No'}\n"
            output += f"    Prediction: {options.prediction_source.value} ({options.prediction_view.value})\n"
        else:
            output += "  Line editing: unavailable\n"

        output += f"  Working directory: {os.getcwd()}\n"
        output += f"  Default directory: {session.working_directory}\n"

        if session.installed_modules:
            output += f"  Installed this session: {', '.join(session.installed_modules)}\n"

        if session.environment:
            output += "\n  Environment:\n"
            for name, value in sorted(session.environment.items()):
                output += f"    {name}={value}\n"

        if session.aliases:
            output += "\n  Aliases:\n"
            for name, target in sorted(session.aliases.items()):
                output += f"    {name} -> {target}\n"

        if session.warnings:
            output += "\n  Warnings:\n"
            for warning in session.warnings:
                output += f"    {warning}\n"

        return output.rstrip()

    def get_help(self) -> str:
        return """Show the state set up at session start:
  /session                 - Title, line editing, prompt, aliases and warnings"""
