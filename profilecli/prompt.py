"""Prompt renderers for the interactive session."""

import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Optional

RESET = "\x1b[0m"
GREEN = "\x1b[32m"
RED = "\x1b[31m"
BOLD = "\x1b[1m"

# readline counts characters between these markers as zero-width
RL_START_IGNORE = "\x01"
RL_END_IGNORE = "\x02"


class PromptStyle(str, Enum):
    PLAIN = "plain"
    TWO_STATE = "two-state"


def short_cwd(cwd: Optional[str] = None) -> str:
    """Current directory with the home prefix collapsed to ~."""
    cwd = cwd or os.getcwd()
    home = str(Path.home())
    if cwd == home or cwd.startswith(home + os.sep):
        return "~" + cwd[len(home):]
    return cwd


class PromptRenderer(ABC):
    @abstractmethod
    def render(self, last_status: int = 0) -> str:
        pass


class PlainPrompt(PromptRenderer):
    """`<cwd>> `, the same whatever the last command did."""

    def render(self, last_status: int = 0) -> str:
        return f"{short_cwd()}> "


class TwoStatePrompt(PromptRenderer):
    """A prompt character that turns red after a failed command."""

    def __init__(self, symbol: str = "❯", readline_safe: bool = False):
        self.symbol = symbol
        self.readline_safe = readline_safe

    def _escape(self, code: str) -> str:
        if self.readline_safe:
            return f"{RL_START_IGNORE}{code}{RL_END_IGNORE}"
        return code

    def render(self, last_status: int = 0) -> str:
        color = GREEN if last_status == 0 else RED
        return (
            f"{self._escape(BOLD)}{short_cwd()}{self._escape(RESET)} "
            f"{self._escape(color)}{self.symbol}{self._escape(RESET)} "
        )


def make_prompt(style: PromptStyle, readline_safe: bool = False) -> PromptRenderer:
    if style == PromptStyle.TWO_STATE:
        return TwoStatePrompt(readline_safe=readline_safe)
    return PlainPrompt()
