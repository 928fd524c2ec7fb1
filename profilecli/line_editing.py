"""GNU readline setup for the interactive session."""

import importlib
import importlib.util
import logging
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Callable, Iterable, List, Optional

from .config import PredictionSource, PredictionView

logger = logging.getLogger(__name__)


@dataclass
class LineEditingOptions:
    """Line-editing settings for one session."""

    history_file: Path
    max_history_size: int = 1000
    no_duplicates: bool = True
    prediction_source: PredictionSource = PredictionSource.HISTORY
    prediction_view: PredictionView = PredictionView.LIST


def probe_line_editing() -> Optional[ModuleType]:
    """Return the readline module if this interpreter has one."""
    if importlib.util.find_spec("readline") is None:
        return None
    return importlib.import_module("readline")


def uses_libedit(readline_module: ModuleType) -> bool:
    if getattr(readline_module, "backend", None) == "editline":
        return True
    return "libedit" in (readline_module.__doc__ or "")


class SessionCompleter:
    """Tab completion over command words and, optionally, history lines.

    The whole line up to the cursor is the completion text, so history
    entries complete as full command lines.
    """

    def __init__(
        self,
        words: Callable[[], Iterable[str]],
        history: Optional[Callable[[], List[str]]] = None,
    ):
        self.words = words
        self.history = history
        self._matches: List[str] = []

    def candidates(self, text: str) -> List[str]:
        matches = []
        if " " not in text:
            matches.extend(sorted(w for w in self.words() if w.startswith(text)))
        if self.history is not None and text:
            for line in reversed(self.history()):
                if line.startswith(text) and line != text and line not in matches:
                    matches.append(line)
        return matches

    def complete(self, text: str, state: int) -> Optional[str]:
        if state == 0:
            self._matches = self.candidates(text)
        if state < len(self._matches):
            return self._matches[state]
        return None


class LineEditor:
    """Wraps the readline module for one session."""

    def __init__(self, readline_module: ModuleType, options: LineEditingOptions):
        self.readline = readline_module
        self.options = options

    def configure(self, words: Callable[[], Iterable[str]]) -> None:
        """Bind completion, load history and set the prediction view."""
        rl = self.readline
        if uses_libedit(rl):
            rl.parse_and_bind("bind ^I rl_complete")
        else:
            rl.parse_and_bind("tab: complete")
            if self.options.prediction_view == PredictionView.LIST:
                rl.parse_and_bind("set show-all-if-ambiguous on")
                rl.parse_and_bind("set completion-display-width 0")
            else:
                rl.parse_and_bind("set show-all-if-ambiguous off")

        history = None
        if self.options.prediction_source == PredictionSource.HISTORY:
            history = self.history_lines
        completer = SessionCompleter(words, history)
        rl.set_completer_delims("\t\n")
        rl.set_completer(completer.complete)

        # add_history handles recording so duplicates can be dropped
        if hasattr(rl, "set_auto_history"):
            rl.set_auto_history(False)

        rl.set_history_length(self.options.max_history_size)
        history_file = self.options.history_file
        if history_file.exists():
            try:
                rl.read_history_file(str(history_file))
            except OSError as e:
                logger.warning("Could not read history file %s: %s", history_file, e)

    def history_lines(self) -> List[str]:
        rl = self.readline
        return [
            rl.get_history_item(i)
            for i in range(1, rl.get_current_history_length() + 1)
            if rl.get_history_item(i) is not None
        ]

    def add_history(self, line: str) -> None:
        """Record a line, dropping earlier copies when de-duplicating."""
        rl = self.readline
        if not line.strip():
            return
        if self.options.no_duplicates:
            # get_history_item is 1-based, remove_history_item 0-based
            for index in range(rl.get_current_history_length(), 0, -1):
                if rl.get_history_item(index) == line:
                    rl.remove_history_item(index - 1)
        rl.add_history(line)

    def save(self) -> None:
        history_file = self.options.history_file
        try:
            history_file.parent.mkdir(parents=True, exist_ok=True)
            self.readline.write_history_file(str(history_file))
        except OSError as e:
            logger.warning("Could not save history to %s: %s", history_file, e)


def append_history_line(history_file: Path, line: str, no_duplicates: bool = True) -> None:
    """Record a line without readline, skipping a repeat of the last entry."""
    if not line.strip():
        return
    history_file.parent.mkdir(parents=True, exist_ok=True)
    if no_duplicates and history_file.exists():
        lines = history_file.read_text(encoding="utf-8").splitlines()
        if lines and lines[-1] == line:
            return
    with open(history_file, "a", encoding="utf-8") as f:
        f.write(line + "\n")
