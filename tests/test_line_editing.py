"""Unit tests for readline configuration and history handling."""

import pytest

from profilecli.config import PredictionSource, PredictionView
from profilecli.line_editing import (
    LineEditingOptions,
    LineEditor,
    SessionCompleter,
    append_history_line,
    probe_line_editing,
    uses_libedit,
)


class FakeReadline:
    """In-memory stand-in for the readline module."""

    __doc__ = "Importing this module enables command line editing using GNU readline."

    def __init__(self):
        self.history = []
        self.bindings = []
        self.completer = None
        self.delims = None
        self.auto_history = True
        self.history_length = -1
        self.read_files = []
        self.written_files = []

    def parse_and_bind(self, binding):
        self.bindings.append(binding)

    def set_completer(self, completer):
        self.completer = completer

    def set_completer_delims(self, delims):
        self.delims = delims

    def set_auto_history(self, enabled):
        self.auto_history = enabled

    def set_history_length(self, length):
        self.history_length = length

    def read_history_file(self, path):
        self.read_files.append(path)
        with open(path, encoding="utf-8") as f:
            self.history.extend(line.rstrip("\n") for line in f)

    def write_history_file(self, path):
        self.written_files.append(path)
        with open(path, "w", encoding="utf-8") as f:
            f.writelines(line + "\n" for line in self.history)

    def get_current_history_length(self):
        return len(self.history)

    def get_history_item(self, index):
        if 1 <= index <= len(self.history):
            return self.history[index - 1]
        return None

    def remove_history_item(self, pos):
        del self.history[pos]

    def add_history(self, line):
        self.history.append(line)


@pytest.fixture
def options(temp_dir):
    return LineEditingOptions(history_file=temp_dir / "history")


class TestSessionCompleter:
    def test_command_words(self):
        completer = SessionCompleter(lambda: ["/hash", "/help", "/config", "ll"])

        assert completer.candidates("/h") == ["/hash", "/help"]
        assert completer.candidates("l") == ["ll"]

    def test_history_lines_after_words(self):
        completer = SessionCompleter(
            lambda: ["/hash"], history=lambda: ["/hash a.txt", "git status", "/hash b.txt"]
        )

        # Most recent history first
        assert completer.candidates("/hash") == ["/hash", "/hash b.txt", "/hash a.txt"]
        assert completer.candidates("git s") == ["git status"]

    def test_readline_protocol(self):
        completer = SessionCompleter(lambda: ["/hash", "/help"])

        assert completer.complete("/h", 0) == "/hash"
        assert completer.complete("/h", 1) == "/help"
        assert completer.complete("/h", 2) is None


class TestLineEditor:
    def test_configure_list_view(self, options):
        rl = FakeReadline()

        LineEditor(rl, options).configure(lambda: ["/hash"])

        assert "tab: complete" in rl.bindings
        assert "set show-all-if-ambiguous on" in rl.bindings
        assert rl.delims == "\t\n"
        assert rl.auto_history is False
        assert rl.history_length == 1000
        assert rl.completer("/ha", 0) == "/hash"

    def test_configure_inline_view(self, options):
        rl = FakeReadline()
        options.prediction_view = PredictionView.INLINE

        LineEditor(rl, options).configure(lambda: [])

        assert "set show-all-if-ambiguous off" in rl.bindings

    def test_libedit_binding(self, options):
        rl = FakeReadline()
        rl.__doc__ = "readline module backed by libedit"

        LineEditor(rl, options).configure(lambda: [])

        assert uses_libedit(rl) is True
        assert rl.bindings == ["bind ^I rl_complete"]

    def test_history_loaded_and_used_for_prediction(self, options):
        options.history_file.write_text("git log\n/hash a.txt\n")
        rl = FakeReadline()

        LineEditor(rl, options).configure(lambda: [])

        assert rl.read_files == [str(options.history_file)]
        assert rl.completer("git", 0) == "git log"

    def test_no_prediction_from_history(self, options):
        options.history_file.write_text("git log\n")
        options.prediction_source = PredictionSource.NONE
        rl = FakeReadline()

        LineEditor(rl, options).configure(lambda: [])

        assert rl.completer("git", 0) is None

    def test_add_history_drops_duplicates(self, options):
        rl = FakeReadline()
        editor = LineEditor(rl, options)

        for line in ["git status", "/hash a", "git status", "", "git status"]:
            editor.add_history(line)

        assert rl.history == ["/hash a", "git status"]

    def test_add_history_keeps_duplicates_when_allowed(self, options):
        rl = FakeReadline()
        options.no_duplicates = False
        editor = LineEditor(rl, options)

        editor.add_history("ls")
        editor.add_history("ls")

        assert rl.history == ["ls", "ls"]

    def test_save(self, temp_dir):
        rl = FakeReadline()
        options = LineEditingOptions(history_file=temp_dir / "nested" / "history")
        editor = LineEditor(rl, options)
        editor.add_history("/help")

        editor.save()

        assert options.history_file.read_text() == "/help\n"


class TestPlainHistory:
    def test_append_skips_repeat_of_last_line(self, temp_dir):
        history_file = temp_dir / "sub" / "history"

        for line in ["ls", "ls", "pwd", "ls", "  "]:
            append_history_line(history_file, line)

        assert history_file.read_text().splitlines() == ["ls", "pwd", "ls"]

    def test_append_keeps_repeats_when_allowed(self, temp_dir):
        history_file = temp_dir / "history"

        append_history_line(history_file, "ls", no_duplicates=False)
        append_history_line(history_file, "ls", no_duplicates=False)

        assert history_file.read_text().splitlines() == ["ls", "ls"]


def test_probe_line_editing(mocker):
    mocker.patch("profilecli.line_editing.importlib.util.find_spec", return_value=None)
    assert probe_line_editing() is None
