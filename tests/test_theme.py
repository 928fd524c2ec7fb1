"""Unit tests for the prompt theming initializer."""

from unittest.mock import MagicMock, patch

import pytest

from profilecli.exceptions import ProfileError
from profilecli.theme import parse_exports, run_theme_initializer

STARSHIP_OUTPUT = """\
# Starship init for bash
export STARSHIP_SHELL="bash"
STARSHIP_START_TIME=$(starship time)
export STARSHIP_SESSION_KEY="$RANDOM$RANDOM"
export STARSHIP_CONFIG=/home/user/.config/starship.toml PROMPT_DIRTRIM=3
starship_precmd() {
    export STARSHIP_CMD_STATUS=0
}
"""


class TestParseExports:
    def test_literal_exports(self):
        environment = parse_exports(STARSHIP_OUTPUT)

        assert environment == {
            "STARSHIP_SHELL": "bash",
            "STARSHIP_CONFIG": "/home/user/.config/starship.toml",
            "PROMPT_DIRTRIM": "3",
            "STARSHIP_CMD_STATUS": "0",
        }

    def test_expansions_skipped(self):
        assert "STARSHIP_SESSION_KEY" not in parse_exports(STARSHIP_OUTPUT)

    def test_ignores_bad_lines(self):
        output = 'export BROKEN="unterminated\nexport 1BAD=x\nexport -f func\nexport OK=yes # note\n'
        assert parse_exports(output) == {"OK": "yes"}


class TestRunThemeInitializer:
    def test_missing_tool(self):
        with patch("profilecli.theme.shutil.which", return_value=None):
            with pytest.raises(ProfileError) as exc_info:
                run_theme_initializer(["starship", "init", "bash"])

        assert "not found: starship" in str(exc_info.value)

    def test_empty_command(self):
        with pytest.raises(ProfileError):
            run_theme_initializer([])

    def test_failure(self):
        with patch("profilecli.theme.shutil.which", return_value="/usr/bin/starship"):
            with patch("profilecli.theme.subprocess.run") as mock_run:
                mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="bad shell")

                with pytest.raises(ProfileError) as exc_info:
                    run_theme_initializer(["starship", "init", "tcsh"])

        assert "bad shell" in str(exc_info.value)

    def test_success(self):
        with patch("profilecli.theme.shutil.which", return_value="/usr/bin/starship"):
            with patch("profilecli.theme.subprocess.run") as mock_run:
                mock_run.return_value = MagicMock(
                    returncode=0, stdout=STARSHIP_OUTPUT, stderr=""
                )

                environment = run_theme_initializer(["starship", "init", "bash"], timeout=5)

        assert environment["STARSHIP_SHELL"] == "bash"
        assert mock_run.call_args[1]["timeout"] == 5
