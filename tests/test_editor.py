"""Unit tests for editor dispatch."""

from pathlib import Path

import pytest

from profilecli.command_proxy import CommandProxy
from profilecli.commands import EditProfileCommand
from profilecli.editor import (
    FallbackEditorTarget,
    IntegratedHostTarget,
    ScriptingHostTarget,
    default_text_editor,
    open_in_editor,
    resolve_editor_target,
)
from profilecli.exceptions import NotFoundError


class TestResolveEditorTarget:
    """Exactly one target is chosen from the host identity."""

    def test_vscode_terminal(self, sample_config):
        target = resolve_editor_target(sample_config, {"TERM_PROGRAM": "vscode"})
        assert isinstance(target, IntegratedHostTarget)

    def test_neovim_terminal(self, sample_config):
        target = resolve_editor_target(sample_config, {"NVIM": "/run/nvim.sock"})

        assert isinstance(target, ScriptingHostTarget)
        assert target.server == "/run/nvim.sock"

    def test_integrated_host_wins(self, sample_config):
        env = {"TERM_PROGRAM": "vscode", "NVIM": "/run/nvim.sock"}
        assert isinstance(resolve_editor_target(sample_config, env), IntegratedHostTarget)

    def test_unknown_host_uses_configured_editor(self, sample_config):
        target = resolve_editor_target(
            sample_config, {"TERM_PROGRAM": "iTerm.app", "EDITOR": "nano"}
        )

        assert isinstance(target, FallbackEditorTarget)
        assert target.command == ["myedit"]
        assert target.wait is False

    def test_visual_before_editor(self, sample_config):
        sample_config.editor = None
        target = resolve_editor_target(
            sample_config, {"VISUAL": "code -w", "EDITOR": "nano"}, system="Linux"
        )
        assert target.command == ["code", "-w"]

    def test_platform_default_editor(self, sample_config):
        sample_config.editor = None

        target = resolve_editor_target(sample_config, {}, system="Linux")
        assert target.command == ["vi"]

        target = resolve_editor_target(sample_config, {"SystemRoot": "D:\\Win"}, system="Windows")
        assert target.command == [str(Path("D:\\Win") / "system32" / "notepad.exe")]

    def test_default_text_editor_without_system_root(self):
        assert default_text_editor({}, "Windows").endswith("notepad.exe")


class TestOpenInEditor:
    """Each call opens one editor session."""

    def test_integrated_host_spawns_no_process(self, sample_file, mocker):
        mock_launch = mocker.patch("profilecli.editor.typer.launch", return_value=0)
        mock_popen = mocker.patch("profilecli.editor.subprocess.Popen")
        mock_run = mocker.patch("profilecli.editor.subprocess.run")

        open_in_editor(sample_file, IntegratedHostTarget())

        mock_launch.assert_called_once()
        uri = mock_launch.call_args[0][0]
        assert uri.startswith("vscode://file/")
        assert uri.endswith("sample.txt")
        mock_popen.assert_not_called()
        mock_run.assert_not_called()

    def test_integrated_host_quotes_path(self, temp_dir, mocker):
        mock_launch = mocker.patch("profilecli.editor.typer.launch", return_value=0)
        path = temp_dir / "My Notes" / "a#b.txt"
        path.parent.mkdir()
        path.write_text("")

        open_in_editor(path, IntegratedHostTarget())

        uri = mock_launch.call_args[0][0]
        assert uri.endswith("/My%20Notes/a%23b.txt")
        assert " " not in uri

    def test_integrated_host_launch_failure(self, sample_config, mocker):
        mocker.patch("profilecli.editor.typer.launch", return_value=3)
        sample_config.config_file.write_text("")
        proxy = CommandProxy(sample_config)
        proxy.register("edit-profile", EditProfileCommand(IntegratedHostTarget()))

        result = proxy.execute("/edit-profile")

        assert result.startswith("Error: Could not open vscode://file/")
        assert "exit code 3" in result
        assert proxy.last_status == 1

    def test_scripting_host_uses_remote_command(self, sample_file, mocker):
        mock_run = mocker.patch("profilecli.editor.subprocess.run")
        mock_popen = mocker.patch("profilecli.editor.subprocess.Popen")

        open_in_editor(sample_file, ScriptingHostTarget(server="/run/nvim.sock"))

        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == [
            "nvim", "--server", "/run/nvim.sock", "--remote", str(sample_file)
        ]
        mock_popen.assert_not_called()

    def test_fallback_spawns_editor_with_path(self, sample_file, mocker):
        mock_popen = mocker.patch("profilecli.editor.subprocess.Popen")

        open_in_editor(sample_file, FallbackEditorTarget(command=["notepad"], wait=False))

        mock_popen.assert_called_once()
        assert mock_popen.call_args[0][0] == ["notepad", str(sample_file)]
        mock_popen.return_value.wait.assert_not_called()

    def test_fallback_waits_when_asked(self, sample_file, mocker):
        mock_popen = mocker.patch("profilecli.editor.subprocess.Popen")

        open_in_editor(sample_file, FallbackEditorTarget(command=["vi"], wait=True))

        mock_popen.return_value.wait.assert_called_once()

    def test_missing_path(self, temp_dir, mocker):
        mock_popen = mocker.patch("profilecli.editor.subprocess.Popen")

        with pytest.raises(NotFoundError):
            open_in_editor(temp_dir / "nope.txt", FallbackEditorTarget(command=["vi"]))

        mock_popen.assert_not_called()
