"""Test configuration for pytest."""

import shutil
import tempfile
from pathlib import Path

import pytest

from profilecli.config import ProfileConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp()).resolve()
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir):
    """Create a sample configuration for testing."""
    config = ProfileConfig(
        editor="myedit",
        editor_wait=False,
        history_file=temp_dir / "history",
        default_directory=temp_dir / "work",
        optional_modules=[],
        theme_init_command=["starship", "init", "bash", "--print-full-init"],
        show_debug=False,
    )
    config.config_file = temp_dir / "config.toml"
    return config


@pytest.fixture
def sample_file(temp_dir):
    """A small file with known contents."""
    path = temp_dir / "sample.txt"
    path.write_bytes(b"abc")
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(temp_dir, monkeypatch):
    """Isolate home, cwd and host detection variables."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))

    for name in ("TERM_PROGRAM", "NVIM", "VISUAL", "EDITOR", "PROFILECLI_THEME"):
        monkeypatch.delenv(name, raising=False)

    # Bootstrap and navigation tests change directory; monkeypatch restores it
    monkeypatch.chdir(temp_dir)

    yield
