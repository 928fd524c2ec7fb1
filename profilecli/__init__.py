"""profilecli - personal shell session with a startup profile.

Starting ``profilecli`` runs the profile once (console title, line editing,
prompt theming, platform setup, aliases, default directory) and then reads
commands interactively:

- Slash commands: built-in helpers such as ``/hash`` and ``/edit-profile``
- Everything else: external programs, after alias expansion

Any slash command can also be run once from the host shell.
"""

from .bootstrap import SessionBootstrapper, SessionConfig
from .command_proxy import CommandProxy
from .config import ProfileConfig
from .main import app

__version__ = "0.1.0"

__all__ = [
    "app",
    "ProfileConfig",
    "CommandProxy",
    "SessionBootstrapper",
    "SessionConfig",
]
