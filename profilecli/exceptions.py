"""Exceptions raised by profilecli operations."""


class ProfileError(Exception):
    """Base class for errors surfaced to the user by a single command."""


class NotFoundError(ProfileError):
    """A referenced path does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Path not found: {path}")


class BootstrapError(ProfileError):
    """The session bootstrap sequence cannot run."""


class ClipboardError(ProfileError):
    """No clipboard tool could take the text."""
