"""Platform-specific session setup, selected once at startup."""

import logging
import platform
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .command_proxy import Command
from .config import ProfileConfig
from .modules import ModuleEnsurer

logger = logging.getLogger(__name__)


class PlatformSetup(ABC):
    """Setup work and extra commands for one family of operating systems."""

    name = ""

    @abstractmethod
    def prepare(self, config: ProfileConfig) -> List[str]:
        """Run startup setup; return the modules installed."""
        pass

    @abstractmethod
    def commands(self) -> Dict[str, Command]:
        """Commands only available on this platform."""
        pass


class PosixSetup(PlatformSetup):
    """Linux and macOS: ensure optional modules, add git navigation."""

    name = "posix"

    def __init__(self, ensurer: Optional[ModuleEnsurer] = None):
        self.ensurer = ensurer or ModuleEnsurer()

    def prepare(self, config: ProfileConfig) -> List[str]:
        if config.trusted_host:
            self.ensurer.trust_source(config.trusted_host)
        installed = self.ensurer.ensure(config.optional_modules)
        if installed:
            logger.info("Installed %s", ", ".join(installed))
        return installed

    def commands(self) -> Dict[str, Command]:
        from .commands import RepoRootCommand, SuperRootCommand

        return {
            "repo-root": RepoRootCommand(),
            "super-root": SuperRootCommand(),
        }


class WindowsSetup(PlatformSetup):
    """Windows: nothing to install, adds the elevation shim."""

    name = "windows"

    def prepare(self, config: ProfileConfig) -> List[str]:
        return []

    def commands(self) -> Dict[str, Command]:
        from .commands import ElevateCommand

        return {"sudo": ElevateCommand()}


def detect_platform(system: Optional[str] = None) -> PlatformSetup:
    """Pick the setup for the running operating system."""
    system = system or platform.system()
    if system == "Windows":
        return WindowsSetup()
    return PosixSetup()
