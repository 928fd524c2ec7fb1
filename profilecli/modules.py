"""Check-then-install for optional session modules."""

import importlib
import logging
import subprocess
import sys
from importlib import metadata
from typing import Iterable, List, Optional

from packaging.requirements import Requirement

from .config import ModuleRequirement

logger = logging.getLogger(__name__)


def in_virtualenv() -> bool:
    return sys.prefix != getattr(sys, "base_prefix", sys.prefix)


class ModuleEnsurer:
    """Installs missing modules with pip; a satisfied module is left alone."""

    def __init__(self, python: Optional[str] = None):
        self.python = python or sys.executable
        self.trusted_hosts: List[str] = []

    def trust_source(self, host: str) -> None:
        """Mark a package index host as trusted for later installs."""
        if host not in self.trusted_hosts:
            self.trusted_hosts.append(host)
            logger.debug("Trusting package source %s", host)

    def is_installed(self, name: str) -> bool:
        """True if a distribution satisfying the requirement string is present.

        Accepts full requirement strings such as ``pydantic>=2.0`` or
        ``black[d]``; only the distribution name and version are checked.
        """
        requirement = Requirement(name)
        try:
            version = metadata.version(requirement.name)
        except metadata.PackageNotFoundError:
            return False
        return requirement.specifier.contains(version, prereleases=True)

    def build_install_command(self, requirement: ModuleRequirement) -> List[str]:
        """The pip invocation for one requirement."""
        cmd_args = [self.python, "-m", "pip", "install"]
        if requirement.force:
            cmd_args.append("--force-reinstall")
        if requirement.allow_prerelease:
            cmd_args.append("--pre")
        if requirement.user_scope:
            if in_virtualenv():
                logger.debug("Skipping --user for %s inside a virtualenv", requirement.name)
            else:
                cmd_args.append("--user")
        for host in self.trusted_hosts:
            cmd_args.extend(["--trusted-host", host])
        cmd_args.append(requirement.name)
        return cmd_args

    def install(self, requirement: ModuleRequirement) -> bool:
        """Run pip for one requirement. pip prints its own errors."""
        cmd_args = self.build_install_command(requirement)
        logger.info("Installing %s", requirement.name)
        result = subprocess.run(cmd_args, shell=False)
        importlib.invalidate_caches()

        if result.returncode != 0:
            logger.warning(
                "Installing %s failed with exit code %s", requirement.name, result.returncode
            )
            return False
        return True

    def ensure(self, requirements: Iterable[ModuleRequirement]) -> List[str]:
        """Install every missing requirement; return the names installed."""
        installed = []
        for requirement in requirements:
            if self.is_installed(requirement.name):
                logger.debug("%s already installed", requirement.name)
                continue
            if self.install(requirement):
                installed.append(requirement.name)
        return installed
