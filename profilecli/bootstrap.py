"""Session bootstrap: compute the session settings, then apply them in order.

The sequence runs once per interactive session:

1. Console title with the runtime version
2. Line editing and, when theming is active, the two-state prompt
3. Prompt theming initializer exports
4. Platform setup (module installs, platform commands)
5. Aliases
6. Default working directory
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, List, Mapping, MutableMapping, Optional

from rich.console import Console

from .command_proxy import Command, CommandProxy
from .config import ProfileConfig
from .editor import EditorTarget, resolve_editor_target
from .exceptions import BootstrapError, ProfileError
from .line_editing import LineEditingOptions, LineEditor, probe_line_editing
from .platform_setup import PlatformSetup, detect_platform
from .prompt import PromptRenderer, PromptStyle, make_prompt
from .theme import run_theme_initializer
from .ui import console as shared_console

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Process-wide settings built once at session start."""

    window_title: str
    line_editing: Optional[LineEditingOptions]
    prompt_style: PromptStyle
    environment: Dict[str, str]
    aliases: Dict[str, str]
    working_directory: Path
    platform: str
    editor_target: EditorTarget
    warnings: List[str] = field(default_factory=list)
    installed_modules: List[str] = field(default_factory=list)


def ensure_directory(path: Path) -> bool:
    """Create path (and parents) if missing. Returns True if it was created."""
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True


class SessionEnvironment:
    """The process state a session configuration is applied to."""

    def __init__(
        self,
        proxy: CommandProxy,
        console: Optional[Console] = None,
        environ: Optional[MutableMapping[str, str]] = None,
    ):
        self.proxy = proxy
        self.console = console or shared_console
        self.environ = os.environ if environ is None else environ
        self.line_editor: Optional[LineEditor] = None
        self.prompt: PromptRenderer = make_prompt(PromptStyle.PLAIN)

    def set_title(self, title: str) -> None:
        if not self.console.set_window_title(title):
            logger.debug("Terminal does not support setting the title")

    def configure_line_editing(
        self, readline_module: ModuleType, options: LineEditingOptions
    ) -> None:
        self.line_editor = LineEditor(readline_module, options)
        self.line_editor.configure(self.completion_words)

    def completion_words(self) -> List[str]:
        words = [f"/{name}" for name in self.proxy.get_available_commands()]
        words.extend(self.proxy.aliases)
        return words

    def set_prompt(self, style: PromptStyle) -> None:
        self.prompt = make_prompt(style, readline_safe=self.line_editor is not None)

    def set_environment(self, variables: Mapping[str, str]) -> None:
        self.environ.update(variables)

    def register_commands(self, commands: Mapping[str, Command]) -> None:
        for name, command in commands.items():
            self.proxy.register(name, command)

    def register_aliases(self, aliases: Mapping[str, str]) -> None:
        self.proxy.register_aliases(aliases)

    def enter_directory(self, path: Path) -> None:
        if ensure_directory(path):
            logger.info("Created %s", path)
        os.chdir(path)


class SessionBootstrapper:
    """Runs the ordered, one-shot startup sequence for a session."""

    def __init__(
        self,
        config: ProfileConfig,
        platform_setup: Optional[PlatformSetup] = None,
        env: Optional[Mapping[str, str]] = None,
        version_info=None,
        readline_probe: Callable[[], Optional[ModuleType]] = probe_line_editing,
        theme_runner: Callable[..., Dict[str, str]] = run_theme_initializer,
    ):
        self.config = config
        self.platform_setup = platform_setup or detect_platform()
        self.env = os.environ if env is None else env
        self.version_info = version_info or sys.version_info
        self.readline_probe = readline_probe
        self.theme_runner = theme_runner
        self.readline_module: Optional[ModuleType] = None
        self.session: Optional[SessionConfig] = None

    def _warn(self, warnings: List[str], message: str) -> None:
        logger.warning(message)
        warnings.append(message)

    def build(self) -> SessionConfig:
        """Compute the session configuration without touching the process."""
        config = self.config
        warnings: List[str] = []
        environment: Dict[str, str] = {}

        title = config.format_window_title(self.version_info[0], self.version_info[1])

        line_editing = None
        prompt_style = PromptStyle.PLAIN
        self.readline_module = self.readline_probe()
        if self.readline_module is None:
            self._warn(warnings, "readline is not available; line editing is not configured.")
        else:
            line_editing = LineEditingOptions(
                history_file=config.history_file,
                max_history_size=config.max_history_size,
                no_duplicates=config.history_no_duplicates,
                prediction_source=config.prediction_source,
                prediction_view=config.prediction_view,
            )
            if self.env.get(config.theme_env_var):
                prompt_style = PromptStyle.TWO_STATE
                environment[config.theme_log_var] = config.theme_log_level

        try:
            environment.update(
                self.theme_runner(config.theme_init_command, timeout=config.command_timeout)
            )
        except ProfileError as e:
            self._warn(warnings, f"Prompt theming skipped: {e}")

        return SessionConfig(
            window_title=title,
            line_editing=line_editing,
            prompt_style=prompt_style,
            environment=environment,
            aliases=dict(config.aliases),
            working_directory=config.default_directory,
            platform=self.platform_setup.name,
            editor_target=resolve_editor_target(config, self.env),
            warnings=warnings,
        )

    def apply(self, session: SessionConfig, target: SessionEnvironment) -> None:
        """Apply a built configuration, step by step, in startup order."""
        target.set_title(session.window_title)

        if session.line_editing is not None and self.readline_module is not None:
            target.configure_line_editing(self.readline_module, session.line_editing)
        target.set_prompt(session.prompt_style)

        target.set_environment(session.environment)

        session.installed_modules = self.platform_setup.prepare(self.config)
        target.register_commands(self.platform_setup.commands())

        target.register_aliases(session.aliases)

        target.enter_directory(session.working_directory)

    def run(self, target: SessionEnvironment) -> SessionConfig:
        """Build and apply once. A second call raises BootstrapError."""
        if self.session is not None:
            raise BootstrapError("Session is already bootstrapped")
        session = self.build()
        self.apply(session, target)
        self.session = session
        logger.debug("Session ready in %s", session.working_directory)
        return session
