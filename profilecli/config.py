"""Configuration management for profilecli with multi-source loading."""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from packaging.requirements import InvalidRequirement, Requirement
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROFILECLI_"


class LogLevel(str, Enum):
    """Available logging levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class PredictionSource(str, Enum):
    """Where line-editing completion candidates come from besides commands."""

    NONE = "none"
    HISTORY = "history"


class PredictionView(str, Enum):
    """How completion candidates are shown."""

    INLINE = "inline"
    LIST = "list"


class ModuleRequirement(BaseModel):
    """An optional module and the policy used to install it."""

    name: str
    force: bool = Field(default=True, description="Reinstall even if pip thinks it is present")
    allow_prerelease: bool = Field(default=False, description="Allow pre-release versions")
    user_scope: bool = Field(default=True, description="Install into the user site")

    @field_validator("name")
    @classmethod
    def validate_requirement(cls, v: str) -> str:
        """Accept a pip requirement string such as ``black[d]`` or ``pydantic>=2.0``."""
        try:
            Requirement(v)
        except InvalidRequirement as e:
            raise ValueError(f"Invalid module requirement {v!r}: {e}") from e
        return v


def default_aliases() -> Dict[str, str]:
    return {
        "ll": "ls -la",
        "g": "git",
        "sha": "/hash",
        "ep": "/edit-profile",
        "history": "/open-history",
    }


class ProfileConfig(BaseModel):
    """Main configuration class with validation and multi-source loading."""

    # Editor Configuration
    editor: Optional[str] = Field(
        default=None, description="Editor command, overrides VISUAL/EDITOR"
    )
    editor_wait: bool = Field(
        default=True, description="Wait for the fallback editor to exit"
    )

    # Session Configuration
    window_title_template: str = Field(
        default="Python {major}.{minor} - profilecli",
        description="Console title, formatted with the runtime version",
    )
    default_directory: Optional[Path] = Field(
        default=None, description="Working directory entered at session start"
    )
    aliases: Dict[str, str] = Field(
        default_factory=default_aliases, description="Alias name to command line"
    )

    # Line Editing Configuration
    history_file: Optional[Path] = Field(
        default=None, description="Persistent session history file"
    )
    max_history_size: int = Field(default=1000, description="Maximum history entries")
    history_no_duplicates: bool = Field(
        default=True, description="Skip history entries equal to the previous one"
    )
    prediction_source: PredictionSource = Field(
        default=PredictionSource.HISTORY, description="Extra completion source"
    )
    prediction_view: PredictionView = Field(
        default=PredictionView.LIST, description="Completion display style"
    )

    # Prompt Theming Configuration
    theme_env_var: str = Field(
        default="PROFILECLI_THEME",
        description="Environment variable that activates the custom prompt",
    )
    theme_log_var: str = Field(
        default="STARSHIP_LOG", description="Log verbosity variable of the theming tool"
    )
    theme_log_level: str = Field(default="error", description="Theming tool log level")
    theme_init_command: List[str] = Field(
        default_factory=lambda: ["starship", "init", "bash", "--print-full-init"],
        description="Prompt theming initializer whose exports are evaluated",
    )

    # Module Configuration
    optional_modules: List[ModuleRequirement] = Field(
        default_factory=lambda: [
            ModuleRequirement(name="pygments"),
            ModuleRequirement(name="ipython"),
        ],
        description="Modules ensured at session start on non-Windows platforms",
    )
    trusted_host: Optional[str] = Field(
        default="pypi.org", description="Package index host marked as trusted"
    )
    command_timeout: int = Field(
        default=30, description="Timeout in seconds for helper commands"
    )

    # Output Configuration
    rich_output: bool = Field(default=True, description="Enable rich text formatting")
    show_debug: bool = Field(default=False, description="Show debug information")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")

    # Where this configuration was loaded from; never saved.
    config_file: Optional[Path] = Field(default=None, exclude=True)

    @field_validator("history_file", mode="before")
    @classmethod
    def set_default_history_file(cls, v):
        """Set default history file if not provided."""
        if v is None:
            return get_config_dir() / "history"
        return Path(v).expanduser() if isinstance(v, str) else v

    @field_validator("default_directory", mode="before")
    @classmethod
    def set_default_directory(cls, v):
        """Set default working directory if not provided."""
        if v is None:
            return Path.home() / "tmp"
        return Path(v).expanduser() if isinstance(v, str) else v

    @field_validator("optional_modules", mode="before")
    @classmethod
    def coerce_module_names(cls, v):
        """Allow plain module names in place of full requirement tables."""
        if isinstance(v, str):
            v = [name.strip() for name in v.split(",") if name.strip()]
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v

    @field_validator("theme_init_command", mode="before")
    @classmethod
    def split_theme_command(cls, v):
        """Accept the initializer as a single command string."""
        if isinstance(v, str):
            return v.split()
        return v

    model_config = {"validate_default": True}

    def format_window_title(self, major: int, minor: int) -> str:
        """Render the console title for a runtime version."""
        return self.window_title_template.format(major=major, minor=minor)

    def get_profile_path(self) -> Path:
        """The file that holds this session's profile settings."""
        return self.config_file or get_user_config_path()


def get_config_dir() -> Path:
    return Path.home() / ".profilecli"


def get_user_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_config_paths() -> List[Path]:
    """Get configuration file paths in priority order."""
    paths = [get_user_config_path()]

    # System config directory
    if os.name == "posix":  # Unix/Linux/macOS
        paths.append(Path("/etc/profilecli/config.toml"))
    elif os.name == "nt":  # Windows
        paths.append(
            Path(os.environ.get("ProgramData", "C:/ProgramData"))
            / "profilecli"
            / "config.toml"
        )

    return paths


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a TOML file."""
    try:
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                return toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
    return {}


def load_environment_variables() -> Dict[str, Any]:
    """Load configuration from environment variables."""
    config = {}

    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            config_key = key[len(ENV_PREFIX) :].lower()

            # The theme activation variable shares the prefix but is not a setting
            if config_key not in ProfileConfig.model_fields:
                continue

            # Handle boolean values
            if value.lower() in ("true", "1", "yes", "on"):
                config[config_key] = True
            elif value.lower() in ("false", "0", "no", "off"):
                config[config_key] = False
            else:
                # Try to convert to int, fallback to string
                try:
                    config[config_key] = int(value)
                except ValueError:
                    config[config_key] = value

    return config


def load_configuration(
    config_file: Optional[str] = None,
    debug: bool = False,
) -> ProfileConfig:
    """Load configuration from multiple sources with priority handling.

    Priority order (highest to lowest):
    1. Function parameters (config_file, debug)
    2. Environment variables (PROFILECLI_*)
    3. User config file (~/.profilecli/config.toml)
    4. System config file (/etc/profilecli/config.toml)
    5. Default values
    """
    primary_config_path = get_user_config_path()

    merged_config = {}
    loaded_from = None

    config_paths = get_config_paths()
    if config_file:
        # If specific config file provided, use it first
        config_paths.insert(0, Path(config_file).expanduser())

    for path in reversed(config_paths):  # Reverse to maintain priority
        file_config = load_config_file(path)
        if file_config:
            merged_config.update(file_config)
            loaded_from = path

    merged_config.update(load_environment_variables())

    if debug:
        merged_config["show_debug"] = True
        merged_config["log_level"] = LogLevel.DEBUG

    try:
        config = ProfileConfig(**merged_config)
    except ValueError as e:
        logger.warning("Invalid configuration, using defaults: %s", e)
        config = ProfileConfig(
            show_debug=debug, log_level=LogLevel.DEBUG if debug else LogLevel.WARNING
        )

    if loaded_from is None:
        # First run: write the defaults so there is a profile to edit
        save_config(config, primary_config_path)
        loaded_from = primary_config_path

    config.config_file = Path(config_file).expanduser() if config_file else loaded_from
    return config


def save_config(config: ProfileConfig, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    if config_path is None:
        config_path = config.get_profile_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        # JSON mode turns enums and paths into plain strings for TOML
        config_dict = config.model_dump(mode="json", exclude_none=True)

        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)

        return True

    except OSError as e:
        logger.warning("Could not save configuration to %s: %s", config_path, e)
        return False


class ConfigurationError(Exception):
    """Configuration-related errors."""

    pass


def validate_setup(config: ProfileConfig) -> None:
    """Validate settings that cannot be checked field by field."""
    if config.default_directory is not None and config.default_directory.is_file():
        raise ConfigurationError(
            f"default_directory {config.default_directory} is a file, not a directory."
        )
    for name in config.aliases:
        if not name or " " in name or name.startswith("/"):
            raise ConfigurationError(f"Invalid alias name: {name!r}")
