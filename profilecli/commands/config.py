"""Config command implementation for configuration management."""

from typing import List

from ..command_proxy import Command
from ..config import ProfileConfig, save_config


class ConfigCommand(Command):
    """Command to show and manage configuration."""

    def execute(self, args: List[str], config: ProfileConfig) -> str:
        """Show or manage configuration."""

        if not args:
            return self._show_config(config)

        command = args[0].lower()

        if command == "show":
            return self._show_config(config)
        elif command == "save":
            return self._save_config(config)
        elif command == "path":
            return str(config.get_profile_path())
        else:
            return f"Unknown config command: {command}\n{self.get_help()}"

    def _show_config(self, config: ProfileConfig) -> str:
        """Show current configuration."""
        output = "profilecli Configuration:\n\n"
        output += f"  Profile: {config.get_profile_path()}\n\n"

        output += "[bold blue]Session:[/bold blue]\n"
        output += f"  Title template: {config.window_title_template}\n"
        output += f"  Default directory: {config.default_directory}\n"
        output += f"  Aliases: {len(config.aliases)}\n\n"

        output += "[bold blue]Editor:[/bold blue]\n"
        output += f"  Editor: {config.editor or '(VISUAL/EDITOR or platform default)'}\n"
        output += f"  Wait for editor: {'Yes' if config.editor_wait else 'No'}\n\n"

        output += "[bold blue]Line Editing:[/bold blue]\n"
        output += f"  History file: {config.history_file}\n"
        output += f"  Max history size: {config.max_history_size}\n"
        output += f"  No duplicates: {'Yes' if config.history_no_duplicates else 'No'}\n"
        output += f"  Prediction: {config.prediction_source.value} ({config.prediction_view.value})\n\n"

        output += "[bold blue]Prompt Theming:[/bold blue]\n"
        output += f"  Activation variable: {config.theme_env_var}\n"
        output += f"  Initializer: {' '.join(config.theme_init_command)}\n"
        output += f"  Log level: {config.theme_log_var}={config.theme_log_level}\n\n"

        output += "[bold blue]Modules:[/bold blue]\n"
        if config.optional_modules:
            output += f"  Optional modules: {', '.join(m.name for m in config.optional_modules)}\n"
        else:
            output += "  Optional modules: none\n"
        output += f"  Trusted host: {config.trusted_host or 'none'}\n\n"

        output += "[bold blue]Output:[/bold blue]\n"
        output += f"  Rich output: {'Yes' if config.rich_output else 'No'}\n"
        output += f"  Debug mode: {'Yes' if config.show_debug else 'No'}\n"
        output += f"  Log level: {config.log_level.value}\n"

        return output.strip()

    def _save_config(self, config: ProfileConfig) -> str:
        """Save current configuration to file."""
        if save_config(config):
            return f"Configuration saved to {config.get_profile_path()}"
        return "Failed to save configuration"

    def get_help(self) -> str:
        """Get help text for the config command."""
        return """Show and manage configuration:
  /config                  - Show current configuration
  /config show             - Show current configuration (same as above)
  /config save             - Save current config to the profile file
  /config path             - Print the profile file path

Examples:
  /config                  - View all settings
  /config save             - Save to ~/.profilecli/config.toml"""
