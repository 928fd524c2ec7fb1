"""Main entry point for profilecli: one-shot commands or an interactive session."""

if __name__ == "__main__" and __package__ is None:
    import sys
    from pathlib import Path

    # Add the project root to the Python path
    project_root = Path(__file__).resolve().parent.parent
    sys.path.insert(0, str(project_root))
    __package__ = "profilecli"


from typing import List, Optional

import typer
from rich.panel import Panel

from profilecli.command_proxy import CommandProxy
from profilecli.config import (
    ConfigurationError,
    load_configuration,
    validate_setup,
)
from profilecli.platform_setup import detect_platform
from profilecli.session import InteractiveSession
from profilecli.ui import console, setup_logging

app = typer.Typer(
    name="profilecli",
    help="profilecli - personal shell session with a startup profile",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=False,
    context_settings={"ignore_unknown_options": True},
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        from . import __version__

        console.print(f"profilecli version {__version__}")
        raise typer.Exit()


def show_config_callback(value: bool):
    """Show current configuration and exit."""
    if value:
        try:
            config = load_configuration()

            console.print("\n[bold blue]profilecli Configuration[/bold blue]")
            console.print(f"Profile: [dim]{config.get_profile_path()}[/dim]")
            console.print(f"Default directory: [cyan]{config.default_directory}[/cyan]")
            console.print(f"History file: [cyan]{config.history_file}[/cyan]")
            console.print(f"Editor: [cyan]{config.editor or 'auto'}[/cyan]")
            console.print(
                f"Optional modules: [cyan]{', '.join(m.name for m in config.optional_modules) or 'none'}[/cyan]"
            )
            console.print(f"Aliases: [cyan]{len(config.aliases)}[/cyan]")

        except Exception as e:
            console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
            raise typer.Exit(1)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    command: List[str] = typer.Argument(
        None, help="Command to run once, e.g. /hash file. Omit to start a session."
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug output and detailed error information",
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config-file", "-c", help="Path to custom configuration file"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Minimize output, show only results"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit.",
    ),
    show_config: Optional[bool] = typer.Option(
        None,
        "--show-config",
        callback=show_config_callback,
        is_eager=True,
        help="Show current configuration and exit.",
    ),
):
    """Main function for profilecli."""
    try:
        config = load_configuration(config_file=config_file, debug=debug)
        setup_logging(config.log_level.value)
        validate_setup(config)

        if not command:
            run_session(config)
            raise typer.Exit()

        status = execute_command_mode(" ".join(command), config, quiet)

    except ConfigurationError as e:
        handle_error(e, debug)
        console.print("\n[bold]Tip:[/bold] Run `profilecli /edit-profile` to fix it.")
        raise typer.Exit(1)
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, debug)
        raise typer.Exit(1)

    if status != 0:
        raise typer.Exit(status)


def run_session(config) -> None:
    """Bootstrap and run the interactive session."""
    session = InteractiveSession(config)
    session.run()


def execute_command_mode(input_text: str, config, quiet: bool = False) -> int:
    """Run one slash command and return its exit status."""
    handler = CommandProxy(config, extra_commands=detect_platform().commands())

    input_text = input_text.strip()
    if not input_text.startswith("/"):
        input_text = "/" + input_text

    result = handler.execute(input_text)

    if result:
        display_result(result, config, quiet, failed=handler.last_status != 0)
    return handler.last_status


def display_result(result: str, config, quiet: bool = False, failed: bool = False):
    """Display result with appropriate formatting."""
    if not result:
        return

    if quiet:
        # Minimal output
        console.print(result)
    elif config.rich_output:
        style = "red" if failed else "green"
        title = "Error" if failed else "Result"
        console.print(
            Panel(result, title=f"[bold {style}]{title}[/bold {style}]", border_style=style)
        )
    else:
        # Plain text output
        console.print(result)


def handle_error(error: Exception, debug: bool = False):
    """Handle and display errors with appropriate formatting."""
    if debug:
        console.print("\n[bold red]Debug Error Details:[/bold red]")
        console.print_exception()
    else:
        console.print(f"\n[bold red]Error:[/bold red] {str(error)}")
        console.print("[dim]Use --debug for more details[/dim]")


if __name__ == "__main__":
    app()
