"""
Main CLI application
"""
import typer
from dataclasses import replace
from pathlib import Path
from typing import Optional

from rich.table import Table

from ...core.constants import DEFAULT_CONFIG_PATH
from ...core.exceptions import AuthenticationError, ConfigError, TransportError
from ...core.interfaces import Cancelled
from ...core.logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from ..config.loader import ConfigLoader
from .connection import build_handler
from .host_parser import parse_host_string
from .prompts import RichPromptProvider

logger = get_logger(__name__)
console = get_stdout_console()
stderr_console = get_stderr_console()

EXIT_AUTH_FAILED = 1
EXIT_TRANSPORT_FAILED = 2
EXIT_USAGE = 3

app = typer.Typer(
    name="sftplink",
    add_completion=False,
    help="Open and check SFTP sessions",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help=f"TOML configuration file (default: {DEFAULT_CONFIG_PATH} if present)",
    ),
):
    """
    sftplink - SFTP session tool
    """
    toml_path = config
    if toml_path is None and Path(DEFAULT_CONFIG_PATH).expanduser().exists():
        toml_path = Path(DEFAULT_CONFIG_PATH).expanduser()

    try:
        settings = ConfigLoader().load_settings(toml_path, {"log_level": log_level})
    except ConfigError as e:
        stderr_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_USAGE)

    setup_logging(level=settings.log_level, log_file=log_file)
    ctx.obj = settings


@app.command()
def check(
    ctx: typer.Context,
    host: str = typer.Argument(..., help="Hostname or SSH config alias (supports user@host:port)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Username"),
    port: Optional[int] = typer.Option(None, "--port", "-p", "-P", help="SSH port"),
    password: bool = typer.Option(False, "--password", help="Prompt for password"),
    key_file: Optional[str] = typer.Option(None, "--key", "-i", help="SSH key file path"),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Connection timeout (milliseconds)"),
) -> None:
    """
    Connect, open the sftp channel, report status and disconnect.
    
    Without --password the server's keyboard-interactive prompts are
    answered in the terminal.
    
    Examples:
        sftplink check myserver
        sftplink check user@host:2222
        sftplink check host --password
    """
    settings = ctx.obj
    if timeout is not None:
        try:
            settings = replace(settings, connect_timeout_ms=timeout)
        except ConfigError as e:
            stderr_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(EXIT_USAGE)

    try:
        parsed_host, parsed_user, parsed_port = parse_host_string(host, user, port)
    except ValueError as e:
        stderr_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_USAGE)

    prompts = RichPromptProvider()
    secret = ""
    if password:
        answer = prompts.request_secret("Password")
        if isinstance(answer, Cancelled):
            raise typer.Exit(EXIT_AUTH_FAILED)
        secret = answer

    handler = build_handler(
        parsed_host,
        user=parsed_user,
        port=parsed_port,
        password=secret,
        key_file=key_file,
        settings=settings,
        prompt_provider=prompts,
    )

    with handler:
        try:
            handler.start()
        except AuthenticationError as e:
            reason = "cancelled" if e.cancelled else str(e)
            stderr_console.print(f"[red]Authentication failed:[/red] {reason}")
            raise typer.Exit(EXIT_AUTH_FAILED)
        except TransportError as e:
            stderr_console.print(f"[red]Connection error:[/red] {e}")
            raise typer.Exit(EXIT_TRANSPORT_FAILED)

        table = Table(show_header=False, box=None)
        table.add_row("realm", handler.realm)
        table.add_row("login", handler.get_credentials().login)
        table.add_row("connected", "[green]yes[/green]" if handler.is_connected() else "[red]no[/red]")
        try:
            table.add_row("remote cwd", handler.sftp.normalize("."))
        except (OSError, TransportError) as e:
            logger.debug("could not resolve remote cwd: %s", e)
        console.print(table)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
