"""arborlog CLI: a thin Typer wrapper for checking logging configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape

from arborlog import __version__

if TYPE_CHECKING:
    from arborlog.logger import Logger
    from arborlog.registry import LoadedConfiguration, LoggerRegistry

app = typer.Typer(
    name="arborlog",
    help="Validate and exercise hierarchical logging configuration files.",
    no_args_is_help=True,
)
console = Console(highlight=False)


def _load_registry(config_file: Path) -> tuple[LoggerRegistry, LoadedConfiguration]:
    from arborlog.config.sources import read_configuration_file
    from arborlog.registry import LoggerRegistry

    registry = LoggerRegistry()
    loaded = registry.load_configuration(read_configuration_file(config_file))
    return registry, loaded


def _describe_logger(logger: Logger) -> str:
    appenders = ", ".join(a.identifier for a in logger.appenders) or "none"
    return f"threshold={logger.threshold.display_name}  appenders=\\[{appenders}]"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show arborlog diagnostics on stderr"),
) -> None:
    """Validate and exercise hierarchical logging configuration files."""
    if verbose:
        from arborlog.utils.logging import configure_logging

        configure_logging(logging.DEBUG)


@app.command()
def version() -> None:
    """Show arborlog version."""
    console.print(f"arborlog {__version__}")


@app.command()
def validate(config_file: Path = typer.Argument(..., help="Path to a YAML, JSON or plist configuration")) -> None:
    """Load a configuration file into an isolated registry and summarize it."""
    try:
        registry, loaded = _load_registry(config_file)
    except Exception as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    with registry:
        console.print(f"[green]Valid configuration:[/green] {config_file}")
        console.print(f"\n[bold]Formatters ({len(loaded.formatters)}):[/bold]")
        for formatter in loaded.formatters:
            console.print(f"  [cyan]{formatter.identifier}[/cyan]  {type(formatter).__name__}")

        console.print(f"\n[bold]Appenders ({len(loaded.appenders)}):[/bold]")
        for appender in loaded.appenders:
            formatter_id = appender.formatter.identifier if appender.formatter else "none"
            console.print(
                f"  [cyan]{appender.identifier}[/cyan]  {type(appender).__name__}  "
                f"threshold={appender.threshold.display_name}  formatter={formatter_id}"
            )

        console.print(f"\n[bold]Loggers ({len(registry.loggers)}):[/bold]")
        console.print(f"  [cyan]<root>[/cyan]  {_describe_logger(registry.root_logger)}")
        for logger in registry.loggers:
            console.print(f"  [cyan]{logger.identifier}[/cyan]  {_describe_logger(logger)}")


@app.command()
def resolve(
    config_file: Path = typer.Argument(..., help="Path to a YAML, JSON or plist configuration"),
    name: str = typer.Argument(..., help="Dotted logger name to resolve, e.g. app.network.http"),
) -> None:
    """Show which configured logger serves a given name."""
    try:
        registry, _ = _load_registry(config_file)
    except Exception as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    with registry:
        logger = registry.get_logger(name)
        resolved = logger.identifier or "<root>"
        console.print(f"{name or '<root>'} -> [cyan]{resolved}[/cyan]")
        console.print(f"  {_describe_logger(logger)}")


@app.command()
def emit(
    config_file: Path = typer.Argument(..., help="Path to a YAML, JSON or plist configuration"),
    name: str = typer.Argument(..., help="Dotted logger name"),
    message: str = typer.Argument(..., help="Message to log"),
    level: str = typer.Option("info", "--level", "-l", help="debug, info, warning, error, fatal"),
) -> None:
    """Send one message through the configured loggers and appenders."""
    from arborlog.models.levels import LogLevel

    parsed = LogLevel.parse(level)
    if parsed is None:
        console.print(f"[red]Unknown level:[/red] {level}")
        raise typer.Exit(1)

    try:
        registry, _ = _load_registry(config_file)
    except Exception as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    with registry:
        registry.get_logger(name).log(message, parsed)


if __name__ == "__main__":
    app()
