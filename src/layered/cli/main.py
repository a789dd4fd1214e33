"""CLI entry point for layered-dispatch.

Invoked as::

    layered [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m layered.cli.main

Commands
--------
version     Show version information
models      List the models, methods and layer counts of a configuration
layers      Show the layer chain of one method
call        Call a method on a fresh record and print its results
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from layered.registry.models import ModelRegistry

console = Console()
err_console = Console(stderr=True)


def _load_or_exit(config_path: str) -> "ModelRegistry":
    """Load a configuration and bootstrap its registry, exiting on error."""
    from layered.config import ConfigError, bootstrap, load_config
    from layered.errors import DispatchError

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)
    try:
        return bootstrap(config)
    except (ImportError, AttributeError, TypeError, DispatchError) as exc:
        err_console.print(f"[red]Extension error[/red] in {config_path}: {exc}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="layered-dispatch")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log dispatch at DEBUG level")
def cli(verbose: bool) -> None:
    """Layered method-override dispatch: inspect and call model methods."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from layered import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]layered-dispatch[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# models command
# ---------------------------------------------------------------------------


@cli.command(name="models")
@click.argument("config", type=click.Path(exists=False))
def models_command(config: str) -> None:
    """List every model and method defined by a configuration.

    CONFIG is the path to the YAML configuration file.
    """
    registry = _load_or_exit(config)

    if not len(registry):
        console.print(f"[yellow]No models[/yellow] registered by {config}")
        return

    table = Table(title=f"Models: {config}")
    table.add_column("Model", style="bold")
    table.add_column("Method")
    table.add_column("Layers", justify="right")

    for model_name in registry.list_models():
        model = registry.get(model_name)
        for method_name in model.methods.list_methods():
            table.add_row(model_name, method_name, str(len(model.methods.get(method_name))))

    console.print(table)


# ---------------------------------------------------------------------------
# layers command
# ---------------------------------------------------------------------------


@cli.command(name="layers")
@click.argument("config", type=click.Path(exists=False))
@click.argument("model_name")
@click.argument("method_name")
def layers_command(config: str, model_name: str, method_name: str) -> None:
    """Show the layers of a method, most specific first.

    CONFIG is the YAML configuration, MODEL_NAME and METHOD_NAME select the method.
    """
    from layered.errors import DispatchError

    registry = _load_or_exit(config)
    try:
        chain = registry.get(model_name).methods.get(method_name)
    except DispatchError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    table = Table(title=escape(f"{model_name}.{method_name}{chain.signature()}"))
    table.add_column("#", justify="right")
    table.add_column("Implementation")
    table.add_column("Role")

    for layer in chain.layers:
        role = "base" if layer.is_base else ("top" if layer is chain.top else "")
        table.add_row(str(layer.position), layer.qualname, role)

    console.print(table)


# ---------------------------------------------------------------------------
# call command
# ---------------------------------------------------------------------------


@cli.command(name="call")
@click.argument("config", type=click.Path(exists=False))
@click.argument("model_name")
@click.argument("method_name")
@click.argument("args", nargs=-1)
def call_command(config: str, model_name: str, method_name: str, args: tuple[str, ...]) -> None:
    """Call a method on a new record and print each result.

    ARGS are passed to the method as strings.

    Examples:

    \b
        layered call layered.yaml Partner greet Ada
    """
    from layered.dispatch import call_multi, check_arguments
    from layered.errors import DispatchError

    registry = _load_or_exit(config)
    try:
        record = registry.get(model_name).new_record()
        check_arguments(record, method_name, *args)
        results = call_multi(record, method_name, *args)
    except (DispatchError, TypeError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if not results:
        console.print("[dim](no result)[/dim]")
    for result in results:
        console.print(result, markup=False, highlight=False)


if __name__ == "__main__":
    cli()
