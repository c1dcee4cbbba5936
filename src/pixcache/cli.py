"""Command line interface for inspecting and invalidating the image cache."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pixcache.application.cache_manager import CacheManager
from pixcache.config import app_config
from pixcache.domain.exceptions import PixcacheError
from pixcache.infrastructure.config.exceptions import ConfigFileNotFoundError
from pixcache.infrastructure.config.manager import get_config_manager
from pixcache.infrastructure.resolvers.factory import create_cache_manager
from pixcache.shared.logger import configure_logging

console = Console()

CLI_ERRORS = (PixcacheError, ConfigFileNotFoundError, ValidationError)

app = typer.Typer(
    name="pixcache",
    help="Resolve, inspect and invalidate cached filtered images",
    add_completion=False,
)

ConfigNameOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Name of the filters/resolvers config files"),
]
ConfigsDirOption = Annotated[
    Optional[Path],
    typer.Option("--configs-dir", help="Directory holding the config files"),
]


def _load_cache_manager(config_name: str, configs_dir: Path | None) -> CacheManager:
    return create_cache_manager(
        config_name, manager=get_config_manager(configs_dir or app_config.configs_dir)
    )


def _fail(error: Exception) -> typer.Exit:
    console.print(f"[red]{escape(str(error))}[/red]")
    return typer.Exit(code=1)


@app.callback()
def setup(
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="Override PIXCACHE_LOG_LEVEL")
    ] = None,
) -> None:
    load_dotenv()
    configure_logging(log_level or app_config.log_level)


@app.command("browser-path")
def browser_path(
    path: Annotated[str, typer.Argument(help="Path of the source image")],
    filter: Annotated[str, typer.Argument(help="Name of the filter set")],
    absolute: Annotated[
        bool, typer.Option("--absolute", "-a", help="Generate an absolute URL")
    ] = False,
    config_name: ConfigNameOption = "default",
    configs_dir: ConfigsDirOption = None,
) -> None:
    """Print the cached image URL, or the signed URL generating it."""
    try:
        cache_manager = _load_cache_manager(config_name, configs_dir)
        console.print(cache_manager.get_browser_path(path, filter, absolute=absolute))
    except CLI_ERRORS as e:
        raise _fail(e) from e


@app.command()
def remove(
    paths: Annotated[
        Optional[list[str]],
        typer.Option("--path", "-p", help="Path to remove, repeatable; all paths if omitted"),
    ] = None,
    filters: Annotated[
        Optional[list[str]],
        typer.Option("--filter", "-f", help="Filter to remove, repeatable; all filters if omitted"),
    ] = None,
    config_name: ConfigNameOption = "default",
    configs_dir: ConfigsDirOption = None,
) -> None:
    """Remove cached images."""
    try:
        cache_manager = _load_cache_manager(config_name, configs_dir)
        cache_manager.remove(paths or None, filters or None)
    except CLI_ERRORS as e:
        raise _fail(e) from e

    console.print(
        f"[green]Removed[/green] {', '.join(paths) if paths else 'all paths'} "
        f"for {', '.join(filters) if filters else 'all filters'}"
    )


@app.command("filters")
def list_filters(
    config_name: ConfigNameOption = "default",
    configs_dir: ConfigsDirOption = None,
) -> None:
    """Show the configured filter sets and the resolver each one uses."""
    try:
        cache_manager = _load_cache_manager(config_name, configs_dir)
    except CLI_ERRORS as e:
        raise _fail(e) from e

    table = Table()
    table.add_column("Filter", style="cyan")
    table.add_column("Format")
    table.add_column("Resolver")
    table.add_column("Operations")

    for name, filter_set in cache_manager.filter_config.all().items():
        table.add_row(
            name,
            filter_set.format or "-",
            filter_set.cache or f"{cache_manager.default_resolver} (default)",
            ", ".join(filter_set.filters) or "-",
        )

    console.print(Panel(table, title="[bold]Filter sets[/bold]", border_style="blue"))


@app.command("init-configs")
def init_configs(
    overwrite: Annotated[
        bool, typer.Option("--overwrite", help="Replace existing default configs")
    ] = False,
    configs_dir: ConfigsDirOption = None,
) -> None:
    """Write default configs for every registered schema."""
    manager = get_config_manager(configs_dir or app_config.configs_dir)
    try:
        manager.generate_default_configs(overwrite=overwrite)
    except ValueError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Default configs written to[/green] {manager.configs_dir}")


if __name__ == "__main__":
    app()
