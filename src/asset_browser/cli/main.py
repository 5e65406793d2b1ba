"""Main CLI interface for the Game Asset Browser."""

import click
import csv
import io
import json
import logging
from pathlib import Path
from typing import Sequence
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from ..core.classifier import Category
from ..core.exceptions import (
    AssetBrowserError, FileSystemError, ScanError, ConfigurationError,
    AccessDeniedError, PathNotFoundError, ScanInProgressError
)
from ..core.models import Asset, ScanResult, SortKey, Summary
from ..core.scanner import AssetScanner
from ..core.session import AssetSession

console = Console()

CATEGORY_CHOICES = [category.value for category in Category]

CATEGORY_COLORS = {
    Category.IMAGE: "cyan",
    Category.AUDIO: "yellow",
    Category.MODEL: "magenta",
    Category.CONFIG: "green",
}


@click.group()
@click.version_option(version="0.1.0")
@click.option('--config', '-c', type=click.Path(path_type=Path),
              help='Configuration file path')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level (overrides config)')
@click.option('--log-file', type=click.Path(path_type=Path),
              help='Log file path (overrides config)')
@click.pass_context
def cli(ctx, config, log_level, log_file):
    """Game Asset Browser - Catalog and filter game asset folders."""
    from ..core.config import setup_config, LoggingConfig
    from ..core.logging_config import setup_logging

    try:
        config_manager = setup_config(config)
    except OSError as e:
        raise click.ClickException(f"Cannot use configuration file: {e}")
    app_config = config_manager.get_config()

    if log_level or log_file:
        logging_config = LoggingConfig(
            level=log_level or app_config.logging.level,
            file_path=log_file or app_config.logging.file_path,
            file_enabled=app_config.logging.file_enabled or log_file is not None,
            console_enabled=app_config.logging.console_enabled,
            format=app_config.logging.format,
            file_max_size_mb=app_config.logging.file_max_size_mb,
            file_backup_count=app_config.logging.file_backup_count
        )
    else:
        logging_config = app_config.logging

    logging_manager = setup_logging(logging_config)
    if logging_config.level.upper() == 'DEBUG':
        logging_manager.enable_debug_logging()
        logging_manager.log_system_info()

    ctx.ensure_object(dict)
    ctx.obj['config'] = app_config
    ctx.obj['config_manager'] = config_manager


def _scan_options(app_config, recursive, max_depth, exclude_hidden, verbose):
    """Merge command line overrides onto the configured scan defaults."""
    options = app_config.scan_options(verbose=verbose)
    if recursive is not None:
        options.recursive = recursive
    if max_depth is not None:
        options.max_depth = max_depth
    if exclude_hidden:
        options.include_hidden = False
    return options


def _require_directory(directory: Path):
    if not directory.exists():
        raise PathNotFoundError(f"Directory does not exist: {directory}")
    if not directory.is_dir():
        raise FileSystemError(f"Path is not a directory: {directory}")


def _load_session(app_config, directory: Path, options, show_progress: bool) -> AssetSession:
    """Scan directory into a fresh session, with a spinner when requested."""
    if not show_progress:
        session = AssetSession(AssetScanner(config=app_config))
        session.load(directory, options)
        return session

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        scan_task = progress.add_task("Scanning files...", total=None)

        def on_progress(files_seen, assets_found):
            progress.update(scan_task, description=f"Seen {files_seen} files, {assets_found} assets...")

        session = AssetSession(AssetScanner(config=app_config, progress_callback=on_progress))
        session.load(directory, options)
        progress.update(scan_task, completed=True, description="Scan complete")
    return session


@cli.command()
@click.argument("directory", type=click.Path(path_type=Path))
@click.option("--recursive/--no-recursive", default=None, help="Scan directories recursively (default from config)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--max-depth", type=int, help="Maximum directory depth to scan (default from config)")
@click.option("--exclude-hidden", is_flag=True, help="Skip hidden files and folders")
@click.pass_context
def scan(ctx, directory: Path, recursive: bool, verbose: bool, max_depth: int, exclude_hidden: bool):
    """Scan a directory and show a summary of its assets."""
    try:
        app_config = ctx.obj['config']
        _require_directory(directory)
        options = _scan_options(app_config, recursive, max_depth, exclude_hidden, verbose)

        if verbose:
            console.print(f"[bold blue]Starting scan of {directory}[/bold blue]")
            console.print(f"Options: recursive={options.recursive}, max_depth={options.max_depth}, "
                          f"include_hidden={options.include_hidden}")

        session = _load_session(app_config, directory, options, show_progress=verbose)
        result = session.last_scan

        console.print(f"\n[bold green]✓ Scan completed[/bold green] in {result.duration:.2f} seconds")
        _display_summary(session.summary)
        _display_scan_warnings(result, verbose)
        console.print(f"\n{session.status}")

    except (AssetBrowserError, OSError) as e:
        handle_cli_error(e, "scan")
        raise click.Abort()


def _parse_sort_key(ctx, param, value):
    sort_key = SortKey.lookup(value)
    if sort_key is None:
        raise click.BadParameter(f"{value!r} is not one of: {', '.join(SortKey.labels())}")
    return sort_key


@cli.command(name="list")
@click.argument("directory", type=click.Path(path_type=Path))
@click.option("--category", "-c", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
              help="Filter by asset category")
@click.option("--tag", "-t", help="Only show assets carrying this folder tag")
@click.option("--search", "-s", "search_text", help="Text to look for in names, paths, extensions and tags")
@click.option("--sort", "sort_key", default=SortKey.NAME_ASC.value, callback=_parse_sort_key,
              help=f"Sort order: one of {', '.join(SortKey.labels())} (or e.g. size_desc)")
@click.option("--format", "-f", "output_format", type=click.Choice(["table", "json", "csv"]),
              default="table", help="Output format")
@click.option("--limit", type=int, default=None, help="Maximum number of results to show")
@click.pass_context
def list_assets(ctx, directory: Path, category: str, tag: str, search_text: str, sort_key: str,
                output_format: str, limit: int):
    """Scan a directory and list the assets matching the filters."""
    try:
        app_config = ctx.obj['config']
        _require_directory(directory)

        session = _load_session(app_config, directory, app_config.scan_options(), show_progress=False)
        if category:
            session.set_category(Category.from_label(category))
        if tag:
            session.set_tag(tag)
        if search_text:
            session.set_search_text(search_text)
        session.set_sort_key(sort_key)

        assets = session.view
        if limit is not None:
            assets = assets[:limit]

        _display_asset_results(assets, output_format)

        if output_format == "table":
            if not assets:
                console.print("[yellow]No assets found matching the filters.[/yellow]")
            console.print(f"\n[bold green]{session.status}[/bold green]")

    except (AssetBrowserError, OSError) as e:
        handle_cli_error(e, "list")
        raise click.Abort()


@cli.command()
@click.option("--root", "-r", type=click.Path(path_type=Path), help="Folder to load at startup")
@click.option("--port", "-p", type=int, default=None, help="Port to run the web server on")
@click.option("--host", "-h", default=None, help="Host to bind the web server to")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def web(ctx, root: Path, port: int, host: str, debug: bool):
    """Start the web API."""
    from ..web.app import create_app

    app_config = ctx.obj['config']
    host = host or app_config.web.host
    port = port or app_config.web.port
    debug = debug or app_config.web.debug
    root = root or app_config.web.default_root

    try:
        session = AssetSession(AssetScanner(config=app_config))
        if root is not None:
            _require_directory(root)
            session.load(root)
            console.print(f"[bold]{session.status}[/bold]")

        console.print("[bold blue]Starting Game Asset Browser web API...[/bold blue]")
        console.print(f"Server: http://{host}:{port}")
        console.print(f"Debug mode: {'enabled' if debug else 'disabled'}")
        console.print("\n[bold green]Press Ctrl+C to stop the server[/bold green]\n")

        app = create_app({
            'DEBUG': debug,
            'SECRET_KEY': app_config.web.secret_key,
        }, session=session)
        app.run(host=host, port=port, debug=debug)

    except KeyboardInterrupt:
        console.print("\n[bold yellow]Server stopped by user[/bold yellow]")
    except (AssetBrowserError, OSError) as e:
        handle_cli_error(e, "web")
        raise click.Abort()


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command('show')
@click.pass_context
def show_config(ctx):
    """Show current configuration."""
    config_manager = ctx.obj['config_manager']

    console.print("[bold blue]Current Configuration:[/bold blue]")
    console.print(f"File: {config_manager.config_file}")
    for section, values in config_manager.as_dict().items():
        console.print(f"\n[bold]{section.capitalize()}:[/bold]")
        for key, value in values.items():
            console.print(f"  {key}: {value}")


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_config(ctx, key, value):
    """Set a configuration value. Use dot notation for nested keys (e.g., web.port)."""
    config_manager = ctx.obj['config_manager']

    try:
        converted_value = config_manager.set_value(key, value)
        console.print(f"[green]✓[/green] Set {key} = {converted_value}")
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()


@config.command('reset')
@click.confirmation_option(prompt='Are you sure you want to reset all configuration to defaults?')
@click.pass_context
def reset_config(ctx):
    """Reset configuration to default values."""
    ctx.obj['config_manager'].reset_to_defaults()
    console.print("[green]✓ Configuration reset to defaults[/green]")


@config.command('export')
@click.argument('file_path', type=click.Path(path_type=Path))
@click.pass_context
def export_config(ctx, file_path):
    """Export configuration to JSON file."""
    try:
        ctx.obj['config_manager'].export_to_json(file_path)
        console.print(f"[green]✓ Configuration exported to {file_path}[/green]")
    except OSError as e:
        console.print(f"[red]Error exporting configuration:[/red] {e}")
        raise click.Abort()


def _display_summary(summary: Summary):
    """Print the catalog summary as a small table."""
    console.print(f"Total assets: [bold]{summary.total_assets}[/bold]")
    console.print(f"Total size: [bold]{summary.total_size_display}[/bold]")
    console.print(f"Distinct extensions: [bold]{summary.unique_extensions}[/bold]")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category")
    table.add_column("Assets", justify="right")
    for category in Category:
        count = summary.count_for(category)
        if count:
            color = CATEGORY_COLORS.get(category, "white")
            table.add_row(f"{category.icon} [{color}]{category.value}[/{color}]", str(count))
    if summary.total_assets:
        console.print(table)


def _display_scan_warnings(result: ScanResult, verbose: bool):
    if result.aborted:
        console.print("[bold yellow]Warning: the scan stopped early; the catalog is partial.[/bold yellow]")

    if not result.skipped:
        return

    console.print(f"[bold yellow]Skipped {result.skipped_count} unreadable file(s)[/bold yellow]")
    if verbose:
        for entry in result.skipped[:10]:
            console.print(f"  [yellow]- {entry.path}: {entry.reason}[/yellow]")
        if result.skipped_count > 10:
            console.print(f"  [dim]... and {result.skipped_count - 10} more[/dim]")


def _display_asset_results(assets: Sequence[Asset], output_format: str):
    """Display assets in the specified format."""
    if output_format == "json":
        click.echo(json.dumps([asset.to_dict() for asset in assets], indent=2))

    elif output_format == "csv":
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Name", "Extension", "Category", "Size", "Modified", "Tags", "Relative Path", "Full Path"])
        for asset in assets:
            writer.writerow([
                asset.name,
                asset.extension,
                asset.category.value,
                asset.size_bytes,
                asset.date_modified.isoformat(),
                "/".join(asset.tags),
                asset.relative_path,
                asset.full_path,
            ])
        click.echo(output.getvalue().strip())

    else:
        if not assets:
            return
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("", no_wrap=True)
        table.add_column("Name", style="cyan", no_wrap=False, max_width=30)
        table.add_column("Category", justify="center")
        table.add_column("Size", justify="right")
        table.add_column("Modified", style="blue")
        table.add_column("Tags", style="green")
        table.add_column("Path", style="dim", no_wrap=False, max_width=50)

        for asset in assets:
            color = CATEGORY_COLORS.get(asset.category, "white")
            table.add_row(
                asset.icon,
                asset.file_name,
                f"[{color}]{asset.category.value}[/{color}]",
                asset.size_display,
                asset.date_modified.strftime("%Y-%m-%d %H:%M"),
                ", ".join(asset.tags),
                asset.relative_path,
            )

        console.print(table)


def handle_cli_error(error: Exception, operation: str = "operation") -> None:
    """
    Handle CLI errors with appropriate user feedback.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed
    """
    if isinstance(error, PathNotFoundError):
        console.print(f"[bold red]Error:[/bold red] {error}")
        console.print("[yellow]Please check that the path exists and is accessible.[/yellow]")
    elif isinstance(error, (AccessDeniedError, PermissionError)):
        console.print(f"[bold red]Permission Error:[/bold red] {error}")
        console.print("[yellow]Please check file/directory permissions or run with appropriate privileges.[/yellow]")
    elif isinstance(error, ScanInProgressError):
        console.print(f"[bold red]Scan Error:[/bold red] {error}")
        console.print("[yellow]Wait for the running scan to finish and try again.[/yellow]")
    elif isinstance(error, ScanError):
        console.print(f"[bold red]Scan Error:[/bold red] {error}")
    elif isinstance(error, FileSystemError):
        console.print(f"[bold red]File System Error:[/bold red] {error}")
        console.print("[yellow]Please check the path you passed.[/yellow]")
    elif isinstance(error, AssetBrowserError):
        console.print(f"[bold red]Error:[/bold red] {error}")
    else:
        console.print(f"[bold red]Unexpected Error:[/bold red] {error}")
        console.print("[yellow]An unexpected error occurred. Please check the logs for more details.[/yellow]")

    logging.getLogger(__name__).error(f"CLI error in {operation}: {error}", exc_info=True)


if __name__ == "__main__":
    cli()
