"""Command line interface for file sorter."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .core.classifier import ExtensionClassifier
from .core.extensions import OTHER_CATEGORY
from .core.organizer import FileSorter
from .exceptions import FileSorterError
from .models.config import SorterConfig, create_default_config, load_config, load_config_from_env

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(config: Optional[Path], env_file: Optional[Path]) -> SorterConfig:
    """Load a JSON config if given, otherwise the environment and .env file."""
    if config:
        return load_config(config)
    return load_config_from_env(env_file)


config_option = click.option(
    '--config',
    type=click.Path(path_type=Path),
    help='JSON configuration file (instead of environment variables)'
)
env_file_option = click.option(
    '--env-file',
    type=click.Path(path_type=Path),
    help='.env file to read (default: ./.env if present)'
)


@click.group()
@click.version_option(package_name="file-sorter")
def cli():
    """Sort a directory into category folders by file extension."""
    pass


@cli.command()
@config_option
@env_file_option
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
def sort(config: Optional[Path], env_file: Optional[Path], verbose: bool):
    """Move every entry of the source directory to its destination."""
    _setup_logging(verbose)

    try:
        cfg = _load(config, env_file)
        results = FileSorter(cfg).run()
    except FileSorterError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        sys.exit(1)

    results_table = Table(title="Results")
    results_table.add_column("Category", style="cyan")
    results_table.add_column("Count", justify="right")

    for category, count in sorted(results['by_category'].items()):
        results_table.add_row(category, str(count))

    results_table.add_row("", "")
    results_table.add_row("[bold]Moved[/bold]", str(results['moved']))
    results_table.add_row("  Files", str(results['files']))
    results_table.add_row("  Directories", str(results['directories']))
    results_table.add_row("Skipped", str(results['skipped']))
    if results['vanished']:
        results_table.add_row("[yellow]Vanished[/yellow]", str(results['vanished']))

    console.print(results_table)
    console.print("[green]SUCCESS[/green]")


@cli.command()
@click.argument('names', nargs=-1, required=True)
@config_option
@env_file_option
def classify(names, config: Optional[Path], env_file: Optional[Path]):
    """Show which category each of NAMES would be sorted into."""
    try:
        cfg = _load(config, env_file)
    except FileSorterError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        sys.exit(1)

    classifier = ExtensionClassifier(cfg.rules)

    table = Table(title="Classification")
    table.add_column("Name")
    table.add_column("Category", style="cyan")
    table.add_column("Destination", style="dim")

    for name in names:
        match = classifier.classify(name)
        if match is None:
            table.add_row(name, OTHER_CATEGORY, str(cfg.other_directory))
        else:
            table.add_row(name, match.category, str(match.rule.destination))

    console.print(table)


@cli.command(name='show-config')
@config_option
@env_file_option
def show_config(config: Optional[Path], env_file: Optional[Path]):
    """Print the resolved rules and exclusions."""
    try:
        cfg = _load(config, env_file)
    except FileSorterError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"\n[bold]Source:[/bold] {cfg.source_directory}")
    console.print(f"[bold]Script name:[/bold] {cfg.script_name}")

    rules_table = Table(title="Categories (first match wins)")
    rules_table.add_column("Category", style="cyan")
    rules_table.add_column("Destination")
    rules_table.add_column("Extensions", style="dim")

    for rule in cfg.rules:
        rules_table.add_row(rule.name, str(rule.destination), " ".join(rule.extensions))
    rules_table.add_row(OTHER_CATEGORY, str(cfg.other_directory), "*")

    console.print(rules_table)
    console.print(f"\n[bold]Excluded names:[/bold] {', '.join(sorted(cfg.exclusion_names()))}")

    duplicates = ExtensionClassifier(cfg.rules).find_duplicate_extensions()
    if duplicates:
        console.print("\n[yellow]Extensions listed more than once:[/yellow]")
        for ext, categories in sorted(duplicates.items()):
            console.print(f"  {ext}: {', '.join(categories)} (first listing wins)")


@cli.command(name='init-config')
@click.argument('path', type=click.Path(path_type=Path))
def init_config(path: Path):
    """Write a template JSON configuration to PATH."""
    if path.exists():
        console.print(f"[red]ERROR: {path} already exists[/red]")
        sys.exit(1)

    create_default_config(path)
    console.print(f"[green]Wrote template config to {path}[/green]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
