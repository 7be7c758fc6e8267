"""
FormatForge CLI Main Entry Point.

Provides a command-line view of the installed format plugins.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from formatforge import __version__
from formatforge.core.config import FormatForgeConfig, load_config
from formatforge.core.logging import setup_logging
from formatforge.plugins.catalog import CatalogEntry, type_name
from formatforge.plugins.categories import PluginCategory
from formatforge.plugins.registry import PluginRegistry, build_registry

console = Console()


def get_registry(ctx: click.Context) -> PluginRegistry:
    """Get or build the plugin registry from context."""
    if "registry" not in ctx.obj:
        config: FormatForgeConfig = ctx.obj["config"]
        ctx.obj["registry"] = build_registry(config)
    return ctx.obj["registry"]


def resolve_category(value: str) -> PluginCategory:
    """Resolve a category argument or exit with an error."""
    try:
        return PluginCategory.from_name(value)
    except ValueError:
        choices = ", ".join(category.value for category in PluginCategory)
        console.print(f"[red]Unknown category '{value}'. Choose from: {choices}[/red]")
        sys.exit(1)


def describe_entry(category: PluginCategory, name: str, entry: CatalogEntry) -> dict[str, Any]:
    """Plain-data description of a catalog entry."""
    return {
        "category": category.value,
        "name": name,
        "kind": entry.kind.name.lower(),
        "type": type_name(entry.plugin_type),
    }


@click.group()
@click.version_option(version=__version__, prog_name="FormatForge")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--plugin-dir",
    "plugin_dirs",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Additional directory to load plugins from",
)
@click.option("--no-entry-points", is_flag=True, help="Ignore installed entry point plugins")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    plugin_dirs: tuple[Path, ...],
    no_entry_points: bool,
    json_output: bool,
) -> None:
    """
    FormatForge - Catalog of disk and media format plugins.

    Lists the filesystem, partition, image, filter and archive plugins
    available to this installation.
    """
    ctx.ensure_object(dict)

    if config:
        loaded = FormatForgeConfig.load(config)
    else:
        loaded = load_config()

    if plugin_dirs:
        loaded.plugins.plugin_directories.extend(path.expanduser().resolve() for path in plugin_dirs)
    if no_entry_points:
        loaded.plugins.entry_points_enabled = False

    setup_logging(loaded.logging)

    ctx.obj["config"] = loaded
    ctx.obj["json_output"] = json_output


@cli.command("list")
@click.option("--category", "-t", "category_name", help="Only list one category")
@click.pass_context
def list_plugins(ctx: click.Context, category_name: str | None) -> None:
    """List registered plugins."""
    registry = get_registry(ctx)
    json_output = ctx.obj.get("json_output", False)

    categories = [resolve_category(category_name)] if category_name else list(PluginCategory)

    rows = [
        describe_entry(category, name, entry)
        for category in categories
        for name, entry in registry.catalog(category).items()
    ]

    if json_output:
        click.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        console.print("[yellow]No plugins registered[/yellow]")
        return

    table = Table(title="Format Plugins")
    table.add_column("Category", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Kind", style="yellow")
    table.add_column("Type", style="white")

    for row in rows:
        table.add_row(row["category"], row["name"], row["kind"], row["type"])

    console.print(table)


@cli.command("show")
@click.argument("category_name", metavar="CATEGORY")
@click.argument("name")
@click.pass_context
def show_plugin(ctx: click.Context, category_name: str, name: str) -> None:
    """Show details of a single plugin."""
    registry = get_registry(ctx)
    json_output = ctx.obj.get("json_output", False)
    category = resolve_category(category_name)

    entry = registry.get_entry(category, name)
    if entry is None:
        console.print(f"[red]No {category.value} plugin named '{name}'[/red]")
        sys.exit(1)

    plugin = entry.instantiate()
    info = describe_entry(category, plugin.name.lower(), entry)
    info["display_name"] = plugin.name
    info["author"] = plugin.author
    info["id"] = str(plugin.id) if plugin.id else None

    if json_output:
        click.echo(json.dumps(info, indent=2))
        return

    lines = [
        f"[bold]Name:[/bold] {info['display_name']}",
        f"[bold]Category:[/bold] {info['category']}",
        f"[bold]Kind:[/bold] {info['kind']}",
        f"[bold]Type:[/bold] {info['type']}",
        f"[bold]Author:[/bold] {info['author'] or 'Unknown'}",
        f"[bold]ID:[/bold] {info['id'] or '-'}",
    ]
    console.print(Panel("\n".join(lines), title=info["name"]))


@cli.command("summary")
@click.pass_context
def summary(ctx: click.Context) -> None:
    """Show the number of plugins per category."""
    registry = get_registry(ctx)
    counts = registry.summary()

    if ctx.obj.get("json_output", False):
        click.echo(json.dumps(counts, indent=2))
        return

    table = Table(title="Plugin Catalogs")
    table.add_column("Category", style="cyan")
    table.add_column("Plugins", style="green", justify="right")
    for category, count in counts.items():
        table.add_row(category, str(count))
    console.print(table)


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
