"""Display components for CLI using Rich."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ghpm.models.package import Manifest
from ghpm.models.repository import RepoSearchItem

console = Console()

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{title}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_info(title: str, message: str) -> None:
    """Display an info message."""
    console.print()
    console.print(
        Panel(
            escape(message),
            title=f"[bold]{title}[/]",
            border_style="blue",
        )
    )


def show_warning(title: str, message: str) -> None:
    """Display a warning message."""
    console.print()
    console.print(
        Panel(
            f"[yellow]{escape(message)}[/]",
            title=f"[bold]{title}[/]",
            border_style="yellow",
        )
    )


def show_install_result(manifest: Manifest, location: Path | None) -> None:
    """Summarise a finished install or update.

    Args:
        manifest: The saved manifest.
        location: Package directory.
    """
    show_success("Installed", f"Installed {manifest.name}")

    if manifest.binaries:
        console.print("[bold]Linked binaries:[/]")
        for binary in manifest.binaries:
            console.print(f"  [cyan]{escape(binary)}[/]")

    if not manifest.built and manifest.language not in (None, "Unknown"):
        show_info(
            "Manual Build",
            f"Package cloned but not built. Check {location} for manual build instructions.",
        )


def show_package_list(manifests: list[Manifest]) -> None:
    """Display installed packages in a table."""
    if not manifests:
        console.print("[dim]No installed packages.[/]")
        return

    table = Table(title="[bold]Installed packages[/]")
    table.add_column("Name", style="cyan")
    table.add_column("Repository")
    table.add_column("Status")

    for manifest in manifests:
        marker = manifest.status_marker
        style = "green" if manifest.built else "red"
        table.add_row(
            escape(manifest.name),
            escape(manifest.repo),
            f"[{style}]{escape(marker)}[/]" if marker else "",
        )

    console.print(table)


def show_search_results(items: list[RepoSearchItem]) -> None:
    """Display search results with their selection index."""
    table = Table(show_header=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Repository", style="cyan")
    table.add_column("Stars", justify="right", style="yellow")
    table.add_column("Language")
    table.add_column("Description", overflow="fold")

    for index, item in enumerate(items, start=1):
        table.add_row(
            str(index),
            escape(item.full_name),
            f"★{item.stargazers_count}",
            escape(item.language_label),
            escape(item.description or ""),
        )

    console.print(table)


def show_package_info(manifest: Manifest, location: Path | None) -> None:
    """Display all recorded details about one package."""
    table = Table(title=f"[bold]{escape(manifest.name)}[/]", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Package", escape(manifest.name))
    table.add_row("Repository", escape(manifest.repo))
    table.add_row("URL", escape(manifest.url))
    if manifest.language:
        table.add_row("Language", escape(manifest.language))
    table.add_row("Built", "[green]yes[/]" if manifest.built else "[red]no[/]")
    if manifest.build_cmd:
        table.add_row("Build Command", escape(manifest.build_cmd))
    if manifest.build_reason:
        table.add_row("Build Reason", escape(manifest.build_reason))
    if manifest.version:
        table.add_row("Version", escape(manifest.version))
    if manifest.commit:
        table.add_row("Commit", manifest.commit[:8])
    if manifest.binaries:
        table.add_row("Binaries", escape("\n".join(manifest.binaries)))
    table.add_row("Installed", manifest.installed_at.strftime(TIMESTAMP_FORMAT))
    if location is not None:
        table.add_row("Location", escape(str(location)))

    console.print()
    console.print(table)
