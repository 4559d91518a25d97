"""Main CLI entry point for ghpm."""

import sys
from typing import NoReturn

import click

from ghpm.cli.display import (
    console,
    show_error,
    show_info,
    show_install_result,
    show_package_info,
    show_package_list,
    show_search_results,
    show_success,
)
from ghpm.cli.prompts import select_repository
from ghpm.core.config.settings import get_settings
from ghpm.core.exceptions import GhpmError
from ghpm.core.logger.logger import setup_logging
from ghpm.manager import PackageManager
from ghpm.models.repository import RepoSpec


def _get_manager() -> PackageManager:
    """Create a package manager from the global settings."""
    return PackageManager(settings=get_settings())


def _fail(title: str, error: GhpmError) -> NoReturn:
    show_error(title, error.message)
    sys.exit(1)


def _install(manager: PackageManager, spec: RepoSpec, no_build: bool) -> None:
    try:
        manifest = manager.install(spec, no_build=no_build)
    except GhpmError as e:
        _fail("Install Failed", e)
    show_install_result(manifest, manager.location(manifest.name))


def _search_and_select(manager: PackageManager, query: str, limit: int | None) -> RepoSpec | None:
    """Search, show the results and let the user pick one."""
    try:
        items = manager.search(query, limit=limit)
    except GhpmError as e:
        _fail("Search Failed", e)

    if not items:
        show_info("Search", f"No results found for: {query}")
        return None

    show_search_results(items)
    chosen = select_repository(items)
    if chosen is None:
        console.print("[dim]No selection made[/]")
        return None
    return chosen.to_spec()


@click.group(invoke_without_command=True)
@click.option("--version", "-V", is_flag=True, help="Show version")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.pass_context
def main(ctx: click.Context, version: bool, verbose: bool) -> None:
    """ghpm - install tools straight from GitHub repositories.

    Clones a repository, detects how to build it, builds it and links the
    resulting executables into your bin directory.
    """
    if version:
        from ghpm import __version__

        click.echo(f"ghpm version {__version__}")
        return

    try:
        logging_settings = get_settings().logging
    except GhpmError as e:
        _fail("Configuration Error", e)

    if verbose:
        logging_settings = logging_settings.model_copy(update={"level": "DEBUG"})
    setup_logging(logging_settings)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("repo")
@click.option("--no-build", is_flag=True, help="Clone and link without building")
def install(repo: str, no_build: bool) -> None:
    """Install a repository.

    REPO is owner/repo or a GitHub URL. Any other text is used as a search
    query and you pick the repository to install.

    Example:
        ghpm install junegunn/fzf
    """
    manager = _get_manager()

    if RepoSpec.looks_like_spec(repo):
        try:
            spec = RepoSpec.parse(repo)
        except GhpmError as e:
            _fail("Invalid Repository", e)
    else:
        spec = _search_and_select(manager, repo, limit=None)
        if spec is None:
            return

    _install(manager, spec, no_build)


@main.command()
@click.argument("name")
def remove(name: str) -> None:
    """Remove an installed package and its links."""
    manager = _get_manager()
    try:
        removed = manager.remove(name)
    except GhpmError as e:
        _fail("Remove Failed", e)

    for link in removed:
        console.print(f"[dim]Removed link {link}[/]")
    show_success("Removed", f"Removed {name}")


@main.command("list")
def list_command() -> None:
    """List installed packages."""
    manager = _get_manager()
    show_package_list(manager.list_packages())


@main.command()
@click.argument("query")
@click.option("--limit", "-l", type=int, default=None, help="Number of results (1-50)")
def search(query: str, limit: int | None) -> None:
    """Search GitHub and install a selected repository."""
    manager = _get_manager()
    spec = _search_and_select(manager, query, limit=limit)
    if spec is not None:
        _install(manager, spec, no_build=False)


@main.command()
@click.argument("name")
@click.option("--no-build", is_flag=True, help="Pull without rebuilding")
def update(name: str, no_build: bool) -> None:
    """Pull the latest changes and rebuild a package."""
    manager = _get_manager()
    try:
        manifest = manager.update(name, no_build=no_build)
    except GhpmError as e:
        _fail("Update Failed", e)

    status = "built" if manifest.built else (manifest.build_reason or "not built")
    show_success("Updated", f"Updated {name} ({status})")


@main.command()
@click.argument("name")
def info(name: str) -> None:
    """Show details about an installed package."""
    manager = _get_manager()
    try:
        manifest = manager.info(name)
    except GhpmError as e:
        _fail("Package Not Found", e)

    show_package_info(manifest, manager.location(name))


if __name__ == "__main__":
    main()
