"""auto-typings CLI - resolve declaration files for a source file's imports."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from auto_typings import progress
from auto_typings.cache.disk import DiskCache
from auto_typings.config import load_options
from auto_typings.depth import RecursionBudget
from auto_typings.editor.file import FileSurface
from auto_typings.exceptions import TypingsError
from auto_typings.host.directory import DirectoryHost
from auto_typings.host.memory import InMemoryHost
from auto_typings.imports.models import PackagePath
from auto_typings.imports.models import RelativeInPackagePath
from auto_typings.imports.parser import parse_dependencies
from auto_typings.options import Options
from auto_typings.paths import dirname
from auto_typings.paths import get_auto_typings_home
from auto_typings.resolver import ImportResolver
from auto_typings.session import AutoTypings
from auto_typings.sources.unpkg import UNPKG_BASE_URL
from auto_typings.sources.unpkg import UnpkgSourceResolver

logger = logging.getLogger(__name__)

console = Console()


def _default_cache_dir() -> Path:
    return get_auto_typings_home() / "cache" / "sources"


def _parse_pins(pins: tuple[str, ...]) -> dict[str, str] | None:
    """Parse PKG=VER pairs. Scoped names keep their leading @."""
    if not pins:
        return None
    versions: dict[str, str] = {}
    for pin in pins:
        name, sep, version = pin.rpartition("=")
        if not sep or not name or not version:
            raise click.BadParameter(f"Expected PKG=VERSION, got '{pin}'", param_hint="--version")
        versions[name] = version
    return versions


def _build_options(
    config_file: Path | None,
    pins: tuple[str, ...],
    only_specified: bool,
    preload: bool,
    file_depth: int | None,
    package_depth: int | None,
    **extra: Any,
) -> Options:
    try:
        return load_options(
            extra_files=[config_file] if config_file else None,
            versions=_parse_pins(pins),
            only_specified_packages=True if only_specified else None,
            preload_packages=True if preload else None,
            file_recursion_depth=file_depth,
            package_recursion_depth=package_depth,
            **extra,
        )
    except TypingsError as e:
        _print_error(str(e))
        sys.exit(1)


def _print_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")


def _print_update(update: progress.ProgressUpdate) -> None:
    if update.type in (progress.LOOKED_UP_PACKAGE, progress.LOOKED_UP_TYPE_FILE):
        style = "green" if update.data.get("success") else "yellow"
        console.print(f"[{style}]{update.message}[/{style}]")


def _resolution_options(func):
    """Options shared by resolve and watch."""
    decorators = [
        click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                     help="Extra settings file applied after global and project settings"),
        click.option("--version", "pins", multiple=True, metavar="PKG=VERSION", help="Pin a package version (repeatable)"),
        click.option("--only-specified", is_flag=True, help="Only resolve packages pinned with --version or in settings"),
        click.option("--preload", is_flag=True, help="Resolve the full surface of pinned packages"),
        click.option("--file-depth", type=int, default=None, help="Same-package relative import depth"),
        click.option("--package-depth", type=int, default=None, help="Package boundary depth"),
        click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
                     help="Source cache directory (default: <home>/cache/sources)"),
        click.option("--registry", default=UNPKG_BASE_URL, show_default=True, help="unpkg-compatible CDN root"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Fetch TypeScript declarations for everything a source file imports."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@cli.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def deps(source_file: Path) -> None:
    """List the imports found in SOURCE_FILE and how each would be resolved."""
    source = source_file.read_text(encoding="utf-8")
    dependencies = parse_dependencies(source, dirname(source_file.resolve().as_posix()))

    if not dependencies:
        console.print("[dim]No imports found[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Kind")
    table.add_column("Package")
    table.add_column("Import path")
    table.add_column("Source path", style="dim")

    for dependency in dependencies:
        if isinstance(dependency, PackagePath):
            table.add_row(dependency.kind, dependency.package_name, dependency.import_path, "")
        elif isinstance(dependency, RelativeInPackagePath):
            table.add_row(dependency.kind, dependency.package_name, dependency.import_path, dependency.source_path)
        else:
            table.add_row(dependency.kind, "", dependency.import_path, dependency.source_path)

    console.print(table)


@cli.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Write declarations below this directory instead of only listing them")
@_resolution_options
def resolve(
    source_file: Path,
    out_dir: Path | None,
    config_file: Path | None,
    pins: tuple[str, ...],
    only_specified: bool,
    preload: bool,
    file_depth: int | None,
    package_depth: int | None,
    cache_dir: Path | None,
    registry: str,
) -> None:
    """Resolve declarations for SOURCE_FILE in a single pass."""
    options = _build_options(config_file, pins, only_specified, preload, file_depth, package_depth)
    options.on_update = _print_update
    host = DirectoryHost(out_dir) if out_dir else InMemoryHost(options.file_root_path)
    cache = DiskCache(cache_dir or _default_cache_dir())

    async def run() -> list[str]:
        async with UnpkgSourceResolver(base_url=registry) as source_resolver:
            resolver = ImportResolver(options=options, source_cache=cache, source_resolver=source_resolver, host=host)
            await resolver.resolve_imports_in_file(
                source_file.read_text(encoding="utf-8"),
                dirname(source_file.resolve().as_posix()),
                RecursionBudget.from_options(options),
            )
            return resolver.context.injected

    try:
        injected = asyncio.run(run())
    except TypingsError as e:
        _print_error(str(e))
        sys.exit(1)

    if not injected:
        console.print("[dim]No new declarations[/dim]")
        return

    console.print()
    console.print(f"[bold cyan]{len(injected)} file(s) resolved[/bold cyan]")
    for path in injected:
        console.print(f"  {path}")
    if out_dir:
        console.print(f"\nWritten to [cyan]{out_dir}[/cyan]")


@cli.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), required=True,
              help="Directory receiving declarations")
@click.option("--interval", type=float, default=0.5, show_default=True, help="Seconds between change checks")
@click.option("--debounce", type=float, default=None, help="Seconds to wait after the last change")
@_resolution_options
def watch(
    source_file: Path,
    out_dir: Path,
    interval: float,
    debounce: float | None,
    config_file: Path | None,
    pins: tuple[str, ...],
    only_specified: bool,
    preload: bool,
    file_depth: int | None,
    package_depth: int | None,
    cache_dir: Path | None,
    registry: str,
) -> None:
    """Keep declarations for SOURCE_FILE up to date while it is edited."""
    options = _build_options(
        config_file, pins, only_specified, preload, file_depth, package_depth, debounce_duration=debounce
    )
    options.on_update = _print_update
    options.on_error = _print_error

    async def run() -> None:
        async with UnpkgSourceResolver(base_url=registry) as source_resolver:
            session = await AutoTypings.create(
                FileSurface(source_file, poll_interval=interval),
                host=DirectoryHost(out_dir),
                options=options,
                source_cache=DiskCache(cache_dir or _default_cache_dir()),
                source_resolver=source_resolver,
            )
            async with session:
                console.print(f"[bold]Watching[/bold] {source_file} [dim](Ctrl+C to stop)[/dim]")
                await asyncio.Event().wait()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped[/dim]")


@cli.group()
def cache() -> None:
    """Manage the source cache."""


@cache.command("clear")
@click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Source cache directory (default: <home>/cache/sources)")
def cache_clear(cache_dir: Path | None) -> None:
    """Remove every cached source file."""
    target = cache_dir or _default_cache_dir()
    DiskCache(target).clear()
    console.print(f"[green]✓[/green] Cleared {target}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
