"""
Zip Publish CLI - Command-line interface.

Publish build output from the terminal or a build script.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from zip_publish import __version__
from zip_publish.core.exceptions import ZipPublishError, format_exception
from zip_publish.pipeline.config import load_config
from zip_publish.pipeline.core import PublishPipeline, PublishStatus
from zip_publish.pipeline.hook import BuildHook

app = typer.Typer(
    name="zip-publish",
    help="Zip Publish - Post-build archive, upload and notify",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def publish(
    config_path: Path = typer.Argument(..., help="Path to YAML configuration"),
    mode: str = typer.Option("production", "--mode", "-m", help="Build mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Package, upload and announce the build output."""
    _configure_logging(verbose)

    try:
        config = load_config(config_path)
    except ZipPublishError as e:
        console.print(f"[red]{format_exception(e)}[/red]")
        raise typer.Exit(1)

    hook = BuildHook(config)
    if not hook.should_publish(mode):
        console.print(f"[yellow]Build mode '{mode}' does not publish; nothing to do[/yellow]")
        return

    console.print(
        Panel.fit(
            f"[bold blue]Zip Publish[/bold blue]\n"
            f"App: {config.app}\n"
            f"Source: {config.source_dir}\n"
            f"Mode: {mode}",
        )
    )

    try:
        result = hook.on_build_complete(mode)
    except ZipPublishError as e:
        console.print(f"[red]Publish failed:[/red] {format_exception(e)}")
        raise typer.Exit(1)

    if result is None or result.status == PublishStatus.SKIPPED:
        reason = result.skip_reason if result else "not triggered"
        console.print(f"[yellow]Publish skipped:[/yellow] {reason}")
        return

    table = Table(title="Publish Summary")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Version", result.version or "")
    table.add_row("Archive", str(result.local_path))
    table.add_row("Remote", result.remote_path or "")
    table.add_row("Size", f"{result.size_bytes:,} bytes")
    table.add_row("Download", result.download_url or "")
    table.add_row(
        "Notification",
        "[green]delivered[/green]" if result.notified else "[yellow]not delivered[/yellow]",
    )
    console.print(table)


@app.command()
def plan(
    config_path: Path = typer.Argument(..., help="Path to YAML configuration"),
):
    """Show retention decisions and the next version without changing anything."""
    try:
        config = load_config(config_path)
    except ZipPublishError as e:
        console.print(f"[red]{format_exception(e)}[/red]")
        raise typer.Exit(1)

    try:
        retention, filename = PublishPipeline(config).plan()
    except ZipPublishError as e:
        console.print(f"[red]Plan failed:[/red] {format_exception(e)}")
        raise typer.Exit(1)

    table = Table(title=f"Retention Plan ({config.artifact_dir})")
    table.add_column("Entry", style="cyan")
    table.add_column("Decision")

    for name in retention.siblings:
        table.add_row(name, "[green]keep (sibling)[/green]")
    for name in retention.foreign:
        table.add_row(name, "keep (other app, today)")
    for name in retention.deleted:
        table.add_row(name, "[red]delete[/red]")

    console.print(table)
    console.print(f"\nNext archive: [bold]{filename}[/bold]")


@app.command()
def version():
    """Show version information."""
    console.print(f"Zip Publish v{__version__}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
