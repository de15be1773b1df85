"""
Command-line interface for vcguard.

Provides commands for creating and validating configuration, listing
the repositories behind a set of open files, and gating an exit on
their state.
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from . import __version__
from .backends import list_known_backends
from .config import ConfigError, ConfigLoader, GuardConfig, session_from_paths
from .config.defaults import get_default_config
from .dispatch import CheckDispatcher, RepositoryStatus
from .log import setup_logging
from .resolver import RepositoryResolver
from .session import EditorSession

console = Console()

STATUS_STYLES = {
    RepositoryStatus.CLEAN: "[green]CLEAN[/green]",
    RepositoryStatus.AUTO_COMMITTED: "[cyan]AUTO-COMMITTED[/cyan]",
    RepositoryStatus.UNCLEAN: "[yellow]UNCLEAN[/yellow]",
    RepositoryStatus.ERROR: "[red]ERROR[/red]",
}


def _load_config(config: Optional[str]) -> ConfigLoader:
    """Load configuration, exiting with an error message on failure."""
    try:
        return ConfigLoader(config).load()
    except ConfigError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)


def _load_session(loader: ConfigLoader, session_file: Optional[str], paths: Tuple[str, ...]) -> EditorSession:
    """Build the session from a session file and/or path arguments."""
    session = EditorSession()
    if session_file:
        try:
            session = loader.load_session(session_file)
        except ConfigError as e:
            console.print(f"[red]Session error: {escape(str(e))}[/red]")
            sys.exit(1)
    session.open_files.extend(session_from_paths(list(paths)).open_files)
    return session


# ============================================================
# Main CLI Group
# ============================================================

@click.group()
@click.version_option(version=__version__, prog_name="vcguard")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.pass_context
def cli(ctx, verbose: bool):
    """
    vcguard

    Warn before leaving an editing session while repositories still
    have uncommitted changes, untracked files or unpushed commits.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


# ============================================================
# INIT Command
# ============================================================

@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default="./vcguard.yaml",
    help="Configuration file to write",
)
def init(output: str):
    """Write the default configuration file."""
    output_path = Path(output)

    if output_path.exists():
        if not Confirm.ask(f"[yellow]{escape(output)} already exists. Overwrite?[/yellow]"):
            console.print("[red]Aborted.[/red]")
            return

    loader = ConfigLoader.from_dict(get_default_config())
    loader.save(output_path)

    console.print(Panel.fit(
        f"[green]Configuration written to[/green] [cyan]{escape(output)}[/cyan]\n\n"
        f"[bold]Next steps:[/bold]\n"
        f"1. Adjust the [cyan]rules[/cyan] to choose which checks run where\n"
        f"2. Run: [yellow]vcguard check -c {escape(output)} FILE...[/yellow]",
        title="Initialization Complete",
    ))


# ============================================================
# VALIDATE Command
# ============================================================

@cli.command()
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file")
def validate(config: Optional[str]):
    """Validate a configuration file."""
    loader = _load_config(config)
    source = loader.config_path or "built-in defaults"
    console.print(f"[green]✓ Configuration is valid[/green] [dim]({escape(str(source))})[/dim]\n")
    _show_backends(loader.config)
    _show_rules(loader.config)


def _show_backends(config: GuardConfig) -> None:
    table = Table(title="Backends (priority order)")
    table.add_column("Backend", style="cyan")
    table.add_column("Marker")
    table.add_column("Checks", style="green")
    table.add_column("Auto-commit")
    for backend in config.backends:
        table.add_row(
            backend.name,
            backend.marker or "",
            ", ".join(backend.checks) or "-",
            "yes" if backend.auto_commit else "no",
        )
    console.print(table)


def _show_rules(config: GuardConfig) -> None:
    table = Table(title="Rules (first match wins)")
    table.add_column("#", style="dim")
    table.add_column("Pattern", style="cyan")
    table.add_column("Checks", style="green")
    for i, rule in enumerate(config.rules, 1):
        table.add_row(str(i), escape(rule.pattern), ", ".join(rule.checks) or "-")
    console.print(table)


# ============================================================
# RESOLVE Command
# ============================================================

@cli.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file")
@click.option("--session", "-s", "session_file", type=click.Path(exists=True, dir_okay=False), help="Session file")
@click.option("--status", is_flag=True, help="Also run the checks (without prompting)")
def resolve(paths: Tuple[str, ...], config: Optional[str], session_file: Optional[str], status: bool):
    """Show the repositories behind a set of open files."""
    loader = _load_config(config)
    session = _load_session(loader, session_file, paths)

    descriptors = RepositoryResolver.from_config(loader.config).resolve(session.open_files)
    if not descriptors:
        console.print("[yellow]No repositories found.[/yellow]")
        return

    table = Table(title="Repositories")
    table.add_column("Root", style="cyan")
    table.add_column("Backend")
    table.add_column("Checks", style="green")
    table.add_column("From", style="dim")
    if status:
        table.add_column("Status", no_wrap=True)
        table.add_column("Details")
        reports = CheckDispatcher.from_config(loader.config).inspect(descriptors)
        for report in reports:
            d = report.descriptor
            details = ", ".join(report.failed_checks)
            if report.error is not None:
                details = report.error.description
            table.add_row(
                escape(str(d.root)), d.backend, ", ".join(d.checks) or "-", escape(d.source),
                STATUS_STYLES[report.status], escape(details),
            )
    else:
        for d in descriptors:
            table.add_row(escape(str(d.root)), d.backend, ", ".join(d.checks) or "-", escape(d.source))

    console.print(table)


# ============================================================
# CHECK Command
# ============================================================

@cli.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file")
@click.option("--session", "-s", "session_file", type=click.Path(exists=True, dir_okay=False), help="Session file")
@click.option("--yes", "-y", is_flag=True, help="Answer yes to every prompt")
@click.option("--dry-run", "-n", is_flag=True, help="Report repository states without prompting")
def check(paths: Tuple[str, ...], config: Optional[str], session_file: Optional[str], yes: bool, dry_run: bool):
    """
    Check repositories before exiting.

    Exits with status 0 when leaving is fine (or confirmed) and 1 when
    the exit was declined.
    """
    loader = _load_config(config)
    session = _load_session(loader, session_file, paths)
    descriptors = RepositoryResolver.from_config(loader.config).resolve(session.open_files)

    def answer_yes(message: str) -> bool:
        console.print(f"[yellow]{escape(message)}[/yellow] [dim](yes)[/dim]")
        return True

    dispatcher = CheckDispatcher.from_config(loader.config, confirm=answer_yes if yes else None)

    if dry_run:
        reports = dispatcher.inspect(descriptors)
        for report in reports:
            console.print(f"{STATUS_STYLES[report.status]} {escape(str(report.descriptor.root))}")
            if report.error is not None:
                console.print(f"  [red]• {escape(report.error.description)}[/red]")
            for name in report.failed_checks:
                console.print(f"  [yellow]• {escape(dispatcher.human_names.get(name, name))}[/yellow]")
        sys.exit(1 if any(r.needs_confirmation for r in reports) else 0)

    if dispatcher.should_exit(descriptors):
        sys.exit(0)
    console.print("[red]Exit cancelled.[/red]")
    sys.exit(1)


# ============================================================
# LIST Command
# ============================================================

@cli.command("list")
@click.argument("resource", type=click.Choice(["checks", "backends"]))
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file")
def list_resources(resource: str, config: Optional[str]):
    """List known checks or configured backends."""
    loader = _load_config(config)

    if resource == "checks":
        table = Table(title="Checks")
        table.add_column("Name", style="cyan")
        table.add_column("Prompt wording")
        table.add_column("Backends", style="green")
        for name, human_name in loader.config.check_definitions().items():
            backends = [b.name for b in loader.config.backends if name in b.checks]
            table.add_row(name, human_name, ", ".join(backends) or "-")
        console.print(table)

    elif resource == "backends":
        _show_backends(loader.config)
        console.print(f"\n[dim]Markers known for: {', '.join(list_known_backends())}[/dim]")


# ============================================================
# Entry Point
# ============================================================

def main():
    cli()


if __name__ == "__main__":
    main()
