"""Main CLI interface using Typer."""

from pathlib import Path
from typing import Callable, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..core import DecommissionCounter, ReleaseCleaner
from ..errors import CleanupFailedError, ConfigurationError
from ..exporters import get_exporter
from ..k8s import K8sClient, ShipperStore
from ..model.action import Action, ActionType
from ..model.config import OutputFormat, RunConfig
from ..model.result import RunResult
from ..utils.logger import get_logger, set_verbosity

app = typer.Typer(
    name="shipper-clean",
    help="Clean and count Shipper releases scheduled on decommissioned clusters",
    add_completion=True,
)
clean_app = typer.Typer()
count_app = typer.Typer()
app.add_typer(clean_app, name="clean")
app.add_typer(count_app, name="count")


@clean_app.callback()
def clean():
    """Clean Shipper objects."""


@count_app.callback()
def count():
    """Count Shipper objects that are scheduled *only* on decommissioned clusters."""


console = Console()
logger = get_logger(__name__)

DEFAULT_KUBECONFIG = Path("~/.kube/config")


def _format_reannotate(action: Action) -> str:
    return f"[yellow]REANNOTATE[/yellow] {escape(action.annotation)}"


def _format_delete(action: Action) -> str:
    return "[red]DELETE[/red]"


ACTION_FORMATTERS: Dict[ActionType, Callable[[Action], str]] = {
    ActionType.REANNOTATE: _format_reannotate,
    ActionType.DELETE: _format_delete,
}


def _print_actions_table(result: RunResult, dry_run: bool) -> None:
    """Print every release that was reannotated or deleted."""
    writes = [d for d in result.decisions if d.action.is_write]
    if not writes:
        console.print("[green]Nothing to clean[/green]")
        return

    title = "Release actions (dry run)" if dry_run else "Release actions"
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Namespace", style="cyan")
    table.add_column("Release", style="green")
    table.add_column("Action", style="white")

    for decision in writes:
        formatter = ACTION_FORMATTERS[decision.action.type]
        table.add_row(
            escape(decision.namespace), escape(decision.name), formatter(decision.action)
        )

    console.print(table)


def _build_config(
    decommissioned_clusters: List[str],
    dryrun: bool,
    kubeconfig: Path,
    context: Optional[str],
    verbose: bool,
    output: Optional[OutputFormat] = None,
) -> RunConfig:
    set_verbosity(verbose)
    try:
        return RunConfig.build(
            decommissioned_clusters,
            dry_run=dryrun,
            output_format=output,
            kubeconfig=kubeconfig,
            context=context,
        )
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _connect(config: RunConfig) -> ShipperStore:
    client = K8sClient(kubeconfig=config.kubeconfig, context=config.context)
    return ShipperStore(client)


def _finish(result: RunResult) -> None:
    """Print every per-item failure and exit non-zero if there were any."""
    try:
        result.raise_for_errors()
    except CleanupFailedError as e:
        console.print(f"[red]{len(e.messages)} error(s) occurred:[/red]")
        for message in e.messages:
            console.print(f"  - {escape(message)}", soft_wrap=True)
        raise typer.Exit(1)


def _report_count(result: RunResult, config: RunConfig, what: str) -> None:
    if config.output_format is None:
        console.print(
            f"Number of *{what}* that are scheduled only on decommissioned clusters: "
            f"{result.count}",
            soft_wrap=True,
        )
    else:
        exporter = get_exporter(config.output_format)
        typer.echo(exporter.render(result.counted).rstrip("\n"))


@clean_app.command("decommissioned-clusters")
def clean_decommissioned_clusters(
    decommissioned_clusters: List[str] = typer.Option(
        ...,
        "--decommissioned-clusters",
        "--decommissionedClusters",
        help="Decommissioned clusters (repeat or comma-separate). Required",
    ),
    dryrun: bool = typer.Option(
        False, "--dryrun", help="Only print the objects that would be modified or deleted"
    ),
    kubeconfig: Path = typer.Option(
        DEFAULT_KUBECONFIG, "--kubeconfig", help="Path to the Kubernetes configuration file"
    ),
    management_cluster_context: Optional[str] = typer.Option(
        None,
        "--management-cluster-context",
        help="Context of the management cluster (default: the current one)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Clean Shipper releases from decommissioned clusters.

    Deletes releases that are scheduled *only* on decommissioned clusters and
    are not contenders, and removes decommissioned clusters from the
    annotations of releases scheduled partially on them.
    """
    config = _build_config(
        decommissioned_clusters, dryrun, kubeconfig, management_cluster_context, verbose
    )
    try:
        cleaner = ReleaseCleaner(_connect(config), config, console=console)
        result = cleaner.run()
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _print_actions_table(result, config.dry_run)
    _finish(result)


@count_app.command("release")
def count_releases(
    decommissioned_clusters: List[str] = typer.Option(
        ...,
        "--decommissioned-clusters",
        "--decommissionedClusters",
        help="Decommissioned clusters (repeat or comma-separate). Required",
    ),
    output: Optional[OutputFormat] = typer.Option(
        None, "--output", "-o", help="Output format. One of: json|yaml. Optional"
    ),
    dryrun: bool = typer.Option(
        False, "--dryrun", help="Accepted for parity with clean; counting never writes"
    ),
    kubeconfig: Path = typer.Option(
        DEFAULT_KUBECONFIG, "--kubeconfig", help="Path to the Kubernetes configuration file"
    ),
    management_cluster_context: Optional[str] = typer.Option(
        None,
        "--management-cluster-context",
        help="Context of the management cluster (default: the current one)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Count Shipper *releases* that are scheduled *only* on decommissioned clusters."""
    config = _build_config(
        decommissioned_clusters, dryrun, kubeconfig, management_cluster_context, verbose, output
    )
    try:
        result = DecommissionCounter(_connect(config), config).count_releases()
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _report_count(result, config, "releases")
    _finish(result)


@count_app.command("contender")
def count_contenders(
    decommissioned_clusters: List[str] = typer.Option(
        ...,
        "--decommissioned-clusters",
        "--decommissionedClusters",
        help="Decommissioned clusters (repeat or comma-separate). Required",
    ),
    output: Optional[OutputFormat] = typer.Option(
        None, "--output", "-o", help="Output format. One of: json|yaml. Optional"
    ),
    dryrun: bool = typer.Option(
        False, "--dryrun", help="Accepted for parity with clean; counting never writes"
    ),
    kubeconfig: Path = typer.Option(
        DEFAULT_KUBECONFIG, "--kubeconfig", help="Path to the Kubernetes configuration file"
    ),
    management_cluster_context: Optional[str] = typer.Option(
        None,
        "--management-cluster-context",
        help="Context of the management cluster (default: the current one)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Count Shipper *contenders* that are scheduled *only* on decommissioned clusters."""
    config = _build_config(
        decommissioned_clusters, dryrun, kubeconfig, management_cluster_context, verbose, output
    )
    try:
        result = DecommissionCounter(_connect(config), config).count_contenders()
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _report_count(result, config, "contenders")
    _finish(result)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]shipper-clean[/bold] version {__version__}")


if __name__ == "__main__":
    app()
