"""Main CLI interface using Typer."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..core import NamespaceCollection
from ..k8s import KubectlClient
from ..model.config import DEFAULT_MAX_WORKERS, RunConfig
from ..model.report import CollectionSummary, KindResult
from ..utils.logger import configure_logging, get_logger

# Create CLI app
app = typer.Typer(
    name="k8s-collector",
    help="Collect a diagnostic snapshot of a Kubernetes namespace",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]k8s-collector[/bold] version {__version__}")
        raise typer.Exit()


def _status(result: KindResult) -> str:
    if not result.found:
        return "[yellow]not found in cluster[/yellow]"
    if result.failed:
        return f"[red]{result.failed} failed[/red]"
    return "[green]ok[/green]"


def _print_summary_table(summary: CollectionSummary) -> None:
    """Print the collected counts in a formatted table."""
    table = Table(
        title=f"Namespace {summary.namespace}", show_header=True, header_style="bold magenta"
    )
    table.add_column("Resource", style="cyan")
    table.add_column("Count", style="white", justify="right")
    table.add_column("Status", style="white")

    for result in [summary.pods] + summary.builtin + summary.custom:
        table.add_row(result.kind, str(result.count), _status(result))
    table.add_row("Events", str(summary.events), "")
    table.add_row("Container logs with errors", str(summary.error_log_pairs), "")

    console.print(table)


@app.command()
def collect(
    namespace: str = typer.Option(
        ..., "--namespace", "-n", help="Kubernetes namespace to collect"
    ),
    custom_resources: Optional[str] = typer.Option(
        None,
        "--custom-resources",
        "-c",
        help="Comma-separated custom resource kinds to collect (e.g. 'certificates,issuers')",
    ),
    zip_output: bool = typer.Option(
        False, "--zip", "-z", help="Bundle the output directory into a ZIP archive"
    ),
    context: Optional[str] = typer.Option(
        None, "--context", envvar="K8S_COLLECTOR_CONTEXT", help="Kubernetes context to use"
    ),
    max_workers: int = typer.Option(
        DEFAULT_MAX_WORKERS,
        "--max-workers",
        "-w",
        min=1,
        envvar="K8S_COLLECTOR_MAX_WORKERS",
        help="Maximum number of concurrent kubectl fetches",
    ),
    output_base: Path = typer.Option(
        Path("."), "--output-base", "-o", help="Directory in which the output is created"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information and exit",
    ),
):
    """Collect listings, descriptions, logs and events of a namespace."""
    configure_logging(verbose)

    try:
        config = RunConfig(
            namespace=namespace,
            custom_resources=custom_resources,
            zip_output=zip_output,
            context=context,
            max_workers=max_workers,
            base_dir=output_base,
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e.errors()[0]["msg"]), param_hint="'--namespace'")

    try:
        output_base.mkdir(parents=True, exist_ok=True)
        client = KubectlClient(context=config.context, namespace=config.namespace)
        summary = NamespaceCollection(config, client).run()
    except Exception as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        raise typer.Exit(1)

    _print_summary_table(summary)
    console.print(f"Output is available in: [cyan]{summary.output_dir}[/cyan]")
    if summary.archive:
        console.print(f"ZIP archive: [cyan]{summary.archive}[/cyan]")
        console.print(f"Summary copy: [cyan]{summary.summary_copy}[/cyan]")
    elif config.zip_output:
        console.print("[yellow]ZIP archive was not created; see the log for details[/yellow]")
    console.print(f"Summary information: [cyan]{summary.output_dir / 'summary.txt'}[/cyan]")
    console.print(f"Error log summary: [cyan]{summary.output_dir / 'error_summary.log'}[/cyan]")


def main() -> None:
    """Console entry point; every usage error exits with status 1."""
    try:
        app()
    except SystemExit as e:
        # Usage errors exit with 2
        if e.code == 2:
            raise SystemExit(1)
        raise
    raise SystemExit(0)


if __name__ == "__main__":
    main()
