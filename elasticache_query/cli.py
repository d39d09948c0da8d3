"""CLI entry point for the ElastiCache query request builder."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from elasticache_query.aws.catalog import DEFAULT_REGION, ServiceCatalog
from elasticache_query.aws.exceptions import QueryBuildError
from elasticache_query.aws.operations import OPERATIONS, get_operation
from elasticache_query.formatters.base import BaseFormatter
from elasticache_query.formatters.csv_formatter import CSVFormatter
from elasticache_query.formatters.json_formatter import JSONFormatter
from elasticache_query.formatters.markdown_formatter import MarkdownFormatter
from elasticache_query.formatters.query_string_formatter import QueryStringFormatter
from elasticache_query.utils import (
    ensure_output_dir,
    match_wildcard,
    parse_output_format,
    parse_params,
    setup_logger,
)

app = typer.Typer(
    help="ElastiCache query request builder - build AWS Query protocol requests offline"
)
console = Console()

FORMATTERS = {
    "query": QueryStringFormatter,
    "json": JSONFormatter,
    "csv": CSVFormatter,
    "markdown": MarkdownFormatter,
}


def get_formatter(output_format: str) -> BaseFormatter:
    return FORMATTERS[parse_output_format(output_format)]()


@app.command()
def build(
    operation: str = typer.Argument(..., help="Operation name, e.g. create_cache_cluster"),
    param: Optional[List[str]] = typer.Option(
        None,
        "--param",
        "-p",
        help="Parameter as name=value; JSON lists, objects, strings and true/false accepted; repeatable"
    ),
    output_format: str = typer.Option(
        "query",
        "--output-format",
        "-f",
        help="Output format: query, json, csv or markdown (default: query)"
    ),
    output_file: Optional[str] = typer.Option(
        None,
        "--output-file",
        "-o",
        help="Write the formatted request to this file, or into this directory under a generated name"
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Report required members missing according to the bundled service model"
    ),
    region: str = typer.Option(DEFAULT_REGION, "--region", "-r", help="Region for the service model client"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Build the query request for one ElastiCache operation.

    Examples:
        # Reboot three nodes
        elasticache-query build reboot_cache_cluster -p cache_cluster_id=my-cluster \\
            -p 'cache_node_ids_to_reboot=["0001","0002","0003"]'

        # Memcached cluster pinned to one AZ, as JSON
        elasticache-query build create_cache_cluster -p cache_cluster_id=mc -p cache_node_type=cache.t3.medium \\
            -p engine=memcached -p num_cache_nodes=1 -p 'preferred_availability_zones=["us-east-1a"]' -f json
    """
    logger = setup_logger(verbose)

    try:
        try:
            params = parse_params(param or [])
            formatter = get_formatter(output_format)
        except ValueError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)

        op = get_operation(operation.replace("-", "_"))
        logger.debug(f"Building {op.action} with parameters {sorted(params)}")

        missing = [name for name in op.required_parameters if params.get(name) is None]
        if missing:
            console.print(f"[red]Error: missing required parameters: {', '.join(missing)}[/red]")
            raise typer.Exit(1)

        args = [params.pop(name) for name in op.required_parameters]
        try:
            request = op.function(*args, **params)
        except TypeError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)

        if check:
            missing_members = ServiceCatalog(region=region).missing_required_members(request)
            if missing_members:
                console.print(
                    f"[yellow]Warning: {request.params['Action']} requires "
                    f"{', '.join(missing_members)}[/yellow]"
                )

        formatted_output = formatter.format(request)

        if output_file is None:
            typer.echo(formatted_output)
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Key")
        table.add_column("Value")
        for key, value in formatter.sorted_params(request):
            table.add_row(key, formatter.format_value(value))
        console.print(table)

        output_path = Path(output_file)

        # A directory gets a generated file name
        if output_file.endswith("/") or output_path.is_dir():
            timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
            output_path = output_path / f"elasticache-{op.name}-{timestamp}.{formatter.extension}"

        output_path = Path(ensure_output_dir(str(output_path)))
        output_path.write_text(formatted_output, encoding="utf-8")

        console.print(f"\n[bold green]✓[/bold green] Request written to {output_path}")
        logger.info(f"Request written to {output_path}")

    except typer.Exit:
        raise
    except QueryBuildError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        console.print(f"[red]Unexpected error: {escape(str(e))}[/red]")
        logger.exception("Unexpected error")
        raise typer.Exit(1)


@app.command()
def operations(
    name_filter: Optional[str] = typer.Option(
        None,
        "--filter",
        "-c",
        help="Operation name filter, wildcards supported (default: all)"
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Mark whether the bundled service model knows each action"
    ),
    region: str = typer.Option(DEFAULT_REGION, "--region", "-r", help="Region for the service model client"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """List the supported ElastiCache operations."""
    setup_logger(verbose)

    selected = [
        op for name, op in sorted(OPERATIONS.items())
        if not name_filter or match_wildcard(name_filter, name)
    ]
    if not selected:
        console.print("[yellow]No operations match the filter[/yellow]")
        return

    catalog = None
    if check:
        try:
            catalog = ServiceCatalog(region=region)
        except QueryBuildError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Operation")
    table.add_column("Action")
    table.add_column("Required")
    if catalog is not None:
        table.add_column("In Model")

    for op in selected:
        row = [op.name, op.action, ", ".join(op.required_parameters)]
        if catalog is not None:
            row.append("yes" if catalog.has_operation(op.name) else "no")
        table.add_row(*row)

    console.print(table)


if __name__ == "__main__":
    app()
