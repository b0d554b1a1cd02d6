"""CLI entrypoint for the release inventory."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from release_inventory import __version__
from release_inventory.config import get_settings
from release_inventory.datasource import ReleaseDatasource, load_batch
from release_inventory.inventory.models import DataQuery, QueryDataResponse, QueryResult


def _positive_float(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return seconds


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List the pods, services and deployments belonging to a release.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--namespace", "-n", default=None, help="Namespace of the release")
    parser.add_argument("--release", "-r", default=None, help="Release (instance label) name")
    parser.add_argument(
        "--batch",
        type=Path,
        default=None,
        help="JSON file with an array of queries, each carrying a 'refId'",
    )
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to kubeconfig (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument("--context", default=None, help="Kubernetes context to use")
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="List the three resource kinds concurrently",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Per-request timeout in seconds",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)
    if args.batch is None and (args.namespace is None or args.release is None):
        parser.error("either --batch or both --namespace and --release are required")
    return args


def _result_table(result: QueryResult) -> Table:
    table = Table(title=result.ref_id, title_justify="left")
    columns = result.frames[0].column_names if result.frames else ["kind", "name", "status"]
    for name in columns:
        table.add_column(name)
    for row in result.rows:
        table.add_row(*row)
    return table


def print_response(response: QueryDataResponse, console: Console | None = None) -> None:
    """Print batch results to console using Rich."""
    c = console or Console()
    for result in response.responses.values():
        if result.ok:
            c.print(_result_table(result))
        else:
            c.print(Panel(result.error or "", title=f"{result.ref_id}: failed", border_style="red"))


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for release-inventory CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    logger = logging.getLogger("release_inventory")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    try:
        settings = get_settings()
        if args.kubeconfig:
            settings.kubeconfig = args.kubeconfig
        if args.context:
            settings.context = args.context
        if args.parallel:
            settings.parallel_fetch = True
        if args.timeout is not None:
            settings.request_timeout_seconds = args.timeout

        if args.batch is not None:
            queries = load_batch(args.batch.read_bytes())
        else:
            queries = [
                DataQuery(ref_id="A", payload={"namespace": args.namespace, "release": args.release})
            ]

        response = ReleaseDatasource.from_settings(settings).query_data(queries)
        if args.json:
            print(json.dumps(response.model_dump(), indent=2))
        else:
            print_response(response, Console())
        return 1 if response.failed else 0
    except Exception as e:
        logging.exception("Release inventory failed")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
