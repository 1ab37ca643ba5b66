"""
CLI interface for Gas Tracker.

Runs workloads in-process and renders the recorded measurements.
"""

import json
import logging
import sys
from typing import Dict, List, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from gas_tracker.config.loader import AppConfig, default_config, load_config
from gas_tracker.core.tracker import GasTracker, GasTrackerError
from gas_tracker.host.runtime import ProcessHost, StableMemory
from gas_tracker.storage.models import GasInfo, TransactionKind, TransactionRecord

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to YAML configuration file"
)


def _setup_logging(config: AppConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else config.logging.level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def build_tracker(config: AppConfig) -> GasTracker:
    """Create a tracker on a fresh process host described by config."""
    memory = StableMemory(
        initial_pages=config.host.initial_pages,
        max_pages=config.host.max_pages
    )
    return GasTracker(host=ProcessHost(memory), config=config.tracker)


def _load(config_path: Optional[str], verbose: bool) -> AppConfig:
    config = load_config(config_path) if config_path else default_config()
    _setup_logging(config, verbose)
    return config


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Gas Tracker CLI."""
    if ctx.invoked_subcommand is None:
        console.print("Gas Tracker - Use --help to see available commands")


@app.command()
def kinds():
    """List the workload kinds that can be recorded."""
    for kind in TransactionKind:
        console.print(kind.value)


@app.command()
def record(
    kind: str = typer.Argument(..., help="Workload kind: simple, complex or storage"),
    count: int = typer.Option(1, "--count", "-n", help="Number of runs to record"),
    config_path: Optional[str] = CONFIG_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    """Run one workload kind and print each measurement."""
    try:
        if count <= 0:
            raise ValueError("count must be > 0")
        workload_kind = _parse_kind(kind)

        tracker = build_tracker(_load(config_path, verbose))
        for _ in range(count):
            tracker.record_transaction(workload_kind)

        records = tracker.get_all_transactions()
        if as_json:
            _print_json([r.to_dict() for r in records])
        else:
            _display_records(records)
        sys.exit(EXIT_CODE_PASS)
    except (ValueError, FileNotFoundError, yaml.YAMLError, GasTrackerError) as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)


@app.command()
def bench(
    rounds: int = typer.Option(1, "--rounds", "-r", help="Rounds of simple, complex and storage runs"),
    config_path: Optional[str] = CONFIG_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print statistics as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    """
    Record every workload kind for a number of rounds.

    Each round runs simple, complex and storage in that order. The full
    ledger and the per-kind measurements are printed afterwards.
    """
    try:
        if rounds <= 0:
            raise ValueError("rounds must be > 0")

        tracker = build_tracker(_load(config_path, verbose))
        for _ in range(rounds):
            tracker.record_simple_transaction()
            tracker.record_complex_transaction()
            tracker.record_storage_transaction()

        statistics = tracker.get_gas_statistics()
        if as_json:
            _print_json({
                kind: [info.to_dict() for info in infos]
                for kind, infos in statistics.items()
            })
        else:
            _display_records(tracker.get_all_transactions())
            _display_statistics(statistics)
        sys.exit(EXIT_CODE_PASS)
    except (ValueError, FileNotFoundError, yaml.YAMLError, GasTrackerError) as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)


def _parse_kind(kind: str) -> TransactionKind:
    try:
        return TransactionKind(kind)
    except ValueError:
        valid_kinds = [k.value for k in TransactionKind]
        raise ValueError(f"Unknown kind '{kind}', must be one of: {valid_kinds}")


def _format_number(value: int) -> str:
    return f"{value:,}"


def _print_json(data) -> None:
    # Plain stdout so the output stays machine readable
    print(json.dumps(data, indent=2))


def _display_records(records: List[TransactionRecord]) -> None:
    table = Table(title="Recorded Transactions")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Cycles Used", justify="right")
    table.add_column("Memory Used", justify="right")
    table.add_column("Timestamp", justify="right")

    for index, record in enumerate(records, start=1):
        table.add_row(
            str(index),
            record.kind,
            _format_number(record.gas_info.cost_used),
            _format_number(record.gas_info.memory_used),
            str(record.gas_info.timestamp)
        )
    console.print(table)


def _display_statistics(statistics: Dict[str, List[GasInfo]]) -> None:
    table = Table(title="Gas Usage Comparison")
    table.add_column("Transaction Type")
    table.add_column("Total Transactions", justify="right")
    table.add_column("Cycles Used", justify="right")
    table.add_column("Memory Used", justify="right")

    for kind, infos in statistics.items():
        table.add_row(
            kind,
            str(len(infos)),
            ", ".join(_format_number(info.cost_used) for info in infos),
            ", ".join(_format_number(info.memory_used) for info in infos)
        )
    console.print(table)


if __name__ == "__main__":
    app()
