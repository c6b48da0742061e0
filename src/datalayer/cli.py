"""
datalayer CLI - Inspect contracts and exercise wired backends.

Commands:
    datalayer contracts   List capability contracts and the backends providing them
    datalayer list        Wire a backend and print its records
    datalayer remove      Remove a record and print the remaining ones

State is held in memory, so every invocation wires a fresh backend seeded
with ``--seed`` values (or DATALAYER_SEED_RECORDS).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import click
import yaml

from datalayer.config import configure_logging, get_config
from datalayer.errors import DataLayerError
from datalayer.storage.base import available_backends
from datalayer.storage.contracts import CONTRACTS, describe_contract, satisfies
from datalayer.wiring import Application, build_application

BACKEND_CHOICES = ["memory", "slot", "readonly"]


class DataLayerCLIError(click.ClickException):
    """Reports a datalayer failure with its kind."""

    def __init__(self, error: DataLayerError, context: str = ""):
        self.error = error
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []
        if self.context:
            parts.append(self.context)
        parts.append(f"{type(self.error).__name__}: {self.error}")
        return "\n".join(parts)


def _wire(backend: Optional[str], seed: tuple, audit: bool) -> Application:
    overrides: Dict[str, Any] = {"audit_enabled": audit}
    if backend:
        overrides["storage_type"] = backend
    if seed:
        overrides["seed_records"] = list(seed)
    config = get_config(**overrides)
    configure_logging(config)
    try:
        return build_application(config)
    except DataLayerError as e:
        raise DataLayerCLIError(e, context=f"Cannot wire backend '{config.storage_type}'") from e


def _echo_records(app: Application) -> None:
    entries = app.records.entries()
    if not entries:
        click.echo("No records.")
        return
    for record in entries:
        click.echo(f"  [{record.id}] {record.value}")


backend_option = click.option(
    "--backend", "-b", type=click.Choice(BACKEND_CHOICES), help="Storage backend (default from config)"
)
seed_option = click.option("--seed", "-s", multiple=True, help="Seed value (can specify multiple)")
audit_option = click.option("--audit/--no-audit", default=False, help="Emit JSON audit events")


@click.group()
@click.version_option(package_name="datalayer")
def main():
    """datalayer - pluggable record storage behind capability contracts."""
    pass


@main.command()
@click.option("--format", "output_format", type=click.Choice(["table", "json", "yaml"]), default="table")
def contracts(output_format: str):
    """List capability contracts and which backends provide them."""
    backends = available_backends()
    data: List[Dict[str, Any]] = []
    for contract in CONTRACTS:
        descriptor = describe_contract(contract)
        entry = descriptor.to_dict()
        entry["backends"] = [
            storage_type.value
            for storage_type, backend_class in backends.items()
            if satisfies(backend_class(), contract)
        ]
        data.append(entry)

    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
    elif output_format == "yaml":
        click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        for entry in data:
            click.echo(f"{entry['name']}  (backends: {', '.join(entry['backends'])})")
            for op in entry["operations"]:
                failures = f"  raises {', '.join(op['failures'])}" if op["failures"] else ""
                click.echo(f"  {op['name']}({', '.join(op['parameters'])}) -> {op['returns']}{failures}")


@main.command("list")
@backend_option
@seed_option
@audit_option
def list_records(backend: Optional[str], seed: tuple, audit: bool):
    """Wire a backend and print its records."""
    app = _wire(backend, seed, audit)
    _echo_records(app)


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("record_id", type=click.INT)
@backend_option
@seed_option
@audit_option
def remove(record_id: int, backend: Optional[str], seed: tuple, audit: bool):
    """Remove RECORD_ID and print the remaining records."""
    app = _wire(backend, seed, audit)
    try:
        value = app.records.delete(record_id)
    except DataLayerError as e:
        raise DataLayerCLIError(e, context=f"Cannot remove record {record_id}") from e
    click.echo(f"Removed [{record_id}] {value}")
    _echo_records(app)


if __name__ == "__main__":
    main()
