# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""'formkit check' — Validate a form schema, and optionally a data record against it."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click
import yaml

from formkit.cli.console import console, print_fault, print_results_table, print_schema_table
from formkit.kernel.exceptions import ConfigurationException
from formkit.validation.registry import ValidationRegistry
from formkit.validation.schema import RuleFactory, apply_schema, load_schema

logger = logging.getLogger(__name__)

EXIT_INVALID = 1
EXIT_CONFIGURATION = 2


def _load_record(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationException(
            f"Cannot read data record {path}: {exc}",
            code="DATA_UNREADABLE",
            context={"path": str(path)},
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationException(
            "Data record must be a mapping of field ids to values",
            code="DATA_NOT_A_MAPPING",
            context={"path": str(path), "type": type(data).__name__},
        )
    return data


@click.command()
@click.argument("schema_path", metavar="SCHEMA", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--data",
    "data_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON or YAML record to validate against the schema.",
)
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON instead of tables.")
@click.pass_context
def check_command(ctx: click.Context, schema_path: Path, data_path: Path | None, as_json: bool) -> None:
    """Load SCHEMA and report its fields, or validate a record against it."""
    registry = ValidationRegistry()
    try:
        schema = load_schema(schema_path)
        apply_schema(registry, schema, RuleFactory())
        record = _load_record(data_path) if data_path is not None else None
    except ConfigurationException as exc:
        if as_json:
            click.echo(json.dumps({"error": str(exc), "code": exc.code, "context": exc.context}, default=str))
        else:
            print_fault("Configuration error", str(exc), exc.code)
        ctx.exit(EXIT_CONFIGURATION)
        return

    if record is None:
        if as_json:
            click.echo(json.dumps({"schema": schema.id, "fields": list(registry.keys)}))
        else:
            print_schema_table(schema)
        return

    for key, value in record.items():
        if registry.is_registered(key):
            registry.set_value(key, value)
        else:
            logger.warning("Ignoring value for unknown field %s", key)

    valid = registry.validate_all()
    errors = registry.validation_errors

    if as_json:
        click.echo(json.dumps({"schema": schema.id, "valid": valid, "errors": errors}))
    else:
        print_results_table(registry.keys, registry.values, errors)
        if valid:
            console.print("\n  [success]Record is valid[/success]\n")
        else:
            console.print(f"\n  [error]{len(errors)} invalid field(s)[/error]\n")

    if not valid:
        ctx.exit(EXIT_INVALID)
