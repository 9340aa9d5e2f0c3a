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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from formkit.validation.schema import FormSchema

FORMKIT_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "formkit": "bold magenta",
    "dim": "dim",
})

console = Console(theme=FORMKIT_THEME)


def print_fault(title: str, message: str, code: str | None = None) -> None:
    """Print a configuration fault with its machine-readable code."""
    suffix = f" [dim]({code})[/dim]" if code else ""
    console.print(f"  [error]✗[/error] {title}: {escape(message)}{suffix}")


def print_schema_table(schema: FormSchema) -> None:
    """Print the fields of a schema and the rule types each one declares."""
    table = Table(title=f"[formkit]{schema.title or schema.id}[/formkit]", border_style="dim")
    table.add_column("Field", style="info")
    table.add_column("Required")
    table.add_column("Rules")

    for spec in schema.fields:
        rule_types = ", ".join(rule.type for rule in spec.validation) or "[dim]-[/dim]"
        table.add_row(spec.id, "yes" if spec.required else "no", rule_types)

    console.print(table)


def print_results_table(
    keys: Iterable[str],
    values: Mapping[str, Any],
    errors: Mapping[str, str],
) -> None:
    """Print one row per field with its value and validation status."""
    table = Table(title="[formkit]Validation[/formkit]", border_style="dim")
    table.add_column("Field", style="info")
    table.add_column("Value")
    table.add_column("Status")
    table.add_column("Message")

    for key in keys:
        value = values.get(key)
        shown = "[dim]-[/dim]" if value is None else escape(repr(value))
        if key in errors:
            table.add_row(key, shown, "[error]invalid[/error]", escape(errors[key]))
        else:
            table.add_row(key, shown, "[success]valid[/success]", "")

    console.print(table)
