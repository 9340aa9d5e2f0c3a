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
"""formkit CLI — Schema checking and rule discovery."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from formkit.cli.check import check_command
from formkit.cli.console import console
from formkit.core.config import Config
from formkit.logging.port import LoggingPort
from formkit.logging.structlog_adapter import StructlogAdapter
from formkit.validation.schema import RuleType


@click.group()
@click.version_option(package_name="formkit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML or TOML configuration file (formkit.logging.* is honoured).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log engine debug events to stderr.")
def cli(config_path: Path | None, verbose: bool) -> None:
    """formkit — Form validation engine CLI."""
    if config_path is None and not verbose:
        return
    config = Config.from_file(config_path) if config_path is not None else Config.defaults()
    adapter: LoggingPort = StructlogAdapter()
    adapter.configure(config)
    if verbose:
        adapter.set_level("formkit", "DEBUG")
        logging.getLogger("formkit").debug("Verbose logging enabled")


@click.command()
def rules_command() -> None:
    """List the rule types a schema may declare."""
    console.print("\n[formkit]Rule types[/formkit]\n")
    for rule_type in RuleType:
        console.print(f"  [info]•[/info] {rule_type.value}")
    console.print()


cli.add_command(check_command, name="check")
cli.add_command(rules_command, name="rules")
