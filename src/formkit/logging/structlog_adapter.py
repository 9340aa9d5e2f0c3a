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
"""structlog-backed LoggingPort used by the CLI and embedding applications."""

from __future__ import annotations

import logging
import sys

import structlog

from formkit.config.properties.logging import LoggingProperties
from formkit.core.config import Config


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


class StructlogAdapter:
    """Routes the engine's stdlib loggers through a structlog processor chain.

    Engine modules never import structlog; they log through
    ``logging.getLogger(__name__)`` and this adapter installs a root handler
    whose formatter runs the same processors as native structlog loggers.
    """

    def __init__(self) -> None:
        self._properties = LoggingProperties()

    @property
    def properties(self) -> LoggingProperties:
        return self._properties

    def configure(self, config: Config) -> None:
        """Apply ``formkit.logging.*``: output format, root level, per-logger levels."""
        self._properties = config.bind(LoggingProperties)
        levels = {name: str(level) for name, level in self._properties.level.items()}
        root_level = levels.pop("root", "INFO")

        self._install(str(self._properties.format).lower(), root_level)
        for name, level in levels.items():
            self.set_level(name, level)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))

    def _install(self, fmt: str, root_level: str) -> None:
        shared = _shared_processors()
        structlog.configure(
            processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(fmt)],
        )
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        root = logging.getLogger()
        root.handlers = [handler]
        root.setLevel(_level(root_level))
