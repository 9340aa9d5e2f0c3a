"""formkit logging — hexagonal logging port and adapters."""

from formkit.logging.port import LoggingPort
from formkit.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
