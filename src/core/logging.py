"""Logging configuration for the CLI.

Logs always go to stderr so that `--output json` on stdout stays
machine-readable. Humans get Rich-formatted records; pipelines can ask
for one JSON object per line with `--log-json`.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter as _JsonFormatter
from rich.console import Console
from rich.logging import RichHandler


class _CliJsonFormatter(_JsonFormatter):
    """Adds the program name to every JSON record."""

    def add_fields(
        self,
        log_record: dict[str, object],
        record: logging.LogRecord,
        message_dict: dict[str, object],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("service", "osc-lite")


def configure_logging(*, verbose: bool = False, json_output: bool = False) -> None:
    """Set up logging for a single CLI invocation.

    Levels:
        DEBUG   -- every HTTP request/response, pagination steps (--verbose)
        INFO    -- command arguments, endpoint discovery
        WARNING -- unexpected-but-handled conditions (echoed pagination marker)
    """

    log_level = logging.DEBUG if verbose else logging.WARNING

    handler: logging.Handler
    if json_output:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            _CliJsonFormatter(
                fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%SZ",
            )
        )
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=verbose,
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    # httpx/httpcore repiten cada request a INFO/DEBUG; ya lo registra el Core.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
