"""Console logging via structlog.

Configures structlog once per process from the CLI. All modules keep
using `logging.getLogger(__name__)`; the stdlib bridge routes their
records through the same stream.

Level selection:
  verbose=True -> DEBUG, which includes stage progress and per-entry
                  archive progress.
  verbose=False -> WARNING; only warnings and errors are shown.

Output goes to stderr so that stdout only carries the final
"Finished building" line.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_structlog(verbose: bool = False) -> None:
    """Configure structlog and the stdlib bridge.

    Calling multiple times is safe; the last call wins.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors + [structlog.dev.ConsoleRenderer(colors=False)],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Route stdlib records (every bindjar module) through a structlog
    # formatter on the same stream.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=shared_processors,
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
