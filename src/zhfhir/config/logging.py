"""Log routing for the zhfhir CLI.

Library modules log through stdlib ``logging`` only. The CLI installs one
handler on the root logger whose formatter runs the records through
structlog, so each line carries the command bound by
:mod:`zhfhir.commands._base` and renders either for a terminal or, with
``--log-json``, as one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

PACKAGE_LOGGER = "zhfhir"
HANDLER_NAME = "zhfhir-cli"


def _renderers(*, log_json: bool, stream: TextIO) -> list[structlog.types.Processor]:
    if log_json:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    isatty = getattr(stream, "isatty", None)
    return [structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install the zhfhir handler on the root logger and return it.

    Args:
        verbose: Let DEBUG records from the ``zhfhir`` tree through.
            Other libraries stay at WARNING either way.
        log_json: Render JSON lines instead of console text.
        stream: Destination, ``sys.stderr`` at call time by default.

    A handler installed by an earlier call is replaced, never stacked.
    """
    stream = stream if stream is not None else sys.stderr

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderers(log_json=log_json, stream=stream),
        ],
    )

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler
