# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge. Terminal: ConsoleRenderer, pipelines: JSONRenderer.

Leaf module, no authentilink imports. Safe to call early in startup.
Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

TEXT_PREVIEW_CHARS = 50
_TEXT_KEYS = ("text", "text_preview")


def truncate_text(_logger: object, _method: str, event_dict: dict) -> dict:
    """Shorten any classified text bound to the event to a fixed preview."""
    for key in _TEXT_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > TEXT_PREVIEW_CHARS:
            event_dict[key] = value[:TEXT_PREVIEW_CHARS] + "..."
    return event_dict


def configure(*, json_output: bool = False, level: str = "INFO", stream: TextIO | None = None) -> None:
    """Route stdlib and structlog loggers through one stderr handler.

    Args:
        json_output: True for JSON lines, False for human-readable console output.
        level: Root logger level name; unknown names fall back to INFO.
        stream: Output stream (default ``sys.stderr``).
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        truncate_text,
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
