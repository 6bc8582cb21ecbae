# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Structured Logging Configuration
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ──────────────────────────────────────────────────────────────────────
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, TextIO

if TYPE_CHECKING:
    from ..pn.structure import PetriNet

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def net_context(net: "PetriNet", **fields: Any) -> Dict[str, Any]:
    """``extra`` payload describing ``net``; pass as ``extra={"net_context": ...}``."""
    context: Dict[str, Any] = {
        "places": net.n_places,
        "transitions": net.n_transitions,
        "edges": net.n_edges,
    }
    context.update(fields)
    return context


class CCSJSONFormatter(logging.Formatter):
    """
    One JSON object per record.  Net sizes and other structured fields
    travel in the optional ``net_context`` attribute.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "filename": record.filename,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        context = getattr(record, "net_context", None)
        if context is not None:
            log_data["net_context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Labels contain τ; keep it readable.
        return json.dumps(log_data, ensure_ascii=False, default=str)


def _formatter(json_output: bool, fmt: str) -> logging.Formatter:
    return CCSJSONFormatter() if json_output else logging.Formatter(fmt)


def setup_logging(
    level: int = logging.INFO,
    json_output: bool = True,
    log_file: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Configure the ``petri_ccs`` logger tree.

    Replaces any handlers installed by a previous call.  Console output
    goes to ``stream`` (stdout when omitted); ``log_file`` adds a UTF-8
    file handler using the same JSON/plain choice.
    """
    logger = logging.getLogger("petri_ccs")
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console.setFormatter(_formatter(json_output, CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_formatter(json_output, FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.debug(
        "Structured logging initialized",
        extra={"net_context": {"json_enabled": json_output, "log_file": log_file}},
    )
    return logger
