# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Pytest Configuration
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
Puts src/ on sys.path so the suite runs against the working tree without
an editable install, and provides fixtures shared across test modules.
"""

import logging
import sys
from pathlib import Path

import pytest

_SRC = str(Path(__file__).resolve().parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)


@pytest.fixture
def ccs_logger():
    """The ``petri_ccs`` logger, with handlers and level restored afterwards."""
    logger = logging.getLogger("petri_ccs")
    old_handlers = list(logger.handlers)
    old_level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in old_handlers:
            handler.close()
    logger.handlers[:] = old_handlers
    logger.setLevel(old_level)
