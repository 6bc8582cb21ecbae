# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — CCS Package Init
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""CCS (Calculus of Communicating Systems) terms and renderers."""

from .terms import (
    Action,
    Choice,
    CoAction,
    Constant,
    Exponent,
    Inaction,
    InputAction,
    InternalAction,
    Parallel,
    Prefix,
    Process,
    Restriction,
    TermKind,
    to_html,
    to_text,
)
from .program import CCSProgram

__all__ = [
    "Action",
    "Process",
    "TermKind",
    "InputAction",
    "CoAction",
    "InternalAction",
    "Inaction",
    "Prefix",
    "Choice",
    "Parallel",
    "Exponent",
    "Restriction",
    "Constant",
    "to_text",
    "to_html",
    "CCSProgram",
]
