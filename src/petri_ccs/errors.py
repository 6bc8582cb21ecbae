# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Error Taxonomy
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""Exceptions raised by the graph model, the synchroniser and the encoder.

Every failure is fatal to the single requested operation only; validation
runs before mutation so a net is never left half-modified.
"""

from __future__ import annotations


class PetriNetError(Exception):
    """Base class for all petri_ccs errors."""


class InvalidArgumentError(PetriNetError, ValueError):
    """Malformed id, name, token count, label, weight or CCS term."""


class DuplicateEdgeError(PetriNetError, ValueError):
    """An edge already connects the same ordered pair of nodes."""


class UnrelatedReferenceError(PetriNetError, ValueError):
    """A node or edge does not belong to the net it was passed to."""


class StructuralMismatchError(PetriNetError, RuntimeError):
    """The net is not in the structural class an operation requires."""


class PnmlError(PetriNetError, ValueError):
    """Malformed PNML document."""
