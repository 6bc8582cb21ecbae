# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Petri Net Package Init
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
Petri Net to CCS Translation
============================

``structure.PetriNet``
    Arena-based P/T net with dense ids and swap-remove compaction.

``classification``
    CCS, 2-τ-synchronisation, free-choice, group-choice and workflow
    predicates.

``synchronisation.to_two_tau_synchronisation_net``
    Rewrites group-choice nets into 2-τ-synchronisation nets.

``encoder.encode_net`` / ``encoder.translate``
    Encodes 2-τ-synchronisation nets as CCS programs.
"""

from .structure import AUTO_NAME_ID, TAU, ArcKind, Edge, NodeKind, PetriNet, Place, Transition
from .classification import (
    NetClassification,
    classify,
    is_ccs_net,
    is_free_choice_net,
    is_group_choice_net,
    is_two_tau_synchronisation_net,
    is_workflow_net,
)
from .synchronisation import copy_net, merge_order, to_two_tau_synchronisation_net
from .encoder import CCSEncoder, Translation, encode_net, translate

__all__ = [
    # Structure
    "AUTO_NAME_ID",
    "TAU",
    "ArcKind",
    "NodeKind",
    "Edge",
    "Place",
    "Transition",
    "PetriNet",
    # Classification
    "NetClassification",
    "classify",
    "is_ccs_net",
    "is_two_tau_synchronisation_net",
    "is_free_choice_net",
    "is_group_choice_net",
    "is_workflow_net",
    # Synchronisation
    "copy_net",
    "merge_order",
    "to_two_tau_synchronisation_net",
    # Encoding
    "CCSEncoder",
    "Translation",
    "encode_net",
    "translate",
]
