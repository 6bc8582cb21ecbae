# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Structural Net Classification
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""Structural classes of Place/Transition nets.

All predicates are pure: they read the net through its public accessors
and never mutate it.

Class hierarchy (implications hold for every net):

    CCS net          =>  2-τ-synchronisation net
    free-choice net  =>  group-choice net

A net is encodable into CCS when it is a 2-τ-synchronisation net, or a
group-choice net that the synchroniser can rewrite into one.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Set

from .structure import Node, NodeKind, PetriNet, Place


# ── Predicates ───────────────────────────────────────────────────────────


def is_ccs_net(net: PetriNet) -> bool:
    """Every transition has exactly one input, or exactly two and label τ."""
    return all(
        len(t.inputs) == 1 or (len(t.inputs) == 2 and t.is_silent)
        for t in net.transitions
    )


def is_two_tau_synchronisation_net(net: PetriNet) -> bool:
    """Every transition has fewer than two inputs, or exactly two and label τ.

    Unlike :func:`is_ccs_net` this admits source transitions (no inputs).
    """
    return all(
        len(t.inputs) < 2 or (len(t.inputs) == 2 and t.is_silent)
        for t in net.transitions
    )


def is_free_choice_net(net: PetriNet) -> bool:
    """Every multi-input transition is fed only by places with a single output."""
    return all(
        len(t.inputs) <= 1 or all(len(p.outputs) == 1 for p in net.preset(t))
        for t in net.transitions
    )


def is_workflow_net(net: PetriNet) -> bool:
    """One source place, one sink place, and every node on a path between them.

    Checked with a forward breadth-first search from the source and a
    backward one from the sink; both must reach every place and every
    transition.
    """
    sources = [p for p in net.places if not p.inputs]
    if len(sources) != 1:
        return False
    sinks = [p for p in net.places if not p.outputs]
    if len(sinks) != 1:
        return False
    return _reaches_all(net, sources[0], reverse=False) and _reaches_all(
        net, sinks[0], reverse=True
    )


def is_group_choice_net(net: PetriNet) -> bool:
    """Places that share a transition have identical post-sets.

    Each place's post-set ``S`` is compared against the post-set of every
    place feeding a transition of ``S``; places reached this way are
    confirmed and skipped later.
    """
    confirmed = [False] * net.n_places
    for place in net.places:
        if confirmed[place.id]:
            continue
        post = {t.id for t in net.postset(place)}
        for transition in net.postset(place):
            for other in net.preset(transition):
                confirmed[other.id] = True
                if len(other.outputs) != len(place.outputs):
                    return False
                if any(t.id not in post for t in net.postset(other)):
                    return False
    return True


# ── Aggregate report ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class NetClassification:
    """Membership of a net in every structural class."""

    workflow: bool
    free_choice: bool
    group_choice: bool
    ccs: bool
    two_tau_synchronisation: bool

    @property
    def free_choice_workflow(self) -> bool:
        return self.workflow and self.free_choice

    @property
    def encodable(self) -> bool:
        return self.group_choice or self.two_tau_synchronisation


def classify(net: PetriNet) -> NetClassification:
    """Evaluate all predicates, skipping those implied by a stronger one."""
    free_choice = is_free_choice_net(net)
    ccs = is_ccs_net(net)
    return NetClassification(
        workflow=is_workflow_net(net),
        free_choice=free_choice,
        group_choice=free_choice or is_group_choice_net(net),
        ccs=ccs,
        two_tau_synchronisation=ccs or is_two_tau_synchronisation_net(net),
    )


# ── Helpers ──────────────────────────────────────────────────────────────


def _reaches_all(net: PetriNet, start: Place, reverse: bool) -> bool:
    visited_places: Set[int] = {start.id}
    visited_transitions: Set[int] = set()
    pending: Deque[Node] = deque([start])
    while pending:
        node = pending.popleft()
        if node.kind is NodeKind.PLACE:
            visited = visited_transitions
        else:
            visited = visited_places
        neighbours: List[Node] = net.preset(node) if reverse else net.postset(node)
        for neighbour in neighbours:
            if neighbour.id not in visited:
                visited.add(neighbour.id)
                pending.append(neighbour)
    return (
        len(visited_places) == net.n_places
        and len(visited_transitions) == net.n_transitions
    )
