# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — 2-τ-Synchronisation Rewriting
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""Rewrite a group-choice net into a 2-τ-synchronisation net.

A transition with more inputs than CCS can synchronise (more than two for
τ, more than one otherwise) belongs to a choice group: a set of places
sharing the same post-set.  The group's fan of edges is replaced by a
binary tree of fresh τ transitions, each merging two places into a fresh
place, until only ``done`` places remain (2 when every transition of the
group is τ, else 1).  The remaining places are then wired to every
transition of the group.

The merge order is drawn from a ``numpy.random.Generator``; pass a seeded
generator for a reproducible result.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..errors import StructuralMismatchError
from ..io.logging_config import net_context
from .classification import is_group_choice_net, is_two_tau_synchronisation_net
from .structure import AUTO_NAME_ID, TAU, PetriNet, Place, Transition

logger = logging.getLogger(__name__)


def copy_net(net: PetriNet) -> PetriNet:
    """Independent copy with identical node ids, names, tokens, labels and weights."""
    copy = PetriNet()
    for place in net.places:
        copy.add_place(place.name_id, place.tokens)
    for transition in net.transitions:
        copy.add_transition(transition.name_id, transition.label)
    for place in net.places:
        for edge in net.output_edges(place):
            copy.add_edge(copy.place(edge.place), copy.transition(edge.transition), edge.weight)
    for transition in net.transitions:
        for edge in net.output_edges(transition):
            copy.add_edge(copy.transition(edge.transition), copy.place(edge.place), edge.weight)
    return copy


def merge_order(
    n_places: int, done: int, rng: np.random.Generator
) -> List[Tuple[int, int]]:
    """Random pairing sequence reducing ``n_places`` working slots to ``done``.

    For each pool bound ``i`` from ``n_places - 1`` down to ``done`` two
    indices are drawn below ``i``; the second draw skips over the first so
    the pair is always distinct and returned in ascending order.
    """
    order: List[Tuple[int, int]] = []
    for i in range(n_places - 1, done - 1, -1):
        first = int(i * rng.random())
        second = int((i - 1) * rng.random())
        if first <= second:
            second += 1
        order.append((min(first, second), max(first, second)))
    return order


def to_two_tau_synchronisation_net(
    net: PetriNet, rng: Optional[np.random.Generator] = None
) -> PetriNet:
    """Return a new 2-τ-synchronisation net equivalent to ``net``.

    Parameters
    ----------
    net : PetriNet
        A 2-τ-synchronisation net or a group-choice net.  Never mutated.
    rng : numpy.random.Generator, optional
        Source of the merge order.  A fresh unseeded generator is used
        when omitted.

    Raises
    ------
    StructuralMismatchError
        If ``net`` is in neither class.
    """
    already_synchronised = is_two_tau_synchronisation_net(net)
    if not already_synchronised and not is_group_choice_net(net):
        raise StructuralMismatchError(
            "Petri net is neither a 2-τ-synchronisation net nor a group-choice net."
        )

    result = copy_net(net)
    if already_synchronised:
        return result

    if rng is None:
        rng = np.random.default_rng()

    rewritten = 0
    for transition in result.transitions:
        limit = 2 if transition.is_silent else 1
        if len(transition.inputs) <= limit:
            continue
        places = result.preset(transition)
        group = result.postset(places[0])
        _synchronise_group(result, places, group, rng)
        rewritten += 1

    logger.info(
        "Synchronised %d choice group(s): P=%d->%d, T=%d->%d",
        rewritten,
        net.n_places,
        result.n_places,
        net.n_transitions,
        result.n_transitions,
        extra={"net_context": net_context(result, groups=rewritten)},
    )
    return result


def _synchronise_group(
    net: PetriNet,
    places: List[Place],
    transitions: List[Transition],
    rng: np.random.Generator,
) -> None:
    done = 2 if all(t.is_silent for t in transitions) else 1
    order = merge_order(len(places), done, rng)
    logger.debug(
        "Group %s -> %s: merging %d places down to %d",
        [p.name for p in places],
        [t.name for t in transitions],
        len(places),
        done,
    )

    for place in places:
        for edge in net.output_edges(place):
            net.remove_edge(edge)
    for transition in transitions:
        for edge in net.input_edges(transition):
            net.remove_edge(edge)

    working = list(places)
    for a, b in order:
        merge = net.add_transition(AUTO_NAME_ID, TAU)
        merged = net.add_place(AUTO_NAME_ID, 0)
        net.add_edge(working[a], merge)
        net.add_edge(working[b], merge)
        net.add_edge(merge, merged)
        working[a] = merged
        working[b] = working[-1]
        working.pop()

    for place in working:
        for transition in transitions:
            net.add_edge(place, transition)
