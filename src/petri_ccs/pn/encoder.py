# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Net-to-CCS Encoder
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
Encoding of 2-τ-synchronisation nets as CCS programs.

Mapping:
    place p                     X_p  := choice over its outgoing terms
    transition, 1 input         α.(outputs)            inlined into X_p
    transition, 2 inputs (τ)    s_t!.0  in the first feeding place,
                                s_t?.(outputs) in the second, s_t restricted
    transition, 0 inputs        X_t  := α.(X_t | outputs)   generator
    marking                     (νs_..)(X_p^tokens | ... | X_t | ...)

``translate`` runs the full pipeline: classify, synchronise group-choice
nets, encode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set

import numpy as np

from ..ccs.program import CCSProgram
from ..ccs.terms import (
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
)
from ..core.config_schema import TranslatorConfig
from ..errors import StructuralMismatchError
from ..io.logging_config import net_context
from .classification import NetClassification, classify, is_two_tau_synchronisation_net
from .structure import TAU, PetriNet
from .synchronisation import to_two_tau_synchronisation_net

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────


def _label_to_action(label: str) -> Action:
    if label == TAU:
        return InternalAction()
    return InputAction(label)


def _compose(terms: Sequence[Process], combine: Callable[[tuple], Process]) -> Process:
    """0 terms -> Inaction, 1 term -> itself, otherwise ``combine``."""
    if not terms:
        return Inaction()
    if len(terms) == 1:
        return terms[0]
    return combine(tuple(terms))


# ── Encoder ──────────────────────────────────────────────────────────────────


def encode_net(net: PetriNet) -> CCSProgram:
    """Encode a 2-τ-synchronisation net as a CCS program.

    Raises
    ------
    StructuralMismatchError
        If ``net`` is not a 2-τ-synchronisation net.
    """
    if not is_two_tau_synchronisation_net(net):
        raise StructuralMismatchError("Petri net is not a 2-τ-synchronisation net.")

    definitions: Dict[str, Process] = {}
    place_constants = [Constant(f"X_{p.name}") for p in net.places]
    replacements: Dict[int, Prefix] = {}
    sync_names: List[str] = []
    pending_sync: Set[int] = set()
    generators: List[Process] = []

    for transition in net.transitions:
        outgoing: List[Process] = [
            place_constants[e.place]
            if e.weight == 1
            else Exponent(place_constants[e.place], e.weight)
            for e in net.output_edges(transition)
        ]
        n_inputs = len(transition.inputs)
        if n_inputs == 0:
            name = f"X_{transition.name}"
            outgoing.insert(0, Constant(name))
            definitions[name] = Prefix(
                _label_to_action(transition.label), _compose(outgoing, Parallel)
            )
            generators.append(Constant(name))
        elif n_inputs == 1:
            replacements[transition.id] = Prefix(
                _label_to_action(transition.label), _compose(outgoing, Parallel)
            )
        else:
            name = f"s_{transition.name}"
            replacements[transition.id] = Prefix(
                InputAction(name), _compose(outgoing, Parallel)
            )
            sync_names.append(name)
            pending_sync.add(transition.id)

    for place in net.places:
        choices: List[Process] = []
        for edge in net.output_edges(place):
            term = replacements[edge.transition]
            if edge.transition in pending_sync:
                # First of the two feeding places emits the co-action.
                pending_sync.discard(edge.transition)
                term = Prefix(CoAction(term.action.name), Inaction())
            choices.append(term)
        definitions[f"X_{place.name}"] = _compose(choices, Choice)

    marked: List[Process] = [
        place_constants[p.id] if p.tokens == 1 else Exponent(place_constants[p.id], p.tokens)
        for p in net.places
        if p.tokens > 0
    ]
    process = _compose(marked + generators, Parallel)
    for name in sorted(sync_names, reverse=True):
        process = Restriction(InputAction(name), process)

    logger.debug(
        "Encoded net P=%d T=%d: %d definitions, %d synchronisation name(s), %d generator(s)",
        net.n_places,
        net.n_transitions,
        len(definitions),
        len(sync_names),
        len(generators),
        extra={"net_context": net_context(net, sync_names=sorted(sync_names))},
    )
    return CCSProgram(definitions, process)


# ── Pipeline ─────────────────────────────────────────────────────────────────


@dataclass
class Translation:
    """Outcome of :func:`translate`.

    ``net`` is the net that was encoded (the synchronised copy for
    group-choice inputs); ``program`` is None when the input is not
    encodable.
    """

    classification: NetClassification
    net: Optional[PetriNet]
    program: Optional[CCSProgram]

    @property
    def encodable(self) -> bool:
        return self.program is not None


def translate(
    net: PetriNet,
    rng: Optional[np.random.Generator] = None,
    synchronise_group_choice: bool = True,
) -> Translation:
    """Classify ``net`` and encode it when possible.

    Group-choice nets are first rewritten by
    :func:`to_two_tau_synchronisation_net`; other nets are encoded directly
    when they are 2-τ-synchronisation nets.
    """
    classification = classify(net)
    if synchronise_group_choice and classification.group_choice:
        encoded_net = to_two_tau_synchronisation_net(net, rng)
    elif classification.two_tau_synchronisation:
        encoded_net = net
    else:
        logger.info("Petri net cannot be encoded: %s", classification)
        return Translation(classification=classification, net=None, program=None)
    return Translation(
        classification=classification,
        net=encoded_net,
        program=encode_net(encoded_net),
    )


class CCSEncoder:
    """Configured front end to :func:`translate`.

    Parameters
    ----------
    config : TranslatorConfig, optional
        Seed, output format and group-choice handling.  Defaults apply
        when omitted.
    """

    def __init__(self, config: Optional[TranslatorConfig] = None) -> None:
        self.config = config if config is not None else TranslatorConfig()
        self.rng = np.random.default_rng(self.config.seed)

    def translate(self, net: PetriNet) -> Translation:
        return translate(
            net,
            rng=self.rng,
            synchronise_group_choice=self.config.synchronise_group_choice,
        )

    def render(self, program: CCSProgram) -> str:
        if self.config.output_format == "html":
            return program.to_html()
        return program.to_text()
