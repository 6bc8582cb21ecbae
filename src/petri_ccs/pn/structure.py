# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Place/Transition Net Structure
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
Place/Transition net structure definition.

The net is an arena of three integer-indexed registries (places,
transitions, edges).  Edges store the ids of their place and transition,
nodes store the ids of their incident edges, so no record holds a direct
reference to another.

Invariants kept by every mutation:
    - ids form a dense ``0..n-1`` range per registry,
    - ``e in node.outputs  <=>  source(e) is node`` (and likewise for inputs),
    - at most one edge per ordered (source, target) pair,
    - Place -> Transition edges have weight 1.

Removal is swap-with-last compaction: the last record of the registry
takes the freed slot and its id (and the endpoint ids of its edges) are
rewritten.

Usage::

    net = PetriNet()
    p1 = net.add_place(tokens=1)
    p2 = net.add_place()
    t1 = net.add_transition(label="a")
    net.add_edge(p1, t1)
    net.add_edge(t1, p2, weight=2)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar, List, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from scipy import sparse  # type: ignore[import-untyped]

from ..errors import DuplicateEdgeError, InvalidArgumentError, UnrelatedReferenceError

TAU = "τ"
AUTO_NAME_ID = 0

_LABEL_RE = re.compile(r"[a-z][a-zA-Z0-9]*|τ")


class NodeKind(Enum):
    PLACE = auto()
    TRANSITION = auto()


class ArcKind(Enum):
    INPUT = auto()    # Place -> Transition
    OUTPUT = auto()   # Transition -> Place


def _require_int(name: str, value: Any, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer >= {minimum}, got {value!r}.")
    out = int(value)
    if out < minimum:
        raise InvalidArgumentError(f"{name} must be an integer >= {minimum}, got {out}.")
    return out


def _require_label(label: Any) -> str:
    if not isinstance(label, str) or _LABEL_RE.fullmatch(label) is None:
        raise InvalidArgumentError(
            f"Transition label must be a camelCase action name or {TAU}, got {label!r}."
        )
    return label


def _swap_remove(ids: List[int], value: int) -> None:
    index = ids.index(value)
    ids[index] = ids[-1]
    ids.pop()


def _relabel(ids: List[int], old: int, new: int) -> None:
    ids[ids.index(old)] = new


@dataclass(eq=False)
class Place:
    """Place with a non-negative integer token count."""

    kind: ClassVar[NodeKind] = NodeKind.PLACE

    id: int
    name_id: int
    tokens: int = 0
    inputs: List[int] = field(default_factory=list)
    outputs: List[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"p{self.name_id}"


@dataclass(eq=False)
class Transition:
    """Transition labelled with a visible action or ``τ``."""

    kind: ClassVar[NodeKind] = NodeKind.TRANSITION

    id: int
    name_id: int
    label: str = TAU
    inputs: List[int] = field(default_factory=list)
    outputs: List[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"t{self.name_id}"

    @property
    def is_silent(self) -> bool:
        return self.label == TAU


@dataclass(eq=False)
class Edge:
    """Weighted arc; ``kind`` tells which of the two endpoints is the source."""

    id: int
    kind: ArcKind
    place: int
    transition: int
    weight: int = 1


Node = Union[Place, Transition]


class PetriNet:
    """Place/Transition net with dense integer identities."""

    def __init__(self) -> None:
        self._places: List[Place] = []
        self._transitions: List[Transition] = []
        self._edges: List[Edge] = []
        # Name tables; slot 0 is reserved for AUTO_NAME_ID.
        self._place_names: List[bool] = [True]
        self._transition_names: List[bool] = [True]

    # ── Builder API ──────────────────────────────────────────────────────────

    def add_place(self, name_id: int = AUTO_NAME_ID, tokens: int = 0) -> Place:
        """Append a place, auto-assigning ``name_id`` when unset or taken."""
        name_id = _require_int("name_id", name_id, 0)
        tokens = _require_int("tokens", tokens, 0)
        name_id = self._claim_name(self._place_names, name_id)
        place = Place(id=len(self._places), name_id=name_id, tokens=tokens)
        self._places.append(place)
        return place

    def add_transition(self, name_id: int = AUTO_NAME_ID, label: str = TAU) -> Transition:
        """Append a transition, auto-assigning ``name_id`` when unset or taken."""
        name_id = _require_int("name_id", name_id, 0)
        label = _require_label(label)
        name_id = self._claim_name(self._transition_names, name_id)
        transition = Transition(id=len(self._transitions), name_id=name_id, label=label)
        self._transitions.append(transition)
        return transition

    def add_edge(self, source: Node, target: Node, weight: int = 1) -> Edge:
        """Connect a Place and a Transition (either direction).

        Valid edges:
            Place      -> Transition  (input edge,  weight must be 1)
            Transition -> Place       (output edge, weight >= 1)

        Raises ``UnrelatedReferenceError`` for foreign nodes,
        ``InvalidArgumentError`` for same-kind endpoints or bad weights and
        ``DuplicateEdgeError`` when the ordered pair is already connected.
        """
        src_kind = self._owned_kind(source, "source")
        tgt_kind = self._owned_kind(target, "target")
        if src_kind is tgt_kind:
            raise InvalidArgumentError(
                f"Edge must connect Place<->Transition, got "
                f"{src_kind.name}->{tgt_kind.name} ('{source.name}'->'{target.name}')."
            )

        if src_kind is NodeKind.PLACE:
            kind = ArcKind.INPUT
            place, transition = source, target
            weight = self._require_input_weight(weight)
            duplicate = any(self._edges[e].transition == transition.id for e in place.outputs)
        else:
            kind = ArcKind.OUTPUT
            transition, place = source, target
            weight = _require_int("weight", weight, 1)
            duplicate = any(self._edges[e].place == place.id for e in transition.outputs)
        if duplicate:
            raise DuplicateEdgeError(
                f"An edge from '{source.name}' to '{target.name}' already exists; "
                "use the edge weight for multiplicity."
            )

        edge = Edge(
            id=len(self._edges),
            kind=kind,
            place=place.id,
            transition=transition.id,
            weight=weight,
        )
        self._edges.append(edge)
        source.outputs.append(edge.id)
        target.inputs.append(edge.id)
        return edge

    def set_tokens(self, place: Place, tokens: int) -> None:
        self._require_place(place)
        place.tokens = _require_int("tokens", tokens, 0)

    def set_label(self, transition: Transition, label: str) -> None:
        self._require_transition(transition)
        transition.label = _require_label(label)

    def set_weight(self, edge: Edge, weight: int) -> None:
        self._require_edge(edge)
        if edge.kind is ArcKind.INPUT:
            edge.weight = self._require_input_weight(weight)
        else:
            edge.weight = _require_int("weight", weight, 1)

    # ── Removal ──────────────────────────────────────────────────────────────

    def remove_place(self, place: Place) -> None:
        """Remove ``place`` and its edges; the last place takes its id."""
        self._require_place(place)
        for edge in [self._edges[e] for e in place.inputs + place.outputs]:
            self._detach_edge(edge)
        last = self._places.pop()
        if last is not place:
            last.id = place.id
            self._places[place.id] = last
            for e in last.inputs + last.outputs:
                self._edges[e].place = last.id
        self._release_name(self._place_names, place.name_id)

    def remove_transition(self, transition: Transition) -> None:
        """Remove ``transition`` and its edges; the last transition takes its id."""
        self._require_transition(transition)
        for edge in [self._edges[e] for e in transition.inputs + transition.outputs]:
            self._detach_edge(edge)
        last = self._transitions.pop()
        if last is not transition:
            last.id = transition.id
            self._transitions[transition.id] = last
            for e in last.inputs + last.outputs:
                self._edges[e].transition = last.id
        self._release_name(self._transition_names, transition.name_id)

    def remove_edge(self, edge: Edge) -> None:
        self._require_edge(edge)
        self._detach_edge(edge)

    def clear(self) -> None:
        """Reset to an empty net, releasing every name."""
        self._places.clear()
        self._transitions.clear()
        self._edges.clear()
        self._place_names = [True]
        self._transition_names = [True]

    # ── Accessors ────────────────────────────────────────────────────────────

    @property
    def places(self) -> Tuple[Place, ...]:
        return tuple(self._places)

    @property
    def transitions(self) -> Tuple[Transition, ...]:
        return tuple(self._transitions)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    @property
    def n_places(self) -> int:
        return len(self._places)

    @property
    def n_transitions(self) -> int:
        return len(self._transitions)

    @property
    def n_edges(self) -> int:
        return len(self._edges)

    @property
    def place_names(self) -> List[str]:
        return [p.name for p in self._places]

    @property
    def transition_names(self) -> List[str]:
        return [t.name for t in self._transitions]

    def place(self, place_id: int) -> Place:
        return self._places[place_id]

    def transition(self, transition_id: int) -> Transition:
        return self._transitions[transition_id]

    def edge(self, edge_id: int) -> Edge:
        return self._edges[edge_id]

    def edge_source(self, edge: Edge) -> Node:
        if edge.kind is ArcKind.INPUT:
            return self._places[edge.place]
        return self._transitions[edge.transition]

    def edge_target(self, edge: Edge) -> Node:
        if edge.kind is ArcKind.INPUT:
            return self._transitions[edge.transition]
        return self._places[edge.place]

    def input_edges(self, node: Node) -> List[Edge]:
        return [self._edges[e] for e in node.inputs]

    def output_edges(self, node: Node) -> List[Edge]:
        return [self._edges[e] for e in node.outputs]

    def preset(self, node: Node) -> List[Node]:
        """Nodes with an edge into ``node``, in edge order."""
        return [self.edge_source(self._edges[e]) for e in node.inputs]

    def postset(self, node: Node) -> List[Node]:
        """Nodes with an edge out of ``node``, in edge order."""
        return [self.edge_target(self._edges[e]) for e in node.outputs]

    def get_initial_marking(self) -> NDArray[np.int64]:
        """Return (n_places,) int64 vector of token counts."""
        return np.array([p.tokens for p in self._places], dtype=np.int64)

    def incidence_matrices(self) -> Tuple[sparse.csr_matrix, sparse.csr_matrix]:
        """Build sparse ``W_in`` (nT, nP) and ``W_out`` (nP, nT) weight matrices."""
        nP = len(self._places)
        nT = len(self._transitions)

        in_rows: List[int] = []
        in_cols: List[int] = []
        in_vals: List[int] = []

        out_rows: List[int] = []
        out_cols: List[int] = []
        out_vals: List[int] = []

        for edge in self._edges:
            if edge.kind is ArcKind.INPUT:
                in_rows.append(edge.transition)
                in_cols.append(edge.place)
                in_vals.append(edge.weight)
            else:
                out_rows.append(edge.place)
                out_cols.append(edge.transition)
                out_vals.append(edge.weight)

        W_in = sparse.csr_matrix(
            (in_vals, (in_rows, in_cols)), shape=(nT, nP), dtype=np.int64
        )
        W_out = sparse.csr_matrix(
            (out_vals, (out_rows, out_cols)), shape=(nP, nT), dtype=np.int64
        )
        return W_in, W_out

    def summary(self) -> str:
        """Human-readable summary of the net."""
        lines = [
            f"PetriNet  P={self.n_places}  T={self.n_transitions}  "
            f"Edges={self.n_edges}",
            "",
            "Places:",
        ]
        for place in self._places:
            lines.append(f"  [{place.id}] {place.name:10s}  tokens={place.tokens}")

        lines.append("")
        lines.append("Transitions:")
        for transition in self._transitions:
            lines.append(
                f"  [{transition.id}] {transition.name:10s}  label={transition.label}"
            )

        lines.append("")
        lines.append("Edges:")
        for edge in self._edges:
            src = self.edge_source(edge).name
            tgt = self.edge_target(edge).name
            lines.append(f"  {src} --({edge.weight})--> {tgt}")

        W_in, W_out = self.incidence_matrices()
        lines.append("")
        lines.append(f"W_in  (nT={W_in.shape[0]}, nP={W_in.shape[1]})  nnz={W_in.nnz}")
        lines.append(f"W_out (nP={W_out.shape[0]}, nT={W_out.shape[1]})  nnz={W_out.nnz}")
        return "\n".join(lines)

    # ── Internals ────────────────────────────────────────────────────────────

    @staticmethod
    def _claim_name(table: List[bool], name_id: int) -> int:
        if name_id == AUTO_NAME_ID or (name_id < len(table) and table[name_id]):
            name_id = len(table)
        if name_id >= len(table):
            table.extend([False] * (name_id + 1 - len(table)))
        table[name_id] = True
        return name_id

    @staticmethod
    def _release_name(table: List[bool], name_id: int) -> None:
        table[name_id] = False
        while not table[-1]:
            table.pop()

    @staticmethod
    def _require_input_weight(weight: Any) -> int:
        if isinstance(weight, bool) or not isinstance(weight, (int, np.integer)) or weight != 1:
            raise InvalidArgumentError(
                f"Weighted edges are not allowed from places to transitions, got {weight!r}."
            )
        return 1

    def _owned_kind(self, node: Any, role: str) -> NodeKind:
        kind = getattr(node, "kind", None)
        if kind is NodeKind.PLACE and self._owns(self._places, node):
            return kind
        if kind is NodeKind.TRANSITION and self._owns(self._transitions, node):
            return kind
        raise UnrelatedReferenceError(f"Unrelated {role} node cannot be used.")

    @staticmethod
    def _owns(registry: List[Any], record: Any) -> bool:
        index = getattr(record, "id", None)
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        return 0 <= index < len(registry) and registry[index] is record

    def _require_place(self, place: Any) -> None:
        if getattr(place, "kind", None) is not NodeKind.PLACE or not self._owns(self._places, place):
            raise UnrelatedReferenceError("Unrelated place cannot be used.")

    def _require_transition(self, transition: Any) -> None:
        if (
            getattr(transition, "kind", None) is not NodeKind.TRANSITION
            or not self._owns(self._transitions, transition)
        ):
            raise UnrelatedReferenceError("Unrelated transition cannot be used.")

    def _require_edge(self, edge: Any) -> None:
        if not isinstance(getattr(edge, "kind", None), ArcKind) or not self._owns(self._edges, edge):
            raise UnrelatedReferenceError("Unrelated edge cannot be used.")

    def _detach_edge(self, edge: Edge) -> None:
        place = self._places[edge.place]
        transition = self._transitions[edge.transition]
        if edge.kind is ArcKind.INPUT:
            _swap_remove(place.outputs, edge.id)
            _swap_remove(transition.inputs, edge.id)
        else:
            _swap_remove(transition.outputs, edge.id)
            _swap_remove(place.inputs, edge.id)

        last = self._edges.pop()
        if last is edge:
            return
        old_id = last.id
        last.id = edge.id
        self._edges[edge.id] = last
        last_place = self._places[last.place]
        last_transition = self._transitions[last.transition]
        if last.kind is ArcKind.INPUT:
            _relabel(last_place.outputs, old_id, last.id)
            _relabel(last_transition.inputs, old_id, last.id)
        else:
            _relabel(last_transition.outputs, old_id, last.id)
            _relabel(last_place.inputs, old_id, last.id)
