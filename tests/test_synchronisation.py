# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — 2-τ-Synchronisation Rewriting Tests
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
Tests for the group-choice to 2-τ-synchronisation rewriting.

Merge orders are driven either by a seeded ``numpy.random.Generator`` or
by a scripted source returning fixed draws, so the produced structure can
be asserted exactly.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pytest

from petri_ccs.errors import StructuralMismatchError
from petri_ccs.pn.classification import (
    is_group_choice_net,
    is_two_tau_synchronisation_net,
)
from petri_ccs.pn.structure import TAU, PetriNet
from petri_ccs.pn.synchronisation import (
    copy_net,
    merge_order,
    to_two_tau_synchronisation_net,
)


class ScriptedRandom:
    """Stands in for ``Generator.random`` with a fixed sequence of draws."""

    def __init__(self, draws: Iterable[float]) -> None:
        self._draws = iter(draws)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return next(self._draws)


def join(n_inputs: int, label: str) -> PetriNet:
    """``n_inputs`` marked places feeding one transition with one output place."""
    net = PetriNet()
    places = [net.add_place(tokens=1) for _ in range(n_inputs)]
    sink = net.add_place()
    transition = net.add_transition(label=label)
    for place in places:
        net.add_edge(place, transition)
    net.add_edge(transition, sink)
    return net


@pytest.fixture
def scenario_d() -> PetriNet:
    """p1, p2, p3 -> t1[a] -> p4"""
    return join(3, "a")


# ── merge_order ──────────────────────────────────────────────────────────────


class TestMergeOrder:
    def test_scripted_draws(self) -> None:
        rng = ScriptedRandom([0.9, 0.5, 0.1, 0.0, 0.99, 0.99, 0.3, 0.7])
        order = merge_order(5, 1, rng)  # type: ignore[arg-type]
        assert order == [(1, 3), (0, 1), (0, 1), (0, 1)]
        assert rng.calls == 8

    def test_collision_skips_first_draw(self) -> None:
        # Both draws land on slot 1; the second moves up to 2.
        rng = ScriptedRandom([0.5, 0.5])
        assert merge_order(4, 3, rng) == [(1, 2)]  # type: ignore[arg-type]

    def test_nothing_to_merge(self) -> None:
        rng = ScriptedRandom([])
        assert merge_order(2, 2, rng) == []  # type: ignore[arg-type]
        assert merge_order(1, 1, rng) == []  # type: ignore[arg-type]

    @pytest.mark.parametrize("n_places,done", [(3, 1), (6, 1), (6, 2), (10, 2)])
    def test_pairs_are_distinct_and_in_bounds(self, n_places: int, done: int) -> None:
        order = merge_order(n_places, done, np.random.default_rng(3))
        assert len(order) == n_places - done
        for step, (a, b) in enumerate(order):
            pool = n_places - step
            assert 0 <= a < b < pool

    def test_seeded_generator_is_reproducible(self) -> None:
        first = merge_order(12, 1, np.random.default_rng(42))
        second = merge_order(12, 1, np.random.default_rng(42))
        assert first == second


# ── Rewriting ────────────────────────────────────────────────────────────────


class TestSynchronisation:
    def test_scenario_d_structure(self, scenario_d: PetriNet) -> None:
        assert is_group_choice_net(scenario_d)
        assert not is_two_tau_synchronisation_net(scenario_d)

        result = to_two_tau_synchronisation_net(scenario_d, np.random.default_rng(0))

        assert result.n_places == scenario_d.n_places + 2
        assert result.n_transitions == scenario_d.n_transitions + 2
        assert result.place_names == ["p1", "p2", "p3", "p4", "p5", "p6"]
        assert result.transition_names == ["t1", "t2", "t3"]
        assert is_two_tau_synchronisation_net(result)

        t1, t2, t3 = result.transitions
        assert [p.name for p in result.preset(t1)] == ["p6"]
        assert [p.name for p in result.postset(t1)] == ["p4"]
        assert [p.name for p in result.preset(t2)] == ["p1", "p2"]
        assert [p.name for p in result.postset(t2)] == ["p5"]
        assert [p.name for p in result.preset(t3)] == ["p5", "p3"]
        assert [p.name for p in result.postset(t3)] == ["p6"]
        assert t2.label == TAU and t3.label == TAU
        assert result.place(4).tokens == 0 and result.place(5).tokens == 0

    def test_input_is_not_mutated(self, scenario_d: PetriNet) -> None:
        before = scenario_d.summary()
        to_two_tau_synchronisation_net(scenario_d, np.random.default_rng(0))
        assert scenario_d.summary() == before

    def test_all_tau_group_keeps_two_inputs(self) -> None:
        net = join(4, TAU)
        result = to_two_tau_synchronisation_net(net, np.random.default_rng(5))
        assert result.n_transitions == 3
        assert result.n_places == 7
        assert len(result.transition(0).inputs) == 2
        assert is_two_tau_synchronisation_net(result)

    def test_group_with_several_transitions(self) -> None:
        net = PetriNet()
        places = [net.add_place(tokens=1) for _ in range(3)]
        out_a = net.add_place()
        out_b = net.add_place()
        ta = net.add_transition(label="a")
        tb = net.add_transition(label="b")
        for place in places:
            net.add_edge(place, ta)
            net.add_edge(place, tb)
        net.add_edge(ta, out_a)
        net.add_edge(tb, out_b)
        assert is_group_choice_net(net)

        result = to_two_tau_synchronisation_net(net, np.random.default_rng(1))

        assert result.n_transitions == 4
        assert result.n_places == 7
        merged = result.preset(result.transition(0))
        assert len(merged) == 1
        assert result.preset(result.transition(1)) == merged
        assert [t.name for t in result.postset(merged[0])] == ["t1", "t2"]
        assert is_two_tau_synchronisation_net(result)

    def test_independent_groups_rewritten(self) -> None:
        net = join(3, "a")
        extra = [net.add_place() for _ in range(3)]
        t2 = net.add_transition(label="b")
        for place in extra:
            net.add_edge(place, t2)

        result = to_two_tau_synchronisation_net(net, np.random.default_rng(9))
        assert result.n_transitions == 2 + 4
        assert result.n_places == 7 + 4
        assert is_two_tau_synchronisation_net(result)

    def test_already_synchronised_is_copied(self) -> None:
        net = join(2, TAU)
        result = to_two_tau_synchronisation_net(net)
        assert result is not net
        assert result.summary() == net.summary()

    def test_seeded_runs_are_identical(self) -> None:
        net = join(7, "a")
        first = to_two_tau_synchronisation_net(net, np.random.default_rng(11))
        second = to_two_tau_synchronisation_net(net, np.random.default_rng(11))
        assert first.summary() == second.summary()

    def test_default_generator(self) -> None:
        result = to_two_tau_synchronisation_net(join(5, "a"))
        assert is_two_tau_synchronisation_net(result)
        assert result.n_transitions == 5

    def test_unsupported_net_rejected(self) -> None:
        net = PetriNet()
        p1, p2 = net.add_place(), net.add_place()
        t1, t2 = net.add_transition(label="a"), net.add_transition(label="b")
        net.add_edge(p1, t1)
        net.add_edge(p2, t1)
        net.add_edge(p2, t2)
        with pytest.raises(StructuralMismatchError):
            to_two_tau_synchronisation_net(net)


# ── copy_net ─────────────────────────────────────────────────────────────────


class TestCopyNet:
    def test_copy_preserves_names_after_removal(self) -> None:
        net = PetriNet()
        p1 = net.add_place(tokens=2)
        p2 = net.add_place()
        p3 = net.add_place(tokens=1)
        t1 = net.add_transition(label="go")
        net.add_edge(p1, t1)
        net.add_edge(t1, p3, weight=4)
        net.remove_place(p2)

        copy = copy_net(net)
        assert copy.place_names == ["p1", "p3"]
        assert [p.tokens for p in copy.places] == [2, 1]
        assert copy.transition(0).label == "go"
        assert sorted(e.weight for e in copy.edges) == [1, 4]
        assert copy.summary() == net.summary()

    def test_copy_is_independent(self) -> None:
        net = join(2, TAU)
        copy = copy_net(net)
        copy.remove_place(copy.place(0))
        assert net.n_places == 3
        assert net.n_edges == 3
