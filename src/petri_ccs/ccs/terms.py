# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — CCS Term Representation
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
CCS terms and their renderers.

Actions:
    InputAction(a)      a?
    CoAction(a)         a!
    InternalAction      τ

Processes:
    Inaction            0
    Prefix(α, P)        α.P
    Choice(P1..Pn)      (P1 + ... + Pn)      n >= 2, every Pi a Prefix
    Parallel(P1..Pn)    (P1 | ... | Pn)      n >= 2
    Exponent(P, n)      P^n                  n parallel copies of P
    Restriction(a, P)   (νa)P
    Constant(X)         X

Every term is an immutable dataclass carrying a ``kind`` tag.  The two
renderers (:func:`to_text`, :func:`to_html`) dispatch on that tag through
tables that must cover every :class:`TermKind`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, ClassVar, Dict, Mapping, Tuple, Union

from ..errors import InvalidArgumentError

_ACTION_NAME_RE = re.compile(r"[a-z][a-zA-Z0-9_]*")
_CONSTANT_NAME_RE = re.compile(r"[A-Z][a-zA-Z0-9_]*")
_ACTION_SUFFIX_RE = re.compile(r"_(t\d+)$")
_CONSTANT_SUFFIX_RE = re.compile(r"_([pt]\d+)$")


class TermKind(Enum):
    INPUT_ACTION = auto()
    CO_ACTION = auto()
    INTERNAL_ACTION = auto()
    INACTION = auto()
    PREFIX = auto()
    CHOICE = auto()
    PARALLEL = auto()
    EXPONENT = auto()
    RESTRICTION = auto()
    CONSTANT = auto()


ACTION_KINDS = frozenset(
    {TermKind.INPUT_ACTION, TermKind.CO_ACTION, TermKind.INTERNAL_ACTION}
)
PROCESS_KINDS = frozenset(TermKind) - ACTION_KINDS


def _require_action_name(name: Any) -> None:
    if not isinstance(name, str) or _ACTION_NAME_RE.fullmatch(name) is None:
        raise InvalidArgumentError(f"Action name must be camelCase, got {name!r}.")


def _require_kind(role: str, term: Any, kinds: frozenset) -> None:
    if getattr(term, "kind", None) not in kinds:
        raise InvalidArgumentError(f"{role} has the wrong term kind: {term!r}.")


class _Term:
    kind: ClassVar[TermKind]

    def __str__(self) -> str:
        return to_text(self)  # type: ignore[arg-type]


# ── Actions ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class InputAction(_Term):
    kind: ClassVar[TermKind] = TermKind.INPUT_ACTION

    name: str

    def __post_init__(self) -> None:
        _require_action_name(self.name)


@dataclass(frozen=True)
class CoAction(_Term):
    kind: ClassVar[TermKind] = TermKind.CO_ACTION

    name: str

    def __post_init__(self) -> None:
        _require_action_name(self.name)


@dataclass(frozen=True)
class InternalAction(_Term):
    kind: ClassVar[TermKind] = TermKind.INTERNAL_ACTION


# ── Processes ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Inaction(_Term):
    kind: ClassVar[TermKind] = TermKind.INACTION


@dataclass(frozen=True)
class Prefix(_Term):
    kind: ClassVar[TermKind] = TermKind.PREFIX

    action: "Action"
    process: "Process"

    def __post_init__(self) -> None:
        _require_kind("Prefix action", self.action, ACTION_KINDS)
        _require_kind("Prefix process", self.process, PROCESS_KINDS)


@dataclass(frozen=True)
class Choice(_Term):
    kind: ClassVar[TermKind] = TermKind.CHOICE

    choices: Tuple[Prefix, ...]

    def __post_init__(self) -> None:
        choices = tuple(self.choices)
        if len(choices) < 2:
            raise InvalidArgumentError("Choice needs at least two prefixes.")
        for choice in choices:
            _require_kind("Choice branch", choice, frozenset({TermKind.PREFIX}))
        object.__setattr__(self, "choices", choices)


@dataclass(frozen=True)
class Parallel(_Term):
    kind: ClassVar[TermKind] = TermKind.PARALLEL

    processes: Tuple["Process", ...]

    def __post_init__(self) -> None:
        processes = tuple(self.processes)
        if len(processes) < 2:
            raise InvalidArgumentError("Parallel needs at least two processes.")
        for process in processes:
            _require_kind("Parallel component", process, PROCESS_KINDS)
        object.__setattr__(self, "processes", processes)


@dataclass(frozen=True)
class Exponent(_Term):
    kind: ClassVar[TermKind] = TermKind.EXPONENT

    process: "Process"
    count: int

    def __post_init__(self) -> None:
        _require_kind("Exponent process", self.process, PROCESS_KINDS)
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 0:
            raise InvalidArgumentError(
                f"Exponent must be a non-negative integer, got {self.count!r}."
            )


@dataclass(frozen=True)
class Restriction(_Term):
    kind: ClassVar[TermKind] = TermKind.RESTRICTION

    action: InputAction
    process: "Process"

    def __post_init__(self) -> None:
        _require_kind("Restriction action", self.action, frozenset({TermKind.INPUT_ACTION}))
        _require_kind("Restriction process", self.process, PROCESS_KINDS)


@dataclass(frozen=True)
class Constant(_Term):
    kind: ClassVar[TermKind] = TermKind.CONSTANT

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or _CONSTANT_NAME_RE.fullmatch(self.name) is None:
            raise InvalidArgumentError(f"Constant name must be PascalCase, got {self.name!r}.")


Action = Union[InputAction, CoAction, InternalAction]
Process = Union[Inaction, Prefix, Choice, Parallel, Exponent, Restriction, Constant]
Term = Union[Action, Process]


# ── Renderers ────────────────────────────────────────────────────────────────

_Renderer = Callable[[Any], str]


def _check_exhaustive(table: Mapping[TermKind, _Renderer], which: str) -> None:
    missing = set(TermKind) - set(table)
    if missing:
        raise RuntimeError(
            f"{which} renderer misses term kinds: {sorted(k.name for k in missing)}"
        )


_TEXT: Dict[TermKind, _Renderer] = {
    TermKind.INPUT_ACTION: lambda t: f"{t.name}?",
    TermKind.CO_ACTION: lambda t: f"{t.name}!",
    TermKind.INTERNAL_ACTION: lambda t: "τ",
    TermKind.INACTION: lambda t: "0",
    TermKind.PREFIX: lambda t: f"{to_text(t.action)}.{to_text(t.process)}",
    TermKind.CHOICE: lambda t: "(" + " + ".join(to_text(c) for c in t.choices) + ")",
    TermKind.PARALLEL: lambda t: "(" + " | ".join(to_text(p) for p in t.processes) + ")",
    TermKind.EXPONENT: lambda t: f"{to_text(t.process)}^{t.count}",
    TermKind.RESTRICTION: lambda t: f"(ν{t.action.name}){to_text(t.process)}",
    TermKind.CONSTANT: lambda t: t.name,
}


def _html_action_name(name: str) -> str:
    return _ACTION_SUFFIX_RE.sub(r"<sub>\1</sub>", name)


def html_constant_name(name: str) -> str:
    """Render a constant name with its ``_pN``/``_tN`` suffix as a subscript."""
    return _CONSTANT_SUFFIX_RE.sub(r"<sub>\1</sub>", name)


_HTML: Dict[TermKind, _Renderer] = {
    TermKind.INPUT_ACTION: lambda t: _html_action_name(t.name),
    TermKind.CO_ACTION: lambda t: f'<span class="overline">{_html_action_name(t.name)}</span>',
    TermKind.INTERNAL_ACTION: lambda t: "τ",
    TermKind.INACTION: lambda t: "<b>0</b>",
    TermKind.PREFIX: lambda t: f"{to_html(t.action)}.{to_html(t.process)}",
    TermKind.CHOICE: lambda t: "(" + " + ".join(to_html(c) for c in t.choices) + ")",
    TermKind.PARALLEL: lambda t: "(" + " | ".join(to_html(p) for p in t.processes) + ")",
    TermKind.EXPONENT: lambda t: f"{to_html(t.process)}<sup>{t.count}</sup>",
    TermKind.RESTRICTION: lambda t: f"(ν{_html_action_name(t.action.name)}){to_html(t.process)}",
    TermKind.CONSTANT: lambda t: html_constant_name(t.name),
}

_check_exhaustive(_TEXT, "text")
_check_exhaustive(_HTML, "html")


def to_text(term: Term) -> str:
    """Plain-text rendering, e.g. ``(νs_t1)(X_p1 | X_p2)``."""
    return _TEXT[term.kind](term)


def to_html(term: Term) -> str:
    """HTML rendering with subscripted node names and overlined co-actions."""
    return _HTML[term.kind](term)
