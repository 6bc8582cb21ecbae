# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — CCS Program Container
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""Named process definitions together with an initial process."""

from __future__ import annotations

import re
from typing import Dict, Iterator, Mapping

from ..errors import InvalidArgumentError
from .terms import PROCESS_KINDS, Process, html_constant_name, to_html, to_text

_DEFINITION_NAME_RE = re.compile(r"[A-Z][a-zA-Z0-9_]*")


class CCSProgram:
    """``NAME := process`` definitions, in insertion order, plus the start term."""

    def __init__(self, definitions: Mapping[str, Process], process: Process) -> None:
        invalid_names = [
            name for name in definitions if _DEFINITION_NAME_RE.fullmatch(name) is None
        ]
        if invalid_names:
            raise InvalidArgumentError(
                "Definition names must be PascalCase: " + ", ".join(invalid_names) + "."
            )
        invalid_terms = [
            name
            for name, term in definitions.items()
            if getattr(term, "kind", None) not in PROCESS_KINDS
        ]
        if invalid_terms:
            raise InvalidArgumentError(
                "Definitions are not processes: " + ", ".join(invalid_terms) + "."
            )
        if getattr(process, "kind", None) not in PROCESS_KINDS:
            raise InvalidArgumentError("Initial process must be a process.")
        self._definitions: Dict[str, Process] = dict(definitions)
        self._process = process

    @property
    def definitions(self) -> Dict[str, Process]:
        return dict(self._definitions)

    @property
    def process(self) -> Process:
        return self._process

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __getitem__(self, name: str) -> Process:
        return self._definitions[name]

    def __len__(self) -> int:
        return len(self._definitions)

    def to_text(self) -> str:
        body = "\n".join(
            f"{name} := {to_text(term)}" for name, term in self._definitions.items()
        )
        return body + "\n\n" + to_text(self._process)

    def to_html(self) -> str:
        body = "<br>".join(
            f"{html_constant_name(name)} := {to_html(term)}"
            for name, term in self._definitions.items()
        )
        return body + "<br><br>" + to_html(self._process)

    def export(self) -> str:
        """Text form terminated by a newline, suitable for writing to a file."""
        return self.to_text() + "\n"

    def __str__(self) -> str:
        return self.to_text()
