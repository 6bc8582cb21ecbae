# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — PNML Import / Export
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""PNML (Petri Net Markup Language) exchange for P/T nets.

Only structure and marking are exchanged; graphics are ignored on import
and not written on export.  Import builds the net exclusively through the
public :class:`PetriNet` API and either returns a complete net or raises.
"""

from __future__ import annotations

import logging
import math
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..errors import PnmlError
from ..pn.structure import TAU, ArcKind, Node, PetriNet
from .logging_config import net_context

logger = logging.getLogger(__name__)

PNML_NS = "http://www.pnml.org/version-2009/grammar/pnml"
PTNET_TYPE = "http://www.pnml.org/version-2009/grammar/ptnet"

_LABEL_STRIP_RE = re.compile(r"[^a-zA-Z0-9τ]+")
_CONTAINERS = ("net", "page")


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    for child in elem:
        if _local(child.tag) == name:
            return child
    return None


def _text_of(elem: ET.Element, name: str) -> Optional[str]:
    """Text of ``<name><text>...</text></name>`` under ``elem``."""
    holder = _child(elem, name)
    if holder is None:
        return None
    text = _child(holder, "text")
    if text is None:
        return None
    return text.text or ""


def _members(root: ET.Element, kind: str) -> Iterator[ET.Element]:
    for container in root.iter():
        if _local(container.tag) not in _CONTAINERS:
            continue
        for child in container:
            if _local(child.tag) == kind:
                yield child


def _parse_tokens(text: Optional[str]) -> int:
    if text is None:
        return 0
    try:
        value = float(text.strip())
    except ValueError:
        return 0
    if math.isnan(value) or value == 0.0:
        return 0
    if not value.is_integer():
        raise PnmlError(f"Initial marking must be an integer, got {text.strip()!r}.")
    return int(value)


def _parse_label(text: Optional[str]) -> str:
    if text is None:
        return TAU
    return _LABEL_STRIP_RE.sub("", text.lower()) or TAU


def _parse_weight(text: Optional[str]) -> int:
    if text is None or not text.strip():
        return 1
    try:
        return int(text.strip())
    except ValueError as exc:
        raise PnmlError(f"Arc inscription must be an integer, got {text.strip()!r}.") from exc


def _require_id(elem: ET.Element, kind: str, nodes: Dict[str, Node]) -> str:
    node_id = elem.get("id")
    if not node_id:
        raise PnmlError(f"{kind.capitalize()} without id.")
    if node_id in nodes:
        raise PnmlError(f"Duplicate id '{node_id}'.")
    return node_id


def parse_pnml(text: Union[str, bytes]) -> PetriNet:
    """Build a :class:`PetriNet` from a PNML document.

    ``bytes`` input is decoded according to its XML encoding declaration
    (UTF-8 when there is none).

    Raises
    ------
    PnmlError
        Malformed XML, missing/duplicate ids, unknown arc endpoints or
        unparsable markings/inscriptions.
    PetriNetError
        Any structural violation reported by the graph model.
    """
    try:
        root = ET.fromstring(text)
    except (ET.ParseError, UnicodeDecodeError) as exc:
        raise PnmlError(f"Invalid XML: {exc}") from exc

    net = PetriNet()
    nodes: Dict[str, Node] = {}

    for elem in _members(root, "place"):
        node_id = _require_id(elem, "place", nodes)
        tokens = _parse_tokens(_text_of(elem, "initialMarking"))
        nodes[node_id] = net.add_place(tokens=tokens)

    for elem in _members(root, "transition"):
        node_id = _require_id(elem, "transition", nodes)
        nodes[node_id] = net.add_transition(label=_parse_label(_text_of(elem, "name")))

    n_arcs = 0
    for elem in _members(root, "arc"):
        source = nodes.get(elem.get("source", ""))
        target = nodes.get(elem.get("target", ""))
        if source is None:
            raise PnmlError(f"Arc with unknown source id '{elem.get('source')}'.")
        if target is None:
            raise PnmlError(f"Arc with unknown target id '{elem.get('target')}'.")
        net.add_edge(source, target, _parse_weight(_text_of(elem, "inscription")))
        n_arcs += 1

    logger.info(
        "Imported PNML net: P=%d T=%d arcs=%d",
        net.n_places,
        net.n_transitions,
        n_arcs,
        extra={"net_context": net_context(net)},
    )
    return net


def read_pnml(path: Union[str, Path]) -> PetriNet:
    return parse_pnml(Path(path).read_bytes())


def _named(parent: ET.Element, tag: str, text: str, **attrib: str) -> ET.Element:
    elem = ET.SubElement(parent, tag, attrib)
    name = ET.SubElement(elem, "name")
    ET.SubElement(name, "text").text = text
    return elem


def to_pnml(net: PetriNet, name: str = "net") -> str:
    """Serialise ``net`` as a PNML 2009 P/T net document.

    Element ids: ``cId1`` net, ``cId2`` page, then places, transitions and
    arcs numbered consecutively from ``cId3``.
    """
    root = ET.Element("pnml", {"xmlns": PNML_NS})
    net_elem = _named(root, "net", name, id="cId1", type=PTNET_TYPE)
    page = ET.SubElement(net_elem, "page", {"id": "cId2"})

    place_ids: List[str] = [f"cId{p.id + 3}" for p in net.places]
    transition_ids: List[str] = [f"cId{net.n_places + t.id + 3}" for t in net.transitions]

    for place in net.places:
        elem = _named(page, "place", place.name, id=place_ids[place.id])
        marking = ET.SubElement(elem, "initialMarking")
        ET.SubElement(marking, "text").text = str(place.tokens)

    for transition in net.transitions:
        _named(page, "transition", transition.label, id=transition_ids[transition.id])

    offset = net.n_places + net.n_transitions + 3
    for edge in net.edges:
        if edge.kind is ArcKind.INPUT:
            source, target = place_ids[edge.place], transition_ids[edge.transition]
        else:
            source, target = transition_ids[edge.transition], place_ids[edge.place]
        arc = ET.SubElement(
            page, "arc", {"id": f"cId{offset + edge.id}", "source": source, "target": target}
        )
        if edge.weight > 1:
            inscription = ET.SubElement(arc, "inscription")
            ET.SubElement(inscription, "text").text = str(edge.weight)

    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode") + "\n"


def write_pnml(net: PetriNet, path: Union[str, Path], name: str = "net") -> None:
    Path(path).write_text(to_pnml(net, name), encoding="utf-8")
