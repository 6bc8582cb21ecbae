# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Unified CLI Tests
# ──────────────────────────────────────────────────────────────────────

from __future__ import annotations

import json
import sys

import pytest
from click.testing import CliRunner

import petri_ccs.cli as cli_mod
from petri_ccs.io.pnml import parse_pnml, write_pnml
from petri_ccs.pn.classification import is_two_tau_synchronisation_net
from petri_ccs.pn.structure import PetriNet

QUIET = ["--log-level", "ERROR"]


pytestmark = pytest.mark.usefixtures("ccs_logger")


@pytest.fixture
def sequence_file(tmp_path):
    net = PetriNet()
    p1 = net.add_place(tokens=1)
    p2 = net.add_place()
    t1 = net.add_transition(label="go")
    net.add_edge(p1, t1)
    net.add_edge(t1, p2, weight=2)
    path = tmp_path / "sequence.pnml"
    write_pnml(net, path)
    return str(path)


@pytest.fixture
def join_file(tmp_path):
    net = PetriNet()
    places = [net.add_place(tokens=1) for _ in range(3)]
    out = net.add_place()
    t1 = net.add_transition(label="a")
    for place in places:
        net.add_edge(place, t1)
    net.add_edge(t1, out)
    path = tmp_path / "join.pnml"
    write_pnml(net, path)
    return str(path)


@pytest.fixture
def unencodable_file(tmp_path):
    net = PetriNet()
    p1, p2 = net.add_place(), net.add_place()
    t1, t2 = net.add_transition(label="a"), net.add_transition(label="b")
    net.add_edge(p1, t1)
    net.add_edge(p2, t1)
    net.add_edge(p2, t2)
    path = tmp_path / "unencodable.pnml"
    write_pnml(net, path)
    return str(path)


def _rows(output: str) -> dict:
    rows = {}
    for line in output.strip().splitlines():
        label, answer = line.rsplit(" ", 1)
        rows[label.strip()] = answer
    return rows


def test_classify_reports_every_class(sequence_file) -> None:
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["classify", sequence_file])
    assert result.exit_code == 0, result.output
    assert _rows(result.output) == {
        "group-choice": "yes",
        "2-τ-synchronisation": "yes",
        "ccs": "yes",
        "free-choice": "yes",
        "workflow": "yes",
        "free-choice workflow": "yes",
    }


def test_classify_unencodable(unencodable_file) -> None:
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["classify", unencodable_file])
    assert result.exit_code == 0
    rows = _rows(result.output)
    assert rows["group-choice"] == "no"
    assert rows["2-τ-synchronisation"] == "no"


def test_encode_text(sequence_file) -> None:
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["encode", sequence_file])
    assert result.exit_code == 0, result.output
    assert result.output == "X_p1 := go?.X_p2^2\nX_p2 := 0\n\nX_p1\n"


def test_encode_html(sequence_file) -> None:
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["encode", "--html", sequence_file])
    assert result.exit_code == 0
    assert result.output.startswith("X<sub>p1</sub> := go?.X<sub>p2</sub><sup>2</sup><br>")


def test_encode_to_file(join_file, tmp_path) -> None:
    out = tmp_path / "join.ccs"
    result = CliRunner().invoke(
        cli_mod.cli, QUIET + ["encode", "--seed", "3", "-o", str(out), join_file]
    )
    assert result.exit_code == 0
    assert result.output == ""
    text = out.read_text(encoding="utf-8")
    assert text.endswith("(νs_t2)(νs_t3)(X_p1 | X_p2 | X_p3)\n")


def test_encode_unencodable(unencodable_file) -> None:
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["encode", unencodable_file])
    assert result.exit_code == 1
    assert "Petri net cannot be encoded." in result.output


def test_synchronise_outputs_pnml(join_file) -> None:
    result = CliRunner().invoke(
        cli_mod.cli, QUIET + ["synchronise", "--seed", "1", "--name", "joined", join_file]
    )
    assert result.exit_code == 0, result.output
    net = parse_pnml(result.output)
    assert net.n_places == 6
    assert net.n_transitions == 3
    assert is_two_tau_synchronisation_net(net)
    assert "<text>joined</text>" in result.output


def test_synchronise_rejects_unsupported_net(unencodable_file) -> None:
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["synchronise", unencodable_file])
    assert result.exit_code == 1
    assert "neither" in result.output


def test_malformed_pnml(tmp_path) -> None:
    path = tmp_path / "broken.pnml"
    path.write_text("<pnml><net>", encoding="utf-8")
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["classify", str(path)])
    assert result.exit_code == 1
    assert "Cannot import" in result.output


def test_latin1_pnml(tmp_path) -> None:
    path = tmp_path / "latin1.pnml"
    path.write_bytes(
        (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            "<pnml><net id='n'><page id='pg'>"
            "<place id='p'><initialMarking><text>1</text></initialMarking></place>"
            "<transition id='t'><name><text>café</text></name></transition>"
            "<arc id='e' source='p' target='t'/>"
            "</page></net></pnml>"
        ).encode("iso-8859-1")
    )
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["encode", str(path)])
    assert result.exit_code == 0, result.output
    assert result.output == "X_p1 := caf?.0\n\nX_p1\n"


def test_undecodable_pnml(tmp_path) -> None:
    path = tmp_path / "garbage.pnml"
    path.write_bytes(b"<pnml>\xff</pnml>")
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["classify", str(path)])
    assert result.exit_code == 1
    assert "Cannot import" in result.output
    assert "Traceback" not in result.output


def test_unwritable_output(sequence_file, tmp_path) -> None:
    out = tmp_path / "missing" / "out.ccs"
    result = CliRunner().invoke(cli_mod.cli, QUIET + ["encode", "-o", str(out), sequence_file])
    assert result.exit_code == 1
    assert "Cannot write" in result.output
    assert not out.exists()


def test_config_file_selects_html(sequence_file, tmp_path) -> None:
    config = tmp_path / "translator.json"
    config.write_text(
        json.dumps({"output_format": "html", "logging": {"level": "error"}}),
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli_mod.cli, ["--config", str(config), "encode", sequence_file])
    assert result.exit_code == 0, result.output
    assert "<br><br>X<sub>p1</sub>" in result.output


def test_invalid_config_file(sequence_file, tmp_path) -> None:
    config = tmp_path / "translator.json"
    config.write_text(json.dumps({"seed": -4}), encoding="utf-8")
    result = CliRunner().invoke(cli_mod.cli, ["--config", str(config), "classify", sequence_file])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_json_logs_go_to_log_file(sequence_file, tmp_path) -> None:
    log_file = tmp_path / "cli.log"
    result = CliRunner().invoke(
        cli_mod.cli,
        ["--log-level", "INFO", "--json-logs", "--log-file", str(log_file), "classify", sequence_file],
    )
    assert result.exit_code == 0
    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    imported = [line for line in lines if line["message"].startswith("Imported PNML net")]
    assert imported
    assert imported[0]["net_context"] == {"places": 2, "transitions": 1, "edges": 2}


def test_main_returns_exit_code(monkeypatch, capsys, sequence_file, unencodable_file) -> None:
    monkeypatch.setattr(sys, "argv", ["petri-ccs", *QUIET, "encode", sequence_file])
    assert cli_mod.main() == 0
    assert capsys.readouterr().out.startswith("X_p1 := go?")

    monkeypatch.setattr(sys, "argv", ["petri-ccs", *QUIET, "encode", unencodable_file])
    assert cli_mod.main() == 1
    assert "cannot be encoded" in capsys.readouterr().err
