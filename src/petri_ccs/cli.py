# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Unified CLI
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from petri_ccs.core.config_schema import TranslatorConfig, load_config
from petri_ccs.errors import PetriNetError
from petri_ccs.io.logging_config import setup_logging
from petri_ccs.io.pnml import read_pnml, to_pnml
from petri_ccs.pn.classification import classify
from petri_ccs.pn.encoder import CCSEncoder
from petri_ccs.pn.structure import PetriNet
from petri_ccs.pn.synchronisation import to_two_tau_synchronisation_net


LOGGER = logging.getLogger("petri_ccs.cli")

_CLASS_ROWS = (
    ("group-choice", "group_choice"),
    ("2-τ-synchronisation", "two_tau_synchronisation"),
    ("ccs", "ccs"),
    ("free-choice", "free_choice"),
    ("workflow", "workflow"),
    ("free-choice workflow", "free_choice_workflow"),
)


def _load_net(path: str) -> PetriNet:
    try:
        return read_pnml(path)
    except (PetriNetError, OSError) as exc:
        raise click.ClickException(f"Cannot import '{path}': {exc}") from exc


def _emit(text: str, output: Optional[str]) -> None:
    if not text.endswith("\n"):
        text += "\n"
    if output is None:
        click.echo(text, nl=False)
        return
    try:
        Path(output).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise click.ClickException(f"Cannot write '{output}': {exc.strerror or exc}") from exc
    LOGGER.info("Wrote %s", output)


def _resolve_config(ctx: click.Context, seed: Optional[int], html: bool = False) -> TranslatorConfig:
    config: TranslatorConfig = ctx.obj["config"]
    updates = {}
    if seed is not None:
        updates["seed"] = seed
    if html:
        updates["output_format"] = "html"
    if not updates:
        return config
    try:
        return TranslatorConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON translator configuration.",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides the configuration file).",
)
@click.option("--json-logs/--plain-logs", default=None, help="Structured JSON log lines.")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False), help="Also log to this file.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    log_level: Optional[str],
    json_logs: Optional[bool],
    log_file: Optional[str],
) -> None:
    """Classify Petri nets and translate them into CCS."""
    try:
        config = load_config(config_path) if config_path else TranslatorConfig()
    except (ValidationError, ValueError) as exc:
        raise click.ClickException(f"Invalid configuration '{config_path}': {exc}") from exc

    params = config.logging
    setup_logging(
        level=getattr(logging, (log_level or params.level).upper(), logging.INFO),
        json_output=params.json_output if json_logs is None else json_logs,
        log_file=log_file or params.log_file,
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("classify")
@click.argument("net_path", type=click.Path(exists=True, dir_okay=False))
def classify_cmd(net_path: str) -> None:
    """Report the structural classes NET_PATH belongs to."""
    result = classify(_load_net(net_path))
    for label, attr in _CLASS_ROWS:
        click.echo(f"{label:22s} {'yes' if getattr(result, attr) else 'no'}")


@cli.command("encode")
@click.argument("net_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--seed", type=int, default=None, help="Seed for the synchronisation merge order.")
@click.option("--html", is_flag=True, help="Render HTML instead of plain text.")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False), help="Output file.")
@click.pass_context
def encode_cmd(
    ctx: click.Context,
    net_path: str,
    seed: Optional[int],
    html: bool,
    output: Optional[str],
) -> None:
    """Translate NET_PATH into a CCS program."""
    encoder = CCSEncoder(_resolve_config(ctx, seed, html))
    net = _load_net(net_path)
    try:
        translation = encoder.translate(net)
    except PetriNetError as exc:
        raise click.ClickException(str(exc)) from exc
    if translation.program is None:
        raise click.ClickException("Petri net cannot be encoded.")
    _emit(encoder.render(translation.program), output)


@cli.command("synchronise")
@click.argument("net_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--seed", type=int, default=None, help="Seed for the synchronisation merge order.")
@click.option("--name", default="net", show_default=True, help="PNML net name.")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False), help="Output file.")
@click.pass_context
def synchronise_cmd(
    ctx: click.Context,
    net_path: str,
    seed: Optional[int],
    name: str,
    output: Optional[str],
) -> None:
    """Rewrite NET_PATH into a 2-τ-synchronisation net (PNML)."""
    encoder = CCSEncoder(_resolve_config(ctx, seed))
    net = _load_net(net_path)
    try:
        result = to_two_tau_synchronisation_net(net, encoder.rng)
    except PetriNetError as exc:
        raise click.ClickException(str(exc)) from exc
    LOGGER.info(
        "Synchronised net: P=%d T=%d edges=%d",
        result.n_places,
        result.n_transitions,
        result.n_edges,
    )
    _emit(to_pnml(result, name), output)


def main() -> int:
    try:
        cli.main(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code
    return 0


if __name__ == "__main__":
    sys.exit(main())
