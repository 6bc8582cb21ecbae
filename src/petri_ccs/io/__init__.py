# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — IO Package Init
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""Exchange formats (PNML) and logging setup."""

from .logging_config import CCSJSONFormatter, net_context, setup_logging
from .pnml import parse_pnml, read_pnml, to_pnml, write_pnml
