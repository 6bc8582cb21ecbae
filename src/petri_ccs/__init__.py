# ──────────────────────────────────────────────────────────────────────
# Petri-CCS Core — Package Init
# © 1998–2026 Miroslav Šotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ──────────────────────────────────────────────────────────────────────
"""
Petri-CCS
=========

Structural classification of Place/Transition Petri nets and their
translation into CCS process terms.

``pn``    graph model, classifier, synchroniser, encoder.
``ccs``   CCS term AST and renderers.
``io``    PNML exchange and logging setup.
``core``  configuration schema.
"""

__version__ = "1.2.0"
