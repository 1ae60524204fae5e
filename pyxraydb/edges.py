#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Absorption-edge queries

Edge energies are in eV and edge labels follow IUPAC notation
(``"K"``, ``"L1"``, ``"L2"``, ``"L3"``, ``"M1"`` … ``"M5"``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from pyxraydb.database import ElementId, XrayDB, resolve_db
from pyxraydb.exceptions import UnknownEdge

logger = logging.getLogger(__name__)

DEFAULT_GUESS_EDGES: tuple[str, ...] = ("K", "L3", "L2", "L1", "M5")
"""Edges considered by :func:`guess_edge` unless told otherwise."""


@dataclass(frozen=True)
class XrayEdge:
    """Energy, fluorescence yield and jump ratio of one edge"""

    energy: float
    fluorescence_yield: float
    jump_ratio: float


def xray_edges(element: ElementId, *, db: XrayDB | None = None) -> dict[str, XrayEdge]:
    """Return edge label → :class:`XrayEdge` for every edge of *element*

    >>> xray_edges("Fe")["K"].energy
    7112.0
    """
    levels = resolve_db(db).xray_levels(element)
    return {
        label: XrayEdge(lv.energy, lv.fluorescence_yield, lv.jump_ratio)
        for label, lv in levels.items()
    }


def xray_edge(element: ElementId, edge: str, *, db: XrayDB | None = None) -> XrayEdge:
    """Return one edge of *element*

    Edge labels are matched ignoring case (``"k"`` finds ``"K"``).

    Raises
    ------
    UnknownElement
        If *element* does not resolve.
    UnknownEdge
        If the element has no such edge.
    """
    db = resolve_db(db)
    edges = xray_edges(element, db=db)
    found = edges.get(edge)
    if found is None:
        wanted = edge.strip().upper()
        found = next((v for k, v in edges.items() if k.upper() == wanted), None)
    if found is None:
        raise UnknownEdge(db.symbol(element), edge)
    return found


def guess_edge(
    energy: float,
    edges: Sequence[str] = DEFAULT_GUESS_EDGES,
    *,
    db: XrayDB | None = None,
) -> tuple[str, str] | None:
    """Return the ``(symbol, edge)`` whose edge energy is closest to *energy*

    Only edges listed in *edges* are considered.  On a tie the first
    tabulated level wins.  Returns ``None`` if no level qualifies.

    >>> guess_edge(7100.0)
    ('Fe', 'K')
    """
    if not energy > 0:
        raise ValueError(f"energy must be positive, got {energy!r}")
    wanted = set(edges)
    best: tuple[str, str] | None = None
    best_diff = float("inf")
    for level in resolve_db(db).dataset.xray_levels:
        if level.energy <= 0 or level.edge not in wanted:
            continue
        diff = abs(level.energy - energy)
        if diff < best_diff:
            best, best_diff = (level.element, level.edge), diff
    logger.debug("guess_edge(%g) -> %s", energy, best)
    return best
