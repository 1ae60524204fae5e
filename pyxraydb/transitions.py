#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Fluorescence lines, core-hole widths and Coster-Kronig probabilities

Emission lines are keyed by Siegbahn label (``"Ka1"``, ``"Lb2,15"``,
``"Ma"``).  Every line records the levels holding the core hole before
(``initial_level``) and after (``final_level``) emission, in IUPAC
notation.

Core-level widths combine the Keski-Rahkonen & Krause compilation with
the Krause & Oliver values for the K and L levels.  Coster-Kronig
probabilities are the Elam tabulation.

Level labels are matched ignoring case, so ``"l3"`` finds ``"L3"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from pyxraydb.database import ElementId, XrayDB, resolve_db
from pyxraydb.exceptions import UnknownEdge

logger = logging.getLogger(__name__)

Levels = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class XrayLine:
    """Energy, relative intensity and levels of one emission line

    Parameters
    ----------
    energy : float
        Emission energy in eV.
    intensity : float
        Intensity relative to the other lines of the same initial level.
    initial_level : str
        Level of the core hole before emission (``"K"``, ``"L3"``).
    final_level : str
        Level of the core hole after emission (``"L3"``, ``"M4,5"``).
    """

    energy: float
    intensity: float
    initial_level: str
    final_level: str


def _level_set(levels: Levels) -> set[str] | None:
    if levels is None:
        return None
    if isinstance(levels, str):
        levels = [levels]
    return {level.strip().upper() for level in levels}


def xray_lines(
    element: ElementId,
    initial_level: Levels = None,
    excitation_energy: float | None = None,
    *,
    db: XrayDB | None = None,
) -> dict[str, XrayLine]:
    """Return Siegbahn label → :class:`XrayLine` for *element*

    Parameters
    ----------
    element : str | int
        Element symbol, name or atomic number.
    initial_level : str or sequence of str, optional
        Keep only lines whose core hole starts in one of these levels.
    excitation_energy : float, optional
        Keep only lines whose initial level can be ionised by a photon
        of this energy (eV), i.e. whose absorption edge lies at or
        below it.  Lines of a level without a tabulated edge are kept.

    Raises
    ------
    UnknownElement
        If *element* does not resolve.

    Examples
    --------
    >>> lines = xray_lines("Fe")
    >>> lines["Ka1"].energy
    6405.2
    >>> sorted(xray_lines("Fe", "K", excitation_energy=6000.0))
    []
    """
    db = resolve_db(db)
    wanted = _level_set(initial_level)
    edges = db.xray_levels(element) if excitation_energy is not None else {}

    lines: dict[str, XrayLine] = {}
    for trans in db.xray_transitions(element):
        if wanted is not None and trans.initial_level.upper() not in wanted:
            continue
        if excitation_energy is not None:
            edge = edges.get(trans.initial_level)
            if edge is not None and edge.energy > excitation_energy:
                continue
        lines[trans.line] = XrayLine(
            trans.energy, trans.intensity, trans.initial_level, trans.final_level
        )
    return lines


def xray_line(
    element: ElementId,
    line: str,
    *,
    db: XrayDB | None = None,
) -> XrayLine:
    """Return one emission line of *element* by Siegbahn label

    Raises
    ------
    UnknownEdge
        If the element has no line with this label.
    """
    db = resolve_db(db)
    lines = xray_lines(element, db=db)
    found = lines.get(line)
    if found is None:
        wanted = line.strip().lower()
        found = next((v for k, v in lines.items() if k.lower() == wanted), None)
    if found is None:
        raise UnknownEdge(db.symbol(element), line)
    return found


def core_width(
    element: ElementId,
    edge: str | None = None,
    *,
    db: XrayDB | None = None,
) -> float | dict[str, float]:
    """Natural width of a core level, in eV

    Parameters
    ----------
    element : str | int
        Element symbol, name or atomic number.
    edge : str, optional
        IUPAC level label.  Without it, every tabulated level is
        returned.

    Returns
    -------
    float or dict[str, float]
        The width of *edge*, or edge label → width when *edge* is
        omitted (empty for an element without tabulated widths).

    Raises
    ------
    UnknownElement
        If *element* does not resolve.
    UnknownEdge
        If *edge* is given but has no tabulated width.

    Examples
    --------
    >>> core_width("Fe", "K")
    1.25
    """
    db = resolve_db(db)
    widths = db.core_widths(element)
    if edge is None:
        return widths
    wanted = edge.strip().upper()
    for label, width in widths.items():
        if label.upper() == wanted:
            return width
    raise UnknownEdge(db.symbol(element), edge)


def ck_probability(
    element: ElementId,
    initial: str,
    final: str,
    total: bool = True,
    *,
    db: XrayDB | None = None,
) -> float:
    """Coster-Kronig transition probability from *initial* to *final*

    Parameters
    ----------
    element : str | int
        Element symbol, name or atomic number.
    initial, final : str
        Sub-shells of the same shell, e.g. ``"L1"`` and ``"L3"``.
    total : bool, optional
        Return the total probability, including cascades through
        intermediate sub-shells (default).  With ``False``, return the
        direct transition probability only.

    Raises
    ------
    UnknownEdge
        If no transition between the two levels is tabulated.

    Examples
    --------
    >>> ck_probability("Fe", "L1", "L3")
    0.696
    >>> ck_probability("Fe", "L1", "L3", total=False)
    0.57
    """
    db = resolve_db(db)
    key = (initial.strip().upper(), final.strip().upper())
    for (ini, fin), rec in db.coster_kronig(element).items():
        if (ini.upper(), fin.upper()) == key:
            return rec.total_probability if total else rec.probability
    raise UnknownEdge(db.symbol(element), f"{initial}->{final}")
