#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Elemental mass attenuation from the Elam tables

:func:`cross_section` evaluates one :class:`CrossSectionKind` for one
element at any number of energies.  Query energies are clamped to the
Elam range [100 eV, 800 keV] and their logarithm is taken once; every
table the query needs is then interpolated against that shared buffer.

Photoabsorption is split at the absorption edges of the element and
each edge-bounded segment is interpolated on its own, so no value is
ever interpolated across an edge jump.  An energy exactly on an edge
uses the segment above the edge.

Units
-----
Energies are in eV, results in cm²/g.
"""

from __future__ import annotations

import enum
import logging

import numpy as np

from pyxraydb.database import ElementId, XrayDB, resolve_db
from pyxraydb.exceptions import UnknownElement, UnsupportedCrossSection
from pyxraydb.utils.constants import ELAM_ENERGY_MAX, ELAM_ENERGY_MIN
from pyxraydb.utils.interpolation import clamp_log_energies

logger = logging.getLogger(__name__)


class CrossSectionKind(enum.Enum):
    """Interaction process whose cross-section is requested"""

    PHOTO = "photo"
    COHERENT = "coh"
    INCOHERENT = "incoh"
    TOTAL = "total"

    @classmethod
    def coerce(cls, value: CrossSectionKind | str) -> CrossSectionKind:
        """Return the member for *value*, a member, value or name

        >>> CrossSectionKind.coerce("Total")
        <CrossSectionKind.TOTAL: 'total'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise ValueError(
            f"unknown cross-section kind {value!r}; expected one of "
            f"{[m.value for m in cls]}"
        )


def elam_log_energies(energies) -> np.ndarray:
    """Clamp *energies* to the Elam range and return their natural log"""
    return clamp_log_energies(energies, ELAM_ENERGY_MIN, ELAM_ENERGY_MAX)


def evaluate_kind(
    db: XrayDB,
    symbol: str,
    log_energy: np.ndarray,
    kind: CrossSectionKind,
    label: ElementId | None = None,
) -> np.ndarray:
    """Evaluate one kind for an already-resolved element symbol

    Parameters
    ----------
    db : XrayDB
        Handle holding the tables.
    symbol : str
        Tabulated element symbol.
    log_energy : numpy.ndarray
        Natural log of the (clamped) query energies.
    kind : CrossSectionKind
    label : str | int, optional
        Identifier to report in errors; defaults to *symbol*.

    Raises
    ------
    UnsupportedCrossSection
        If the element lacks a table the kind needs.
    """
    label = symbol if label is None else label

    if kind is CrossSectionKind.PHOTO:
        return _photo(db, symbol, label).evaluate(log_energy)
    if kind is CrossSectionKind.COHERENT:
        return _scatter(db, symbol, label, kind).coherent.evaluate(log_energy)
    if kind is CrossSectionKind.INCOHERENT:
        return _scatter(db, symbol, label, kind).incoherent.evaluate(log_energy)
    if kind is CrossSectionKind.TOTAL:
        photo = _photo(db, symbol, label)
        scatter = _scatter(db, symbol, label, kind)
        return (
            photo.evaluate(log_energy)
            + scatter.coherent.evaluate(log_energy)
            + scatter.incoherent.evaluate(log_energy)
        )
    raise ValueError(f"unhandled cross-section kind {kind!r}")


def _photo(db: XrayDB, symbol: str, label: ElementId):
    try:
        return db.photo_by_symbol(symbol).photoabsorption
    except UnknownElement as exc:
        raise UnsupportedCrossSection(label, "photoabsorption") from exc


def _scatter(db: XrayDB, symbol: str, label: ElementId, kind: CrossSectionKind):
    try:
        return db.scatter_by_symbol(symbol)
    except UnknownElement as exc:
        name = "scattering" if kind is CrossSectionKind.TOTAL else f"{kind.value} scattering"
        raise UnsupportedCrossSection(label, name) from exc


def cross_section(
    element: ElementId,
    energies,
    kind: CrossSectionKind | str = CrossSectionKind.TOTAL,
    *,
    db: XrayDB | None = None,
) -> np.ndarray:
    """Mass attenuation coefficient of one element (Elam tables)

    Parameters
    ----------
    element : str | int
        Symbol, name or atomic number.
    energies : float or sequence of float
        X-ray energies in eV, positive.
    kind : CrossSectionKind | str, optional
        ``PHOTO``, ``COHERENT``, ``INCOHERENT`` or ``TOTAL`` (default);
        the strings ``"photo"``, ``"coh"``, ``"incoh"``, ``"total"`` are
        accepted too.
    db : XrayDB, optional
        Handle to evaluate against; the shared handle by default.

    Returns
    -------
    numpy.ndarray
        μ/ρ in cm²/g, one value per energy.

    Raises
    ------
    UnknownElement
        If *element* does not resolve.
    UnsupportedCrossSection
        If the element has no table for *kind*.
    ValueError
        If an energy is non-positive or *kind* is not recognised.

    Examples
    --------
    >>> mu = cross_section("Fe", [10000.0])
    >>> 100 < mu[0] < 300
    True
    """
    db = resolve_db(db)
    symbol = db.symbol(element)
    kind = CrossSectionKind.coerce(kind)
    log_energy = elam_log_energies(energies)
    return evaluate_kind(db, symbol, log_energy, kind, label=element)


mu_elam = cross_section
"""Alias of :func:`cross_section`."""
