#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Anomalous scattering factors, Chantler attenuation, and elastic f0

Chantler tables
---------------
f' (``f1``), f'' (``f2``) and the mass attenuation columns share one
energy grid per element.  Query energies are clamped to
``[table minimum, min(table maximum, 1 MeV)]``.  f' is signed and is
interpolated linearly; f'' and μ/ρ are interpolated in log-log space.

Waasmaier-Kirfel f0
-------------------
The elastic form factor is the closed-form Gaussian sum

.. math::

    f_0(q) = c + \\sum_i a_i \\exp(-b_i q^2)

with :math:`q = \\sin\\theta / \\lambda` in 1/Å.

References
----------
.. [1] C. T. Chantler, J. Phys. Chem. Ref. Data 24, 71 (1995).
.. [2] D. Waasmaier and A. Kirfel, Acta Cryst. A51, 416 (1995).
"""

from __future__ import annotations

import enum
import logging

import numpy as np

from pyxraydb.database import ElementId, XrayDB, resolve_db
from pyxraydb.exceptions import UnknownElement, UnsupportedCrossSection
from pyxraydb.models.records import ChantlerRecord
from pyxraydb.utils.constants import CHANTLER_ENERGY_MAX, VALUE_FLOOR
from pyxraydb.utils.interpolation import (
    as_energy_array,
    clamp_log_energies,
    linear_interpolate,
    loglog_interpolate,
)

logger = logging.getLogger(__name__)


class ChantlerKind(enum.Enum):
    """Mass attenuation column of the Chantler tables"""

    TOTAL = "total"
    PHOTO = "photo"
    INCOHERENT = "incoh"

    @classmethod
    def coerce(cls, value: ChantlerKind | str) -> ChantlerKind:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise ValueError(
            f"unknown Chantler kind {value!r}; expected one of {[m.value for m in cls]}"
        )


_CHANTLER_COLUMNS = {
    ChantlerKind.TOTAL: "mu_total",
    ChantlerKind.PHOTO: "mu_photo",
    ChantlerKind.INCOHERENT: "mu_incoh",
}


def _chantler(element: ElementId, db: XrayDB) -> ChantlerRecord:
    symbol = db.symbol(element)
    try:
        return db.chantler_by_symbol(symbol)
    except UnknownElement as exc:
        raise UnsupportedCrossSection(element, "Chantler") from exc


def _clamp(record: ChantlerRecord, energies) -> np.ndarray:
    emax = min(float(record.energy[-1]), CHANTLER_ENERGY_MAX)
    return np.clip(as_energy_array(energies), float(record.energy[0]), emax)


def _loglog_column(record: ChantlerRecord, energies, column: np.ndarray) -> np.ndarray:
    emax = min(float(record.energy[-1]), CHANTLER_ENERGY_MAX)
    log_energy = clamp_log_energies(energies, float(record.energy[0]), emax)
    return loglog_interpolate(
        log_energy,
        np.log(record.energy),
        np.log(np.maximum(column, VALUE_FLOOR)),
        column,
    )


def chantler_energies(
    element: ElementId,
    emin: float = 0.0,
    emax: float = 1.0e9,
    *,
    db: XrayDB | None = None,
) -> np.ndarray:
    """Return the tabulated Chantler energies of *element* in [emin, emax]"""
    record = _chantler(element, resolve_db(db))
    energy = record.energy
    return np.array(energy[(energy >= emin) & (energy <= emax)])


def f1_chantler(element: ElementId, energies, *, db: XrayDB | None = None) -> np.ndarray:
    """Real anomalous correction f' (electrons), linearly interpolated

    Add the atomic number to obtain the full real scattering factor.

    Raises
    ------
    UnknownElement
        If *element* does not resolve.
    UnsupportedCrossSection
        If the element has no Chantler table.
    """
    record = _chantler(element, resolve_db(db))
    return linear_interpolate(_clamp(record, energies), record.energy, record.f1)


def f2_chantler(element: ElementId, energies, *, db: XrayDB | None = None) -> np.ndarray:
    """Imaginary anomalous scattering factor f'' (electrons)"""
    record = _chantler(element, resolve_db(db))
    return _loglog_column(record, energies, record.f2)


def mu_chantler(
    element: ElementId,
    energies,
    kind: ChantlerKind | str = ChantlerKind.TOTAL,
    *,
    db: XrayDB | None = None,
) -> np.ndarray:
    """Mass attenuation μ/ρ (cm²/g) from the Chantler tables

    Parameters
    ----------
    element : str | int
        Symbol, name or atomic number.
    energies : float or sequence of float
        X-ray energies in eV.
    kind : ChantlerKind | str, optional
        ``TOTAL`` (default), ``PHOTO`` or ``INCOHERENT``.
    db : XrayDB, optional
        Handle to evaluate against; the shared handle by default.
    """
    record = _chantler(element, resolve_db(db))
    column = getattr(record, _CHANTLER_COLUMNS[ChantlerKind.coerce(kind)])
    return _loglog_column(record, energies, column)


def f0(ion: ElementId, q, *, db: XrayDB | None = None) -> np.ndarray:
    """Elastic X-ray scattering factor f0 (electrons)

    Parameters
    ----------
    ion : str | int
        Ion key such as ``"Fe3+"`` or ``"O2-"``, or any element
        identifier for the neutral atom.
    q : float or sequence of float
        Momentum transfer sin(θ)/λ in 1/Å.

    Returns
    -------
    numpy.ndarray
        One value per q.

    Raises
    ------
    UnknownIon
        If the ion is not tabulated but its element exists.
    UnknownElement
        If the base element does not exist.

    Examples
    --------
    >>> round(float(f0("Fe", 0.0)[0]), 3)
    26.0
    """
    record = resolve_db(db).waasmaier_by_ion(ion)
    q = np.atleast_1d(np.asarray(q, dtype="f8")).ravel()
    q2 = (q * q)[:, np.newaxis]
    return record.offset + np.sum(record.scale * np.exp(-record.exponents * q2), axis=1)


def f0_ions(element: ElementId | None = None, *, db: XrayDB | None = None) -> list[str]:
    """Return the ion keys accepted by :func:`f0`"""
    return resolve_db(db).f0_ions(element)
