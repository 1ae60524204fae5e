#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Compound and named-material attenuation

A compound's mass attenuation follows Bragg's additivity rule: the sum
of the elemental μ/ρ weighted by mass fraction.  Multiplying by the
material density gives the linear attenuation coefficient μ in 1/cm.

Every constituent of a formula must resolve to a known element.  An
unknown symbol raises :class:`~pyxraydb.exceptions.UnknownElement`; it
is never counted with zero mass.

Named materials
---------------
:data:`~pyxraydb.utils.constants.MATERIALS` lists common materials with
their formula and density.  :func:`material_mu` accepts such a name in
place of a formula and looks the density up when none is given.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from pyxraydb.cross_sections import CrossSectionKind, elam_log_energies, evaluate_kind
from pyxraydb.database import XrayDB, resolve_db
from pyxraydb.exceptions import UnknownMaterial, ZeroWeightFormula
from pyxraydb.scattering import f1_chantler, f2_chantler
from pyxraydb.utils.chemparser import chemparse
from pyxraydb.utils.constants import AVOGADRO, MATERIALS, PLANCK_HC, R_ELECTRON_CM

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Material:
    """A named material

    Parameters
    ----------
    name : str
        Lower-case material name.
    formula : str
        Chemical formula.
    density : float
        Density in g/cm³.
    """

    name: str
    formula: str
    density: float


def get_materials() -> dict[str, Material]:
    """Return every named material, keyed by lower-case name"""
    return {
        name: Material(name, formula, density)
        for name, (formula, density) in MATERIALS.items()
    }


def find_material(name: str) -> Material | None:
    """Look a material up by name, then by formula

    Both comparisons ignore case and surrounding whitespace.

    >>> find_material("Kapton").formula
    'C22H10N2O5'
    >>> find_material("fe2o3").name
    'hematite'
    """
    key = name.strip().lower()
    entry = MATERIALS.get(key)
    if entry is not None:
        return Material(key, *entry)
    for mat_name, (formula, density) in MATERIALS.items():
        if formula.lower() == key:
            return Material(mat_name, formula, density)
    return None


# ---------------------------------------------------------------------------
# Formula arithmetic
# ---------------------------------------------------------------------------

def _formula_weights(formula: str, db: XrayDB) -> dict[str, tuple[float, float]]:
    """Return symbol → (count, count × molar mass) for *formula*

    Each distinct element is resolved, and its molar mass fetched, once.
    """
    weights: dict[str, tuple[float, float]] = {}
    masses: dict[str, float] = {}
    for token, count in chemparse(formula):
        symbol = db.symbol(token)
        if symbol not in masses:
            masses[symbol] = db.molar_mass(symbol)
        prev_count, prev_weight = weights.get(symbol, (0.0, 0.0))
        weights[symbol] = (prev_count + count, prev_weight + count * masses[symbol])

    total = sum(w for _, w in weights.values())
    if not total > 0:
        raise ZeroWeightFormula(f"formula {formula!r} has zero formula weight")
    return weights


def formula_weight(formula: str, *, db: XrayDB | None = None) -> float:
    """Return Σ count × molar mass for *formula*, in g/mol"""
    weights = _formula_weights(formula, resolve_db(db))
    return sum(w for _, w in weights.values())


def mass_fractions(formula: str, *, db: XrayDB | None = None) -> dict[str, float]:
    """Return the mass fraction of every element of *formula*

    The fractions sum to 1 within rounding.

    Raises
    ------
    InvalidFormula, EmptyFormula
        If the formula does not parse or has no elements.
    UnknownElement
        If a constituent is not a known element.
    ZeroWeightFormula
        If the formula weight is zero.

    Examples
    --------
    >>> fr = mass_fractions("H2O")
    >>> round(fr["O"], 3)
    0.888
    """
    weights = _formula_weights(formula, resolve_db(db))
    total = sum(w for _, w in weights.values())
    return {symbol: w / total for symbol, (_, w) in weights.items()}


# ---------------------------------------------------------------------------
# Attenuation
# ---------------------------------------------------------------------------

def material_cross_section(
    formula: str,
    energies,
    density: float,
    kind: CrossSectionKind | str = CrossSectionKind.TOTAL,
    *,
    db: XrayDB | None = None,
) -> np.ndarray:
    """Linear attenuation coefficient of a compound, 1/cm

    ``μ = density × Σ w_i · (μ/ρ)_i`` with mass fractions ``w_i``.

    Parameters
    ----------
    formula : str
        Chemical formula, e.g. ``"Fe2O3"``.
    energies : float or sequence of float
        X-ray energies in eV.
    density : float
        Material density in g/cm³.
    kind : CrossSectionKind | str, optional
        Cross-section kind; ``TOTAL`` by default.
    db : XrayDB, optional
        Handle to evaluate against; the shared handle by default.

    Raises
    ------
    InvalidFormula, EmptyFormula, ZeroWeightFormula
        For a malformed or degenerate formula.
    UnknownElement
        If a constituent is not a known element.
    UnsupportedCrossSection
        If a constituent lacks the table *kind* needs.
    ValueError
        If *density* is negative or an energy is non-positive.
    """
    if not (math.isfinite(density) and density >= 0):
        raise ValueError(f"density must be a non-negative number, got {density!r}")
    db = resolve_db(db)
    kind = CrossSectionKind.coerce(kind)
    fractions = mass_fractions(formula, db=db)
    log_energy = elam_log_energies(energies)

    total = np.zeros(log_energy.shape, dtype="f8")
    for symbol, fraction in fractions.items():
        total += fraction * evaluate_kind(db, symbol, log_energy, kind)
    return total * density


def material_mu(
    name: str,
    energies,
    density: float | None = None,
    kind: CrossSectionKind | str = CrossSectionKind.TOTAL,
    *,
    db: XrayDB | None = None,
) -> np.ndarray:
    """Linear attenuation coefficient of a named material or formula, 1/cm

    A known material name stands for its formula.  Without *density*,
    the density of the named material is used.

    Raises
    ------
    UnknownMaterial
        If *density* is omitted and *name* matches no named material.

    Examples
    --------
    >>> mu = material_mu("water", 10000.0)
    >>> 4 < mu[0] < 6
    True
    """
    material = find_material(name)
    if density is None:
        if material is None:
            raise UnknownMaterial(name)
        density = material.density
    formula = material.formula if material is not None else name
    logger.debug("material_mu: %r -> formula %r, density %g", name, formula, density)
    return material_cross_section(formula, energies, density, kind, db=db)


def xray_delta_beta(
    formula: str,
    density: float,
    energy: float,
    *,
    db: XrayDB | None = None,
) -> tuple[float, float, float]:
    """Refractive index decrement, absorption index and attenuation length

    The complex index of refraction is ``n = 1 - delta - i·beta``, with
    ``f1 = Z + f'`` and ``f''`` taken from the Chantler tables.

    Parameters
    ----------
    formula : str
        Chemical formula.
    density : float
        Density in g/cm³.
    energy : float
        X-ray energy in eV.

    Returns
    -------
    tuple[float, float, float]
        ``(delta, beta, attenuation_length_cm)``; the length is
        infinite when beta is zero.
    """
    if not energy > 0:
        raise ValueError(f"energy must be positive, got {energy!r}")
    db = resolve_db(db)
    weights = _formula_weights(formula, db)
    total_weight = sum(w for _, w in weights.values())

    sum_f1 = 0.0
    sum_f2 = 0.0
    for symbol, (count, _) in weights.items():
        z = db.atomic_number(symbol)
        sum_f1 += count * (z + float(f1_chantler(symbol, energy, db=db)[0]))
        sum_f2 += count * float(f2_chantler(symbol, energy, db=db)[0])

    wavelength = 1.0e-7 * PLANCK_HC / energy
    prefactor = (
        R_ELECTRON_CM * wavelength**2 * density * AVOGADRO
        / (2.0 * math.pi * total_weight)
    )
    delta = prefactor * sum_f1
    beta = prefactor * sum_f2
    atlen = wavelength / (4.0 * math.pi * beta) if beta > 0 else math.inf
    return delta, beta, atlen
