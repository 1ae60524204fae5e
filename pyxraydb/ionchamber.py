#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Ionization chambers: gas ionization potentials, Compton energies and
photon flux from a measured chamber current

An ion chamber filled with gas absorbs part of the beam over its active
length.  The photo-electrons (and, optionally, Compton recoil
electrons) lose their energy creating ion pairs, one pair per
``ionization_potential`` eV.  The collected current, converted to a
voltage by an amplifier of known sensitivity (A/V), therefore fixes the
incident photon flux:

    flux_in = V · sensitivity · W / (q · n_carriers · E_absorbed)

with ``E_absorbed = E · A_photo + E_compton · A_incoh`` per photon and
``A_kind`` the fraction of the beam attenuated by each process.

References
----------
.. [1] G. F. Knoll, "Radiation Detection and Measurement", 4th ed.,
   Wiley (2010), Table 5.1.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Union

from pyxraydb.cross_sections import CrossSectionKind
from pyxraydb.database import XrayDB, resolve_db
from pyxraydb.exceptions import PyXrayDBError, UnknownGas, UnknownMaterial
from pyxraydb.materials import find_material, material_mu
from pyxraydb.utils.constants import ELEMENTARY_CHARGE
from pyxraydb.utils.interpolation import linear_interpolate

logger = logging.getLogger(__name__)

DEFAULT_ION_POTENTIAL: float = 32.0
"""Energy per ion pair (eV) assumed for a gas that is not tabulated."""

GasMix = Union[str, Mapping[str, float]]

# Diatomic and molecular formulas that name a gas rather than an element
_GAS_MATERIALS: dict[str, str] = {
    "h2": "hydrogen",
    "n2": "nitrogen",
    "o2": "oxygen",
    "co2": "carbon dioxide",
    "ch4": "methane",
}


@dataclass(frozen=True)
class ComptonEnergies:
    """Compton-scattered energies (eV) for one incident photon energy"""

    incident: float
    xray_90deg: float
    xray_mean: float
    electron_mean: float


@dataclass(frozen=True)
class IonChamberFluxes:
    """Photon fluxes (photons/s) through an ion chamber

    ``incident`` enters the chamber and ``transmitted`` leaves it; the
    other three are the parts absorbed or scattered by each process.
    """

    incident: float
    transmitted: float
    photo: float
    incoherent: float
    coherent: float


def ionization_potential(gas: str, *, db: XrayDB | None = None) -> float:
    """Mean energy (eV) to create one ion pair in *gas*

    Names and formulas are both tabulated (``"nitrogen"``, ``"N2"``,
    ``"argon"``, ``"Ar"``), as are the Si and Ge of PIN diodes.

    Raises
    ------
    UnknownGas
        If *gas* is not tabulated.

    Examples
    --------
    >>> ionization_potential("argon")
    26.4
    """
    return resolve_db(db).ionization_potential(gas)


def compton_energies(incident_energy: float, *, db: XrayDB | None = None) -> ComptonEnergies:
    """Energies of the photon and electron after Compton scattering

    The tabulated values are interpolated linearly in the incident
    energy and held constant beyond the table (10 eV to 1 MeV).

    Parameters
    ----------
    incident_energy : float
        Incident photon energy in eV.

    Returns
    -------
    ComptonEnergies
        Photon energy after scattering through 90°, mean scattered
        photon energy and mean recoil-electron energy.

    Raises
    ------
    ValueError
        If *incident_energy* is not positive.
    PyXrayDBError
        If the dataset carries no Compton table.
    """
    if not incident_energy > 0:
        raise ValueError(f"energy must be positive, got {incident_energy!r}")
    table = resolve_db(db).dataset.compton
    if table is None:
        raise PyXrayDBError("dataset has no Compton energy table")
    values = [
        float(linear_interpolate(incident_energy, table.incident, column))
        for column in (table.xray_90deg, table.xray_mean, table.electron_mean)
    ]
    return ComptonEnergies(float(incident_energy), *values)


def _gas_potential(db: XrayDB, gas: str, material: str) -> float:
    for name in (gas, material):
        try:
            return db.ionization_potential(name)
        except UnknownGas:
            continue
    logger.warning(
        "No ionization potential for %r; assuming %g eV", gas, DEFAULT_ION_POTENTIAL
    )
    return DEFAULT_ION_POTENTIAL


def _gas_material(gas: str) -> str:
    name = _GAS_MATERIALS.get(gas.strip().lower(), gas)
    material = find_material(name)
    if material is None:
        raise UnknownMaterial(gas)
    return material.name


def ionchamber_fluxes(
    gas: GasMix,
    volts: float,
    length: float,
    energy: float,
    sensitivity: float = 1.0e-6,
    with_compton: bool = True,
    both_carriers: bool = True,
    *,
    db: XrayDB | None = None,
) -> IonChamberFluxes:
    """Photon fluxes through an ion chamber from its output voltage

    Parameters
    ----------
    gas : str or mapping of str to float
        Fill gas, e.g. ``"nitrogen"``, or a mixture as name → fraction,
        e.g. ``{"nitrogen": 0.8, "argon": 0.2}``.  Fractions are
        normalised to sum to one.  Each name must be a named material
        (or ``"N2"``, ``"O2"``, ``"H2"``, ``"CO2"``, ``"CH4"``).
    volts : float
        Amplifier output voltage, V.
    length : float
        Active length of the chamber, cm.
    energy : float
        Photon energy, eV.
    sensitivity : float, optional
        Amplifier gain in A/V; ``1e-6`` by default.
    with_compton : bool, optional
        Count the energy deposited by Compton recoil electrons.
    both_carriers : bool, optional
        Collect both electrons and ions (two carriers per pair).

    Raises
    ------
    UnknownMaterial
        If a gas name is not a named material.
    ValueError
        If *energy* or *length* is not positive, or the mixture
        fractions do not sum to a positive number.

    Examples
    --------
    >>> flux = ionchamber_fluxes("nitrogen", 1.0, 10.0, 10000.0)
    >>> flux.incident > flux.transmitted > 0
    True
    """
    if not energy > 0:
        raise ValueError(f"energy must be positive, got {energy!r}")
    if not length > 0:
        raise ValueError(f"length must be positive, got {length!r}")
    db = resolve_db(db)
    mixture = {gas: 1.0} if isinstance(gas, str) else dict(gas)
    norm = sum(mixture.values())
    if not norm > 0:
        raise ValueError(f"gas fractions must sum to a positive number, got {norm!r}")

    kinds = (
        CrossSectionKind.PHOTO,
        CrossSectionKind.INCOHERENT,
        CrossSectionKind.COHERENT,
        CrossSectionKind.TOTAL,
    )
    mu = dict.fromkeys(kinds, 0.0)
    potential = 0.0
    for name, fraction in mixture.items():
        weight = fraction / norm
        material = _gas_material(name)
        potential += weight * _gas_potential(db, name, material)
        for kind in kinds:
            mu[kind] += weight * float(material_mu(material, energy, kind=kind, db=db)[0])

    mu_total = mu[CrossSectionKind.TOTAL]
    atten_total = 1.0 - math.exp(-length * mu_total)
    if mu_total > 0:
        atten = {kind: atten_total * mu[kind] / mu_total for kind in kinds}
    else:
        atten = dict.fromkeys(kinds, 0.0)

    compton = compton_energies(energy, db=db).electron_mean if with_compton else 0.0
    carriers = 2.0 if both_carriers else 1.0
    absorbed = carriers * (
        energy * atten[CrossSectionKind.PHOTO]
        + compton * atten[CrossSectionKind.INCOHERENT]
    )
    flux_in = 0.0
    if absorbed > 0:
        flux_in = volts * sensitivity * potential / (ELEMENTARY_CHARGE * absorbed)
    logger.debug(
        "ionchamber_fluxes(%s, E=%g): mu=%g 1/cm, W=%g eV, absorbed=%g eV",
        mixture, energy, mu_total, potential, absorbed,
    )
    return IonChamberFluxes(
        incident=flux_in,
        transmitted=flux_in * (1.0 - atten_total),
        photo=flux_in * atten[CrossSectionKind.PHOTO],
        incoherent=flux_in * atten[CrossSectionKind.INCOHERENT],
        coherent=flux_in * atten[CrossSectionKind.COHERENT],
    )
