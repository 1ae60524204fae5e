#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyXrayDB - X-ray reference data for elements and compounds

Look up tabulated X-ray interaction data (Elam photoabsorption and
scattering, Chantler anomalous scattering factors, Waasmaier-Kirfel
elastic form factors, absorption edges, emission lines) for elements,
and combine it into attenuation coefficients for compounds and named
materials.

The reference tables are loaded once, on first use, into a shared
read-only handle (:func:`get_database`).  Set ``PYXRAYDB_DATASET`` to
load a different dataset file, or build a private handle with
:func:`load_database` and pass it as ``db=``.

Modules
-------
database
    Indexed dataset handle and element resolution.
cross_sections
    Elemental mass attenuation by kind.
materials
    Compound attenuation, mass fractions, named materials, refractive index.
scattering
    Chantler f', f'', μ/ρ and Waasmaier-Kirfel f0.
edges
    Absorption-edge look-ups.
transitions
    Emission lines, core-level widths and Coster-Kronig probabilities.
ionchamber
    Ionization potentials, Compton energies and ion-chamber fluxes.
readers
    Dataset readers (bundled JSON, HDF5).
converters
    HDF5 export.
utils
    Interpolation kernels, formula parser, validation and constants.

Examples
--------
>>> from pyxraydb import cross_section, material_cross_section
>>> cross_section("Fe", [10000.0])            # doctest: +SKIP
array([...])
>>> material_cross_section("Fe2O3", [10000.0], 5.26)   # doctest: +SKIP
array([...])
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Melek Derman"

from pyxraydb.converters.hdf5 import export_hdf5
from pyxraydb.cross_sections import CrossSectionKind, cross_section, mu_elam
from pyxraydb.database import XrayDB, get_database, load_database
from pyxraydb.edges import XrayEdge, guess_edge, xray_edge, xray_edges
from pyxraydb.exceptions import (
    ConversionError,
    EmptyFormula,
    FileFormatError,
    FormulaError,
    InvalidFormula,
    PyXrayDBError,
    UnknownEdge,
    UnknownElement,
    UnknownGas,
    UnknownIon,
    UnknownMaterial,
    UnsupportedCrossSection,
    ValidationError,
    ZeroWeightFormula,
)
from pyxraydb.ionchamber import (
    ComptonEnergies,
    IonChamberFluxes,
    compton_energies,
    ionchamber_fluxes,
    ionization_potential,
)
from pyxraydb.materials import (
    Material,
    find_material,
    formula_weight,
    get_materials,
    mass_fractions,
    material_cross_section,
    material_mu,
    xray_delta_beta,
)
from pyxraydb.scattering import (
    ChantlerKind,
    chantler_energies,
    f0,
    f0_ions,
    f1_chantler,
    f2_chantler,
    mu_chantler,
)
from pyxraydb.transitions import XrayLine, ck_probability, core_width, xray_line, xray_lines
from pyxraydb.utils.chemparser import chemparse
from pyxraydb.utils.interpolation import interpolate

__all__ = [
    # Version
    "__version__",
    # Database
    "XrayDB",
    "get_database",
    "load_database",
    # Elemental data
    "CrossSectionKind",
    "cross_section",
    "mu_elam",
    "ChantlerKind",
    "chantler_energies",
    "f0",
    "f0_ions",
    "f1_chantler",
    "f2_chantler",
    "mu_chantler",
    "XrayEdge",
    "guess_edge",
    "xray_edge",
    "xray_edges",
    "XrayLine",
    "xray_line",
    "xray_lines",
    "core_width",
    "ck_probability",
    # Materials
    "Material",
    "chemparse",
    "find_material",
    "formula_weight",
    "get_materials",
    "mass_fractions",
    "material_cross_section",
    "material_mu",
    "xray_delta_beta",
    # Ion chambers
    "ComptonEnergies",
    "IonChamberFluxes",
    "compton_energies",
    "ionchamber_fluxes",
    "ionization_potential",
    # Numerics
    "interpolate",
    # Export
    "export_hdf5",
    # Exceptions
    "PyXrayDBError",
    "FileFormatError",
    "ValidationError",
    "ConversionError",
    "UnknownElement",
    "UnknownIon",
    "UnknownEdge",
    "UnsupportedCrossSection",
    "UnknownMaterial",
    "UnknownGas",
    "FormulaError",
    "InvalidFormula",
    "EmptyFormula",
    "ZeroWeightFormula",
]
