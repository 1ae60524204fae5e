#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Physical constants, numeric limits, and the named-material table

Physical constants are taken from NIST CODATA 2018 [1]_.  The material
table maps lower-case material names to ``(formula, density)`` pairs so
that look-ups by name are O(1).

References
----------
.. [1] NIST, "The 2018 CODATA Recommended Values of the Fundamental
   Physical Constants", https://physics.nist.gov/cuu/pdf/wallet_2018.pdf
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Physical constants  (NIST CODATA 2018)
# ---------------------------------------------------------------------------

AVOGADRO: float = 6.02214076e23
"""Avogadro constant N_A (1/mol, exact by SI definition)."""

PLANCK_HC: float = 1239.84193
"""Planck constant times speed of light h·c (eV·nm)."""

PLANCK_HC_ANGSTROM: float = 12398.4193
"""Planck constant times speed of light h·c (eV·Å)."""

R_ELECTRON_CM: float = 2.8179403262e-13
"""Classical electron radius r_e (cm)."""

R_ELECTRON_ANG: float = 2.8179403262e-5
"""Classical electron radius r_e (Å)."""

ELEMENTARY_CHARGE: float = 1.602176634e-19
"""Elementary charge e (C, exact by SI definition)."""


# ---------------------------------------------------------------------------
# Numeric limits
# ---------------------------------------------------------------------------

ELAM_ENERGY_MIN: float = 100.0
"""Lowest energy (eV) covered by the Elam tables; queries are clamped to it."""

ELAM_ENERGY_MAX: float = 800_000.0
"""Highest energy (eV) covered by the Elam tables; queries are clamped to it."""

CHANTLER_ENERGY_MAX: float = 1.0e6
"""Upper clamp (eV) for Chantler queries, applied below the table maximum."""

VALUE_FLOOR: float = 1.0e-99
"""Stand-in for zero or negative table values before a log transform."""


# ---------------------------------------------------------------------------
# Named materials  (name -> (formula, density in g/cm³))
# ---------------------------------------------------------------------------

MATERIALS: dict[str, tuple[str, float]] = {
    # Gases
    "hydrogen":            ("H", 0.0000899),
    "helium":              ("He", 0.0001786),
    "nitrogen":            ("N", 0.00125),
    "oxygen":              ("O", 0.001429),
    "neon":                ("Ne", 0.0009002),
    "argon":               ("Ar", 0.001784),
    "krypton":             ("Kr", 0.003749),
    "xenon":               ("Xe", 0.005894),
    "air":                 ("(N2)0.7808(O2)0.2095Ar9.34e-3(CO2)4.1e-4Ne1.82e-5"
                            "He5.24e-6(CH4)1.8e-6Kr1.0e-6(H2)0.5e-6Xe9.e-8", 0.001225),
    "methane":             ("CH4", 0.000657),
    "carbon dioxide":      ("CO2", 0.001562),
    # Solvents
    "water":               ("H2O", 1.0),
    "ethanol":             ("C2H5OH", 0.789),
    "acetone":             ("C3H6O", 0.785),
    "methanol":            ("CH3OH", 0.791),
    "isopropanol":         ("C3H8O", 0.803),
    "toluene":             ("C7H8", 0.867),
    "xylene":              ("C6H4(CH3)2", 0.844),
    "benzene":             ("C6H6", 0.877),
    "butanol":             ("C4H10O", 0.810),
    "chlorobenzene":       ("C6H5Cl", 1.106),
    "cyclohexane":         ("C6H12", 0.774),
    "dimethyl sulfoxide":  ("C2H6OS", 1.09),
    "ethylene glycol":     ("C2H6O2", 1.115),
    "glycerin":            ("C3H8O3", 1.261),
    "heptane":             ("C7H16", 0.684),
    "hexane":              ("C6H14", 0.659),
    # Polymers
    "kapton":              ("C22H10N2O5", 1.42),
    "polyimide":           ("C22H10N2O5", 1.42),
    "polypropylene":       ("C3H6", 0.86),
    "pmma":                ("C5H8O2", 1.18),
    "polycarbonate":       ("C16H14O3", 1.2),
    "kimol":               ("C16H14O3", 1.2),
    "mylar":               ("C10H8O4", 1.4),
    "teflon":              ("C2F4", 2.2),
    "parylene-c":          ("C8H7Cl", 1.29),
    "parylene-n":          ("C8H8", 1.11),
    "peek":                ("C19H14O3", 1.32),
    # Ceramics and minerals
    "boron nitride":       ("BN", 2.1),
    "cubic boron nitride": ("BN", 3.45),
    "silicon nitride":     ("Si3N4", 3.17),
    "yag":                 ("Y3Al5O12", 4.56),
    "sapphire":            ("Al2O3", 4.0),
    "ule glass":           ("Si0.925Ti0.075O2", 2.205),
    "zerodur":             ("Si0.56Al0.5P0.16Li0.04Ti0.02Zr0.02Zn0.03O2.46", 2.53),
    "fluorite":            ("CaF2", 3.18),
    "mica":                ("KAl3Si3O12H2", 2.83),
    "fayalite":            ("Fe2SiO4", 4.392),
    "forsterite":          ("Mg2SiO4", 3.27),
    "wustite":             ("FeO", 5.7),
    "hematite":            ("Fe2O3", 5.26),
    "magnetite":           ("Fe3O4", 5.17),
    "salt":                ("NaCl", 2.165),
    "silica":              ("SiO2", 2.2),
    "quartz":              ("SiO2", 2.65),
    "cristobalite":        ("SiO2", 2.27),
    "rutile":              ("TiO2", 4.23),
    "magnesium oxide":     ("MgO", 3.6),
    "galena":              ("PbS", 7.60),
    # Semiconductors
    "cadmium telluride":   ("CdTe", 5.85),
    "gallium arsenide":    ("GaAs", 5.318),
    # Metals and elements
    "beryllium copper":    ("Cu0.98Be0.02", 8.4),
    "diamond carbon":      ("C", 3.52),
    "graphite carbon":     ("C", 2.23),
    "beryllium":           ("Be", 1.85),
    "aluminum":            ("Al", 2.70),
    "silicon":             ("Si", 2.329),
    "titanium":            ("Ti", 4.506),
    "chromium":            ("Cr", 7.15),
    "iron":                ("Fe", 7.88),
    "cobalt":              ("Co", 8.90),
    "nickel":              ("Ni", 8.908),
    "copper":              ("Cu", 8.96),
    "zinc":                ("Zn", 7.14),
    "gallium":             ("Ga", 5.91),
    "germanium":           ("Ge", 5.323),
    "molybdenum":          ("Mo", 10.28),
    "ruthenium":           ("Ru", 12.45),
    "rhodium":             ("Rh", 12.41),
    "palladium":           ("Pd", 12.02),
    "silver":              ("Ag", 10.49),
    "indium":              ("In", 7.31),
    "tin":                 ("Sn", 7.265),
    "tantalum":            ("Ta", 16.69),
    "tungsten":            ("W", 19.25),
    "rhenium":             ("Re", 21.02),
    "osmium":              ("Os", 22.59),
    "iridium":             ("Ir", 22.56),
    "platinum":            ("Pt", 21.45),
    "gold":                ("Au", 19.3),
    "mercury":             ("Hg", 13.534),
    "lead":                ("Pb", 11.34),
    "bismuth":             ("Bi", 9.78),
    "uranium":             ("U", 19.1),
    "zirconium":           ("Zr", 6.5),
}
"""Common materials: lower-case name → (chemical formula, density g/cm³)."""
