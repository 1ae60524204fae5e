#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for compound and named-material attenuation

Covers mass fractions, Bragg's additivity rule, strict handling of
unknown constituents, degenerate formulas, the named-material table,
and the refractive index.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from pyxraydb.cross_sections import CrossSectionKind, cross_section
from pyxraydb.database import XrayDB
from pyxraydb.exceptions import (
    EmptyFormula,
    InvalidFormula,
    UnknownElement,
    UnknownMaterial,
    UnsupportedCrossSection,
    ZeroWeightFormula,
)
from pyxraydb.materials import (
    find_material,
    formula_weight,
    get_materials,
    mass_fractions,
    material_cross_section,
    material_mu,
    xray_delta_beta,
)
from pyxraydb.scattering import f1_chantler, f2_chantler


class TestMassFractions:
    """Step 4 of the aggregation"""

    @pytest.mark.parametrize(
        "formula",
        ["H2O", "Fe2O3", "SiO2", "Ca(NO3)2", "C22H10N2O5", "(N2)0.78(O2)0.21Ar0.01", "Fe.7Cu.3"],
    )
    def test_sum_to_one(self, db: XrayDB, formula: str) -> None:
        fractions = mass_fractions(formula, db=db)
        assert math.fsum(fractions.values()) == pytest.approx(1.0, abs=1e-9)

    def test_water(self, sample_db: XrayDB) -> None:
        fractions = mass_fractions("H2O", db=sample_db)
        total = 2 * 1.008 + 16.0
        assert fractions["H"] == pytest.approx(2 * 1.008 / total)
        assert fractions["O"] == pytest.approx(16.0 / total)

    def test_repeated_element_merged(self, sample_db: XrayDB) -> None:
        assert mass_fractions("HOH", db=sample_db) == pytest.approx(mass_fractions("H2O", db=sample_db))

    def test_deuterium_counts_as_hydrogen(self, sample_db: XrayDB) -> None:
        assert mass_fractions("D2O", db=sample_db) == pytest.approx(mass_fractions("H2O", db=sample_db))

    def test_formula_weight(self, sample_db: XrayDB) -> None:
        assert formula_weight("Fe2O3", db=sample_db) == pytest.approx(2 * 55.845 + 3 * 16.0)

    def test_unknown_constituent(self, db: XrayDB) -> None:
        with pytest.raises(UnknownElement) as excinfo:
            mass_fractions("Xx2O", db=db)
        assert excinfo.value.identifier == "Xx"

    def test_zero_weight(self, sample_db: XrayDB) -> None:
        with pytest.raises(ZeroWeightFormula):
            mass_fractions("Fe0O0", db=sample_db)

    def test_empty(self, sample_db: XrayDB) -> None:
        with pytest.raises(EmptyFormula):
            mass_fractions("", db=sample_db)

    def test_malformed(self, sample_db: XrayDB) -> None:
        with pytest.raises(InvalidFormula):
            mass_fractions("Fe2(O3", db=sample_db)


class TestMaterialCrossSection:
    """Bragg's additivity rule"""

    def test_hematite_scenario(self, db: XrayDB) -> None:
        out = material_cross_section("Fe2O3", [10000.0], 5.26, CrossSectionKind.TOTAL, db=db)
        fe_mass, o_mass = db.molar_mass("Fe"), db.molar_mass("O")
        total = 2 * fe_mass + 3 * o_mass
        expected = 5.26 * (
            (2 * fe_mass / total) * cross_section("Fe", [10000.0], db=db)[0]
            + (3 * o_mass / total) * cross_section("O", [10000.0], db=db)[0]
        )
        assert out.shape == (1,)
        assert out[0] == pytest.approx(expected, rel=1e-12)

    def test_hematite_reference_values(self, db: XrayDB) -> None:
        assert mass_fractions("Fe2O3", db=db)["Fe"] == pytest.approx(0.699431, rel=1e-5)
        mass_mu = material_cross_section("Fe2O3", [10000.0], 1.0, db=db)[0]
        assert mass_mu == pytest.approx(121.17585, rel=1e-3)
        assert material_mu("hematite", [10000.0], db=db)[0] == pytest.approx(637.385, rel=1e-3)

    def test_unknown_constituent_is_never_zero(self, db: XrayDB) -> None:
        with pytest.raises(UnknownElement):
            material_cross_section("Xx2O", [10000.0], 1.0, CrossSectionKind.TOTAL, db=db)

    def test_scales_with_density(self, sample_db: XrayDB) -> None:
        one = material_cross_section("H2O", [5000.0, 20000.0], 1.0, db=sample_db)
        two = material_cross_section("H2O", [5000.0, 20000.0], 2.0, db=sample_db)
        np.testing.assert_allclose(two, 2.0 * one)

    def test_element_equals_cross_section(self, sample_db: XrayDB) -> None:
        energies = [800.0, 7112.0, 40000.0]
        np.testing.assert_allclose(
            material_cross_section("Fe", energies, 1.0, "photo", db=sample_db),
            cross_section("Fe", energies, "photo", db=sample_db),
        )

    def test_empty_energies(self, sample_db: XrayDB) -> None:
        assert material_cross_section("H2O", [], 1.0, db=sample_db).shape == (0,)

    def test_constituent_without_table(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnsupportedCrossSection):
            material_cross_section("CuO", [1000.0], 6.3, db=sample_db)

    def test_negative_density(self, sample_db: XrayDB) -> None:
        with pytest.raises(ValueError):
            material_cross_section("H2O", [1000.0], -1.0, db=sample_db)


class TestNamedMaterials:
    """The named-material table"""

    def test_find_by_name(self) -> None:
        water = find_material("  Water ")
        assert water is not None
        assert (water.formula, water.density) == ("H2O", 1.0)

    def test_find_by_formula(self) -> None:
        found = find_material("sio2")
        assert found is not None
        assert found.formula == "SiO2"

    def test_not_found(self) -> None:
        assert find_material("unobtainium") is None

    def test_get_materials(self) -> None:
        materials = get_materials()
        assert materials["kapton"].formula == "C22H10N2O5"
        assert all(m.density > 0 for m in materials.values())

    def test_material_mu_uses_table_density(self, db: XrayDB) -> None:
        np.testing.assert_allclose(
            material_mu("water", [10000.0], db=db),
            material_cross_section("H2O", [10000.0], 1.0, db=db),
        )

    def test_material_mu_explicit_density(self, db: XrayDB) -> None:
        np.testing.assert_allclose(
            material_mu("water", [10000.0], 2.0, db=db),
            material_cross_section("H2O", [10000.0], 2.0, db=db),
        )

    def test_material_mu_formula_with_density(self, db: XrayDB) -> None:
        np.testing.assert_allclose(
            material_mu("Fe2O3", [10000.0], 5.0, db=db),
            material_cross_section("Fe2O3", [10000.0], 5.0, db=db),
        )

    def test_material_mu_unknown_without_density(self, db: XrayDB) -> None:
        with pytest.raises(UnknownMaterial) as excinfo:
            material_mu("FeSi7", [10000.0], db=db)
        assert excinfo.value.name == "FeSi7"


class TestDeltaBeta:
    """Refractive index from the Chantler tables"""

    def test_matches_closed_form(self, sample_db: XrayDB) -> None:
        energy = 10000.0
        delta, beta, atlen = xray_delta_beta("Fe", 7.874, energy, db=sample_db)
        f1 = 26 + f1_chantler("Fe", energy, db=sample_db)[0]
        f2 = f2_chantler("Fe", energy, db=sample_db)[0]
        wavelength = 1.0e-7 * 1239.84193 / energy
        prefactor = 2.8179403262e-13 * wavelength**2 * 7.874 * 6.02214076e23 / (2 * math.pi * 55.845)
        assert delta == pytest.approx(prefactor * f1)
        assert beta == pytest.approx(prefactor * f2)
        assert atlen == pytest.approx(wavelength / (4 * math.pi * beta))

    def test_bundled_silicon(self, db: XrayDB) -> None:
        delta, beta, atlen = xray_delta_beta("Si", 2.33, 10000.0, db=db)
        assert 1e-6 < delta < 1e-5
        assert 0 < beta < delta
        assert atlen > 0

    def test_unknown_constituent(self, db: XrayDB) -> None:
        with pytest.raises(UnknownElement):
            xray_delta_beta("Xx2O", 1.0, 10000.0, db=db)

    def test_missing_chantler(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnsupportedCrossSection):
            xray_delta_beta("H2O", 1.0, 10000.0, db=sample_db)
