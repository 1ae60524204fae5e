#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for Chantler factors and the Waasmaier-Kirfel f0
"""

from __future__ import annotations

import numpy as np
import pytest

from pyxraydb.database import XrayDB
from pyxraydb.exceptions import UnknownElement, UnknownIon, UnsupportedCrossSection
from pyxraydb.scattering import (
    ChantlerKind,
    chantler_energies,
    f0,
    f0_ions,
    f1_chantler,
    f2_chantler,
    mu_chantler,
)

from conftest import power_law


class TestChantler:
    """Chantler tables on the synthetic iron entry"""

    def test_f1_is_linear(self, sample_db: XrayDB) -> None:
        out = f1_chantler("Fe", [3000.0, 7500.0], db=sample_db)
        np.testing.assert_allclose(out, [-1.5, -1.25])

    def test_f1_exact_at_table_points(self, sample_db: XrayDB) -> None:
        out = f1_chantler("Fe", [1000.0, 5000.0, 10000.0, 20000.0], db=sample_db)
        np.testing.assert_array_equal(out, [-1.0, -2.0, -0.5, -0.2])

    def test_f1_clamped(self, sample_db: XrayDB) -> None:
        out = f1_chantler("Fe", [100.0, 5.0e5], db=sample_db)
        np.testing.assert_array_equal(out, [-1.0, -0.2])

    def test_f2_is_loglog(self, sample_db: XrayDB) -> None:
        energies = np.array([1500.0, 2000.0, 12000.0])
        np.testing.assert_allclose(
            f2_chantler("Fe", energies, db=sample_db), power_law(energies, 8.0, -2.0), rtol=1e-10
        )

    def test_f2_clamped(self, sample_db: XrayDB) -> None:
        low, high = f2_chantler("Fe", [10.0, 1.0e8], db=sample_db)
        assert low == pytest.approx(8.0)
        assert high == pytest.approx(power_law(20000.0, 8.0, -2.0))

    def test_mu_photo(self, sample_db: XrayDB) -> None:
        out = mu_chantler("Fe", [3000.0], ChantlerKind.PHOTO, db=sample_db)
        assert out[0] == pytest.approx(power_law(3000.0, 9000.0, -2.5))

    def test_mu_incoherent(self, sample_db: XrayDB) -> None:
        np.testing.assert_allclose(mu_chantler("Fe", [2000.0, 15000.0], "incoh", db=sample_db), 0.1)

    def test_mu_total_default(self, sample_db: XrayDB) -> None:
        out = mu_chantler("iron", [1000.0, 3000.0], db=sample_db)
        assert out[0] == pytest.approx(9000.1)
        assert power_law(5000.0, 9000.0, -2.5) + 0.1 < out[1] < 9000.1

    def test_kind_strings(self) -> None:
        assert ChantlerKind.coerce("Photo") is ChantlerKind.PHOTO
        with pytest.raises(ValueError):
            ChantlerKind.coerce("coh")

    def test_chantler_energies(self, sample_db: XrayDB) -> None:
        np.testing.assert_array_equal(
            chantler_energies("Fe", 2000.0, 15000.0, db=sample_db), [5000.0, 10000.0]
        )
        assert chantler_energies("Fe", db=sample_db).size == 4

    def test_missing_table(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnsupportedCrossSection) as excinfo:
            f2_chantler("O", [1000.0], db=sample_db)
        assert excinfo.value.kind == "Chantler"

    def test_unknown_element(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownElement):
            f1_chantler("Zz", [1000.0], db=sample_db)

    def test_bundled_silicon_f2_positive(self, db: XrayDB) -> None:
        energies = np.geomspace(200.0, 50000.0, 30)
        assert np.all(f2_chantler("Si", energies, db=db) > 0)


class TestF0:
    """Closed-form elastic scattering factor"""

    @pytest.mark.parametrize("ion, expected", [("Fe", 26.0), ("Fe3+", 23.0), ("O", 8.0)])
    def test_forward_scattering(self, sample_db: XrayDB, ion: str, expected: float) -> None:
        assert f0(ion, 0.0, db=sample_db)[0] == pytest.approx(expected)

    def test_vectorized_and_decreasing(self, sample_db: XrayDB) -> None:
        q = np.linspace(0.0, 2.0, 21)
        out = f0("Fe", q, db=sample_db)
        assert out.shape == q.shape
        assert np.all(np.diff(out) < 0)

    def test_tends_to_offset(self, sample_db: XrayDB) -> None:
        assert f0("O", 50.0, db=sample_db)[0] == pytest.approx(0.25)

    def test_matches_formula(self, sample_db: XrayDB) -> None:
        q = 0.3
        scale = np.array([11.0, 6.0, 3.0, 1.5, 0.5])
        exponents = np.array([4.0, 0.3, 15.0, 60.0, 0.1])
        expected = 1.0 + np.sum(scale * np.exp(-exponents * q * q))
        assert f0("Fe3+", [q], db=sample_db)[0] == pytest.approx(expected)

    def test_element_identifiers(self, sample_db: XrayDB) -> None:
        assert f0(26, 0.0, db=sample_db)[0] == f0("iron", 0.0, db=sample_db)[0]

    def test_unknown_ion(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownIon):
            f0("Fe5+", 0.0, db=sample_db)

    def test_unknown_base_element(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownElement):
            f0("Qq2-", 0.0, db=sample_db)

    def test_f0_ions(self, sample_db: XrayDB) -> None:
        assert f0_ions("Fe", db=sample_db) == ["Fe", "Fe3+"]

    def test_bundled_iron(self, db: XrayDB) -> None:
        assert f0("Fe", 0.0, db=db)[0] == pytest.approx(26.0, abs=0.05)
        assert "Fe3+" in f0_ions("Fe", db=db)
