#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the interpolation kernels

Covers exactness at table points, bracketing, power-law reproduction,
extrapolation, zero-value flooring, and segmented tables.
"""

from __future__ import annotations

import numpy as np
import pytest

from pyxraydb.models.records import SegmentedTable, TableSegment
from pyxraydb.utils.constants import VALUE_FLOOR
from pyxraydb.utils.interpolation import (
    as_energy_array,
    clamp_log_energies,
    interpolate,
    linear_interpolate,
    loglog_interpolate,
)

XP = np.array([100.0, 300.0, 1000.0, 5000.0, 20000.0])
FP = np.array([900.0, 120.0, 15.0, 0.9, 0.07])


class TestInterpolate:
    """Tests for :func:`interpolate`"""

    def test_exact_at_table_points(self) -> None:
        for e, v in zip(XP, FP):
            assert interpolate([e], XP, FP)[0] == v

    def test_all_points_at_once(self) -> None:
        np.testing.assert_array_equal(interpolate(XP, XP, FP), FP)

    def test_empty_query(self) -> None:
        out = interpolate([], XP, FP)
        assert isinstance(out, np.ndarray)
        assert out.size == 0

    def test_scalar_query(self) -> None:
        out = interpolate(1000.0, XP, FP)
        assert out.shape == (1,)
        assert out[0] == 15.0

    def test_values_between_brackets(self) -> None:
        queries = np.array([150.0, 500.0, 2500.0, 10000.0])
        out = interpolate(queries, XP, FP)
        idx = np.searchsorted(XP, queries)
        for value, k in zip(out, idx):
            lo, hi = sorted((FP[k - 1], FP[k]))
            assert lo <= value <= hi

    def test_power_law_is_reproduced(self) -> None:
        xp = np.array([10.0, 100.0, 1000.0])
        fp = 3.0 * xp**-2.5
        queries = np.array([20.0, 55.0, 420.0])
        np.testing.assert_allclose(interpolate(queries, xp, fp), 3.0 * queries**-2.5, rtol=1e-12)

    def test_extrapolates_with_edge_slope(self) -> None:
        xp = np.array([10.0, 100.0, 1000.0])
        fp = np.array([1.0, 0.1, 0.001])
        # first interval slope is -1, last is -2
        assert interpolate([1.0], xp, fp)[0] == pytest.approx(10.0)
        assert interpolate([10000.0], xp, fp)[0] == pytest.approx(1.0e-5)

    def test_zero_values_are_floored(self) -> None:
        xp = np.array([1.0, 10.0, 100.0])
        fp = np.array([1.0, 0.0, 1.0])
        out = interpolate([10.0, 5.0], xp, fp)
        assert out[0] == 0.0
        assert np.all(np.isfinite(out))
        assert out[1] >= 0.0

    def test_single_point_table(self) -> None:
        np.testing.assert_array_equal(interpolate([1.0, 50.0], [10.0], [4.0]), [4.0, 4.0])

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="equal length"):
            interpolate([1.0], [1.0, 2.0], [1.0])

    def test_empty_table_raises(self) -> None:
        with pytest.raises(ValueError, match="empty table"):
            interpolate([1.0], [], [])

    @pytest.mark.parametrize(
        "energies",
        [[1.0, 3.0, 2.0], [1.0, 2.0, 2.0], [3.0, 2.0, 1.0]],
    )
    def test_unordered_table_raises(self, energies) -> None:
        with pytest.raises(ValueError, match="strictly increasing"):
            interpolate([2.0], energies, [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("bad", [0.0, -5.0, np.nan, np.inf])
    def test_invalid_query_energy_raises(self, bad: float) -> None:
        with pytest.raises(ValueError, match="positive"):
            interpolate([bad], XP, FP)


class TestHelpers:
    """Tests for query preparation and the linear kernel"""

    def test_as_energy_array_flattens(self) -> None:
        out = as_energy_array([[1.0, 2.0], [3.0, 4.0]])
        assert out.shape == (4,)
        assert out.dtype == np.float64

    def test_clamp_log_energies(self) -> None:
        out = clamp_log_energies([10.0, 500.0, 1.0e7], 100.0, 800000.0)
        np.testing.assert_allclose(np.exp(out), [100.0, 500.0, 800000.0])

    def test_linear_interpolate_holds_ends(self) -> None:
        out = linear_interpolate([0.0, 1.5, 9.0], [1.0, 2.0], [10.0, 20.0])
        np.testing.assert_allclose(out, [10.0, 15.0, 20.0])

    def test_loglog_uses_linear_values_on_exact_hit(self) -> None:
        xp = np.array([1.0, 10.0])
        fp = np.array([0.0, 5.0])
        log_fp = np.log(np.maximum(fp, VALUE_FLOOR))
        out = loglog_interpolate(np.log([1.0]), np.log(xp), log_fp, fp)
        assert out[0] == 0.0


class TestSegmentedTable:
    """Edge-segmented evaluation"""

    @pytest.fixture
    def table(self) -> SegmentedTable:
        return SegmentedTable((
            TableSegment([100.0, 1000.0, 7000.0], [1000.0, 10.0, 0.5]),
            TableSegment([7000.0, 10000.0, 50000.0], [4.0, 1.5, 0.02], edge="K"),
        ))

    def test_boundaries(self, table: SegmentedTable) -> None:
        np.testing.assert_array_equal(table.boundaries, [7000.0])
        assert table.edges == {"K": 7000.0}

    def test_energy_on_edge_uses_upper_segment(self, table: SegmentedTable) -> None:
        assert table.evaluate(np.log([7000.0]))[0] == 4.0

    def test_never_bridges_the_edge(self, table: SegmentedTable) -> None:
        below, above = table.evaluate(np.log([6999.0, 7001.0]))
        assert below < 0.6
        assert above > 3.9

    def test_order_is_preserved(self, table: SegmentedTable) -> None:
        energies = np.array([10000.0, 100.0, 7000.0, 1000.0])
        np.testing.assert_allclose(
            table.evaluate(np.log(energies)), [1.5, 1000.0, 4.0, 10.0]
        )

    def test_arrays_are_read_only(self, table: SegmentedTable) -> None:
        with pytest.raises(ValueError):
            table.segments[0].values[0] = 1.0
