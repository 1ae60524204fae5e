#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared pytest fixtures for PyXrayDB tests

Provides a small synthetic dataset whose tables are exact power laws,
so interpolated values can be checked analytically, plus the shared
handle over the bundled dataset.
"""

from __future__ import annotations

import numpy as np
import pytest

from pyxraydb.database import XrayDB, get_database
from pyxraydb.models.records import (
    ChantlerRecord,
    ComptonTable,
    CoreWidthRecord,
    CosterKronigRecord,
    ElementRecord,
    IonizationPotential,
    PhotoabsorptionRecord,
    ScatteringRecord,
    SegmentedTable,
    TableSegment,
    WaasmaierRecord,
    XrayDataset,
    XrayLevel,
    XrayTransition,
)

FE_K_EDGE = 7112.0
"""Iron K edge of the synthetic dataset (eV)."""


def power_law(energy, scale: float, exponent: float, ref: float = 1000.0) -> np.ndarray:
    """``scale * (energy / ref) ** exponent``"""
    return scale * (np.asarray(energy, dtype="f8") / ref) ** exponent


def _single(energy, values) -> SegmentedTable:
    return SegmentedTable((TableSegment(energy, values),))


@pytest.fixture
def sample_dataset() -> XrayDataset:
    """Synthetic dataset: H, O and Fe with tables, Cu without

    Compton energies are linear in the incident energy so that
    interpolated values are exact.
    """
    grid = np.array([100.0, 1000.0, 10000.0, 100000.0, 800000.0])
    fe_low = np.array([100.0, 706.8, 1000.0, 3000.0, FE_K_EDGE])
    fe_high = np.array([FE_K_EDGE, 10000.0, 50000.0, 800000.0])

    fe_photo = SegmentedTable((
        TableSegment(fe_low, power_law(fe_low, 5000.0, -2.5)),
        TableSegment(fe_high, power_law(fe_high, 40000.0, -2.5), edge="K"),
    ))

    chantler_e = np.array([1000.0, 5000.0, 10000.0, 20000.0])
    compton_e = np.array([10.0, 1000.0, 10000.0, 100000.0])
    return XrayDataset(
        version={"tag": "synthetic", "date": "2026-01-01", "notes": "test fixture"},
        elements=(
            ElementRecord(1, "H", "hydrogen", 1.008, 0.0000899),
            ElementRecord(8, "O", "oxygen", 16.0, 0.001429),
            ElementRecord(26, "Fe", "iron", 55.845, 7.874),
            ElementRecord(29, "Cu", "copper", 63.546, None),
        ),
        xray_levels=(
            XrayLevel("O", "K", 543.1, 0.0083, 19.6),
            XrayLevel("Fe", "K", FE_K_EDGE, 0.35, 7.7),
            XrayLevel("Fe", "L3", 706.8, 0.0063, 3.05),
        ),
        photoabsorption=(
            PhotoabsorptionRecord("H", _single(grid, power_law(grid, 10.0, -3.0))),
            PhotoabsorptionRecord("O", _single(grid, power_law(grid, 4000.0, -2.8))),
            PhotoabsorptionRecord("Fe", fe_photo),
        ),
        scattering=(
            ScatteringRecord(
                "H",
                _single(grid, power_law(grid, 0.4, -1.0)),
                _single(grid, np.full(grid.shape, 0.3)),
            ),
            ScatteringRecord(
                "O",
                _single(grid, power_law(grid, 2.0, -1.0)),
                _single(grid, np.full(grid.shape, 0.15)),
            ),
            ScatteringRecord(
                "Fe",
                _single(grid, power_law(grid, 8.0, -1.0)),
                _single(grid, np.full(grid.shape, 0.1)),
            ),
        ),
        chantler=(
            ChantlerRecord(
                element="Fe",
                density=7.874,
                energy=chantler_e,
                f1=np.array([-1.0, -2.0, -0.5, -0.2]),
                f2=power_law(chantler_e, 8.0, -2.0),
                mu_photo=power_law(chantler_e, 9000.0, -2.5),
                mu_incoh=np.full(chantler_e.shape, 0.1),
                mu_total=power_law(chantler_e, 9000.0, -2.5) + 0.1,
            ),
        ),
        waasmaier=(
            WaasmaierRecord(8, "O", "O", 0.25, [3.0, 2.0, 1.5, 0.75, 0.5], [13.0, 5.0, 0.3, 30.0, 0.1]),
            WaasmaierRecord(26, "Fe", "Fe", 1.0, [12.0, 7.0, 4.0, 1.5, 0.5], [4.0, 0.3, 15.0, 60.0, 0.1]),
            WaasmaierRecord(26, "Fe", "Fe3+", 1.0, [11.0, 6.0, 3.0, 1.5, 0.5], [4.0, 0.3, 15.0, 60.0, 0.1]),
        ),
        xray_transitions=(
            XrayTransition("Fe", "Ka1", "K-L3", "K", "L3", 6405.2, 0.58),
            XrayTransition("Fe", "Ka2", "K-L2", "K", "L2", 6392.1, 0.29),
            XrayTransition("Fe", "Kb1", "K-M3", "K", "M3", 7059.3, 0.07),
            XrayTransition("Fe", "La1", "L3-M5", "L3", "M5", 704.8, 0.9),
            XrayTransition("Fe", "Ln", "L2-M1", "L2", "M1", 628.6, 0.1),
            XrayTransition("O", "Ka", "K-L2,3", "K", "L2,3", 524.9, 1.0),
        ),
        coster_kronig=(
            CosterKronigRecord("Fe", "L1", "L2", 0.3, 0.3),
            CosterKronigRecord("Fe", "L1", "L3", 0.57, 0.696),
            CosterKronigRecord("Fe", "L2", "L3", 0.42, 0.42),
        ),
        core_widths=(
            CoreWidthRecord(26, "Fe", "K", 1.25),
            CoreWidthRecord(26, "Fe", "L3", 0.36),
        ),
        ionization_potentials=(
            IonizationPotential("oxygen", 30.8),
            IonizationPotential("O2", 30.8),
        ),
        compton=ComptonTable(
            incident=compton_e,
            xray_90deg=0.9 * compton_e,
            xray_mean=0.95 * compton_e,
            electron_mean=0.05 * compton_e,
        ),
    )


@pytest.fixture
def sample_db(sample_dataset: XrayDataset) -> XrayDB:
    """Private handle over :func:`sample_dataset`"""
    return XrayDB(sample_dataset, source="synthetic")


@pytest.fixture(scope="session")
def db() -> XrayDB:
    """Shared handle over the bundled dataset"""
    return get_database()
