#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for emission lines, core-level widths and Coster-Kronig probabilities

Filtering rules are checked on the synthetic tables; tabulated values
for iron are checked on the bundled tables.
"""

from __future__ import annotations

import pytest

from pyxraydb.database import XrayDB
from pyxraydb.exceptions import UnknownEdge, UnknownElement
from pyxraydb.transitions import XrayLine, ck_probability, core_width, xray_line, xray_lines


class TestXrayLines:
    """Line look-up and filtering"""

    def test_all_lines(self, sample_db: XrayDB) -> None:
        lines = xray_lines("Fe", db=sample_db)
        assert set(lines) == {"Ka1", "Ka2", "Kb1", "La1", "Ln"}
        assert lines["Ka1"] == XrayLine(6405.2, 0.58, "K", "L3")

    def test_initial_level(self, sample_db: XrayDB) -> None:
        assert set(xray_lines("Fe", "K", db=sample_db)) == {"Ka1", "Ka2", "Kb1"}

    def test_initial_levels_ignore_case(self, sample_db: XrayDB) -> None:
        lines = xray_lines("iron", ["l3", "L2"], db=sample_db)
        assert set(lines) == {"La1", "Ln"}

    def test_excitation_below_k_edge(self, sample_db: XrayDB) -> None:
        lines = xray_lines("Fe", excitation_energy=7000.0, db=sample_db)
        assert set(lines) == {"La1", "Ln"}

    def test_excitation_on_edge_keeps_lines(self, sample_db: XrayDB) -> None:
        assert "Ka1" in xray_lines("Fe", excitation_energy=7112.0, db=sample_db)

    def test_level_without_edge_is_kept(self, sample_db: XrayDB) -> None:
        # the synthetic tables have no L2 edge
        assert set(xray_lines("Fe", excitation_energy=500.0, db=sample_db)) == {"Ln"}

    def test_element_without_lines(self, sample_db: XrayDB) -> None:
        assert xray_lines("H", db=sample_db) == {}

    def test_unknown_element(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownElement):
            xray_lines("Zz", db=sample_db)

    def test_single_line(self, sample_db: XrayDB) -> None:
        assert xray_line("Fe", "ka1", db=sample_db).energy == 6405.2
        with pytest.raises(UnknownEdge):
            xray_line("Fe", "Kb5", db=sample_db)


class TestCoreWidths:
    """Natural core-level widths"""

    def test_single_edge(self, sample_db: XrayDB) -> None:
        assert core_width("Fe", "K", db=sample_db) == 1.25
        assert core_width(26, "l3", db=sample_db) == 0.36

    def test_all_edges(self, sample_db: XrayDB) -> None:
        assert core_width("Fe", db=sample_db) == {"K": 1.25, "L3": 0.36}

    def test_element_without_widths(self, sample_db: XrayDB) -> None:
        assert core_width("O", db=sample_db) == {}

    def test_missing_edge(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownEdge):
            core_width("Fe", "M5", db=sample_db)


class TestCosterKronig:
    """Coster-Kronig transition probabilities"""

    def test_total_by_default(self, sample_db: XrayDB) -> None:
        assert ck_probability("Fe", "L1", "L3", db=sample_db) == 0.696

    def test_direct(self, sample_db: XrayDB) -> None:
        assert ck_probability("Fe", "l1", "l3", total=False, db=sample_db) == 0.57

    def test_missing_pair(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownEdge):
            ck_probability("Fe", "L3", "L1", db=sample_db)
        with pytest.raises(UnknownEdge):
            ck_probability("O", "L1", "L2", db=sample_db)


class TestBundled:
    """Tabulated iron values"""

    def test_iron_k_lines(self, db: XrayDB) -> None:
        lines = xray_lines("Fe", "K", db=db)
        assert set(lines) == {"Ka1", "Ka2", "Ka3", "Kb1", "Kb3", "Kb5"}
        assert lines["Ka1"].energy == pytest.approx(6405.2)
        assert lines["Ka1"].final_level == "L3"
        assert lines["Ka2"].energy == pytest.approx(6392.1)

    def test_iron_l_lines(self, db: XrayDB) -> None:
        line = xray_line("Fe", "La1", db=db)
        assert line.energy == pytest.approx(704.8)
        assert (line.initial_level, line.final_level) == ("L3", "M5")
        assert 0.0 < line.intensity <= 1.0

    def test_iron_excitation_between_l_edges(self, db: XrayDB) -> None:
        # L1 at 844.6 eV is out of reach; L2 and L3 are not
        lines = xray_lines("Fe", excitation_energy=800.0, db=db)
        assert set(lines) == {"Ln", "Lb1", "Ll", "La1", "La2"}

    def test_no_k_lines_below_k_edge(self, db: XrayDB) -> None:
        assert xray_lines("Fe", "K", excitation_energy=2000.0, db=db) == {}

    def test_iron_widths(self, db: XrayDB) -> None:
        widths = core_width("Fe", db=db)
        assert widths["K"] == pytest.approx(1.25)
        assert widths["L1"] == pytest.approx(2.76)
        assert widths["L3"] == pytest.approx(0.36)

    def test_iron_coster_kronig(self, db: XrayDB) -> None:
        assert ck_probability("Fe", "L1", "L2", db=db) == pytest.approx(0.3)
        assert ck_probability("Fe", "L1", "L3", db=db) == pytest.approx(0.696)
        assert ck_probability("Fe", "L1", "L3", total=False, db=db) == pytest.approx(0.57)
        assert ck_probability("Fe", "L2", "L3", db=db) == pytest.approx(0.42)
