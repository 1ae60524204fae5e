#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for absorption-edge queries
"""

from __future__ import annotations

import pytest

from pyxraydb.database import XrayDB
from pyxraydb.edges import XrayEdge, guess_edge, xray_edge, xray_edges
from pyxraydb.exceptions import UnknownEdge, UnknownElement


class TestXrayEdges:

    def test_iron_k(self, db: XrayDB) -> None:
        edge = xray_edge("Fe", "K", db=db)
        assert isinstance(edge, XrayEdge)
        assert edge.energy == pytest.approx(7112.0)
        assert 0 < edge.fluorescence_yield < 1
        assert edge.jump_ratio > 1

    def test_label_case_ignored(self, db: XrayDB) -> None:
        assert xray_edge("iron", "l3", db=db) == xray_edge("Fe", "L3", db=db)

    def test_all_edges(self, sample_db: XrayDB) -> None:
        edges = xray_edges(26, db=sample_db)
        assert set(edges) == {"K", "L3"}
        assert edges["L3"].energy == pytest.approx(706.8)

    def test_element_without_levels(self, sample_db: XrayDB) -> None:
        assert xray_edges("H", db=sample_db) == {}

    def test_unknown_edge(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownEdge) as excinfo:
            xray_edge("iron", "M5", db=sample_db)
        assert (excinfo.value.element, excinfo.value.edge) == ("Fe", "M5")

    def test_unknown_element(self, sample_db: XrayDB) -> None:
        with pytest.raises(UnknownElement):
            xray_edges("Zz", db=sample_db)


class TestGuessEdge:

    def test_near_iron_k(self, db: XrayDB) -> None:
        assert guess_edge(7100.0, db=db) == ("Fe", "K")

    def test_restricted_edges(self, sample_db: XrayDB) -> None:
        assert guess_edge(680.0, db=sample_db) == ("Fe", "L3")
        assert guess_edge(680.0, ["K"], db=sample_db) == ("O", "K")

    def test_no_candidates(self, sample_db: XrayDB) -> None:
        assert guess_edge(7000.0, ["M1"], db=sample_db) is None

    @pytest.mark.parametrize("energy", [0.0, -100.0])
    def test_non_positive_energy(self, sample_db: XrayDB, energy: float) -> None:
        with pytest.raises(ValueError):
            guess_edge(energy, db=sample_db)
