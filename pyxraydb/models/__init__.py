#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for the X-ray reference tables

All models are frozen ``dataclasses`` carrying read-only NumPy arrays and
scalar metadata.  They are the sole output format of the reader layer
and the records indexed by the database handle.
"""

from __future__ import annotations

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

__all__ = [
    "ChantlerRecord",
    "ComptonTable",
    "CoreWidthRecord",
    "CosterKronigRecord",
    "ElementRecord",
    "IonizationPotential",
    "PhotoabsorptionRecord",
    "ScatteringRecord",
    "SegmentedTable",
    "TableSegment",
    "WaasmaierRecord",
    "XrayDataset",
    "XrayLevel",
    "XrayTransition",
]
