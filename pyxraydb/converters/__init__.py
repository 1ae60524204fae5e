#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Dataset converters

* :func:`~pyxraydb.converters.hdf5.export_hdf5`
    Writes a loaded dataset to the HDF5 layout read by
    :class:`~pyxraydb.readers.hdf5.HDF5Reader`.
* :func:`~pyxraydb.converters.bundle.build_bundle`
    Builds the bundled JSON dataset from the xraydb SQLite database.
    Needs the ``build`` extra and is not imported here.
"""

from __future__ import annotations

from pyxraydb.converters.hdf5 import export_hdf5

__all__ = ["export_hdf5"]
