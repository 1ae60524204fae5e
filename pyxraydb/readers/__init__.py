#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Dataset readers

This sub-package provides two concrete reader classes, one per storage
format:

* :class:`~pyxraydb.readers.bundled.BundledReader` - gzip-compressed
  (or plain) JSON, the format of the dataset shipped with the package
* :class:`~pyxraydb.readers.hdf5.HDF5Reader` - HDF5, the format written
  by :func:`~pyxraydb.converters.hdf5.export_hdf5`

All readers share the :class:`~pyxraydb.readers.base.BaseReader`
interface.  :func:`reader_for` picks one from a file suffix.
"""

from __future__ import annotations

from pathlib import Path

from pyxraydb.exceptions import FileFormatError
from pyxraydb.readers.base import BaseReader
from pyxraydb.readers.bundled import BUNDLED_DATASET, BundledReader
from pyxraydb.readers.hdf5 import HDF5Reader

_SUFFIXES: dict[str, type[BaseReader]] = {
    ".json": BundledReader,
    ".gz": BundledReader,
    ".h5": HDF5Reader,
    ".hdf5": HDF5Reader,
}


def reader_for(path: Path | str) -> BaseReader:
    """Return a reader instance for the file suffix of *path*

    Raises
    ------
    FileFormatError
        If the suffix is not one of ``.json``, ``.json.gz``, ``.h5`` or
        ``.hdf5``.
    """
    filepath = Path(path)
    suffix = filepath.suffix.lower()
    if suffix == ".gz" and Path(filepath.stem).suffix.lower() != ".json":
        suffix = ""
    try:
        return _SUFFIXES[suffix]()
    except KeyError:
        raise FileFormatError(
            f"Cannot tell the dataset format of {filepath}; expected a "
            f".json, .json.gz, .h5 or .hdf5 file."
        ) from None


__all__ = ["BaseReader", "BundledReader", "HDF5Reader", "BUNDLED_DATASET", "reader_for"]
