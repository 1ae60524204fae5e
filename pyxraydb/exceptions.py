#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the PyXrayDB package

All exceptions raised by PyXrayDB inherit from :class:`PyXrayDBError`,
making it possible to catch every library-specific error with a single
``except`` clause while still allowing fine-grained handling when needed.

Exception Hierarchy
-------------------
::

    PyXrayDBError
    ├── FileFormatError          # Dataset file missing or unreadable
    ├── ValidationError          # Decoded tables violate table invariants
    ├── ConversionError          # HDF5 export failures
    ├── UnknownElement           # Identifier resolves to no element
    ├── UnknownIon               # Ion key absent from the f0 table
    ├── UnknownEdge              # Edge label absent for an element
    ├── UnsupportedCrossSection  # Element has no table for the kind
    ├── UnknownMaterial          # Named material not in the table
    ├── UnknownGas               # Gas without an ionization potential
    └── FormulaError
        ├── InvalidFormula       # Malformed formula text
        ├── EmptyFormula         # Formula with no elements
        └── ZeroWeightFormula    # Total formula weight is zero

Every query error is a deterministic function of its input, so none of
them is worth retrying.
"""

from __future__ import annotations


class PyXrayDBError(Exception):
    """Base exception for all PyXrayDB errors

    Catching ``PyXrayDBError`` catches any library-specific failure while
    still allowing standard Python exceptions (``ValueError``,
    ``TypeError``, etc.) to propagate normally.
    """


# ---------------------------------------------------------------------------
# Data layer
# ---------------------------------------------------------------------------

class FileFormatError(PyXrayDBError):
    """Raised when a dataset file cannot be opened or decoded

    This covers a missing file, an unknown file suffix, a corrupt gzip
    stream, malformed JSON, or an HDF5 file that lacks the expected
    groups.
    """


class ValidationError(PyXrayDBError):
    """Raised when decoded tables fail load-time validation checks

    A ``ValidationError`` means the dataset was *readable* but a table
    violates the record invariants: non-positive or non-increasing
    energies, negative values, mismatched array lengths, or edge
    segments that overlap.
    """


class ConversionError(PyXrayDBError):
    """Raised when HDF5 export fails

    Covers an existing output file without ``overwrite``, permission
    problems, and any error raised by ``h5py`` while writing.
    """


# ---------------------------------------------------------------------------
# Query layer
# ---------------------------------------------------------------------------

class UnknownElement(PyXrayDBError):
    """Raised when an identifier resolves to no element record

    Parameters
    ----------
    identifier : str
        The identifier exactly as supplied by the caller (before any
        whitespace trimming or case folding).
    """

    def __init__(self, identifier) -> None:
        self.identifier = identifier
        super().__init__(f"unknown element: {identifier!r}")


class UnknownIon(PyXrayDBError):
    """Raised when an ion key is absent from the Waasmaier-Kirfel table

    Only raised when the base element of the ion is itself known; an
    unresolvable base element raises :class:`UnknownElement` instead.
    """

    def __init__(self, ion: str) -> None:
        self.ion = ion
        super().__init__(f"unknown ion: {ion!r}")


class UnknownEdge(PyXrayDBError):
    """Raised when an absorption edge label is unknown for an element"""

    def __init__(self, element: str, edge: str) -> None:
        self.element = element
        self.edge = edge
        super().__init__(f"unknown edge {edge!r} for element {element!r}")


class UnsupportedCrossSection(PyXrayDBError):
    """Raised when an element exists but has no table for the requested kind

    Parameters
    ----------
    element : str
        Identifier as supplied by the caller.
    kind : str
        Name of the requested cross-section kind or table.
    """

    def __init__(self, element: str, kind: str) -> None:
        self.element = element
        self.kind = kind
        super().__init__(f"no {kind} table for element {element!r}")


class UnknownMaterial(PyXrayDBError):
    """Raised when a named material is not in the material table

    Only reached when no density was supplied by the caller, since the
    density is the one property the table contributes.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown material: {name!r} (supply a density)")


class UnknownGas(PyXrayDBError):
    """Raised when a gas has no tabulated ionization potential"""

    def __init__(self, gas: str) -> None:
        self.gas = gas
        super().__init__(f"no ionization potential for gas {gas!r}")


class FormulaError(PyXrayDBError):
    """Base class for chemical-formula failures"""


class InvalidFormula(FormulaError):
    """Raised when a chemical formula cannot be tokenised or parsed"""


class EmptyFormula(FormulaError):
    """Raised when a formula parses but contains no elements"""


class ZeroWeightFormula(FormulaError):
    """Raised when a formula has zero total formula weight

    All stoichiometric counts being zero is the usual cause, e.g.
    ``"Fe0O0"``.
    """
