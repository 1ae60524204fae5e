#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Load-time validation routines for the X-ray reference tables

Every validation function raises :class:`~pyxraydb.exceptions.ValidationError`
when a constraint is violated.  Readers call these functions after
decoding so that the database handle only ever indexes tables that the
interpolation engine can evaluate.

Checked Constraints
-------------------
* Energy grids must be positive and strictly increasing.
* Tabulated values must be non-negative (f' is exempt: it is signed).
* Energy and value arrays must have the same length.
* Edge segments must not overlap; a segment may start exactly where
  the previous one ends (the edge energy itself).
* Atomic number must be in the range 1 ≤ Z ≤ 118.

Design Note
-----------
Validation functions accept raw NumPy arrays or scalar values, not
dataclass model instances, so the import graph stays acyclic::

    utils ← models ← readers ← database
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from pyxraydb.exceptions import ValidationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

MIN_ATOMIC_NUMBER: int = 1
"""Smallest valid atomic number (hydrogen)."""

MAX_ATOMIC_NUMBER: int = 118
"""Largest valid atomic number (oganesson)."""


# ---------------------------------------------------------------------------
# Validation functions
# ---------------------------------------------------------------------------

def validate_atomic_number(Z: int) -> None:
    """Verify that *Z* is a valid atomic number

    Raises
    ------
    ValidationError
        If *Z* is outside the range [1, 118].

    Examples
    --------
    >>> validate_atomic_number(26)  # iron
    >>> validate_atomic_number(0)   # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyxraydb.exceptions.ValidationError: ...
    """
    if not (MIN_ATOMIC_NUMBER <= Z <= MAX_ATOMIC_NUMBER):
        raise ValidationError(
            f"Atomic number Z={Z} is outside the valid range "
            f"[{MIN_ATOMIC_NUMBER}, {MAX_ATOMIC_NUMBER}]."
        )


def validate_energy_grid(energy: np.ndarray, label: str = "energy") -> None:
    """Verify that an energy grid is positive and strictly increasing

    Parameters
    ----------
    energy : numpy.ndarray
        1-D array of energy values (eV).
    label : str, optional
        Human-readable name of the array for error messages.

    Raises
    ------
    ValidationError
        If the grid is empty, holds a non-positive energy, or has any
        ``energy[i] >= energy[i+1]``.

    Examples
    --------
    >>> import numpy as np
    >>> validate_energy_grid(np.array([1.0, 2.0, 3.0]))
    >>> validate_energy_grid(np.array([3.0, 3.0]))  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyxraydb.exceptions.ValidationError: ...
    """
    arr = np.asarray(energy, dtype="f8")
    if arr.ndim != 1 or arr.size == 0:
        raise ValidationError(f"Array '{label}' must be a non-empty 1-D grid.")
    if np.any(arr <= 0) or not np.all(np.isfinite(arr)):
        first_bad = int(np.argmax((arr <= 0) | ~np.isfinite(arr)))
        raise ValidationError(
            f"Array '{label}' contains a non-positive or non-finite energy "
            f"at index {first_bad}: {arr[first_bad]:.6e}."
        )
    diff = np.diff(arr)
    if np.any(diff <= 0):
        first_bad = int(np.argmax(diff <= 0))
        raise ValidationError(
            f"Array '{label}' is not strictly increasing.  "
            f"First violation at index {first_bad}: "
            f"{arr[first_bad]:.6e} >= {arr[first_bad + 1]:.6e}."
        )
    logger.debug("Array '%s' (%d points) passed grid check.", label, arr.size)


def validate_non_negative(values: np.ndarray, label: str = "values") -> None:
    """Verify that all values in the array are non-negative

    Raises
    ------
    ValidationError
        If any value is negative or NaN.

    Examples
    --------
    >>> import numpy as np
    >>> validate_non_negative(np.array([0.0, 1.0, 2.0]))
    >>> validate_non_negative(np.array([-1.0, 2.0]))  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyxraydb.exceptions.ValidationError: ...
    """
    arr = np.asarray(values, dtype="f8")
    if arr.size == 0:
        return
    bad = ~(arr >= 0)
    if np.any(bad):
        first_bad = int(np.argmax(bad))
        raise ValidationError(
            f"Array '{label}' contains negative value(s).  "
            f"First violation at index {first_bad}: {arr[first_bad]:.6e}."
        )
    logger.debug("Array '%s' (%d points) passed non-negativity check.", label, arr.size)


def validate_table(
    energy: np.ndarray,
    values: np.ndarray,
    label: str = "table",
    *,
    signed: bool = False,
) -> None:
    """Validate one tabulated function

    Runs :func:`validate_energy_grid` on the energy array and, unless
    *signed* is set, :func:`validate_non_negative` on the values, after
    checking that the two arrays have the same length.

    Raises
    ------
    ValidationError
        If any sub-check fails or shapes mismatch.
    """
    e = np.asarray(energy, dtype="f8")
    v = np.asarray(values, dtype="f8")
    if e.shape != v.shape:
        raise ValidationError(
            f"Shape mismatch in '{label}': energy has shape {e.shape} "
            f"but values have shape {v.shape}."
        )
    validate_energy_grid(e, label=f"{label}/energy")
    if not signed:
        validate_non_negative(v, label=f"{label}/values")


def validate_segments(grids: Sequence[np.ndarray], label: str = "segments") -> None:
    """Verify that consecutive edge segments do not overlap

    Each grid must itself already be valid.  Segment *k+1* may start
    at the last energy of segment *k* (the shared edge energy) but not
    below it.

    Raises
    ------
    ValidationError
        If there are no segments or two consecutive segments overlap.
    """
    if len(grids) == 0:
        raise ValidationError(f"'{label}' holds no segments.")
    for k in range(1, len(grids)):
        prev_end = float(grids[k - 1][-1])
        start = float(grids[k][0])
        if start < prev_end:
            raise ValidationError(
                f"Segment {k} of '{label}' starts at {start:.6e} eV, "
                f"below the end of segment {k - 1} ({prev_end:.6e} eV)."
            )
    logger.debug("'%s': %d segments passed overlap check.", label, len(grids))
