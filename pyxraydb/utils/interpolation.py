#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Interpolation kernels for tabulated X-ray data

Attenuation coefficients follow power laws between absorption edges, so
they are interpolated piecewise-linearly in log-log space.  The
Chantler f' column is signed and is interpolated linearly instead.

Boundary policy (log-log)
-------------------------
* Brackets are found with :func:`numpy.searchsorted`.
* Below the first or above the last table point, the slope of the
  outermost table interval is extended to the query point.
* A query equal to a tabulated energy returns the tabulated value
  itself, with no log/exp round trip.
* Non-positive table values are raised to
  :data:`~pyxraydb.utils.constants.VALUE_FLOOR` before the log.

Segmented tables
----------------
A table that jumps at absorption edges is stored as independent
segments.  :func:`loglog_segmented` assigns every query point to exactly
one segment (an energy equal to an edge goes to the segment above it)
and never interpolates across an edge.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from pyxraydb.utils.constants import VALUE_FLOOR

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Query preparation
# ---------------------------------------------------------------------------

def as_energy_array(energies) -> np.ndarray:
    """Convert a scalar or sequence of energies (eV) to a 1-D float64 array

    Raises
    ------
    ValueError
        If any energy is non-positive or not finite.
    """
    arr = np.atleast_1d(np.asarray(energies, dtype="f8")).ravel()
    if arr.size and not np.all(np.isfinite(arr) & (arr > 0)):
        raise ValueError(f"energies must be positive and finite, got {energies!r}")
    return arr


def clamp_log_energies(
    energies,
    emin: float | None = None,
    emax: float | None = None,
) -> np.ndarray:
    """Return ``log(clip(energies, emin, emax))`` as a 1-D array

    Computed once per query and shared by every table that the query
    touches.
    """
    arr = as_energy_array(energies)
    if emin is not None or emax is not None:
        clipped = np.clip(arr, emin, emax)
        if arr.size and np.any(clipped != arr):
            logger.debug(
                "Clamped %d of %d energies to [%s, %s] eV.",
                int(np.count_nonzero(clipped != arr)), arr.size, emin, emax,
            )
        arr = clipped
    return np.log(arr)


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------

def loglog_interpolate(
    log_x: np.ndarray,
    log_xp: np.ndarray,
    log_fp: np.ndarray,
    fp: np.ndarray | None = None,
) -> np.ndarray:
    """Piecewise-linear interpolation in log-log space

    All arguments are already in log space so that callers evaluating
    several tables at the same energies take the log only once.

    Parameters
    ----------
    log_x : numpy.ndarray
        Natural log of the query energies.
    log_xp : numpy.ndarray
        Natural log of the table energies, strictly increasing.
    log_fp : numpy.ndarray
        Natural log of the (floored) table values.
    fp : numpy.ndarray, optional
        Linear-space table values.  When given, queries that coincide
        with a table energy return ``fp`` exactly.

    Returns
    -------
    numpy.ndarray
        Interpolated values in linear space, same length as *log_x*.
    """
    log_x = np.asarray(log_x, dtype="f8")
    n = log_xp.size
    if log_x.size == 0:
        return np.empty(0, dtype="f8")
    if n == 1:
        single = fp[0] if fp is not None else np.exp(log_fp[0])
        return np.full(log_x.shape, float(single))

    idx = np.searchsorted(log_xp, log_x, side="left")
    hi = np.clip(idx, 1, n - 1)
    lo = hi - 1
    slope = (log_fp[hi] - log_fp[lo]) / (log_xp[hi] - log_xp[lo])
    out = np.exp(log_fp[lo] + slope * (log_x - log_xp[lo]))

    if fp is not None:
        at = np.minimum(idx, n - 1)
        exact = log_xp[at] == log_x
        out[exact] = fp[at[exact]]
    return out


def interpolate(energies, table_energies, table_values) -> np.ndarray:
    """Log-log interpolate a tabulated function at arbitrary energies

    Parameters
    ----------
    energies : float or sequence of float
        Query energies, positive.
    table_energies : sequence of float
        Strictly increasing, positive table energies.
    table_values : sequence of float
        Table values, same length as *table_energies*.

    Returns
    -------
    numpy.ndarray
        One value per query energy, in order.  An empty query gives an
        empty array.

    Raises
    ------
    ValueError
        If the table is empty, the lengths differ, any energy is
        non-positive, or the table energies are not strictly increasing.

    Examples
    --------
    >>> interpolate([2.0], [1.0, 4.0], [1.0, 16.0])
    array([4.])
    """
    xp = np.asarray(table_energies, dtype="f8")
    fp = np.asarray(table_values, dtype="f8")
    if xp.ndim != 1 or xp.shape != fp.shape:
        raise ValueError(
            f"table_energies and table_values must be 1-D of equal length, "
            f"got shapes {xp.shape} and {fp.shape}"
        )
    if xp.size == 0:
        raise ValueError("cannot interpolate an empty table")
    if np.any(xp <= 0):
        raise ValueError("table_energies must be positive")
    if np.any(np.diff(xp) <= 0):
        raise ValueError("table_energies must be strictly increasing")
    log_x = clamp_log_energies(energies)
    return loglog_interpolate(
        log_x, np.log(xp), np.log(np.maximum(fp, VALUE_FLOOR)), fp
    )


def linear_interpolate(x, xp, fp) -> np.ndarray:
    """Linear interpolation, held constant outside the table range"""
    return np.interp(np.asarray(x, dtype="f8"), xp, fp)


def loglog_segmented(
    log_x: np.ndarray,
    log_boundaries: np.ndarray,
    segments: Sequence[tuple[np.ndarray, np.ndarray, np.ndarray]],
) -> np.ndarray:
    """Log-log interpolate a table that is split at absorption edges

    Parameters
    ----------
    log_x : numpy.ndarray
        Natural log of the query energies.
    log_boundaries : numpy.ndarray
        Natural log of the starting energy of ``segments[1:]``.
    segments : sequence of (log_xp, log_fp, fp)
        Per-segment table arrays, in increasing energy order.

    Returns
    -------
    numpy.ndarray
        Interpolated values; each point uses only its own segment.
    """
    log_x = np.asarray(log_x, dtype="f8")
    if len(segments) == 1:
        return loglog_interpolate(log_x, *segments[0])
    which = np.searchsorted(log_boundaries, log_x, side="right")
    out = np.empty(log_x.shape, dtype="f8")
    for k in np.unique(which):
        mask = which == k
        out[mask] = loglog_interpolate(log_x[mask], *segments[k])
    return out
