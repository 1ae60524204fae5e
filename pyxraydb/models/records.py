#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for the X-ray reference tables

Every model is a frozen ``dataclass`` carrying scalar metadata and
read-only NumPy arrays.  Models are the sole output of the reader layer
and the only thing the database handle indexes; nothing mutates them
after construction.

Hierarchy
---------
::

    ElementRecord          - Z, symbol, name, molar mass, density
    XrayLevel              - one absorption edge of one element
    TableSegment           - energy / value pair between two edges
    SegmentedTable         - ordered, non-overlapping TableSegments
    PhotoabsorptionRecord  - Elam photoabsorption table of one element
    ScatteringRecord       - Elam coherent + incoherent tables
    ChantlerRecord         - Chantler f', f'' and attenuation columns
    WaasmaierRecord        - Waasmaier-Kirfel f0 coefficients of one ion
    XrayTransition         - one fluorescence emission line
    CosterKronigRecord     - Coster-Kronig probability between two sub-shells
    CoreWidthRecord        - natural width of one core level
    IonizationPotential    - energy per ion pair in one gas
    ComptonTable           - Compton-scattered energies vs incident energy
    XrayDataset            - every table, as decoded from a dataset file

Units
-----
* Energies are in **eV**.
* Mass attenuation coefficients are in **cm²/g**.
* f', f'' and f0 are in electrons.
* Waasmaier-Kirfel exponents are in **Å²** (q = sin θ / λ in 1/Å).
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from pyxraydb.utils.constants import VALUE_FLOOR
from pyxraydb.utils.interpolation import loglog_segmented


def _readonly(values) -> np.ndarray:
    """Copy *values* into a float64 array that cannot be written to."""
    arr = np.array(values, dtype="f8")
    arr.flags.writeable = False
    return arr


def _log_floor(values: np.ndarray) -> np.ndarray:
    """Natural log with non-positive entries raised to :data:`VALUE_FLOOR`."""
    return _readonly(np.log(np.maximum(values, VALUE_FLOOR)))


# ---------------------------------------------------------------------------
# Element-level records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ElementRecord:
    """Scalar properties of one chemical element

    Parameters
    ----------
    atomic_number : int
        Atomic number Z (unique).
    symbol : str
        Element symbol as tabulated (e.g. ``"Fe"``).
    name : str
        Element name as tabulated (e.g. ``"iron"``).
    molar_mass : float
        Molar mass in g/mol.
    density : float | None
        Reference density in g/cm³, ``None`` when unknown.
    """

    atomic_number: int
    symbol: str
    name: str
    molar_mass: float
    density: float | None = None


@dataclass(frozen=True)
class XrayLevel:
    """One tabulated X-ray absorption edge

    Parameters
    ----------
    element : str
        Element symbol.
    edge : str
        IUPAC edge label (``"K"``, ``"L1"``, …).
    energy : float
        Edge energy in eV.
    fluorescence_yield : float
        Fluorescence yield of the core hole.
    jump_ratio : float
        Ratio of the absorption just above and just below the edge.
    """

    element: str
    edge: str
    energy: float
    fluorescence_yield: float
    jump_ratio: float


# ---------------------------------------------------------------------------
# Tabulated functions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class TableSegment:
    """A tabulated function over one edge-bounded energy range

    The log-space copies of both axes are computed once here, so every
    query against the segment reuses them.

    Parameters
    ----------
    energy : numpy.ndarray
        Strictly increasing energy grid in eV, shape ``(N,)``.
    values : numpy.ndarray
        Non-negative tabulated values, shape ``(N,)``.
    edge : str | None
        Label of the absorption edge that opens this segment, ``None``
        for the segment below the lowest tabulated edge.
    """

    energy: np.ndarray
    values: np.ndarray
    edge: str | None = None
    log_energy: np.ndarray = field(init=False, repr=False, compare=False)
    log_values: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        energy = _readonly(self.energy)
        values = _readonly(self.values)
        object.__setattr__(self, "energy", energy)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "log_energy", _readonly(np.log(energy)))
        object.__setattr__(self, "log_values", _log_floor(values))


@dataclass(frozen=True, eq=False)
class SegmentedTable:
    """Ordered edge-bounded segments of one tabulated quantity

    Segment *k* (for k ≥ 1) starts at ``segments[k].energy[0]``, which is
    the energy of the edge that opens it.  A query energy equal to an
    edge energy belongs to the higher-energy segment.

    Parameters
    ----------
    segments : tuple[TableSegment, ...]
        Segments in increasing energy order; at least one.
    """

    segments: tuple[TableSegment, ...]
    boundaries: np.ndarray = field(init=False, repr=False, compare=False)
    log_boundaries: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        object.__setattr__(self, "segments", segments)
        starts = [seg.energy[0] for seg in segments[1:]]
        object.__setattr__(self, "boundaries", _readonly(starts))
        object.__setattr__(
            self, "log_boundaries", _readonly([seg.log_energy[0] for seg in segments[1:]])
        )

    @property
    def edges(self) -> dict[str, float]:
        """Edge label → edge energy (eV) for every segment boundary."""
        return {
            seg.edge: float(seg.energy[0])
            for seg in self.segments[1:]
            if seg.edge is not None
        }

    def evaluate(self, log_energy: np.ndarray) -> np.ndarray:
        """Interpolate at the natural-log energies *log_energy*"""
        return loglog_segmented(
            log_energy,
            self.log_boundaries,
            [(seg.log_energy, seg.log_values, seg.values) for seg in self.segments],
        )


@dataclass(frozen=True, eq=False)
class PhotoabsorptionRecord:
    """Elam photoabsorption table of one element

    Parameters
    ----------
    element : str
        Element symbol.
    photoabsorption : SegmentedTable
        Photoabsorption mass attenuation (cm²/g), split at every
        absorption edge inside the tabulated range.
    """

    element: str
    photoabsorption: SegmentedTable


@dataclass(frozen=True, eq=False)
class ScatteringRecord:
    """Elam coherent and incoherent scattering tables of one element

    Parameters
    ----------
    element : str
        Element symbol.
    coherent : SegmentedTable
        Coherent (Rayleigh) mass attenuation, cm²/g.
    incoherent : SegmentedTable
        Incoherent (Compton) mass attenuation, cm²/g.
    """

    element: str
    coherent: SegmentedTable
    incoherent: SegmentedTable


@dataclass(frozen=True, eq=False)
class ChantlerRecord:
    """Chantler anomalous scattering factors and attenuation of one element

    All arrays share the ``energy`` grid.

    Parameters
    ----------
    element : str
        Element symbol.
    density : float | None
        Density used by the tabulation, g/cm³.
    energy : numpy.ndarray
        Strictly increasing energy grid in eV.
    f1 : numpy.ndarray
        f' - real anomalous correction (Z already subtracted).
    f2 : numpy.ndarray
        f'' - imaginary anomalous scattering factor.
    mu_photo, mu_incoh, mu_total : numpy.ndarray
        Photoabsorption, incoherent and total mass attenuation, cm²/g.
    """

    element: str
    density: float | None
    energy: np.ndarray
    f1: np.ndarray
    f2: np.ndarray
    mu_photo: np.ndarray
    mu_incoh: np.ndarray
    mu_total: np.ndarray

    def __post_init__(self) -> None:
        for name in ("energy", "f1", "f2", "mu_photo", "mu_incoh", "mu_total"):
            object.__setattr__(self, name, _readonly(getattr(self, name)))


@dataclass(frozen=True, eq=False)
class WaasmaierRecord:
    """Waasmaier-Kirfel Gaussian-sum coefficients for one ion

    ``f0(q) = offset + Σ scale[i] · exp(-exponents[i] · q²)``

    Parameters
    ----------
    atomic_number : int
        Atomic number of the base element.
    element : str
        Symbol of the base element.
    ion : str
        Ion key as tabulated (``"Fe"``, ``"Fe3+"``, ``"O2-"``, …).
    offset : float
        Constant term c.
    scale : numpy.ndarray
        Amplitudes a_i.
    exponents : numpy.ndarray
        Widths b_i, same length as *scale*.
    """

    atomic_number: int
    element: str
    ion: str
    offset: float
    scale: np.ndarray
    exponents: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _readonly(self.scale))
        object.__setattr__(self, "exponents", _readonly(self.exponents))


# ---------------------------------------------------------------------------
# Atomic transitions and core holes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class XrayTransition:
    """One tabulated fluorescence emission line

    Parameters
    ----------
    element : str
        Element symbol.
    line : str
        Siegbahn label (``"Ka1"``, ``"Lb2,15"``, …).
    iupac : str
        IUPAC label (``"K-L3"``).
    initial_level, final_level : str
        Levels holding the core hole before and after emission.
    energy : float
        Emission energy in eV.
    intensity : float
        Relative intensity within the initial level.
    """

    element: str
    line: str
    iupac: str
    initial_level: str
    final_level: str
    energy: float
    intensity: float


@dataclass(frozen=True)
class CosterKronigRecord:
    """Coster-Kronig transition probability between two sub-shells

    ``total_probability`` includes cascades through intermediate
    sub-shells; ``probability`` is the direct transition only.
    """

    element: str
    initial_level: str
    final_level: str
    probability: float
    total_probability: float


@dataclass(frozen=True)
class CoreWidthRecord:
    """Natural width (eV) of one core level"""

    atomic_number: int
    element: str
    edge: str
    width: float


@dataclass(frozen=True)
class IonizationPotential:
    """Mean energy (eV) spent per ion pair created in a gas or diode"""

    gas: str
    potential: float


@dataclass(frozen=True, eq=False)
class ComptonTable:
    """Compton-scattered energies on a grid of incident energies

    Parameters
    ----------
    incident : numpy.ndarray
        Strictly increasing incident X-ray energies, eV.
    xray_90deg : numpy.ndarray
        Energy of a photon scattered through 90°.
    xray_mean : numpy.ndarray
        Mean energy of the scattered photon.
    electron_mean : numpy.ndarray
        Mean energy of the recoil electron.
    """

    incident: np.ndarray
    xray_90deg: np.ndarray
    xray_mean: np.ndarray
    electron_mean: np.ndarray

    def __post_init__(self) -> None:
        for name in ("incident", "xray_90deg", "xray_mean", "electron_mean"):
            object.__setattr__(self, name, _readonly(getattr(self, name)))


# ---------------------------------------------------------------------------
# Top-level dataset
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class XrayDataset:
    """Every reference table, as decoded from one dataset file

    Instances are returned by the readers in :mod:`pyxraydb.readers` and
    consumed by :class:`~pyxraydb.database.XrayDB`, which indexes them.

    Parameters
    ----------
    version : dict[str, str]
        Provenance of the dataset (``tag``, ``date``, ``notes``).
    elements : tuple[ElementRecord, ...]
    xray_levels : tuple[XrayLevel, ...]
    photoabsorption : tuple[PhotoabsorptionRecord, ...]
    scattering : tuple[ScatteringRecord, ...]
    chantler : tuple[ChantlerRecord, ...]
    waasmaier : tuple[WaasmaierRecord, ...]
    xray_transitions : tuple[XrayTransition, ...]
    coster_kronig : tuple[CosterKronigRecord, ...]
    core_widths : tuple[CoreWidthRecord, ...]
    ionization_potentials : tuple[IonizationPotential, ...]
    compton : ComptonTable | None
        Compton energy table, ``None`` when the file has none.
    """

    version: dict[str, str] = field(default_factory=dict)
    elements: tuple[ElementRecord, ...] = ()
    xray_levels: tuple[XrayLevel, ...] = ()
    photoabsorption: tuple[PhotoabsorptionRecord, ...] = ()
    scattering: tuple[ScatteringRecord, ...] = ()
    chantler: tuple[ChantlerRecord, ...] = ()
    waasmaier: tuple[WaasmaierRecord, ...] = ()
    xray_transitions: tuple[XrayTransition, ...] = ()
    coster_kronig: tuple[CosterKronigRecord, ...] = ()
    core_widths: tuple[CoreWidthRecord, ...] = ()
    ionization_potentials: tuple[IonizationPotential, ...] = ()
    compton: ComptonTable | None = None
