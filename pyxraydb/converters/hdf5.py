#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
HDF5 export of a loaded X-ray dataset

Writes deterministic, self-documenting HDF5 files from the record
models held by an :class:`~pyxraydb.database.XrayDB` handle.  The same
layout is read back by :class:`~pyxraydb.readers.hdf5.HDF5Reader`.

HDF5 Layout
-----------
::

    /metadata                       attrs: format, format_version,
                                           tag, date, notes
    /elements/
        atomic_number       int64[]
        symbol              bytes[]
        name                bytes[]
        molar_mass          float64[]   units: g/mol
        density             float64[]   units: g/cm^3  (NaN = unknown)
    /xray_levels/
        element, edge       bytes[]
        energy              float64[]   units: eV
        fluorescence_yield  float64[]
        jump_ratio          float64[]
    /photoabsorption/{Sym}/
        segment_{kk}/                   attrs: edge ("" below first edge)
            energy          float64[]   units: eV
            values          float64[]   units: cm^2/g
    /scattering/{Sym}/
        coherent/segment_{kk}/ ...
        incoherent/segment_{kk}/ ...
    /chantler/{Sym}/                    attrs: density (NaN = unknown)
        energy              float64[]   units: eV
        f1, f2              float64[]   units: electrons
        mu_photo, mu_incoh, mu_total    units: cm^2/g
    /waasmaier/ion_{nnnn}/              attrs: atomic_number, element,
                                               ion, offset
        scale               float64[]   units: electrons
        exponents           float64[]   units: angstrom^2
    /xray_transitions/
        element, line, iupac,
        initial_level, final_level      bytes[]
        energy              float64[]   units: eV
        intensity           float64[]
    /coster_kronig/
        element, initial_level,
        final_level                     bytes[]
        probability, total_probability float64[]
    /core_widths/
        atomic_number       int64[]
        element, edge       bytes[]
        width               float64[]   units: eV
    /ionization_potentials/
        gas                 bytes[]
        potential           float64[]   units: eV
    /compton_energies/
        incident, xray_90deg,
        xray_mean, electron_mean        float64[]   units: eV

The last five groups are optional when reading.

Physical units are stored as HDF5 dataset attributes
(``ds.attrs["units"] = "eV"``).
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

try:
    import h5py
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'h5py' package is required by the HDF5 converter.  "
        "Install it with: pip install h5py"
    ) from _exc

from pyxraydb.database import XrayDB, resolve_db
from pyxraydb.exceptions import ConversionError
from pyxraydb.models.records import SegmentedTable, XrayDataset
from pyxraydb.readers.hdf5 import FORMAT_NAME, FORMAT_VERSION

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal writers
# ---------------------------------------------------------------------------

def _create_dataset(
    group: h5py.Group,
    name: str,
    data: np.ndarray,
    units: str | None = None,
) -> h5py.Dataset:
    """Create a float64 dataset, with a ``units`` attribute when given"""
    ds = group.create_dataset(name, data=np.asarray(data, dtype="f8"))
    if units is not None:
        ds.attrs["units"] = units
    return ds


def _optional(value: float | None) -> float:
    return np.nan if value is None else float(value)


def _write_metadata(h5f: h5py.File, dataset: XrayDataset) -> None:
    meta = h5f.create_group("metadata")
    meta.attrs["format"] = FORMAT_NAME
    meta.attrs["format_version"] = FORMAT_VERSION
    for key in ("tag", "date", "notes"):
        if key in dataset.version:
            meta.attrs[key] = str(dataset.version[key])


def _write_elements(h5f: h5py.File, dataset: XrayDataset) -> None:
    eg = h5f.create_group("elements")
    eg.create_dataset(
        "atomic_number",
        data=np.array([e.atomic_number for e in dataset.elements], dtype="i8"),
    )
    eg.create_dataset("symbol", data=np.array([e.symbol.encode() for e in dataset.elements], dtype="S"))
    eg.create_dataset("name", data=np.array([e.name.encode() for e in dataset.elements], dtype="S"))
    _create_dataset(eg, "molar_mass", [e.molar_mass for e in dataset.elements], "g/mol")
    _create_dataset(eg, "density", [_optional(e.density) for e in dataset.elements], "g/cm^3")


def _write_levels(h5f: h5py.File, dataset: XrayDataset) -> None:
    levels = dataset.xray_levels
    lg = h5f.create_group("xray_levels")
    lg.create_dataset("element", data=np.array([lv.element.encode() for lv in levels], dtype="S"))
    lg.create_dataset("edge", data=np.array([lv.edge.encode() for lv in levels], dtype="S"))
    _create_dataset(lg, "energy", [lv.energy for lv in levels], "eV")
    _create_dataset(lg, "fluorescence_yield", [lv.fluorescence_yield for lv in levels])
    _create_dataset(lg, "jump_ratio", [lv.jump_ratio for lv in levels])


def _write_segmented(group: h5py.Group, table: SegmentedTable, units: str) -> None:
    for k, seg in enumerate(table.segments):
        sg = group.create_group(f"segment_{k:02d}")
        sg.attrs["edge"] = seg.edge or ""
        _create_dataset(sg, "energy", seg.energy, "eV")
        _create_dataset(sg, "values", seg.values, units)


def _write_tables(h5f: h5py.File, dataset: XrayDataset) -> None:
    pg = h5f.create_group("photoabsorption")
    for rec in dataset.photoabsorption:
        _write_segmented(pg.create_group(rec.element), rec.photoabsorption, "cm^2/g")

    sg = h5f.create_group("scattering")
    for rec in dataset.scattering:
        grp = sg.create_group(rec.element)
        _write_segmented(grp.create_group("coherent"), rec.coherent, "cm^2/g")
        _write_segmented(grp.create_group("incoherent"), rec.incoherent, "cm^2/g")

    cg = h5f.create_group("chantler")
    for rec in dataset.chantler:
        grp = cg.create_group(rec.element)
        grp.attrs["density"] = _optional(rec.density)
        _create_dataset(grp, "energy", rec.energy, "eV")
        _create_dataset(grp, "f1", rec.f1, "electrons")
        _create_dataset(grp, "f2", rec.f2, "electrons")
        for column in ("mu_photo", "mu_incoh", "mu_total"):
            _create_dataset(grp, column, getattr(rec, column), "cm^2/g")

    wg = h5f.create_group("waasmaier")
    for i, rec in enumerate(dataset.waasmaier):
        grp = wg.create_group(f"ion_{i:04d}")
        grp.attrs["atomic_number"] = rec.atomic_number
        grp.attrs["element"] = rec.element
        grp.attrs["ion"] = rec.ion
        grp.attrs["offset"] = rec.offset
        _create_dataset(grp, "scale", rec.scale, "electrons")
        _create_dataset(grp, "exponents", rec.exponents, "angstrom^2")


def _create_strings(group: h5py.Group, name: str, values) -> None:
    group.create_dataset(name, data=np.array([v.encode() for v in values], dtype="S"))


def _write_atomic(h5f: h5py.File, dataset: XrayDataset) -> None:
    lines = dataset.xray_transitions
    tg = h5f.create_group("xray_transitions")
    for column in ("element", "line", "iupac", "initial_level", "final_level"):
        _create_strings(tg, column, [getattr(t, column) for t in lines])
    _create_dataset(tg, "energy", [t.energy for t in lines], "eV")
    _create_dataset(tg, "intensity", [t.intensity for t in lines])

    cks = dataset.coster_kronig
    kg = h5f.create_group("coster_kronig")
    for column in ("element", "initial_level", "final_level"):
        _create_strings(kg, column, [getattr(ck, column) for ck in cks])
    _create_dataset(kg, "probability", [ck.probability for ck in cks])
    _create_dataset(kg, "total_probability", [ck.total_probability for ck in cks])

    widths = dataset.core_widths
    wg = h5f.create_group("core_widths")
    wg.create_dataset(
        "atomic_number", data=np.array([w.atomic_number for w in widths], dtype="i8")
    )
    _create_strings(wg, "element", [w.element for w in widths])
    _create_strings(wg, "edge", [w.edge for w in widths])
    _create_dataset(wg, "width", [w.width for w in widths], "eV")

    ig = h5f.create_group("ionization_potentials")
    _create_strings(ig, "gas", [ip.gas for ip in dataset.ionization_potentials])
    _create_dataset(
        ig, "potential", [ip.potential for ip in dataset.ionization_potentials], "eV"
    )

    if dataset.compton is not None:
        cg = h5f.create_group("compton_energies")
        for column in ("incident", "xray_90deg", "xray_mean", "electron_mean"):
            _create_dataset(cg, column, getattr(dataset.compton, column), "eV")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def export_hdf5(
    output_path: Path | str,
    db: XrayDB | None = None,
    *,
    overwrite: bool = False,
) -> Path:
    """Write every table held by *db* to an HDF5 file

    Parameters
    ----------
    output_path : Path | str
        Path for the output HDF5 file.  Parent directories are created
        automatically.
    db : XrayDB, optional
        Handle whose dataset is exported; the shared handle by default.
    overwrite : bool, optional
        If ``True``, overwrite an existing file.  If ``False``
        (default), raise :class:`~pyxraydb.exceptions.ConversionError`
        when the output file already exists.

    Returns
    -------
    Path
        The written file.

    Raises
    ------
    ConversionError
        If *overwrite* is ``False`` and *output_path* exists, or if any
        HDF5 write operation fails.

    Examples
    --------
    >>> export_hdf5("xraydb.h5", overwrite=True)
    PosixPath('xraydb.h5')
    """
    out = Path(output_path)
    if out.exists() and not overwrite:
        raise ConversionError(
            f"Output file {out} already exists and overwrite=False."
        )

    dataset = resolve_db(db).dataset
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        mode = "w" if overwrite else "w-"
        with h5py.File(str(out), mode) as h5f:
            _write_metadata(h5f, dataset)
            _write_elements(h5f, dataset)
            _write_levels(h5f, dataset)
            _write_tables(h5f, dataset)
            _write_atomic(h5f, dataset)
    except (OSError, ValueError, TypeError) as exc:
        raise ConversionError(f"Failed to write HDF5 file {out}: {exc}") from exc

    logger.info(
        "Wrote HDF5 dataset %s (%d elements, %d photoabsorption tables)",
        out, len(dataset.elements), len(dataset.photoabsorption),
    )
    return out
