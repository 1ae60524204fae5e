#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Reader for datasets stored as HDF5

Reads the layout written by :func:`pyxraydb.converters.hdf5.export_hdf5`
(documented there), so a full dataset produced elsewhere in the same
layout can replace the bundled subset at runtime.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

try:
    import h5py
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'h5py' package is required by HDF5Reader.  "
        "Install it with: pip install h5py"
    ) from _exc

from pyxraydb.exceptions import FileFormatError
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
from pyxraydb.readers.base import BaseReader

logger = logging.getLogger(__name__)

FORMAT_NAME: str = "pyxraydb"
"""Value of the ``format`` attribute on ``/metadata``."""

FORMAT_VERSION: int = 1
"""Layout version understood by this reader."""


def _strings(ds: h5py.Dataset) -> list[str]:
    return [v.decode("utf-8") if isinstance(v, bytes) else str(v) for v in ds[()]]


def _attr_str(attrs, key: str) -> str:
    value = attrs[key]
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


def _optional(value: float) -> float | None:
    value = float(value)
    return None if np.isnan(value) else value


def _read_segmented(group: h5py.Group) -> SegmentedTable:
    segments = []
    for name in sorted(group.keys()):
        sg = group[name]
        edge = _attr_str(sg.attrs, "edge") if "edge" in sg.attrs else ""
        segments.append(TableSegment(sg["energy"][()], sg["values"][()], edge or None))
    return SegmentedTable(tuple(segments))


class HDF5Reader(BaseReader):
    """Reader for ``.h5`` / ``.hdf5`` dataset files

    Examples
    --------
    >>> dataset = HDF5Reader().read("xraydb_full.h5")
    >>> len(dataset.elements)
    118
    """

    def read(
        self,
        path: Path | str,
        *,
        validate: bool = True,
    ) -> XrayDataset:
        """Decode an HDF5 dataset file

        Raises
        ------
        FileFormatError
            If the file is missing, is not HDF5, was written with an
            unknown layout version, or lacks a required group.
        ValidationError
            If *validate* is ``True`` and a table violates an invariant.
        """
        filepath = Path(path)
        logger.debug("Opening HDF5 dataset: %s", filepath)

        if not filepath.is_file():
            raise FileFormatError(f"Dataset file not found: {filepath}")

        try:
            with h5py.File(str(filepath), "r") as h5f:
                dataset = self._build(h5f)
        except FileFormatError:
            raise
        except (OSError, KeyError, TypeError, ValueError, IndexError) as exc:
            raise FileFormatError(
                f"Failed to read HDF5 dataset {filepath}: {exc}"
            ) from exc

        if validate:
            self.validate_dataset(dataset)
        return dataset

    @staticmethod
    def _build(h5f: h5py.File) -> XrayDataset:
        meta = h5f["metadata"]
        fmt = _attr_str(meta.attrs, "format")
        version = int(meta.attrs["format_version"])
        if fmt != FORMAT_NAME or version != FORMAT_VERSION:
            raise FileFormatError(
                f"Unsupported HDF5 layout {fmt!r} version {version}; "
                f"expected {FORMAT_NAME!r} version {FORMAT_VERSION}."
            )
        provenance = {
            key: _attr_str(meta.attrs, key)
            for key in ("tag", "date", "notes")
            if key in meta.attrs
        }

        eg = h5f["elements"]
        elements = tuple(
            ElementRecord(int(z), sym, name, float(mass), _optional(rho))
            for z, sym, name, mass, rho in zip(
                eg["atomic_number"][()], _strings(eg["symbol"]), _strings(eg["name"]),
                eg["molar_mass"][()], eg["density"][()],
            )
        )

        levels: tuple[XrayLevel, ...] = ()
        if "xray_levels" in h5f:
            lg = h5f["xray_levels"]
            levels = tuple(
                XrayLevel(el, edge, float(e), float(fy), float(jr))
                for el, edge, e, fy, jr in zip(
                    _strings(lg["element"]), _strings(lg["edge"]), lg["energy"][()],
                    lg["fluorescence_yield"][()], lg["jump_ratio"][()],
                )
            )

        photo = tuple(
            PhotoabsorptionRecord(sym, _read_segmented(grp))
            for sym, grp in h5f.get("photoabsorption", {}).items()
        )
        scatter = tuple(
            ScatteringRecord(
                sym, _read_segmented(grp["coherent"]), _read_segmented(grp["incoherent"])
            )
            for sym, grp in h5f.get("scattering", {}).items()
        )
        chantler = tuple(
            ChantlerRecord(
                element=sym,
                density=_optional(grp.attrs["density"]),
                energy=grp["energy"][()],
                f1=grp["f1"][()],
                f2=grp["f2"][()],
                mu_photo=grp["mu_photo"][()],
                mu_incoh=grp["mu_incoh"][()],
                mu_total=grp["mu_total"][()],
            )
            for sym, grp in h5f.get("chantler", {}).items()
        )
        waasmaier = tuple(
            WaasmaierRecord(
                atomic_number=int(grp.attrs["atomic_number"]),
                element=_attr_str(grp.attrs, "element"),
                ion=_attr_str(grp.attrs, "ion"),
                offset=float(grp.attrs["offset"]),
                scale=grp["scale"][()],
                exponents=grp["exponents"][()],
            )
            for grp in h5f.get("waasmaier", {}).values()
        )
        logger.debug(
            "HDF5 layout v%d: %d elements, %d photo, %d chantler, %d ions",
            version, len(elements), len(photo), len(chantler), len(waasmaier),
        )
        return XrayDataset(
            version=provenance,
            elements=elements,
            xray_levels=levels,
            photoabsorption=photo,
            scattering=scatter,
            chantler=chantler,
            waasmaier=waasmaier,
            **_read_atomic(h5f),
        )


def _read_atomic(h5f: h5py.File) -> dict:
    """Decode the optional transition, core-hole and detector groups"""
    tables: dict = {}
    if "xray_transitions" in h5f:
        tg = h5f["xray_transitions"]
        tables["xray_transitions"] = tuple(
            XrayTransition(el, line, iupac, ini, fin, float(e), float(i))
            for el, line, iupac, ini, fin, e, i in zip(
                _strings(tg["element"]), _strings(tg["line"]), _strings(tg["iupac"]),
                _strings(tg["initial_level"]), _strings(tg["final_level"]),
                tg["energy"][()], tg["intensity"][()],
            )
        )
    if "coster_kronig" in h5f:
        kg = h5f["coster_kronig"]
        tables["coster_kronig"] = tuple(
            CosterKronigRecord(el, ini, fin, float(p), float(tp))
            for el, ini, fin, p, tp in zip(
                _strings(kg["element"]), _strings(kg["initial_level"]),
                _strings(kg["final_level"]), kg["probability"][()],
                kg["total_probability"][()],
            )
        )
    if "core_widths" in h5f:
        wg = h5f["core_widths"]
        tables["core_widths"] = tuple(
            CoreWidthRecord(int(z), el, edge, float(w))
            for z, el, edge, w in zip(
                wg["atomic_number"][()], _strings(wg["element"]),
                _strings(wg["edge"]), wg["width"][()],
            )
        )
    if "ionization_potentials" in h5f:
        ig = h5f["ionization_potentials"]
        tables["ionization_potentials"] = tuple(
            IonizationPotential(gas, float(p))
            for gas, p in zip(_strings(ig["gas"]), ig["potential"][()])
        )
    if "compton_energies" in h5f:
        cg = h5f["compton_energies"]
        tables["compton"] = ComptonTable(
            incident=cg["incident"][()],
            xray_90deg=cg["xray_90deg"][()],
            xray_mean=cg["xray_mean"][()],
            electron_mean=cg["electron_mean"][()],
        )
    return tables
