#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Reader for the bundled gzip-compressed JSON dataset

The package ships its reference tables as ``pyxraydb/data/xraydb.json.gz``.
The same reader accepts an uncompressed ``.json`` file with the same
layout.

File Layout
-----------
A single JSON object::

    {
      "version":         {"tag": ..., "date": ..., "notes": ...},
      "elements":        [{"atomic_number", "symbol", "name",
                           "molar_mass", "density"}, ...],
      "xray_levels":     [{"element", "edge", "energy",
                           "fluorescence_yield", "jump_ratio"}, ...],
      "photoabsorption": [{"element", "segments": [{"edge", "energy",
                                                    "values"}, ...]}, ...],
      "scattering":      [{"element", "energy", "coherent",
                           "incoherent"}, ...],
      "chantler":        [{"element", "density", "energy", "f1", "f2",
                           "mu_photo", "mu_incoh", "mu_total"}, ...],
      "waasmaier":       [{"atomic_number", "element", "ion", "offset",
                           "scale", "exponents"}, ...],
      "xray_transitions":      [{"element", "line", "iupac",
                                 "initial_level", "final_level",
                                 "energy", "intensity"}, ...],
      "coster_kronig":         [{"element", "initial_level", "final_level",
                                 "probability", "total_probability"}, ...],
      "core_widths":           [{"atomic_number", "element", "edge",
                                 "width"}, ...],
      "ionization_potentials": [{"gas", "potential"}, ...],
      "compton_energies":      {"incident", "xray_90deg", "xray_mean",
                                "electron_mean"}
    }

Photoabsorption segments are split at absorption edges; the first
segment has ``"edge": null``.  Scattering tables have no edges and are
stored on a single grid.  Every key after ``"elements"`` is optional.

The shipped file is produced by :mod:`pyxraydb.converters.bundle`.
"""

from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path

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

BUNDLED_DATASET: Path = Path(__file__).resolve().parent.parent / "data" / "xraydb.json.gz"
"""Location of the dataset shipped with the package."""


class BundledReader(BaseReader):
    """Reader for ``.json`` and ``.json.gz`` dataset files

    Examples
    --------
    >>> dataset = BundledReader().read(BUNDLED_DATASET)
    >>> dataset.elements[25].symbol
    'Fe'
    """

    def read(
        self,
        path: Path | str,
        *,
        validate: bool = True,
    ) -> XrayDataset:
        """Decode a JSON dataset file

        Parameters
        ----------
        path : Path | str
            Path to a ``.json`` or ``.json.gz`` file.
        validate : bool, optional
            Run load-time validation.  Default ``True``.

        Returns
        -------
        XrayDataset

        Raises
        ------
        FileFormatError
            If the file is missing, is not valid (gzip-compressed) JSON,
            or lacks a required field.
        ValidationError
            If *validate* is ``True`` and a table violates an invariant.
        """
        filepath = Path(path)
        logger.debug("Opening JSON dataset: %s", filepath)

        if not filepath.is_file():
            raise FileFormatError(f"Dataset file not found: {filepath}")

        opener = gzip.open if filepath.suffix == ".gz" else open
        try:
            with opener(filepath, "rt", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, EOFError, ValueError) as exc:
            raise FileFormatError(f"Failed to decode {filepath}: {exc}") from exc

        try:
            dataset = self._build(payload)
        except (KeyError, TypeError, IndexError, ValueError) as exc:
            raise FileFormatError(
                f"Dataset {filepath} has an unexpected layout: {exc!r}"
            ) from exc

        if validate:
            self.validate_dataset(dataset)
        return dataset

    @staticmethod
    def _build(payload: dict) -> XrayDataset:
        elements = tuple(
            ElementRecord(
                atomic_number=int(e["atomic_number"]),
                symbol=e["symbol"],
                name=e["name"],
                molar_mass=float(e["molar_mass"]),
                density=None if e.get("density") is None else float(e["density"]),
            )
            for e in payload["elements"]
        )
        levels = tuple(
            XrayLevel(
                element=lv["element"],
                edge=lv["edge"],
                energy=float(lv["energy"]),
                fluorescence_yield=float(lv["fluorescence_yield"]),
                jump_ratio=float(lv["jump_ratio"]),
            )
            for lv in payload.get("xray_levels", [])
        )
        photo = tuple(
            PhotoabsorptionRecord(
                element=p["element"],
                photoabsorption=SegmentedTable(tuple(
                    TableSegment(s["energy"], s["values"], s.get("edge"))
                    for s in p["segments"]
                )),
            )
            for p in payload.get("photoabsorption", [])
        )
        scatter = tuple(
            ScatteringRecord(
                element=s["element"],
                coherent=SegmentedTable((TableSegment(s["energy"], s["coherent"]),)),
                incoherent=SegmentedTable((TableSegment(s["energy"], s["incoherent"]),)),
            )
            for s in payload.get("scattering", [])
        )
        chantler = tuple(
            ChantlerRecord(
                element=c["element"],
                density=None if c.get("density") is None else float(c["density"]),
                energy=c["energy"],
                f1=c["f1"],
                f2=c["f2"],
                mu_photo=c["mu_photo"],
                mu_incoh=c["mu_incoh"],
                mu_total=c["mu_total"],
            )
            for c in payload.get("chantler", [])
        )
        waasmaier = tuple(
            WaasmaierRecord(
                atomic_number=int(w["atomic_number"]),
                element=w["element"],
                ion=w["ion"],
                offset=float(w["offset"]),
                scale=w["scale"],
                exponents=w["exponents"],
            )
            for w in payload.get("waasmaier", [])
        )
        transitions = tuple(
            XrayTransition(
                element=t["element"],
                line=t["line"],
                iupac=t["iupac"],
                initial_level=t["initial_level"],
                final_level=t["final_level"],
                energy=float(t["energy"]),
                intensity=float(t["intensity"]),
            )
            for t in payload.get("xray_transitions", [])
        )
        coster_kronig = tuple(
            CosterKronigRecord(
                element=ck["element"],
                initial_level=ck["initial_level"],
                final_level=ck["final_level"],
                probability=float(ck["probability"]),
                total_probability=float(ck["total_probability"]),
            )
            for ck in payload.get("coster_kronig", [])
        )
        widths = tuple(
            CoreWidthRecord(
                atomic_number=int(w["atomic_number"]),
                element=w["element"],
                edge=w["edge"],
                width=float(w["width"]),
            )
            for w in payload.get("core_widths", [])
        )
        potentials = tuple(
            IonizationPotential(gas=ip["gas"], potential=float(ip["potential"]))
            for ip in payload.get("ionization_potentials", [])
        )
        compton = payload.get("compton_energies")
        if compton is not None:
            compton = ComptonTable(
                incident=compton["incident"],
                xray_90deg=compton["xray_90deg"],
                xray_mean=compton["xray_mean"],
                electron_mean=compton["electron_mean"],
            )
        return XrayDataset(
            version=dict(payload.get("version", {})),
            elements=elements,
            xray_levels=levels,
            photoabsorption=photo,
            scattering=scatter,
            chantler=chantler,
            waasmaier=waasmaier,
            xray_transitions=transitions,
            coster_kronig=coster_kronig,
            core_widths=widths,
            ionization_potentials=potentials,
            compton=compton,
        )
