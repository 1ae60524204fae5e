#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Build the bundled JSON dataset from the xraydb SQLite database

The shipped ``pyxraydb/data/xraydb.json.gz`` is generated from the
SQLite file distributed with the `xraydb <https://pypi.org/project/xraydb/>`_
package (Elam, Chantler and Waasmaier-Kirfel tables for Z = 1..98, plus
emission lines, Coster-Kronig probabilities, core-level widths,
ionization potentials and Compton energies).

The SQLite tables store Elam data as JSON text holding natural logs.
The build decodes them and applies the following clean-up so that every
table satisfies the load-time checks:

* Photoabsorption grids repeat the edge energy to mark a jump.  A
  repeated energy with a different value starts a new segment, labelled
  with the tabulated edge within 0.2 % of it (or ``null``).  A repeat
  with the same value is dropped, and so is a point below the previous
  energy.  A third copy of an edge energy replaces the value of the
  one-point segment it follows.
* Scattering and Chantler grids keep only strictly increasing energies.

Usage
-----
::

    pip install pyxraydb[build]
    python -m pyxraydb.converters.bundle pyxraydb/data/xraydb.json.gz --overwrite
"""

from __future__ import annotations

import argparse
import gzip
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

try:
    from sqlalchemy import MetaData, create_engine
    from sqlalchemy.exc import SQLAlchemyError
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'sqlalchemy' package is required to build the bundled dataset.  "
        "Install it with: pip install pyxraydb[build]"
    ) from _exc

from pyxraydb.exceptions import ConversionError

logger = logging.getLogger(__name__)

EDGE_TOLERANCE: float = 0.002
"""Relative distance within which a segment start is matched to an edge."""

_CHANTLER_COLUMNS = ("f1", "f2", "mu_photo", "mu_incoh", "mu_total")


# ---------------------------------------------------------------------------
# Table clean-up
# ---------------------------------------------------------------------------

def edge_label(energy: float, edges: Mapping[str, float]) -> str | None:
    """Label of the tabulated edge nearest to *energy*, if within tolerance"""
    best = None
    best_distance = EDGE_TOLERANCE
    for label, edge_energy in edges.items():
        if edge_energy is None or not edge_energy > 0:
            continue
        distance = abs(edge_energy - energy) / energy
        if distance < best_distance:
            best, best_distance = label, distance
    return best


def split_segments(
    log_energy: Sequence[float],
    log_values: Sequence[float],
    edges: Mapping[str, float],
) -> list[dict[str, Any]]:
    """Split an Elam photoabsorption grid into edge segments

    Parameters
    ----------
    log_energy, log_values : sequence of float
        Natural logs of the grid energies (eV) and values (cm²/g).
    edges : mapping of str to float
        Edge label → absorption-edge energy (eV) for the element.

    Returns
    -------
    list of dict
        ``{"edge", "energy", "values"}`` per segment in linear space,
        the first with ``"edge": None``.

    Examples
    --------
    >>> segs = split_segments([0.0, 1.0, 1.0, 2.0], [5.0, 4.0, 6.0, 5.0], {})
    >>> [len(s["energy"]) for s in segs]
    [2, 2]
    """
    segments: list[dict[str, Any]] = [{"edge": None, "le": [], "lv": []}]
    for le, lv in zip(log_energy, log_values):
        cur = segments[-1]
        if cur["le"] and le < cur["le"][-1]:
            continue
        if cur["le"] and le == cur["le"][-1]:
            if lv == cur["lv"][-1]:
                continue
            if len(cur["le"]) == 1 and len(segments) > 1:
                cur["lv"][-1] = lv
                continue
            segments.append(
                {"edge": edge_label(math.exp(le), edges), "le": [le], "lv": [lv]}
            )
            continue
        cur["le"].append(le)
        cur["lv"].append(lv)
    return [
        {
            "edge": seg["edge"],
            "energy": [math.exp(v) for v in seg["le"]],
            "values": [math.exp(v) for v in seg["lv"]],
        }
        for seg in segments
    ]


def increasing_points(values: Sequence[float]) -> list[int]:
    """Indices of the points that extend a strictly increasing run

    Examples
    --------
    >>> increasing_points([1.0, 2.0, 2.0, 1.5, 3.0])
    [0, 1, 4]
    """
    keep: list[int] = []
    for i, value in enumerate(values):
        if not keep or value > values[keep[-1]]:
            keep.append(i)
    return keep


# ---------------------------------------------------------------------------
# SQLite access
# ---------------------------------------------------------------------------

def default_sqlite_path() -> Path:
    """Location of the SQLite file shipped with the ``xraydb`` package"""
    try:
        import xraydb
    except ImportError as exc:
        raise ImportError(
            "The 'xraydb' package provides the source database.  "
            "Install it with: pip install pyxraydb[build]"
        ) from exc
    return Path(xraydb.__file__).resolve().parent / "xraydb.sqlite"


def _read_tables(sqlite_path: Path) -> dict[str, list[dict[str, Any]]]:
    engine = create_engine(f"sqlite:///{sqlite_path}")
    try:
        meta = MetaData()
        meta.reflect(bind=engine)
        rows = {}
        with engine.connect() as conn:
            for name, table in meta.tables.items():
                stmt = table.select()
                primary = list(table.primary_key.columns)
                if primary:
                    stmt = stmt.order_by(*primary)
                rows[name] = [dict(row) for row in conn.execute(stmt).mappings()]
    finally:
        engine.dispose()
    logger.debug("Read %d tables from %s", len(rows), sqlite_path)
    return rows


def _loads(text: str) -> list[float]:
    return json.loads(text)


# ---------------------------------------------------------------------------
# Payload assembly
# ---------------------------------------------------------------------------

def build_payload(tables: Mapping[str, Sequence[Mapping[str, Any]]]) -> dict[str, Any]:
    """Assemble the bundled JSON object from xraydb table rows

    Parameters
    ----------
    tables : mapping
        Table name → list of row mappings, as stored in the xraydb
        SQLite file.

    Returns
    -------
    dict
        The JSON object read by :class:`~pyxraydb.readers.bundled.BundledReader`.
    """
    version = max(tables["Version"], key=lambda row: row["id"])

    edges: dict[str, dict[str, float]] = {}
    for row in tables["xray_levels"]:
        edges.setdefault(row["element"], {})[row["iupac_symbol"]] = row["absorption_edge"]

    photoabsorption = []
    for row in tables["photoabsorption"]:
        segments = split_segments(
            _loads(row["log_energy"]),
            _loads(row["log_photoabsorption"]),
            edges.get(row["element"], {}),
        )
        photoabsorption.append({"element": row["element"], "segments": segments})

    scattering = []
    for row in tables["scattering"]:
        log_energy = _loads(row["log_energy"])
        keep = increasing_points(log_energy)
        coherent = _loads(row["log_coherent_scatter"])
        incoherent = _loads(row["log_incoherent_scatter"])
        scattering.append({
            "element": row["element"],
            "energy": [math.exp(log_energy[i]) for i in keep],
            "coherent": [math.exp(coherent[i]) for i in keep],
            "incoherent": [math.exp(incoherent[i]) for i in keep],
        })

    chantler = []
    for row in tables["Chantler"]:
        energy = _loads(row["energy"])
        keep = increasing_points(energy)
        record = {"element": row["element"], "density": row["density"]}
        for column in _CHANTLER_COLUMNS:
            values = _loads(row[column])
            record[column] = [values[i] for i in keep]
        record["energy"] = [energy[i] for i in keep]
        chantler.append(record)

    compton = tables.get("Compton_energies") or []
    payload = {
        "version": {
            "tag": version["tag"],
            "date": version["date"],
            "notes": f"Elam, Chantler and Waasmaier-Kirfel tables from xraydb {version['tag']}",
        },
        "elements": [
            {
                "atomic_number": row["atomic_number"],
                "symbol": row["element"],
                "name": row["name"],
                "molar_mass": row["molar_mass"],
                "density": row["density"],
            }
            for row in tables["elements"]
        ],
        "xray_levels": [
            {
                "element": row["element"],
                "edge": row["iupac_symbol"],
                "energy": row["absorption_edge"],
                "fluorescence_yield": row["fluorescence_yield"],
                "jump_ratio": row["jump_ratio"],
            }
            for row in tables["xray_levels"]
        ],
        "photoabsorption": photoabsorption,
        "scattering": scattering,
        "chantler": chantler,
        "waasmaier": [
            {
                "atomic_number": row["atomic_number"],
                "element": row["element"],
                "ion": row["ion"],
                "offset": row["offset"],
                "scale": _loads(row["scale"]),
                "exponents": _loads(row["exponents"]),
            }
            for row in tables["Waasmaier"]
        ],
        "xray_transitions": [
            {
                "element": row["element"],
                "line": row["siegbahn_symbol"],
                "iupac": row["iupac_symbol"],
                "initial_level": row["initial_level"],
                "final_level": row["final_level"],
                "energy": row["emission_energy"],
                "intensity": row["intensity"],
            }
            for row in tables.get("xray_transitions", [])
        ],
        "coster_kronig": [
            {
                "element": row["element"],
                "initial_level": row["initial_level"],
                "final_level": row["final_level"],
                "probability": row["transition_probability"],
                "total_probability": row["total_transition_probability"],
            }
            for row in tables.get("Coster_Kronig", [])
        ],
        "core_widths": [
            {
                "atomic_number": row["atomic_number"],
                "element": row["element"],
                "edge": row["edge"],
                "width": row["width"],
            }
            for row in tables.get("corelevel_widths", [])
        ],
        "ionization_potentials": [
            {"gas": row["gas"], "potential": row["potential"]}
            for row in tables.get("ionization_potentials", [])
        ],
    }
    if compton:
        payload["compton_energies"] = {
            column: _loads(compton[0][column])
            for column in ("incident", "xray_90deg", "xray_mean", "electron_mean")
        }
    return payload


def build_bundle(
    output_path: Path | str,
    sqlite_path: Path | str | None = None,
    *,
    overwrite: bool = False,
) -> Path:
    """Write the bundled ``.json.gz`` dataset from an xraydb SQLite file

    Parameters
    ----------
    output_path : Path | str
        Output file; gzip-compressed when it ends in ``.gz``.
    sqlite_path : Path | str, optional
        Source database.  Defaults to the file shipped with ``xraydb``.
    overwrite : bool, optional
        Replace an existing output file.

    Returns
    -------
    Path
        The written file.

    Raises
    ------
    ConversionError
        If the output exists and *overwrite* is ``False``, the source
        database is missing or lacks a required table, or reading it
        fails.
    """
    out = Path(output_path)
    if out.exists() and not overwrite:
        raise ConversionError(
            f"Output file {out} already exists and overwrite=False."
        )
    source = Path(sqlite_path) if sqlite_path is not None else default_sqlite_path()
    if not source.is_file():
        raise ConversionError(f"xraydb database not found: {source}")

    try:
        payload = build_payload(_read_tables(source))
    except SQLAlchemyError as exc:
        raise ConversionError(f"Failed to read {source}: {exc}") from exc
    except KeyError as exc:
        raise ConversionError(f"{source} lacks table or column {exc}") from exc

    out.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, separators=(",", ":"))
    if out.suffix == ".gz":
        with gzip.open(out, "wt", encoding="utf-8") as fh:
            fh.write(text)
    else:
        out.write_text(text, encoding="utf-8")

    logger.info(
        "Wrote bundled dataset %s (xraydb %s, %d elements, %d photoabsorption tables)",
        out, payload["version"]["tag"], len(payload["elements"]),
        len(payload["photoabsorption"]),
    )
    return out


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``python -m pyxraydb.converters.bundle``"""
    parser = argparse.ArgumentParser(
        prog="python -m pyxraydb.converters.bundle",
        description="Build the bundled PyXrayDB dataset from the xraydb SQLite file.",
    )
    parser.add_argument("output", help="Output .json or .json.gz file")
    parser.add_argument("--sqlite", help="Source database (default: the one shipped with xraydb)")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite an existing file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        build_bundle(args.output, args.sqlite, overwrite=args.overwrite)
    except ConversionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
