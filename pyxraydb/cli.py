#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyXrayDB command-line interface

Quick look-ups against the reference tables:

1. **elements**: List element symbols
2. **info**: Atomic number, name, molar mass and density of an element
3. **mu**: Elemental mass attenuation (cm²/g) at given energies
4. **material**: Linear attenuation (1/cm) of a formula or named material
5. **f0**: Elastic scattering factor of an ion at given q
6. **edges**: Absorption edges of an element
7. **lines**: Fluorescence emission lines of an element
8. **ionchamber**: Photon flux through an ion chamber from its voltage
9. **export**: Write the loaded dataset to HDF5

Usage
-----
::

    python -m pyxraydb.cli mu Fe 8000 10000
    python -m pyxraydb.cli material Fe2O3 10000 --density 5.26
    python -m pyxraydb.cli material kapton 10000
    python -m pyxraydb.cli f0 Fe3+ 0 0.5 1.0
    python -m pyxraydb.cli --dataset full.h5 edges Cu
    python -m pyxraydb.cli lines Fe --level K
    python -m pyxraydb.cli ionchamber nitrogen 1.5 10 10000 --sensitivity 1e-8
    python -m pyxraydb.cli export xraydb.h5 --overwrite
"""

from __future__ import annotations

import argparse
import logging
import sys

from pyxraydb.cross_sections import CrossSectionKind, cross_section
from pyxraydb.database import XrayDB, get_database, load_database
from pyxraydb.edges import xray_edges
from pyxraydb.exceptions import PyXrayDBError
from pyxraydb.ionchamber import ionchamber_fluxes
from pyxraydb.materials import material_mu
from pyxraydb.scattering import f0
from pyxraydb.transitions import xray_lines

logger = logging.getLogger("pyxraydb.cli")

KIND_CHOICES = [kind.value for kind in CrossSectionKind]


def _database(args) -> XrayDB:
    if args.dataset:
        return load_database(args.dataset)
    return get_database()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_elements(args):
    """List every element symbol."""
    print(" ".join(_database(args).elements()))
    return 0


def cmd_info(args):
    """Print the scalar properties of one element."""
    rec = _database(args).element(args.element)
    density = "n/a" if rec.density is None else f"{rec.density:g} g/cm^3"
    print(f"Z:          {rec.atomic_number}")
    print(f"symbol:     {rec.symbol}")
    print(f"name:       {rec.name}")
    print(f"molar mass: {rec.molar_mass:g} g/mol")
    print(f"density:    {density}")
    return 0


def cmd_mu(args):
    """Print elemental mass attenuation at each energy."""
    values = cross_section(args.element, args.energies, args.kind, db=_database(args))
    for energy, value in zip(args.energies, values):
        print(f"{energy:12.2f}  {value:.6g}")
    return 0


def cmd_material(args):
    """Print linear attenuation of a material at each energy."""
    values = material_mu(
        args.material, args.energies, args.density, args.kind, db=_database(args)
    )
    for energy, value in zip(args.energies, values):
        print(f"{energy:12.2f}  {value:.6g}")
    return 0


def cmd_f0(args):
    """Print f0 at each momentum transfer."""
    values = f0(args.ion, args.q, db=_database(args))
    for q, value in zip(args.q, values):
        print(f"{q:8.4f}  {value:.6g}")
    return 0


def cmd_edges(args):
    """Print the absorption edges of an element."""
    edges = xray_edges(args.element, db=_database(args))
    for label, edge in sorted(edges.items(), key=lambda item: -item[1].energy):
        print(
            f"{label:<4s} {edge.energy:12.2f}  yield={edge.fluorescence_yield:.4g}  "
            f"jump={edge.jump_ratio:.4g}"
        )
    return 0


def cmd_lines(args):
    """Print the emission lines of an element."""
    lines = xray_lines(
        args.element, args.level, args.excitation, db=_database(args)
    )
    for label, line in sorted(lines.items(), key=lambda item: -item[1].energy):
        print(
            f"{label:<7s} {line.energy:12.2f}  intensity={line.intensity:.4g}  "
            f"{line.initial_level}-{line.final_level}"
        )
    return 0


def cmd_ionchamber(args):
    """Print photon fluxes through an ion chamber."""
    flux = ionchamber_fluxes(
        args.gas, args.volts, args.length, args.energy,
        sensitivity=args.sensitivity, db=_database(args),
    )
    for name in ("incident", "transmitted", "photo", "incoherent", "coherent"):
        print(f"{name:<12s} {getattr(flux, name):.6g}")
    return 0


def cmd_export(args):
    """Export the loaded dataset to HDF5."""
    from pyxraydb.converters.hdf5 import export_hdf5

    out = export_hdf5(args.output, _database(args), overwrite=args.overwrite)
    print(f"Wrote {out}")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="pyxraydb",
        description="X-ray reference data look-ups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
    python -m pyxraydb.cli info iron
    python -m pyxraydb.cli mu Fe 10000 --kind photo
    python -m pyxraydb.cli material H2O 8000 10000 --density 1.0
    python -m pyxraydb.cli edges 29
""",
    )

    parser.add_argument(
        "--dataset",
        default=None,
        help="Dataset file to load instead of the bundled one "
             "(.json, .json.gz, .h5 or .hdf5)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", help="Query to run")

    sub.add_parser("elements", help="List element symbols")

    p = sub.add_parser("info", help="Show element properties")
    p.add_argument("element", help="Symbol, name or atomic number")

    p = sub.add_parser("mu", help="Elemental mass attenuation, cm^2/g")
    p.add_argument("element", help="Symbol, name or atomic number")
    p.add_argument("energies", type=float, nargs="+", help="Energies in eV")
    p.add_argument("--kind", choices=KIND_CHOICES, default="total")

    p = sub.add_parser("material", help="Material linear attenuation, 1/cm")
    p.add_argument("material", help="Chemical formula or material name")
    p.add_argument("energies", type=float, nargs="+", help="Energies in eV")
    p.add_argument(
        "--density", type=float, default=None,
        help="Density in g/cm^3 (default: from the material table)",
    )
    p.add_argument("--kind", choices=KIND_CHOICES, default="total")

    p = sub.add_parser("f0", help="Elastic scattering factor f0")
    p.add_argument("ion", help="Ion key such as Fe3+, or an element")
    p.add_argument("q", type=float, nargs="+", help="sin(theta)/lambda in 1/angstrom")

    p = sub.add_parser("edges", help="List absorption edges")
    p.add_argument("element", help="Symbol, name or atomic number")

    p = sub.add_parser("lines", help="List fluorescence emission lines")
    p.add_argument("element", help="Symbol, name or atomic number")
    p.add_argument("--level", action="append", help="Initial level, e.g. K (repeatable)")
    p.add_argument("--excitation", type=float, help="Excitation energy in eV")

    p = sub.add_parser("ionchamber", help="Photon flux through an ion chamber")
    p.add_argument("gas", help="Fill gas, e.g. nitrogen or N2")
    p.add_argument("volts", type=float, help="Amplifier output, V")
    p.add_argument("length", type=float, help="Active length, cm")
    p.add_argument("energy", type=float, help="Photon energy, eV")
    p.add_argument("--sensitivity", type=float, default=1.0e-6, help="Amplifier gain, A/V")

    p = sub.add_parser("export", help="Write the dataset to HDF5")
    p.add_argument("output", help="Output .h5 file")
    p.add_argument("--overwrite", action="store_true", help="Overwrite an existing file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "elements": cmd_elements,
        "info": cmd_info,
        "mu": cmd_mu,
        "material": cmd_material,
        "f0": cmd_f0,
        "edges": cmd_edges,
        "lines": cmd_lines,
        "ionchamber": cmd_ionchamber,
        "export": cmd_export,
    }

    try:
        return commands[args.command](args)
    except (PyXrayDBError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
