#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Indexed, read-only handle over the X-ray reference tables

:class:`XrayDB` wraps one decoded :class:`~pyxraydb.models.records.XrayDataset`
and builds every index exactly once, in its constructor:

* atomic number → element position
* case-folded symbol / name → element position
* case-folded symbol → photoabsorption, scattering, Chantler position
* case-folded ion key → Waasmaier-Kirfel position
* case-folded symbol → absorption edges of that element
* case-folded symbol → emission lines and Coster-Kronig pairs
* atomic number → core-level widths
* case-folded gas → ionization potential

Every accessor is a dictionary look-up; no query ever scans a table.
Nothing mutates the dataset or an index after construction, so a built
handle can be shared by any number of threads without locking.

Shared handle
-------------
:func:`get_database` returns the process-wide handle, building it on
first use behind a lock so that concurrent first callers construct it
once and all observe the same instance.  The dataset comes from the
``PYXRAYDB_DATASET`` environment variable if set, otherwise from the
file bundled with the package.  :func:`load_database` builds a private
handle over any dataset file and never touches the shared one.
"""

from __future__ import annotations

import logging
import os
import re
import threading
import time
from pathlib import Path
from typing import Union

import numpy as np

from pyxraydb.exceptions import UnknownElement, UnknownGas, UnknownIon, ValidationError
from pyxraydb.models.records import (
    ChantlerRecord,
    CosterKronigRecord,
    ElementRecord,
    PhotoabsorptionRecord,
    ScatteringRecord,
    WaasmaierRecord,
    XrayDataset,
    XrayLevel,
    XrayTransition,
)
from pyxraydb.readers import BUNDLED_DATASET, reader_for

logger = logging.getLogger(__name__)

DATASET_ENV: str = "PYXRAYDB_DATASET"
"""Environment variable naming an alternative dataset file."""

ElementId = Union[str, int]
"""An element symbol, name, atomic-number string, or atomic number."""

_CHARGE_SUFFIX = re.compile(r"^\s*([A-Za-z]+)\d*[+-]\s*$")


def normalize_key(text: str) -> str:
    """Trim and case-fold a symbol, name or ion key

    The one normalisation applied both when indices are built and when
    they are queried.
    """
    return text.strip().casefold()


def _build_index(keys, label: str) -> dict:
    index: dict = {}
    for pos, key in enumerate(keys):
        if key in index:
            raise ValidationError(f"Duplicate {label} key {key!r} in dataset.")
        index[key] = pos
    return index


class XrayDB:
    """Read-only, indexed view of one X-ray reference dataset

    Parameters
    ----------
    dataset : XrayDataset
        Decoded tables.  The handle keeps a reference and never
        modifies it.
    source : str, optional
        Where the dataset came from, for diagnostics.

    Raises
    ------
    ValidationError
        If two records of one table share a key.

    Examples
    --------
    >>> db = get_database()
    >>> db.resolve_element("iron") == db.resolve_element("26") == 26
    True
    >>> db.symbol("fe")
    'Fe'
    """

    def __init__(self, dataset: XrayDataset, source: str | None = None) -> None:
        self.dataset = dataset
        self.source = source

        self._z_index = _build_index(
            (rec.atomic_number for rec in dataset.elements), "atomic number"
        )
        self._symbol_index = _build_index(
            (normalize_key(rec.symbol) for rec in dataset.elements), "symbol"
        )
        self._name_index = _build_index(
            (normalize_key(rec.name) for rec in dataset.elements), "element name"
        )
        self._photo_index = _build_index(
            (normalize_key(rec.element) for rec in dataset.photoabsorption),
            "photoabsorption",
        )
        self._scatter_index = _build_index(
            (normalize_key(rec.element) for rec in dataset.scattering), "scattering"
        )
        self._chantler_index = _build_index(
            (normalize_key(rec.element) for rec in dataset.chantler), "Chantler"
        )
        self._ion_index = _build_index(
            (normalize_key(rec.ion) for rec in dataset.waasmaier), "ion"
        )

        levels: dict[str, dict[str, XrayLevel]] = {}
        for level in dataset.xray_levels:
            edges = levels.setdefault(normalize_key(level.element), {})
            if level.edge in edges:
                raise ValidationError(
                    f"Duplicate edge {level.edge!r} for element {level.element!r}."
                )
            edges[level.edge] = level
        self._levels = levels

        lines: dict[str, list[XrayTransition]] = {}
        for trans in dataset.xray_transitions:
            lines.setdefault(normalize_key(trans.element), []).append(trans)
        self._lines = lines

        coster_kronig: dict[str, dict[tuple[str, str], CosterKronigRecord]] = {}
        for ck in dataset.coster_kronig:
            pairs = coster_kronig.setdefault(normalize_key(ck.element), {})
            pairs[(ck.initial_level, ck.final_level)] = ck
        self._coster_kronig = coster_kronig

        widths: dict[int, dict[str, float]] = {}
        for rec in dataset.core_widths:
            widths.setdefault(rec.atomic_number, {})[rec.edge] = rec.width
        self._widths = widths

        self._gas_index = _build_index(
            (normalize_key(ip.gas) for ip in dataset.ionization_potentials), "gas"
        )

        logger.debug(
            "Built indices: %d Z, %d symbols, %d names, %d photo, %d scatter, "
            "%d chantler, %d ions, %d elements with edges, %d with lines, %d gases",
            len(self._z_index), len(self._symbol_index), len(self._name_index),
            len(self._photo_index), len(self._scatter_index),
            len(self._chantler_index), len(self._ion_index), len(self._levels),
            len(self._lines), len(self._gas_index),
        )

    def __repr__(self) -> str:
        return (
            f"XrayDB(source={self.source!r}, elements={len(self.dataset.elements)}, "
            f"version={self.dataset.version.get('tag')!r})"
        )

    # -- resolution --------------------------------------------------------

    def resolve_element(self, identifier: ElementId) -> int:
        """Resolve a symbol, name or atomic number to the atomic number

        Numeric strings are looked up by atomic number only; any other
        string is tried as a symbol, then as a name.  Comparison ignores
        case and surrounding whitespace.

        Parameters
        ----------
        identifier : str | int
            ``"Fe"``, ``"fe"``, ``"iron"``, ``"26"``, ``" 26 "`` or ``26``.

        Returns
        -------
        int
            Atomic number.

        Raises
        ------
        UnknownElement
            If nothing matches.  The exception carries *identifier*
            exactly as given.
        TypeError
            If *identifier* is neither a string nor an integer.
        """
        if isinstance(identifier, (int, np.integer)) and not isinstance(identifier, bool):
            if int(identifier) in self._z_index:
                return int(identifier)
            raise UnknownElement(identifier)
        if not isinstance(identifier, str):
            raise TypeError(
                f"element identifier must be str or int, got {type(identifier).__name__}"
            )

        key = normalize_key(identifier)
        if key.isascii() and key.isdigit():
            z = int(key)
            if z in self._z_index:
                return z
            raise UnknownElement(identifier)

        pos = self._symbol_index.get(key)
        if pos is None:
            pos = self._name_index.get(key)
        if pos is None:
            raise UnknownElement(identifier)
        return self.dataset.elements[pos].atomic_number

    def element(self, identifier: ElementId) -> ElementRecord:
        """Return the element record for any element identifier"""
        return self.element_by_z(self.resolve_element(identifier))

    # -- indexed accessors -------------------------------------------------

    def element_by_z(self, z: int) -> ElementRecord:
        """Return the element record with atomic number *z*"""
        try:
            return self.dataset.elements[self._z_index[z]]
        except KeyError:
            raise UnknownElement(z) from None

    def photo_by_symbol(self, symbol: str) -> PhotoabsorptionRecord:
        """Return the photoabsorption record of element *symbol*"""
        try:
            return self.dataset.photoabsorption[self._photo_index[normalize_key(symbol)]]
        except KeyError:
            raise UnknownElement(symbol) from None

    def scatter_by_symbol(self, symbol: str) -> ScatteringRecord:
        """Return the scattering record of element *symbol*"""
        try:
            return self.dataset.scattering[self._scatter_index[normalize_key(symbol)]]
        except KeyError:
            raise UnknownElement(symbol) from None

    def chantler_by_symbol(self, symbol: str) -> ChantlerRecord:
        """Return the Chantler record of element *symbol*"""
        try:
            return self.dataset.chantler[self._chantler_index[normalize_key(symbol)]]
        except KeyError:
            raise UnknownElement(symbol) from None

    def waasmaier_by_ion(self, ion: ElementId) -> WaasmaierRecord:
        """Return the Waasmaier-Kirfel record for an ion key

        A bare element identifier (``"Fe"``, ``"iron"``, ``"26"``)
        selects the neutral-atom entry.

        Raises
        ------
        UnknownIon
            If the key is not tabulated but its base element exists.
        UnknownElement
            If the base element itself cannot be resolved.
        """
        if isinstance(ion, str):
            pos = self._ion_index.get(normalize_key(ion))
            if pos is not None:
                return self.dataset.waasmaier[pos]

        try:
            symbol = self.symbol(ion)
        except UnknownElement:
            symbol = None
        if symbol is not None:
            pos = self._ion_index.get(normalize_key(symbol))
            if pos is not None:
                return self.dataset.waasmaier[pos]
            raise UnknownIon(ion)

        # "Fe5+" names a known element with an untabulated charge
        match = _CHARGE_SUFFIX.match(str(ion))
        if match is not None:
            base = normalize_key(match.group(1))
            if base in self._symbol_index or base in self._name_index:
                raise UnknownIon(ion)
        raise UnknownElement(ion)

    def xray_levels(self, element: ElementId) -> dict[str, XrayLevel]:
        """Return edge label → :class:`XrayLevel` for *element*

        The result is a new dictionary; an element without tabulated
        edges gives an empty one.
        """
        symbol = self.symbol(element)
        return dict(self._levels.get(normalize_key(symbol), {}))

    def xray_transitions(self, element: ElementId) -> list[XrayTransition]:
        """Return the emission lines of *element*, in table order"""
        symbol = self.symbol(element)
        return list(self._lines.get(normalize_key(symbol), ()))

    def coster_kronig(
        self, element: ElementId
    ) -> dict[tuple[str, str], CosterKronigRecord]:
        """Return ``(initial, final)`` → Coster-Kronig record for *element*"""
        symbol = self.symbol(element)
        return dict(self._coster_kronig.get(normalize_key(symbol), {}))

    def core_widths(self, element: ElementId) -> dict[str, float]:
        """Return edge label → core-level width (eV) for *element*"""
        return dict(self._widths.get(self.resolve_element(element), {}))

    def ionization_potential(self, gas: str) -> float:
        """Return the energy per ion pair (eV) of *gas*

        Gas names and formulas are matched ignoring case
        (``"nitrogen"``, ``"N2"``, ``"Ar"``).

        Raises
        ------
        UnknownGas
            If *gas* is not tabulated.
        """
        pos = self._gas_index.get(normalize_key(gas))
        if pos is None:
            raise UnknownGas(gas)
        return self.dataset.ionization_potentials[pos].potential

    def ionization_gases(self) -> list[str]:
        """Return every gas with a tabulated ionization potential"""
        return [ip.gas for ip in self.dataset.ionization_potentials]

    # -- element properties ------------------------------------------------

    def atomic_number(self, element: ElementId) -> int:
        """Return the atomic number of *element*"""
        return self.resolve_element(element)

    def symbol(self, element: ElementId) -> str:
        """Return the tabulated symbol of *element*"""
        return self.element(element).symbol

    def atomic_name(self, element: ElementId) -> str:
        """Return the tabulated name of *element*"""
        return self.element(element).name

    def molar_mass(self, element: ElementId) -> float:
        """Return the molar mass of *element* in g/mol"""
        return self.element(element).molar_mass

    def density(self, element: ElementId) -> float | None:
        """Return the reference density of *element* in g/cm³, or ``None``"""
        return self.element(element).density

    def elements(self) -> list[str]:
        """Return every element symbol, in atomic-number order"""
        return [
            rec.symbol
            for rec in sorted(self.dataset.elements, key=lambda r: r.atomic_number)
        ]

    def f0_ions(self, element: ElementId | None = None) -> list[str]:
        """Return the tabulated ion keys, optionally for one element only"""
        if element is None:
            return [rec.ion for rec in self.dataset.waasmaier]
        symbol = self.symbol(element)
        return [rec.ion for rec in self.dataset.waasmaier if rec.element == symbol]


# ---------------------------------------------------------------------------
# Construction and the shared handle
# ---------------------------------------------------------------------------

def load_database(path: Path | str, *, validate: bool = True) -> XrayDB:
    """Build a private :class:`XrayDB` over the dataset file *path*

    The reader is chosen from the file suffix (``.json``, ``.json.gz``,
    ``.h5``, ``.hdf5``).  The shared handle is not affected.

    Raises
    ------
    FileFormatError
        If the file is missing or cannot be decoded.
    ValidationError
        If *validate* is ``True`` and a table violates an invariant.
    """
    filepath = Path(path)
    start = time.perf_counter()
    dataset = reader_for(filepath).read(filepath, validate=validate)
    db = XrayDB(dataset, source=str(filepath))
    logger.info(
        "Loaded X-ray dataset %s (%s): %d elements, %d photoabsorption, "
        "%d Chantler, %d ion records in %.3f s",
        filepath, dataset.version.get("tag", "untagged"), len(dataset.elements),
        len(dataset.photoabsorption), len(dataset.chantler), len(dataset.waasmaier),
        time.perf_counter() - start,
    )
    return db


def default_dataset_path() -> Path:
    """Return the dataset file the shared handle is built from"""
    override = os.environ.get(DATASET_ENV)
    if override:
        return Path(override).expanduser()
    return BUNDLED_DATASET


_DB: XrayDB | None = None
_DB_LOCK = threading.Lock()


def get_database() -> XrayDB:
    """Return the process-wide :class:`XrayDB`, building it on first use

    Safe to call from several threads at once: exactly one of them
    builds the handle and every caller receives the same instance.
    """
    global _DB
    db = _DB
    if db is None:
        with _DB_LOCK:
            if _DB is None:
                _DB = load_database(default_dataset_path())
            db = _DB
    return db


def resolve_db(db: XrayDB | None = None) -> XrayDB:
    """Return *db*, or the shared handle when *db* is ``None``"""
    return get_database() if db is None else db
