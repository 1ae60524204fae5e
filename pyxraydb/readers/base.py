#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Abstract base class for all dataset readers

Every concrete reader (bundled JSON, HDF5) inherits from
:class:`BaseReader` and implements the :meth:`read` method, which
returns a :class:`~pyxraydb.models.records.XrayDataset`.  Load-time
validation of the decoded tables is shared here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pyxraydb.exceptions import ValidationError
from pyxraydb.models.records import SegmentedTable, XrayDataset
from pyxraydb.utils.validation import (
    validate_atomic_number,
    validate_segments,
    validate_table,
)

logger = logging.getLogger(__name__)


class BaseReader(ABC):
    """Abstract base for X-ray reference dataset readers

    Subclasses must override :meth:`read` to decode one storage format
    into the record models and then call :meth:`validate_dataset`
    unless the caller disabled validation.

    Notes
    -----
    Readers never write files; that is the responsibility of the
    converter layer.  The dependency direction is::

        utils ← models ← readers ← database ← converters
    """

    @abstractmethod
    def read(
        self,
        path: Path | str,
        *,
        validate: bool = True,
    ) -> XrayDataset:
        """Decode a dataset file and return the typed dataset model

        Parameters
        ----------
        path : Path | str
            Filesystem path to the dataset file.
        validate : bool, optional
            If ``True`` (default), check every table against the
            record invariants.

        Raises
        ------
        FileFormatError
            If the file is missing or cannot be decoded.
        ValidationError
            If *validate* is ``True`` and any check fails.
        """
        ...

    def validate_dataset(self, dataset: XrayDataset) -> None:
        """Run the load-time checks over every table of *dataset*

        Raises
        ------
        ValidationError
            On the first violated invariant.
        """
        seen_z: set[int] = set()
        seen_symbols: set[str] = set()
        for rec in dataset.elements:
            validate_atomic_number(rec.atomic_number)
            if rec.atomic_number in seen_z or rec.symbol in seen_symbols:
                raise ValidationError(
                    f"Duplicate element record Z={rec.atomic_number} ({rec.symbol})."
                )
            if not rec.molar_mass > 0:
                raise ValidationError(
                    f"Element {rec.symbol} has non-positive molar mass {rec.molar_mass}."
                )
            seen_z.add(rec.atomic_number)
            seen_symbols.add(rec.symbol)

        for rec in dataset.photoabsorption:
            _validate_segmented(rec.photoabsorption, f"{rec.element}/photo")
        for rec in dataset.scattering:
            _validate_segmented(rec.coherent, f"{rec.element}/coherent")
            _validate_segmented(rec.incoherent, f"{rec.element}/incoherent")
        for rec in dataset.chantler:
            label = f"{rec.element}/chantler"
            validate_table(rec.energy, rec.f1, f"{label}/f1", signed=True)
            for column in ("f2", "mu_photo", "mu_incoh", "mu_total"):
                validate_table(rec.energy, getattr(rec, column), f"{label}/{column}")
        for rec in dataset.waasmaier:
            if rec.scale.shape != rec.exponents.shape:
                raise ValidationError(
                    f"Ion {rec.ion}: {rec.scale.size} scale factors but "
                    f"{rec.exponents.size} exponents."
                )
        for rec in dataset.core_widths:
            if not rec.width >= 0:
                raise ValidationError(
                    f"Core width of {rec.element} {rec.edge} is negative: {rec.width}."
                )
        for rec in dataset.ionization_potentials:
            if not rec.potential > 0:
                raise ValidationError(
                    f"Ionization potential of {rec.gas!r} must be positive, "
                    f"got {rec.potential}."
                )
        if dataset.compton is not None:
            for column in ("xray_90deg", "xray_mean", "electron_mean"):
                validate_table(
                    dataset.compton.incident,
                    getattr(dataset.compton, column),
                    f"compton/{column}",
                )
        logger.debug(
            "Validated %d elements, %d photo, %d scatter, %d chantler, %d f0 records.",
            len(dataset.elements), len(dataset.photoabsorption),
            len(dataset.scattering), len(dataset.chantler), len(dataset.waasmaier),
        )


def _validate_segmented(table: SegmentedTable, label: str) -> None:
    for k, seg in enumerate(table.segments):
        validate_table(seg.energy, seg.values, f"{label}[{k}]")
    validate_segments([seg.energy for seg in table.segments], label)
