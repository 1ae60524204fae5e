#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared utilities: interpolation, formula parsing, validation, constants

This sub-package centralises the numeric kernels and low-level helpers
so that none of the query modules duplicates table logic.
"""

from __future__ import annotations
