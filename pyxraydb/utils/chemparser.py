#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Chemical formula parser

Turns formula text such as ``"Fe2O3"``, ``"Ca(NO3)2"`` or
``"(N2)0.78(O2)0.21Ar0.01"`` into an ordered list of
``(symbol, count)`` pairs.

Grammar
-------
::

    sequence := item*
    item     := (NAME | "(" sequence ")") NUMBER?
    NAME     := uppercase letter followed by lowercase letters
    NUMBER   := digits ["." digits] [("e" | "E") ["+" | "-"] digits]

Spaces are ignored, a count may start with a bare ``"."`` (``"Fe.7"``),
and ``D`` (deuterium) is counted as ``H``.

The parser is purely syntactic: ``"Xx2O"`` parses to
``[("Xx", 2.0), ("O", 1.0)]`` and it is the caller's job to reject the
unknown symbol.
"""

from __future__ import annotations

import re

from pyxraydb.exceptions import EmptyFormula, InvalidFormula

_TOKEN_RE = re.compile(
    r"(?P<name>[A-Z][a-z]*)"
    r"|(?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
)

_ALIASES: dict[str, str] = {"D": "H"}


def _tokenize(formula: str) -> list[tuple[str, str]]:
    """Split *formula* into ``(kind, text)`` tokens"""
    text = formula.replace(" ", "")
    tokens: list[tuple[str, str]] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise InvalidFormula(
                f"unrecognized character {text[pos]!r} at position {pos} "
                f"in formula {formula!r}"
            )
        tokens.append((match.lastgroup, match.group()))
        pos = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser over the token list"""

    def __init__(self, formula: str) -> None:
        self.formula = formula
        self.tokens = _tokenize(formula)
        self.pos = 0

    def peek(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][0]
        return None

    def count(self) -> float:
        if self.peek() == "num":
            value = float(self.tokens[self.pos][1])
            self.pos += 1
            return value
        return 1.0

    def sequence(self, counts: dict[str, float], weight: float) -> None:
        while True:
            kind = self.peek()
            if kind == "name":
                symbol = self.tokens[self.pos][1]
                self.pos += 1
                symbol = _ALIASES.get(symbol, symbol)
                counts[symbol] = counts.get(symbol, 0.0) + weight * self.count()
            elif kind == "lparen":
                self.pos += 1
                inner: dict[str, float] = {}
                self.sequence(inner, 1.0)
                if self.peek() != "rparen":
                    raise InvalidFormula(
                        f"expected closing parenthesis in formula {self.formula!r}"
                    )
                self.pos += 1
                factor = weight * self.count()
                for symbol, n in inner.items():
                    counts[symbol] = counts.get(symbol, 0.0) + n * factor
            else:
                return


def chemparse(formula: str) -> list[tuple[str, float]]:
    """Parse a chemical formula into ordered ``(symbol, count)`` pairs

    Symbols appear in order of first occurrence; repeated symbols are
    merged.

    Parameters
    ----------
    formula : str
        Formula text.

    Returns
    -------
    list[tuple[str, float]]

    Raises
    ------
    InvalidFormula
        If the text cannot be tokenised, a parenthesis is unbalanced or
        a token is out of place (e.g. a leading number).
    EmptyFormula
        If the formula holds no element symbols.

    Examples
    --------
    >>> chemparse("Ca(NO3)2")
    [('Ca', 1.0), ('N', 2.0), ('O', 6.0)]
    """
    if not isinstance(formula, str):
        raise InvalidFormula(f"formula must be a string, got {type(formula).__name__}")
    parser = _Parser(formula)
    counts: dict[str, float] = {}
    parser.sequence(counts, 1.0)
    if parser.peek() is not None:
        raise InvalidFormula(
            f"unexpected {parser.tokens[parser.pos][1]!r} in formula {formula!r}"
        )
    if not counts:
        raise EmptyFormula(f"formula {formula!r} contains no elements")
    return list(counts.items())


def validate_formula(formula: str) -> bool:
    """Return ``True`` if *formula* parses"""
    try:
        chemparse(formula)
    except (InvalidFormula, EmptyFormula):
        return False
    return True
