# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import typing
import unicodedata

BACKSPACE = 0x0008
SPACE = 0x0020

# Control characters which unicodedata files under "Cc" but which are whitespace for our purposes.
WHITESPACE_CONTROLS = frozenset((0x0009, 0x000A, 0x000B, 0x000C, 0x000D))

# Typographic characters which a keyboard produces as their plain ASCII counterparts.
EQUIVALENTS = {
    "‘": "'",
    "’": "'",
    "‚": "'",
    "‛": "'",
    "′": "'",
    "ʼ": "'",
    "“": '"',
    "”": '"',
    "„": '"',
    "‟": '"',
    "″": '"',
    "‐": "-",
    "‑": "-",
    "‒": "-",
    "–": "-",
    "—": "-",
    "−": "-",
}
_EQUIVALENT_CODE_POINTS = {ord(k): ord(v) for k, v in EQUIVALENTS.items()}


def is_whitespace(code_point: typing.Optional[int]) -> bool:
    if code_point is None:
        return False
    if code_point in WHITESPACE_CONTROLS:
        return True
    return unicodedata.category(chr(code_point)).startswith("Z")


def is_printable(code_point: int) -> bool:
    category = unicodedata.category(chr(code_point))
    return category[0] in ("L", "M", "N", "P", "S")


def normalize_whitespace(code_point: int) -> int:
    return SPACE if is_whitespace(code_point) else code_point


def normalize(code_point: int) -> int:
    """Map an expected code point to the code point a keyboard would produce for it.

    Curly quotes, primes and the assorted dashes all come out of a keyboard as their ASCII
    counterparts, and every kind of whitespace comes out as a plain space.
    """
    code_point = normalize_whitespace(code_point)
    return _EQUIVALENT_CODE_POINTS.get(code_point, code_point)
