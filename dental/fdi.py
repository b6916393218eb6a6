"""
dental/fdi.py

Tooth numbering conversion between FDI (ISO 3950), Universal (ADA) and
Palmer notation, for both permanent and primary dentition.

The index is built once from the fixed tables below and never mutated.
Every lookup is total: unknown codes give ``None`` instead of raising.
"""

from __future__ import annotations

import numbers
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from settings import NOTATIONS, get_settings

UniversalValue = Union[int, str]

ARCH_MAXILLARY = "maxillary"
ARCH_MANDIBULAR = "mandibular"
SIDE_RIGHT = "right"
SIDE_LEFT = "left"

PALMER_QUADRANTS: Tuple[str, ...] = ("UR", "UL", "LL", "LR")

LIST_PERMANENT = "permanent"
LIST_PRIMARY = "primary"
LIST_ALL = "all"


# ----------------------------
# Fixed tables
# ----------------------------

# FDI quadrant -> (arch, side, Palmer quadrant).  Primary quadrants 5-8 reuse
# the arch/side of 1-4.
_QUADRANT_META: Mapping[int, Tuple[str, str, str]] = MappingProxyType({
    1: (ARCH_MAXILLARY, SIDE_RIGHT, "UR"),
    2: (ARCH_MAXILLARY, SIDE_LEFT, "UL"),
    3: (ARCH_MANDIBULAR, SIDE_LEFT, "LL"),
    4: (ARCH_MANDIBULAR, SIDE_RIGHT, "LR"),
    5: (ARCH_MAXILLARY, SIDE_RIGHT, "UR"),
    6: (ARCH_MAXILLARY, SIDE_LEFT, "UL"),
    7: (ARCH_MANDIBULAR, SIDE_LEFT, "LL"),
    8: (ARCH_MANDIBULAR, SIDE_RIGHT, "LR"),
})

PERMANENT_CLASS_BY_POSITION: Mapping[int, str] = MappingProxyType({
    1: "central incisor",
    2: "lateral incisor",
    3: "canine",
    4: "first premolar",
    5: "second premolar",
    6: "first molar",
    7: "second molar",
    8: "third molar",
})

PRIMARY_CLASS_BY_POSITION: Mapping[int, str] = MappingProxyType({
    1: "primary central incisor",
    2: "primary lateral incisor",
    3: "primary canine",
    4: "primary first molar",
    5: "primary second molar",
})

# ADA order: upper-right third molar is 1, running clockwise to lower-right third molar 32
UNIVERSAL_PERMANENT_BY_FDI: Mapping[str, int] = MappingProxyType({
    "18": 1, "17": 2, "16": 3, "15": 4, "14": 5, "13": 6, "12": 7, "11": 8,
    "21": 9, "22": 10, "23": 11, "24": 12, "25": 13, "26": 14, "27": 15, "28": 16,
    "38": 17, "37": 18, "36": 19, "35": 20, "34": 21, "33": 22, "32": 23, "31": 24,
    "41": 25, "42": 26, "43": 27, "44": 28, "45": 29, "46": 30, "47": 31, "48": 32,
})

UNIVERSAL_PRIMARY_BY_FDI: Mapping[str, str] = MappingProxyType({
    "55": "A", "54": "B", "53": "C", "52": "D", "51": "E",
    "61": "F", "62": "G", "63": "H", "64": "I", "65": "J",
    "75": "K", "74": "L", "73": "M", "72": "N", "71": "O",
    "81": "P", "82": "Q", "83": "R", "84": "S", "85": "T",
})

FDI_PATTERN = re.compile(r"^(1[1-8]|2[1-8]|3[1-8]|4[1-8]|5[1-5]|6[1-5]|7[1-5]|8[1-5])$")
_PRIMARY_LETTER_PATTERN = re.compile(r"^[A-T]$")


# ----------------------------
# Tooth record
# ----------------------------

@dataclass(frozen=True)
class Tooth:
    """One tooth in all three notations."""
    fdi: str
    universal: UniversalValue
    palmer: str
    arch: str                 # maxillary | mandibular
    side: str                 # right | left
    name: str
    class_name: str
    is_primary: bool
    position: int

    @property
    def quadrant(self) -> str:
        """Palmer quadrant letters (UR, UL, LL, LR)."""
        return self.palmer[:2]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fdi": self.fdi,
            "universal": self.universal,
            "palmer": self.palmer,
            "arch": self.arch,
            "side": self.side,
            "name": self.name,
            "className": self.class_name,
            "isPrimary": self.is_primary,
            "position": self.position,
        }


def _make_tooth(quadrant: int, position: int) -> Tooth:
    code = f"{quadrant}{position}"
    arch, side, palmer_quadrant = _QUADRANT_META[quadrant]
    is_primary = quadrant >= 5
    if is_primary:
        class_name = PRIMARY_CLASS_BY_POSITION[position]
        universal: UniversalValue = UNIVERSAL_PRIMARY_BY_FDI[code]
    else:
        class_name = PERMANENT_CLASS_BY_POSITION[position]
        universal = UNIVERSAL_PERMANENT_BY_FDI[code]
    return Tooth(
        fdi=code,
        universal=universal,
        palmer=f"{palmer_quadrant}{position}",
        arch=arch,
        side=side,
        name=f"{arch.capitalize()} {side} {class_name}",
        class_name=class_name,
        is_primary=is_primary,
        position=position,
    )


def _build_teeth() -> Mapping[str, Tooth]:
    teeth: Dict[str, Tooth] = {}
    for q in (1, 2, 3, 4):
        for p in range(1, 9):
            tooth = _make_tooth(q, p)
            teeth[tooth.fdi] = tooth
    for q in (5, 6, 7, 8):
        for p in range(1, 6):
            tooth = _make_tooth(q, p)
            teeth[tooth.fdi] = tooth
    return MappingProxyType(teeth)


def _whole_number(value: Any) -> Optional[int]:
    """value as an int if it is an integer or an integral float, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


# ----------------------------
# Index
# ----------------------------

class ToothNumberingIndex:
    """Read-only lookup table over the 52 FDI tooth codes.

    Build it once (see ``get_tooth_index``) and share it; it holds no
    mutable state, so concurrent readers need no locking.
    """

    def __init__(self):
        self._teeth = _build_teeth()
        self._sorted: Tuple[Tooth, ...] = tuple(sorted(self._teeth.values(), key=lambda t: t.fdi))

    def __len__(self) -> int:
        return len(self._teeth)

    def __contains__(self, code: object) -> bool:
        return self.validate(code)

    def validate(self, code: Any) -> bool:
        """True iff code is one of the 52 canonical two-digit FDI strings."""
        return isinstance(code, str) and FDI_PATTERN.fullmatch(code) is not None

    def get(self, code: Any) -> Optional[Tooth]:
        if not self.validate(code):
            return None
        return self._teeth.get(code)

    def to_universal(self, code: Any) -> Optional[UniversalValue]:
        tooth = self.get(code)
        return tooth.universal if tooth else None

    def to_palmer(self, code: Any) -> Optional[str]:
        tooth = self.get(code)
        return tooth.palmer if tooth else None

    def to_quadrant(self, code: Any) -> Optional[str]:
        tooth = self.get(code)
        return tooth.quadrant if tooth else None

    def from_universal(self, value: Any) -> Optional[str]:
        """
        Reverse lookup from a Universal value to its FDI code.

        Whole numbers (``8`` or ``8.0``) are searched in the permanent
        table, single letters in the primary table (case-insensitive).
        Anything else gives None.
        """
        number = _whole_number(value)
        if number is not None:
            for fdi, universal in UNIVERSAL_PERMANENT_BY_FDI.items():
                if universal == number:
                    return fdi
            return None
        if isinstance(value, str):
            letter = value.strip().upper()
            for fdi, primary in UNIVERSAL_PRIMARY_BY_FDI.items():
                if primary == letter:
                    return fdi
        return None

    def normalize_to_fdi(self, value: Any) -> Optional[str]:
        """
        Canonicalize a tooth reference to its FDI code.

        Strings are trimmed and upper-cased; a valid FDI string is returned
        as-is, a single letter A-T is read as a primary Universal value.
        Whole numbers (ints or integral floats) are always read as permanent
        Universal numbers 1-32, so ``normalize_to_fdi(11)`` is ``"23"``, not
        ``"11"``.
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            clean = value.strip().upper()
            if self.validate(clean):
                return clean
            if _PRIMARY_LETTER_PATTERN.fullmatch(clean):
                return self.from_universal(clean)
            return None
        number = _whole_number(value)
        if number is not None and 1 <= number <= 32:
            return self.from_universal(number)
        return None

    def list(self, which: str = LIST_ALL) -> List[Tooth]:
        """Teeth sorted by FDI code; which is permanent, primary or all."""
        if which == LIST_PERMANENT:
            return [t for t in self._sorted if not t.is_primary]
        if which == LIST_PRIMARY:
            return [t for t in self._sorted if t.is_primary]
        return list(self._sorted)

    def format_short(self, code: Any) -> str:
        """Compact Palmer + Universal label, e.g. "UR3 • #6" or "UR3 • C"."""
        tooth = self.get(code)
        if tooth is None:
            return ""
        if tooth.is_primary:
            return f"{tooth.palmer} • {tooth.universal}"
        return f"{tooth.palmer} • #{tooth.universal}"

    def format(self, code: Any, notation: Optional[str] = None) -> str:
        """
        Render an FDI code in the given notation.

        Args:
            code: FDI code
            notation: fdi | universal | palmer; defaults to the configured
                ``dental.notation`` setting

        Returns:
            The code in that notation, or "Unknown" for unknown codes
        """
        tooth = self.get(code)
        if tooth is None:
            return "Unknown"
        if notation not in NOTATIONS:
            notation = get_settings().settings.dental.notation
        if notation == "universal":
            return str(tooth.universal)
        if notation == "palmer":
            return tooth.palmer
        return tooth.fdi


# Global index instance (singleton)
_tooth_index: Optional[ToothNumberingIndex] = None


def get_tooth_index() -> ToothNumberingIndex:
    """Get the shared tooth index, building it on first use."""
    global _tooth_index
    if _tooth_index is None:
        _tooth_index = ToothNumberingIndex()
    return _tooth_index
