"""Read-only note/degree/interval breakdown of a chord formula for display."""

from dataclasses import dataclass
from typing import Final, Sequence

from fretchord.chord_formulas import ELEVENTH, NINTH, THIRTEENTH
from fretchord.notes import mod12, pc_to_name

DEGREE_LABELS: Final[dict[int, str]] = {
    0: "R", 1: "b2", 2: "2", 3: "b3", 4: "3", 5: "4",
    6: "#4", 7: "5", 8: "b6", 9: "6", 10: "b7", 11: "7",
}

INTERVAL_ABBREVIATIONS: Final[dict[int, str]] = {
    0: "P1", 1: "m2", 2: "M2", 3: "m3", 4: "M3", 5: "P4",
    6: "TT", 7: "P5", 8: "m6", 9: "M6", 10: "m7", 11: "M7",
}

# Compound intervals keep their own label instead of the reduced one.
COMPOUND_LABELS: Final[dict[int, str]] = {NINTH: "9", ELEVENTH: "11", THIRTEENTH: "13"}

# Canonical tone order: root, third, fifth, seventh, 9, 11, 13.
_TONE_WEIGHTS: Final[dict[int, int]] = {
    0: 0, 3: 1, 4: 1, 7: 2, 10: 3, 11: 3, NINTH: 4, ELEVENTH: 5, THIRTEENTH: 6,
}


@dataclass(frozen=True)
class ChordInfoRow:
    """One chord tone as shown in the info box, e.g. ('E', '3', 'M3')."""

    note: str
    degree: str
    interval: str


def degree_label(interval: int) -> str:
    if interval in COMPOUND_LABELS:
        return COMPOUND_LABELS[interval]
    return DEGREE_LABELS[mod12(interval)]


def interval_abbreviation(interval: int) -> str:
    if interval in COMPOUND_LABELS:
        return COMPOUND_LABELS[interval]
    return INTERVAL_ABBREVIATIONS[mod12(interval)]


def degree_label_for_pc(pc: int, root_pc: int) -> str:
    """Degree of a sounding note relative to the root, used on fretboard dots."""
    return DEGREE_LABELS[mod12(pc - root_pc)]


def _tone_weight(interval: int) -> int:
    return _TONE_WEIGHTS.get(interval, 10 + mod12(interval))


def chord_info_rows(root_pc: int, formula: Sequence[int]) -> list[ChordInfoRow]:
    """
    Break a formula down into note names, degree labels and interval names.

    Duplicate intervals collapse to one row. Rows follow the canonical tone
    order (root, third, fifth, seventh, 9th, 11th, 13th, then anything else
    by its reduced value), independent of the order in ``formula``.
    """
    unique = list(dict.fromkeys(formula))
    ordered = sorted(unique, key=_tone_weight)
    return [
        ChordInfoRow(
            note=pc_to_name(root_pc + interval),
            degree=degree_label(interval),
            interval=interval_abbreviation(interval),
        )
        for interval in ordered
    ]
