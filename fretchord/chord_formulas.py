"""Chord formulas: map a chord quality plus extension flags to an interval set."""

from dataclasses import dataclass, replace
from typing import Final

# ── Interval tables ─────────────────────────────────────────────────────────
#
# Values 0-11 are simple intervals above the root. 14, 17 and 21 mark the
# 9th, 11th and 13th: they are reduced modulo 12 for pitch matching but keep
# their compound value for labelling.

NINTH: Final = 14
ELEVENTH: Final = 17
THIRTEENTH: Final = 21

CHORD_FORMULAS: Final[dict[str, tuple[int, ...]]] = {
    # triads
    "maj": (0, 4, 7),
    "min": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    # sevenths
    "7": (0, 4, 7, 10),
    "maj7": (0, 4, 7, 11),
    "min7": (0, 3, 7, 10),
    "dim7": (0, 3, 6, 9),
    "m7b5": (0, 3, 6, 10),
    # sixths
    "6": (0, 4, 7, 9),
    "min6": (0, 3, 7, 9),
    # extended
    "9": (0, 4, 7, 10, NINTH),
    "maj9": (0, 4, 7, 11, NINTH),
    "min9": (0, 3, 7, 10, NINTH),
    "11": (0, 4, 7, 10, NINTH, ELEVENTH),
    "13": (0, 4, 7, 10, NINTH, THIRTEENTH),
}

CHORD_QUALITIES: Final[tuple[str, ...]] = tuple(CHORD_FORMULAS)

SUS2_FORMULA: Final[tuple[int, ...]] = (0, 2, 7)
SUS4_FORMULA: Final[tuple[int, ...]] = (0, 5, 7)


@dataclass(frozen=True)
class ExtensionFlags:
    """
    Extension toggles applied on top of a base chord quality.

    Attributes:
        sus2: Replace the chord with root, major 2nd and 5th.
        sus4: Replace the chord with root, perfect 4th and 5th.
        add9: Append the 9th (14) when the formula lacks it.
    """

    sus2: bool = False
    sus4: bool = False
    add9: bool = False

    def with_sus2(self, enabled: bool) -> "ExtensionFlags":
        """Toggle sus2; switching it on clears sus4."""
        return replace(self, sus2=enabled, sus4=False if enabled else self.sus4)

    def with_sus4(self, enabled: bool) -> "ExtensionFlags":
        """Toggle sus4; switching it on clears sus2."""
        return replace(self, sus4=enabled, sus2=False if enabled else self.sus2)

    def with_add9(self, enabled: bool) -> "ExtensionFlags":
        return replace(self, add9=enabled)

    @property
    def suffix(self) -> str:
        """Label suffix such as ' sus4 add9', or '' when nothing is set."""
        parts = [name for name, on in (("sus2", self.sus2), ("sus4", self.sus4), ("add9", self.add9)) if on]
        return " " + " ".join(parts) if parts else ""


def apply_extensions(formula: tuple[int, ...] | list[int], flags: ExtensionFlags | None = None) -> tuple[int, ...]:
    """
    Apply extension flags to an interval formula.

    A sus flag overrides the whole formula, discarding thirds, sevenths and
    extensions. Otherwise add9 appends 14 unless it is already present, so
    applying it repeatedly is a no-op.
    """
    out = list(formula)
    if flags is None:
        return tuple(out)
    if flags.sus2:
        return SUS2_FORMULA
    if flags.sus4:
        return SUS4_FORMULA
    if flags.add9 and NINTH not in out:
        out.append(NINTH)
    return tuple(out)


def resolve_formula(quality: str, flags: ExtensionFlags | None = None) -> tuple[int, ...]:
    """
    Resolve a chord quality and its extensions to an interval formula.

    Args:
        quality: One of ``CHORD_QUALITIES`` (e.g. "maj7", "min9").
        flags:   Optional extension toggles.

    Returns:
        Ordered intervals relative to the root, without duplicates.

    Raises:
        ValueError: If the quality is not in the formula table.
    """
    try:
        base = CHORD_FORMULAS[quality]
    except KeyError:
        supported = ", ".join(CHORD_QUALITIES)
        raise ValueError(f"Unknown chord quality '{quality}'. Use one of: {supported}.") from None
    return apply_extensions(base, flags)
