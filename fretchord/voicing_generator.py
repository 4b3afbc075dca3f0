"""VoicingGenerator: enumerate, filter and rank guitar fingerings for a chord."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Final, Literal, Sequence, Union

from fretchord.notes import midi_to_pc, mod12

logger = logging.getLogger(__name__)

# ── Fretboard constants ─────────────────────────────────────────────────────
MUTED: Final = "x"
MAX_FRET: Final = 24            # hard cap on any fret window
DEFAULT_MAX_SPAN: Final = 7
DEFAULT_FRET_WINDOW: Final[tuple[int, int]] = (0, 12)
DEFAULT_POSITION_WIDTH: Final = 2
BOX_WIDTH: Final = 4            # fixed width of the post-search position box

# ── Scoring weights ─────────────────────────────────────────────────────────
ROOT_IN_BASS_BONUS: Final = 2
MUTED_STRING_PENALTY: Final = 1.0
SOUNDING_STRING_BONUS: Final = 0.25
SAME_FRET_ADJACENT_BONUS: Final = 0.2
POSITION_DISTANCE_PENALTY: Final = 2

Fret = Union[int, str]
Inversion = Literal["root", "1st", "2nd", "3rd"]

#: Scale degree of the bass note (semitones above the root) → inversion.
#: Degrees missing from this table (2nd, 4th, 6th...) fall back to "root".
_BASS_DEGREE_INVERSIONS: Final[dict[int, Inversion]] = {
    0: "root",
    3: "1st",
    4: "1st",
    7: "2nd",
    10: "3rd",
    11: "3rd",
}


def validate_tuning(tuning: Sequence[int]) -> tuple[int, ...]:
    """
    Check a tuning and return it as an immutable tuple.

    Raises:
        ValueError: If the tuning is empty or holds anything but non-negative ints.
    """
    if not tuning:
        raise ValueError("Tuning must contain at least one string.")
    for pitch in tuning:
        if isinstance(pitch, bool) or not isinstance(pitch, int) or pitch < 0:
            raise ValueError(f"Tuning pitches must be non-negative MIDI integers, got {pitch!r}.")
    return tuple(tuning)


@dataclass(frozen=True)
class Voicing:
    """
    One concrete way to play a chord: a fret or ``MUTED`` per string.

    Attributes:
        strings:       Per-string assignment in tuning order (low string first).
                       0 is an open string.
        inversion:     Which chord tone sounds lowest: "root", "1st", "2nd" or "3rd".
        span:          Distance between the lowest and highest fretted (non-open) note.
        anchor:        Lowest fretted position, or None when nothing is fretted.
        fretted_range: (min, max) fretted position, or (0, 0) when nothing is fretted.
        score:         Playability score assigned at ranking time (higher is better).
    """

    strings: tuple[Fret, ...]
    inversion: Inversion
    span: int
    anchor: int | None
    fretted_range: tuple[int, int]
    score: float = 0.0

    def sounding_strings(self) -> list[tuple[int, int]]:
        """(string index, fret) pairs for every string that is not muted."""
        return [(i, fret) for i, fret in enumerate(self.strings) if isinstance(fret, int)]

    @property
    def muted_count(self) -> int:
        return sum(1 for fret in self.strings if fret == MUTED)

    @property
    def is_open_only(self) -> bool:
        """True when every sounding string is open."""
        return self.anchor is None

    @property
    def effective_anchor(self) -> int:
        """Anchor used for position comparisons; all-open shapes count as position 1."""
        return 1 if self.anchor is None else self.anchor

    def pitches(self, tuning: Sequence[int]) -> list[int]:
        """Absolute MIDI pitches of the sounding strings, low string first."""
        return [tuning[i] + fret for i, fret in self.sounding_strings()]

    def pitch_classes(self, tuning: Sequence[int]) -> set[int]:
        return {midi_to_pc(pitch) for pitch in self.pitches(tuning)}

    @property
    def tab(self) -> str:
        """Compact tab such as 'x32010'; frets above 9 switch to dash separators."""
        parts = [str(fret) for fret in self.strings]
        separator = "-" if any(len(p) > 1 for p in parts) else ""
        return separator.join(parts)


@dataclass(frozen=True)
class GeneratorOptions:
    """
    Search and ranking constraints for ``VoicingGenerator``.

    Attributes:
        max_span:           Largest allowed fretted span.
        allow_open:         Whether open strings (fret 0) may be used.
        fret_window:        Inclusive (min, max) fret range scanned per string.
        preferred_position: Neck position (1-based fret) to bias towards, or None.
        position_width:     Tolerance around the preferred position. Also the
                            width of the search box [position, position + width].
        box_width:          Width of the post-search box [position, position + box_width].
        max_fret:           Hard upper bound applied to ``fret_window``.
    """

    max_span: int = DEFAULT_MAX_SPAN
    allow_open: bool = True
    fret_window: tuple[int, int] = DEFAULT_FRET_WINDOW
    preferred_position: int | None = None
    position_width: int = DEFAULT_POSITION_WIDTH
    box_width: int = BOX_WIDTH
    max_fret: int = MAX_FRET

    def __post_init__(self) -> None:
        if self.max_span < 0:
            raise ValueError(f"max_span must be >= 0, got {self.max_span}.")
        if self.position_width < 0:
            raise ValueError(f"position_width must be >= 0, got {self.position_width}.")
        if self.box_width < 0:
            raise ValueError(f"box_width must be >= 0, got {self.box_width}.")
        low, high = self.fret_window
        if low < 0 or high < low:
            raise ValueError(f"fret_window must satisfy 0 <= min <= max, got {self.fret_window}.")
        if self.preferred_position is not None and not 1 <= self.preferred_position <= self.max_fret:
            raise ValueError(
                f"preferred_position must be between 1 and {self.max_fret}, got {self.preferred_position}."
            )


class VoicingGenerator:
    """
    Enumerates every playable voicing of a chord and ranks them.

    Algorithm overview
    ------------------
    1. **Targets** – each formula interval is reduced modulo 12 and added to
       the root, giving the pitch classes every voicing must contain.

    2. **Per-string candidates** – each string scans the fret window and keeps
       frets whose pitch class is a target. Fret 0 is dropped when open strings
       are disallowed; with a preferred position, fretted notes outside
       [position, position + position_width] are dropped (open strings are
       always allowed). A string with no candidate can only be muted.

    3. **Backtracking** – strings are assigned low to high, trying each
       candidate fret and then the mute. The running min/max of fretted notes
       is carried down the recursion and a branch is pruned as soon as its
       span exceeds ``max_span``.

    4. **Completion** – a full assignment is kept when something sounds, its
       fretted span fits and every target pitch class is covered. Extra or
       doubled tones are fine.

    5. **Post-processing** – exact duplicates are dropped (first wins), two
       independent position filters run, then a stable sort by descending
       playability score.

    The generator keeps no state between calls, so one instance can serve any
    number of requests.
    """

    def __init__(self, options: GeneratorOptions | None = None) -> None:
        self.options = options if options is not None else GeneratorOptions()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _target_pitch_classes(self, root_pc: int, formula: Sequence[int]) -> set[int]:
        return {mod12(root_pc + mod12(interval)) for interval in formula}

    def _string_candidates(self, open_pitch: int, targets: set[int]) -> list[int]:
        """Frets on one string that produce a target pitch class; empty means mute-only."""
        opts = self.options
        low, high = opts.fret_window
        position = opts.preferred_position
        frets: list[int] = []
        for fret in range(low, min(opts.max_fret, high) + 1):
            if fret == 0 and not opts.allow_open:
                continue
            if position is not None and fret > 0 and not position <= fret <= position + opts.position_width:
                continue
            if midi_to_pc(open_pitch + fret) in targets:
                frets.append(fret)
        return frets

    def _classify_inversion(self, strings: Sequence[Fret], tuning: Sequence[int], root_pc: int) -> Inversion:
        """
        Inversion from the bass note's scale degree.

        A 9th, 11th or 13th in the bass is reported as "root"; the taxonomy
        only distinguishes root, third, fifth and seventh.
        """
        for index, fret in enumerate(strings):
            if fret == MUTED:
                continue
            degree = mod12(midi_to_pc(tuning[index] + int(fret)) - root_pc)
            return _BASS_DEGREE_INVERSIONS.get(degree, "root")
        return "root"

    def _build_voicing(
        self,
        strings: list[Fret],
        tuning: Sequence[int],
        root_pc: int,
        targets: set[int],
    ) -> Voicing | None:
        """Validate a complete assignment and turn it into a Voicing, or None if it fails."""
        sounding = [(i, int(fret)) for i, fret in enumerate(strings) if fret != MUTED]
        if not sounding:
            return None

        fretted = [fret for _, fret in sounding if fret > 0]
        span = max(fretted) - min(fretted) if fretted else 0
        if span > self.options.max_span:
            return None

        found = {midi_to_pc(tuning[i] + fret) for i, fret in sounding}
        if not targets <= found:
            return None

        return Voicing(
            strings=tuple(strings),
            inversion=self._classify_inversion(strings, tuning, root_pc),
            span=span,
            anchor=min(fretted) if fretted else None,
            fretted_range=(min(fretted), max(fretted)) if fretted else (0, 0),
        )

    def _search(
        self,
        tuning: Sequence[int],
        root_pc: int,
        targets: set[int],
        choices: list[list[int]],
    ) -> list[Voicing]:
        max_span = self.options.max_span
        n_strings = len(tuning)
        found: list[Voicing] = []

        def backtrack(index: int, acc: list[Fret], low: int | None, high: int | None) -> None:
            if index == n_strings:
                voicing = self._build_voicing(acc, tuning, root_pc, targets)
                if voicing is not None:
                    found.append(voicing)
                return

            for fret in choices[index]:
                if fret == 0:
                    # open strings never widen the span
                    backtrack(index + 1, acc + [0], low, high)
                    continue
                new_low = fret if low is None else min(low, fret)
                new_high = fret if high is None else max(high, fret)
                if new_high - new_low > max_span:
                    continue
                backtrack(index + 1, acc + [fret], new_low, new_high)

            backtrack(index + 1, acc + [MUTED], low, high)

        backtrack(0, [], None, None)
        return found

    def _deduplicate(self, voicings: list[Voicing]) -> list[Voicing]:
        seen: set[tuple[Fret, ...]] = set()
        unique: list[Voicing] = []
        for voicing in voicings:
            if voicing.strings in seen:
                continue
            seen.add(voicing.strings)
            unique.append(voicing)
        return unique

    def _in_position_box(self, voicing: Voicing) -> bool:
        """Fretted range must sit inside [position, position + box_width]; all-open shapes pass."""
        position = self.options.preferred_position
        if position is None or voicing.is_open_only:
            return True
        low, high = voicing.fretted_range
        return low >= position and high <= position + self.options.box_width

    def _near_position(self, voicing: Voicing) -> bool:
        """Anchor must lie within ±position_width of the preferred position."""
        position = self.options.preferred_position
        if position is None:
            return True
        width = self.options.position_width
        return position - width <= voicing.effective_anchor <= position + width

    def _score(self, voicing: Voicing, tuning: Sequence[int], root_pc: int) -> float:
        """
        Playability score, higher is better.

        Shorter spans, a root in the bass, fewer muted strings, more ringing
        strings and repeated frets on neighbouring strings (barre-like shapes)
        all raise the score. With a preferred position, distance from it is
        penalised.
        """
        sounding = voicing.sounding_strings()
        root_on_bass = 0
        if sounding:
            index, fret = sounding[0]
            if midi_to_pc(tuning[index] + fret) == root_pc:
                root_on_bass = 1

        same_fret_adjacent = 0.0
        for a, b in zip(voicing.strings, voicing.strings[1:]):
            if a != MUTED and b != MUTED and a == b:
                same_fret_adjacent += SAME_FRET_ADJACENT_BONUS

        score = (
            -voicing.span
            + root_on_bass * ROOT_IN_BASS_BONUS
            - voicing.muted_count * MUTED_STRING_PENALTY
            + len(sounding) * SOUNDING_STRING_BONUS
            + same_fret_adjacent
        )
        position = self.options.preferred_position
        if position is not None:
            score -= abs(voicing.effective_anchor - position) * POSITION_DISTANCE_PENALTY
        return score

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, tuning: Sequence[int], root_pc: int, formula: Sequence[int]) -> list[Voicing]:
        """
        Find, filter and rank every voicing of a chord.

        Args:
            tuning:  Open-string MIDI pitches, low string first.
            root_pc: Root pitch class (0=C ... 11=B).
            formula: Intervals above the root (see ``chord_formulas``).

        Returns:
            Voicings ordered best first. An empty list means nothing satisfies
            the constraints; it is not an error.

        Raises:
            ValueError: If the tuning is malformed.
        """
        tuning = validate_tuning(tuning)
        root_pc = mod12(root_pc)
        targets = self._target_pitch_classes(root_pc, formula)

        choices = [self._string_candidates(open_pitch, targets) for open_pitch in tuning]
        logger.debug(
            "Searching root=%d targets=%s candidates/string=%s",
            root_pc,
            sorted(targets),
            [len(c) for c in choices],
        )

        found = self._search(tuning, root_pc, targets, choices)
        unique = self._deduplicate(found)
        boxed = [v for v in unique if self._in_position_box(v)]
        kept = [v for v in boxed if self._near_position(v)]
        logger.debug(
            "Search found %d voicings, %d unique, %d in box, %d near position",
            len(found),
            len(unique),
            len(boxed),
            len(kept),
        )

        scored = [replace(v, score=self._score(v, tuning, root_pc)) for v in kept]
        return sorted(scored, key=lambda v: v.score, reverse=True)


def generate_voicings(
    tuning: Sequence[int],
    root_pc: int,
    formula: Sequence[int],
    options: GeneratorOptions | None = None,
) -> list[Voicing]:
    """Convenience wrapper around ``VoicingGenerator(options).generate(...)``."""
    return VoicingGenerator(options).generate(tuning, root_pc, formula)
