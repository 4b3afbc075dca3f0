"""Data models shared by the control panel, renderers and exporters."""

from dataclasses import dataclass, field

from fretchord.chord_formulas import ExtensionFlags, resolve_formula
from fretchord.notes import STANDARD_TUNING, pc_to_name
from fretchord.voicing_generator import Voicing

NO_VOICING_MESSAGE = "No voicing found (try expanding the position)."


@dataclass(frozen=True)
class ChordSelection:
    """Everything the user picks in the control panel."""

    root: int = 0
    quality: str = "maj"
    extensions: ExtensionFlags = field(default_factory=ExtensionFlags)
    allow_open: bool = True
    position: int | None = 1
    left_handed: bool = False

    @property
    def title(self) -> str:
        """Chord label such as 'C maj7 add9'."""
        return f"{pc_to_name(self.root)} {self.quality}{self.extensions.suffix}"

    def formula(self) -> tuple[int, ...]:
        return resolve_formula(self.quality, self.extensions)


class VoicingBrowser:
    """
    Steps through the ranked voicings of one chord selection.

    The cursor wraps in both directions, like the Prev/Next buttons of the
    fretboard view. A new selection means a new browser starting at 0.
    """

    def __init__(self, voicings: list[Voicing], index: int = 0) -> None:
        self.voicings = voicings
        self.index = index % len(voicings) if voicings else 0

    def __len__(self) -> int:
        return len(self.voicings)

    @property
    def current(self) -> Voicing | None:
        if not self.voicings:
            return None
        return self.voicings[self.index]

    def step(self, direction: int) -> Voicing | None:
        if self.voicings:
            self.index = (self.index + direction) % len(self.voicings)
        return self.current

    def next(self) -> Voicing | None:
        return self.step(1)

    def previous(self) -> Voicing | None:
        return self.step(-1)

    def status_line(self) -> str:
        """Footer text, e.g. 'Voicing: 2/14 — inversion: 1st, anchor: 3'."""
        voicing = self.current
        if voicing is None:
            return NO_VOICING_MESSAGE
        anchor = "-" if voicing.anchor is None else str(voicing.anchor)
        return (
            f"Voicing: {self.index + 1}/{len(self.voicings)} — "
            f"inversion: {voicing.inversion}, anchor: {anchor}"
        )


@dataclass(frozen=True)
class FretboardDiagram:
    """Neutral fretboard description consumed by every renderer."""

    root: int
    formula: tuple[int, ...]
    voicing: Voicing | None = None
    tuning: tuple[int, ...] = STANDARD_TUNING
    frets_count: int = 12
    left_handed: bool = False
