"""Pitch-class helpers shared by the resolver, generator and renderers."""

SEMITONES_PER_OCTAVE = 12

# Chromatic pitch class names (index 0 = C)
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_FLAT_ALIASES: dict[str, str] = {"Db": "C#", "Eb": "D#", "Gb": "F#", "Ab": "G#", "Bb": "A#"}

#: Standard tuning, low string first: E2 A2 D3 G3 B3 E4
STANDARD_TUNING: tuple[int, ...] = (40, 45, 50, 55, 59, 64)


def mod12(value: int) -> int:
    """Reduce an interval or pitch to 0-11 (Python's ``%`` is already non-negative)."""
    return value % SEMITONES_PER_OCTAVE


def midi_to_pc(midi: int) -> int:
    """Absolute MIDI pitch to pitch class (C=0 ... B=11)."""
    return mod12(midi)


def pc_to_name(pc: int) -> str:
    """Human-readable sharp spelling of a pitch class, e.g. 1 -> 'C#'."""
    return NOTE_NAMES[mod12(pc)]


def name_to_pc(name: str) -> int:
    """
    Parse a note name into its pitch class.

    Args:
        name: Sharp spelling ("F#") or one of the common flat aliases ("Bb").

    Raises:
        ValueError: If the name is not a known note.
    """
    normalized = name.strip()
    if not normalized:
        raise ValueError("Note name must not be empty.")
    if normalized[1:2] in ("b", "#"):
        normalized = normalized[0].upper() + normalized[1:]
    else:
        normalized = normalized.upper()
    normalized = _FLAT_ALIASES.get(normalized, normalized)
    if normalized not in NOTE_NAMES:
        raise ValueError(f"Unknown note name '{name}'. Use one of: {', '.join(NOTE_NAMES)}.")
    return NOTE_NAMES.index(normalized)
