"""MidiExporter: writes guitar voicings as chords in a MIDI file."""

from __future__ import annotations

import logging
from typing import Sequence

from midiutil import MIDIFile

from fretchord.notes import STANDARD_TUNING
from fretchord.voicing_generator import Voicing

logger = logging.getLogger(__name__)

# midiutil writes Format 1 files: tempo events always land on its own
# conductor track, so the single user track only carries notes.
TRACK_GUITAR = 0

CHANNEL_GUITAR = 0
PROGRAM_NYLON_GUITAR = 24  # General MIDI "Acoustic Guitar (nylon)", 0-based


class MidiExporter:
    """
    Writes one or more voicings to a Standard MIDI File.

    Track layout (Format 1)
    -----------------------
    Conductor track — tempo only, added by midiutil.

    "Guitar" track
        Each voicing becomes one chord lasting ``chord_beats`` beats. Every
        sounding string contributes its absolute pitch (open pitch + fret).
        With a non-zero ``strum`` the strings enter low to high, each one
        ``strum`` beats after the previous, and all notes end together.
    """

    DEFAULT_TEMPO = 80      # BPM
    DEFAULT_VELOCITY = 80   # MIDI velocity (0-127)
    DEFAULT_STRUM = 0.05    # beats between successive strings
    DEFAULT_CHORD_BEATS = 4.0

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        velocity: int = DEFAULT_VELOCITY,
        strum: float = DEFAULT_STRUM,
        chord_beats: float = DEFAULT_CHORD_BEATS,
    ) -> None:
        """
        Args:
            tempo:       Playback tempo in beats per minute.
            velocity:    MIDI note-on velocity.
            strum:       Delay in beats between consecutive strings (0 = block chord).
            chord_beats: Length of each chord in beats.
        """
        self.tempo = tempo
        self.velocity = velocity
        self.strum = strum
        self.chord_beats = chord_beats

    def _build(self, voicings: Sequence[Voicing], tuning: Sequence[int]) -> MIDIFile:
        midi = MIDIFile(numTracks=1, removeDuplicates=False, deinterleave=False)
        midi.addTempo(TRACK_GUITAR, 0, self.tempo)
        midi.addTrackName(TRACK_GUITAR, 0, "Guitar")
        midi.addProgramChange(TRACK_GUITAR, CHANNEL_GUITAR, 0, PROGRAM_NYLON_GUITAR)

        for chord_index, voicing in enumerate(voicings):
            start_beat = chord_index * self.chord_beats
            for order, pitch in enumerate(voicing.pitches(tuning)):
                offset = min(order * self.strum, self.chord_beats / 2)
                midi.addNote(
                    track=TRACK_GUITAR,
                    channel=CHANNEL_GUITAR,
                    pitch=pitch,
                    time=start_beat + offset,
                    duration=self.chord_beats - offset,
                    volume=self.velocity,
                )
        return midi

    def export(
        self,
        voicings: Sequence[Voicing],
        output_path: str,
        tuning: Sequence[int] = STANDARD_TUNING,
    ) -> None:
        """
        Write voicings, one chord after another, to a MIDI file.

        Args:
            voicings:    Voicings to play in order.
            output_path: Destination file path (e.g. "chord.mid").
            tuning:      Tuning the voicings were generated for.

        Raises:
            ValueError: If ``voicings`` is empty.
            OSError:    If the output file cannot be opened for writing.
        """
        if not voicings:
            raise ValueError("At least one voicing is required for MIDI export.")

        midi = self._build(voicings, tuning)
        logger.debug("Writing %d chord(s) to %s", len(voicings), output_path)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
