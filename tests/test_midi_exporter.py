"""Unit tests for MidiExporter."""

from pathlib import Path

import pytest

from fretchord.midi_exporter import MidiExporter
from fretchord.voicing_generator import MUTED, Voicing


def _open_c_major() -> Voicing:
    return Voicing(strings=(MUTED, 3, 2, 0, 1, 0), inversion="root", span=2, anchor=1, fretted_range=(1, 3))


def test_voicing_pitches_skip_muted_strings() -> None:
    assert _open_c_major().pitches((40, 45, 50, 55, 59, 64)) == [48, 52, 55, 60, 64]


def test_export_writes_standard_midi_file(tmp_path: Path) -> None:
    out = tmp_path / "c.mid"
    MidiExporter().export([_open_c_major()], str(out))
    data = out.read_bytes()
    assert data.startswith(b"MThd")
    assert b"MTrk" in data


def test_export_several_voicings(tmp_path: Path) -> None:
    out = tmp_path / "progression.mid"
    MidiExporter(tempo=120, strum=0).export([_open_c_major(), _open_c_major()], str(out))
    assert out.stat().st_size > 0


def test_export_requires_a_voicing(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        MidiExporter().export([], str(tmp_path / "empty.mid"))
