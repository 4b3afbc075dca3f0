"""Unit tests for the chord selection and voicing browser models."""

from fretchord.chord_formulas import ExtensionFlags
from fretchord.fretboard_models import NO_VOICING_MESSAGE, ChordSelection, VoicingBrowser
from fretchord.voicing_generator import MUTED, Voicing


def _sample_voicings() -> list[Voicing]:
    return [
        Voicing(strings=(MUTED, 3, 2, 0, 1, 0), inversion="root", span=2, anchor=1, fretted_range=(1, 3)),
        Voicing(strings=(0, 3, 2, 0, 1, 0), inversion="1st", span=2, anchor=1, fretted_range=(1, 3)),
        Voicing(strings=(0, MUTED, MUTED, 0, 0, 0), inversion="root", span=0, anchor=None, fretted_range=(0, 0)),
    ]


def test_selection_title_includes_extensions() -> None:
    selection = ChordSelection(root=1, quality="maj7", extensions=ExtensionFlags(sus4=True, add9=True))
    assert selection.title == "C# maj7 sus4 add9"


def test_selection_formula_resolves_extensions() -> None:
    selection = ChordSelection(root=0, quality="min", extensions=ExtensionFlags(add9=True))
    assert selection.formula() == (0, 3, 7, 14)


def test_browser_wraps_forward_and_backward() -> None:
    browser = VoicingBrowser(_sample_voicings())
    assert browser.index == 0
    assert browser.previous() is browser.voicings[2]
    assert browser.next() is browser.voicings[0]
    browser.next()
    browser.next()
    assert browser.next() is browser.voicings[0]


def test_browser_start_index_wraps() -> None:
    browser = VoicingBrowser(_sample_voicings(), index=4)
    assert browser.index == 1


def test_status_line_for_current_voicing() -> None:
    browser = VoicingBrowser(_sample_voicings(), index=1)
    assert browser.status_line() == "Voicing: 2/3 — inversion: 1st, anchor: 1"


def test_status_line_for_open_voicing_shows_dash() -> None:
    browser = VoicingBrowser(_sample_voicings(), index=2)
    assert browser.status_line().endswith("anchor: -")


def test_empty_browser() -> None:
    browser = VoicingBrowser([])
    assert len(browser) == 0
    assert browser.current is None
    assert browser.next() is None
    assert browser.status_line() == NO_VOICING_MESSAGE
