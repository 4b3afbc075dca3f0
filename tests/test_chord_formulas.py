"""Unit tests for the chord formula table and extension rules."""

import pytest

from fretchord.chord_formulas import (
    CHORD_FORMULAS,
    CHORD_QUALITIES,
    ExtensionFlags,
    apply_extensions,
    resolve_formula,
)


def test_every_quality_resolves_to_its_table_entry() -> None:
    for quality in CHORD_QUALITIES:
        assert resolve_formula(quality) == CHORD_FORMULAS[quality]


def test_quality_table_is_closed() -> None:
    assert len(CHORD_QUALITIES) == 16
    assert CHORD_FORMULAS["m7b5"] == (0, 3, 6, 10)
    assert CHORD_FORMULAS["13"] == (0, 4, 7, 10, 14, 21)


def test_unknown_quality_raises_value_error() -> None:
    with pytest.raises(ValueError, match="Unknown chord quality"):
        resolve_formula("maj13")


def test_add9_appends_ninth() -> None:
    assert resolve_formula("maj", ExtensionFlags(add9=True)) == (0, 4, 7, 14)


def test_add9_is_idempotent() -> None:
    flags = ExtensionFlags(add9=True)
    once = apply_extensions(CHORD_FORMULAS["min"], flags)
    twice = apply_extensions(once, flags)
    assert once == twice == (0, 3, 7, 14)


def test_add9_does_not_duplicate_existing_ninth() -> None:
    assert resolve_formula("9", ExtensionFlags(add9=True)) == (0, 4, 7, 10, 14)


@pytest.mark.parametrize("quality", ["maj", "min7", "13", "dim7"])
def test_sus2_overrides_any_quality(quality: str) -> None:
    assert resolve_formula(quality, ExtensionFlags(sus2=True)) == (0, 2, 7)


@pytest.mark.parametrize("quality", ["maj", "maj9", "11", "aug"])
def test_sus4_overrides_any_quality(quality: str) -> None:
    assert resolve_formula(quality, ExtensionFlags(sus4=True)) == (0, 5, 7)


def test_sus_discards_add9() -> None:
    assert resolve_formula("maj7", ExtensionFlags(sus4=True, add9=True)) == (0, 5, 7)


def test_sus4_after_sus2_leaves_only_sus4() -> None:
    flags = ExtensionFlags().with_sus2(True).with_sus4(True)
    assert flags == ExtensionFlags(sus4=True)
    assert resolve_formula("maj", flags) == (0, 5, 7)


def test_sus2_after_sus4_leaves_only_sus2() -> None:
    flags = ExtensionFlags().with_sus4(True).with_sus2(True)
    assert flags == ExtensionFlags(sus2=True)


def test_turning_sus_off_keeps_the_other_flag() -> None:
    flags = ExtensionFlags(sus4=True).with_sus2(False)
    assert flags.sus4 is True


def test_no_flags_returns_base_formula() -> None:
    assert apply_extensions([0, 4, 7]) == (0, 4, 7)
    assert apply_extensions([0, 4, 7], ExtensionFlags()) == (0, 4, 7)


def test_extension_suffix() -> None:
    assert ExtensionFlags().suffix == ""
    assert ExtensionFlags(sus2=True, add9=True).suffix == " sus2 add9"
