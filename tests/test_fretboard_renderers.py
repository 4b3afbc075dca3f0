"""Unit tests for the text and HTML fretboard renderers."""

from fretchord.fretboard_models import FretboardDiagram
from fretchord.fretboard_renderers import SvgHtmlRenderer, TextFretboardRenderer
from fretchord.voicing_generator import MUTED, Voicing


def _open_c_major() -> Voicing:
    return Voicing(strings=(MUTED, 3, 2, 0, 1, 0), inversion="root", span=2, anchor=1, fretted_range=(1, 3))


def _sample_diagram(**kwargs: object) -> FretboardDiagram:
    defaults: dict[str, object] = {"root": 0, "formula": (0, 4, 7), "voicing": _open_c_major()}
    defaults.update(kwargs)
    return FretboardDiagram(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Text renderer
# ---------------------------------------------------------------------------

def test_text_renderer_draws_high_string_first() -> None:
    lines = TextFretboardRenderer().render_neck(_sample_diagram())
    assert lines[0].startswith(" E O ||")
    assert lines[5].startswith(" E X ||")
    assert len(lines) == 7


def test_text_renderer_labels_fretted_notes_with_degrees() -> None:
    lines = TextFretboardRenderer().render_neck(_sample_diagram())
    assert lines[1].startswith(" B   ||-R-|---|")
    assert lines[3].startswith(" D   ||---|-3-|")
    assert lines[4].startswith(" A   ||---|---|-R-|")


def test_text_renderer_ruler_numbers_frets() -> None:
    ruler = TextFretboardRenderer().render_neck(_sample_diagram())[-1]
    assert ruler.startswith("        1   2   3")
    assert ruler.endswith("12")


def test_text_renderer_widens_neck_for_high_voicings() -> None:
    high = Voicing(strings=(MUTED, 15, 14, 12, 13, 12), inversion="root", span=3, anchor=12, fretted_range=(12, 15))
    ruler = TextFretboardRenderer().render_neck(_sample_diagram(voicing=high))[-1]
    assert ruler.endswith("15")


def test_text_renderer_left_handed_puts_nut_on_the_right() -> None:
    lines = TextFretboardRenderer().render_neck(_sample_diagram(left_handed=True))
    assert lines[5].rstrip().endswith("|| X E")
    assert "|-R-|| " in lines[1]
    assert lines[-1].rstrip().endswith("1")


def test_text_renderer_without_voicing_has_no_markers() -> None:
    lines = TextFretboardRenderer().render_neck(_sample_diagram(voicing=None))
    assert all("X" not in line and "O" not in line for line in lines)


def test_text_renderer_includes_title_and_info() -> None:
    content = TextFretboardRenderer().render(_sample_diagram(), title="C maj")
    assert content.startswith("C maj\n")
    assert "Notes     : C  E  G" in content
    assert "Intervals : P1 M3 P5" in content


# ---------------------------------------------------------------------------
# HTML renderer
# ---------------------------------------------------------------------------

def test_html_renderer_is_valid_html_skeleton() -> None:
    html = SvgHtmlRenderer().render(_sample_diagram(), title="Skeleton")
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Skeleton</title>" in html
    assert "<h1>Skeleton</h1>" in html
    assert "<svg" in html
    assert "</html>" in html


def test_html_renderer_empty_title_no_h1() -> None:
    html = SvgHtmlRenderer().render(_sample_diagram(), title="")
    assert "<h1>" not in html


def test_html_renderer_escapes_title() -> None:
    html = SvgHtmlRenderer().render(_sample_diagram(), title="<C> & friends")
    assert "&lt;C&gt; &amp; friends" in html


def test_html_renderer_draws_one_circle_per_fretted_string() -> None:
    svg = SvgHtmlRenderer().render_svg(_sample_diagram())
    assert svg.count('class="note"') == 3
    assert svg.count('class="marker"') == 3
    assert svg.count('class="range"') == 1


def test_html_renderer_without_voicing_draws_only_the_neck() -> None:
    svg = SvgHtmlRenderer().render_svg(_sample_diagram(voicing=None))
    assert 'class="note"' not in svg
    assert svg.count('class="string"') == 6
    assert svg.count('class="fret"') == 12
    assert svg.count('class="inlay"') == 5


def test_html_renderer_info_box_lists_notes_and_intervals() -> None:
    html = SvgHtmlRenderer().render(_sample_diagram(), title="C maj")
    assert "Selected Chord Info" in html
    assert '<span class="pill">E</span>' in html
    assert '<span class="pill">M3</span>' in html


def test_html_renderer_left_handed_mirrors_nut() -> None:
    right = SvgHtmlRenderer().render_svg(_sample_diagram())
    left = SvgHtmlRenderer().render_svg(_sample_diagram(left_handed=True))
    assert 'class="nut" x="54.0"' in right
    assert 'class="nut" x="860.0"' in left
