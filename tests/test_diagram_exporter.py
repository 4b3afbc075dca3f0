"""Unit tests for DiagramExporter."""

from pathlib import Path

import pytest

from fretchord.diagram_exporter import DiagramExporter
from fretchord.fretboard_models import FretboardDiagram
from fretchord.fretboard_renderers import SvgHtmlRenderer, TextFretboardRenderer
from fretchord.voicing_generator import MUTED, Voicing


def _sample_diagram() -> FretboardDiagram:
    voicing = Voicing(strings=(MUTED, 0, 2, 2, 2, 0), inversion="root", span=0, anchor=2, fretted_range=(2, 2))
    return FretboardDiagram(root=9, formula=(0, 4, 7), voicing=voicing)


def test_unsupported_format_raises_value_error() -> None:
    with pytest.raises(ValueError, match="Unsupported output format"):
        DiagramExporter(output_format="pdf")


def test_format_is_normalized() -> None:
    exporter = DiagramExporter(output_format=" HTML ")
    assert exporter.output_format == "html"
    assert isinstance(exporter.renderer, SvgHtmlRenderer)


def test_txt_format_uses_text_renderer() -> None:
    exporter = DiagramExporter(output_format="txt")
    assert isinstance(exporter.renderer, TextFretboardRenderer)
    assert exporter.default_extension == ".txt"


def test_export_writes_html_file(tmp_path: Path) -> None:
    out = tmp_path / "a.html"
    DiagramExporter(title="A maj").export(_sample_diagram(), str(out))
    content = out.read_text(encoding="utf-8")
    assert content.startswith("<!DOCTYPE html>")
    assert "<h1>A maj</h1>" in content
    assert content.count('class="note"') == 3


def test_export_writes_text_file(tmp_path: Path) -> None:
    out = tmp_path / "a.txt"
    DiagramExporter(title="A maj", output_format="txt").export(_sample_diagram(), str(out))
    content = out.read_text(encoding="utf-8")
    assert content.startswith("A maj\n")
    assert "Notes     : A  C# E" in content


def test_export_to_missing_directory_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        DiagramExporter().export(_sample_diagram(), str(tmp_path / "missing" / "a.html"))
