"""Renderer implementations for fretboard diagram output formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from fretchord.chord_info import ChordInfoRow, chord_info_rows, degree_label_for_pc
from fretchord.fretboard_models import FretboardDiagram
from fretchord.notes import midi_to_pc, pc_to_name
from fretchord.voicing_generator import MUTED

INLAY_FRETS: tuple[int, ...] = (3, 5, 7, 9, 12)


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _visible_frets(diagram: FretboardDiagram) -> int:
    """Number of frets to draw: the diagram default, widened to fit the voicing."""
    if diagram.voicing is None:
        return diagram.frets_count
    return max(diagram.frets_count, diagram.voicing.fretted_range[1])


def _note_label(diagram: FretboardDiagram, string_index: int, fret: int) -> str:
    pc = midi_to_pc(diagram.tuning[string_index] + fret)
    return degree_label_for_pc(pc, diagram.root)


class FretboardRenderer(ABC):
    """Abstract fretboard renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, diagram: FretboardDiagram, *, title: str) -> str:
        """Render a diagram into a file content string."""


class TextFretboardRenderer(FretboardRenderer):
    """
    Render a fretboard as monospace text for the terminal.

    The high string is drawn on top, with ``X``/``O`` beside the nut for muted
    and open strings and the degree label (R, 3, b7, ...) in each fretted
    cell::

         E O ||---|---|---|
         B   ||-R-|---|---|
         G O ||---|---|---|

    Left-handed diagrams mirror the neck so the nut sits on the right.
    """

    _EMPTY_CELL = "---"

    @property
    def default_extension(self) -> str:
        return ".txt"

    def render(self, diagram: FretboardDiagram, *, title: str) -> str:
        lines: list[str] = []
        if title:
            lines.extend([title, ""])
        lines.extend(self.render_neck(diagram))
        rows = chord_info_rows(diagram.root, diagram.formula)
        if rows:
            lines.append("")
            lines.extend(self.render_info(rows))
        return "\n".join(lines) + "\n"

    def _marker(self, diagram: FretboardDiagram, string_index: int) -> str:
        if diagram.voicing is None:
            return " "
        fret = diagram.voicing.strings[string_index]
        if fret == MUTED:
            return "X"
        if fret == 0:
            return "O"
        return " "

    def _cells(self, diagram: FretboardDiagram, string_index: int, frets: int) -> list[str]:
        cells = [self._EMPTY_CELL] * frets
        if diagram.voicing is not None:
            fret = diagram.voicing.strings[string_index]
            if fret != MUTED and int(fret) > 0:
                cells[int(fret) - 1] = f"{_note_label(diagram, string_index, int(fret)):-^3}"
        return cells

    def render_neck(self, diagram: FretboardDiagram) -> list[str]:
        """Return one line per string (high string first) plus a fret-number ruler."""
        frets = _visible_frets(diagram)
        lines: list[str] = []
        for string_index in reversed(range(len(diagram.tuning))):
            name = pc_to_name(diagram.tuning[string_index])
            marker = self._marker(diagram, string_index)
            cells = self._cells(diagram, string_index, frets)
            if diagram.left_handed:
                body = "".join(f"|{cell}" for cell in reversed(cells))
                lines.append(f"{body}|| {marker} {name:<2}")
            else:
                body = "".join(f"{cell}|" for cell in cells)
                lines.append(f"{name:>2} {marker} ||{body}")

        numbers = range(1, frets + 1)
        if diagram.left_handed:
            lines.append("".join(f" {n:^3}" for n in reversed(numbers)))
        else:
            lines.append(" " * 7 + "".join(f"{n:^3} " for n in numbers).rstrip())
        return lines

    def render_info(self, rows: list[ChordInfoRow]) -> list[str]:
        width = max(max(len(r.note), len(r.interval)) for r in rows)
        return [
            "Notes     : " + " ".join(f"{r.note:<{width}}" for r in rows).rstrip(),
            "Intervals : " + " ".join(f"{r.interval:<{width}}" for r in rows).rstrip(),
        ]


class SvgHtmlRenderer(FretboardRenderer):
    """Render a fretboard into a self-contained HTML document with inline SVG."""

    # SVG layout constants (user units)
    _WIDTH: int = 920
    _HEIGHT: int = 260
    _LEFT_PAD: int = 60  # room for X/O markers and string names
    _TOP_PAD: int = 36
    _RIGHT_PAD: int = 20
    _BOTTOM_PAD: int = 16
    _NOTE_RADIUS: int = 12

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, diagram: FretboardDiagram, *, title: str) -> str:
        svg = self.render_svg(diagram)
        rows = chord_info_rows(diagram.root, diagram.formula)
        return self.build_html(title, svg, rows)

    def render_svg(self, diagram: FretboardDiagram) -> str:
        """Draw the neck, the chord shape and the fretted-range highlight as one SVG element."""
        frets = _visible_frets(diagram)
        strings = len(diagram.tuning)
        usable_height = self._HEIGHT - self._TOP_PAD - self._BOTTOM_PAD
        string_gap = usable_height / max(strings - 1, 1)
        fret_gap = (self._WIDTH - self._LEFT_PAD - self._RIGHT_PAD) / frets

        def fret_x(fret: float) -> float:
            return self._LEFT_PAD + fret * fret_gap

        def space_x(fret: int) -> float:
            """Centre of the space behind a fret, where a finger goes."""
            return fret_x(0) if fret <= 0 else (fret_x(fret - 1) + fret_x(fret)) / 2

        def string_y(string_index: int) -> float:
            # high string on top
            return self._TOP_PAD + (strings - 1 - string_index) * string_gap

        mirror: Callable[[float], float] = (
            (lambda x: self._WIDTH - x) if diagram.left_handed else (lambda x: x)
        )
        text_anchor_end = "start" if diagram.left_handed else "end"

        top = self._TOP_PAD - 10
        bottom = self._TOP_PAD + usable_height + 10
        parts: list[str] = [
            f'<rect x="0" y="0" width="{self._WIDTH}" height="{self._HEIGHT}" fill="#0b0d10" rx="8"/>',
        ]

        nut_x = min(mirror(self._LEFT_PAD - 6), mirror(self._LEFT_PAD))
        parts.append(
            f'<rect class="nut" x="{nut_x:.1f}" y="{top}" width="6" height="{usable_height + 20}" fill="#d9d9d9"/>'
        )

        for s in range(strings):
            y = string_y(s)
            parts.append(
                f'<line class="string" x1="{mirror(self._LEFT_PAD - 6):.1f}" y1="{y:.1f}" '
                f'x2="{mirror(fret_x(frets)):.1f}" y2="{y:.1f}" stroke="#c7cbd2" stroke-width="1.6"/>'
            )

        for f in range(1, frets + 1):
            x = mirror(fret_x(f))
            parts.append(
                f'<line class="fret" x1="{x:.1f}" y1="{top}" x2="{x:.1f}" y2="{bottom}" '
                f'stroke="#3a4456" stroke-width="2"/>'
            )

        for f in INLAY_FRETS:
            if f <= frets:
                parts.append(
                    f'<circle class="inlay" cx="{mirror(space_x(f)):.1f}" '
                    f'cy="{self._TOP_PAD + usable_height / 2:.1f}" r="6" fill="#243141"/>'
                )

        for s, open_pitch in enumerate(diagram.tuning):
            parts.append(
                f'<text x="{mirror(self._LEFT_PAD - 12):.1f}" y="{string_y(s) + 4:.1f}" '
                f'text-anchor="{text_anchor_end}" font-size="12" fill="#e8eef6" font-weight="700">'
                f"{_escape_html(pc_to_name(open_pitch))}</text>"
            )

        for f in range(1, frets + 1):
            parts.append(
                f'<text x="{mirror(space_x(f)):.1f}" y="{bottom + 3}" text-anchor="middle" '
                f'font-size="9" fill="#9aa6b2">{f}</text>'
            )

        voicing = diagram.voicing
        if voicing is not None:
            low, high = voicing.fretted_range
            if high > 0:
                x_start = fret_x(max(0, low - 1))
                x_end = fret_x(high)
                left = min(mirror(x_start), mirror(x_end))
                parts.append(
                    f'<rect class="range" x="{left:.1f}" y="{top}" width="{x_end - x_start:.1f}" '
                    f'height="{usable_height + 20}" fill="#88aaff" opacity="0.08" rx="4"/>'
                )

            for s, fret in enumerate(voicing.strings):
                if fret == MUTED or fret == 0:
                    marker = "X" if fret == MUTED else "O"
                    parts.append(
                        f'<text class="marker" x="{mirror(self._LEFT_PAD - 34):.1f}" y="{string_y(s) - 6:.1f}" '
                        f'text-anchor="middle" fill="#e8eef6" font-weight="700">{marker}</text>'
                    )
                    continue
                cx = mirror(space_x(int(fret)))
                cy = string_y(s)
                label = _escape_html(_note_label(diagram, s, int(fret)))
                parts.append(
                    f'<g class="note"><circle cx="{cx:.1f}" cy="{cy:.1f}" r="{self._NOTE_RADIUS}" '
                    f'fill="#88aaff" stroke="#e8eef6" stroke-width="1.5"/>'
                    f'<text x="{cx:.1f}" y="{cy + 4:.1f}" text-anchor="middle" font-size="11" '
                    f'fill="#0b0d10" font-weight="800">{label}</text></g>'
                )

        body = "\n    ".join(parts)
        return (
            f'<svg viewBox="0 0 {self._WIDTH} {self._HEIGHT}" width="100%" role="img" '
            f'aria-label="Guitar fretboard with chord">\n    {body}\n  </svg>'
        )

    def build_html(self, title: str, svg: str, rows: list[ChordInfoRow]) -> str:
        """
        Wrap the fretboard SVG and the chord info box in an HTML document.

        The info box lists the chord's notes and intervals as pills; it is
        omitted when the formula is empty.
        """
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        info = ""
        if rows:
            notes = "".join(f'<span class="pill">{_escape_html(r.note)}</span>' for r in rows)
            intervals = "".join(f'<span class="pill">{_escape_html(r.interval)}</span>' for r in rows)
            info = (
                '  <div class="info-box">\n'
                '    <div class="title">Selected Chord Info</div>\n'
                f'    <div class="row"><div class="muted">Notes</div><div>{notes}</div></div>\n'
                f'    <div class="row"><div class="muted">Intervals</div><div>{intervals}</div></div>\n'
                "  </div>\n"
            )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: system-ui, sans-serif;
      background: #12151a;
      color: #e8eef6;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{
      text-align: center;
      font-size: 1.6rem;
      margin-bottom: 2rem;
    }}
    .info-box {{
      max-width: 920px;
      margin: 0 auto 1rem;
      padding: 0.75rem 1rem;
      border: 1px solid #243141;
      border-radius: 8px;
    }}
    .info-box .title {{ font-weight: 700; margin-bottom: 0.5rem; }}
    .info-box .row {{ display: flex; gap: 1rem; align-items: center; margin: 0.25rem 0; }}
    .info-box .muted {{ color: #9aa6b2; min-width: 5rem; }}
    .pill {{
      display: inline-block;
      padding: 0.1rem 0.5rem;
      margin-right: 0.35rem;
      border-radius: 999px;
      background: #243141;
    }}
    .fretboard {{
      max-width: 920px;
      margin: 0 auto;
    }}
    .fretboard svg {{
      display: block;
      width: 100%;
      height: auto;
    }}
  </style>
</head>
<body>
{heading}{info}  <div class="fretboard">
  {svg}
  </div>
</body>
</html>"""
