"""DiagramExporter: writes fretboard diagrams to HTML or plain-text files."""

from __future__ import annotations

import logging
from typing import Final

from fretchord.fretboard_models import FretboardDiagram
from fretchord.fretboard_renderers import (
    FretboardRenderer,
    SvgHtmlRenderer,
    TextFretboardRenderer,
)

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS: Final[set[str]] = {"html", "txt"}


class DiagramExporter:
    """
    Write a fretboard diagram to disk via a pluggable renderer.

    Supported formats:
    - ``html``: self-contained HTML page with an inline SVG fretboard.
    - ``txt``: monospace text fretboard, the same one ``fretchord show`` prints.
    """

    def __init__(self, title: str = "", output_format: str = "html") -> None:
        self.title = title
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized)

    def _build_renderer(self, output_format: str) -> FretboardRenderer:
        if output_format == "html":
            return SvgHtmlRenderer()
        return TextFretboardRenderer()

    @property
    def default_extension(self) -> str:
        return self.renderer.default_extension

    def render(self, diagram: FretboardDiagram) -> str:
        return self.renderer.render(diagram, title=self.title)

    def export(self, diagram: FretboardDiagram, output_path: str) -> None:
        """
        Render the diagram in the selected format and write it to disk.

        Raises:
            OSError: If the output file cannot be written.
        """
        content = self.render(diagram)
        logger.debug("Writing %s diagram (%d chars) to %s", self.output_format, len(content), output_path)
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
