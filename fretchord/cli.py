"""fretchord CLI entry point."""

import logging
import re
import sys
from typing import Any, Callable

import click

from fretchord import __version__
from fretchord.chord_formulas import CHORD_FORMULAS, CHORD_QUALITIES, ExtensionFlags
from fretchord.chord_info import chord_info_rows
from fretchord.diagram_exporter import DiagramExporter
from fretchord.fretboard_models import (
    NO_VOICING_MESSAGE,
    ChordSelection,
    FretboardDiagram,
    VoicingBrowser,
)
from fretchord.fretboard_renderers import TextFretboardRenderer
from fretchord.midi_exporter import MidiExporter
from fretchord.notes import STANDARD_TUNING, name_to_pc
from fretchord.voicing_generator import (
    DEFAULT_FRET_WINDOW,
    DEFAULT_MAX_SPAN,
    DEFAULT_POSITION_WIDTH,
    MAX_FRET,
    GeneratorOptions,
    Voicing,
    generate_voicings,
)

MAX_POSITION = 12
ENV_PREFIX = "FRETCHORD"


def _parse_root(ctx: click.Context, param: click.Parameter, value: str) -> int:
    try:
        return name_to_pc(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from None


def _title_to_filename(title: str, extension: str) -> str:
    """
    Convert a chord title to a safe filename.

    Sharps become 's' so 'C# maj7' turns into 'Cs_maj7', other characters
    that are invalid in filenames are dropped and whitespace collapses to
    underscores.
    """
    sanitized = re.sub(r"[^\w\s-]", "", title.replace("#", "s"))
    sanitized = re.sub(r"\s+", "_", sanitized.strip())
    return f"{sanitized}{extension}"


def chord_arguments(func: Callable[..., Any]) -> Callable[..., Any]:
    """ROOT, QUALITY and the extension toggles shared by every chord command."""
    decorators = [
        click.argument("root", callback=_parse_root, metavar="ROOT"),
        click.argument("quality", type=click.Choice(CHORD_QUALITIES)),
        click.option("--sus2", is_flag=True, help="Suspend to the 2nd: plays R, 2, 5 only."),
        click.option("--sus4", is_flag=True, help="Suspend to the 4th: plays R, 4, 5 only. Wins over --sus2."),
        click.option("--add9", is_flag=True, help="Add the 9th when the chord does not already have it."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def search_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Position, span and fret-window constraints for the voicing search."""
    decorators = [
        click.option(
            "--position",
            "-p",
            type=click.IntRange(1, MAX_POSITION),
            default=1,
            show_default=True,
            help="Preferred neck position (fret where the index finger sits).",
        ),
        click.option(
            "--any-position",
            is_flag=True,
            help="Ignore --position and search the whole fret window.",
        ),
        click.option(
            "--position-width",
            type=click.IntRange(0, MAX_POSITION),
            default=DEFAULT_POSITION_WIDTH,
            show_default=True,
            help="Fret tolerance around the preferred position.",
        ),
        click.option(
            "--max-span",
            type=click.IntRange(0, MAX_FRET),
            default=DEFAULT_MAX_SPAN,
            show_default=True,
            help="Largest distance between the lowest and highest fretted note.",
        ),
        click.option(
            "--open/--no-open",
            "allow_open",
            default=True,
            show_default=True,
            help="Allow open strings.",
        ),
        click.option(
            "--fret-window",
            type=(click.IntRange(0, MAX_FRET), click.IntRange(0, MAX_FRET)),
            default=DEFAULT_FRET_WINDOW,
            show_default=True,
            metavar="MIN MAX",
            help="Inclusive fret range scanned on every string.",
        ),
        click.option(
            "--index",
            "-i",
            type=click.IntRange(min=1),
            default=1,
            show_default=True,
            help="Which ranked voicing to draw (1 = best). Wraps around past the end.",
        ),
        click.option("--left-handed", is_flag=True, help="Mirror the fretboard for left-handed players."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _build_selection(root: int, quality: str, sus2: bool, sus4: bool, add9: bool, **kwargs: Any) -> ChordSelection:
    extensions = ExtensionFlags().with_sus2(sus2).with_sus4(sus4).with_add9(add9)
    return ChordSelection(root=root, quality=quality, extensions=extensions, **kwargs)


def _build_options(
    selection: ChordSelection,
    position_width: int,
    max_span: int,
    fret_window: tuple[int, int],
) -> GeneratorOptions:
    try:
        return GeneratorOptions(
            max_span=max_span,
            allow_open=selection.allow_open,
            fret_window=fret_window,
            preferred_position=selection.position,
            position_width=position_width,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from None


def _search(
    root: int,
    quality: str,
    sus2: bool,
    sus4: bool,
    add9: bool,
    position: int,
    any_position: bool,
    position_width: int,
    max_span: int,
    allow_open: bool,
    fret_window: tuple[int, int],
    index: int,
    left_handed: bool,
) -> tuple[ChordSelection, VoicingBrowser]:
    selection = _build_selection(
        root,
        quality,
        sus2,
        sus4,
        add9,
        allow_open=allow_open,
        position=None if any_position else position,
        left_handed=left_handed,
    )
    options = _build_options(selection, position_width, max_span, fret_window)
    voicings = generate_voicings(STANDARD_TUNING, selection.root, selection.formula(), options)
    return selection, VoicingBrowser(voicings, index - 1)


def _diagram(selection: ChordSelection, voicing: Voicing | None) -> FretboardDiagram:
    return FretboardDiagram(
        root=selection.root,
        formula=selection.formula(),
        voicing=voicing,
        tuning=STANDARD_TUNING,
        left_handed=selection.left_handed,
    )


def _echo_header(selection: ChordSelection, width: int) -> None:
    click.echo(f"fretchord v{__version__}")
    click.echo(f"  Chord    : {selection.title}")
    if selection.position is None:
        click.echo("  Position : any")
    else:
        click.echo(f"  Position : {selection.position} (±{width})")


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": ENV_PREFIX})
@click.version_option(version=__version__, prog_name="fretchord")
@click.option("--verbose", "-v", is_flag=True, help="Log search statistics to stderr.")
def main(verbose: bool) -> None:
    """fretchord — guitar chord voicings on the fretboard."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ── qualities subcommand ───────────────────────────────────────────────────────

@main.command()
def qualities() -> None:
    """List every chord quality and its interval formula."""
    for quality, formula in CHORD_FORMULAS.items():
        click.echo(f"{quality:<5}  {', '.join(str(iv) for iv in formula)}")


# ── info subcommand ────────────────────────────────────────────────────────────

@main.command()
@chord_arguments
def info(root: int, quality: str, sus2: bool, sus4: bool, add9: bool) -> None:
    """
    Show the notes and intervals of a chord.

    \b
    Examples:
      fretchord info C maj7
      fretchord info F# min --add9
    """
    selection = _build_selection(root, quality, sus2, sus4, add9)
    click.echo(selection.title)
    for row in chord_info_rows(selection.root, selection.formula()):
        click.echo(f"  {row.note:<3} {row.degree:<3} {row.interval}")


# ── show subcommand ────────────────────────────────────────────────────────────

@main.command()
@chord_arguments
@search_options
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help="How many ranked voicings to list (0 = all).",
)
def show(limit: int, **params: Any) -> None:
    """
    List ranked voicings of a chord and draw one on a text fretboard.

    ROOT is a note name (C, F#, Bb...). QUALITY is one of the names listed
    by `fretchord qualities`.

    \b
    Examples:
      fretchord show C maj
      fretchord show A min7 --position 5 --index 2
      fretchord show G 7 --any-position --no-open --max-span 4
    """
    selection, browser = _search(**params)
    _echo_header(selection, params["position_width"])
    click.echo(f"  Found    : {len(browser)} voicing(s)")
    click.echo()

    if not len(browser):
        click.echo(f"  {NO_VOICING_MESSAGE}", err=True)
        sys.exit(1)

    shown = browser.voicings if limit == 0 else browser.voicings[:limit]
    click.echo("    #  Tab              Inv   Span  Anchor   Score")
    for number, voicing in enumerate(shown, start=1):
        pointer = ">" if number - 1 == browser.index else " "
        anchor = "-" if voicing.anchor is None else str(voicing.anchor)
        click.echo(
            f"  {pointer}{number:>2}  {voicing.tab:<15}  {voicing.inversion:<4}  "
            f"{voicing.span:>4}  {anchor:>6}  {voicing.score:>6.2f}"
        )
    click.echo()

    renderer = TextFretboardRenderer()
    click.echo(renderer.render(_diagram(selection, browser.current), title=""), nl=False)
    click.echo()
    click.echo(browser.status_line())


# ── export subcommand ──────────────────────────────────────────────────────────

@main.command()
@chord_arguments
@search_options
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file path. Defaults to <chord-title> plus the format's extension.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "txt", "mid"], case_sensitive=False),
    default="html",
    show_default=True,
    help="Output format: HTML with an SVG fretboard, plain-text fretboard, or MIDI chord.",
)
@click.option(
    "--all",
    "export_all",
    is_flag=True,
    help="MIDI only: play every ranked voicing in order instead of just the selected one.",
)
@click.option(
    "--tempo",
    type=click.IntRange(20, 300),
    default=MidiExporter.DEFAULT_TEMPO,
    show_default=True,
    help="MIDI playback tempo in BPM.",
)
def export(output: str | None, output_format: str, export_all: bool, tempo: int, **params: Any) -> None:
    """
    Write a chord voicing to an HTML, text or MIDI file.

    \b
    Examples:
      fretchord export C maj7
      fretchord export E min --format txt -o em.txt
      fretchord export D 9 --position 5 --format mid --all
    """
    selection, browser = _search(**params)
    normalized_format = output_format.lower()
    _echo_header(selection, params["position_width"])

    voicing = browser.current
    if voicing is None:
        click.echo(f"  {NO_VOICING_MESSAGE}", err=True)
        sys.exit(1)

    if normalized_format == "mid":
        resolved_output = output or _title_to_filename(selection.title, ".mid")
        click.echo(f"  Output   : {resolved_output}")
        voicings = browser.voicings if export_all else [voicing]
        try:
            MidiExporter(tempo=tempo).export(voicings, resolved_output, tuning=STANDARD_TUNING)
        except OSError as exc:
            click.echo(f"  ERROR: Could not write MIDI file — {exc}", err=True)
            sys.exit(1)
        click.echo()
        click.echo(f"Done!  Wrote {len(voicings)} chord(s) to '{resolved_output}'.")
        return

    exporter = DiagramExporter(title=selection.title, output_format=normalized_format)
    resolved_output = output or _title_to_filename(selection.title, exporter.default_extension)
    click.echo(f"  Output   : {resolved_output}")
    try:
        exporter.export(_diagram(selection, voicing), resolved_output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Done!  {browser.status_line()}")
