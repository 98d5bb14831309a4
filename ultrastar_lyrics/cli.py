from __future__ import annotations

from pathlib import Path
import typer

from ultrastar_lyrics.config import load_config, save_config_encoding
from ultrastar_lyrics.logging_setup import setup_logging
from ultrastar_lyrics.song.export import export_json, export_lrc, export_srt
from ultrastar_lyrics.song.model import LyricsDocument
from ultrastar_lyrics.song.parse import parse_ultrastar, parse_ultrastar_with_stats
from ultrastar_lyrics.sources.errors import LoadError
from ultrastar_lyrics.sources.loader import load_text
from ultrastar_lyrics.sync.tracker import KaraokeTracker


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load(source: str) -> str:
    try:
        return load_text(source, cfg=load_config())
    except LoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _load_document(source: str) -> LyricsDocument:
    return parse_ultrastar(_load(source))


@app.command()
def parse(
    source: str = typer.Argument(..., help="Song file path or http(s) URL"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Parse an UltraStar song and print stats."""
    setup_logging(debug)
    doc, stats = parse_ultrastar_with_stats(_load(source))
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"lines_ignored={stats.lines_ignored}")
    typer.echo(f"metadata_total={stats.metadata_total}")
    typer.echo(f"syllables_total={stats.syllables_total}")
    typer.echo(f"syllables_dropped={stats.syllables_dropped}")
    typer.echo(f"sentences_total={stats.sentences_total}")
    typer.echo(f"metadata={doc.metadata}")


@app.command()
def export(
    source: str = typer.Argument(..., help="Song file path or http(s) URL"),
    fmt: str = typer.Option("json", "--format", case_sensitive=False, help="json|lrc|srt"),
    words: bool = typer.Option(False, "--words", help="Per-syllable timestamps (LRC only)"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Export a song's lyrics as JSON, LRC or SRT."""
    setup_logging(debug)
    fmt_l = fmt.lower()
    if fmt_l not in ("json", "lrc", "srt"):
        raise typer.BadParameter("format must be one of: json, lrc, srt")

    doc = _load_document(source)
    if fmt_l == "json":
        data = export_json(doc, indent=load_config().json_indent) + "\n"
    elif fmt_l == "lrc":
        data = export_lrc(doc, word_timing=words)
    else:
        data = export_srt(doc)

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def at(
    source: str = typer.Argument(..., help="Song file path or http(s) URL"),
    ms: int = typer.Argument(..., help="Playback position in milliseconds"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Show the sentence and syllable sung at a playback position."""
    setup_logging(debug)
    doc = _load_document(source)
    tracker = KaraokeTracker.from_document(doc)
    si, yi = tracker.current_syllable(ms)
    if si < 0:
        typer.echo("(before first sentence)")
        return
    sentence = tracker.sentences[si]
    typer.echo(f"sentence {si + 1}: {sentence.text.rstrip()}")
    if yi >= 0:
        syl = sentence.syllables[yi]
        state = "singing" if ms < syl.end else "held"
        typer.echo(f"syllable {yi + 1}: {syl.text!r} start={syl.start} length={syl.length} pitch={syl.pitch} ({state})")


@app.command()
def config(
    encoding: str | None = typer.Option(None, "--encoding", help="Fallback encoding for non-UTF-8 song files"),
):
    """Show or update persistent settings."""
    if encoding:
        try:
            path = save_config_encoding(encoding)
        except ValueError as e:
            raise typer.BadParameter(str(e))
        typer.echo(f"Saved fallback_encoding={encoding} to {path}")
        return

    cfg = load_config()
    typer.echo(f"config_dir={cfg.config_dir}")
    typer.echo(f"fallback_encoding={cfg.fallback_encoding}")
    typer.echo(f"http_timeout_s={cfg.http_timeout_s}")
    typer.echo(f"http_max_retries={cfg.http_max_retries}")
    typer.echo(f"json_indent={cfg.json_indent}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
