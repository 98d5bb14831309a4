from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import re

from .model import LyricsDocument, Sentence, Syllable

logger = logging.getLogger(__name__)

_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

# ":" marker + beat offset + beat duration + pitch + text
_SYLLABLE_PARTS = 5


@dataclass(frozen=True, slots=True)
class ParseStats:
    lines_total: int
    lines_ignored: int
    metadata_total: int
    syllables_total: int
    sentences_total: int
    syllables_dropped: int


def split_limit(text: str, delimiter: str, max_parts: int | None = None) -> list[str]:
    """
    Split on a literal delimiter. With max_parts, the last part keeps the
    unsplit remainder:

        split_limit("a b c d", " ", 2) -> ["a", "b c d"]
    """
    if max_parts is None:
        return text.split(delimiter)
    if max_parts < 1:
        raise ValueError(f"max_parts must be positive: {max_parts}")
    return text.split(delimiter, max_parts - 1)


def parse_number(value: str) -> float:
    # longest numeric prefix, NaN when there is none ("500ms" -> 500.0)
    m = _FLOAT_PREFIX_RE.match(value)
    if not m:
        return math.nan
    return float(m.group(1))


def parse_integer(value: str) -> int | float:
    # via float so oversized values become inf instead of overflowing
    m = _INT_PREFIX_RE.match(value)
    if not m:
        return math.nan
    number = float(m.group(1))
    if not math.isfinite(number):
        return number
    return int(number)


def ms_per_beat(bpm: float) -> float:
    # beats in the file are quarter-beats
    if bpm == 0:
        return math.copysign(math.inf, bpm)
    return (60 * 1000) / (bpm * 4)


def _floor_ms(value: float) -> int | float:
    if not math.isfinite(value):
        return value
    return math.floor(value)


def _split_tag(line: str) -> tuple[str, str]:
    body = line[1:]
    if ":" not in body:
        return body.lower(), ""
    key, value = body.split(":", 1)
    return key.lower(), value


def parse_ultrastar_with_stats(text: str) -> tuple[LyricsDocument, ParseStats]:
    """
    Single pass over the lines of an UltraStar song file.

    Recognized lines (after leading whitespace is removed):
    - #TAG:value   header; GAP and BPM also drive timing of later notes
    - : b d p text note at beat b, lasting d beats, pitch p
    - -...         end of sentence

    Anything else is ignored. Notes not closed by a "-" line are dropped.
    """
    metadata: dict[str, str] = {}
    sentences: list[Sentence] = []
    pending: list[Syllable] = []

    gap = 0.0
    mspb = ms_per_beat(0.0)

    lines = text.replace("\r", "").split("\n")
    ignored = 0
    tags_total = 0
    syllables_total = 0

    for lineno, raw in enumerate(lines, start=1):
        line = raw.lstrip()
        if not line.strip():
            ignored += 1
            continue

        marker = line[0]
        if marker == "#":
            key, value = _split_tag(line)
            metadata[key] = value
            tags_total += 1
            if key == "gap":
                gap = parse_number(value)
            elif key == "bpm":
                mspb = ms_per_beat(parse_number(value.replace(",", ".", 1)))
        elif marker == ":":
            fields = split_limit(line, " ", _SYLLABLE_PARTS)[1:]
            if len(fields) < _SYLLABLE_PARTS - 1:
                logger.debug("line %d: incomplete note ignored: %r", lineno, line)
                ignored += 1
                continue
            beat, duration, pitch, syl_text = fields
            pending.append(
                Syllable(
                    start=_floor_ms(parse_integer(beat) * mspb + gap),
                    length=_floor_ms(parse_integer(duration) * mspb),
                    pitch=parse_integer(pitch),
                    text=syl_text,
                )
            )
            syllables_total += 1
        elif marker == "-":
            if pending:
                sentences.append(Sentence.from_syllables(pending))
            pending = []
        else:
            ignored += 1

    if pending:
        logger.debug("dropping %d syllable(s) after the last sentence break", len(pending))

    doc = LyricsDocument(sentences=tuple(sentences), metadata=metadata)
    stats = ParseStats(
        lines_total=len(lines),
        lines_ignored=ignored,
        metadata_total=tags_total,
        syllables_total=syllables_total,
        sentences_total=len(sentences),
        syllables_dropped=len(pending),
    )
    return doc, stats


def parse_ultrastar(text: str) -> LyricsDocument:
    doc, _stats = parse_ultrastar_with_stats(text)
    return doc


class LyricsParser:
    """Parses on construction; the result is available as `lyrics`."""

    def __init__(self, text: str):
        self.text = text
        self._lyrics, self.stats = parse_ultrastar_with_stats(text)

    @property
    def lyrics(self) -> LyricsDocument:
        return self._lyrics
