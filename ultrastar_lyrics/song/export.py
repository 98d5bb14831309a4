from __future__ import annotations

import json
import logging
import math
from typing import Any, Iterator

from .model import LyricsDocument, Sentence

logger = logging.getLogger(__name__)

# UltraStar header -> LRC id tag
_LRC_TAGS = {
    "title": "ti",
    "artist": "ar",
    "album": "al",
    "creator": "by",
}


def to_dict(doc: LyricsDocument) -> dict[str, Any]:
    """
    Header tags at top level next to "sentences", the layout web players
    read directly:

        {"title": "...", "bpm": "104", "sentences": [{"start": 500, ...}]}
    """
    out: dict[str, Any] = dict(doc.metadata)
    out["sentences"] = [
        {
            "start": s.start,
            "text": s.text,
            "syllables": [
                {"start": syl.start, "length": syl.length, "pitch": syl.pitch, "text": syl.text}
                for syl in s.syllables
            ],
        }
        for s in doc.sentences
    ]
    return out


def export_json(doc: LyricsDocument, indent: int | None = 2) -> str:
    return json.dumps(to_dict(doc), ensure_ascii=False, indent=indent)


def _timed(doc: LyricsDocument) -> Iterator[Sentence]:
    for i, s in enumerate(doc.sentences):
        if not math.isfinite(s.start):
            logger.warning("sentence %d has no usable start time, skipped: %r", i, s.text)
            continue
        yield s


def _clamp(ms: int | float) -> int:
    if not math.isfinite(ms):
        return 0
    return max(int(ms), 0)


def _fmt_lrc_time(ms: int) -> str:
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"


def export_lrc(doc: LyricsDocument, include_tags: bool = True, word_timing: bool = False) -> str:
    out: list[str] = []
    if include_tags:
        for key, lrc_key in _LRC_TAGS.items():
            value = doc.metadata.get(key, "").strip()
            if value:
                out.append(f"[{lrc_key}:{value}]")

    for s in _timed(doc):
        if word_timing:
            body = "".join(f"<{_fmt_lrc_time(_clamp(syl.start))}>{syl.text}" for syl in s.syllables)
        else:
            body = s.text
        out.append(f"[{_fmt_lrc_time(_clamp(s.start))}]{body.rstrip()}")
    return "\n".join(out) + ("\n" if out else "")


def _fmt_srt_time(ms: int) -> str:
    # HH:MM:SS,mmm
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(doc: LyricsDocument) -> str:
    """One cue per sentence, from its first syllable to the end of its last one."""
    out: list[str] = []
    for i, s in enumerate(_timed(doc), start=1):
        start = _clamp(s.start)
        end = max(_clamp(s.end), start + 1)
        out.append(str(i))
        out.append(f"{_fmt_srt_time(start)} --> {_fmt_srt_time(end)}")
        out.append(s.text.strip())
        out.append("")
    return "\n".join(out)
