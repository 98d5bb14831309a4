from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
import math

from ultrastar_lyrics.song.model import LyricsDocument, Sentence


@dataclass(slots=True)
class KaraokeTracker:
    """
    Position lookup for a player clock: O(log n) via bisect over sentence
    starts, then over syllable starts inside the sentence.
    Sentences without a finite start are left out.
    """

    sentences: list[Sentence]
    t_ms: list[int]
    last_pos: tuple[int, int] = (-1, -1)

    @classmethod
    def from_document(cls, doc: LyricsDocument) -> "KaraokeTracker":
        sentences = [s for s in doc.sentences if math.isfinite(s.start)]
        return cls(sentences=sentences, t_ms=[int(s.start) for s in sentences])

    def current_sentence(self, now_ms: int) -> int:
        i = bisect_right(self.t_ms, now_ms) - 1
        return i if i >= 0 else -1

    def current_syllable(self, now_ms: int) -> tuple[int, int]:
        si = self.current_sentence(now_ms)
        if si < 0:
            return -1, -1
        timed = [(j, syl.start) for j, syl in enumerate(self.sentences[si].syllables) if math.isfinite(syl.start)]
        k = bisect_right([start for _j, start in timed], now_ms) - 1
        return si, (timed[k][0] if k >= 0 else -1)

    def changed(self, now_ms: int) -> tuple[int, int] | None:
        pos = self.current_syllable(now_ms)
        if pos != self.last_pos:
            self.last_pos = pos
            return pos
        return None
