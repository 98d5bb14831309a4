from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Syllable:
    # timings are absolute ms; NaN/inf stay floats when the tempo is degenerate
    start: int | float
    length: int | float
    pitch: int | float
    text: str

    @property
    def end(self) -> int | float:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class Sentence:
    start: int | float
    text: str
    syllables: tuple[Syllable, ...]

    @classmethod
    def from_syllables(cls, syllables: list[Syllable] | tuple[Syllable, ...]) -> "Sentence":
        syl = tuple(syllables)
        return cls(start=syl[0].start, text="".join(s.text for s in syl), syllables=syl)

    @property
    def end(self) -> int | float:
        return max(s.end for s in self.syllables)


@dataclass(frozen=True, slots=True)
class LyricsDocument:
    sentences: tuple[Sentence, ...]
    metadata: dict[str, str]

    @property
    def title(self) -> str | None:
        return self.metadata.get("title")

    @property
    def artist(self) -> str | None:
        return self.metadata.get("artist")

    @property
    def gap(self) -> str | None:
        return self.metadata.get("gap")

    @property
    def bpm(self) -> str | None:
        return self.metadata.get("bpm")

    @property
    def syllables(self) -> tuple[Syllable, ...]:
        return tuple(s for sentence in self.sentences for s in sentence.syllables)
