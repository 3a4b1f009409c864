"""Decoded arrangement events handed to the rhythm pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from tab_rhythm.rhythm.diagnostics import Diagnostic
from tab_rhythm.rhythm.models import STRING_COUNT, Bar


@dataclass(frozen=True, slots=True)
class BeatMarker:
    time: float
    measure: int = -1  # >= 0 opens a new bar, negative marks a sub-beat

    @property
    def starts_bar(self) -> bool:
        return self.measure >= 0


@dataclass(frozen=True, slots=True)
class NoteEvent:
    time: float
    string: int
    fret: int


@dataclass(frozen=True, slots=True)
class ChordEvent:
    time: float
    chord_id: int
    notes: tuple[NoteEvent, ...] | None = None


@dataclass(frozen=True, slots=True)
class ChordTemplate:
    chord_id: int
    name: str = ""
    frets: tuple[int, ...] = (-1,) * STRING_COUNT
    fingers: tuple[int, ...] = (-1,) * STRING_COUNT

    def validate(self) -> None:
        if len(self.frets) != STRING_COUNT:
            raise ValueError(f"frets must have {STRING_COUNT} entries")
        if len(self.fingers) != STRING_COUNT:
            raise ValueError(f"fingers must have {STRING_COUNT} entries")


@dataclass(slots=True)
class Arrangement:
    name: str
    song_length: float
    average_tempo: float
    beats: list[BeatMarker] = field(default_factory=list)
    notes: list[NoteEvent] = field(default_factory=list)
    chords: list[ChordEvent] = field(default_factory=list)
    chord_templates: list[ChordTemplate] = field(default_factory=list)

    def validate(self) -> None:
        if self.song_length < 0:
            raise ValueError("song_length must be >= 0")
        if self.average_tempo <= 0:
            raise ValueError("average_tempo must be positive")
        for template in self.chord_templates:
            template.validate()


@dataclass(slots=True)
class Track:
    name: str
    average_tempo: float
    chord_templates: dict[int, ChordTemplate]
    bars: list[Bar]
    diagnostics: list[Diagnostic] = field(default_factory=list)
