"""Rhythm domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

STRING_COUNT = 6

TICKS_PER_WHOLE_NOTE = 192

# 196 (not 192) is what the corrector has always accepted.
SANE_DURATIONS: frozenset[int] = frozenset({2, 3, 4, 6, 8, 9, 12, 16, 18, 24, 32, 36, 48, 72, 96, 144, 196})
PRINTABLE_DURATIONS: frozenset[int] = frozenset({1, 2, 3, 4, 6, 8, 9, 12, 16, 18, 24, 32, 36, 48, 72, 96, 144, 192})


def is_sane_duration(value: int) -> bool:
    return value in SANE_DURATIONS


def is_printable_duration(value: int) -> bool:
    return value in PRINTABLE_DURATIONS


@dataclass(frozen=True, slots=True)
class Note:
    string: int
    fret: int

    def validate(self) -> None:
        if not (0 <= self.string < STRING_COUNT):
            raise ValueError(f"string must be in range [0,{STRING_COUNT - 1}]")


def _empty_strings() -> list[Note | None]:
    return [None] * STRING_COUNT


@dataclass(slots=True)
class Chord:
    start: float
    duration: int = 0
    notes: list[Note | None] = field(default_factory=_empty_strings)
    chord_id: int | None = None
    tied: bool = False

    def add_note(self, note: Note) -> bool:
        """Place ``note`` on its string unless the string is already taken."""
        note.validate()
        if self.notes[note.string] is not None:
            return False
        self.notes[note.string] = note
        return True

    def note_on(self, string: int) -> Note | None:
        return self.notes[string]

    def iter_notes(self) -> Iterator[Note]:
        for note in self.notes:
            if note is not None:
                yield note

    @property
    def is_silent(self) -> bool:
        return all(note is None for note in self.notes)

    def absorb(self, other: Chord) -> list[Note]:
        """Union ``other``'s notes into this chord; returns the notes that collided."""
        rejected: list[Note] = []
        for note in other.iter_notes():
            if not self.add_note(note) and self.notes[note.string] != note:
                rejected.append(note)
        return rejected

    def tie_copy(self, duration: int) -> Chord:
        return Chord(
            start=self.start,
            duration=duration,
            notes=list(self.notes),
            chord_id=self.chord_id,
            tied=True,
        )


@dataclass(slots=True)
class Bar:
    start: float
    end: float
    time_nominator: int = 4
    time_denominator: int = 4
    tempo: float = 120.0
    chords: list[Chord] = field(default_factory=list)

    @property
    def expected_ticks(self) -> int:
        return TICKS_PER_WHOLE_NOTE * self.time_nominator // self.time_denominator

    @property
    def beat_ticks(self) -> int:
        return TICKS_PER_WHOLE_NOTE // self.time_denominator

    def contains_time(self, time: float) -> bool:
        return self.start <= time < self.end

    def time_to_ticks(self, seconds: float) -> int:
        return round(seconds * self.expected_ticks / (self.end - self.start))

    def total_ticks(self) -> int:
        return sum(chord.duration for chord in self.chords)

    def validate(self) -> None:
        if self.end <= self.start:
            raise ValueError("bar end must be after bar start")
        if self.time_nominator <= 0:
            raise ValueError("time_nominator must be positive")
        if self.time_denominator <= 0:
            raise ValueError("time_denominator must be positive")
        previous = float("-inf")
        for chord in self.chords:
            if chord.start < previous:
                raise ValueError("chords must be ordered by start")
            previous = chord.start


@dataclass(frozen=True, slots=True)
class RhythmValue:
    duration: int
    note_index: int
