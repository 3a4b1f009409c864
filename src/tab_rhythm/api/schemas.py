"""FastAPI request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DiagnosticItem(BaseModel):
    code: str
    message: str
    bar_index: int | None = None
    chord_index: int | None = None


class QuantizeRequest(BaseModel):
    durations: list[float] = Field(min_length=1)
    measure_duration: float = Field(default=192.0, gt=0)
    beat_duration: int = Field(default=48, ge=1)


class RhythmValueItem(BaseModel):
    duration: int
    note_index: int


class QuantizeResponse(BaseModel):
    values: list[RhythmValueItem]
    diagnostics: list[DiagnosticItem]


class BeatItem(BaseModel):
    time: float
    measure: int = -1


class NoteItem(BaseModel):
    time: float
    string: int = Field(ge=0, le=5)
    fret: int


class ChordNoteItem(BaseModel):
    string: int = Field(ge=0, le=5)
    fret: int


class ChordItem(BaseModel):
    time: float
    chord_id: int
    notes: list[ChordNoteItem] | None = None


class ChordTemplateItem(BaseModel):
    chord_id: int
    name: str = ""
    frets: list[int] = Field(min_length=6, max_length=6)
    fingers: list[int] = Field(default_factory=lambda: [-1] * 6, min_length=6, max_length=6)


class ArrangementRequest(BaseModel):
    name: str = "Lead"
    song_length: float = Field(ge=0)
    average_tempo: float = Field(default=120.0, gt=0)
    beats: list[BeatItem] = Field(min_length=1)
    notes: list[NoteItem] = Field(default_factory=list)
    chords: list[ChordItem] = Field(default_factory=list)
    chord_templates: list[ChordTemplateItem] = Field(default_factory=list)


class BarChordItem(BaseModel):
    start: float
    duration: int
    tied: bool
    chord_id: int | None = None
    frets: list[int | None]


class BarItem(BaseModel):
    start: float
    end: float
    time_nominator: int
    time_denominator: int
    tempo: float
    chords: list[BarChordItem]


class ArrangementResponse(BaseModel):
    name: str
    bars: list[BarItem]
    diagnostics: list[DiagnosticItem]
