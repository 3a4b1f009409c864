"""HTTP endpoints for rhythm quantization and arrangement conversion."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from tab_rhythm.api.schemas import (
    ArrangementRequest,
    ArrangementResponse,
    BarChordItem,
    BarItem,
    DiagnosticItem,
    QuantizeRequest,
    QuantizeResponse,
    RhythmValueItem,
)
from tab_rhythm.arrangement.models import Arrangement, BeatMarker, ChordEvent, ChordTemplate, NoteEvent
from tab_rhythm.rhythm.diagnostics import Diagnostic
from tab_rhythm.rhythm.models import Bar
from tab_rhythm.service import RhythmService


def create_app(rhythm_service: RhythmService | None = None) -> FastAPI:
    app = FastAPI(title="tab-rhythm API", version="0.1.0")
    service = rhythm_service or RhythmService()

    @app.get("/")
    def root() -> dict[str, str]:
        return {
            "service": "tab-rhythm API",
            "status": "ok",
            "docs": "/docs",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon() -> Response:
        return Response(status_code=204)

    @app.post("/v1/rhythm/quantize", response_model=QuantizeResponse)
    def quantize_rhythm(payload: QuantizeRequest) -> QuantizeResponse:
        first = len(service.diagnostics)
        try:
            values = service.quantize(payload.durations, payload.measure_duration, payload.beat_duration)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return QuantizeResponse(
            values=[RhythmValueItem(duration=item.duration, note_index=item.note_index) for item in values],
            diagnostics=_diagnostic_items(service.recent_diagnostics(first)),
        )

    @app.post("/v1/rhythm/arrangement", response_model=ArrangementResponse)
    def convert_arrangement(payload: ArrangementRequest) -> ArrangementResponse:
        try:
            track = service.convert(_to_arrangement(payload))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ArrangementResponse(
            name=track.name,
            bars=[_bar_item(bar) for bar in track.bars],
            diagnostics=_diagnostic_items(track.diagnostics),
        )

    return app


def _to_arrangement(payload: ArrangementRequest) -> Arrangement:
    return Arrangement(
        name=payload.name,
        song_length=payload.song_length,
        average_tempo=payload.average_tempo,
        beats=[BeatMarker(time=item.time, measure=item.measure) for item in payload.beats],
        notes=[NoteEvent(time=item.time, string=item.string, fret=item.fret) for item in payload.notes],
        chords=[
            ChordEvent(
                time=item.time,
                chord_id=item.chord_id,
                notes=None
                if item.notes is None
                else tuple(NoteEvent(time=item.time, string=note.string, fret=note.fret) for note in item.notes),
            )
            for item in payload.chords
        ],
        chord_templates=[
            ChordTemplate(
                chord_id=item.chord_id,
                name=item.name,
                frets=tuple(item.frets),
                fingers=tuple(item.fingers),
            )
            for item in payload.chord_templates
        ],
    )


def _bar_item(bar: Bar) -> BarItem:
    return BarItem(
        start=bar.start,
        end=bar.end,
        time_nominator=bar.time_nominator,
        time_denominator=bar.time_denominator,
        tempo=bar.tempo,
        chords=[
            BarChordItem(
                start=chord.start,
                duration=chord.duration,
                tied=chord.tied,
                chord_id=chord.chord_id,
                frets=[None if note is None else note.fret for note in chord.notes],
            )
            for chord in bar.chords
        ],
    )


def _diagnostic_items(records: list[Diagnostic]) -> list[DiagnosticItem]:
    return [DiagnosticItem(**record.to_dict()) for record in records]


app = create_app()
