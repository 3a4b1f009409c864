"""Build bars and chords from decoded arrangement events."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from tab_rhythm.arrangement.models import Arrangement, BeatMarker, ChordEvent, ChordTemplate, NoteEvent
from tab_rhythm.rhythm.diagnostics import DiagnosticLog
from tab_rhythm.rhythm.models import STRING_COUNT, Bar, Chord, Note

DEFAULT_TIME_DENOMINATOR = 4


def build_chord_templates(templates: Iterable[ChordTemplate], diagnostics: DiagnosticLog) -> dict[int, ChordTemplate]:
    table: dict[int, ChordTemplate] = {}
    for template in templates:
        template.validate()
        if template.chord_id in table:
            diagnostics.report(
                "duplicate_chord_template",
                f"chord id {template.chord_id} already registered, keeping the first template",
            )
            continue
        table[template.chord_id] = template
    return table


def build_bars(
    beats: Sequence[BeatMarker],
    song_length: float,
    diagnostics: DiagnosticLog,
) -> list[Bar]:
    """Group beat markers into bars.

    Every bar marker opens a bar with one beat and each following sub-beat
    adds one more, so the beat count becomes the time signature nominator.
    """
    bars: list[Bar] = []
    current: Bar | None = None
    for beat in beats:
        if beat.starts_bar:
            if current is not None:
                current.end = beat.time
            current = Bar(start=beat.time, end=beat.time, time_nominator=1, time_denominator=DEFAULT_TIME_DENOMINATOR)
            bars.append(current)
        elif current is None:
            diagnostics.report("orphan_sub_beat", f"sub-beat at {beat.time:.3f}s has no active bar, ignored")
        else:
            current.time_nominator += 1

    if bars:
        bars[-1].end = song_length

    kept: list[Bar] = []
    for index, bar in enumerate(bars):
        if bar.end <= bar.start:
            diagnostics.report("empty_bar_dropped", f"bar at {bar.start:.3f}s has no length, dropped", bar_index=index)
            continue
        bar.tempo = guess_tempo(bar)
        kept.append(bar)
    return kept


def guess_tempo(bar: Bar) -> float:
    return 60.0 * bar.time_nominator * (DEFAULT_TIME_DENOMINATOR / bar.time_denominator) / (bar.end - bar.start)


def create_note_chord(event: NoteEvent) -> Chord:
    chord = Chord(start=event.time)
    chord.add_note(Note(string=event.string, fret=event.fret))
    return chord


def create_chord(
    event: ChordEvent,
    templates: dict[int, ChordTemplate],
    diagnostics: DiagnosticLog,
    bar_index: int | None = None,
) -> Chord:
    chord = Chord(start=event.time, chord_id=event.chord_id)
    if event.notes is not None:
        for item in event.notes:
            chord.add_note(Note(string=item.string, fret=item.fret))
        return chord

    template = templates.get(event.chord_id)
    if template is None:
        diagnostics.report(
            "missing_chord_template",
            f"chord at {event.time:.3f}s references unknown chord id {event.chord_id}, left empty",
            bar_index=bar_index,
        )
        return chord
    for string in range(STRING_COUNT):
        if template.frets[string] >= 0:
            chord.add_note(Note(string=string, fret=template.frets[string]))
    return chord


def collect_chords(
    bars: Sequence[Bar],
    notes: Sequence[NoteEvent],
    chords: Sequence[ChordEvent],
    templates: dict[int, ChordTemplate],
    diagnostics: DiagnosticLog,
) -> None:
    for bar_index, bar in enumerate(bars):
        collected = [create_note_chord(item) for item in notes if bar.contains_time(item.time)]
        collected.extend(
            create_chord(item, templates, diagnostics, bar_index=bar_index)
            for item in chords
            if bar.contains_time(item.time)
        )
        collected.sort(key=lambda chord: chord.start)
        # Silence up to the first note keeps the bar's rhythm anchored at its start.
        if not collected or collected[0].start > bar.start:
            collected.insert(0, Chord(start=bar.start))
        bar.chords = collected


def load_arrangement(arrangement: Arrangement, diagnostics: DiagnosticLog) -> tuple[list[Bar], dict[int, ChordTemplate]]:
    arrangement.validate()
    templates = build_chord_templates(arrangement.chord_templates, diagnostics)
    bars = build_bars(arrangement.beats, arrangement.song_length, diagnostics)
    collect_chords(bars, arrangement.notes, arrangement.chords, templates, diagnostics)
    return bars, templates
