"""Assign tick durations to chords from their absolute start times."""

from __future__ import annotations

from collections.abc import Sequence

from tab_rhythm.rhythm.diagnostics import DiagnosticLog
from tab_rhythm.rhythm.models import Bar, Chord
from tab_rhythm.rhythm.settings import RhythmSettings


def assign_durations(
    bars: Sequence[Bar],
    settings: RhythmSettings | None = None,
    diagnostics: DiagnosticLog | None = None,
) -> None:
    """Fill in ``Chord.duration`` for every chord of ``bars``.

    A chord shorter than ``settings.min_chord_ticks`` cannot be notated; its
    notes move into the following chord, which also inherits the earlier
    start. The last chord of a bar moves into the first chord of the next
    bar that has chords, keeping that chord's own start. Bars must be
    processed in order for that reason.
    """
    settings = settings or RhythmSettings()
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    carried: Chord | None = None
    carried_from: tuple[int, int] = (-1, -1)

    for bar_index, bar in enumerate(bars):
        chords = bar.chords
        if carried is not None and chords:
            _merge(chords[0], carried, diagnostics, bar_index, 0)
            diagnostics.report(
                "short_chord_merged",
                f"chord {carried_from[1]} of bar {carried_from[0]} is too short, merged into first chord of next bar",
                bar_index=carried_from[0],
                chord_index=carried_from[1],
            )
            carried = None

        kept: list[Chord] = []
        pending: Chord | None = None
        for index, chord in enumerate(chords):
            if pending is not None:
                chord.start = pending.start
                _merge(chord, pending, diagnostics, bar_index, index)
                pending = None

            is_last = index == len(chords) - 1
            end = bar.end if is_last else chords[index + 1].start
            chord.duration = bar.time_to_ticks(end - chord.start)
            if chord.duration >= settings.min_chord_ticks:
                kept.append(chord)
                continue

            chord.duration = 0
            if not is_last:
                diagnostics.report(
                    "short_chord_merged",
                    "chord is too short, merged into next chord",
                    bar_index=bar_index,
                    chord_index=index,
                )
                pending = chord
            else:
                carried = chord
                carried_from = (bar_index, index)
        bar.chords = kept

    if carried is not None and not carried.is_silent:
        diagnostics.report(
            "short_chord_dropped",
            "last chord of the track is too short and has no chord to merge into",
            bar_index=carried_from[0],
            chord_index=carried_from[1],
        )


def _merge(target: Chord, source: Chord, diagnostics: DiagnosticLog, bar_index: int, chord_index: int) -> None:
    for note in target.absorb(source):
        diagnostics.report(
            "merge_string_collision",
            f"note on string {note.string} fret {note.fret} dropped, string already used by merged chord",
            bar_index=bar_index,
            chord_index=chord_index,
        )
