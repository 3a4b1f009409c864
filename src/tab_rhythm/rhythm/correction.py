"""Snap sloppy chord durations to sane note values within a bar."""

from __future__ import annotations

from tab_rhythm.rhythm.diagnostics import DiagnosticLog
from tab_rhythm.rhythm.models import Bar, is_sane_duration

SHIFTS: tuple[int, ...] = (1, -1, 2, -2, 3, -3)


def correct_bar_rhythm(bar: Bar, diagnostics: DiagnosticLog | None = None, bar_index: int | None = None) -> None:
    """Move a few ticks between neighbouring chords so durations become sane.

    Durations computed from absolute times are often one to three ticks off.
    The bar total is forced to ``bar.expected_ticks`` on the last chord.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    chords = bar.chords
    expected = bar.expected_ticks
    running = 0

    for index, chord in enumerate(chords):
        running += chord.duration

        if index == len(chords) - 1 and running != expected:
            before = chord.duration
            chord.duration -= running - expected
            diagnostics.report(
                "bar_total_corrected",
                f"bar totals {running} ticks instead of {expected}, last chord {before} -> {chord.duration}",
                bar_index=bar_index,
                chord_index=index,
            )

        if is_sane_duration(chord.duration):
            continue

        if index > 0:
            prev = chords[index - 1]
            for shift in SHIFTS:
                if is_sane_duration(chord.duration + shift) and is_sane_duration(prev.duration - shift):
                    chord.duration += shift
                    prev.duration -= shift
                    break

        if index < len(chords) - 1 and not is_sane_duration(chord.duration):
            nxt = chords[index + 1]
            for shift in SHIFTS:
                if is_sane_duration(chord.duration + shift):
                    chord.duration += shift
                    nxt.duration -= shift
                    running += shift
                    break

        if not is_sane_duration(chord.duration):
            diagnostics.report(
                "unsane_duration",
                f"duration {chord.duration} could not be shifted to a sane value",
                bar_index=bar_index,
                chord_index=index,
            )
