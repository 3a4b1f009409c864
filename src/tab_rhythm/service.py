"""Conversion service: assign, correct and split chord durations."""

from __future__ import annotations

from collections.abc import Sequence

from tab_rhythm.arrangement.loader import load_arrangement
from tab_rhythm.arrangement.models import Arrangement, Track
from tab_rhythm.rhythm.correction import correct_bar_rhythm
from tab_rhythm.rhythm.diagnostics import Diagnostic, DiagnosticLog
from tab_rhythm.rhythm.durations import assign_durations
from tab_rhythm.rhythm.models import Bar, Chord, RhythmValue, is_printable_duration
from tab_rhythm.rhythm.quantize import quantize
from tab_rhythm.rhythm.settings import RhythmSettings
from tab_rhythm.rhythm.splitter import split_durations


class RhythmService:
    def __init__(self, settings: RhythmSettings | None = None, diagnostics: DiagnosticLog | None = None) -> None:
        self._settings = settings or RhythmSettings.from_env()
        self._settings.validate()
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    @property
    def settings(self) -> RhythmSettings:
        return self._settings

    @property
    def diagnostics(self) -> DiagnosticLog:
        return self._diagnostics

    def process_bars(self, bars: Sequence[Bar]) -> None:
        for bar in bars:
            bar.validate()
        assign_durations(bars, settings=self._settings, diagnostics=self._diagnostics)
        for bar_index, bar in enumerate(bars):
            correct_bar_rhythm(bar, diagnostics=self._diagnostics, bar_index=bar_index)
            if self._settings.split_unprintable:
                self._split_bar(bar, bar_index)

    def convert(self, arrangement: Arrangement) -> Track:
        first = len(self._diagnostics)
        bars, templates = load_arrangement(arrangement, self._diagnostics)
        self.process_bars(bars)
        return Track(
            name=arrangement.name,
            average_tempo=arrangement.average_tempo,
            chord_templates=templates,
            bars=bars,
            diagnostics=self._diagnostics.records[first:],
        )

    def quantize(self, durations: Sequence[float], measure_duration: float, beat_duration: int) -> list[RhythmValue]:
        return quantize(
            durations,
            measure_duration,
            beat_duration,
            precision=self._settings.match_precision,
            diagnostics=self._diagnostics,
        )

    def recent_diagnostics(self, since: int = 0) -> list[Diagnostic]:
        return self._diagnostics.records[since:]

    def _split_bar(self, bar: Bar, bar_index: int) -> None:
        if all(is_printable_duration(chord.duration) for chord in bar.chords):
            return
        values = [RhythmValue(duration=chord.duration, note_index=index) for index, chord in enumerate(bar.chords)]
        split = split_durations(
            values,
            bar.expected_ticks,
            bar.beat_ticks,
            diagnostics=self._diagnostics,
            bar_index=bar_index,
            keep_total=True,
        )

        kept = {value.note_index for value in split}
        for index, chord in enumerate(bar.chords):
            if index not in kept and not chord.is_silent:
                self._diagnostics.report(
                    "short_chord_dropped",
                    f"chord with duration {chord.duration} has no length left after correction",
                    bar_index=bar_index,
                    chord_index=index,
                )

        chords: list[Chord] = []
        previous: int | None = None
        for value in split:
            source = bar.chords[value.note_index]
            if value.note_index == previous:
                chords.append(source.tie_copy(value.duration))
            else:
                source.duration = value.duration
                chords.append(source)
            previous = value.note_index
        bar.chords = chords
