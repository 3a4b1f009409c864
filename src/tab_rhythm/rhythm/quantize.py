"""Recursive rhythm matching for free-form note durations.

The matcher works on cumulative note ends rather than on durations. Even
when every individual note is slightly off, the passing of a whole beat (or
triplet beat) is usually easy to spot; once that end is pinned to the grid
the notes on either side are rescaled and matched again on their own.
"""

from __future__ import annotations

from collections.abc import Sequence

from tab_rhythm.rhythm.diagnostics import DiagnosticLog
from tab_rhythm.rhythm.models import RhythmValue
from tab_rhythm.rhythm.settings import DEFAULT_MATCH_PRECISION
from tab_rhythm.rhythm.splitter import split_durations

MIN_DIVISIBLE_LENGTH = 3


class RhythmQuantizeError(ValueError):
    """Raised when a duration list cannot be quantized at all."""


def match_rhythm(
    durations: Sequence[float],
    measure_duration: float,
    beat_duration: int,
    precision: float = DEFAULT_MATCH_PRECISION,
) -> list[RhythmValue]:
    """Map relative ``durations`` onto beat/triplet subdivisions of a measure.

    Returns one value per input duration; notes that had to be merged come
    back with a duration of 0.
    """
    _validate(durations, measure_duration, beat_duration)
    scaling = measure_duration / sum(durations)

    ends: list[float] = []
    total = 0.0
    for value in durations:
        total += value * scaling
        ends.append(total)

    _RhythmMatcher(ends, precision).match(0, len(ends), 0.0, float(measure_duration), beat_duration)

    values: list[RhythmValue] = []
    offset = 0.0
    for index, end in enumerate(ends):
        values.append(RhythmValue(duration=round(end - offset), note_index=index))
        offset = end
    return values


def quantize(
    durations: Sequence[float],
    measure_duration: float,
    beat_duration: int,
    precision: float = DEFAULT_MATCH_PRECISION,
    diagnostics: DiagnosticLog | None = None,
) -> list[RhythmValue]:
    """Quantize ``durations`` to a printable, possibly tied, rhythm."""
    matched = match_rhythm(durations, measure_duration, beat_duration, precision=precision)
    return split_durations(matched, measure_duration, beat_duration, diagnostics=diagnostics)


def _validate(durations: Sequence[float], measure_duration: float, beat_duration: int) -> None:
    if not durations:
        raise RhythmQuantizeError("durations must not be empty")
    if any(value < 0 for value in durations):
        raise RhythmQuantizeError("durations must be >= 0")
    if sum(durations) <= 0:
        raise RhythmQuantizeError("sum of durations must be > 0")
    if measure_duration <= 0:
        raise RhythmQuantizeError("measure_duration must be > 0")
    if beat_duration <= 0:
        raise RhythmQuantizeError("beat_duration must be > 0")


class _RhythmMatcher:
    # Each recursive call writes only ends[start:end - 1]; the last end of a
    # range is its fixed right boundary.

    def __init__(self, ends: list[float], precision: float) -> None:
        self._ends = ends
        self._precision = precision

    def match(self, start: int, end: int, offset: float, length: float, beat: int) -> None:
        ends = self._ends
        while True:
            if end - start <= 1:
                return

            if length <= MIN_DIVISIBLE_LENGTH:
                for index in range(start, end - 1):
                    ends[index] = offset
                return

            pos, target, diff = self._closest_match(start, end, length, beat)
            if diff < self._precision or beat <= MIN_DIVISIBLE_LENGTH:
                break
            beat //= 2

        matched = ends[pos]
        left_length = target - offset
        right_length = length - left_length
        left_scaling = _scaling(left_length, matched - offset)
        right_scaling = _scaling(right_length, offset + length - matched)
        ends[pos] = target
        for index in range(start, pos):
            ends[index] = offset + (ends[index] - offset) * left_scaling
        for index in range(pos + 1, end - 1):
            ends[index] = target + (ends[index] - matched) * right_scaling

        self.match(start, pos + 1, offset, left_length, beat)
        self.match(pos + 1, end, target, right_length, beat)

    def _closest_match(self, start: int, end: int, length: float, beat: int) -> tuple[int, float, float]:
        triplet = beat * 2 // 3
        grids = (beat, triplet) if triplet > 0 else (beat,)
        best_pos = start
        best_target = 0.0
        best_diff = length + 1
        for index in range(start, end - 1):
            note_end = self._ends[index]
            for grid in grids:
                target = round(note_end / grid) * grid
                diff = abs(target - note_end)
                if diff < best_diff:
                    best_pos = index
                    best_target = float(target)
                    best_diff = diff
        return best_pos, best_target, best_diff


def _scaling(corrected: float, original: float) -> float:
    if original == 0:
        return 0.0
    return corrected / original
