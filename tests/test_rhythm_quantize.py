import pytest

from tab_rhythm.rhythm.diagnostics import DiagnosticLog
from tab_rhythm.rhythm.models import PRINTABLE_DURATIONS, RhythmValue
from tab_rhythm.rhythm.quantize import RhythmQuantizeError, match_rhythm, quantize


def _durations(values: list[RhythmValue]) -> list[int]:
    return [item.duration for item in values]


def test_equal_notes_become_quarter_notes() -> None:
    values = quantize([1, 1, 1, 1], measure_duration=192, beat_duration=48)

    assert values == [RhythmValue(duration=48, note_index=index) for index in range(4)]


def test_durations_on_the_beat_grid_are_returned_unchanged() -> None:
    values = match_rhythm([96, 48, 24, 24], measure_duration=192, beat_duration=48)

    assert _durations(values) == [96, 48, 24, 24]


def test_slightly_off_durations_snap_to_beats() -> None:
    values = match_rhythm([47.5, 48.5, 48, 48], measure_duration=192, beat_duration=48)

    assert _durations(values) == [48, 48, 48, 48]


def test_triplets_are_detected() -> None:
    values = match_rhythm([1, 1, 1], measure_duration=48, beat_duration=48)

    assert _durations(values) == [16, 16, 16]


def test_relative_durations_are_rescaled_to_the_measure() -> None:
    values = match_rhythm([0.9, 1.1, 1.0, 1.0], measure_duration=192, beat_duration=48)

    assert _durations(values) == [44, 52, 48, 48]
    assert sum(_durations(values)) == 192


def test_notes_in_an_indivisible_span_are_merged() -> None:
    values = match_rhythm([1, 1, 1], measure_duration=3, beat_duration=48)

    assert _durations(values) == [0, 0, 3]


def test_quantize_drops_merged_notes() -> None:
    values = quantize([96, 0.5, 0.5, 95], measure_duration=192, beat_duration=48)

    assert values == [RhythmValue(duration=96, note_index=0), RhythmValue(duration=96, note_index=3)]


def test_quantize_output_is_printable_and_fills_the_measure() -> None:
    values = quantize([0.9, 1.1, 1.0, 1.0], measure_duration=192, beat_duration=48)

    assert all(item.duration in PRINTABLE_DURATIONS for item in values)
    assert sum(_durations(values)) == 192
    assert [item.note_index for item in values] == [0, 0, 1, 1, 2, 3]
    assert _durations(values) == [32, 12, 4, 48, 48, 48]


def test_zero_sum_is_rejected() -> None:
    with pytest.raises(RhythmQuantizeError):
        quantize([0, 0], measure_duration=192, beat_duration=48)


@pytest.mark.parametrize(
    ("durations", "measure", "beat"),
    [
        ([], 192, 48),
        ([1, -1, 2], 192, 48),
        ([1, 1], 0, 48),
        ([1, 1], 192, 0),
    ],
)
def test_invalid_input_raises_value_error(durations: list[float], measure: float, beat: int) -> None:
    with pytest.raises(ValueError):
        match_rhythm(durations, measure_duration=measure, beat_duration=beat)


def test_quantize_reports_to_given_diagnostics() -> None:
    diagnostics = DiagnosticLog()

    quantize([1, 1, 1, 1], measure_duration=192, beat_duration=48, diagnostics=diagnostics)

    assert len(diagnostics) == 0
