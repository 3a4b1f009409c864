from tab_rhythm.rhythm.diagnostics import DiagnosticLog
from tab_rhythm.rhythm.models import PRINTABLE_DURATIONS, RhythmValue
from tab_rhythm.rhythm.splitter import candidate_sizes, split_durations


def _pairs(values: list[RhythmValue]) -> list[tuple[int, int]]:
    return [(item.duration, item.note_index) for item in values]


def test_candidate_sizes_alternate_triplet_and_even_steps() -> None:
    assert candidate_sizes(48) == [48, 32, 24, 16, 12, 8, 6, 4, 3, 2]


def test_printable_durations_pass_through() -> None:
    values = [RhythmValue(96, 0), RhythmValue(48, 1), RhythmValue(48, 2)]

    assert split_durations(values, 192, 48) == values


def test_unprintable_duration_becomes_tied_chain() -> None:
    out = split_durations([RhythmValue(60, 0)], 192, 48)

    assert _pairs(out) == [(48, 0), (12, 0)]


def test_small_odd_durations_are_split_on_sub_beats() -> None:
    assert _pairs(split_durations([RhythmValue(5, 0)], 192, 48)) == [(3, 0), (2, 0)]
    assert _pairs(split_durations([RhythmValue(7, 0)], 192, 48)) == [(4, 0), (3, 0)]
    assert _pairs(split_durations([RhythmValue(100, 0)], 192, 48)) == [(96, 0), (4, 0)]


def test_sane_but_unprintable_196_is_split() -> None:
    assert _pairs(split_durations([RhythmValue(196, 0)], 196, 48)) == [(192, 0), (4, 0)]


def test_split_points_follow_the_position_in_the_measure() -> None:
    values = [RhythmValue(48, 0), RhythmValue(60, 1), RhythmValue(84, 2)]

    out = split_durations(values, 192, 48)

    assert _pairs(out) == [(48, 0), (48, 1), (12, 1), (36, 2), (48, 2)]
    assert sum(item.duration for item in out) == 192


def test_zero_length_values_are_dropped() -> None:
    out = split_durations([RhythmValue(0, 0), RhythmValue(192, 1)], 192, 48)

    assert _pairs(out) == [(192, 1)]


def test_unsplittable_duration_falls_back_to_one_tick_head() -> None:
    diagnostics = DiagnosticLog()

    out = split_durations([RhythmValue(5, 0)], 192, 2, diagnostics=diagnostics, bar_index=7)

    assert _pairs(out) == [(1, 0), (3, 0)]
    assert all(item.duration in PRINTABLE_DURATIONS for item in out)
    assert 5 - 2 <= sum(item.duration for item in out) <= 5
    records = diagnostics.by_code("unsplittable_duration")
    assert len(records) == 1
    assert records[0].bar_index == 7
    assert records[0].chord_index == 0


def test_unsplittable_duration_can_keep_its_total() -> None:
    diagnostics = DiagnosticLog()

    out = split_durations([RhythmValue(5, 0)], 192, 2, diagnostics=diagnostics, keep_total=True)

    assert _pairs(out) == [(1, 0), (1, 0), (3, 0)]
    assert sum(item.duration for item in out) == 5
    assert len(diagnostics.by_code("split_tick_restored")) == 1
