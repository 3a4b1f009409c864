"""Express unprintable tick durations as tied printable note values."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from tab_rhythm.rhythm.diagnostics import DiagnosticLog
from tab_rhythm.rhythm.models import RhythmValue, is_printable_duration

MIN_SPLIT_TICKS = 2


def split_durations(
    values: Iterable[RhythmValue],
    measure_duration: float,
    beat_length: int,
    diagnostics: DiagnosticLog | None = None,
    bar_index: int | None = None,
    keep_total: bool = False,
) -> list[RhythmValue]:
    """Return ``values`` with every unprintable duration replaced by a tie chain.

    Split points are chosen on the beat grid of the measure, so the head of
    a split note ends on a (triplet) beat where possible. Zero-length values
    are dropped.

    A duration that fits no grid is cut into a 1-tick head and a remainder
    two ticks shorter. With ``keep_total`` the lost tick is put back as a
    tied 1-tick value right after the head, so the output sums to the input.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    beat_length = int(min(beat_length, measure_duration))
    queue = deque(values)
    out: list[RhythmValue] = []
    position = 0

    while queue:
        value = queue.popleft()
        if value.duration == 0:
            continue
        if is_printable_duration(value.duration):
            out.append(value)
            position += value.duration
            continue

        split = _find_split(position, value.duration, beat_length)
        if split is None:
            diagnostics.report(
                "unsplittable_duration",
                f"duration {value.duration} of note {value.note_index} cannot be split, cutting it short",
                bar_index=bar_index,
                chord_index=value.note_index,
            )
            head, rest = 1, value.duration - 2
            if keep_total and rest >= 0:
                diagnostics.report(
                    "split_tick_restored",
                    f"tied 1 tick to note {value.note_index} to keep its duration {value.duration}",
                    bar_index=bar_index,
                    chord_index=value.note_index,
                )
                out.append(RhythmValue(duration=head, note_index=value.note_index))
                position += head
        else:
            head, rest = split

        out.append(RhythmValue(duration=head, note_index=value.note_index))
        position += head
        if rest > 0:
            queue.appendleft(RhythmValue(duration=rest, note_index=value.note_index))

    return out


def candidate_sizes(beat_length: int) -> list[int]:
    """Beat, triplet, half beat, ... down to the smallest splittable size."""
    sizes: list[int] = []
    size = beat_length
    triplet_step = True
    while size >= MIN_SPLIT_TICKS:
        sizes.append(size)
        size = size * 2 // 3 if triplet_step else size * 3 // 4
        triplet_step = not triplet_step
    return sizes


def _find_split(position: int, duration: int, beat_length: int) -> tuple[int, int] | None:
    note_end = position + duration
    for size in candidate_sizes(beat_length):
        for multiple in range(note_end // size, 0, -1):
            remainder = note_end - multiple * size
            if 0 < remainder < MIN_SPLIT_TICKS:
                break
            head = duration - remainder
            if is_printable_duration(head):
                return head, remainder
    return None
