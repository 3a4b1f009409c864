"""Tunable knobs for the rhythm pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MIN_CHORD_TICKS = 2  # 64th-note triplet
DEFAULT_MATCH_PRECISION = 1.0


@dataclass(slots=True)
class RhythmSettings:
    min_chord_ticks: int = DEFAULT_MIN_CHORD_TICKS
    match_precision: float = DEFAULT_MATCH_PRECISION
    split_unprintable: bool = True

    @staticmethod
    def from_env() -> RhythmSettings:
        min_ticks_raw = os.getenv("TAB_RHYTHM_MIN_CHORD_TICKS", str(DEFAULT_MIN_CHORD_TICKS)).strip()
        precision_raw = os.getenv("TAB_RHYTHM_MATCH_PRECISION", str(DEFAULT_MATCH_PRECISION)).strip()
        split_raw = os.getenv("TAB_RHYTHM_SPLIT_UNPRINTABLE", "1").strip().lower()
        try:
            min_ticks = int(min_ticks_raw)
        except ValueError:
            min_ticks = DEFAULT_MIN_CHORD_TICKS
        try:
            precision = float(precision_raw)
        except ValueError:
            precision = DEFAULT_MATCH_PRECISION
        return RhythmSettings(
            min_chord_ticks=max(min_ticks, 1),
            match_precision=precision if precision > 0 else DEFAULT_MATCH_PRECISION,
            split_unprintable=split_raw not in {"0", "false", "no", "off"},
        )

    def validate(self) -> None:
        if self.min_chord_ticks < 1:
            raise ValueError("min_chord_ticks must be >= 1")
        if self.match_precision <= 0:
            raise ValueError("match_precision must be > 0")
