"""Rhythm domain exports."""

from tab_rhythm.rhythm.correction import correct_bar_rhythm
from tab_rhythm.rhythm.diagnostics import Diagnostic, DiagnosticLog
from tab_rhythm.rhythm.durations import assign_durations
from tab_rhythm.rhythm.models import (
    PRINTABLE_DURATIONS,
    SANE_DURATIONS,
    STRING_COUNT,
    TICKS_PER_WHOLE_NOTE,
    Bar,
    Chord,
    Note,
    RhythmValue,
)
from tab_rhythm.rhythm.quantize import RhythmQuantizeError, match_rhythm, quantize
from tab_rhythm.rhythm.settings import RhythmSettings
from tab_rhythm.rhythm.splitter import split_durations

__all__ = [
    "Bar",
    "Chord",
    "Diagnostic",
    "DiagnosticLog",
    "Note",
    "PRINTABLE_DURATIONS",
    "RhythmQuantizeError",
    "RhythmSettings",
    "RhythmValue",
    "SANE_DURATIONS",
    "STRING_COUNT",
    "TICKS_PER_WHOLE_NOTE",
    "assign_durations",
    "correct_bar_rhythm",
    "match_rhythm",
    "quantize",
    "split_durations",
]
