"""Structured diagnostics collected while converting rhythm."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

DiagnosticCode = Literal[
    "missing_chord_template",
    "orphan_sub_beat",
    "empty_bar_dropped",
    "duplicate_chord_template",
    "unsplittable_duration",
    "split_tick_restored",
    "short_chord_merged",
    "short_chord_dropped",
    "merge_string_collision",
    "bar_total_corrected",
    "unsane_duration",
]

_INFO_CODES: frozenset[str] = frozenset({"short_chord_merged", "bar_total_corrected", "split_tick_restored"})


@dataclass(frozen=True, slots=True)
class Diagnostic:
    code: DiagnosticCode
    message: str
    bar_index: int | None = None
    chord_index: int | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "bar_index": self.bar_index,
            "chord_index": self.chord_index,
        }


class DiagnosticLog:
    """Collects anomalies that were handled with a fallback instead of an error."""

    def __init__(self) -> None:
        self._records: list[Diagnostic] = []

    def report(
        self,
        code: DiagnosticCode,
        message: str,
        bar_index: int | None = None,
        chord_index: int | None = None,
    ) -> Diagnostic:
        record = Diagnostic(code=code, message=message, bar_index=bar_index, chord_index=chord_index)
        self._records.append(record)
        level = logging.INFO if code in _INFO_CODES else logging.WARNING
        logger.log(level, "%s (bar=%s, chord=%s): %s", code, bar_index, chord_index, message)
        return record

    @property
    def records(self) -> list[Diagnostic]:
        return list(self._records)

    def by_code(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [item for item in self._records if item.code == code]

    def __len__(self) -> int:
        return len(self._records)
