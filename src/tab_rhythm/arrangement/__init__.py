"""Arrangement loading exports."""

from tab_rhythm.arrangement.loader import (
    build_bars,
    build_chord_templates,
    collect_chords,
    create_chord,
    load_arrangement,
)
from tab_rhythm.arrangement.models import Arrangement, BeatMarker, ChordEvent, ChordTemplate, NoteEvent, Track

__all__ = [
    "Arrangement",
    "BeatMarker",
    "ChordEvent",
    "ChordTemplate",
    "NoteEvent",
    "Track",
    "build_bars",
    "build_chord_templates",
    "collect_chords",
    "create_chord",
    "load_arrangement",
]
