from __future__ import annotations

"""Static note catalog.

Seven natural notes in ascending pitch order, C through B, paired with their
fixed-do solfège names. Everything else in the package refers to a note by its
index into :data:`NOTES`.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Note:
    international: str
    solfege: str
    semitone: int  # offset from C within the octave

    def midi(self, octave: int = 4) -> int:
        """MIDI number of this note in the given octave (C4 = 60)."""
        return (octave + 1) * 12 + self.semitone


NOTES: Tuple[Note, ...] = (
    Note("C", "Do", 0),
    Note("D", "Re", 2),
    Note("E", "Mi", 4),
    Note("F", "Fa", 5),
    Note("G", "Sol", 7),
    Note("A", "La", 9),
    Note("B", "Si", 11),
)


def note_at(index: int) -> Note:
    """Return the note at catalog index 0..6."""
    if not 0 <= int(index) < len(NOTES):
        raise IndexError(f"Note index out of range: {index}")
    return NOTES[int(index)]


def find_note(name: str) -> Optional[int]:
    """Resolve an international or solfège name (case-insensitive) to an index."""
    key = name.strip().lower()
    if not key:
        return None
    for i, note in enumerate(NOTES):
        if key in (note.international.lower(), note.solfege.lower()):
            return i
    # "So" is a common spelling of "Sol"
    if key == "so":
        return 4
    return None
