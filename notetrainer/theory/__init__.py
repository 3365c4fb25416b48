"""Note catalog shared by every other layer."""

from .notes import NOTES, Note, note_at, find_note  # noqa: F401
