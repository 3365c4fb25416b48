from __future__ import annotations

"""Abstract-ish sample playback interface.

The scoring session only needs to ask for a note to be heard; concrete
players decide how (a soundfont synth, or nothing at all).
"""


class SamplePlayer:
    """Abstract-like player interface for note samples."""

    def play_sample(self, note_index: int) -> None:
        """Start playback of the catalog note at ``note_index``; do not block."""
        raise NotImplementedError

    def close(self) -> None:
        """Release resources."""
        pass


class SilentPlayer(SamplePlayer):
    """Player used when audio is disabled; records requests for inspection."""

    def __init__(self) -> None:
        self.played: list[int] = []

    def play_sample(self, note_index: int) -> None:
        self.played.append(int(note_index))
