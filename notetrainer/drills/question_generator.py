from __future__ import annotations

"""Question generation for a test session."""

import random
from dataclasses import dataclass
from typing import List, Optional

from ..theory.notes import NOTES
from .modes import CONCRETE_MODES, QuestionMode


@dataclass(frozen=True)
class Question:
    """One graded question; ``mode`` is always a concrete mode."""

    note_index: int
    mode: QuestionMode


class QuestionGenerator:
    """Draws questions uniformly over the catalog and the concrete modes."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def generate(self, mode: QuestionMode, count: Optional[int] = None) -> List[Question]:
        """Materialize the full question list of a session.

        The length follows the mode policy (100 for MIXED, 20 otherwise)
        unless ``count`` is given. Notes may repeat between questions.
        """
        n = mode.question_count if count is None else int(count)
        questions: List[Question] = []
        for _ in range(n):
            resolved = mode if mode.is_concrete else self.rng.choice(CONCRETE_MODES)
            questions.append(Question(self.rng.randrange(len(NOTES)), resolved))
        return questions

    def make_options(self, correct: int, count: int = 4) -> List[int]:
        """Shuffled multiple-choice note indices that include ``correct``."""
        count = max(1, min(int(count), len(NOTES)))
        chosen = {int(correct)}
        while len(chosen) < count:
            chosen.add(self.rng.randrange(len(NOTES)))
        options = list(chosen)
        self.rng.shuffle(options)
        return options
