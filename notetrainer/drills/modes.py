from __future__ import annotations

"""Question modes, scoring categories and the mapping between them."""

from enum import Enum
from typing import Dict, Optional, Tuple


class Category(str, Enum):
    """Per-category scoring buckets of a session."""

    AUDIO = "audio"
    SOLFEGE = "solfege"
    KEY = "key"
    STAFF = "staff"


class QuestionMode(str, Enum):
    """Question modality of a test.

    ``MIXED`` only labels a session; every generated question resolves to one
    of the four concrete modes.
    """

    MIXED = "mixed"
    AUDIO_TO_NOTE = "audioToNote"
    SOLFEGE_TO_INTL = "solfegeToIntl"
    INTL_TO_KEY = "intlToKey"
    STAFF_TO_NOTE = "staffNotation"

    @property
    def tag(self) -> str:
        """Wire tag used in persisted results."""
        return f"{_TAG_PREFIX}{self.value}"

    @classmethod
    def from_tag(cls, tag: str) -> "QuestionMode":
        name = str(tag)
        if name.startswith(_TAG_PREFIX):
            name = name[len(_TAG_PREFIX):]
        for mode in cls:
            if mode.value == name:
                return mode
        raise ValueError(f"Unknown question mode tag: {tag}")

    @property
    def is_concrete(self) -> bool:
        return self is not QuestionMode.MIXED

    @property
    def category(self) -> Optional[Category]:
        """Scoring bucket of a resolved question; None for MIXED."""
        return _CATEGORY_BY_MODE.get(self)

    @property
    def progress_key(self) -> str:
        """Key used by daily and category progress rollups."""
        cat = self.category
        return cat.value if cat is not None else "mixed"

    @property
    def question_count(self) -> int:
        return MIXED_QUESTION_COUNT if self is QuestionMode.MIXED else SINGLE_MODE_QUESTION_COUNT

    @property
    def label(self) -> str:
        return _LABELS[self]


_TAG_PREFIX = "TestMode."

MIXED_QUESTION_COUNT = 100
SINGLE_MODE_QUESTION_COUNT = 20

CONCRETE_MODES: Tuple[QuestionMode, ...] = (
    QuestionMode.AUDIO_TO_NOTE,
    QuestionMode.SOLFEGE_TO_INTL,
    QuestionMode.INTL_TO_KEY,
    QuestionMode.STAFF_TO_NOTE,
)

_CATEGORY_BY_MODE: Dict[QuestionMode, Category] = {
    QuestionMode.AUDIO_TO_NOTE: Category.AUDIO,
    QuestionMode.SOLFEGE_TO_INTL: Category.SOLFEGE,
    QuestionMode.INTL_TO_KEY: Category.KEY,
    QuestionMode.STAFF_TO_NOTE: Category.STAFF,
}

_LABELS: Dict[QuestionMode, str] = {
    QuestionMode.MIXED: "Mixed",
    QuestionMode.AUDIO_TO_NOTE: "Audio -> Note",
    QuestionMode.SOLFEGE_TO_INTL: "Solfege -> Intl",
    QuestionMode.INTL_TO_KEY: "Intl -> Piano Key",
    QuestionMode.STAFF_TO_NOTE: "Read staff -> Choose note",
}

# Short names accepted on the command line
MODE_ALIASES: Dict[str, QuestionMode] = {
    "mixed": QuestionMode.MIXED,
    "audio": QuestionMode.AUDIO_TO_NOTE,
    "solfege": QuestionMode.SOLFEGE_TO_INTL,
    "key": QuestionMode.INTL_TO_KEY,
    "staff": QuestionMode.STAFF_TO_NOTE,
}


def normalize_mode(value: str | None) -> QuestionMode:
    """Map a CLI/config spelling (alias, enum value or wire tag) to a mode."""
    if not value:
        return QuestionMode.MIXED
    t = str(value).strip()
    if t.lower() in MODE_ALIASES:
        return MODE_ALIASES[t.lower()]
    return QuestionMode.from_tag(t)
