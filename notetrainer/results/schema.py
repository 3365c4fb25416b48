from __future__ import annotations

"""Pydantic models for persisted records and their JSON wire format.

Wire keys are camelCase. ``TestResult.mode`` travels as the tag
``"TestMode.<name>"``; ``staffScore`` may be absent in records written before
the staff category existed and then reads as 0. Every other score is
required and must already be a JSON integer.
"""

import json
from datetime import date, datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..drills.modes import Category, QuestionMode


def date_key(day: date) -> str:
    """Storage key fragment ``YYYY-MM-DD`` for a calendar day."""
    return f"{day.year}-{day.month:02d}-{day.day:02d}"


class TestResult(BaseModel):
    """Final snapshot of one finished session."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_name: str = Field(alias="playerName")
    total_score: int = Field(alias="totalScore", ge=0, strict=True)
    audio_score: int = Field(alias="audioScore", ge=0, strict=True)
    solfege_score: int = Field(alias="solfegeScore", ge=0, strict=True)
    key_score: int = Field(alias="keyScore", ge=0, strict=True)
    staff_score: int = Field(default=0, alias="staffScore", ge=0, strict=True)
    timestamp: datetime
    mode: QuestionMode

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode_tag(cls, v: Any) -> Any:
        if isinstance(v, str):
            return QuestionMode.from_tag(v)
        return v

    @classmethod
    def from_tally(
        cls,
        *,
        player_name: str,
        total_score: int,
        tally: Dict[Category, int],
        timestamp: datetime,
        mode: QuestionMode,
    ) -> "TestResult":
        return cls(
            player_name=player_name,
            total_score=total_score,
            audio_score=int(tally.get(Category.AUDIO, 0)),
            solfege_score=int(tally.get(Category.SOLFEGE, 0)),
            key_score=int(tally.get(Category.KEY, 0)),
            staff_score=int(tally.get(Category.STAFF, 0)),
            timestamp=timestamp,
            mode=mode,
        )

    @property
    def per_category(self) -> Dict[Category, int]:
        return {
            Category.AUDIO: self.audio_score,
            Category.SOLFEGE: self.solfege_score,
            Category.KEY: self.key_score,
            Category.STAFF: self.staff_score,
        }

    def to_json(self) -> Dict[str, Any]:
        return {
            "playerName": self.player_name,
            "totalScore": self.total_score,
            "audioScore": self.audio_score,
            "solfegeScore": self.solfege_score,
            "keyScore": self.key_score,
            "staffScore": self.staff_score,
            "timestamp": self.timestamp.isoformat(),
            "mode": self.mode.tag,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "TestResult":
        return cls.model_validate(data)


class DailyProgress(BaseModel):
    """Rollup of every completion on one calendar day."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: datetime
    tests_completed: int = Field(alias="testsCompleted", ge=0)
    average_score: int = Field(alias="averageScore", ge=0)
    best_score: int = Field(alias="bestScore", ge=0)
    category_scores: Dict[str, int] = Field(default_factory=dict, alias="categoryScores")
    # only written when per-category counting is enabled
    category_counts: Dict[str, int] = Field(default_factory=dict, alias="categoryCounts")

    @field_validator("category_scores", "category_counts", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def date_key(self) -> str:
        return date_key(self.date)

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "date": self.date.isoformat(),
            "testsCompleted": self.tests_completed,
            "averageScore": self.average_score,
            "bestScore": self.best_score,
            "categoryScores": dict(self.category_scores),
        }
        if self.category_counts:
            data["categoryCounts"] = dict(self.category_counts)
        return data

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "DailyProgress":
        return cls.model_validate(data)


def encode_result(result: TestResult) -> str:
    return json.dumps(result.to_json())


def decode_result(raw: str) -> TestResult:
    """Parse one log record; raises ValueError (incl. ValidationError) on bad input."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("result record is not a JSON object")
    return TestResult.from_json(data)


def encode_daily(progress: DailyProgress) -> str:
    return json.dumps(progress.to_json())


def decode_daily(raw: str) -> DailyProgress:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("daily progress record is not a JSON object")
    return DailyProgress.from_json(data)
