from __future__ import annotations

"""Scoring session: the state machine behind one test run.

A session is ``Active`` while questions remain and becomes ``Finished`` once
the last question is left behind. Finishing snapshots a TestResult, appends
it to the result log and folds it into the daily rollup, exactly once per
session lifetime.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Union

from ..audio.synthesis import SamplePlayer
from ..drills.modes import Category, QuestionMode
from ..drills.question_generator import Question, QuestionGenerator
from ..results.result_manager import ResultStore
from ..results.schema import TestResult
from ..stats.progress import ProgressAggregator
from .events import EventBus
from .explain import trace, warn


def _zero_tally() -> Dict[Category, int]:
    return {cat: 0 for cat in Category}


@dataclass
class Active:
    index: int = 0
    score: int = 0
    tally: Dict[Category, int] = field(default_factory=_zero_tally)
    answered: Optional[int] = None  # note index chosen for the current question


@dataclass(frozen=True)
class Finished:
    result: TestResult


SessionState = Union[Active, Finished]


class ScoringSession:
    def __init__(
        self,
        mode: QuestionMode,
        *,
        store: ResultStore,
        progress: ProgressAggregator,
        generator: Optional[QuestionGenerator] = None,
        player: Optional[SamplePlayer] = None,
        events: Optional[EventBus] = None,
        player_name: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.progress = progress
        self.generator = generator or QuestionGenerator()
        self.player = player
        self.events = events or EventBus()
        self.player_name = player_name or store.get_player_name()
        self.clock = clock
        self.mode = mode
        self.questions: List[Question] = []
        self.state: SessionState = Active()
        self.feedback: Optional[str] = None
        self._finalized = False
        self.restart(mode)

    # --- state queries ---

    @property
    def finished(self) -> bool:
        return isinstance(self.state, Finished)

    @property
    def result(self) -> Optional[TestResult]:
        return self.state.result if isinstance(self.state, Finished) else None

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def current_index(self) -> int:
        if isinstance(self.state, Active):
            return self.state.index
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if isinstance(self.state, Active):
            return self.questions[self.state.index]
        return None

    @property
    def score(self) -> int:
        if isinstance(self.state, Active):
            return self.state.score
        return self.state.result.total_score

    @property
    def tally(self) -> Dict[Category, int]:
        if isinstance(self.state, Active):
            return dict(self.state.tally)
        return self.state.result.per_category

    @property
    def accuracy(self) -> float:
        """Share of this session's questions answered correctly, in percent."""
        if not self.questions:
            return 0.0
        return self.score / len(self.questions) * 100

    # --- transitions ---

    def restart(self, mode: Optional[QuestionMode] = None) -> None:
        """Discard progress and start over with freshly generated questions."""
        if mode is not None:
            self.mode = mode
        self.questions = self.generator.generate(self.mode)
        self.state = Active()
        self.feedback = None
        self._finalized = False
        trace("session_started", {"mode": self.mode.tag, "questions": len(self.questions), "player": self.player_name})
        self._announce_current()

    def submit_answer(self, chosen_note_index: int) -> Optional[bool]:
        """Grade the answer to the current question.

        Returns None when ignored: the session is finished or the current
        question was already answered.
        """
        state = self.state
        if not isinstance(state, Active) or state.answered is not None:
            return None
        chosen = int(chosen_note_index)
        state.answered = chosen
        self._play(chosen)

        q = self.questions[state.index]
        correct = chosen == q.note_index
        if correct:
            state.score += 1
            bucket = q.mode.category
            if bucket is not None:
                state.tally[bucket] += 1
        self.feedback = "correct" if correct else "wrong"
        trace("graded", {"index": state.index, "answer": chosen, "truth": q.note_index, "correct": correct})
        self.events.emit("feedback", {"correct": correct, "chosen": chosen, "expected": q.note_index})
        return correct

    def advance(self) -> SessionState:
        """Move to the next question, finishing the session after the last one."""
        state = self.state
        if not isinstance(state, Active):
            return state
        self.feedback = None
        next_index = state.index + 1
        if next_index < len(self.questions):
            state.index = next_index
            state.answered = None
            self._announce_current()
            return state
        return self._finish(state)

    def replay(self) -> None:
        """Play the current question's note again."""
        q = self.current_question
        if q is not None:
            self._play(q.note_index)

    # --- internals ---

    def _finish(self, state: Active) -> Finished:
        result = TestResult.from_tally(
            player_name=self.player_name,
            total_score=state.score,
            tally=state.tally,
            timestamp=self.clock(),
            mode=self.mode,
        )
        finished = Finished(result)
        self.state = finished
        if not self._finalized:
            # flag first: a failed write must not lead to a second append later
            self._finalized = True
            self.store.append(result)
            self.progress.record_completion(result)
            trace("session_ended", {"score": result.total_score, "mode": result.mode.tag})
            self.events.emit("finished", result)
        return finished

    def _announce_current(self) -> None:
        q = self.current_question
        if q is None:
            return
        self.events.emit("question", {"index": self.current_index, "note_index": q.note_index, "mode": q.mode})
        if q.mode is QuestionMode.AUDIO_TO_NOTE:
            self._play(q.note_index)

    def _play(self, note_index: int) -> None:
        if self.player is None:
            return
        try:
            self.player.play_sample(note_index)
        except Exception as e:
            # playback never affects scoring
            warn(f"Audio playback error: {e}")
