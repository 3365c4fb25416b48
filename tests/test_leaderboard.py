import unittest
from datetime import datetime, timedelta

from notetrainer.drills.modes import QuestionMode
from notetrainer.results.schema import TestResult
from notetrainer.stats.leaderboard import accuracy_for, rank

T0 = datetime(2024, 2, 1, 12, 0)


def make(score: int, mode: QuestionMode = QuestionMode.AUDIO_TO_NOTE, i: int = 0) -> TestResult:
    return TestResult.from_tally(player_name=f"p{i}", total_score=score, tally={}, timestamp=T0 + timedelta(minutes=i), mode=mode)


class LeaderboardTests(unittest.TestCase):
    def test_empty_log(self) -> None:
        self.assertEqual(rank([]), [])

    def test_ties_share_rank_and_keep_log_order(self) -> None:
        log = [make(s, i=i) for i, s in enumerate([50, 80, 80, 30])]
        entries = rank(log)
        self.assertEqual([e.result.total_score for e in entries], [80, 80, 50, 30])
        self.assertEqual([e.rank for e in entries], [1, 1, 3, 4])
        # same-score entries stay in log order
        self.assertEqual([e.result.player_name for e in entries[:2]], ["p1", "p2"])
        by_log_position = {e.result.player_name: e.rank for e in entries}
        self.assertEqual([by_log_position[f"p{i}"] for i in range(4)], [3, 1, 1, 4])

    def test_filter_hides_without_reranking(self) -> None:
        log = [
            make(18, QuestionMode.AUDIO_TO_NOTE, 0),
            make(90, QuestionMode.MIXED, 1),
            make(12, QuestionMode.AUDIO_TO_NOTE, 2),
            make(15, QuestionMode.SOLFEGE_TO_INTL, 3),
        ]
        entries = rank(log, QuestionMode.AUDIO_TO_NOTE)
        self.assertEqual([(e.rank, e.result.total_score) for e in entries], [(2, 18), (4, 12)])
        self.assertEqual(rank(log, QuestionMode.STAFF_TO_NOTE), [])

    def test_accuracy_uses_fixed_denominator(self) -> None:
        self.assertEqual(accuracy_for(make(20)), 100.0)
        self.assertEqual(accuracy_for(make(15)), 75.0)
        mixed = make(90, QuestionMode.MIXED)
        self.assertEqual(rank([mixed])[0].accuracy, 450.0)
        self.assertEqual(rank([mixed], accuracy_by_mode=True)[0].accuracy, 90.0)

    def test_input_not_mutated(self) -> None:
        log = [make(1, i=0), make(5, i=1)]
        rank(log)
        self.assertEqual([r.total_score for r in log], [1, 5])


if __name__ == "__main__":
    unittest.main()
