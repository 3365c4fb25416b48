import json
import unittest
from datetime import datetime

from pydantic import ValidationError

from notetrainer.drills.modes import QuestionMode
from notetrainer.results.result_manager import RESULTS_KEY, ResultStore
from notetrainer.results.schema import TestResult, decode_result, encode_result
from notetrainer.storage.store import MemoryStore


def make_result(score: int = 12, mode: QuestionMode = QuestionMode.SOLFEGE_TO_INTL, name: str = "Ann") -> TestResult:
    return TestResult(
        player_name=name,
        total_score=score,
        audio_score=0,
        solfege_score=score if mode is QuestionMode.SOLFEGE_TO_INTL else 0,
        key_score=0,
        timestamp=datetime(2024, 5, 1, 10, 20, 30, 123000),
        mode=mode,
    )


class ResultCodecTests(unittest.TestCase):
    def test_round_trip(self) -> None:
        r = TestResult(
            player_name="Bo",
            total_score=61,
            audio_score=15,
            solfege_score=16,
            key_score=14,
            staff_score=16,
            timestamp=datetime(2024, 1, 2, 3, 4, 5),
            mode=QuestionMode.MIXED,
        )
        self.assertEqual(decode_result(encode_result(r)), r)

    def test_wire_keys(self) -> None:
        data = json.loads(encode_result(make_result()))
        self.assertEqual(
            set(data),
            {"playerName", "totalScore", "audioScore", "solfegeScore", "keyScore", "staffScore", "timestamp", "mode"},
        )
        self.assertEqual(data["mode"], "TestMode.solfegeToIntl")
        self.assertEqual(data["timestamp"], "2024-05-01T10:20:30.123000")

    def test_missing_staff_score_defaults_to_zero(self) -> None:
        legacy = json.dumps(
            {
                "playerName": "Old",
                "totalScore": 9,
                "audioScore": 9,
                "solfegeScore": 0,
                "keyScore": 0,
                "timestamp": "2023-12-31T23:59:59.000",
                "mode": "TestMode.audioToNote",
            }
        )
        r = decode_result(legacy)
        self.assertEqual(r.staff_score, 0)
        self.assertIs(r.mode, QuestionMode.AUDIO_TO_NOTE)
        self.assertEqual(r.timestamp, datetime(2023, 12, 31, 23, 59, 59))

    def test_missing_or_stringly_scores_are_rejected(self) -> None:
        base = {
            "playerName": "x",
            "totalScore": 12,
            "audioScore": 12,
            "solfegeScore": 0,
            "keyScore": 0,
            "timestamp": "2024-01-01T00:00:00",
            "mode": "TestMode.audioToNote",
        }
        for key in ("audioScore", "solfegeScore", "keyScore"):
            record = {k: v for k, v in base.items() if k != key}
            with self.assertRaises(ValidationError):
                decode_result(json.dumps(record))
        with self.assertRaises(ValidationError):
            decode_result(json.dumps({**base, "totalScore": "12"}))
        with self.assertRaises(ValidationError):
            decode_result(json.dumps({**base, "staffScore": "3"}))

    def test_bad_records_raise_value_errors(self) -> None:
        with self.assertRaises(ValueError):
            decode_result("{not json")
        with self.assertRaises(ValueError):
            decode_result("[1, 2]")
        with self.assertRaises(ValidationError):
            decode_result(json.dumps({"playerName": "x", "totalScore": 1, "timestamp": "2024-01-01T00:00:00", "mode": "TestMode.nope"}))

    def test_results_are_immutable(self) -> None:
        r = make_result()
        with self.assertRaises(ValidationError):
            r.total_score = 99  # type: ignore[misc]


class ResultStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.kv = MemoryStore()
        self.store = ResultStore(self.kv)

    def test_empty_store(self) -> None:
        self.assertEqual(self.store.read_all(), [])
        self.assertEqual(self.store.count(), 0)

    def test_append_preserves_order_and_prior_records(self) -> None:
        first = make_result(5)
        self.store.append(first)
        before = list(self.kv.get_string_list(RESULTS_KEY))
        self.store.append(make_result(7))
        after = self.kv.get_string_list(RESULTS_KEY)
        self.assertEqual(after[:1], before)
        self.assertEqual([r.total_score for r in self.store.read_all()], [5, 7])

    def test_undecodable_records_are_skipped(self) -> None:
        self.store.append(make_result(5))
        records = self.kv.get_string_list(RESULTS_KEY)
        records.insert(0, "garbage")
        records.append(json.dumps({"playerName": "x"}))
        self.kv.set_string_list(RESULTS_KEY, records)
        self.store.append(make_result(8))
        self.assertEqual([r.total_score for r in self.store.read_all()], [5, 8])
        self.assertEqual(self.store.count(), 4)

    def test_records_without_category_scores_are_skipped(self) -> None:
        self.store.append(make_result(5))
        records = self.kv.get_string_list(RESULTS_KEY)
        records.append(
            json.dumps(
                {
                    "playerName": "x",
                    "totalScore": "12",
                    "timestamp": "2024-01-01T00:00:00",
                    "mode": "TestMode.audioToNote",
                }
            )
        )
        self.kv.set_string_list(RESULTS_KEY, records)
        self.assertEqual([r.total_score for r in self.store.read_all()], [5])
        self.assertEqual(self.store.count(), 2)

    def test_player_name_slot(self) -> None:
        self.assertEqual(self.store.get_player_name(), "Guest")
        self.assertFalse(self.store.has_player_name())
        self.store.set_player_name("  Linh ")
        self.assertEqual(self.store.get_player_name(), "Linh")
        self.assertEqual(self.store.read_all(), [])
        with self.assertRaises(ValueError):
            self.store.set_player_name("   ")
        self.assertEqual(self.store.get_player_name(), "Linh")

    def test_custom_default_name(self) -> None:
        self.assertEqual(ResultStore(MemoryStore(), default_player_name="Anon").get_player_name(), "Anon")


if __name__ == "__main__":
    unittest.main()
