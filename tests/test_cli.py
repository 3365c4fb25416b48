import io
import random
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import datetime
from pathlib import Path
from unittest import mock

import matplotlib

matplotlib.use("Agg")

from notetrainer.app.cli import main, run_test
from notetrainer.app.session_manager import ScoringSession
from notetrainer.audio.synthesis import SilentPlayer
from notetrainer.drills.modes import QuestionMode
from notetrainer.drills.question_generator import QuestionGenerator
from notetrainer.results.result_manager import ResultStore
from notetrainer.results.schema import TestResult
from notetrainer.stats.progress import ProgressAggregator
from notetrainer.storage.store import JsonFileStore, MemoryStore
from notetrainer.theory.notes import note_at


class RunTestTests(unittest.TestCase):
    def test_drives_session_to_completion(self) -> None:
        kv = MemoryStore()
        store = ResultStore(kv)
        gen = QuestionGenerator(random.Random(5))
        player = SilentPlayer()
        session = ScoringSession(
            QuestionMode.SOLFEGE_TO_INTL,
            store=store,
            progress=ProgressAggregator(kv),
            generator=gen,
            player=player,
        )
        said = []
        replies = iter(["zz", "r"])

        def ask(prompt: str) -> str:
            nxt = next(replies, None)
            if nxt is not None:
                return nxt
            return note_at(session.current_question.note_index).solfege

        completed = run_test(session, {"ask": ask, "inform": said.append}, gen)
        self.assertTrue(completed)
        self.assertEqual(session.result.total_score, 20)
        self.assertEqual(store.count(), 1)
        self.assertTrue(any("Unknown note 'zz'" in s for s in said))
        self.assertTrue(player.played)

    def test_quit_abandons_without_saving(self) -> None:
        kv = MemoryStore()
        store = ResultStore(kv)
        session = ScoringSession(QuestionMode.INTL_TO_KEY, store=store, progress=ProgressAggregator(kv))
        completed = run_test(session, {"ask": lambda _p: "q", "inform": lambda _m: None}, QuestionGenerator())
        self.assertFalse(completed)
        self.assertEqual(store.count(), 0)


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.prefs = self.dir / "prefs.json"
        self.cfg = self.dir / "cfg.yml"
        self.cfg.write_text(
            f"storage:\n  path: {self.prefs.as_posix()}\nreports:\n  output_dir: {(self.dir / 'reports').as_posix()}\n",
            encoding="utf-8",
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, *argv: str) -> tuple[int, str]:
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def seed_results(self) -> None:
        kv = JsonFileStore(self.prefs)
        store = ResultStore(kv)
        agg = ProgressAggregator(kv)
        for i, (score, mode) in enumerate([(15, QuestionMode.AUDIO_TO_NOTE), (18, QuestionMode.INTL_TO_KEY)]):
            r = TestResult.from_tally(player_name=f"p{i}", total_score=score, tally={}, timestamp=datetime.now(), mode=mode)
            store.append(r)
            agg.record_completion(r)

    def test_modes(self) -> None:
        code, out = self.run_cli("modes")
        self.assertEqual(code, 0)
        self.assertIn("mixed: Mixed (100 questions)", out)

    def test_name_get_and_set(self) -> None:
        self.assertEqual(self.run_cli("name", "--config", str(self.cfg))[1].strip(), "Guest")
        code, _ = self.run_cli("name", "Ann", "--config", str(self.cfg))
        self.assertEqual(code, 0)
        self.assertEqual(self.run_cli("name", "--config", str(self.cfg))[1].strip(), "Ann")
        self.assertEqual(self.run_cli("name", "  ", "--config", str(self.cfg))[0], 2)

    def test_leaderboard(self) -> None:
        self.assertIn("No results yet.", self.run_cli("leaderboard", "--config", str(self.cfg))[1])
        self.seed_results()
        _, out = self.run_cli("leaderboard", "--config", str(self.cfg))
        lines = out.strip().splitlines()
        self.assertTrue(lines[0].startswith("#1") and "p1" in lines[0])
        self.assertIn("75.0%", lines[1])
        _, filtered = self.run_cli("leaderboard", "--mode", "audio", "--config", str(self.cfg))
        self.assertTrue(filtered.strip().startswith("#2"))

    def test_progress(self) -> None:
        _, out = self.run_cli("progress", "--config", str(self.cfg))
        self.assertIn("Start a test", out)
        self.seed_results()
        _, out = self.run_cli("progress", "--config", str(self.cfg))
        self.assertIn("Days practiced: 1", out)
        self.assertIn("Audio: tests=1 avg=15 best=15", out)

    def test_report(self) -> None:
        self.seed_results()
        code, out = self.run_cli("report", "--config", str(self.cfg))
        self.assertEqual(code, 0)
        self.assertTrue((self.dir / "reports" / "results.parquet").exists())
        self.assertIn("Reports saved to", out)

    def test_test_command_quit(self) -> None:
        with mock.patch("builtins.input", return_value="q"):
            code, out = self.run_cli("test", "--mode", "key", "--config", str(self.cfg))
        self.assertEqual(code, 1)
        self.assertIn("nothing was saved", out)

    def test_test_command_rejects_blank_name(self) -> None:
        with mock.patch("builtins.input", side_effect=AssertionError("no questions expected")):
            code, out = self.run_cli("test", "--name", "  ", "--config", str(self.cfg))
        self.assertEqual(code, 2)
        self.assertIn("Invalid name", out)
        self.assertEqual(self.run_cli("name", "--config", str(self.cfg))[1].strip(), "Guest")


if __name__ == "__main__":
    unittest.main()
