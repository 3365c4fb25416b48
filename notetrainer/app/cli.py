from __future__ import annotations

"""CLI for notetrainer: run tests, read the leaderboard and progress, write reports."""

import argparse
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from ..analytics.report import write_report
from ..audio.playback import make_player_from_config
from ..config.config import load_config, validate_config
from ..drills.modes import MODE_ALIASES, QuestionMode, normalize_mode
from ..drills.question_generator import Question, QuestionGenerator
from ..results.result_manager import ResultStore
from ..stats.leaderboard import rank
from ..stats.progress import ProgressAggregator
from ..stats.summary import format_leaderboard, format_progress, format_summary, motivational_message
from ..storage.store import make_store_from_config
from ..theory.notes import NOTES, find_note, note_at
from ..util.randomness import make_rng
from .events import EventBus
from .session_manager import ScoringSession

UI = Dict[str, Callable[..., Any]]


def _build_ui() -> UI:
    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def _open(cfg: Dict[str, Any]) -> Tuple[ResultStore, ProgressAggregator]:
    kv = make_store_from_config(cfg)
    store = ResultStore(kv, default_player_name=cfg["player"]["default_name"])
    progress = ProgressAggregator(kv, per_category_counter=cfg["progress"]["per_category_counter"])
    return store, progress


def _prompt_for(q: Question, options: Optional[list[int]]) -> str:
    note = note_at(q.note_index)
    if q.mode is QuestionMode.AUDIO_TO_NOTE:
        head = "Listen and choose the correct note ('r' replays)"
    elif q.mode is QuestionMode.SOLFEGE_TO_INTL:
        head = f"Choose international name for: {note.solfege}"
    elif q.mode is QuestionMode.INTL_TO_KEY:
        head = f"Choose the key corresponding to: {note.international}"
    else:
        head = f"Read the note from the staff: {_staff_line(q.note_index)}"
    if options is None:
        keys = "  ".join(f"[{n.international}]" for n in NOTES)
        return f"{head}\n  {keys}"
    return f"{head}\n  Options: {', '.join(NOTES[i].international for i in options)}"


def _staff_line(note_index: int) -> str:
    # treble staff position, E4 (bottom line) = step 0
    step = note_index - 2
    if step < 0:
        return f"{-step} step(s) below the bottom line"
    kind = "line" if step % 2 == 0 else "space"
    return f"{kind} {step // 2 + 1} from the bottom"


def run_test(session: ScoringSession, ui: UI, generator: QuestionGenerator, options_count: int = 4) -> bool:
    """Drive a session to completion. Returns False when the user quits early."""
    ask = ui["ask"]
    inform = ui["inform"]
    while not session.finished:
        q = session.current_question
        assert q is not None
        options = None if q.mode is QuestionMode.INTL_TO_KEY else generator.make_options(q.note_index, options_count)
        inform(f"Q {session.current_index + 1}/{session.question_count} [{q.mode.label}]")
        inform(_prompt_for(q, options))
        while True:
            ans = ask("Answer (note name, 'r' replay, 'q' quit): ").strip()
            low = ans.lower()
            if low == "q":
                return False
            if low == "r":
                session.replay()
                continue
            idx = find_note(ans)
            if idx is None:
                inform(f"Unknown note '{ans}'.")
                continue
            correct = session.submit_answer(idx)
            if correct:
                inform("Correct!\n")
            else:
                inform(f"Wrong. Answer was {note_at(q.note_index).international}.\n")
            break
        session.advance()
    return True


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="notetrainer")
    sub = p.add_subparsers(dest="cmd", required=True)

    def _common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--config", default=None)
        sp.add_argument("--explain", action="store_true")

    sub.add_parser("modes")

    np_ = sub.add_parser("name")
    _common(np_)
    np_.add_argument("name", nargs="?", default=None)

    tp = sub.add_parser("test")
    _common(tp)
    tp.add_argument("--mode", choices=sorted(MODE_ALIASES), default=None)
    tp.add_argument("--name", default=None)

    lp = sub.add_parser("leaderboard")
    _common(lp)
    lp.add_argument("--mode", choices=sorted(MODE_ALIASES), default=None)
    lp.add_argument("--limit", type=int, default=None)

    pp = sub.add_parser("progress")
    _common(pp)
    pp.add_argument("--days", type=int, default=None)

    rp = sub.add_parser("report")
    _common(rp)
    rp.add_argument("--out", default=None)

    args = p.parse_args(argv)

    if args.cmd == "modes":
        for alias, mode in sorted(MODE_ALIASES.items()):
            print(f"{alias}: {mode.label} ({mode.question_count} questions)")
        return 0

    if args.explain:
        from .explain import enable as explain_enable
        explain_enable(True)
    cfg = validate_config(load_config(args.config))
    store, progress = _open(cfg)

    if args.cmd == "name":
        if args.name is None:
            print(store.get_player_name())
            return 0
        try:
            store.set_player_name(args.name)
        except ValueError as e:
            print(f"Invalid name: {e}")
            return 2
        print(f"Player name set to {store.get_player_name()}")
        return 0

    if args.cmd == "test":
        mode = normalize_mode(args.mode or cfg["test"]["mode"])
        if args.name is not None:
            try:
                store.set_player_name(args.name)
            except ValueError as e:
                print(f"Invalid name: {e}")
                return 2
        generator = QuestionGenerator(make_rng())
        player = make_player_from_config(cfg)
        session = ScoringSession(
            mode,
            store=store,
            progress=progress,
            generator=generator,
            player=player,
            events=EventBus(),
        )
        try:
            completed = run_test(session, _build_ui(), generator, int(cfg["test"]["options"]))
        finally:
            player.close()
        if not completed:
            print("Test abandoned; nothing was saved.")
            return 1
        assert session.result is not None
        print("\nTest Summary:")
        print(format_summary(session.result, session.question_count))
        return 0

    if args.cmd == "leaderboard":
        mode_filter = normalize_mode(args.mode) if args.mode else None
        entries = rank(store.read_all(), mode_filter, accuracy_by_mode=cfg["leaderboard"]["accuracy_by_mode"])
        limit = cfg["leaderboard"]["limit"] if args.limit is None else max(0, args.limit)
        if limit:
            entries = entries[:limit]
        print(format_leaderboard(entries))
        return 0

    if args.cmd == "progress":
        days = cfg["progress"]["days"] if args.days is None else max(1, args.days)
        results = store.read_all()
        print(motivational_message(results, progress.current_streak()))
        print(format_progress(progress.get_last_n_days(days), progress.get_category_progress(results)))
        return 0

    if args.cmd == "report":
        outdir = Path(args.out or cfg["reports"]["output_dir"])
        written = write_report(
            store,
            progress,
            outdir,
            days=cfg["progress"]["days"],
            accuracy_by_mode=cfg["leaderboard"]["accuracy_by_mode"],
        )
        for path in written:
            print(path)
        print(f"Reports saved to: {outdir.resolve()}")
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
