from __future__ import annotations

"""Result store: append-only log of finished tests plus the player name slot."""

from typing import List

from ..app.explain import trace, warn
from ..storage.store import KeyValueStore
from .schema import TestResult, decode_result, encode_result

RESULTS_KEY = "testResults"
PLAYER_NAME_KEY = "playerName"
DEFAULT_PLAYER_NAME = "Guest"


class ResultStore:
    def __init__(self, kv: KeyValueStore, *, default_player_name: str = DEFAULT_PLAYER_NAME) -> None:
        self.kv = kv
        self.default_player_name = default_player_name

    def append(self, result: TestResult) -> None:
        """Add one record at the end of the log; earlier records are untouched."""
        records = self.kv.get_string_list(RESULTS_KEY) or []
        records.append(encode_result(result))
        self.kv.set_string_list(RESULTS_KEY, records)
        trace("result_appended", {"count": len(records), "score": result.total_score, "mode": result.mode.tag})

    def read_all(self) -> List[TestResult]:
        """Decode the log in insertion order, skipping records that fail to parse."""
        out: List[TestResult] = []
        for i, raw in enumerate(self.kv.get_string_list(RESULTS_KEY) or []):
            try:
                out.append(decode_result(raw))
            except ValueError as e:
                warn(f"Error parsing result #{i}: {e}")
        return out

    def count(self) -> int:
        return len(self.kv.get_string_list(RESULTS_KEY) or [])

    def get_player_name(self) -> str:
        name = self.kv.get_string(PLAYER_NAME_KEY)
        return name if name else self.default_player_name

    def has_player_name(self) -> bool:
        return bool(self.kv.get_string(PLAYER_NAME_KEY))

    def set_player_name(self, name: str) -> None:
        clean = (name or "").strip()
        if not clean:
            raise ValueError("player name must not be empty")
        self.kv.set_string(PLAYER_NAME_KEY, clean)
