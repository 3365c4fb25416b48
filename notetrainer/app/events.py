from __future__ import annotations

"""Tiny pub/sub event bus for UI-facing session signals.

Events emitted by the scoring session:
- ``question``: payload {"index", "note_index", "mode"} when a question becomes current
- ``feedback``: payload {"correct", "chosen", "expected"} after an answer
- ``finished``: payload is the final TestResult
"""

from typing import Any, Callable, Dict, List

from .explain import warn


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for h in self._subs.get(event, []):
            try:
                h(payload)
            except Exception as e:
                # a broken listener must not interrupt scoring
                warn(f"{event} handler failed: {e}")
