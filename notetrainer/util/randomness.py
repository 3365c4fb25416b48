from __future__ import annotations

"""Randomness helpers for question generation."""

import os
import random
from typing import Optional


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build an RNG, seeded from ``seed`` or the SEED env var when set."""
    if seed is None:
        raw = os.environ.get("SEED")
        if raw is not None:
            try:
                seed = int(raw)
            except ValueError:
                seed = None
    return random.Random(seed)
