# app/collection/ids.py
from __future__ import annotations

import random

ID_MIN = 1_000_000_000
ID_MAX = 9_999_999_999


def next_id(rng: random.Random | None = None) -> str:
    """Random 10-digit id, never starting with 0. Uniqueness is not tracked."""
    r = rng or random
    return str(r.randint(ID_MIN, ID_MAX))
