"""Uniform selection among equally good candidates."""

from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

# Seeded once per process; repeated ties draw from one continuing sequence.
_PROCESS_RNG = random.Random()


def choose_uniform(candidates: Sequence[T], rng: Optional[random.Random] = None) -> T:
    """Return one candidate uniformly at random."""
    if not candidates:
        raise ValueError("Cannot choose from an empty candidate list.")
    return (rng or _PROCESS_RNG).choice(candidates)
