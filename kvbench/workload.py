"""Synthetic key/value workload shared by every backend in a run."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass

from tqdm import tqdm

from .config import KEY_PREFIX_RANGE


# ---------------------------------------------------------------------------
# KeyValuePair
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeyValuePair:
    key: bytes
    value: bytes


# ---------------------------------------------------------------------------
# Random strings
# ---------------------------------------------------------------------------

_LETTERS = string.ascii_letters


def random_string(length: int, rng: random.Random) -> str:
    """Return *length* letters drawn uniformly from a-z and A-Z."""
    return "".join(rng.choice(_LETTERS) for _ in range(length))


def _random_item(length: int, rng: random.Random) -> bytes:
    # The numeric prefix makes collisions between short suffixes unlikely.
    prefix = rng.randrange(KEY_PREFIX_RANGE)
    return f"{prefix}{random_string(length, rng)}".encode("ascii")


# ---------------------------------------------------------------------------
# Workload generation
# ---------------------------------------------------------------------------

def generate_pairs(
    count: int,
    length: int,
    rng: random.Random,
    *,
    show_progress: bool = False,
) -> tuple[KeyValuePair, ...]:
    """Generate *count* key/value pairs with *length*-letter random suffixes.

    The key of each pair is drawn before its value, so a given seed always
    yields the same sequence. Repeated keys are not filtered out; a later put
    simply overwrites the earlier one.
    """
    indices = range(count)
    if show_progress:
        indices = tqdm(indices, desc="Generating pairs", unit="pair", leave=False)
    pairs = []
    for _ in indices:
        key = _random_item(length, rng)
        value = _random_item(length, rng)
        pairs.append(KeyValuePair(key, value))
    return tuple(pairs)
