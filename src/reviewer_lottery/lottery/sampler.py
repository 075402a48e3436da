"""
Random Sampler

Uniform sampling without replacement from a candidate pool.
"""

import random
from typing import Iterable, List, Optional, Sequence


def pick_random(
    items: Sequence[str],
    n: int,
    ignore: Iterable[str] = (),
    rng: Optional[random.Random] = None
) -> List[str]:
    """
    Draw up to ``n`` distinct items uniformly at random.

    Items in ``ignore`` are never picked. When the eligible pool is smaller
    than ``n`` the draw stops once the pool is exhausted.

    Args:
        items: Candidate pool
        n: Number of picks requested
        ignore: Items that must not be picked
        rng: Random source (seeded from system entropy if omitted)

    Returns:
        Picks in draw order
    """
    if n < 0:
        raise ValueError(f"Number of picks must be non-negative, got {n}")

    if rng is None:
        rng = random.Random()
    excluded = set(ignore)
    candidates = [item for item in items if item not in excluded]

    picks: List[str] = []
    while len(picks) < n and candidates:
        pick = candidates.pop(rng.randrange(len(candidates)))
        if pick not in picks:
            picks.append(pick)

    return picks
