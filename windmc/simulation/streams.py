"""Explicit, stateless random-stream derivation.

Every batch of draws comes from its own :class:`numpy.random.Generator`
whose seed is a child of one root :class:`numpy.random.SeedSequence`.
Children are addressed by position (reference vs. sweep, checkpoint index,
farm index), so the same seed always reproduces the same streams regardless
of call order, and no two farms or checkpoints ever share a stream.
"""

from __future__ import annotations

import numpy as np

SeedLike = int | np.random.SeedSequence | None


def as_seed_sequence(seed: SeedLike) -> np.random.SeedSequence:
    """Wrap an integer (or ``None`` for OS entropy) in a SeedSequence."""
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)


def child_sequences(parent: np.random.SeedSequence, n: int) -> list[np.random.SeedSequence]:
    """Return the first *n* children of *parent*.

    Equivalent to ``parent.spawn(n)`` on a fresh sequence, but does not
    advance the parent's spawn counter, so repeated calls are identical.
    """
    return [
        np.random.SeedSequence(
            parent.entropy,
            spawn_key=(*parent.spawn_key, i),
            pool_size=parent.pool_size,
        )
        for i in range(n)
    ]


def farm_generators(parent: np.random.SeedSequence, n_farms: int) -> list[np.random.Generator]:
    """One independent generator per farm, derived from *parent*."""
    return [np.random.default_rng(s) for s in child_sequences(parent, n_farms)]
