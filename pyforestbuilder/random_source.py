"""
Random source shared by the sampling policy and the tree trainers.
"""

import numpy as np
from typing import Optional, Sequence, Union


def check_random_state(
    seed: Optional[Union[int, np.random.RandomState]]
) -> np.random.RandomState:
    """
    Turn seed into a np.random.RandomState instance.

    Parameters
    ----------
    seed : int, RandomState or None
        If int, return a new RandomState with that seed.
        If RandomState, return it unchanged.
        If None, return the global random state.

    Returns
    -------
    np.random.RandomState
        RandomState instance.
    """
    if seed is None:
        return np.random.mtrand._rand
    if isinstance(seed, np.random.RandomState):
        return seed
    if isinstance(seed, (int, np.integer)):
        return np.random.RandomState(seed)
    raise ValueError(
        f"{seed!r} cannot be used to seed a numpy.random.RandomState instance"
    )


class RandomSource:
    """
    Uniform shuffling and drawing backed by a numpy RandomState.

    Every consumer of one build draws from the same source, so two builds are
    reproducible only when the source is seeded identically and consumed in
    the same order.

    Parameters
    ----------
    seed : int, RandomState or None, default=None
        Seed for the underlying generator. None uses numpy's global state.
    """

    def __init__(self, seed: Optional[Union[int, np.random.RandomState]] = None):
        self.seed = seed
        self._rng = check_random_state(seed)

    @property
    def rng(self) -> np.random.RandomState:
        return self._rng

    def shuffle(self, sequence):
        """Permute a mutable sequence in place."""
        self._rng.shuffle(sequence)

    def draw_one(self, sequence: Sequence):
        """Pick one element uniformly (with replacement)."""
        if len(sequence) == 0:
            raise ValueError("Cannot draw from an empty sequence")
        return sequence[self._rng.randint(len(sequence))]

    def draw(self, sequence: Sequence, size: int) -> np.ndarray:
        """Draw ``size`` elements independently with replacement."""
        if len(sequence) == 0:
            raise ValueError("Cannot draw from an empty sequence")
        positions = self._rng.randint(0, len(sequence), size=size)
        return np.asarray(sequence)[positions]

    def tree_seeds(self, n: int) -> list:
        """Integer seeds handed to the per-tree collaborators."""
        return self._rng.randint(1, 2**31 - 1, size=n).tolist()

    def __repr__(self):
        return f"RandomSource(seed={self.seed!r})"


_default_source = RandomSource()


def get_default_random_source() -> RandomSource:
    """Return the process-wide random source."""
    return _default_source


def seed_default_random_source(seed: Optional[int]) -> RandomSource:
    """
    Replace the process-wide random source with a freshly seeded one.

    Must not be called while a build is running.
    """
    global _default_source
    _default_source = RandomSource(seed)
    return _default_source
