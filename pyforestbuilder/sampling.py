"""
Per-tree data sampling strategies.
"""

import logging
from enum import Enum
from typing import List, Union

import numpy as np

from .dataset import DataSetView
from .random_source import RandomSource

logger = logging.getLogger(__name__)


class TreeDataSamplingType(Enum):
    """How training samples are distributed across the trees of a forest."""

    #: Disjoint, near-equal partition of the shuffled samples.
    UNIFORM_PARTITION = "uniform_partition"
    #: Every tree sees every sample, in its own random order.
    CONSTANT = "constant"
    #: Every tree gets a bootstrap sample of the full size.
    BAGGING = "bagging"


_SAMPLING_ALIASES = {
    'uniform_partition': TreeDataSamplingType.UNIFORM_PARTITION,
    'uniform': TreeDataSamplingType.UNIFORM_PARTITION,
    'partition': TreeDataSamplingType.UNIFORM_PARTITION,
    'constant': TreeDataSamplingType.CONSTANT,
    'bagging': TreeDataSamplingType.BAGGING,
    'bootstrap': TreeDataSamplingType.BAGGING,
}


def get_sampling_type(
    sampling: Union[str, TreeDataSamplingType]
) -> TreeDataSamplingType:
    """Convert a sampling name or enum value to TreeDataSamplingType."""
    if isinstance(sampling, TreeDataSamplingType):
        return sampling
    sampling_type = None
    if isinstance(sampling, str):
        sampling_type = _SAMPLING_ALIASES.get(sampling.lower())
    if sampling_type is None:
        raise ValueError(
            f"sampling must be one of 'uniform_partition', 'constant', 'bagging', "
            f"got {sampling!r}"
        )
    return sampling_type


def uniform_partition(shuffled: np.ndarray, n_trees: int) -> List[np.ndarray]:
    """
    Split shuffled indices into ``n_trees`` disjoint blocks.

    Each block holds ``len(shuffled) // n_trees`` contiguous indices; the
    ``len(shuffled) % n_trees`` trailing indices are handed out one apiece to
    the first trees.
    """
    set_size = len(shuffled)
    subset_size = set_size // n_trees
    remainder = set_size % n_trees
    tail = n_trees * subset_size

    subsets = []
    for i in range(n_trees):
        block = shuffled[i * subset_size:(i + 1) * subset_size]
        if i < remainder:
            block = np.append(block, shuffled[tail + i])
        subsets.append(block)
    return subsets


def constant(shuffled: np.ndarray, n_trees: int,
             random_source: RandomSource) -> List[np.ndarray]:
    """Give every tree all indices, each tree shuffled independently."""
    subsets = []
    for _ in range(n_trees):
        block = shuffled.copy()
        random_source.shuffle(block)
        subsets.append(block)
    return subsets


def bagging(shuffled: np.ndarray, n_trees: int,
            random_source: RandomSource) -> List[np.ndarray]:
    """Draw ``len(shuffled)`` indices with replacement for every tree."""
    set_size = len(shuffled)
    return [random_source.draw(shuffled, set_size) for _ in range(n_trees)]


def sample_subsets(dataset, n_trees: int,
                   sampling: Union[str, TreeDataSamplingType],
                   random_source: RandomSource) -> List[DataSetView]:
    """
    Produce one training view per tree.

    Parameters
    ----------
    dataset : Dataset
        Full training set.
    n_trees : int
        Number of views to produce. Must not exceed ``dataset.size()``.
    sampling : str or TreeDataSamplingType
        Sampling strategy.
    random_source : RandomSource
        Shared random source, consumed in tree-index order.

    Returns
    -------
    views : list of DataSetView
        ``n_trees`` views, in tree-index order.
    """
    sampling_type = get_sampling_type(sampling)
    set_size = dataset.size()
    if n_trees <= 0:
        raise ValueError(f"n_trees must be positive, got {n_trees}")
    if n_trees > set_size:
        raise ValueError(
            f"Cannot sample {n_trees} subsets from {set_size} samples"
        )

    shuffled = np.arange(set_size, dtype=np.int64)
    random_source.shuffle(shuffled)

    if sampling_type is TreeDataSamplingType.UNIFORM_PARTITION:
        logger.info("Uniformly splitting data between %d trees.", n_trees)
        subsets = uniform_partition(shuffled, n_trees)
    elif sampling_type is TreeDataSamplingType.CONSTANT:
        logger.info("Passing all data to all %d trees.", n_trees)
        subsets = constant(shuffled, n_trees, random_source)
    else:
        logger.info("Using bagging to split data between %d trees.", n_trees)
        subsets = bagging(shuffled, n_trees, random_source)

    return [DataSetView(dataset, subset) for subset in subsets]
