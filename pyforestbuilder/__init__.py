"""
pyforestbuilder: ensemble training for decision forests
=======================================================

Distributes a training set across the trees of a forest with a selectable
sampling strategy, trains one independent tree per view, and collects the
trained trees into a Forest.

Main Classes
------------
ForestBuilder
    Orchestrates sampling and per-tree training.
ForestBuilderParameters
    Immutable build configuration.
TreeDataSamplingType
    Uniform partition, constant, or bagging sampling.
DataSetView
    Index view over a dataset, one per tree.

Examples
--------
>>> from pyforestbuilder import ForestBuilder, ForestBuilderParameters
>>> params = ForestBuilderParameters(n_trees=10, sampling='uniform_partition')
>>> builder = ForestBuilder(params)
>>> builder.fit(X_train, y_train)
>>> forest = builder.get_forest()
"""

from ._version import __version__
from .builder import BuildState, ForestBuilder
from .dataset import ArrayDataSet, Dataset, DataSetView
from .exceptions import ForestBuildError
from .forest import Forest
from .parameters import ForestBuilderParameters
from .random_source import (
    RandomSource,
    get_default_random_source,
    seed_default_random_source,
)
from .sampling import TreeDataSamplingType, sample_subsets
from .trainer import DecisionTreeTrainer, TreeTrainer

__all__ = [
    "__version__",
    "ArrayDataSet",
    "BuildState",
    "Dataset",
    "DataSetView",
    "DecisionTreeTrainer",
    "Forest",
    "ForestBuildError",
    "ForestBuilder",
    "ForestBuilderParameters",
    "RandomSource",
    "TreeDataSamplingType",
    "TreeTrainer",
    "get_default_random_source",
    "sample_subsets",
    "seed_default_random_source",
]
