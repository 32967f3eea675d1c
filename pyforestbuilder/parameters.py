"""
Immutable configuration shared by the forest builder and its tree trainers.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .sampling import TreeDataSamplingType, get_sampling_type

TASKS = ('classification', 'regression')

_DEFAULT_CRITERION = {
    'classification': 'gini',
    'regression': 'squared_error',
}

_DEFAULT_MAX_FEATURES = {
    'classification': 'sqrt',
    'regression': 1.0,
}

_CRITERIA = {
    'classification': ('gini', 'entropy', 'log_loss'),
    'regression': ('squared_error', 'friedman_mse', 'absolute_error', 'poisson'),
}


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_fraction(value, upper_inclusive: bool) -> bool:
    if not isinstance(value, (float, np.floating)):
        return False
    if upper_inclusive:
        return 0.0 < value <= 1.0
    return 0.0 < value < 1.0


@dataclass(frozen=True)
class ForestBuilderParameters:
    """
    Forest build configuration.

    The instance is frozen; use :meth:`replace` to derive a modified copy.

    Parameters
    ----------
    n_trees : int, default=100
        Number of trees in the forest.
    sampling : str or TreeDataSamplingType, default='bagging'
        How training samples are distributed between trees. One of
        'uniform_partition', 'constant' or 'bagging'.
    task : str, default='classification'
        Kind of tree to grow. One of 'classification' or 'regression'.
    criterion : str, default=None
        Split criterion. If None, uses 'gini' for classification and
        'squared_error' for regression.
    max_depth : int, default=None
        Maximum tree depth. None grows until leaves are pure.
    min_samples_split : int, default=2
        Minimum number of samples required to split a node.
    min_samples_leaf : int, default=1
        Minimum number of samples in a leaf node.
    max_features : int, float or str, default=None
        Number of features to consider at each split. If None, uses
        'sqrt' for classification and all features for regression.
    n_jobs : int, default=1
        Number of trees trained concurrently. -1 uses all cores.
    random_state : int, default=None
        Seed for sampling and tree growth.
    verbose : int, default=0
        Verbosity level. Above 0, per-tree progress is logged at INFO.
    """

    n_trees: int = 100
    sampling: Union[str, TreeDataSamplingType] = 'bagging'
    task: str = 'classification'
    criterion: Optional[str] = None
    max_depth: Optional[int] = None
    min_samples_split: int = 2
    min_samples_leaf: int = 1
    max_features: Optional[Union[int, float, str]] = None
    n_jobs: int = 1
    random_state: Optional[int] = None
    verbose: int = 0

    def __post_init__(self):
        if not _is_int(self.n_trees):
            raise ValueError(f"n_trees must be an integer, got {self.n_trees!r}")
        if self.n_trees <= 0:
            raise ValueError(f"n_trees must be positive, got {self.n_trees}")
        if self.task not in TASKS:
            raise ValueError(
                f"task must be one of 'classification', 'regression', "
                f"got '{self.task}'"
            )
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be non-zero")
        self._check_tree_params()
        # Store the enum so every consumer sees the same value
        object.__setattr__(self, 'sampling', get_sampling_type(self.sampling))

    def _check_tree_params(self):
        """Reject tree-growth settings no tree could be grown with."""
        criteria = _CRITERIA[self.task]
        if self.criterion is not None and self.criterion not in criteria:
            raise ValueError(
                f"criterion for {self.task} must be one of {criteria}, "
                f"got {self.criterion!r}"
            )
        if self.max_depth is not None and not (_is_int(self.max_depth) and self.max_depth >= 1):
            raise ValueError(
                f"max_depth must be None or an integer >= 1, got {self.max_depth!r}"
            )
        if not (_is_int(self.min_samples_split) and self.min_samples_split >= 2
                or _is_fraction(self.min_samples_split, upper_inclusive=True)):
            raise ValueError(
                f"min_samples_split must be an integer >= 2 or a float in (0, 1], "
                f"got {self.min_samples_split!r}"
            )
        if not (_is_int(self.min_samples_leaf) and self.min_samples_leaf >= 1
                or _is_fraction(self.min_samples_leaf, upper_inclusive=False)):
            raise ValueError(
                f"min_samples_leaf must be an integer >= 1 or a float in (0, 1), "
                f"got {self.min_samples_leaf!r}"
            )
        max_features = self.max_features
        if not (max_features is None
                or max_features in ('sqrt', 'log2')
                or _is_int(max_features) and max_features >= 1
                or _is_fraction(max_features, upper_inclusive=True)):
            raise ValueError(
                f"max_features must be None, 'sqrt', 'log2', an integer >= 1 "
                f"or a float in (0, 1], got {max_features!r}"
            )

    @property
    def sampling_type(self) -> TreeDataSamplingType:
        return self.sampling

    def tree_params(self) -> dict:
        """Tree-growth hyperparameters forwarded to every trainer."""
        criterion = self.criterion
        if criterion is None:
            criterion = _DEFAULT_CRITERION[self.task]
        max_features = self.max_features
        if max_features is None:
            max_features = _DEFAULT_MAX_FEATURES[self.task]
        return {
            'criterion': criterion,
            'max_depth': self.max_depth,
            'min_samples_split': self.min_samples_split,
            'min_samples_leaf': self.min_samples_leaf,
            'max_features': max_features,
        }

    def get_params(self, deep=True):
        """
        Get parameters as a dict.

        ``deep`` is accepted only for scikit-learn signature compatibility;
        there are no nested parameters. ``sampling`` is returned as the
        resolved TreeDataSamplingType, whatever name it was given as.
        """
        return dataclasses.asdict(self)

    def replace(self, **changes) -> "ForestBuilderParameters":
        """Return a validated copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)
