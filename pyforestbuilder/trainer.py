"""
Tree-training collaborators.

The forest builder only depends on the :class:`TreeTrainer` protocol; how a
tree is grown is up to the trainer.
"""

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor

from .dataset import DataSetView
from .parameters import ForestBuilderParameters

logger = logging.getLogger(__name__)


@runtime_checkable
class TreeTrainer(Protocol):
    """Grows one tree from one data view."""

    def train(self, view: DataSetView) -> bool:
        ...

    def get_trained_tree(self):
        ...


#: factory(parameters, tree_seed) -> TreeTrainer
TrainerFactory = Callable[[ForestBuilderParameters, Optional[int]], TreeTrainer]


class DecisionTreeTrainer:
    """
    Trainer growing a scikit-learn decision tree.

    Parameters
    ----------
    parameters : ForestBuilderParameters
        Shared build configuration. Only ``task`` and the tree-growth
        hyperparameters are read.
    random_state : int, default=None
        Seed for the tree's own feature sampling.

    Attributes
    ----------
    tree_ : DecisionTreeClassifier or DecisionTreeRegressor
        Fitted tree. Only available after a successful :meth:`train`.
    """

    def __init__(self, parameters: ForestBuilderParameters,
                 random_state: Optional[int] = None):
        self.parameters = parameters
        self.random_state = random_state
        self.tree_ = None

    def _make_tree(self):
        if self.parameters.task == 'regression':
            tree_cls = DecisionTreeRegressor
        else:
            tree_cls = DecisionTreeClassifier
        return tree_cls(random_state=self.random_state, **self.parameters.tree_params())

    def train(self, view: DataSetView) -> bool:
        """
        Fit a tree on the samples of ``view``.

        Returns
        -------
        success : bool
            False if the view is empty, unlabelled, or rejected by the tree.
        """
        self.tree_ = None
        if view.size() == 0:
            logger.warning("Cannot train a tree on an empty view.")
            return False

        X, y = view.to_arrays()
        if y is None:
            logger.warning("Cannot train a tree on a view without targets.")
            return False

        tree = self._make_tree()
        try:
            tree.fit(X, y)
        except ValueError as exc:
            logger.warning("Tree rejected training data: %s", exc)
            return False

        self.tree_ = tree
        return True

    def get_trained_tree(self):
        if self.tree_ is None:
            raise RuntimeError("get_trained_tree called before a successful train")
        return self.tree_


def default_trainer_factory(parameters: ForestBuilderParameters,
                            tree_seed: Optional[int]) -> DecisionTreeTrainer:
    return DecisionTreeTrainer(parameters, random_state=tree_seed)
