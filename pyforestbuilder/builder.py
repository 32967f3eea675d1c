"""
Forest build orchestration: sample one view per tree, train every tree, and
collect the successful ones into a Forest.
"""

import logging
import time
from collections import namedtuple
from enum import Enum
from typing import Optional

from joblib import Parallel, delayed

from .dataset import ArrayDataSet
from .exceptions import ForestBuildError
from .forest import Forest
from .parameters import ForestBuilderParameters
from .random_source import RandomSource, get_default_random_source
from .sampling import sample_subsets
from .trainer import TrainerFactory, default_trainer_factory

logger = logging.getLogger(__name__)


class BuildState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_TreeOutcome = namedtuple('_TreeOutcome', ['tree_index', 'success', 'tree', 'error'])


class ForestBuilder:
    """
    Train a forest of independent trees.

    Each tree gets its own view of the training data, chosen by the
    configured sampling strategy, and is grown by its own trainer. A tree
    that fails to train does not stop the others, but the build as a whole
    is reported as failed. The trees that did train are still kept in the
    forest; check :attr:`build_state` or :attr:`Forest.is_complete` before
    using it.

    Parameters
    ----------
    parameters : ForestBuilderParameters
        Build configuration, shared unchanged with every trainer. Any object
        exposing the same attributes is accepted, so the tree count is
        checked here as well.
    trainer_factory : callable, default=None
        ``trainer_factory(parameters, tree_seed)`` returning a TreeTrainer.
        If None, trees are scikit-learn decision trees.
    random_source : RandomSource, default=None
        Source for sampling and per-tree seeds. If None, a source seeded
        with ``parameters.random_state`` is created, or the process-wide
        source is used when ``random_state`` is None.

    Attributes
    ----------
    build_state : BuildState
        Current state of the build.
    subsets_ : list of DataSetView
        Per-tree views of the last build.
    failed_tree_indices_ : list of int
        Tree indices whose training failed.
    tree_errors_ : dict
        Exceptions raised by trainers, keyed by tree index.
    elapsed_time_ : float
        Training wall time in seconds.
    build_started_at_, build_finished_at_ : float
        Epoch timestamps of the training phase.

    Examples
    --------
    >>> from pyforestbuilder import ForestBuilder, ForestBuilderParameters
    >>> params = ForestBuilderParameters(n_trees=10, sampling='bagging', random_state=0)
    >>> builder = ForestBuilder(params)
    >>> builder.fit(X, y).build_state
    <BuildState.SUCCEEDED: 'succeeded'>
    """

    def __init__(
        self,
        parameters: ForestBuilderParameters,
        trainer_factory: Optional[TrainerFactory] = None,
        random_source: Optional[RandomSource] = None,
    ):
        if parameters.n_trees <= 0:
            raise ValueError(f"n_trees must be positive, got {parameters.n_trees}")

        self.parameters = parameters
        self.trainer_factory = trainer_factory or default_trainer_factory

        if random_source is None:
            if parameters.random_state is not None:
                random_source = RandomSource(parameters.random_state)
            else:
                random_source = get_default_random_source()
        self.random_source = random_source

        self._tree_seeds = random_source.tree_seeds(parameters.n_trees)
        self._init_build()

    def _init_build(self):
        self.trainers = [
            self.trainer_factory(self.parameters, seed) for seed in self._tree_seeds
        ]
        self.build_state = BuildState.NOT_STARTED
        self._forest = Forest(self.parameters.n_trees)
        self.subsets_ = []
        self.failed_tree_indices_ = []
        self.tree_errors_ = {}
        self.elapsed_time_ = None
        self.build_started_at_ = None
        self.build_finished_at_ = None

    def reset(self):
        """Discard the last build so the builder can be used again."""
        self._init_build()
        return self

    def _log_progress(self, msg, *args):
        level = logging.INFO if self.parameters.verbose > 0 else logging.DEBUG
        logger.log(level, msg, *args)

    def _train_one(self, tree_index, view):
        self._log_progress("Training tree number %d...", tree_index)
        trainer = self.trainers[tree_index]
        try:
            if not trainer.train(view):
                return _TreeOutcome(tree_index, False, None, None)
            tree = trainer.get_trained_tree()
        except Exception as exc:
            logger.error("Tree number %d raised during training.",
                         tree_index, exc_info=True)
            return _TreeOutcome(tree_index, False, None, exc)
        return _TreeOutcome(tree_index, True, tree, None)

    def _train_all(self, views):
        n_jobs = self.parameters.n_jobs
        if n_jobs == 1:
            return [self._train_one(i, view) for i, view in enumerate(views)]
        # Trainers own disjoint state; results come back in tree-index order
        return Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(self._train_one)(i, view) for i, view in enumerate(views)
        )

    def build(self, dataset) -> bool:
        """
        Train every tree on its own view of ``dataset``.

        Parameters
        ----------
        dataset : Dataset
            Training data. Must hold at least ``n_trees`` samples.

        Returns
        -------
        success : bool
            True only if every tree trained. False if any tree failed, or
            if the dataset is smaller than the number of trees (in which
            case nothing is sampled or trained and the builder is left
            untouched).
        """
        if self.build_state is not BuildState.NOT_STARTED:
            raise ForestBuildError(
                f"Forest already built (state: {self.build_state.value}); "
                f"call reset() before building again"
            )

        n_trees = self.parameters.n_trees
        n_samples = dataset.size()
        if n_trees > n_samples:
            logger.warning(
                "The number of trees (%d) is greater than the number of "
                "training samples (%d). Cannot train forest.", n_trees, n_samples
            )
            return False

        self.build_state = BuildState.IN_PROGRESS
        success = False
        try:
            self.subsets_ = sample_subsets(
                dataset, n_trees, self.parameters.sampling, self.random_source
            )

            self.build_started_at_ = time.time()
            start = time.perf_counter()
            outcomes = self._train_all(self.subsets_)

            for outcome in outcomes:
                if outcome.success:
                    self._forest.add_tree(outcome.tree, outcome.tree_index)
                else:
                    logger.error("Problem training tree number %d.", outcome.tree_index)
                    self.failed_tree_indices_.append(outcome.tree_index)
                    if outcome.error is not None:
                        self.tree_errors_[outcome.tree_index] = outcome.error
            success = all(outcome.success for outcome in outcomes)

            self.elapsed_time_ = time.perf_counter() - start
            self.build_finished_at_ = time.time()
            logger.info("Forest training took: %.3f s.", self.elapsed_time_)
        finally:
            # Any error escaping above still leaves a terminal state
            self.build_state = BuildState.SUCCEEDED if success else BuildState.FAILED

        if not success:
            logger.error(
                "%d of %d trees failed to train: %s",
                len(self.failed_tree_indices_), n_trees, self.failed_tree_indices_
            )
        return success

    def fit(self, X, y=None):
        """
        Build the forest from arrays.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Training data.
        y : array-like of shape (n_samples,), default=None
            Target values.

        Returns
        -------
        self : ForestBuilder
        """
        self.build(ArrayDataSet(X, y))
        return self

    def get_forest(self, require_complete: bool = False) -> Forest:
        """
        Return the forest trained so far.

        Parameters
        ----------
        require_complete : bool, default=False
            If True, raise ForestBuildError unless every tree trained.
        """
        if require_complete and self.build_state is not BuildState.SUCCEEDED:
            raise ForestBuildError(
                f"Forest is incomplete: {len(self._forest)} of "
                f"{self.parameters.n_trees} trees trained "
                f"(state: {self.build_state.value})"
            )
        return self._forest

    @property
    def forest_(self) -> Forest:
        return self._forest

    def is_build_complete(self) -> bool:
        """Whether the last build reached a terminal state."""
        return self.build_state in (BuildState.SUCCEEDED, BuildState.FAILED)

    def __repr__(self):
        return (f"ForestBuilder(n_trees={self.parameters.n_trees}, "
                f"sampling='{self.parameters.sampling.value}', "
                f"state='{self.build_state.value}')")
