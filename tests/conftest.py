"""
pytest configuration and fixtures for pyforestbuilder tests.
"""

import pytest
import numpy as np

from pyforestbuilder import ArrayDataSet


@pytest.fixture
def random_state():
    """Fixed random state for reproducibility."""
    return np.random.RandomState(42)


@pytest.fixture
def classification_data(random_state):
    """Generate sample classification data."""
    n_samples = 200
    n_features = 10

    X = random_state.randn(n_samples, n_features)
    # Create two clusters
    y = (X[:, 0] + X[:, 1] > 0).astype(int)

    return X, y


@pytest.fixture
def regression_data(random_state):
    """Generate sample regression data."""
    n_samples = 200
    n_features = 10

    X = random_state.randn(n_samples, n_features)
    # Linear relationship with noise
    y = X[:, 0] * 2 + X[:, 1] * 0.5 + random_state.randn(n_samples) * 0.1

    return X, y


def index_dataset(n_samples):
    """Unlabelled dataset whose single feature is the sample index."""
    return ArrayDataSet(np.arange(n_samples, dtype=float).reshape(-1, 1))


class ScriptedTrainer:
    """Trainer whose outcome is fixed up front; records every call."""

    def __init__(self, tree_index, outcome=True):
        self.tree_index = tree_index
        self.outcome = outcome
        self.views = []
        self._tree = None

    def train(self, view):
        self.views.append(view)
        if self.outcome == 'raise':
            raise RuntimeError(f"trainer {self.tree_index} exploded")
        if self.outcome == 'lose_tree':
            # Reports success but never keeps a tree
            return True
        if self.outcome:
            self._tree = ('tree', self.tree_index)
        return bool(self.outcome)

    def get_trained_tree(self):
        if self._tree is None:
            raise RuntimeError("not trained")
        return self._tree


class ScriptedTrainerFactory:
    """Hands out ScriptedTrainers in tree-index order."""

    def __init__(self, outcomes=None):
        self.outcomes = outcomes or {}
        self.trainers = []
        self.seeds = []

    def __call__(self, parameters, tree_seed):
        tree_index = len(self.trainers) % parameters.n_trees
        trainer = ScriptedTrainer(tree_index, self.outcomes.get(tree_index, True))
        self.trainers.append(trainer)
        self.seeds.append(tree_seed)
        return trainer


@pytest.fixture
def scripted_factory():
    """Factory for trainers that always succeed unless told otherwise."""
    return ScriptedTrainerFactory


@pytest.fixture
def make_index_dataset():
    """Builder for datasets of a given size."""
    return index_dataset
