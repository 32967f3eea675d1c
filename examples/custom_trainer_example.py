"""
Custom trainer example with ForestBuilder.

This example demonstrates:
- Plugging a custom tree trainer into the builder
- How a failing tree affects the build result
- Retrieving the partial forest after a failed build
"""

import logging

from sklearn.datasets import make_classification
from sklearn.tree import ExtraTreeClassifier

from pyforestbuilder import (
    BuildState,
    ForestBuildError,
    ForestBuilder,
    ForestBuilderParameters,
)


class PickyExtraTreeTrainer:
    """Grows an extremely randomized tree; refuses views with one class."""

    def __init__(self, parameters, random_state=None):
        self.parameters = parameters
        self.random_state = random_state
        self.tree_ = None

    def train(self, view):
        X, y = view.to_arrays()
        if len(set(y)) < 2:
            return False
        self.tree_ = ExtraTreeClassifier(random_state=self.random_state,
                                         max_depth=self.parameters.max_depth)
        self.tree_.fit(X, y)
        return True

    def get_trained_tree(self):
        return self.tree_


def main():
    logging.basicConfig(level=logging.INFO, format="[ %(levelname)s ]: %(message)s")

    # Highly imbalanced data so that small partitions can end up single-class
    X, y = make_classification(n_samples=60, weights=[0.95], random_state=0)

    params = ForestBuilderParameters(
        n_trees=20,
        sampling='uniform_partition',
        max_depth=3,
        random_state=1,
    )
    builder = ForestBuilder(params, trainer_factory=PickyExtraTreeTrainer)
    builder.fit(X, y)
    success = builder.build_state is BuildState.SUCCEEDED

    forest = builder.get_forest()
    print(f"\nBuild succeeded: {success}")
    print(f"Trees trained:   {len(forest)} of {params.n_trees}")
    print(f"Failed trees:    {builder.failed_tree_indices_}")

    try:
        builder.get_forest(require_complete=True)
    except ForestBuildError as exc:
        print(f"Complete forest unavailable: {exc}")


if __name__ == "__main__":
    main()
