"""
Sampling strategy example with ForestBuilder.

This example demonstrates:
- Building a forest on the breast cancer dataset
- Comparing how the three sampling strategies distribute samples
- Inspecting the trained trees
"""

import logging

import numpy as np
from sklearn.datasets import load_breast_cancer

from pyforestbuilder import ForestBuilder, ForestBuilderParameters


def main():
    logging.basicConfig(level=logging.INFO, format="[ %(levelname)s ]: %(message)s")

    # Load breast cancer dataset
    print("Loading breast cancer dataset...")
    data = load_breast_cancer()
    X, y = data.data, data.target
    print(f"Dataset shape: {X.shape}")

    for sampling in ('uniform_partition', 'constant', 'bagging'):
        print(f"\nSampling: {sampling}")
        params = ForestBuilderParameters(
            n_trees=8,
            sampling=sampling,
            max_depth=6,
            n_jobs=4,
            random_state=42,
        )
        builder = ForestBuilder(params).fit(X, y)

        sizes = [view.size() for view in builder.subsets_]
        unique = [len(np.unique(view.indices)) for view in builder.subsets_]
        print(f"  Build state:     {builder.build_state.value}")
        print(f"  Subset sizes:    {sizes}")
        print(f"  Unique samples:  {unique}")
        print(f"  Training time:   {builder.elapsed_time_:.3f} s")

        depths = [tree.get_depth() for tree in builder.get_forest()]
        print(f"  Tree depths:     {depths}")


if __name__ == "__main__":
    main()
