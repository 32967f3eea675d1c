"""
Trained forest container.
"""

from typing import Iterator, List


class Forest:
    """
    Ordered, append-only collection of trained trees.

    Trees are kept in the order of the tree index that produced them. Trees
    whose training failed are simply absent.

    Parameters
    ----------
    n_trees_requested : int
        Number of trees the build was configured for.
    """

    def __init__(self, n_trees_requested: int):
        self.n_trees_requested = n_trees_requested
        self._trees = []
        self._tree_indices = []

    def add_tree(self, tree, tree_index: int):
        """Append ``tree``, trained as tree number ``tree_index``."""
        if not 0 <= tree_index < self.n_trees_requested:
            raise IndexError(
                f"tree_index must be in [0, {self.n_trees_requested}), got {tree_index}"
            )
        if self._tree_indices and tree_index <= self._tree_indices[-1]:
            raise ValueError(
                f"Trees must be added in increasing index order; "
                f"got {tree_index} after {self._tree_indices[-1]}"
            )
        self._trees.append(tree)
        self._tree_indices.append(tree_index)

    @property
    def trees(self) -> List:
        return list(self._trees)

    @property
    def tree_indices(self) -> List[int]:
        return list(self._tree_indices)

    @property
    def is_complete(self) -> bool:
        return len(self._trees) == self.n_trees_requested

    @property
    def missing_tree_indices(self) -> List[int]:
        present = set(self._tree_indices)
        return [i for i in range(self.n_trees_requested) if i not in present]

    def __len__(self):
        return len(self._trees)

    def __iter__(self) -> Iterator:
        return iter(self._trees)

    def __getitem__(self, position):
        return self._trees[position]

    def __repr__(self):
        return f"Forest(n_trees={len(self)}, n_trees_requested={self.n_trees_requested})"
