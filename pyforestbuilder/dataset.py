"""
Datasets and index views over them.
"""

import numpy as np
from typing import Protocol, Sequence, runtime_checkable

from sklearn.utils.validation import check_array, check_X_y


@runtime_checkable
class Dataset(Protocol):
    """Read-only collection of samples with a fixed size."""

    def size(self) -> int:
        ...

    def sample_at(self, index: int):
        ...


class ArrayDataSet:
    """
    Dataset backed by a feature matrix and an optional target vector.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Feature matrix.
    y : array-like of shape (n_samples,), default=None
        Target values. None for unlabelled data.

    Examples
    --------
    >>> import numpy as np
    >>> ds = ArrayDataSet(np.zeros((4, 2)), np.array([0, 1, 0, 1]))
    >>> ds.size()
    4
    """

    def __init__(self, X, y=None):
        if y is None:
            X = check_array(X, dtype=np.float64)
        else:
            X, y = check_X_y(X, y, dtype=np.float64)
            y = np.array(y)
            y.setflags(write=False)

        X = np.array(X)
        X.setflags(write=False)
        self.X = X
        self.y = y

    @property
    def n_features(self) -> int:
        return self.X.shape[1]

    def size(self) -> int:
        return self.X.shape[0]

    def __len__(self):
        return self.size()

    def sample_at(self, index: int):
        """Return ``(x, y)`` for labelled data, ``x`` otherwise."""
        if self.y is None:
            return self.X[index]
        return self.X[index], self.y[index]

    def take(self, indices):
        """Gather the rows at ``indices`` (duplicates repeat rows)."""
        indices = np.asarray(indices, dtype=np.intp)
        if self.y is None:
            return self.X[indices], None
        return self.X[indices], self.y[indices]


class DataSetView:
    """
    Immutable ordered selection of samples from a dataset.

    The view holds a reference to the dataset and never copies or modifies
    it. Indices may repeat.

    Parameters
    ----------
    dataset : Dataset
        Dataset the indices refer to.
    indices : sequence of int
        Sample indices, each in ``[0, dataset.size())``.
    """

    def __init__(self, dataset: Dataset, indices: Sequence[int]):
        indices = np.array(indices, dtype=np.int64).ravel()
        n = dataset.size()
        if indices.size and (indices.min() < 0 or indices.max() >= n):
            raise IndexError(
                f"View indices must lie in [0, {n}), "
                f"got range [{indices.min()}, {indices.max()}]"
            )
        indices.setflags(write=False)
        self._dataset = dataset
        self._indices = indices

    @classmethod
    def full(cls, dataset: Dataset) -> "DataSetView":
        """View covering every sample once, in dataset order."""
        return cls(dataset, np.arange(dataset.size()))

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    def size(self) -> int:
        return len(self._indices)

    def __len__(self):
        return self.size()

    def sample_at(self, position: int):
        return self._dataset.sample_at(int(self._indices[position]))

    def to_arrays(self):
        """
        Materialize the view as ``(X, y)`` arrays.

        Returns
        -------
        X : ndarray of shape (size, n_features)
        y : ndarray of shape (size,) or None
        """
        take = getattr(self._dataset, "take", None)
        if take is not None:
            return take(self._indices)

        samples = [self.sample_at(i) for i in range(self.size())]
        if samples and isinstance(samples[0], tuple):
            xs, ys = zip(*samples)
            return np.asarray(xs), np.asarray(ys)
        return np.asarray(samples), None

    def __repr__(self):
        return f"DataSetView(size={self.size()}, dataset_size={self._dataset.size()})"
