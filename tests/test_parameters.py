"""
Tests for ForestBuilderParameters.
"""

import dataclasses

import pytest
import numpy as np

from pyforestbuilder import ForestBuilderParameters, TreeDataSamplingType


class TestForestBuilderParameters:
    """Tests for build configuration."""

    def test_init_default_params(self):
        """Test default parameter initialization."""
        params = ForestBuilderParameters()
        assert params.n_trees == 100
        assert params.sampling is TreeDataSamplingType.BAGGING
        assert params.task == 'classification'
        assert params.n_jobs == 1
        assert params.random_state is None

    def test_init_custom_params(self):
        """Test custom parameter initialization."""
        params = ForestBuilderParameters(
            n_trees=10,
            sampling='uniform_partition',
            task='regression',
            max_depth=4,
            n_jobs=2,
            random_state=42,
        )
        assert params.n_trees == 10
        assert params.sampling_type is TreeDataSamplingType.UNIFORM_PARTITION
        assert params.task == 'regression'
        assert params.max_depth == 4
        assert params.n_jobs == 2
        assert params.random_state == 42

    def test_numpy_integer_tree_count(self):
        """Test that numpy integers are accepted."""
        assert ForestBuilderParameters(n_trees=np.int64(3)).n_trees == 3

    @pytest.mark.parametrize("n_trees", [0, -1, 2.5, True, "10"])
    def test_invalid_n_trees(self, n_trees):
        """Test that a positive integer tree count is required."""
        with pytest.raises(ValueError, match="n_trees"):
            ForestBuilderParameters(n_trees=n_trees)

    def test_invalid_task(self):
        """Test that unknown tasks are rejected."""
        with pytest.raises(ValueError, match="task"):
            ForestBuilderParameters(task='survival')

    def test_invalid_sampling(self):
        """Test that unknown sampling strategies are rejected."""
        with pytest.raises(ValueError, match="sampling"):
            ForestBuilderParameters(sampling='boosting')

    def test_invalid_n_jobs(self):
        """Test that n_jobs cannot be zero."""
        with pytest.raises(ValueError, match="n_jobs"):
            ForestBuilderParameters(n_jobs=0)

    @pytest.mark.parametrize("field,value", [
        ('max_depth', 0),
        ('max_depth', 2.5),
        ('min_samples_split', 1),
        ('min_samples_split', 1.5),
        ('min_samples_leaf', 0),
        ('min_samples_leaf', 1.0),
        ('max_features', 0),
        ('max_features', 'all'),
        ('max_features', 1.5),
        ('criterion', 'variance'),
    ])
    def test_invalid_tree_params(self, field, value):
        """Test that bad tree hyperparameters fail at construction."""
        with pytest.raises(ValueError, match=field):
            ForestBuilderParameters(**{field: value})

    def test_criterion_matches_task(self):
        """Test that criteria are checked against the task."""
        ForestBuilderParameters(task='regression', criterion='absolute_error')
        with pytest.raises(ValueError, match="criterion"):
            ForestBuilderParameters(task='regression', criterion='gini')

    @pytest.mark.parametrize("field,value", [
        ('max_depth', 1),
        ('min_samples_split', 0.5),
        ('min_samples_leaf', 0.1),
        ('max_features', 'log2'),
        ('max_features', 0.5),
    ])
    def test_valid_tree_params(self, field, value):
        """Test that accepted tree hyperparameters reach the trainers."""
        params = ForestBuilderParameters(**{field: value})
        assert params.tree_params()[field] == value

    def test_frozen(self):
        """Test that parameters cannot be changed after construction."""
        params = ForestBuilderParameters(n_trees=5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.n_trees = 10

    def test_replace(self):
        """Test deriving a modified copy."""
        params = ForestBuilderParameters(n_trees=5)
        other = params.replace(n_trees=8, sampling='constant')

        assert params.n_trees == 5
        assert params.sampling is TreeDataSamplingType.BAGGING
        assert other.n_trees == 8
        assert other.sampling is TreeDataSamplingType.CONSTANT

    def test_replace_validates(self):
        """Test that derived copies are validated too."""
        with pytest.raises(ValueError):
            ForestBuilderParameters().replace(n_trees=0)

    def test_get_params(self):
        """Test get_params method."""
        params = ForestBuilderParameters(n_trees=7, max_depth=3)
        values = params.get_params()
        assert values['n_trees'] == 7
        assert values['max_depth'] == 3
        assert values['sampling'] is TreeDataSamplingType.BAGGING

    def test_tree_params_classification(self):
        """Test tree hyperparameter defaults for classification."""
        tree_params = ForestBuilderParameters().tree_params()
        assert tree_params == {
            'criterion': 'gini',
            'max_depth': None,
            'min_samples_split': 2,
            'min_samples_leaf': 1,
            'max_features': 'sqrt',
        }

    def test_tree_params_regression(self):
        """Test tree hyperparameter defaults for regression."""
        tree_params = ForestBuilderParameters(task='regression').tree_params()
        assert tree_params['criterion'] == 'squared_error'
        assert tree_params['max_features'] == 1.0

    def test_tree_params_explicit(self):
        """Test that explicit hyperparameters are forwarded."""
        tree_params = ForestBuilderParameters(
            criterion='entropy', max_features=3, min_samples_leaf=4
        ).tree_params()
        assert tree_params['criterion'] == 'entropy'
        assert tree_params['max_features'] == 3
        assert tree_params['min_samples_leaf'] == 4
