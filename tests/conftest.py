"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest


def make_variable(name, measure='scale', label=None, missing=None, values=None):
    """Wire-form variable descriptor."""
    variable = {'name': name, 'measure': measure}
    if label is not None:
        variable['label'] = label
    if missing is not None:
        variable['missing'] = missing
    if values is not None:
        variable['values'] = values
    return variable


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def score_var():
    return make_variable('score', label='Test score')


@pytest.fixture
def group_var():
    """Nominal grouping variable with a value-label table for codes 1-3."""
    return make_variable(
        'group',
        measure='nominal',
        values=[
            {'value': 1, 'label': 'Control'},
            {'value': 2, 'label': 'Low dose'},
            {'value': 3, 'label': 'High dose'},
        ],
    )


@pytest.fixture
def make_var():
    """Factory for wire-form variable descriptors."""
    return make_variable
