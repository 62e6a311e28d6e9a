"""
Shared fixtures for one-way ANOVA tests.

Datasets are given as raw (data, factor) columns the way a request
carries them.
"""

import numpy as np
import pytest


ALL_OPTIONS = {
    'equalVariancesAssumed': {'tukey': True, 'duncan': True},
    'statisticsOptions': {'descriptive': True, 'homogeneityOfVariance': True},
    'estimateEffectSize': True,
}


def columns(groups):
    """{code: values} -> (data, factor) row-aligned columns."""
    data, factor = [], []
    for code, values in groups.items():
        data.extend(values)
        factor.extend([code] * len(values))
    return data, factor


@pytest.fixture
def all_options():
    return ALL_OPTIONS


@pytest.fixture
def separated_groups():
    """{A: 1,2,3  B: 4,5,6  C: 7,8,9}: within MS = 1, well separated means."""
    return columns({1: [1, 2, 3], 2: [4, 5, 6], 3: [7, 8, 9]})


@pytest.fixture
def overlapping_groups():
    """Two close groups and one far group: A and B share a subset."""
    return columns({1: [1, 2, 3], 2: [1.5, 2.5, 3.5], 3: [10, 11, 12]})


@pytest.fixture
def random_groups():
    """Unbalanced 4-group design with unequal spreads."""
    rng = np.random.default_rng(123)
    return columns({
        1: rng.normal(10.0, 1.0, 8).tolist(),
        2: rng.normal(11.0, 2.0, 12).tolist(),
        3: rng.normal(13.0, 3.0, 10).tolist(),
        4: rng.normal(10.5, 1.5, 9).tolist(),
    })


@pytest.fixture
def split_random(random_groups):
    """random_groups as a list of arrays, in factor order."""
    data, factor = random_groups
    data, factor = np.asarray(data), np.asarray(factor)
    return [data[factor == code] for code in (1, 2, 3, 4)]


@pytest.fixture
def make_columns():
    return columns
