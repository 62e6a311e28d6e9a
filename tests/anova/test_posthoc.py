"""
Tests for Tukey HSD pairwise comparisons.

Cross-checked against scipy.stats.tukey_hsd (Tukey-Kramer for unequal n).
"""

import numpy as np
import pytest
from scipy import stats as sp_stats

from comparemeans.anova import tukey_hsd
from comparemeans.core.groups import Group


def make_groups(samples):
    return [
        Group(
            key=float(i + 1),
            label=f'G{i + 1}',
            values=np.asarray(values, dtype=np.float64),
            rows=tuple(range(len(values))),
        )
        for i, values in enumerate(samples)
    ]


def within_ms(samples):
    ss = sum(np.sum((s - np.mean(s)) ** 2) for s in samples)
    df = sum(len(s) for s in samples) - len(samples)
    return ss / df, df


class TestAgainstScipy:

    def test_p_values_and_intervals(self, split_random):
        groups = make_groups(split_random)
        mse, df = within_ms(split_random)
        table = tukey_hsd(groups, mse, df)

        expected = sp_stats.tukey_hsd(*split_random)
        ci = expected.confidence_interval(0.95)
        index = {g.label: i for i, g in enumerate(groups)}
        for row in table:
            i, j = index[row.group1], index[row.group2]
            assert row.p_value == pytest.approx(expected.pvalue[i, j], rel=1e-5, abs=1e-8)
            assert row.ci_lower == pytest.approx(ci.low[i, j], rel=1e-6)
            assert row.ci_upper == pytest.approx(ci.high[i, j], rel=1e-6)


class TestTableShape:

    @pytest.fixture
    def table(self, split_random):
        mse, df = within_ms(split_random)
        return tukey_hsd(make_groups(split_random), mse, df)

    def test_every_ordered_pair(self, table):
        assert len(table) == 4 * 3
        assert all(row.group1 != row.group2 for row in table)

    def test_antisymmetric_difference(self, table):
        by_pair = {(r.group1, r.group2): r for r in table}
        for (a, b), row in by_pair.items():
            mirror = by_pair[(b, a)]
            assert row.diff == pytest.approx(-mirror.diff)
            assert row.p_value == pytest.approx(mirror.p_value)
            assert row.se == pytest.approx(mirror.se)

    def test_interval_contains_difference(self, table):
        for row in table:
            assert row.ci_lower < row.diff < row.ci_upper

    def test_wire_keys(self, table):
        assert set(table[0].to_dict()) == {
            'method', 'factor1', 'factor2', 'meanDifference',
            'stdError', 'Sig', 'lowerBound', 'upperBound',
        }
        assert table[0].to_dict()['method'] == 'Tukey HSD'


class TestUndefined:

    def test_no_mean_square(self):
        table = tukey_hsd(make_groups([[1.0], [3.0]]), None, 0)
        assert len(table) == 2
        assert table[0].diff == pytest.approx(-2.0)
        assert table[0].se is None
        assert table[0].p_value is None
        assert table[0].ci_lower is None

    def test_zero_mean_square(self):
        table = tukey_hsd(make_groups([[2.0, 2.0], [5.0, 5.0]]), 0.0, 2)
        assert table[0].se == 0.0
        assert table[0].p_value is None
