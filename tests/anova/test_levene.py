"""
Tests for Levene's test of homogeneity of variances.

Mean and median centres are cross-checked against scipy.stats.levene.
"""

import numpy as np
import pytest
from scipy import stats as sp_stats

from comparemeans.anova import levene_test_impl, levene_variants, one_way_anova


class TestAgainstScipy:

    @pytest.mark.parametrize('center', ['mean', 'median'])
    def test_statistic_and_p(self, split_random, center):
        result = levene_test_impl(split_random, center=center)
        expected = sp_stats.levene(*split_random, center=center)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert result.p_value == pytest.approx(expected.pvalue, rel=1e-8)

    def test_degrees_of_freedom(self, split_random):
        result = levene_test_impl(split_random)
        n = sum(len(g) for g in split_random)
        assert result.df1 == 3
        assert result.df2 == n - 4


class TestAdjustedDf:

    def test_adjusted_df2(self, split_random):
        result = levene_test_impl(split_random, center='median', adjusted_df=True)
        u, v = [], []
        for g in split_random:
            z = np.abs(g - np.median(g))
            u.append(np.sum((z - z.mean()) ** 2))
            v.append(len(g) - 1)
        u, v = np.asarray(u), np.asarray(v)
        expected_df2 = u.sum() ** 2 / np.sum(u ** 2 / v)
        assert result.df2 == pytest.approx(expected_df2)

    def test_statistic_unchanged_by_adjustment(self, split_random):
        plain = levene_test_impl(split_random, center='median')
        adjusted = levene_test_impl(split_random, center='median', adjusted_df=True)
        assert adjusted.statistic == pytest.approx(plain.statistic)
        assert adjusted.p_value == pytest.approx(
            sp_stats.f.sf(adjusted.statistic, adjusted.df1, adjusted.df2)
        )


class TestVariants:

    def test_order_and_labels(self, split_random):
        labels = [v.label for v in levene_variants(split_random)]
        assert labels == [
            'Based on Mean',
            'Based on Median',
            'Based on Median and with adjusted df',
            'Based on trimmed mean',
        ]

    def test_trimmed_defined(self, split_random):
        trimmed = levene_variants(split_random)[-1]
        assert trimmed.statistic is not None
        assert 0.0 <= trimmed.p_value <= 1.0

    def test_bad_center(self, split_random):
        with pytest.raises(ValueError, match='center'):
            levene_test_impl(split_random, center='mode')

    def test_in_anova_output(self, make_var, random_groups, all_options):
        out = one_way_anova(
            make_var('score'), random_groups[0],
            make_var('group', measure='nominal'), random_groups[1],
            all_options,
        ).output()
        rows = out['homogeneityOfVariances']
        assert len(rows) == 4
        assert set(rows[0]) == {'type', 'LeveneStatistic', 'df1', 'df2', 'Sig'}


class TestUndefined:

    def test_single_group(self):
        result = levene_test_impl([np.array([1.0, 2.0, 3.0])])
        assert result.statistic is None
        assert result.p_value is None

    def test_empty_group(self):
        result = levene_test_impl([np.array([1.0, 2.0]), np.array([])])
        assert result.statistic is None

    def test_no_within_df(self):
        result = levene_test_impl([np.array([1.0]), np.array([5.0])])
        assert result.statistic is None

    def test_constant_deviations(self):
        # every |y - mean| equals 1 so the transformed values have no spread
        result = levene_test_impl([np.array([1.0, 3.0]), np.array([5.0, 7.0])])
        assert result.statistic is None
        assert result.p_value is None

    @pytest.mark.parametrize('center', ['mean', 'median', 'trimmed'])
    def test_overflowing_deviations(self, center):
        groups = [np.array([1e308, -1e308, 1e308]), np.array([1.0, 2.0, 3.0])]
        result = levene_test_impl(groups, center=center)
        assert result.statistic is None
        assert result.p_value is None
        assert result.df2 == 4

    def test_overflowing_adjusted_df(self):
        groups = [np.array([1e308, -1e308, 1e308]), np.array([1.0, 2.0, 3.0])]
        result = levene_test_impl(groups, center='median', adjusted_df=True)
        assert result.statistic is None
        assert result.df2 == 4
