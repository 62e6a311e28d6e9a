"""
Tests for the independent-samples t-test.

Pooled and Welch results cross-checked against scipy.stats.ttest_ind.
"""

import json
import math

import numpy as np
import pytest
from scipy import stats as sp_stats

from comparemeans.core.exceptions import ValidationError
from comparemeans.ttest import independent_samples_ttest


def run(make_var, data, grouping, options=None, grouping_var=None):
    opts = {'group1': 1, 'group2': 2}
    opts.update(options or {})
    return independent_samples_ttest(
        make_var('score'), data,
        grouping_var or make_var('group', measure='nominal'), grouping,
        opts,
    )


@pytest.fixture
def two_samples(rng):
    x1 = rng.normal(10.0, 2.0, 14)
    x2 = rng.normal(12.0, 3.5, 9)
    data = x1.tolist() + x2.tolist()
    grouping = [1] * len(x1) + [2] * len(x2)
    return x1, x2, data, grouping


class TestAgainstScipy:

    def test_pooled(self, make_var, two_samples):
        x1, x2, data, grouping = two_samples
        test = run(make_var, data, grouping).equal_variances
        expected = sp_stats.ttest_ind(x1, x2, equal_var=True)
        assert test.t == pytest.approx(expected.statistic, rel=1e-10)
        assert test.p_value == pytest.approx(expected.pvalue, rel=1e-8)
        assert test.df == len(x1) + len(x2) - 2

    def test_welch(self, make_var, two_samples):
        x1, x2, data, grouping = two_samples
        test = run(make_var, data, grouping).unequal_variances
        expected = sp_stats.ttest_ind(x1, x2, equal_var=False)
        assert test.t == pytest.approx(expected.statistic, rel=1e-10)
        assert test.p_value == pytest.approx(expected.pvalue, rel=1e-8)
        assert test.df == pytest.approx(expected.df, rel=1e-10)

    def test_levene(self, make_var, two_samples):
        x1, x2, data, grouping = two_samples
        levene = run(make_var, data, grouping).levene
        expected = sp_stats.levene(x1, x2, center='mean')
        assert levene.statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert levene.p_value == pytest.approx(expected.pvalue, rel=1e-8)


class TestSmallExample:

    @pytest.fixture
    def result(self, make_var):
        return run(make_var, [2, 4, 6, 1, 3, 5], [1, 1, 1, 2, 2, 2])

    def test_pooled_values(self, result):
        test = result.equal_variances
        assert test.mean_diff == pytest.approx(1.0)
        assert test.df == 4
        assert test.se == pytest.approx(math.sqrt(4.0 * (2.0 / 3.0)))
        assert test.ci_lower < 1.0 < test.ci_upper

    def test_levene_defined(self, result):
        assert result.levene.statistic is not None
        assert math.isfinite(result.levene.statistic)
        assert result.levene.statistic >= 0.0

    def test_group_statistics(self, result):
        s1, s2 = result.group_statistics
        assert (s1.n, s2.n) == (3, 3)
        assert s1.mean == pytest.approx(4.0)
        assert s2.mean == pytest.approx(3.0)
        assert s1.std_dev == pytest.approx(2.0)


class TestGroupDefinition:

    def test_labels_from_value_table(self, make_var, group_var):
        result = run(make_var, [1, 2, 3, 4], [1, 1, 2, 2], grouping_var=group_var)
        assert [g.label for g in result.groups] == ['Control', 'Low dose']

    def test_labels_fall_back_to_value(self, make_var):
        result = run(make_var, [1, 2, 3, 4], [1, 1, 2, 2])
        assert [g.label for g in result.groups] == ['1', '2']

    def test_other_values_ignored(self, make_var):
        result = run(make_var, [1, 2, 3, 4, 5], [1, 3, 2, 2, 1])
        assert [g.rows for g in result.groups] == [(0, 4), (2, 3)]

    def test_string_group_values(self, make_var):
        result = run(
            make_var, [1, 2, 3, 4], ['m', 'f', 'm', 'f'], {'group1': 'm', 'group2': 'f'},
        )
        assert [g.n for g in result.groups] == [2, 2]

    def test_numeric_text_matches_code(self, make_var):
        result = run(make_var, [1, 2, 3, 4], ['1', '1', '2.0', 2])
        assert [g.n for g in result.groups] == [2, 2]

    def test_cut_point(self, make_var):
        result = run(
            make_var, [10, 20, 30, 40, 50], [1, 2, 3, 4, 'x'],
            {'defineGroups': {'cutPoint': True}, 'cutPointValue': 2.5},
        )
        g1, g2 = result.groups
        assert g1.rows == (2, 3)
        assert g2.rows == (0, 1)
        assert (g1.label, g2.label) == ('>= 2.5', '< 2.5')

    def test_specified_values_win_over_cut_point(self, make_var):
        result = run(
            make_var, [1, 2, 3, 4], [1, 1, 2, 2],
            {'defineGroups': {'cutPoint': True, 'useSpecifiedValues': True}, 'cutPointValue': 9},
        )
        assert [g.n for g in result.groups] == [2, 2]

    def test_no_definition(self, make_var):
        with pytest.raises(ValidationError, match='defineGroups'):
            run(make_var, [1, 2], [1, 2], {'defineGroups': {'cutPoint': False}})

    def test_grouping_required(self, make_var):
        with pytest.raises(ValidationError, match='variable2'):
            independent_samples_ttest(make_var('score'), [1, 2], None, [1, 2])


class TestInsufficientData:

    def test_empty_group(self, make_var):
        result = run(make_var, [1, 2, 3], [1, 1, 1], {'group2': 7})
        out = result.output()
        assert out['metadata']['insufficientType'] == ['empty']
        assert out['independentSamplesTest']['equalVariances']['t'] is None
        assert out['independentSamplesTest']['unequalVariances']['t'] is None
        assert out['independentSamplesTest']['levene']['F'] is None

    def test_both_constant(self, make_var):
        out = run(make_var, [3, 3, 5, 5], [1, 1, 2, 2]).output()
        assert out['metadata']['insufficientType'] == ['stdDev']
        assert out['independentSamplesTest']['equalVariances']['t'] is None

    def test_one_constant_group_is_fine(self, make_var):
        result = run(make_var, [3, 3, 4, 6], [1, 1, 2, 2])
        assert result.insufficient_types == []
        assert result.equal_variances.t is not None

    def test_single_observation_group(self, make_var):
        result = run(make_var, [1, 2, 3, 10], [1, 1, 1, 2])
        assert result.equal_variances.df == 2
        assert result.equal_variances.t is not None
        assert result.unequal_variances.t is None


class TestEffectSizes:

    def test_cohens_d_and_glass_delta(self, make_var, two_samples):
        x1, x2, data, grouping = two_samples
        result = run(make_var, data, grouping, {'estimateEffectSize': True})
        cohen, glass = result.effect_sizes
        n1, n2 = len(x1), len(x2)
        sp = np.sqrt(((n1 - 1) * x1.var(ddof=1) + (n2 - 1) * x2.var(ddof=1)) / (n1 + n2 - 2))
        diff = x1.mean() - x2.mean()
        assert cohen.standardizer_value == pytest.approx(sp)
        assert cohen.point_estimate == pytest.approx(diff / sp)
        assert glass.standardizer_value == pytest.approx(x2.std(ddof=1))
        assert glass.point_estimate == pytest.approx(diff / x2.std(ddof=1))

    def test_output(self, make_var, two_samples):
        _, _, data, grouping = two_samples
        out = run(make_var, data, grouping, {'estimateEffectSize': True}).output()
        assert set(out['independentSamplesEffectSize']) == {'cohensD', 'glassDelta'}


class TestOutput:

    def test_keys(self, make_var, two_samples):
        _, _, data, grouping = two_samples
        out = run(make_var, data, grouping).output()
        assert set(out) == {'variable1', 'groupStatistics', 'independentSamplesTest', 'metadata'}
        assert set(out['groupStatistics']) == {'variable2', 'group1', 'group2'}
        assert set(out['independentSamplesTest']) == {
            'levene', 'equalVariances', 'unequalVariances',
        }
        assert set(out['independentSamplesTest']['equalVariances']) == {
            't', 'df', 'sig', 'meanDifference', 'stdErrorDifference', 'confidenceInterval',
        }
        json.dumps(out)

    def test_memoised(self, make_var, two_samples):
        _, _, data, grouping = two_samples
        result = run(make_var, data, grouping)
        assert result.groups is result.groups
        assert result.output() is result.output()
