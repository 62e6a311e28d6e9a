"""
User-facing t-test calculators.

Each calculator wraps an immutable design plus a ResultCache. Statistics are
computed on first access and the same objects are returned afterwards;
output() assembles the wire-form result once per instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from comparemeans.anova._common import LeveneParams
from comparemeans.anova._levene import levene_test_impl
from comparemeans.core.groups import Group
from comparemeans.core.log import get_logger
from comparemeans.core.result import ResultCache
from comparemeans.core.variables import as_number, format_value, values_equal
from comparemeans.descriptive import describe
from comparemeans.ttest._common import (
    CorrelationParams,
    EffectSizeParams,
    SampleStats,
    TTestParams,
)
from comparemeans.ttest._independent import independent_effect_sizes, pooled_test, welch_test
from comparemeans.ttest._one_sample import one_sample_effect_size, one_sample_test
from comparemeans.ttest._paired import paired_effect_size, paired_test, pearson
from comparemeans.ttest.design import (
    IndependentSamplesDesign,
    OneSampleDesign,
    PairedSamplesDesign,
)

logger = get_logger(__name__)


def _sample_stats(label: str, values: np.ndarray) -> SampleStats:
    d = describe(values)
    return SampleStats(label=label, n=d.n, mean=d.mean, std_dev=d.std_dev, se=d.std_error)


def _metadata(tags: list[str], **extra: Any) -> dict[str, Any]:
    return {'hasInsufficientData': bool(tags), 'insufficientType': list(tags), **extra}


def _sample_tags(n: int, sd: float | None) -> list[str]:
    if n == 0:
        return ['empty']
    if n == 1:
        return ['single']
    if sd == 0:
        return ['stdDev']
    return []


def _test_dict(test: TTestParams) -> dict[str, Any]:
    return {
        't': test.t,
        'df': test.df,
        'sig': test.p_value,
        'meanDifference': test.mean_diff,
        'stdErrorDifference': test.se,
        'confidenceInterval': {'lower': test.ci_lower, 'upper': test.ci_upper},
    }


# =====================================================================
# One-sample
# =====================================================================


@dataclass
class OneSampleTTest:
    """
    One-sample t-test against options.testValue.

    Produced by one_sample_ttest().
    """
    design: OneSampleDesign
    _cache: ResultCache = field(default_factory=ResultCache, repr=False)

    @property
    def statistics(self) -> SampleStats:
        return self._cache.get_or_compute(
            'statistics',
            lambda: _sample_stats(self.design.variable.display_name, self.design.values),
        )

    @property
    def test(self) -> TTestParams:
        opts = self.design.options
        return self._cache.get_or_compute(
            'test',
            lambda: one_sample_test(self.design.values, opts.test_value, opts.conf_level),
        )

    @property
    def effect_size(self) -> EffectSizeParams:
        return self._cache.get_or_compute(
            'effect_size',
            lambda: one_sample_effect_size(self.design.values, self.design.options.test_value),
        )

    @property
    def insufficient_types(self) -> list[str]:
        stats = self.statistics
        return _sample_tags(stats.n, stats.std_dev)

    def output(self) -> dict[str, Any]:
        return self._cache.get_or_compute('output', self._build_output)

    def _build_output(self) -> dict[str, Any]:
        variable = self.design.variable
        stats = self.statistics
        test = self.test
        result: dict[str, Any] = {
            'variable1': variable.to_dict(),
            'oneSampleStatistics': {
                'N': stats.n,
                'Mean': stats.mean,
                'StdDeviation': stats.std_dev,
                'StdErrorMean': stats.se,
            },
            'oneSampleTest': {
                'T': test.t,
                'df': test.df,
                'PValue': test.p_value,
                'MeanDifference': test.mean_diff,
                'Lower': test.ci_lower,
                'Upper': test.ci_upper,
            },
        }
        if self.design.options.estimate_effect_size:
            result['oneSampleEffectSize'] = self.effect_size.to_dict()

        tags = self.insufficient_types
        if tags:
            logger.info(
                "insufficient data",
                analysis_type='oneSampleTTest',
                variable_name=variable.name,
                tags=list(tags),
            )
        result['metadata'] = _metadata(
            tags, variableName=variable.name, variableLabel=variable.label,
        )
        return result

    def summary(self) -> str:
        stats = self.statistics
        test = self.test
        lines = [
            "One Sample t-test",
            "",
            f"data:  {self.design.variable.display_name}",
        ]
        if test.t is None:
            lines.append(f"n = {stats.n}, mean = {stats.mean}; t is undefined")
        else:
            level = self.design.options.conf_level
            lines.append(f"t = {test.t:.4f}, df = {test.df}, p-value = {test.p_value:.4g}")
            lines.append(f"true mean is not equal to {self.design.options.test_value:g}")
            lines.append(f"{level * 100:g} percent confidence interval of the difference:")
            lines.append(f" {test.ci_lower:.6f} {test.ci_upper:.6f}")
            lines.append(f"mean of x: {stats.mean:.6f}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"OneSampleTTest(variable={self.design.variable.name!r}, n={self.statistics.n})"


@dataclass
class OneSampleEffectSize:
    """
    Cohen's d of variable1 against options.testValue, without the test.

    Served for the 'effectSize' analysis type.
    """
    design: OneSampleDesign
    _cache: ResultCache = field(default_factory=ResultCache, repr=False)

    @property
    def effect_size(self) -> EffectSizeParams:
        return self._cache.get_or_compute(
            'effect_size',
            lambda: one_sample_effect_size(self.design.values, self.design.options.test_value),
        )

    def output(self) -> dict[str, Any]:
        def build():
            variable = self.design.variable
            values = self.design.values
            return {
                'oneSampleEffectSize': self.effect_size.to_dict(),
                'metadata': _metadata(
                    _sample_tags(values.size, describe(values).std_dev),
                    variableName=variable.name,
                    variableLabel=variable.label,
                ),
            }
        return self._cache.get_or_compute('output', build)


# =====================================================================
# Independent samples
# =====================================================================


@dataclass
class IndependentSamplesTTest:
    """
    Levene's test plus pooled and Welch t-tests for two groups.

    Both variance assumptions are always reported; the caller picks one
    from the Levene significance. Produced by independent_samples_ttest().
    """
    design: IndependentSamplesDesign
    _cache: ResultCache = field(default_factory=ResultCache, repr=False)

    @property
    def groups(self) -> tuple[Group, Group]:
        return self._cache.get_or_compute('groups', self._split)

    def _split(self) -> tuple[Group, Group]:
        d = self.design
        opts = d.options
        rows1: list[int] = []
        rows2: list[int] = []
        for row in d.rows:
            cell = d.grouping_data[row]
            if opts.use_cut_point:
                number = as_number(cell)
                if number is None:
                    continue
                (rows1 if number >= opts.cut_point else rows2).append(row)
            elif values_equal(cell, opts.group1):
                rows1.append(row)
            elif values_equal(cell, opts.group2):
                rows2.append(row)

        if opts.use_cut_point:
            cut = format_value(opts.cut_point)
            labels = (f">= {cut}", f"< {cut}")
            keys = (opts.cut_point, opts.cut_point)
        else:
            labels = tuple(
                d.grouping.value_label(value) or format_value(value)
                for value in (opts.group1, opts.group2)
            )
            keys = (opts.group1, opts.group2)

        return tuple(
            Group(
                key=key,
                label=label,
                values=np.array([d.value_at(r) for r in rows], dtype=np.float64),
                rows=tuple(rows),
            )
            for key, label, rows in zip(keys, labels, (rows1, rows2))
        )

    @property
    def group_statistics(self) -> tuple[SampleStats, SampleStats]:
        return self._cache.get_or_compute(
            'group_statistics',
            lambda: tuple(_sample_stats(g.label, g.values) for g in self.groups),
        )

    @property
    def levene(self) -> LeveneParams:
        return self._cache.get_or_compute(
            'levene',
            lambda: levene_test_impl([g.values for g in self.groups], center='mean'),
        )

    @property
    def equal_variances(self) -> TTestParams:
        g1, g2 = self.groups
        return self._cache.get_or_compute('pooled', lambda: pooled_test(g1.values, g2.values))

    @property
    def unequal_variances(self) -> TTestParams:
        g1, g2 = self.groups
        return self._cache.get_or_compute('welch', lambda: welch_test(g1.values, g2.values))

    @property
    def effect_sizes(self) -> tuple[EffectSizeParams, EffectSizeParams]:
        g1, g2 = self.groups
        return self._cache.get_or_compute(
            'effect_sizes', lambda: independent_effect_sizes(g1.values, g2.values),
        )

    @property
    def insufficient_types(self) -> list[str]:
        s1, s2 = self.group_statistics
        tags = []
        if s1.n == 0 or s2.n == 0:
            tags.append('empty')
        if s1.std_dev == 0 and s2.std_dev == 0:
            tags.append('stdDev')
        return tags

    def output(self) -> dict[str, Any]:
        return self._cache.get_or_compute('output', self._build_output)

    def _build_output(self) -> dict[str, Any]:
        d = self.design
        s1, s2 = self.group_statistics
        levene = self.levene
        result: dict[str, Any] = {
            'variable1': d.variable.to_dict(),
            'groupStatistics': {
                'variable2': d.grouping.to_dict(),
                'group1': s1.to_dict(),
                'group2': s2.to_dict(),
            },
            'independentSamplesTest': {
                'levene': {'F': levene.statistic, 'Sig': levene.p_value},
                'equalVariances': _test_dict(self.equal_variances),
                'unequalVariances': _test_dict(self.unequal_variances),
            },
        }
        if d.options.estimate_effect_size:
            cohen, glass = self.effect_sizes
            result['independentSamplesEffectSize'] = {
                'cohensD': cohen.to_dict(),
                'glassDelta': glass.to_dict(),
            }

        tags = self.insufficient_types
        if tags:
            logger.info(
                "insufficient data",
                analysis_type='independentSamplesTTest',
                variable_name=d.variable.name,
                tags=list(tags),
            )
        result['metadata'] = _metadata(
            tags, variableName=d.variable.name, variableLabel=d.variable.label,
        )
        return result

    def __repr__(self) -> str:
        g1, g2 = self.groups
        return (
            f"IndependentSamplesTTest(variable={self.design.variable.name!r}, "
            f"n1={g1.n}, n2={g2.n})"
        )


# =====================================================================
# Paired samples
# =====================================================================


@dataclass
class PairedSamplesTTest:
    """
    Paired t-test on row-wise differences, with the pair correlation.

    Produced by paired_samples_ttest().
    """
    design: PairedSamplesDesign
    _cache: ResultCache = field(default_factory=ResultCache, repr=False)

    @property
    def differences(self) -> np.ndarray:
        """values1 - values2 per pair, in row order."""
        return self._cache.get_or_compute(
            'differences', lambda: self.design.values1 - self.design.values2,
        )

    @property
    def statistics(self) -> tuple[SampleStats, SampleStats]:
        d = self.design
        return self._cache.get_or_compute(
            'statistics',
            lambda: (
                _sample_stats(d.variable1.display_name, d.values1),
                _sample_stats(d.variable2.display_name, d.values2),
            ),
        )

    @property
    def correlation(self) -> CorrelationParams:
        def compute():
            d = self.design
            r, p = pearson(d.values1, d.values2)
            return CorrelationParams(label=d.label, n=d.n, r=r, p_value=p)
        return self._cache.get_or_compute('correlation', compute)

    @property
    def test(self) -> TTestParams:
        return self._cache.get_or_compute('test', lambda: paired_test(self.differences))

    @property
    def effect_size(self) -> EffectSizeParams:
        def compute():
            d = self.design
            return paired_effect_size(
                d.values1, d.values2, self.differences,
                self.correlation.r, d.options.standardizer,
            )
        return self._cache.get_or_compute('effect_size', compute)

    @property
    def insufficient_types(self) -> list[str]:
        return _sample_tags(self.design.n, describe(self.differences).std_dev)

    def output(self) -> dict[str, Any]:
        return self._cache.get_or_compute('output', self._build_output)

    def _build_output(self) -> dict[str, Any]:
        d = self.design
        s1, s2 = self.statistics
        test = self.test
        diff_stats = describe(self.differences)
        result: dict[str, Any] = {
            'variable1': d.variable1.to_dict(),
            'variable2': d.variable2.to_dict(),
            'pairedSamplesStatistics': {'group1': s1.to_dict(), 'group2': s2.to_dict()},
            'pairedSamplesCorrelation': self.correlation.to_dict(),
            'pairedSamplesTest': {
                'label': d.label,
                'N': d.n,
                'Mean': test.mean_diff,
                'StdDev': diff_stats.std_dev,
                'SEMean': test.se,
                'LowerCI': test.ci_lower,
                'UpperCI': test.ci_upper,
                't': test.t,
                'df': test.df,
                'pValue': test.p_value,
                'differences': self.differences.tolist(),
            },
        }
        if d.options.estimate_effect_size:
            result['pairedSamplesEffectSize'] = self.effect_size.to_dict()

        tags = self.insufficient_types
        if tags:
            logger.info(
                "insufficient data",
                analysis_type='pairedSamplesTTest',
                variable_name=d.label,
                tags=list(tags),
            )
        result['metadata'] = _metadata(
            tags,
            pair=d.pair,
            variable1Label=d.variable1.label,
            variable1Name=d.variable1.name,
            variable2Label=d.variable2.label,
            variable2Name=d.variable2.name,
        )
        return result

    def __repr__(self) -> str:
        return f"PairedSamplesTTest(pair={self.design.label!r}, n={self.design.n})"
