"""
t-test entry points.

Public API:
    one_sample_ttest(variable1, data1, options) -> OneSampleTTest
    one_sample_effect_size(variable1, data1, options) -> OneSampleEffectSize
    independent_samples_ttest(variable1, data1, variable2, data2, options)
        -> IndependentSamplesTTest
    paired_samples_ttest(variable1, data1, variable2, data2, options, pair)
        -> PairedSamplesTTest

Variables may be VariableDescriptor objects or their wire mappings; data
columns are raw cell sequences. Nothing is computed until a statistic or
output() is read.
"""

from collections.abc import Mapping
from typing import Any

from comparemeans.ttest.design import (
    IndependentSamplesDesign,
    OneSampleDesign,
    PairedSamplesDesign,
)
from comparemeans.ttest.solution import (
    IndependentSamplesTTest,
    OneSampleEffectSize,
    OneSampleTTest,
    PairedSamplesTTest,
)


def one_sample_ttest(
    variable1: Any,
    data1: Any,
    options: Mapping[str, Any] | None = None,
) -> OneSampleTTest:
    """
    One-sample t-test of variable1 against options['testValue'].

    Examples:
        >>> result = one_sample_ttest({'name': 'x', 'measure': 'scale'}, [1, 2, 3])
        >>> result.test.t
        >>> result.output()['oneSampleTest']['PValue']
    """
    return OneSampleTTest(OneSampleDesign.from_inputs(variable1, data1, options))


def one_sample_effect_size(
    variable1: Any,
    data1: Any,
    options: Mapping[str, Any] | None = None,
) -> OneSampleEffectSize:
    """Cohen's d of variable1 against options['testValue']."""
    return OneSampleEffectSize(OneSampleDesign.from_inputs(variable1, data1, options))


def independent_samples_ttest(
    variable1: Any,
    data1: Any,
    variable2: Any,
    data2: Any,
    options: Mapping[str, Any] | None = None,
) -> IndependentSamplesTTest:
    """
    Compare variable1 between two groups defined by variable2.

    Groups come from options['group1'] / options['group2'] or, with
    defineGroups.cutPoint, from grouping value >= / < cutPointValue.
    """
    design = IndependentSamplesDesign.from_inputs(variable1, data1, variable2, data2, options)
    return IndependentSamplesTTest(design)


def paired_samples_ttest(
    variable1: Any,
    data1: Any,
    variable2: Any,
    data2: Any,
    options: Mapping[str, Any] | None = None,
    pair: Any = None,
) -> PairedSamplesTTest:
    """Paired t-test of variable1 - variable2, pairing cells by row index."""
    design = PairedSamplesDesign.from_inputs(variable1, data1, variable2, data2, options, pair)
    return PairedSamplesTTest(design)
