"""
t-tests for comparing means.

Public API:
    one_sample_ttest(variable1, data1, options) -> OneSampleTTest
    one_sample_effect_size(variable1, data1, options) -> OneSampleEffectSize
    independent_samples_ttest(variable1, data1, variable2, data2, options)
        -> IndependentSamplesTTest
    paired_samples_ttest(variable1, data1, variable2, data2, options, pair)
        -> PairedSamplesTTest
"""

from comparemeans.ttest._common import (
    IndependentSamplesOptions,
    OneSampleOptions,
    PairedSamplesOptions,
    EffectSizeParams,
    TTestParams,
)
from comparemeans.ttest.solution import (
    IndependentSamplesTTest,
    OneSampleEffectSize,
    OneSampleTTest,
    PairedSamplesTTest,
)
from comparemeans.ttest.solvers import (
    independent_samples_ttest,
    one_sample_effect_size,
    one_sample_ttest,
    paired_samples_ttest,
)

__all__ = [
    "IndependentSamplesOptions",
    "OneSampleOptions",
    "PairedSamplesOptions",
    "EffectSizeParams",
    "TTestParams",
    "IndependentSamplesTTest",
    "OneSampleEffectSize",
    "OneSampleTTest",
    "PairedSamplesTTest",
    "independent_samples_ttest",
    "one_sample_effect_size",
    "one_sample_ttest",
    "paired_samples_ttest",
]
