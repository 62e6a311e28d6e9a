"""
Common types for the t-test calculators.

Option dataclasses parse the wire-form option mappings; the frozen Params
payloads carry computed statistics. Every field that can be undefined is
typed `float | None` and holds None, never 0 or NaN, when not applicable.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from comparemeans.core.exceptions import ValidationError
from comparemeans.core.validation import (
    check_bool,
    check_conf_level,
    check_mapping,
    check_number,
)
from comparemeans.descriptive import DEFAULT_CONF_LEVEL

STANDARD_DEVIATION = 'standardDeviation'
CORRECTED_STANDARD_DEVIATION = 'correctedStandardDeviation'
AVERAGE_OF_VARIANCES = 'averageOfVariances'
STANDARDIZERS = (STANDARD_DEVIATION, CORRECTED_STANDARD_DEVIATION, AVERAGE_OF_VARIANCES)


# =====================================================================
# Options
# =====================================================================


@dataclass(frozen=True)
class OneSampleOptions:
    """{"testValue": 0, "confidenceLevel": 0.95, "estimateEffectSize": false}"""
    test_value: float = 0.0
    conf_level: float = DEFAULT_CONF_LEVEL
    estimate_effect_size: bool = False

    @staticmethod
    def from_dict(raw: Mapping[str, Any] | None) -> OneSampleOptions:
        raw = check_mapping(raw or {}, 'options')
        test_value = raw.get('testValue')
        conf_level = raw.get('confidenceLevel')
        return OneSampleOptions(
            test_value=0.0 if test_value is None else check_number(test_value, 'options.testValue'),
            conf_level=(
                DEFAULT_CONF_LEVEL if conf_level is None
                else check_conf_level(conf_level, 'options.confidenceLevel')
            ),
            estimate_effect_size=check_bool(
                raw.get('estimateEffectSize', False), 'options.estimateEffectSize'
            ),
        )


@dataclass(frozen=True)
class IndependentSamplesOptions:
    """
    How to split the grouping variable into two groups.

    Wire form::

        {"defineGroups": {"useSpecifiedValues": true} | {"cutPoint": true},
         "group1": 0, "group2": 0, "cutPointValue": 0,
         "estimateEffectSize": false}
    """
    use_cut_point: bool = False
    group1: Any = 0
    group2: Any = 0
    cut_point: float = 0.0
    estimate_effect_size: bool = False

    @staticmethod
    def from_dict(raw: Mapping[str, Any] | None) -> IndependentSamplesOptions:
        raw = check_mapping(raw or {}, 'options')
        define = check_mapping(
            raw.get('defineGroups') or {'useSpecifiedValues': True}, 'options.defineGroups'
        )
        use_specified = bool(define.get('useSpecifiedValues', False))
        use_cut_point = bool(define.get('cutPoint', False))
        if not use_specified and not use_cut_point:
            raise ValidationError(
                "options.defineGroups: expected useSpecifiedValues or cutPoint to be set"
            )

        cut_point = raw.get('cutPointValue')
        return IndependentSamplesOptions(
            use_cut_point=use_cut_point and not use_specified,
            group1=0 if raw.get('group1') is None else raw['group1'],
            group2=0 if raw.get('group2') is None else raw['group2'],
            cut_point=0.0 if cut_point is None else check_number(cut_point, 'options.cutPointValue'),
            estimate_effect_size=check_bool(
                raw.get('estimateEffectSize', False), 'options.estimateEffectSize'
            ),
        )


@dataclass(frozen=True)
class PairedSamplesOptions:
    """
    {"calculateStandardizer": {"standardDeviation": true}, "estimateEffectSize": false}

    The first standardizer flag set, in STANDARDIZERS order, wins; with no
    flag set the standard deviation of the differences is used.
    """
    standardizer: str = STANDARD_DEVIATION
    estimate_effect_size: bool = False

    @staticmethod
    def from_dict(raw: Mapping[str, Any] | None) -> PairedSamplesOptions:
        raw = check_mapping(raw or {}, 'options')
        flags = check_mapping(
            raw.get('calculateStandardizer') or {STANDARD_DEVIATION: True},
            'options.calculateStandardizer',
        )
        chosen = [name for name in STANDARDIZERS if flags.get(name)] or [STANDARD_DEVIATION]
        return PairedSamplesOptions(
            standardizer=chosen[0],
            estimate_effect_size=check_bool(
                raw.get('estimateEffectSize', False), 'options.estimateEffectSize'
            ),
        )


# =====================================================================
# Params
# =====================================================================


@dataclass(frozen=True)
class SampleStats:
    """N, mean, sd and standard error of one sample."""
    label: str
    n: int
    mean: float | None
    std_dev: float | None
    se: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            'label': self.label,
            'N': self.n,
            'Mean': self.mean,
            'StdDev': self.std_dev,
            'SEMean': self.se,
        }


@dataclass(frozen=True)
class TTestParams:
    """A t statistic with its df, two-tailed p and interval for the mean (difference)."""
    t: float | None
    df: float | None
    p_value: float | None
    mean_diff: float | None
    se: float | None
    ci_lower: float | None
    ci_upper: float | None


@dataclass(frozen=True)
class CorrelationParams:
    """Pearson correlation of paired values with its t-based significance."""
    label: str
    n: int
    r: float | None
    p_value: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            'correlationLabel': self.label,
            'N': self.n,
            'Correlation': self.r,
            'correlationPValue': self.p_value,
        }


@dataclass(frozen=True)
class EffectSizeParams:
    """A standardised mean difference: estimate = difference / standardizer."""
    standardizer: str
    standardizer_value: float | None
    point_estimate: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            'standardizer': self.standardizer,
            'standardizerValue': self.standardizer_value,
            'pointEstimate': self.point_estimate,
        }
