"""
One-way ANOVA entry point.

Public API:
    one_way_anova(variable1, data1, variable2, data2, options) -> OneWayAnova
"""

from collections.abc import Mapping
from typing import Any

from comparemeans.anova.design import OneWayAnovaDesign
from comparemeans.anova.solution import OneWayAnova


def one_way_anova(
    variable1: Any,
    data1: Any,
    variable2: Any,
    data2: Any,
    options: Mapping[str, Any] | None = None,
) -> OneWayAnova:
    """
    One-way analysis of variance of variable1 across the levels of variable2.

    Args:
        variable1: Analysis variable (descriptor or wire mapping)
        data1: Raw cells of the analysis variable
        variable2: Factor variable (descriptor or wire mapping)
        data2: Raw cells of the factor, row-aligned with data1
        options: See OneWayAnovaOptions

    Returns:
        OneWayAnova; nothing is computed until a table or output() is read

    Examples:
        >>> result = one_way_anova(score, scores, group, codes,
        ...                        {'equalVariancesAssumed': {'tukey': True}})
        >>> result.table.between.f_value
        >>> result.output()['homogeneousSubsets']
    """
    design = OneWayAnovaDesign.from_inputs(variable1, data1, variable2, data2, options)
    return OneWayAnova(design)
