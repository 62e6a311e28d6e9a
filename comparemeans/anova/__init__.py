"""
One-way Analysis of Variance.

Public API:
    one_way_anova(variable1, data1, variable2, data2, options) -> OneWayAnova
    levene_test_impl(groups, center=..., adjusted_df=...) -> LeveneParams
    tukey_hsd(groups, mse, df_error) -> tuple[PostHocComparison, ...]
    homogeneous_subsets(groups, mse, df_error, method=...) -> HomogeneousSubsetTable
"""

from comparemeans.anova._common import (
    DUNCAN,
    TUKEY,
    AnovaEffectSize,
    AnovaTable,
    AnovaTableRow,
    HomogeneousSubsetTable,
    LeveneParams,
    PostHocComparison,
)
from comparemeans.anova._levene import levene_test_impl, levene_variants
from comparemeans.anova._posthoc import tukey_hsd
from comparemeans.anova._subsets import homogeneous_subsets
from comparemeans.anova.design import OneWayAnovaDesign, OneWayAnovaOptions
from comparemeans.anova.solution import OneWayAnova
from comparemeans.anova.solvers import one_way_anova

__all__ = [
    "DUNCAN",
    "TUKEY",
    "AnovaEffectSize",
    "AnovaTable",
    "AnovaTableRow",
    "HomogeneousSubsetTable",
    "LeveneParams",
    "PostHocComparison",
    "levene_test_impl",
    "levene_variants",
    "tukey_hsd",
    "homogeneous_subsets",
    "OneWayAnovaDesign",
    "OneWayAnovaOptions",
    "OneWayAnova",
    "one_way_anova",
]
