"""
One-way ANOVA design object.

Wraps the validated request inputs: the analysis variable, the factor
variable, their raw columns, the jointly-valid rows and the parsed options.
Grouping happens in the solution, on first use.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from comparemeans.core.exceptions import ValidationError
from comparemeans.core.missing import paired_valid_rows
from comparemeans.core.validation import check_bool, check_column, check_mapping
from comparemeans.core.variables import VariableDescriptor


@dataclass(frozen=True)
class OneWayAnovaOptions:
    """
    Which optional tables to produce.

    Wire form::

        {"equalVariancesAssumed": {"tukey": bool, "duncan": bool},
         "statisticsOptions": {"descriptive": bool, "homogeneityOfVariance": bool},
         "estimateEffectSize": bool}

    Every flag defaults to False.
    """
    tukey: bool = False
    duncan: bool = False
    descriptive: bool = False
    homogeneity_of_variance: bool = False
    estimate_effect_size: bool = False

    @staticmethod
    def from_dict(raw: Mapping[str, Any] | None) -> OneWayAnovaOptions:
        raw = check_mapping(raw or {}, 'options')
        equal = check_mapping(raw.get('equalVariancesAssumed') or {}, 'options.equalVariancesAssumed')
        stats = check_mapping(raw.get('statisticsOptions') or {}, 'options.statisticsOptions')
        return OneWayAnovaOptions(
            tukey=check_bool(equal.get('tukey', False), 'options.equalVariancesAssumed.tukey'),
            duncan=check_bool(equal.get('duncan', False), 'options.equalVariancesAssumed.duncan'),
            descriptive=check_bool(stats.get('descriptive', False), 'options.statisticsOptions.descriptive'),
            homogeneity_of_variance=check_bool(
                stats.get('homogeneityOfVariance', False),
                'options.statisticsOptions.homogeneityOfVariance',
            ),
            estimate_effect_size=check_bool(
                raw.get('estimateEffectSize', False), 'options.estimateEffectSize'
            ),
        )


@dataclass(frozen=True)
class OneWayAnovaDesign:
    """
    Validated inputs for a one-way ANOVA.

    Created via from_inputs(), not directly.
    """
    variable: VariableDescriptor
    factor: VariableDescriptor
    data: tuple[Any, ...]
    factor_data: tuple[Any, ...]
    rows: tuple[int, ...]
    options: OneWayAnovaOptions = field(default_factory=OneWayAnovaOptions)

    @staticmethod
    def from_inputs(
        variable1: Any,
        data1: Any,
        variable2: Any,
        data2: Any,
        options: Mapping[str, Any] | None = None,
    ) -> OneWayAnovaDesign:
        """
        Create a design from wire-form inputs.

        Args:
            variable1: Analysis (dependent) variable descriptor
            data1: Raw cells of the analysis variable
            variable2: Factor variable descriptor
            data2: Raw cells of the factor, row-aligned with data1
            options: Option mapping, see OneWayAnovaOptions

        Raises:
            ValidationError: If the factor variable or its data is missing,
                or any input is malformed
        """
        if variable2 is None:
            raise ValidationError("variable2: a factor variable is required for oneWayAnova")

        variable = variable1 if isinstance(variable1, VariableDescriptor) \
            else VariableDescriptor.from_dict(variable1, 'variable1')
        factor = variable2 if isinstance(variable2, VariableDescriptor) \
            else VariableDescriptor.from_dict(variable2, 'variable2')
        column = check_column(data1, 'data1')
        factor_column = check_column(data2, 'data2')

        rows = paired_valid_rows(column, variable, factor_column, factor, require_numeric2=False)
        return OneWayAnovaDesign(
            variable=variable,
            factor=factor,
            data=column,
            factor_data=factor_column,
            rows=tuple(rows),
            options=OneWayAnovaOptions.from_dict(options),
        )

    @property
    def n(self) -> int:
        """Number of jointly-valid rows."""
        return len(self.rows)
