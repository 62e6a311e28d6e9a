"""
Design objects for the t-test calculators.

Each design holds validated descriptors, raw columns, the rows that survive
the validity filter and the parsed options. Designs are immutable; the
solution objects derive everything else from them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from comparemeans.core.exceptions import ValidationError
from comparemeans.core.missing import (
    ValidObservation,
    paired_valid_rows,
    valid_observations,
    values_of,
)
from comparemeans.core.validation import check_column
from comparemeans.core.variables import VariableDescriptor, as_number
from comparemeans.ttest._common import (
    IndependentSamplesOptions,
    OneSampleOptions,
    PairedSamplesOptions,
)


def _descriptor(raw: Any, name: str) -> VariableDescriptor:
    if isinstance(raw, VariableDescriptor):
        return raw
    if raw is None:
        raise ValidationError(f"{name}: required variable is missing")
    return VariableDescriptor.from_dict(raw, name)


@dataclass(frozen=True)
class OneSampleDesign:
    """Validated inputs for a one-sample t-test."""
    variable: VariableDescriptor
    data: tuple[Any, ...]
    observations: tuple[ValidObservation, ...]
    options: OneSampleOptions

    @staticmethod
    def from_inputs(
        variable1: Any,
        data1: Any,
        options: Mapping[str, Any] | None = None,
    ) -> OneSampleDesign:
        variable = _descriptor(variable1, 'variable1')
        column = check_column(data1, 'data1')
        return OneSampleDesign(
            variable=variable,
            data=column,
            observations=valid_observations(column, variable),
            options=OneSampleOptions.from_dict(options),
        )

    @property
    def values(self) -> NDArray[np.floating]:
        return values_of(self.observations)


@dataclass(frozen=True)
class IndependentSamplesDesign:
    """
    Validated inputs for an independent-samples t-test.

    rows holds the row indices where the analysis value is valid and
    numeric and the grouping value is not missing.
    """
    variable: VariableDescriptor
    grouping: VariableDescriptor
    data: tuple[Any, ...]
    grouping_data: tuple[Any, ...]
    rows: tuple[int, ...]
    options: IndependentSamplesOptions

    @staticmethod
    def from_inputs(
        variable1: Any,
        data1: Any,
        variable2: Any,
        data2: Any,
        options: Mapping[str, Any] | None = None,
    ) -> IndependentSamplesDesign:
        variable = _descriptor(variable1, 'variable1')
        grouping = _descriptor(variable2, 'variable2')
        column = check_column(data1, 'data1')
        grouping_column = check_column(data2, 'data2')
        rows = paired_valid_rows(
            column, variable, grouping_column, grouping, require_numeric2=False,
        )
        return IndependentSamplesDesign(
            variable=variable,
            grouping=grouping,
            data=column,
            grouping_data=grouping_column,
            rows=tuple(rows),
            options=IndependentSamplesOptions.from_dict(options),
        )

    def value_at(self, row: int) -> float:
        return as_number(self.data[row])


@dataclass(frozen=True)
class PairedSamplesDesign:
    """
    Validated inputs for a paired-samples t-test.

    Pairs are formed by row index: rows holds the indices valid (and
    numeric) in both columns.
    """
    pair: Any
    variable1: VariableDescriptor
    variable2: VariableDescriptor
    data1: tuple[Any, ...]
    data2: tuple[Any, ...]
    rows: tuple[int, ...]
    options: PairedSamplesOptions

    @staticmethod
    def from_inputs(
        variable1: Any,
        data1: Any,
        variable2: Any,
        data2: Any,
        options: Mapping[str, Any] | None = None,
        pair: Any = None,
    ) -> PairedSamplesDesign:
        var1 = _descriptor(variable1, 'variable1')
        var2 = _descriptor(variable2, 'variable2')
        column1 = check_column(data1, 'data1')
        column2 = check_column(data2, 'data2')
        return PairedSamplesDesign(
            pair=pair,
            variable1=var1,
            variable2=var2,
            data1=column1,
            data2=column2,
            rows=tuple(paired_valid_rows(column1, var1, column2, var2)),
            options=PairedSamplesOptions.from_dict(options),
        )

    @property
    def n(self) -> int:
        return len(self.rows)

    @property
    def values1(self) -> NDArray[np.floating]:
        return np.array([as_number(self.data1[r]) for r in self.rows], dtype=np.float64)

    @property
    def values2(self) -> NDArray[np.floating]:
        return np.array([as_number(self.data2[r]) for r in self.rows], dtype=np.float64)

    @property
    def label(self) -> str:
        """'<label1> - <label2>' using labels where set, else names."""
        return f"{self.variable1.display_name} - {self.variable2.display_name}"
