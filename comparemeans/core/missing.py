"""
Validity filtering for raw data columns.

Implements the missing-data policy shared by every calculator:
- system-missing: None / NaN cells, and blank strings in numeric variables
- user-missing: values matching the variable's declared discrete missing
  values, or (numeric variables) falling inside its declared range
- non-numeric cells are excluded wherever a calculator needs a number

Dyadic filters (grouping, pairing) keep a row only when both columns are
valid at that row index.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from comparemeans.core.variables import (
    MissingSpec,
    VariableDescriptor,
    as_number,
    values_equal,
)


@dataclass(frozen=True)
class ValidObservation:
    """A numeric value together with the row it came from."""
    value: float
    row: int


def is_numeric(value: Any) -> bool:
    """True for finite numbers and non-blank strings that parse as one."""
    return as_number(value) is not None


def check_is_missing(
    value: Any,
    missing: MissingSpec | None,
    numeric_type: bool,
) -> bool:
    """
    Whether a cell is system- or user-missing.

    Parameters
    ----------
    value : Any
        Raw cell value.
    missing : MissingSpec or None
        The variable's user-missing declaration.
    numeric_type : bool
        Whether the variable is numeric-typed (scale/date). Blank strings
        and range declarations only apply to numeric variables.

    Returns
    -------
    bool
        True when the cell must be excluded.
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if numeric_type and isinstance(value, str) and value.strip() == '':
        return True
    if missing is None:
        return False

    for declared in missing.discrete:
        if values_equal(value, declared):
            return True

    if numeric_type and missing.range is not None:
        number = as_number(value)
        if number is not None:
            low, high = missing.range
            if low <= number <= high:
                return True

    return False


def is_valid(
    value: Any,
    variable: VariableDescriptor,
    *,
    require_numeric: bool = True,
) -> bool:
    """A cell is valid when it is not missing and, if required, numeric."""
    if check_is_missing(value, variable.missing, variable.is_numeric_type):
        return False
    return not require_numeric or is_numeric(value)


def valid_observations(
    column: Sequence[Any],
    variable: VariableDescriptor,
) -> tuple[ValidObservation, ...]:
    """
    Numeric, non-missing cells of one column, tagged with their row.

    Parameters
    ----------
    column : sequence
        Raw cells in row order.
    variable : VariableDescriptor
        Descriptor supplying the missing-value declaration.

    Returns
    -------
    tuple of ValidObservation
        In row order.
    """
    return tuple(
        ValidObservation(value=as_number(cell), row=row)
        for row, cell in enumerate(column)
        if is_valid(cell, variable)
    )


def paired_valid_rows(
    column1: Sequence[Any],
    variable1: VariableDescriptor,
    column2: Sequence[Any],
    variable2: VariableDescriptor,
    *,
    require_numeric2: bool = True,
) -> list[int]:
    """
    Row indices valid in both columns.

    column1 must always be numeric; column2 only when require_numeric2
    (a grouping column may hold text codes). Rows past the end of the
    shorter column are dropped.
    """
    n = min(len(column1), len(column2))
    return [
        row for row in range(n)
        if is_valid(column1[row], variable1)
        and is_valid(column2[row], variable2, require_numeric=require_numeric2)
    ]


def values_of(observations: Sequence[ValidObservation]) -> NDArray[np.floating]:
    """The float values of a run of observations as a 1D array."""
    return np.array([obs.value for obs in observations], dtype=np.float64)
