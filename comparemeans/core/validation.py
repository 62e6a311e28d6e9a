"""
Input validation utilities for comparemeans.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - Raw cell values are never coerced here (that is the validity
      filter's job); only the containers and option values are checked
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Mapping, Sequence
import math
from typing import Any

import numpy as np

from comparemeans.core.exceptions import ValidationError, DimensionError


def check_mapping(value: Any, name: str) -> Mapping[str, Any]:
    """
    Verify value is a mapping (a decoded JSON object).

    Args:
        value: Input to validate
        name: Parameter name for error messages

    Returns:
        The mapping, unchanged

    Raises:
        ValidationError: If value is not a mapping
    """
    if not isinstance(value, Mapping):
        raise ValidationError(
            f"{name}: expected an object, got {type(value).__name__}"
        )
    return value


def check_column(column: Any, name: str) -> tuple[Any, ...]:
    """
    Validate a data column and return it as a tuple of raw cells.

    A column is any flat sequence (list, tuple, 1D numpy array). Strings
    are rejected because they are sequences of characters, not of cells.

    Args:
        column: Input to validate
        name: Parameter name for error messages

    Returns:
        tuple of the raw cell values in row order

    Raises:
        ValidationError: If column is missing or not a sequence
        DimensionError: If column is a multi-dimensional array
    """
    if column is None:
        raise ValidationError(f"{name}: required data column is missing")

    if isinstance(column, np.ndarray):
        if column.ndim != 1:
            raise DimensionError(
                f"{name}: expected 1D column, got {column.ndim}D with shape {column.shape}"
            )
        return tuple(column.tolist())

    if isinstance(column, (str, bytes)) or not isinstance(column, Sequence):
        raise ValidationError(
            f"{name}: expected a sequence of cell values, got {type(column).__name__}"
        )
    return tuple(column)


def check_bool(value: Any, name: str) -> bool:
    """
    Verify an option flag is a boolean.

    Raises:
        ValidationError: If value is not a bool
    """
    if not isinstance(value, (bool, np.bool_)):
        raise ValidationError(
            f"{name}: expected true/false, got {value!r}"
        )
    return bool(value)


def check_number(value: Any, name: str) -> float:
    """
    Verify an option value is a finite number (numeric strings accepted).

    Raises:
        ValidationError: If value cannot be read as a finite number
    """
    if isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{name}: expected a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a number, got {value!r}") from e
    if not math.isfinite(result):
        raise ValidationError(f"{name}: expected a finite number, got {value!r}")
    return result


def check_conf_level(value: Any, name: str) -> float:
    """
    Validate a confidence level.

    Accepts a proportion in (0, 1) or a percentage in (1, 100), which is
    converted to a proportion.

    Raises:
        ValidationError: If the level is outside both ranges
    """
    level = check_number(value, name)
    if 1.0 < level < 100.0:
        level /= 100.0
    if not 0.0 < level < 1.0:
        raise ValidationError(
            f"{name}: must be in (0, 1) or a percentage in (1, 100), got {value!r}"
        )
    return level


def check_required(mapping: Mapping[str, Any], key: str, name: str) -> Any:
    """
    Fetch a required key from a mapping.

    Raises:
        ValidationError: If the key is absent or None
    """
    value = mapping.get(key)
    if value is None:
        raise ValidationError(f"{name}: required field {key!r} is missing")
    return value
