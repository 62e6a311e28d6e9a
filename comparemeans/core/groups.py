"""
Groups of valid observations.

A Group is built per calculator call from jointly-valid rows and is never
persisted. Its key is the grouping value it was formed from; its label is
what tables display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from comparemeans.core.variables import as_number


@dataclass(frozen=True)
class Group:
    """
    Valid observations sharing one grouping value.

    Attributes:
        key: Grouping value (float for numeric codes, str otherwise)
        label: Display name
        values: Observations in row order
        rows: Originating row index of each observation
    """
    key: Any
    label: str
    values: NDArray[np.floating]
    rows: tuple[int, ...]

    @property
    def n(self) -> int:
        return len(self.rows)


def group_key(value: Any) -> float | str:
    """Normalise a grouping cell: numeric codes to float, anything else to str."""
    number = as_number(value)
    return number if number is not None else str(value)


def group_sort_key(key: float | str) -> tuple[int, float | str]:
    """Numeric keys ascending, then string keys ascending."""
    if isinstance(key, float):
        return (0, key)
    return (1, key)
