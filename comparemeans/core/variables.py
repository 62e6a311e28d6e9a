"""
Variable metadata for comparemeans.

A VariableDescriptor is the read-only description of one column: its name,
label, measurement level, missing-value declaration and value-label table.
Calculators never look at the raw wire mapping; they receive descriptors
built by VariableDescriptor.from_dict.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import math
from typing import Any

from comparemeans.core.exceptions import ValidationError
from comparemeans.core.validation import check_mapping, check_number

MEASURES = ('scale', 'ordinal', 'nominal', 'date', 'unknown')
NUMERIC_MEASURES = frozenset({'scale', 'date'})


@dataclass(frozen=True)
class MissingSpec:
    """
    User-missing declaration for a variable.

    Attributes:
        discrete: Individual values flagged as missing
        range: Inclusive (low, high) range flagged as missing, numeric
            variables only
    """
    discrete: tuple[Any, ...] = ()
    range: tuple[float, float] | None = None

    @staticmethod
    def from_dict(raw: Any, name: str = 'missing') -> MissingSpec:
        """
        Build from the wire form.

        Accepts None, {"discrete": [...]}, {"range": {"min": a, "max": b}},
        or both keys together.
        """
        if raw is None:
            return MissingSpec()
        raw = check_mapping(raw, name)

        discrete = raw.get('discrete') or ()
        if isinstance(discrete, (str, bytes)) or not hasattr(discrete, '__iter__'):
            discrete = (discrete,)

        bounds = None
        raw_range = raw.get('range')
        if raw_range is not None:
            raw_range = check_mapping(raw_range, f"{name}.range")
            low = _optional_number(raw_range.get('min'))
            high = _optional_number(raw_range.get('max'))
            if low is not None and high is not None:
                if low > high:
                    raise ValidationError(
                        f"{name}.range: min ({low}) is greater than max ({high})"
                    )
                bounds = (low, high)

        return MissingSpec(discrete=tuple(discrete), range=bounds)

    @property
    def is_empty(self) -> bool:
        return not self.discrete and self.range is None


@dataclass(frozen=True)
class ValueLabel:
    """One entry of a value-label table."""
    value: Any
    label: str


@dataclass(frozen=True)
class VariableDescriptor:
    """
    Immutable description of one variable.

    Construct via from_dict() when reading a request message.
    """
    name: str
    label: str | None = None
    measure: str = 'unknown'
    missing: MissingSpec = field(default_factory=MissingSpec)
    values: tuple[ValueLabel, ...] = ()

    @staticmethod
    def from_dict(raw: Any, name: str = 'variable') -> VariableDescriptor:
        """
        Build a descriptor from a request mapping.

        Raises:
            ValidationError: On a missing name or an unknown measure
        """
        raw = check_mapping(raw, name)

        var_name = raw.get('name')
        if var_name is None or str(var_name) == '':
            raise ValidationError(f"{name}: required field 'name' is missing")

        measure = raw.get('measure') or 'unknown'
        if measure not in MEASURES:
            raise ValidationError(
                f"{name}.measure: expected one of {MEASURES}, got {measure!r}"
            )

        labels: list[ValueLabel] = []
        for i, entry in enumerate(raw.get('values') or ()):
            entry = check_mapping(entry, f"{name}.values[{i}]")
            if 'value' not in entry:
                raise ValidationError(f"{name}.values[{i}]: missing 'value'")
            labels.append(ValueLabel(value=entry['value'], label=str(entry.get('label', ''))))

        label = raw.get('label')
        return VariableDescriptor(
            name=str(var_name),
            label=str(label) if label else None,
            measure=measure,
            missing=MissingSpec.from_dict(raw.get('missing'), f"{name}.missing"),
            values=tuple(labels),
        )

    @property
    def is_numeric_type(self) -> bool:
        """Scale and date variables are numeric-typed."""
        return self.measure in NUMERIC_MEASURES

    @property
    def display_name(self) -> str:
        """Label when set, else name."""
        return self.label or self.name

    def value_label(self, value: Any) -> str | None:
        """Label for value from the value-label table, or None."""
        for entry in self.values:
            if values_equal(entry.value, value):
                return entry.label or None
        return None

    def to_dict(self) -> dict[str, Any]:
        """Wire form echoed back in calculator output."""
        missing: dict[str, Any] | None = None
        if not self.missing.is_empty:
            missing = {'discrete': list(self.missing.discrete)}
            if self.missing.range is not None:
                missing['range'] = {'min': self.missing.range[0], 'max': self.missing.range[1]}
        return {
            'name': self.name,
            'label': self.label,
            'measure': self.measure,
            'missing': missing,
            'values': [{'value': v.value, 'label': v.label} for v in self.values],
        }


def values_equal(a: Any, b: Any) -> bool:
    """
    Compare two cell values the way grouping and missing checks do.

    Numerically when both sides read as numbers ("1", 1 and 1.0 are equal),
    otherwise as strings.
    """
    fa, fb = as_number(a), as_number(b)
    if fa is not None and fb is not None:
        return fa == fb
    return str(a) == str(b)


def format_value(value: Any) -> str:
    """Render a cell value for labels: integral floats lose their '.0'."""
    number = as_number(value)
    if number is not None and number.is_integer():
        return str(int(number))
    if number is not None:
        return repr(number)
    return str(value)


def as_number(value: Any) -> float | None:
    """Parse a cell as a finite float; None for blanks, text, bools, NaN and inf."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
    return number if math.isfinite(number) else None


def _optional_number(value: Any) -> float | None:
    if value is None or value == '':
        return None
    return check_number(value, 'range bound')
