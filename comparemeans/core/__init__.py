"""
Core infrastructure for comparemeans.

Shared abstractions used by every calculator subpackage.

Key components:
    variables: VariableDescriptor, MissingSpec, ValueLabel
    missing: validity filter (system- and user-missing cells)
    result: ResultCache (per-calculator memo)
    distributions: None-aware wrappers over scipy.stats
    exceptions: Exception hierarchy
    validation: Request and option validators
    protocols: Calculator protocol
"""

from comparemeans.core.protocols import Calculator
from comparemeans.core.result import ResultCache
from comparemeans.core.variables import MissingSpec, ValueLabel, VariableDescriptor
from comparemeans.core.missing import ValidObservation
from comparemeans.core.exceptions import (
    CompareMeansError,
    ValidationError,
    DimensionError,
    InvalidAnalysisType,
    NumericalError,
)

__all__ = [
    # Protocols
    "Calculator",
    # Result
    "ResultCache",
    # Data model
    "MissingSpec",
    "ValueLabel",
    "VariableDescriptor",
    "ValidObservation",
    # Exceptions
    "CompareMeansError",
    "ValidationError",
    "DimensionError",
    "InvalidAnalysisType",
    "NumericalError",
]
