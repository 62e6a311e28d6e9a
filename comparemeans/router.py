"""
Task router: one inbound request, one response.

Public API:
    AnalysisRequest.from_message(message) -> AnalysisRequest
    CalculatorRegistry: analysis-type identifier -> calculator factory
    default_registry() -> CalculatorRegistry
    TaskRouter(registry, logger).handle(message) -> dict
    handle_message(message, registry=None, logger=None) -> dict

Response shapes:
    {"status": "success", "variableName": ..., "results": {...}}
    {"status": "error", "variableName": ..., "error": "<message>"}

Every analysis type is resolved before anything is computed, so an unknown
identifier aborts the request without partial results. The router is the
only place exceptions become error responses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from comparemeans.anova import one_way_anova
from comparemeans.core.exceptions import CompareMeansError, InvalidAnalysisType, ValidationError
from comparemeans.core.log import get_logger, wrap_logger
from comparemeans.core.protocols import Calculator
from comparemeans.core.validation import check_mapping, check_required
from comparemeans.ttest import (
    independent_samples_ttest,
    one_sample_effect_size,
    one_sample_ttest,
    paired_samples_ttest,
)

ONE_SAMPLE = 'oneSampleTTest'
INDEPENDENT_SAMPLES = 'independentSamplesTTest'
PAIRED_SAMPLES = 'pairedSamplesTTest'
ONE_WAY_ANOVA = 'oneWayAnova'
EFFECT_SIZE = 'effectSize'

UNKNOWN_VARIABLE = 'unknown'


# =====================================================================
# Request
# =====================================================================


@dataclass(frozen=True)
class AnalysisRequest:
    """
    A parsed inbound message.

    Variables stay in wire form here; each calculator's design validates
    the parts it uses.
    """
    analysis_types: tuple[str, ...]
    variable1: Mapping[str, Any]
    data1: Any
    variable2: Mapping[str, Any] | None = None
    data2: Any = None
    options: Mapping[str, Any] = field(default_factory=dict)
    pair: Any = None

    @staticmethod
    def from_message(message: Any) -> AnalysisRequest:
        """
        Validate the message envelope.

        analysisType may be a single identifier or a non-empty list of them.

        Raises:
            ValidationError: On a missing or malformed field
        """
        message = check_mapping(message, 'request')

        types = check_required(message, 'analysisType', 'request')
        if isinstance(types, str):
            types = [types]
        if not isinstance(types, (list, tuple)) or not types:
            raise ValidationError("request.analysisType: expected a non-empty list of identifiers")
        for t in types:
            if not isinstance(t, str) or not t:
                raise ValidationError(f"request.analysisType: invalid identifier {t!r}")

        variable2 = message.get('variable2')
        if variable2 is not None:
            variable2 = check_mapping(variable2, 'variable2')

        return AnalysisRequest(
            analysis_types=tuple(types),
            variable1=check_mapping(check_required(message, 'variable1', 'request'), 'variable1'),
            data1=check_required(message, 'data1', 'request'),
            variable2=variable2,
            data2=message.get('data2'),
            options=check_mapping(message.get('options') or {}, 'options'),
            pair=message.get('pair'),
        )

    @property
    def variable_name(self) -> str:
        """variable1's name, or 'name1-name2' for a paired test."""
        return _variable_name(self.analysis_types, self.variable1, self.variable2)


def _variable_name(
    analysis_types: Any,
    variable1: Any,
    variable2: Any,
) -> str:
    name1 = variable1.get('name') if isinstance(variable1, Mapping) else None
    if name1 is None:
        return UNKNOWN_VARIABLE
    types = [analysis_types] if isinstance(analysis_types, str) else analysis_types
    if isinstance(types, (list, tuple)) and PAIRED_SAMPLES in types \
            and isinstance(variable2, Mapping) and variable2.get('name') is not None:
        return f"{name1}-{variable2['name']}"
    return str(name1)


# =====================================================================
# Registry
# =====================================================================


CalculatorFactory = Callable[[AnalysisRequest], Calculator]


class CalculatorRegistry:
    """
    Explicit mapping from analysis-type identifier to calculator factory.

    Built once at start-up and handed to the router.
    """

    def __init__(self, factories: Mapping[str, CalculatorFactory] | None = None):
        self._factories: dict[str, CalculatorFactory] = dict(factories or {})

    def register(self, analysis_type: str, factory: CalculatorFactory) -> None:
        """Register (or replace) the factory for analysis_type."""
        if not callable(factory):
            raise ValidationError(f"factory for {analysis_type!r} is not callable")
        self._factories[analysis_type] = factory

    def get(self, analysis_type: str) -> CalculatorFactory:
        """
        Raises:
            InvalidAnalysisType: If no factory is registered
        """
        try:
            return self._factories[analysis_type]
        except KeyError:
            raise InvalidAnalysisType(analysis_type, self.names()) from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._factories)

    def __contains__(self, analysis_type: object) -> bool:
        return analysis_type in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def default_registry() -> CalculatorRegistry:
    """Registry of the five built-in analysis types."""
    return CalculatorRegistry({
        ONE_SAMPLE: lambda req: one_sample_ttest(req.variable1, req.data1, req.options),
        INDEPENDENT_SAMPLES: lambda req: independent_samples_ttest(
            req.variable1, req.data1, req.variable2, req.data2, req.options,
        ),
        PAIRED_SAMPLES: lambda req: paired_samples_ttest(
            req.variable1, req.data1, req.variable2, req.data2, req.options, req.pair,
        ),
        ONE_WAY_ANOVA: lambda req: one_way_anova(
            req.variable1, req.data1, req.variable2, req.data2, req.options,
        ),
        EFFECT_SIZE: lambda req: one_sample_effect_size(req.variable1, req.data1, req.options),
    })


# =====================================================================
# Router
# =====================================================================


def merge_outputs(outputs: list[dict[str, Any]]) -> dict[str, Any]:
    """
    Merge calculator outputs into one results dict.

    Later outputs win on key clashes, except metadata, which is merged
    key by key with insufficientType lists concatenated without duplicates.
    """
    results: dict[str, Any] = {}
    for output in outputs:
        for key, value in output.items():
            if key == 'metadata' and isinstance(results.get('metadata'), dict):
                results['metadata'] = _merge_metadata(results['metadata'], value)
            elif key == 'metadata':
                results['metadata'] = dict(value)
            else:
                results[key] = value
    return results


def _merge_metadata(current: dict[str, Any], new: Mapping[str, Any]) -> dict[str, Any]:
    merged = {**current, **new}
    tags = list(current.get('insufficientType') or [])
    for tag in new.get('insufficientType') or ():
        if tag not in tags:
            tags.append(tag)
    merged['insufficientType'] = tags
    merged['hasInsufficientData'] = bool(tags)
    return merged


class TaskRouter:
    """
    Turns one request message into one response message.

    Holds nothing but its registry and logger, so a single router can
    serve any number of requests.
    The logger may be a stdlib logger or a structlog logger; events carry
    variable_name and analysis_type as key-value context.
    """

    def __init__(
        self,
        registry: CalculatorRegistry | None = None,
        logger: Any = None,
    ):
        self.registry = registry if registry is not None else default_registry()
        self.logger = wrap_logger(logger) if logger is not None else get_logger(__name__)

    def handle(self, message: Any) -> dict[str, Any]:
        """
        Run every requested analysis and merge the results.

        Never raises: any failure becomes an error response.
        """
        variable_name = UNKNOWN_VARIABLE
        if isinstance(message, Mapping):
            variable_name = _variable_name(
                message.get('analysisType'), message.get('variable1'), message.get('variable2'),
            )

        log = self.logger.bind(variable_name=variable_name)
        try:
            request = AnalysisRequest.from_message(message)
            log.debug("request received", analysis_types=list(request.analysis_types))
            factories = [(t, self.registry.get(t)) for t in request.analysis_types]

            outputs = []
            for analysis_type, factory in factories:
                log.debug("running calculator", analysis_type=analysis_type)
                outputs.append(factory(request).output())
            results = merge_outputs(outputs)
        except CompareMeansError as e:
            log.warning("request rejected", error=str(e), error_type=type(e).__name__)
            return _error(variable_name, e)
        except Exception as e:
            log.exception("request failed", error_type=type(e).__name__)
            return _error(variable_name, e)

        metadata = results.get('metadata') or {}
        if metadata.get('hasInsufficientData'):
            log.info("insufficient data", insufficient_type=metadata.get('insufficientType'))
        return {'status': 'success', 'variableName': variable_name, 'results': results}

    __call__ = handle


def _error(variable_name: str, exc: BaseException) -> dict[str, Any]:
    return {'status': 'error', 'variableName': variable_name, 'error': str(exc) or type(exc).__name__}


def handle_message(
    message: Any,
    registry: CalculatorRegistry | None = None,
    logger: Any = None,
) -> dict[str, Any]:
    """Handle one message with a fresh router (default registry unless given)."""
    return TaskRouter(registry, logger).handle(message)
