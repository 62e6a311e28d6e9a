"""
Core protocols for comparemeans.

We use Protocol (structural typing) rather than ABC (nominal typing), so
any object with the right shape can be registered with the task router.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Calculator(Protocol):
    """
    Protocol for one analysis over one request.

    A calculator is built per request from an immutable design, computes
    lazily, memoises what it computes, and is discarded after the
    response is sent.
    """

    def output(self) -> dict[str, Any]:
        """
        Assemble the wire-form result fields for this analysis.

        Degenerate data never raises here; it is reported under
        output()['metadata']['insufficientType'].

        Returns:
            dict of result fields, merged by the router into 'results'
        """
        ...
