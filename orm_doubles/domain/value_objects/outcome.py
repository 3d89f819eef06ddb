"""Outcome value object.

Represents what a completion callback is invoked with: an error value and
a result value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


class _Unset:
    """Marker type for an option that was never configured."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    """Return True if an option value was configured."""
    return value is not UNSET


@dataclass(frozen=True)
class Outcome:
    """Immutable ``(err, result)`` pair reported to a completion callback.

    Attributes:
        err: Error value passed as the first callback argument, or None
        result: Result value passed as the second callback argument

    Example:
        >>> Outcome.resolve(err="boom", result=42, default=list)
        Outcome(err='boom', result=None)
        >>> Outcome.resolve(err=None, result=42, default=list)
        Outcome(err=None, result=42)
        >>> Outcome.resolve(err=None, result=UNSET, default=list)
        Outcome(err=None, result=[])
    """

    err: Any = None
    result: Any = None

    @property
    def failed(self) -> bool:
        """Return True if the outcome carries an error."""
        return self.err is not None

    @property
    def args(self) -> tuple[Any, Any]:
        """Callback arguments for ``(err, result)`` callbacks."""
        return (self.err, self.result)

    @classmethod
    def resolve(
        cls,
        err: Any,
        result: Any,
        default: Callable[[], Any],
    ) -> Outcome:
        """Apply error precedence to a configured error and result.

        An error that is not None wins and the result becomes None. Without
        an error, a configured result (even None) is reported as is;
        otherwise ``default()`` supplies the result.

        Args:
            err: Configured error, None when absent
            result: Configured result, UNSET when absent
            default: Called to build the result when none is configured

        Returns:
            The resolved outcome
        """
        if err is not None:
            return cls(err=err, result=None)
        if is_set(result):
            return cls(err=None, result=result)
        return cls(err=None, result=default())
