from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar

from qbank.errors import TypeMismatchError

logger = logging.getLogger(__name__)

T = TypeVar("T")

LogFn = Callable[[str], None]


class DiagnosticLog:
    """Append-only list of human-readable messages for one parse run."""

    def __init__(self) -> None:
        self._entries: List[str] = []

    def __call__(self, message: str) -> None:
        self.append(message)

    def append(self, message: str) -> None:
        logger.debug("diagnostic: %s", message)
        self._entries.append(message)

    def entries(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def _require_sequence(data: Any) -> None:
    if not isinstance(data, (list, tuple)):
        raise TypeMismatchError(
            f"Pipeline content is not a sequence (got {type(data).__name__})"
        )


class Pipeline(Generic[T]):
    """
    A chain of value transforms sharing one diagnostic log.

    Every stage returns a new Pipeline; earlier stages keep their value.
    """

    def __init__(self, data: T, log: Optional[DiagnosticLog] = None) -> None:
        self._data = data
        self._log = log if log is not None else DiagnosticLog()

    def apply(self, fn: Callable[[T, DiagnosticLog], Any]) -> "Pipeline[Any]":
        return Pipeline(fn(self._data, self._log), self._log)

    def map(self, fn: Callable[[Any, DiagnosticLog], Any]) -> "Pipeline[List[Any]]":
        _require_sequence(self._data)
        return Pipeline([fn(item, self._log) for item in self._data], self._log)

    def filter(self, fn: Callable[[Any, DiagnosticLog], bool]) -> "Pipeline[List[Any]]":
        _require_sequence(self._data)
        return Pipeline([item for item in self._data if fn(item, self._log)], self._log)

    def get(self) -> T:
        return self._data

    def get_log(self) -> List[str]:
        return self._log.entries()
