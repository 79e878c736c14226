"""
Map a JSON object onto named output fields through per-key mappers.

A mapper is called for every key it is registered under, whether or not the
key is present in the input (absent keys are passed as ``MISSING``). It
returns one of:

    FieldValue(value)   -> stored under the mapper's own key
    FieldSet({...})     -> each field stored under its own name
    None                -> nothing stored

One misbehaving mapper is logged and skipped; a field produced twice is a
programming error and raises DuplicateMemberError.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Union

from qbank.errors import DuplicateMemberError, TypeMismatchError
from qbank.pipeline import LogFn

logger = logging.getLogger(__name__)


class _Missing:
    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class FieldValue(NamedTuple):
    value: Any


class FieldSet(NamedTuple):
    fields: Dict[str, Any]


MapperResult = Optional[Union[FieldValue, FieldSet]]
Mapper = Callable[[Any, str, LogFn], MapperResult]


class LoadResult(NamedTuple):
    values: Dict[str, Any]
    unknown: List[str]


def _noop(_message: str) -> None:
    return None


class JsonLoader:
    def __init__(self, mappers: Mapping[str, Mapper]) -> None:
        self._mappers = dict(mappers)

    @staticmethod
    def _store(output: Dict[str, Any], name: str, value: Any) -> None:
        if name in output:
            raise DuplicateMemberError(f"Member {name} already exists")
        output[name] = value

    def load(self, text: str, log: LogFn = _noop) -> LoadResult:
        def reject_constant(name: str) -> Any:
            # NaN and Infinity are not JSON
            raise json.JSONDecodeError(f"Unexpected constant {name}", text, text.find(name))

        data = json.loads(text, parse_constant=reject_constant)
        if not isinstance(data, dict):
            raise TypeMismatchError(f"Expected a JSON object, got {type(data).__name__}")

        output: Dict[str, Any] = {}
        for member, mapper in self._mappers.items():
            try:
                result = mapper(data.get(member, MISSING), member, log)
            except Exception:
                logger.debug("mapper %s failed", member, exc_info=True)
                log(f"Mapper {member} threw an exception")
                continue

            if result is None:
                continue
            if isinstance(result, FieldSet):
                for name, value in result.fields.items():
                    self._store(output, name, value)
            else:
                self._store(output, member, result.value)

        unknown = [member for member in data if member not in self._mappers]
        return LoadResult(values=output, unknown=unknown)
