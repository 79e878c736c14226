from __future__ import annotations

import re
from typing import List, NamedTuple, Optional, Sequence, Union

from qbank.pipeline import LogFn

_NEWLINES_RE = re.compile(r"(?:\r?\n)+")
_DOUBLE_NEWLINES_RE = re.compile(r"(?:\r?\n){2,}")

# optional chevrons mark a correct answer: ">> b) text"
_ANSWER_RE = re.compile(r"\s*(>+)?\s*([A-Za-z])\)\s*(.*)", re.DOTALL)
_IDENTIFIER_RE = re.compile(r"\[#([A-Za-z0-9\-+_]+)\]\s*(.*)", re.DOTALL)


class AnswerMatch(NamedTuple):
    correct: bool
    letter: str
    content: str


class IdentifierMatch(NamedTuple):
    identifier: str
    content: str


def split_with_newlines(text: str) -> List[str]:
    return _NEWLINES_RE.split(text)


def split_with_double_lines(
    text: Union[str, Sequence[str]], _log: Optional[LogFn] = None
) -> List[str]:
    """Split into blank-line separated blocks; a list is joined first."""
    source = text if isinstance(text, str) else "\n\n".join(text)
    return _DOUBLE_NEWLINES_RE.split(source)


def match_non_empty_strings(text: str, _log: Optional[LogFn] = None) -> bool:
    return len(text.strip()) > 0


def match_answer(line: str) -> Optional[AnswerMatch]:
    m = _ANSWER_RE.fullmatch(line)
    if not m:
        return None
    return AnswerMatch(correct=bool(m.group(1)), letter=m.group(2), content=m.group(3))


def match_identifier(line: str) -> Optional[IdentifierMatch]:
    m = _IDENTIFIER_RE.fullmatch(line)
    if not m:
        return None
    return IdentifierMatch(identifier=m.group(1), content=m.group(2))
