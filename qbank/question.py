"""In-memory question and answer records produced by the parser."""

from __future__ import annotations

import random as _rnd
import string
from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

IdFactory = Callable[[], str]

_ID_ALPHABET = string.digits + string.ascii_lowercase


def random_question_id() -> str:
    """Pseudo-random question id such as ``Qx3k9ab``."""
    return "Q" + "".join(_rnd.choices(_ID_ALPHABET, k=6))


class Answer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    body: str
    correct: bool


class Question(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    body: str
    answers: Tuple[Answer, ...] = ()
    explanation: Optional[str] = None
    related_links: Optional[List[str]] = None
    # number of source blocks this question was merged from, if more than one
    merged: Optional[int] = None

    def total_correct(self) -> int:
        return sum(1 for a in self.answers if a.correct)

    def has_body(self) -> bool:
        return bool(self.body.strip())

    def excerpt(self, limit: int = 40) -> str:
        body = self.body.strip()
        if len(body) > limit:
            return f"{body[:limit]}..."
        if not body:
            return "[no body]"
        return body

    def with_explanation(self, text: str) -> "Question":
        return self.model_copy(update={"explanation": text})

    def with_related_links(self, links: List[str]) -> "Question":
        return self.model_copy(update={"related_links": list(links)})

    def with_merge_count(self, count: int) -> "Question":
        return self.model_copy(update={"merged": count})
