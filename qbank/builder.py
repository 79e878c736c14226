"""
Staged construction of a Question.

The builder is a small state machine:

    COLLECTING_BODY  --add_answer/add_answers-->  COLLECTING_ANSWERS
    (either)         --build-->                   BUILT

Body text is only accepted while collecting the body, answer continuation
lines only once an answer is open, and nothing is accepted after build().
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional

from qbank.errors import InvalidSequenceError
from qbank.question import Answer, IdFactory, Question, random_question_id

logger = logging.getLogger(__name__)

BODY_SEPARATOR = "\n\n"


class BuilderState(str, Enum):
    COLLECTING_BODY = "collecting_body"
    COLLECTING_ANSWERS = "collecting_answers"
    BUILT = "built"


class QuestionBuilder:
    def __init__(self, id_factory: Optional[IdFactory] = None) -> None:
        self._id_factory = id_factory or random_question_id
        self._state = BuilderState.COLLECTING_BODY
        self._identifier: Optional[str] = None
        self._body_lines: List[str] = []
        self._answers: List[Answer] = []
        # currently open answer
        self._answer_lines: List[str] = []
        self._answer_correct = False
        self._answer_id: Optional[str] = None
        self._question: Optional[Question] = None

    @property
    def state(self) -> BuilderState:
        return self._state

    def _ensure_not_built(self) -> None:
        if self._state is BuilderState.BUILT:
            raise InvalidSequenceError("Question already built")

    def set_identifier(self, identifier: str) -> "QuestionBuilder":
        self._ensure_not_built()
        if self._identifier is not None:
            raise InvalidSequenceError("Identifier already set")
        self._identifier = identifier
        return self

    def append_to_body(self, line: str) -> "QuestionBuilder":
        self._ensure_not_built()
        if self._state is not BuilderState.COLLECTING_BODY:
            raise InvalidSequenceError("Answers already appended")
        self._body_lines.append(line)
        return self

    def _start_answers(self) -> None:
        if self._state is BuilderState.COLLECTING_BODY:
            self._state = BuilderState.COLLECTING_ANSWERS
        else:
            self._flush_answer()

    def _push(self, body: str, correct: bool, identifier: Optional[str]) -> None:
        answer_id = identifier or f"A{len(self._answers) + 1}"
        if any(a.id == answer_id for a in self._answers):
            # tolerated: merged questions routinely repeat letters
            logger.debug("duplicate answer id %r tolerated", answer_id)
        self._answers.append(Answer(id=answer_id, body=body.strip(), correct=correct))

    def _flush_answer(self) -> None:
        if not self._answer_lines:
            return
        body = "\n".join(self._answer_lines)
        self._answer_lines = []
        self._push(body, self._answer_correct, self._answer_id)

    def add_answer(self, line: str, correct: bool, identifier: Optional[str] = None) -> "QuestionBuilder":
        self._ensure_not_built()
        self._start_answers()
        self._answer_lines = [line.strip()]
        self._answer_correct = correct
        self._answer_id = identifier
        return self

    def add_answers(self, answers: Iterable[Answer]) -> "QuestionBuilder":
        self._ensure_not_built()
        self._start_answers()
        for answer in answers:
            self._push(answer.body, answer.correct, answer.id or None)
        return self

    def append_answer_line(self, line: str) -> "QuestionBuilder":
        self._ensure_not_built()
        if not self._answer_lines:
            raise InvalidSequenceError("Answer not created yet")
        self._answer_lines.append(line.strip())
        return self

    def build(self) -> Question:
        if self._question is not None:
            return self._question
        self._flush_answer()
        self._question = Question(
            id=self._identifier or self._id_factory(),
            body=BODY_SEPARATOR.join(self._body_lines),
            answers=tuple(self._answers),
        )
        self._state = BuilderState.BUILT
        return self._question


def merge_questions(first: Question, second: Question) -> Question:
    """Join two fragments of one logical question; ``first`` keeps its id."""
    builder = QuestionBuilder().set_identifier(first.id)
    for q in (first, second):
        if q.has_body():
            builder.append_to_body(q.body)
    return builder.add_answers(first.answers).add_answers(second.answers).build()
