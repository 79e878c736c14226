"""Projection of parsed questions onto the shape a quiz player consumes."""

from __future__ import annotations

from typing import List, Optional, Set

from pydantic import BaseModel

from qbank.options import ParsedOptions
from qbank.parser import ParseResult
from qbank.question import Question

UNTITLED_PROMPT = "Untitled question"


class QuizOption(BaseModel):
    id: str
    text: str
    correct: bool
    explanation: Optional[str] = None


class QuizQuestion(BaseModel):
    id: str
    prompt: str
    options: List[QuizOption]


class QuizBank(BaseModel):
    questions: List[QuizQuestion]
    options: ParsedOptions
    log: List[str]


def to_quiz_question(question: Question) -> QuizQuestion:
    seen: Set[str] = set()
    options: List[QuizOption] = []
    for index, answer in enumerate(question.answers, start=1):
        option_id = f"{question.id}_{answer.id}"
        # merged questions may repeat answer letters
        if option_id in seen:
            option_id = f"{option_id}_{index}"
        seen.add(option_id)
        options.append(
            QuizOption(
                id=option_id,
                text=answer.body,
                correct=answer.correct,
                explanation=question.explanation,
            )
        )
    return QuizQuestion(
        id=question.id,
        prompt=question.body.strip() or UNTITLED_PROMPT,
        options=options,
    )


def to_quiz_bank(result: ParseResult) -> QuizBank:
    return QuizBank(
        questions=[to_quiz_question(q) for q in result.questions],
        options=result.options,
        log=list(result.log),
    )
