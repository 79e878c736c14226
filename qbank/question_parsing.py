from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence

from qbank.builder import QuestionBuilder, merge_questions
from qbank.errors import InvalidSequenceError
from qbank.parsing_utils import match_answer, match_identifier, split_with_newlines
from qbank.pipeline import LogFn
from qbank.question import IdFactory, Question

logger = logging.getLogger(__name__)


def _noop(_message: str) -> None:
    return None


def _block_excerpt(block: str, limit: int = 40) -> str:
    first = block.strip().splitlines()[0] if block.strip() else ""
    return first[:limit] + "..." if len(first) > limit else first


def parse_question(
    block: str, log: LogFn = _noop, id_factory: Optional[IdFactory] = None
) -> Question:
    """
    Turn one blank-line separated block into a Question.

    Lines before the first answer line form the body. After that, answer
    lines open new answers and any other line continues the open answer.
    The result may be invalid; validation happens later.
    """
    lines = split_with_newlines(block)
    builder = QuestionBuilder(id_factory=id_factory)

    try:
        identifier = match_identifier(lines[0]) if lines else None
        if identifier:
            lines = lines[1:]
            if identifier.content.strip():
                builder.append_to_body(identifier.content)
            builder.set_identifier(identifier.identifier)

        parsing_answers = False
        for line in lines:
            answer = match_answer(line)
            if answer:
                parsing_answers = True
                builder.add_answer(answer.content, answer.correct, answer.letter)
            elif parsing_answers:
                builder.append_answer_line(line)
            else:
                builder.append_to_body(line)
    except InvalidSequenceError as e:
        log(f"Error parsing question '{_block_excerpt(block)}': {e}")
    except Exception as e:
        logger.debug("question scan failed", exc_info=True)
        log(f"Error parsing question '{_block_excerpt(block)}': {type(e).__name__}")

    return builder.build()


def _merge_flags(questions: Sequence[Question]) -> List[bool]:
    # a question with an empty body belongs to the one before it
    merge_with_previous = [not q.has_body() for q in questions]
    merge_with_next = merge_with_previous[1:]
    for index in range(len(merge_with_next)):
        if not questions[index].answers:
            merge_with_next[index] = True
    # nothing precedes the first question, so a body-less one joins the next
    if merge_with_next and merge_with_previous[0]:
        merge_with_next[0] = True
    if questions:
        merge_with_next.append(False)
    return merge_with_next


def merge_broken_questions(questions: Sequence[Question], log: LogFn = _noop) -> List[Question]:
    """Re-join questions that blank lines split apart."""
    pending: Deque[Question] = deque(questions)
    flags: Deque[bool] = deque(_merge_flags(questions))
    result: List[Question] = []

    while pending:
        processed = pending.popleft()
        should_merge_next = flags.popleft()
        merged_count = 1
        while should_merge_next and pending:
            processed = merge_questions(processed, pending.popleft())
            should_merge_next = flags.popleft()
            merged_count += 1

        if merged_count > 1:
            processed = processed.with_merge_count(merged_count)
            log(
                f"Merged {merged_count} questions: '{processed.excerpt()}' "
                f"({len(processed.answers)} answers total)"
            )
        result.append(processed)

    return result


def _invalid_reason(question: Question) -> Optional[str]:
    if not question.has_body():
        return f"Skipped question because it has no body ({len(question.answers)} answers)"
    if len(question.answers) < 2:
        msg = f"Skipped question because it has less than 2 answers: '{question.excerpt()}'"
    elif not question.total_correct():
        msg = f"Skipped question because it has no correct answers: '{question.excerpt()}'"
    else:
        return None
    if question.merged:
        msg += f" (merged from {question.merged} questions)"
    return msg


def remove_invalid_questions(questions: Sequence[Question], log: LogFn = _noop) -> List[Question]:
    valid: List[Question] = []
    for question in questions:
        reason = _invalid_reason(question)
        if reason:
            log(reason)
        else:
            valid.append(question)
    return valid
