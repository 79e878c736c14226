from __future__ import annotations

import logging
import re
from typing import Any, Callable, List, Sequence, Set

from qbank.errors import TypeMismatchError
from qbank.options import OptionsBlockProcessor, ParsedOptions
from qbank.pipeline import LogFn
from qbank.question import Question

logger = logging.getLogger(__name__)

OPTIONS_BLOCK_RE = re.compile(r"<options>\s*(\{.*\})", re.IGNORECASE | re.DOTALL)

Stage = Callable[[Any, LogFn], Any]


def _require_sequence(value: Any, what: str) -> None:
    if not isinstance(value, (list, tuple)):
        raise TypeMismatchError(f"Expected a list of {what}, got {type(value).__name__}")


def _fill(target: ParsedOptions, source: ParsedOptions) -> None:
    for name in ParsedOptions.model_fields:
        setattr(target, name, getattr(source, name))


class OptionsBlockUtils:
    def __init__(self, processor: OptionsBlockProcessor | None = None) -> None:
        self._processor = processor or OptionsBlockProcessor()

    def load_options(self, target: ParsedOptions) -> Stage:
        """
        Stage that strips a trailing ``<options> {...}`` block.

        ``target`` is filled in place with the resolved options (defaults when
        there is no block) and the remaining blocks are returned.
        """
        if not isinstance(target, ParsedOptions):
            raise TypeMismatchError("Expected ParsedOptions as options target")

        def stage(blocks: Sequence[str], log: LogFn) -> List[str]:
            _require_sequence(blocks, "blocks")
            parts = list(blocks)
            if not parts:
                return parts

            matched = OPTIONS_BLOCK_RE.fullmatch(parts[-1].strip())
            if not matched:
                _fill(target, self._processor.process("{}"))
                return parts

            _fill(target, self._processor.process(matched.group(1), log))
            return parts[:-1]

        return stage

    def assign_question_extras(self, options: ParsedOptions) -> Stage:
        """Stage attaching explanations and related links by question id."""

        def stage(questions: Sequence[Question], log: LogFn) -> List[Question]:
            _require_sequence(questions, "questions")
            if not questions:
                return list(questions)

            explanations = options.explanations
            related_links = options.related_links
            matched_explanations: Set[str] = set()
            matched_links: Set[str] = set()

            result: List[Question] = []
            for question in questions:
                if question.id in explanations:
                    question = question.with_explanation(explanations[question.id])
                    matched_explanations.add(question.id)
                if question.id in related_links:
                    question = question.with_related_links(related_links[question.id])
                    matched_links.add(question.id)
                result.append(question)

            unmatched = len(explanations) - len(matched_explanations)
            if unmatched > 0:
                log(f"{unmatched} explanations couldn't be matched to questions")
            unmatched = len(related_links) - len(matched_links)
            if unmatched > 0:
                log(f"{unmatched} related links couldn't be matched to questions")

            options.explanations_available = bool(matched_explanations)
            return result

        return stage
