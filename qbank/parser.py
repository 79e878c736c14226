from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel

from qbank.errors import TypeMismatchError
from qbank.options import ParsedOptions
from qbank.options_block import OptionsBlockUtils
from qbank.parsing_utils import match_non_empty_strings, split_with_double_lines
from qbank.pipeline import DiagnosticLog, Pipeline
from qbank.question import IdFactory, Question
from qbank.question_parsing import (
    merge_broken_questions,
    parse_question,
    remove_invalid_questions,
)

logger = logging.getLogger(__name__)


class ParseResult(BaseModel):
    questions: List[Question]
    options: ParsedOptions
    log: List[str]


class QuestionParser:
    """
    Plain text question bank -> validated questions, options and a log.

    Holds no per-run state; one instance can serve any number of calls.
    """

    def __init__(self, id_factory: Optional[IdFactory] = None) -> None:
        self._id_factory = id_factory
        self._options_utils = OptionsBlockUtils()

    def parse(self, text: str) -> ParseResult:
        if not isinstance(text, str):
            raise TypeMismatchError(f"Expected text input, got {type(text).__name__}")

        options = ParsedOptions()
        pipeline = (
            Pipeline(text, DiagnosticLog())
            .apply(split_with_double_lines)
            .filter(match_non_empty_strings)
            .apply(self._options_utils.load_options(options))
            .map(lambda block, log: parse_question(block, log, self._id_factory))
            .apply(merge_broken_questions)
            .apply(remove_invalid_questions)
            .apply(self._options_utils.assign_question_extras(options))
        )

        questions = pipeline.get()
        log = pipeline.get_log()
        logger.info("parsed %d questions (%d diagnostics)", len(questions), len(log))
        return ParseResult(questions=questions, options=options, log=log)


_default_parser = QuestionParser()


def parse(text: str) -> ParseResult:
    return _default_parser.parse(text)
