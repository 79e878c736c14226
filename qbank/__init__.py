"""Parser for plain text multiple-choice question banks."""

from qbank.errors import DuplicateMemberError, InvalidSequenceError, QbankError, TypeMismatchError
from qbank.options import ParsedOptions
from qbank.parser import ParseResult, QuestionParser, parse
from qbank.question import Answer, Question

__all__ = [
    "Answer",
    "DuplicateMemberError",
    "InvalidSequenceError",
    "ParseResult",
    "ParsedOptions",
    "QbankError",
    "Question",
    "QuestionParser",
    "TypeMismatchError",
    "parse",
]
