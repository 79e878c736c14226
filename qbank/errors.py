"""Exceptions raised by the question bank parser.

Only programming-contract violations are raised. Problems with the input
text itself never escape ``parse``; they end up in the diagnostic log.
"""

from __future__ import annotations


class QbankError(Exception):
    """Base class for parser contract violations."""


class InvalidSequenceError(QbankError):
    """Raised when a QuestionBuilder operation is called out of order."""


class TypeMismatchError(QbankError, TypeError):
    """Raised when a stage receives a value of the wrong shape."""


class DuplicateMemberError(QbankError):
    """Raised when two option mappers produce the same output field."""
