"""
Syntax check for custom grading expressions.

A grader such as ``correct / total`` is run through the same sympy parser
transformations used for marking maths answers, and the generated Python
source is parsed into an AST which is then discarded. The expression is
never evaluated.
"""

from __future__ import annotations

import ast
import logging

from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    standard_transformations,
    stringify_expr,
)

logger = logging.getLogger(__name__)

TRANSFORMS = standard_transformations + (
    convert_xor,
    implicit_multiplication_application,
)

MAX_GRADER_LEN = 500


def is_valid_grader_expression(expr: str) -> bool:
    if not isinstance(expr, str) or not expr.strip():
        return False
    if len(expr) > MAX_GRADER_LEN:
        return False
    try:
        source = stringify_expr(expr.strip(), {}, {}, TRANSFORMS)
        ast.parse(source, mode="eval")
    except Exception as e:
        logger.debug("grader expression rejected: %s: %s", type(e).__name__, e)
        return False
    return True
