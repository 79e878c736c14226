# routers/parse.py
from __future__ import annotations

import logging

from fastapi import APIRouter

from qbank import QuestionParser
from qbank.quiz import QuizBank, to_quiz_bank
from schemas.parse import ParseRequest, ParseResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

# stateless, safe to share between requests
parser = QuestionParser()


@router.post("/parse", response_model=ParseResponse)
def parse_bank(req: ParseRequest):
    result = parser.parse(req.text)
    return ParseResponse(questions=result.questions, options=result.options, log=result.log)


@router.post("/parse/quiz", response_model=QuizBank)
def parse_bank_as_quiz(req: ParseRequest):
    return to_quiz_bank(parser.parse(req.text))
