# schemas/parse.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

import config
from qbank.options import ParsedOptions
from qbank.question import Question


class ParseRequest(BaseModel):
    text: str = Field(max_length=config.MAX_INPUT_CHARS)


class ParseResponse(BaseModel):
    questions: List[Question]
    options: ParsedOptions
    log: List[str]


class StoreBankRequest(ParseRequest):
    name: Optional[str] = Field(default=None, max_length=120)
