from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ParsedBankOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    name: Optional[str] = None
    source_chars: int
    question_count: int
    # omitted in list views
    questions: list[Any] | None = None
    options: dict | None = None
    log: list[str] | None = None
