from pydantic import BaseModel


class SampleSummary(BaseModel):
    name: str
    question_count: int
    diagnostics: int
