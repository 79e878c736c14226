from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from deps.auth import require_admin
from qbank.quiz import QuizBank, to_quiz_bank
from samples import get_sample, get_samples, reload_samples
from schemas.samples import SampleSummary

router = APIRouter(prefix="/samples", tags=["samples"])


@router.get("", response_model=List[SampleSummary])
def list_samples():
    return [
        SampleSummary(name=name, question_count=len(r.questions), diagnostics=len(r.log))
        for name, r in get_samples().items()
    ]


@router.post("/reload", dependencies=[Depends(require_admin)])
def reload():
    n = reload_samples()
    return {"ok": True, "count": n}


@router.get("/{name}", response_model=QuizBank)
def get_sample_detail(name: str):
    result = get_sample(name)
    if result is None:
        raise HTTPException(status_code=404, detail="sample not found")
    return to_quiz_bank(result)
