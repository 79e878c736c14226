# routers/banks.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from db import SessionLocal
from deps.auth import require_admin, require_client
from models import ParsedBank
from routers.parse import parser
from schemas.banks import ParsedBankOut
from schemas.parse import StoreBankRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/banks", tags=["banks"])


@router.post("", response_model=ParsedBankOut)
def store_bank(req: StoreBankRequest):
    result = parser.parse(req.text)
    dumped = result.model_dump(mode="json", by_alias=True)

    with SessionLocal() as db:
        bank = ParsedBank(
            name=req.name,
            source_chars=len(req.text),
            question_count=len(result.questions),
            questions=dumped["questions"],
            options=dumped["options"],
            log=dumped["log"],
        )
        db.add(bank)
        db.commit()
        db.refresh(bank)
        logger.info("stored bank %s with %d questions", bank.id, bank.question_count)
        return ParsedBankOut.model_validate(bank)


@router.get("/recent-list", dependencies=[Depends(require_client)])
def banks_recent(limit: int = 20):
    limit = max(1, min(limit, 100))

    with SessionLocal() as db:
        items = db.query(ParsedBank).order_by(ParsedBank.created_at.desc()).limit(limit).all()

    # list view: skip the potentially large JSON columns
    rows = [
        ParsedBankOut.model_validate(b).model_dump(
            mode="json", exclude={"questions", "options", "log"}
        )
        for b in items
    ]
    return {"ok": True, "items": rows, "count": len(rows)}


@router.get("/{bank_id}", response_model=ParsedBankOut)
def get_bank(bank_id: int):
    # Public endpoint: no token required
    with SessionLocal() as db:
        b = db.get(ParsedBank, bank_id)
        if not b:
            raise HTTPException(status_code=404, detail="Bank not found")
        return ParsedBankOut.model_validate(b)


@router.delete("/{bank_id}", dependencies=[Depends(require_admin)])
def delete_bank(bank_id: int):
    with SessionLocal() as db:
        b = db.get(ParsedBank, bank_id)
        if not b:
            raise HTTPException(status_code=404, detail="Bank not found")
        db.delete(b)
        db.commit()
    return {"ok": True, "id": bank_id}
