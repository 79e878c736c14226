from __future__ import annotations

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class ParsedBank(Base):
    """One stored parse run: the resulting questions, options and diagnostics."""

    __tablename__ = "parsed_banks"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True
    )
    name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    source_chars: Mapped[int] = mapped_column(Integer)
    question_count: Mapped[int] = mapped_column(Integer)
    questions: Mapped[list] = mapped_column(JSON)
    options: Mapped[dict] = mapped_column(JSON)
    log: Mapped[list] = mapped_column(JSON)
