# Backend/evaluator/models/evaluation.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ..db.base import Base


class Evaluation(Base):
    __tablename__ = "evaluations"
    # One evaluation per candidate per scenario; duplicates surface as IntegrityError.
    __table_args__ = (
        UniqueConstraint("candidate_id", "prompt_type", name="uq_evaluation_candidate_prompt"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    candidate_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), index=True, nullable=False
    )
    prompt_type: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)

    # JSON-encoded mapping of rubric category key -> score
    rubric_scores: Mapped[str] = mapped_column(Text, default="{}", nullable=False)

    total_score: Mapped[float] = mapped_column(Float, nullable=False)
    evaluator_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    candidate: Mapped["Candidate"] = relationship(back_populates="evaluations")
