# Backend/evaluator/models/ranking.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import expression, func

from ..db.base import Base


class Ranking(Base):
    """
    Derived per-candidate aggregate. Rows are written only by the ranking
    service; the rank position itself is computed at query time.
    """
    __tablename__ = "rankings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    candidate_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    overall_score: Mapped[float] = mapped_column(Float, index=True, nullable=False, default=0.0)
    crisis_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    sustainability_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    team_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # --- Profile Sharing ---
    share_token: Mapped[Optional[str]] = mapped_column(String(128), unique=True, index=True, nullable=True)
    is_shared: Mapped[bool] = mapped_column(Boolean, server_default=expression.false(), default=False, nullable=False)
    last_shared_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    candidate: Mapped["Candidate"] = relationship(back_populates="ranking")
