"""SQLAlchemy 2.0 declarative models.

Uses dialect-agnostic types (Uuid, JSON) so models work with both
SQLite (default and tests) and PostgreSQL.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Integer, Text, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class AnalysisRecord(Base):
    """A saved analysis in the user's history.

    `results` holds the JSON payload as returned by the analyze endpoints:
    {analysis?, recommendations: {summary, recommendations}, bundleAnalysis?}.
    """

    __tablename__ = "analysis_records"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    project_name: Mapped[str] = mapped_column(Text, nullable=False)
    performance_score: Mapped[int] = mapped_column(Integer, nullable=False)
    results: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(
        default=_utcnow, server_default=func.now(), nullable=False, index=True
    )
