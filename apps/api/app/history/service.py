"""Persistence helpers for analysis history.

All functions take the request-scoped session from `get_db`; committing is
left to the dependency except where the caller needs generated values
(id, created_at) back immediately.
"""

import logging
import uuid
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import AnalysisRecord

logger = logging.getLogger(__name__)


async def save_record(
    db: AsyncSession,
    project_name: str,
    performance_score: int,
    results: dict[str, Any],
) -> AnalysisRecord:
    record = AnalysisRecord(
        project_name=project_name,
        performance_score=performance_score,
        results=results,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    logger.info("Saved analysis %s for project %r", record.id, project_name)
    return record


async def list_records(db: AsyncSession) -> list[AnalysisRecord]:
    """Return every saved analysis, newest first."""
    result = await db.execute(
        select(AnalysisRecord).order_by(AnalysisRecord.created_at.desc())
    )
    return list(result.scalars().all())


async def get_record(db: AsyncSession, record_id: uuid.UUID) -> Optional[AnalysisRecord]:
    return await db.get(AnalysisRecord, record_id)


async def delete_record(db: AsyncSession, record_id: uuid.UUID) -> bool:
    """Delete one record. Returns False when it did not exist."""
    record = await db.get(AnalysisRecord, record_id)
    if record is None:
        return False
    await db.delete(record)
    await db.commit()
    return True


async def clear_records(db: AsyncSession) -> int:
    """Delete all records. Returns how many were removed."""
    result = await db.execute(delete(AnalysisRecord))
    await db.commit()
    return result.rowcount or 0
