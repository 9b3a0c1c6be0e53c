"""Analysis history endpoints.

Routes:
  POST   /history        save an analysis result
  GET    /history        list saved analyses, newest first
  GET    /history/{id}   fetch one saved analysis
  DELETE /history/{id}   delete one saved analysis
  DELETE /history        delete every saved analysis
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.history import service
from app.history.schemas import (
    HistoryClearResponse,
    HistoryCreateRequest,
    HistoryListResponse,
    HistoryRecordResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


@router.post(
    "",
    response_model=HistoryRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_analysis(
    body: HistoryCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> HistoryRecordResponse:
    """Save an analysis result to history."""
    record = await service.save_record(
        db,
        project_name=body.project_name,
        performance_score=body.performance_score,
        results=body.results,
    )
    return HistoryRecordResponse.model_validate(record)


@router.get("", response_model=HistoryListResponse)
async def list_history(db: AsyncSession = Depends(get_db)) -> HistoryListResponse:
    """List all saved analyses, newest first."""
    records = await service.list_records(db)
    return HistoryListResponse(
        records=[HistoryRecordResponse.model_validate(r) for r in records],
        count=len(records),
    )


@router.get("/{record_id}", response_model=HistoryRecordResponse)
async def get_history_record(
    record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> HistoryRecordResponse:
    record = await service.get_record(db, record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Analysis not found",
        )
    return HistoryRecordResponse.model_validate(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_history_record(
    record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    if not await service.delete_record(db, record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Analysis not found",
        )


@router.delete("", response_model=HistoryClearResponse)
async def clear_history(db: AsyncSession = Depends(get_db)) -> HistoryClearResponse:
    """Delete every saved analysis."""
    deleted = await service.clear_records(db)
    logger.info("Cleared %d history record(s)", deleted)
    return HistoryClearResponse(deleted=deleted)
