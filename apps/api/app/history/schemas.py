"""Pydantic schemas for the analysis history endpoints.

Responses use the camelCase keys of the web client's history records:
{id, date, performanceScore, results, projectName}.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_PROJECT_NAME = "Unnamed Project"


class HistoryCreateRequest(BaseModel):
    """Payload for saving an analysis to history."""

    model_config = {"populate_by_name": True}

    project_name: str = Field(default=DEFAULT_PROJECT_NAME, alias="projectName")
    performance_score: int = Field(alias="performanceScore", ge=0, le=100)
    results: dict[str, Any]


class HistoryRecordResponse(BaseModel):
    """One saved analysis."""

    model_config = {"from_attributes": True, "populate_by_name": True}

    id: uuid.UUID
    date: datetime = Field(validation_alias="created_at")
    performance_score: int = Field(serialization_alias="performanceScore")
    results: dict[str, Any]
    project_name: str = Field(serialization_alias="projectName")


class HistoryListResponse(BaseModel):
    """Saved analyses, newest first."""

    records: list[HistoryRecordResponse]
    count: int


class HistoryClearResponse(BaseModel):
    deleted: int
