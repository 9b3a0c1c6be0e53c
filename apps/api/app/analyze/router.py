"""Analyze endpoints.

Routes:
  POST /analyze          run code (+ optional bundle) analysis, return JSON
  POST /analyze/stream   same pipeline, progress streamed as Server-Sent Events
  POST /analyze/bundle   package.json analysis only

Rate limiting: all three routes are throttled via SlowAPI, per client IP.
The limit is configurable in settings (default: 30/minute).

SSE wire format: every message is a single `data: {json}\\n\\n` frame with
a `type` of "progress" ({message}), "complete" ({result}) or "error"
({error}). The first frame is always the "Connection established" progress
message.
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from perfpilot.bundle import analyze_bundle

from app.analyze.schemas import AnalyzeRequest, BundleRequest
from app.analyze.service import (
    AnalyzeInputError,
    collect_sources,
    iter_analysis,
    llm_config_from_settings,
    run_analysis,
)
from app.core.config import Settings, get_settings
from app.core.limiter import limiter
from app.db.session import get_db
from app.history.service import save_record

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/analyze", tags=["analyze"])

CONNECTION_ESTABLISHED = "Connection established"

SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _sse(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


@router.post("")
@limiter.limit(settings.analyze_rate_limit)
async def analyze(
    request: Request,
    body: AnalyzeRequest,
    db: AsyncSession = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
) -> dict:
    """Analyse pasted code or uploaded files.

    When `projectName` is supplied the result is also saved to history and
    the new record's id is returned as `historyId`.
    """
    try:
        outcome = await run_analysis(body, llm_config_from_settings(app_settings))
    except AnalyzeInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    result = outcome.to_dict()
    if body.project_name:
        record = await save_record(
            db,
            project_name=body.project_name,
            performance_score=outcome.performance_score,
            results=outcome.results_payload(),
        )
        result["historyId"] = str(record.id)
    return result


@router.post("/stream")
@limiter.limit(settings.analyze_rate_limit)
async def analyze_stream(
    request: Request,
    body: AnalyzeRequest,
    app_settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    """Analyse code and stream progress as Server-Sent Events.

    Input errors are rejected with 400 before the stream opens. Failures
    once streaming has started are reported as a single "error" frame.
    """
    try:
        collect_sources(body)
    except AnalyzeInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    llm_config = llm_config_from_settings(app_settings)

    async def _generate():
        yield _sse({"type": "progress", "message": CONNECTION_ESTABLISHED})
        try:
            async for event in iter_analysis(body, llm_config):
                if event.type == "complete":
                    yield _sse({"type": "complete", "result": event.outcome.to_dict()})
                else:
                    yield _sse({"type": "progress", "message": event.message})
        except Exception as exc:
            logger.exception("Streaming analysis failed")
            yield _sse({"type": "error", "error": str(exc) or "Unknown error"})

    return StreamingResponse(
        _generate(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/bundle")
@limiter.limit(settings.analyze_rate_limit)
async def analyze_package_json(request: Request, body: BundleRequest) -> dict:
    """Analyse a package.json; uploaded sources are scanned for tree-shaking issues."""
    files = [(f.name, f.content) for f in body.files] or None
    return analyze_bundle(body.content, files=files).to_dict()
