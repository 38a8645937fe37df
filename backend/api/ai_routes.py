# api/ai_routes.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_ai_client, get_factor_table, get_sync, http_error
from core.exceptions import AppError
from core.interfaces import TextGenerator
from core.state import AppStateSync
from models.ai import (
    AnalysisResponse,
    AssistantRequest,
    AssistantResponse,
    RecommendationsRequest,
    RecommendationsResponse,
)
from services.ai.insights import assistant_reply, get_recommendations, run_analysis
from services.emissions.factors import EmissionFactorTable

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/analysis", response_model=AnalysisResponse)
async def analysis(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    sync: AppStateSync = Depends(get_sync),
    client: TextGenerator = Depends(get_ai_client),
    table: EmissionFactorTable = Depends(get_factor_table),
):
    try:
        records = sync.records(start, end)
    except AppError as e:
        raise http_error(e)

    sync.begin("analysis")
    try:
        result = await run_analysis(client, records, table.factors)
    except AppError as e:
        sync.set_error(str(e))
        raise http_error(e)

    sync.set_analysis(result)
    return AnalysisResponse(record_count=len(records), analysis=result)


@router.post("/recommendations", response_model=RecommendationsResponse)
async def recommendations(
    req: Optional[RecommendationsRequest] = None,
    sync: AppStateSync = Depends(get_sync),
    client: TextGenerator = Depends(get_ai_client),
):
    analysis = (req.analysis if req else None) or sync.state.analysis
    if analysis is None:
        raise HTTPException(400, "Analysis results are required to generate recommendations.")

    sync.begin("recommendations")
    try:
        result = await get_recommendations(client, analysis)
    except AppError as e:
        sync.set_error(str(e))
        raise http_error(e)

    sync.set_recommendations(result)
    return RecommendationsResponse(recommendations=result.recommendations)


@router.post("/assistant", response_model=AssistantResponse)
async def assistant(
    req: AssistantRequest,
    sync: AppStateSync = Depends(get_sync),
    client: TextGenerator = Depends(get_ai_client),
    table: EmissionFactorTable = Depends(get_factor_table),
):
    try:
        reply = await assistant_reply(client, req.history, sync.records(), table.factors)
    except AppError as e:
        raise http_error(e)
    return AssistantResponse(reply=reply)
