"""
Read-only access to stored analyses
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from health_analyzer.db import get_db
from health_analyzer.domains import DOMAINS
from health_analyzer.models.schemas import StoredAnalysis
from health_analyzer.services.persistence import get_analysis, list_analyses

router = APIRouter()


@router.get("/analyses/{analysis_id}")
async def read_analysis(analysis_id: str, db: Session = Depends(get_db)):
    """Fetch one stored analysis with its domain-specific details"""
    analysis = get_analysis(db, analysis_id)
    if analysis is None:
        raise HTTPException(status_code=404, detail=f"Analysis {analysis_id} not found")
    return {"success": True, "data": StoredAnalysis(**analysis).model_dump(mode="json")}


@router.get("/analyses")
async def read_user_analyses(
    user_id: str = Query(..., alias="userId"),
    analysis_type: Optional[str] = Query(None, alias="analysisType"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """List a user's stored analyses, newest first"""
    if analysis_type and analysis_type not in DOMAINS:
        raise HTTPException(status_code=400, detail=f"Unknown analysis type: {analysis_type}")

    analyses = list_analyses(db, user_id, analysis_type, limit)
    return {
        "success": True,
        "data": [StoredAnalysis(**row).model_dump(mode="json") for row in analyses],
    }
