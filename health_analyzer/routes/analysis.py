"""
Image Analysis API Routes
One POST handler per analysis domain
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from health_analyzer.db import get_db
from health_analyzer.domains import get_domain
from health_analyzer.services.analysis_service import HealthAnalysisService
from health_analyzer.utils.responses import error_response
from health_analyzer.utils.vision_analyzer import VisionAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter()

# Initialize analyzer lazily (singleton pattern)
analyzer = None


def get_vision_analyzer() -> VisionAnalyzer:
    """Get or create the vision analyzer instance"""
    global analyzer
    if analyzer is None:
        analyzer = VisionAnalyzer()
    return analyzer


async def run_analysis(domain_name: str, request: Request, vision: VisionAnalyzer, db: Session) -> JSONResponse:
    domain = get_domain(domain_name)
    try:
        raw_body = await request.body()
        try:
            payload = json.loads(raw_body or b"{}")
        except ValueError:
            return error_response("Invalid JSON body", 400)

        outcome = await HealthAnalysisService(domain, vision, db).handle(payload)
        return JSONResponse(status_code=outcome.status_code, content=outcome.body)
    except Exception as e:
        logger.error(f"Error in {domain.name} analysis: {e}", exc_info=True)
        return error_response(f"Error analyzing {domain.noun} image", 500)


@router.post("/dental-check")
async def dental_check(request: Request, vision: VisionAnalyzer = Depends(get_vision_analyzer),
                       db: Session = Depends(get_db)):
    """Analyze an oral / dental photo"""
    return await run_analysis("dental", request, vision, db)


@router.post("/skin-tracker")
async def skin_tracker(request: Request, vision: VisionAnalyzer = Depends(get_vision_analyzer),
                       db: Session = Depends(get_db)):
    """Analyze a skin condition photo"""
    return await run_analysis("skin", request, vision, db)


@router.post("/posture-check")
async def posture_check(request: Request, vision: VisionAnalyzer = Depends(get_vision_analyzer),
                        db: Session = Depends(get_db)):
    """Analyze a posture photo"""
    return await run_analysis("posture", request, vision, db)


@router.post("/nutri-snap")
async def nutri_snap(request: Request, vision: VisionAnalyzer = Depends(get_vision_analyzer),
                     db: Session = Depends(get_db)):
    """Analyze a meal photo"""
    return await run_analysis("nutrition", request, vision, db)


@router.post("/poop-health")
async def poop_health(request: Request, vision: VisionAnalyzer = Depends(get_vision_analyzer),
                      db: Session = Depends(get_db)):
    """Analyze a stool sample photo"""
    return await run_analysis("stool", request, vision, db)
