"""
Storage of analysis results
A base row goes into health_analyses, then one row into the domain table
keyed by the same id. If the second insert fails the base row is removed.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from health_analyzer.domains import AnalysisDomain, DOMAINS
from health_analyzer.models.db_models import HealthAnalysis
from health_analyzer.utils.errors import PersistenceFailure

logger = logging.getLogger(__name__)


def store_analysis_results(
    db: Session,
    domain: AnalysisDomain,
    raw_analysis: str,
    concerns: List[str],
    recommendations: List[str],
    record: Dict[str, Any],
    user_id: Optional[str] = None,
) -> str:
    """
    Persist one analysis and return its generated id

    Raises:
        PersistenceFailure: when either insert fails
    """
    analysis_id = str(uuid.uuid4())

    try:
        db.add(HealthAnalysis(
            id=analysis_id,
            user_id=user_id,
            analysis_type=domain.name,
            raw_analysis=raw_analysis or "",
            concerns=list(concerns or []),
            recommendations=list(recommendations or []),
            created_at=datetime.now(timezone.utc),
        ))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error storing base analysis: {e}", extra={"operation": "store_base", "domain": domain.name})
        raise PersistenceFailure(f"Could not store {domain.name} analysis") from e

    try:
        db.add(domain.record_model(id=analysis_id, **record))
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error storing specific analysis: {e}", extra={"operation": "store_specific", "domain": domain.name})
        _delete_base_row(db, analysis_id)
        raise PersistenceFailure(f"Could not store {domain.name} analysis details") from e

    logger.info(f"Stored {domain.name} analysis {analysis_id}")
    return analysis_id


def _delete_base_row(db: Session, analysis_id: str) -> None:
    try:
        db.query(HealthAnalysis).filter(HealthAnalysis.id == analysis_id).delete()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to remove orphaned analysis {analysis_id}: {e}")


def _record_columns(record) -> Dict[str, Any]:
    return {
        column.name: getattr(record, column.name)
        for column in record.__table__.columns
        if column.name != "id"
    }


def serialize_analysis(analysis: HealthAnalysis) -> Dict[str, Any]:
    domain = DOMAINS.get(analysis.analysis_type)
    record = getattr(analysis, domain.relationship) if domain else None
    return {
        "id": analysis.id,
        "user_id": analysis.user_id,
        "analysis_type": analysis.analysis_type,
        "raw_analysis": analysis.raw_analysis,
        "concerns": analysis.concerns or [],
        "recommendations": analysis.recommendations or [],
        "created_at": analysis.created_at,
        "details": _record_columns(record) if record is not None else {},
    }


def get_analysis(db: Session, analysis_id: str) -> Optional[Dict[str, Any]]:
    analysis = db.get(HealthAnalysis, analysis_id)
    return serialize_analysis(analysis) if analysis else None


def list_analyses(db: Session, user_id: str, analysis_type: Optional[str] = None,
                  limit: int = 50) -> List[Dict[str, Any]]:
    query = db.query(HealthAnalysis).filter(HealthAnalysis.user_id == user_id)
    if analysis_type:
        query = query.filter(HealthAnalysis.analysis_type == analysis_type)
    rows = query.order_by(HealthAnalysis.created_at.desc()).limit(limit).all()
    return [serialize_analysis(row) for row in rows]
