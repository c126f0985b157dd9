"""
Request and response schemas for the analysis API
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """Caller location used for provider lookup"""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class HealthAnalysisRequest(BaseModel):
    """Body accepted by every analysis handler"""
    model_config = ConfigDict(populate_by_name=True)

    image: Optional[str] = Field(None, description="Base64 encoded image, data URL prefix allowed")
    user_id: Optional[str] = Field(None, alias="userId", description="Caller id; results are stored when set")
    location: Optional[Location] = None
    find_providers: bool = Field(False, alias="findProviders")
    metadata: Optional[Dict[str, Any]] = None


class HealthcareProviderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    specialty: str
    location: Optional[str] = None
    contact: Optional[str] = None
    website: Optional[str] = None
    distance: Optional[float] = None


class StoredAnalysis(BaseModel):
    """A persisted analysis with its domain-specific record"""
    id: str
    user_id: Optional[str]
    analysis_type: str
    raw_analysis: str
    concerns: List[str]
    recommendations: List[str]
    created_at: datetime
    details: Dict[str, Any] = Field(default_factory=dict)
