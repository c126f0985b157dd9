"""
Request orchestration for the image analysis handlers

Validate -> analyze -> parse + extract -> assemble -> persist (optional)
-> provider lookup (optional). Only validation and the model call can fail
the request; storage and lookup failures are recorded and logged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.orm import Session

from health_analyzer.domains import AnalysisDomain
from health_analyzer.models.schemas import HealthAnalysisRequest
from health_analyzer.services.persistence import store_analysis_results
from health_analyzer.services.providers import find_nearby_providers
from health_analyzer.utils.errors import (
    HardAnalysisFailure,
    HealthAnalysisError,
    InputValidationError,
    LookupFailure,
    PersistenceFailure,
    SoftAnalysisFailure,
)
from health_analyzer.utils.responses import error_body, success_body, utc_timestamp
from health_analyzer.utils.result_parser import parse_analysis_results
from health_analyzer.utils.vision_analyzer import VisionAnalyzer, decode_image_payload

logger = logging.getLogger(__name__)


@dataclass
class SideEffectOutcome:
    """Result of a best-effort step that never fails the request"""
    attempted: bool = False
    value: Any = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.attempted and self.error is None


@dataclass
class AnalysisOutcome:
    status_code: int
    body: Dict[str, Any]
    persistence: SideEffectOutcome = field(default_factory=SideEffectOutcome)
    provider_lookup: SideEffectOutcome = field(default_factory=SideEffectOutcome)

    @property
    def success(self) -> bool:
        return bool(self.body.get("success"))


def validate_request(payload: Any) -> HealthAnalysisRequest:
    if not isinstance(payload, dict):
        raise InputValidationError("Request body must be a JSON object")

    image = payload.get("image")
    if image is None or image == "":
        raise InputValidationError("Missing required field: image")
    if not isinstance(image, str):
        raise InputValidationError("Field image must be a base64 string")

    try:
        request = HealthAnalysisRequest.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InputValidationError(f"Invalid field {location}: {first.get('msg')}") from e

    try:
        decode_image_payload(request.image)
    except ValueError as e:
        raise InputValidationError(f"Invalid image data: {e}") from e
    return request


class HealthAnalysisService:
    """Runs one analysis request for a single domain"""

    def __init__(self, domain: AnalysisDomain, analyzer: VisionAnalyzer, db: Optional[Session] = None):
        self.domain = domain
        self.analyzer = analyzer
        self.db = db

    async def handle(self, payload: Any) -> AnalysisOutcome:
        try:
            request = validate_request(payload)
            data, record = await self._analyze(request)
        except HealthAnalysisError as e:
            return AnalysisOutcome(status_code=e.status_code, body=error_body(e.message))

        persistence = self._persist(request, data, record)
        if persistence.succeeded:
            data["id"] = persistence.value

        lookup = self._lookup_providers(request)
        if lookup.succeeded:
            data["nearbyProviders"] = lookup.value

        return AnalysisOutcome(
            status_code=200,
            body=success_body(data),
            persistence=persistence,
            provider_lookup=lookup,
        )

    async def _analyze(self, request: HealthAnalysisRequest) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        noun = self.domain.noun
        result = await self.analyzer.analyze_image(request.image, self.domain.prompt)

        if result.is_hard_failure:
            logger.error(
                f"Vision call failed for {self.domain.name}: {result.error}",
                extra={"operation": "analyze", "domain": self.domain.name},
            )
            raise HardAnalysisFailure(f"Error analyzing {noun} image")
        if not result.success:
            raise SoftAnalysisFailure(f"Unable to analyze the {noun} image: {result.text}")

        parsed = parse_analysis_results(result.text)
        fields = self.domain.extract(result.text, parsed.concerns)

        data = parsed.to_dict()
        data.update(fields.to_response())
        data["created_at"] = utc_timestamp()
        data["rawAnalysis"] = result.text
        return data, fields.to_record()

    def _persist(self, request: HealthAnalysisRequest, data: Dict[str, Any],
                 record: Dict[str, Any]) -> SideEffectOutcome:
        if not request.user_id or self.db is None:
            return SideEffectOutcome()

        try:
            analysis_id = store_analysis_results(
                self.db,
                self.domain,
                raw_analysis=data["rawAnalysis"],
                concerns=data["concerns"],
                recommendations=data["recommendations"],
                record=record,
                user_id=request.user_id,
            )
        except PersistenceFailure as e:
            logger.error(f"Error storing {self.domain.name} analysis results: {e.message}")
            return SideEffectOutcome(attempted=True, error=e.message)
        return SideEffectOutcome(attempted=True, value=analysis_id)

    def _lookup_providers(self, request: HealthAnalysisRequest) -> SideEffectOutcome:
        if not (request.find_providers and request.location) or self.db is None:
            return SideEffectOutcome()

        try:
            providers = find_nearby_providers(
                self.db,
                self.domain.specialty,
                request.location.latitude,
                request.location.longitude,
            )
        except LookupFailure as e:
            logger.error(f"Error finding {self.domain.specialty} providers: {e.message}")
            return SideEffectOutcome(attempted=True, error=e.message)
        return SideEffectOutcome(attempted=True, value=providers)
