"""
Healthcare provider lookup
Filters the provider catalog by specialty; there is no geospatial ranking,
so distance is never filled in.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from health_analyzer.models.db_models import HealthcareProvider
from health_analyzer.models.schemas import HealthcareProviderOut
from health_analyzer.utils.errors import LookupFailure

logger = logging.getLogger(__name__)


def find_nearby_providers(
    db: Session,
    specialty: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """
    Return providers of the given specialty

    latitude/longitude are accepted for the request contract but not used yet.

    Raises:
        LookupFailure: when the catalog query fails
    """
    try:
        rows = (
            db.query(HealthcareProvider)
            .filter(HealthcareProvider.specialty == specialty)
            .order_by(HealthcareProvider.name)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching providers: {e}", extra={"operation": "find_providers", "specialty": specialty})
        raise LookupFailure(f"Could not look up {specialty} providers") from e

    logger.info(f"Found {len(rows)} {specialty} providers")
    return [
        HealthcareProviderOut.model_validate(row).model_dump(exclude_none=True)
        for row in rows
    ]
