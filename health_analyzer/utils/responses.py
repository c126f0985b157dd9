"""
Response envelopes shared by every handler
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi.responses import JSONResponse

# Domain list fields that must never be missing from a success payload
LIST_FIELDS = ("concerns", "recommendations", "issues", "conditions", "exerciseRecommendations",
               "foodItems", "abnormalities")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill defaults so clients always see the same shape: created_at is set,
    list fields are lists, absent scalar values are omitted.
    """
    payload = {key: value for key, value in data.items() if value is not None}
    payload.setdefault("created_at", utc_timestamp())
    for key in LIST_FIELDS:
        if key in data and not payload.get(key):
            payload[key] = []
    payload.setdefault("concerns", [])
    payload.setdefault("recommendations", [])

    if "nutrients" in data:
        nutrients = {key: value for key, value in (data["nutrients"] or {}).items() if value is not None}
        nutrients.setdefault("vitamins", {})
        payload["nutrients"] = nutrients
    return payload


def success_body(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"success": True, "data": normalize_payload(data)}


def error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(message))
