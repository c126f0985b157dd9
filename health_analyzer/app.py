import json
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from health_analyzer import config
from health_analyzer.db import init_db
from health_analyzer.routes.analysis import router as analysis_router
from health_analyzer.routes.history import router as history_router
from health_analyzer.utils.errors import HealthAnalysisError
from health_analyzer.utils.responses import error_response

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Health Image Analyzer API",
    description="Vision-model analysis of dental, skin, posture, meal and stool photos",
    version="1.0.0"
)


def parse_cors_origins(raw: str):
    """Support both comma-separated and JSON-style list strings"""
    raw = raw.strip()
    if raw.startswith("["):
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("CORS_ORIGINS is not valid JSON, falling back to comma-separated parsing")
            raw = raw.strip("[]")
    return [origin.strip().strip('"') for origin in raw.split(",") if origin.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(config.CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HealthAnalysisError)
async def health_analysis_error_handler(request: Request, exc: HealthAnalysisError):
    return error_response(exc.message, exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return error_response("Method not allowed", 405)
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return error_response(message, 400)


@app.on_event("startup")
async def startup():
    init_db()
    logger.info("✓ Database tables ready")


app.include_router(analysis_router, prefix="/api", tags=["analysis"])
app.include_router(history_router, prefix="/api", tags=["history"])


@app.get("/")
async def root():
    return {"message": "Health Image Analyzer API is running"}


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "message": "Backend service is running"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=False)
