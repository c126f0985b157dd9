"""
Runtime configuration for the health image analyzer.
Values come from the environment (optionally a .env file).
"""
import os
from typing import Tuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Vision model
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
VISION_MAX_OUTPUT_TOKENS = int(os.getenv("VISION_MAX_OUTPUT_TOKENS", "1000"))
VISION_TEMPERATURE = float(os.getenv("VISION_TEMPERATURE", "0.3"))

# Storage
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(os.getcwd(), 'health_analyzer.db')}")

# HTTP
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


def _int_tuple(raw: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in raw.split(",") if part.strip())


# Conservative recommendation thresholds
DENTIST_CONCERN_THRESHOLD = int(os.getenv("DENTIST_CONCERN_THRESHOLD", "3"))
DERMATOLOGIST_SEVERITY_THRESHOLD = int(os.getenv("DERMATOLOGIST_SEVERITY_THRESHOLD", "7"))
EXTREME_BRISTOL_TYPES = _int_tuple(os.getenv("EXTREME_BRISTOL_TYPES", "1,7"))
