import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass
from typing import Optional

import google.generativeai as genai
from PIL import Image

from health_analyzer import config

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)

# Phrasings that mean the model answered but could not analyze the image
REFUSAL_PATTERNS = {
    "inability": [
        "unable to analyze",
        "cannot analyze",
        "can't analyze",
        "could not analyze",
        "couldn't analyze",
        "not able to analyze",
        "unable to assess",
        "cannot assess",
        "unable to determine",
        "cannot determine",
        "unable to provide an analysis",
        "cannot provide an analysis",
    ],
    "image_quality": [
        "unclear image",
        "image is unclear",
        "image is not clear",
        "too blurry",
        "image is blurry",
        "blurry image",
        "low quality image",
        "poor image quality",
        "image quality is too low",
        "too dark",
    ],
    "visibility": [
        "cannot see",
        "can't see",
        "cannot identify",
        "unable to identify",
        "no visible",
        "does not appear to show",
    ],
    "policy": [
        "inappropriate content",
        "inappropriate image",
        "i can't help with",
        "i cannot help with",
    ],
    "better_image": [
        "please provide a clearer image",
        "please upload a clearer",
        "please provide a better",
        "please provide another image",
        "please retake",
        "provide a different image",
    ],
}


@dataclass
class VisionResult:
    """Outcome of one vision call.

    error is set on a hard failure; success is False on either failure kind.
    """
    text: str
    success: bool
    error: Optional[str] = None

    @property
    def is_hard_failure(self) -> bool:
        return self.error is not None


def strip_data_url(image_base64: str) -> str:
    """Remove a data:image/...;base64, prefix if present"""
    return DATA_URL_PREFIX.sub("", image_base64.strip(), count=1)


def decode_image_payload(image_base64: str) -> bytes:
    """Decode the request image to raw bytes, raising ValueError when it is not base64"""
    try:
        data = base64.b64decode(strip_data_url(image_base64), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Image is not valid base64: {e}") from e
    if not data:
        raise ValueError("Image payload is empty")
    return data


def find_refusal(text: str) -> Optional[str]:
    """Return the first refusal phrase contained in text, or None"""
    lowered = text.lower()
    for phrases in REFUSAL_PATTERNS.values():
        for phrase in phrases:
            if phrase in lowered:
                return phrase
    return None


class VisionAnalyzer:
    """Sends one image plus a system prompt to the Gemini vision model"""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.model_name = model_name or config.GEMINI_MODEL
        self.max_output_tokens = config.VISION_MAX_OUTPUT_TOKENS
        self.temperature = config.VISION_TEMPERATURE
        self.is_configured = False

        if not self.api_key:
            logger.warning("GEMINI_API_KEY not found in environment variables")
            return

        genai.configure(api_key=self.api_key)
        self.is_configured = True
        logger.info(f"Vision analyzer initialized with model {self.model_name}")

    def is_enabled(self) -> bool:
        return self.is_configured

    async def analyze_image(self, image_base64: str, prompt: str) -> VisionResult:
        """
        Analyze an image with the vision model

        Args:
            image_base64: Base64 image, optionally with a data URL prefix
            prompt: System prompt for the analysis

        Returns:
            VisionResult; never raises
        """
        try:
            if not self.is_enabled():
                raise RuntimeError("Gemini API key not configured")

            image = Image.open(io.BytesIO(decode_image_payload(image_base64)))
            model = genai.GenerativeModel(self.model_name, system_instruction=prompt)
            response = await model.generate_content_async(
                [image],
                generation_config={
                    "temperature": self.temperature,
                    "max_output_tokens": self.max_output_tokens,
                },
            )

            if not getattr(response, "candidates", None):
                raise RuntimeError("No analysis results returned from Gemini")

            content = self._response_text(response)
            if not content:
                raise RuntimeError("Gemini returned an empty candidate")

        except Exception as e:
            logger.error(
                f"Error in analyze_image: {str(e)}",
                extra={"operation": "analyze_image", "model": self.model_name},
                exc_info=True,
            )
            return VisionResult(text=str(e), success=False, error=str(e))

        refusal = find_refusal(content)
        if refusal:
            logger.error(
                f"Vision model declined the image (matched '{refusal}')",
                extra={"operation": "analyze_image", "refusal": refusal},
            )
            return VisionResult(text=content, success=False)

        return VisionResult(text=content, success=True)

    @staticmethod
    def _response_text(response) -> str:
        candidate = response.candidates[0]
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or []
        return "".join(getattr(part, "text", "") or "" for part in parts).strip()
