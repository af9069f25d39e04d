# =========================================================
# GENERATIVE AI CLIENT (GEMINI REST)
# - One JSON-constrained completion per call
# - No retries; every failure becomes ExternalServiceError
# - The rest of the app only sees generate_json()
# =========================================================

import json
import logging
from typing import Protocol, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.errors import ExternalServiceError

logger = logging.getLogger("app")

M = TypeVar("M", bound=BaseModel)


class GenerativeClient(Protocol):
    def generate_json(self, prompt: str, response_schema: dict) -> dict:
        ...


class GeminiClient:
    def __init__(
        self,
        api_key: str | None,
        model: str,
        base_url: str,
        timeout: int,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate_json(self, prompt: str, response_schema: dict) -> dict:
        if not self.api_key:
            raise ExternalServiceError("AI provider is not configured")

        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]},
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.url,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"AI provider connection error: {str(e)}")
            raise ExternalServiceError("Unable to connect to AI provider")

        if response.status_code != 200:
            logger.error(
                f"AI provider call failed. Status: {response.status_code}, Body: {response.text}"
            )
            raise ExternalServiceError(
                f"AI provider returned status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError:
            logger.error("AI provider returned invalid JSON")
            raise ExternalServiceError("Invalid response from AI provider")

        return _extract_json_output(data)


def _extract_json_output(data) -> dict:
    if not isinstance(data, dict):
        logger.error(f"AI provider body is not a JSON object: {type(data).__name__}")
        raise ExternalServiceError("AI provider returned an unexpected response")

    candidates = data.get("candidates") or []

    if not candidates:
        feedback = data.get("promptFeedback")
        reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        logger.error(f"AI provider returned no candidates (block reason: {reason})")
        raise ExternalServiceError("AI provider returned no answer")

    candidate = candidates[0] if isinstance(candidates, list) else None
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None

    if not isinstance(parts, list):
        logger.error(f"AI provider answer has no content parts: {str(data)[:200]}")
        raise ExternalServiceError("AI provider returned an unexpected response")

    text = "".join(
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )

    if not text.strip():
        raise ExternalServiceError("AI provider returned an empty answer")

    try:
        output = json.loads(text)
    except ValueError:
        logger.error(f"AI output is not valid JSON: {text[:200]}")
        raise ExternalServiceError("AI output is not valid JSON")

    if not isinstance(output, dict):
        raise ExternalServiceError("AI output is not a JSON object")

    return output


def parse_model_output(model: Type[M], raw: dict) -> M:
    """Validate raw model output against the declared output schema."""
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        logger.error(f"AI output does not match {model.__name__}: {e.errors()}")
        raise ExternalServiceError(
            f"AI output does not match the expected format ({model.__name__})"
        )


def get_generative_client() -> GenerativeClient:
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_API_URL,
        timeout=settings.AI_REQUEST_TIMEOUT,
    )
