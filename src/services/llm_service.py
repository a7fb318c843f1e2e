"""Client for the generative-AI completion API.

Requests are JSON ``generateContent`` calls; the API key travels as the
``key`` query parameter. Two entry points exist: a text-only call against the
configured ``AI_API_URL`` and a multimodal call that attaches the answer file
as inline base64 data.
"""

import base64
import time
from typing import Any, Dict, Optional

import requests

from src.config.unified_config import config
from src.services.base_service import BaseService, ServiceStatus
from utils.logger import logger

SAFETY_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]

TEXT_GENERATION_CONFIG = {
    "temperature": 0.7,
    "maxOutputTokens": 1000,
    "topP": 0.8,
    "topK": 40,
}

FILE_GENERATION_CONFIG = {
    "temperature": 0.3,
    "maxOutputTokens": 2048,
    "topP": 0.8,
    "topK": 40,
}


class LLMServiceError(Exception):
    """Exception raised for errors in the LLM service."""

    def __init__(
        self, message: str, error_code: str = None, original_error: Exception = None
    ):
        """Initialize LLM service error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for categorization
            original_error: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.original_error = original_error

    def __str__(self):
        return self.message


class AIClient(BaseService):
    """Thin wrapper around the generateContent endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        file_api_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__("ai_client")
        self.api_key = api_key if api_key is not None else config.api.ai_api_key
        self.api_url = api_url if api_url is not None else config.api.ai_api_url
        self.file_api_url = file_api_url or config.api.ai_file_api_url
        self.timeout = timeout or config.api.api_timeout
        self.session = session or requests.Session()
        self._initialized = self.initialize()

    def initialize(self) -> bool:
        if not self.api_key:
            logger.warning("AI API key not configured - grading will use fallback scores")
            self.metrics.status = ServiceStatus.UNHEALTHY
            return False
        self.metrics.status = ServiceStatus.HEALTHY
        return True

    def health_check(self) -> bool:
        return bool(self.api_key)

    def call_ai_api(self, prompt: str) -> str:
        """Send a text-only prompt and return the generated text.

        Raises:
            LLMServiceError: If configuration is missing or the call fails
        """
        if not self.api_key or not self.api_url:
            raise LLMServiceError(
                "AI API configuration missing. Please check the AI_API_KEY and "
                "AI_API_URL settings.",
                error_code="CONFIG_MISSING",
            )

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": TEXT_GENERATION_CONFIG,
        }

        response = self._post(self.api_url, payload, "call_ai_api")
        if not response.ok:
            raise LLMServiceError(
                f"AI API request failed: {response.reason}",
                error_code=f"HTTP_{response.status_code}",
            )

        text = self._extract_text(self._decode(response))
        if text is None:
            raise LLMServiceError("Invalid AI API response", error_code="INVALID_RESPONSE")
        return text

    def call_ai_api_with_file(self, content: bytes, mime_type: str, prompt: str) -> str:
        """Send a prompt together with an inline file and return the generated text.

        Args:
            content: Raw bytes of the answer file
            mime_type: MIME type of the file (e.g. image/jpeg)
            prompt: Instruction text

        Raises:
            LLMServiceError: If configuration is missing or the call fails
        """
        if not self.api_key:
            raise LLMServiceError(
                "AI API key missing. Please check the AI_API_KEY setting.",
                error_code="CONFIG_MISSING",
            )

        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inline_data": {
                                "mime_type": mime_type,
                                "data": base64.b64encode(content).decode("ascii"),
                            }
                        },
                    ]
                }
            ],
            "generationConfig": FILE_GENERATION_CONFIG,
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
                for category in SAFETY_CATEGORIES
            ],
        }

        response = self._post(self.file_api_url, payload, "call_ai_api_with_file")
        if not response.ok:
            try:
                error_data = response.json()
            except ValueError:
                error_data = response.text
            logger.error(f"AI API error: {error_data}")
            raise LLMServiceError(
                f"AI API request failed: {response.reason} - {error_data}",
                error_code=f"HTTP_{response.status_code}",
            )

        data = self._decode(response)
        text = self._extract_text(data)
        if text is None:
            logger.error(f"Invalid AI API response: {data}")
            raise LLMServiceError(
                "Invalid AI API response format", error_code="INVALID_RESPONSE"
            )
        return text

    def _post(self, url: str, payload: Dict[str, Any], operation: str) -> requests.Response:
        start = time.time()
        with self.track_request(operation):
            try:
                response = self.session.post(
                    url,
                    params={"key": self.api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                raise LLMServiceError(
                    f"AI API request failed: {e}",
                    error_code="CONNECTION_ERROR",
                    original_error=e,
                )
        logger.log_api_call(url, "POST", response.status_code, time.time() - start)
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise LLMServiceError(
                "Invalid AI API response: body is not JSON",
                error_code="INVALID_RESPONSE",
                original_error=e,
            )

    @staticmethod
    def _extract_text(data: Any) -> Optional[str]:
        """Return candidates[0].content.parts[0].text, or None if absent/empty."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text or None
