"""Unit tests for the AI API client."""

import base64
import unittest
from unittest.mock import Mock

import requests

from src.services.base_service import ServiceStatus
from src.services.llm_service import AIClient, LLMServiceError


def _response(data=None, ok=True, status_code=200, reason="OK"):
    response = Mock(ok=ok, status_code=status_code, reason=reason, text=str(data))
    response.json.return_value = data
    return response


def _completion(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestAIClient(unittest.TestCase):
    """Test cases for AIClient."""

    def setUp(self):
        self.session = Mock(spec=requests.Session)
        self.client = AIClient(
            api_key="test_api_key",
            api_url="https://ai.test/v1/text:generateContent",
            file_api_url="https://ai.test/v1/file:generateContent",
            timeout=5,
            session=self.session,
        )

    def test_initialization_with_api_key(self):
        self.assertTrue(self.client.is_initialized())
        self.assertTrue(self.client.health_check())
        self.assertEqual(self.client.get_status(), ServiceStatus.HEALTHY)

    def test_initialization_without_api_key(self):
        client = AIClient(api_key="", api_url="https://ai.test", session=self.session)

        self.assertFalse(client.is_initialized())
        self.assertFalse(client.health_check())
        self.assertEqual(client.get_status(), ServiceStatus.UNHEALTHY)

    def test_call_ai_api_sends_text_prompt(self):
        self.session.post.return_value = _response(_completion("SCORE: 5"))

        text = self.client.call_ai_api("Grade this")

        self.assertEqual(text, "SCORE: 5")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "https://ai.test/v1/text:generateContent")
        self.assertEqual(kwargs["params"], {"key": "test_api_key"})
        self.assertEqual(kwargs["timeout"], 5)
        payload = kwargs["json"]
        self.assertEqual(payload["contents"], [{"parts": [{"text": "Grade this"}]}])
        self.assertEqual(payload["generationConfig"]["temperature"], 0.7)
        self.assertEqual(payload["generationConfig"]["maxOutputTokens"], 1000)
        self.assertNotIn("safetySettings", payload)

    def test_call_ai_api_with_file_attaches_inline_data(self):
        self.session.post.return_value = _response(_completion("SCORE: 3"))

        text = self.client.call_ai_api_with_file(b"\x89PNG", "image/png", "Grade this")

        self.assertEqual(text, "SCORE: 3")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "https://ai.test/v1/file:generateContent")
        parts = kwargs["json"]["contents"][0]["parts"]
        self.assertEqual(parts[0], {"text": "Grade this"})
        self.assertEqual(
            parts[1],
            {
                "inline_data": {
                    "mime_type": "image/png",
                    "data": base64.b64encode(b"\x89PNG").decode("ascii"),
                }
            },
        )
        generation_config = kwargs["json"]["generationConfig"]
        self.assertEqual(generation_config["temperature"], 0.3)
        self.assertEqual(generation_config["maxOutputTokens"], 2048)
        safety = kwargs["json"]["safetySettings"]
        self.assertEqual(len(safety), 4)
        self.assertTrue(
            all(s["threshold"] == "BLOCK_MEDIUM_AND_ABOVE" for s in safety)
        )

    def test_missing_configuration(self):
        client = AIClient(api_key="test_api_key", api_url="", session=self.session)

        with self.assertRaises(LLMServiceError) as ctx:
            client.call_ai_api("Grade this")

        self.assertIn("AI API configuration missing", str(ctx.exception))
        self.session.post.assert_not_called()

    def test_missing_key_for_file_call(self):
        client = AIClient(api_key="", session=self.session)

        with self.assertRaises(LLMServiceError) as ctx:
            client.call_ai_api_with_file(b"data", "image/jpeg", "Grade this")

        self.assertIn("AI API key missing", str(ctx.exception))
        self.session.post.assert_not_called()

    def test_http_error(self):
        self.session.post.return_value = _response(
            {"error": {"message": "quota"}},
            ok=False,
            status_code=429,
            reason="Too Many Requests",
        )

        with self.assertRaises(LLMServiceError) as ctx:
            self.client.call_ai_api("Grade this")

        self.assertEqual(str(ctx.exception), "AI API request failed: Too Many Requests")
        self.assertEqual(ctx.exception.error_code, "HTTP_429")

    def test_http_error_on_file_call_includes_body(self):
        self.session.post.return_value = _response(
            {"error": {"message": "bad image"}},
            ok=False,
            status_code=400,
            reason="Bad Request",
        )

        with self.assertRaises(LLMServiceError) as ctx:
            self.client.call_ai_api_with_file(b"data", "image/jpeg", "Grade this")

        self.assertIn("AI API request failed: Bad Request", str(ctx.exception))
        self.assertIn("bad image", str(ctx.exception))

    def test_response_without_text(self):
        self.session.post.return_value = _response({"candidates": []})

        with self.assertRaises(LLMServiceError) as ctx:
            self.client.call_ai_api("Grade this")
        self.assertEqual(str(ctx.exception), "Invalid AI API response")

        with self.assertRaises(LLMServiceError) as ctx:
            self.client.call_ai_api_with_file(b"data", "image/jpeg", "Grade this")
        self.assertEqual(str(ctx.exception), "Invalid AI API response format")

    def test_connection_error(self):
        self.session.post.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(LLMServiceError) as ctx:
            self.client.call_ai_api("Grade this")

        self.assertEqual(ctx.exception.error_code, "CONNECTION_ERROR")
        self.assertEqual(self.client.metrics.failed_requests, 1)

    def test_successful_calls_are_tracked(self):
        self.session.post.return_value = _response(_completion("SCORE: 1"))

        self.client.call_ai_api("one")
        self.client.call_ai_api_with_file(b"data", "image/jpeg", "two")

        self.assertEqual(self.client.metrics.total_requests, 2)
        self.assertEqual(self.client.metrics.successful_requests, 2)
        self.assertEqual(
            self.client.metrics.custom_metrics["operation_call_ai_api"], 1
        )
