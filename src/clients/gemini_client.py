"""Gemini client: issue a single generateContent request for a codebase overview.

Talks to the Generative Language REST API with httpx and returns the
concatenated text parts of the first candidate.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from core.errors import ExternalServiceError, ValidationError
from prompts.overview_prompt import build_overview_prompt


logger = logging.getLogger(__name__)


def _error_detail(resp: httpx.Response) -> str:
    # Gemini reports failures as {"error": {"code", "message", "status"}}
    try:
        data = resp.json()
    except ValueError:
        return (resp.text or "").strip() or f"HTTP {resp.status_code}"
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return f"HTTP {resp.status_code}"


def _extract_text(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback") or {}
        reason = feedback.get("blockReason")
        if reason:
            raise ExternalServiceError(f"Gemini blocked the request: {reason}")
        raise ExternalServiceError("Gemini returned no candidates")

    parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    if not text.strip():
        raise ExternalServiceError("Gemini returned an empty response")
    return text


class GeminiClient:
    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float,
        verify: bool = True,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._model = (model or "").strip()
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = timeout
        self._verify = verify

    async def generate_overview(self, document: str) -> str:
        if not self._api_key:
            raise ValidationError("GEMINI_API_KEY is not set")
        if not self._model:
            raise ValidationError("Gemini model is not configured")
        if not (document or "").strip():
            raise ValidationError("Document is empty")

        url = f"{self._base_url}/v1beta/models/{self._model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": build_overview_prompt(document)}]}]}

        logger.info("Requesting overview from %s (%d chars)", self._model, len(document))
        try:
            async with httpx.AsyncClient(timeout=self._timeout, verify=self._verify) as c:
                r = await c.post(
                    url,
                    json=payload,
                    headers={"x-goog-api-key": self._api_key},
                )
                if r.is_error:
                    raise ExternalServiceError(f"Gemini returned an error: {_error_detail(r)}")
                data = r.json()
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Failed to call Gemini: {e}") from e
        except ValueError as e:
            raise ExternalServiceError("Gemini returned malformed JSON") from e

        return _extract_text(data)
