"""
Client for the external structured-reasoning (Gemini) service.

One POST per call to {base_url}/models/{model}:generateContent, asking for
application/json output. No retries. Every failure mode surfaces as
AnalysisUnavailable so the gateway has a single thing to absorb.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from backend_smpcguard.config import get_settings
from backend_smpcguard.config.env import mask_api_key
from backend_smpcguard.core.exceptions import AnalysisUnavailable
from backend_smpcguard.guard_logging import get_logger

logger = get_logger(__name__)


class AnalysisClient(Protocol):
    async def generate_json(self, prompt: str) -> str:
        """Return the raw text the service produced for prompt."""
        ...


def _build_request_body(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {"responseMimeType": "application/json"},
    }


def _extract_text(data: Any) -> str:
    """Concatenate candidates[0].content.parts[*].text; "" when the shape is unexpected."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    )


class GeminiClient:
    """
    Async client for the Generative Language REST API.

    Unset constructor arguments are taken from get_settings(). A missing
    API key does not fail construction; generate_json raises instead.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        base_url: str | None = None,
        timeout_sec: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            api_key: Service credential; "" means calls always fail.
            model: Model name, e.g. gemini-3-flash-preview.
            base_url: REST root, e.g. https://generativelanguage.googleapis.com/v1beta.
            timeout_sec: HTTP timeout for the request.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        settings = get_settings()
        self._api_key = settings.analysis_api_key if api_key is None else api_key.strip()
        self._model = model or settings.analysis_model
        self._base_url = (base_url or settings.analysis_base_url).rstrip("/")
        self._timeout = timeout_sec if timeout_sec is not None else settings.analysis_timeout_sec
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    async def generate_json(self, prompt: str) -> str:
        if not self._api_key:
            raise AnalysisUnavailable("analysis credential not configured")

        logger.debug(
            "analysis_request",
            endpoint=self.endpoint,
            api_key=mask_api_key(self._api_key),
            timeout_sec=self._timeout,
        )
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            ) as client:
                resp = await client.post(
                    self.endpoint,
                    json=_build_request_body(prompt),
                    headers={"x-goog-api-key": self._api_key},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise AnalysisUnavailable(
                f"analysis service returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise AnalysisUnavailable(f"analysis request failed: {type(e).__name__}: {e}") from e
        except ValueError as e:
            raise AnalysisUnavailable(f"analysis service returned non-JSON envelope: {e}") from e

        text = _extract_text(data)
        if not text.strip():
            raise AnalysisUnavailable("analysis service returned empty content")
        return text
