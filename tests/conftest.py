"""
Pytest fixtures for SMPC Guard tests.

Analysis-service env vars are cleared for every test so no real credential
leaks in; outbound HTTP is faked with httpx.MockTransport.
"""

from __future__ import annotations

import json
import random
from typing import Any, Callable

import httpx
import pytest

ANALYSIS_ENV_VARS = (
    "GEMINI_API_KEY",
    "API_KEY",
    "ANALYSIS_MODEL",
    "ANALYSIS_BASE_URL",
    "ANALYSIS_TIMEOUT_SEC",
)


@pytest.fixture(autouse=True)
def clean_analysis_env(monkeypatch):
    """Unset analysis credentials/config and reset the settings cache around each test."""
    from backend_smpcguard.config import reset_settings_cache

    for name in ANALYSIS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def rng():
    return random.Random(20240518)


@pytest.fixture
def make_txn() -> Callable[..., Any]:
    """Factory for Transactions with chosen scores; shares split the fraud score evenly."""
    from backend_smpcguard.scoring.models import FraudStatus, SMPCShares, Transaction

    def _make(
        fraud_score: float = 0.5,
        *,
        amount: float = 2500.0,
        device_score: float = 0.5,
        status: FraudStatus = FraudStatus.NORMAL,
        txn_id: str = "TXN-TEST00001",
    ) -> Transaction:
        third = fraud_score / 3
        return Transaction(
            id=txn_id,
            user_id="USR-TESTUSER",
            amount=amount,
            device_score=device_score,
            fraud_score=fraud_score,
            status=status,
            timestamp="2026-01-01T00:00:00+00:00",
            shares=SMPCShares(third, third, fraud_score - 2 * third),
        )

    return _make


def gemini_envelope(text: str) -> dict[str, Any]:
    """generateContent response body carrying text as the single candidate part."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
        ]
    }


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays a fixed response."""

    def __init__(self, status_code: int = 200, body: Any = None, exc: Exception | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body or "")

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_gateway():
    """Build (gateway, handler) backed by a MockTransport; api_key defaults to a dummy key."""
    from backend_smpcguard.analysis.client import GeminiClient
    from backend_smpcguard.analysis.gateway import AnalysisGateway

    def _make(handler: RecordingHandler, *, api_key: str = "test-key", timeout_sec: float = 5.0):
        client = GeminiClient(
            api_key,
            model="gemini-test",
            base_url="https://analysis.invalid/v1beta",
            timeout_sec=timeout_sec,
            transport=httpx.MockTransport(handler),
        )
        return AnalysisGateway(client, timeout_sec=timeout_sec), handler

    return _make


class StubGateway:
    """Gateway stand-in that records analyzed transactions."""

    def __init__(self) -> None:
        from backend_smpcguard.scoring.models import AnalysisResult, ThreatLevel

        self.calls: list[Any] = []
        self.result = AnalysisResult(
            summary="Large amount from a risky device.",
            threat_level=ThreatLevel.HIGH,
            recommendation="Hold the transfer and call the customer.",
        )

    async def analyze(self, txn):
        self.calls.append(txn)
        return self.result


@pytest.fixture
def stub_gateway():
    return StubGateway()


@pytest.fixture
def client(stub_gateway):
    """FastAPI TestClient with a fixed 0.95 device signal and a stub gateway."""
    from fastapi.testclient import TestClient

    from backend_smpcguard.api_server.server import app, get_engine, get_gateway
    from backend_smpcguard.scoring.device_risk import FixedDeviceRiskProvider
    from backend_smpcguard.scoring.engine import ScoreEngine

    engine = ScoreEngine(random.Random(7), device_risk=FixedDeviceRiskProvider(0.95))
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_gateway] = lambda: stub_gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def handler_factory():
    return RecordingHandler


@pytest.fixture
def envelope():
    return gemini_envelope
