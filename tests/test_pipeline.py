"""
Pytest tests for the submission workflow (score -> gated analysis).
"""

from __future__ import annotations

import asyncio
import random

import pytest


def _engine(device: float):
    from backend_smpcguard.scoring.device_risk import FixedDeviceRiskProvider
    from backend_smpcguard.scoring.engine import ScoreEngine

    return ScoreEngine(random.Random(11), device_risk=FixedDeviceRiskProvider(device))


def test_low_risk_submission_skips_analysis(stub_gateway):
    from backend_smpcguard.pipeline import submit_transaction

    result = asyncio.run(submit_transaction("a@example.com", 500, engine=_engine(0.95), gateway=stub_gateway))
    assert result.transaction.status.value == "NORMAL"
    assert result.analysis is None
    assert stub_gateway.calls == []
    assert result.to_dict()["analysis"] is None


def test_fraud_submission_is_analyzed(stub_gateway):
    from backend_smpcguard.pipeline import submit_transaction

    result = asyncio.run(submit_transaction("a@example.com", 10000, engine=_engine(0.05), gateway=stub_gateway))
    assert result.transaction.status.value == "FRAUD"
    assert result.analysis == stub_gateway.result
    assert stub_gateway.calls == [result.transaction]
    assert result.to_dict()["analysis"]["threatLevel"] == "High"


def test_borderline_normal_submission_is_analyzed(stub_gateway):
    """7000 with device 0.95 scores 0.685: NORMAL but above the 0.6 analysis gate."""
    from backend_smpcguard.pipeline import submit_transaction

    result = asyncio.run(submit_transaction("a@example.com", 7000, engine=_engine(0.95), gateway=stub_gateway))
    assert result.transaction.status.value == "NORMAL"
    assert result.transaction.fraud_score == 0.685
    assert result.analysis is not None
    assert len(stub_gateway.calls) == 1


def test_submission_with_unavailable_service_gets_fallback(make_gateway, handler_factory):
    import httpx

    from backend_smpcguard.analysis.gateway import FALLBACK_RECOMMENDATION
    from backend_smpcguard.pipeline import submit_transaction

    gateway, handler = make_gateway(handler_factory(exc=httpx.ReadTimeout("timed out")))
    result = asyncio.run(submit_transaction("a@example.com", 9999, engine=_engine(0.5), gateway=gateway))
    assert result.analysis.recommendation == FALLBACK_RECOMMENDATION
    # 0.9999 * 0.7 + 0.25 = 0.95 -> High
    assert result.analysis.threat_level.value == "High"
    assert handler.calls == 1


def test_invalid_submission_raises(stub_gateway):
    from backend_smpcguard.core.exceptions import InvalidTransactionInput
    from backend_smpcguard.pipeline import submit_transaction

    with pytest.raises(InvalidTransactionInput):
        asyncio.run(submit_transaction("a@example.com", -1, engine=_engine(0.5), gateway=stub_gateway))
    assert stub_gateway.calls == []
