"""
Analysis gateway: explanation for a classified transaction, with fallback.

One outbound attempt per call, bounded by a timeout. Transport errors,
timeouts, empty content, non-JSON text and structurally invalid objects all
degrade to a deterministic local explanation derived from the fraud score.
analyze() never raises for an ordinary failure.

The gateway does not decide whether analysis is warranted; callers gate on
needs_analysis() before calling it.
"""

from __future__ import annotations

import asyncio

from pydantic import ValidationError

from backend_smpcguard.analysis.client import AnalysisClient, GeminiClient
from backend_smpcguard.analysis.schemas import AnalysisPayload
from backend_smpcguard.config import get_settings
from backend_smpcguard.core.exceptions import AnalysisUnavailable
from backend_smpcguard.guard_logging import bind_transaction
from backend_smpcguard.scoring.cipher import format_number
from backend_smpcguard.scoring.models import AnalysisResult, ThreatLevel, Transaction

FALLBACK_SUMMARY = "Automated AI analysis unavailable. Relying on baseline SMPC scores."
FALLBACK_RECOMMENDATION = "Manual verification required."
# Fallback threat level is High strictly above this fraud score
FALLBACK_HIGH_THRESHOLD = 0.7

PROMPT_TEMPLATE = """Perform a security analysis on the following transaction.
Context: This transaction was flagged by an SMPC (Secure Multi-Party Computation) engine.
Transaction Details:
- Amount: ${amount}
- Device Risk Score: {device_score} (0 is clean, 1 is high risk)
- Detected Risk Level: {fraud_score}
- Status: {status}

Respond with a single JSON object with these fields:
- summary: A brief summary of why this might be fraud or legitimate.
- threatLevel: 'Low', 'Medium', or 'High'.
- recommendation: Actionable step for the fraud analyst."""


def build_analysis_prompt(txn: Transaction) -> str:
    return PROMPT_TEMPLATE.format(
        amount=format_number(txn.amount),
        device_score=txn.device_score,
        fraud_score=txn.fraud_score,
        status=txn.status.value,
    )


def parse_analysis(text: str) -> AnalysisResult:
    """Validate raw service text as an AnalysisPayload. Raises AnalysisUnavailable or ValidationError."""
    if not text or not text.strip():
        raise AnalysisUnavailable("analysis content was empty")
    return AnalysisPayload.model_validate_json(text).to_result()


def fallback_analysis(txn: Transaction) -> AnalysisResult:
    threat = ThreatLevel.HIGH if txn.fraud_score > FALLBACK_HIGH_THRESHOLD else ThreatLevel.LOW
    return AnalysisResult(
        summary=FALLBACK_SUMMARY,
        threat_level=threat,
        recommendation=FALLBACK_RECOMMENDATION,
    )


class AnalysisGateway:
    """Stateless per call; safe to share across requests."""

    def __init__(
        self,
        client: AnalysisClient | None = None,
        *,
        timeout_sec: float | None = None,
    ) -> None:
        self._client = client if client is not None else GeminiClient()
        self._timeout = timeout_sec if timeout_sec is not None else get_settings().analysis_timeout_sec

    async def analyze(self, txn: Transaction) -> AnalysisResult:
        log = bind_transaction(txn.id)
        prompt = build_analysis_prompt(txn)
        try:
            text = await asyncio.wait_for(self._client.generate_json(prompt), timeout=self._timeout)
            result = parse_analysis(text)
        except asyncio.TimeoutError:
            log.warning(
                "analysis_fallback",
                reason="timeout",
                timeout_sec=self._timeout,
                fraud_score=txn.fraud_score,
            )
            return fallback_analysis(txn)
        except ValidationError as e:
            log.warning(
                "analysis_fallback",
                reason="invalid_response",
                error_count=e.error_count(),
                error=str(e).splitlines()[0],
                fraud_score=txn.fraud_score,
            )
            return fallback_analysis(txn)
        except AnalysisUnavailable as e:
            log.warning("analysis_fallback", reason="unavailable", error=str(e), fraud_score=txn.fraud_score)
            return fallback_analysis(txn)
        except Exception as e:
            # Custom clients may raise anything; the caller still gets a result.
            log.exception("analysis_fallback", reason="unexpected_error", error=str(e), fraud_score=txn.fraud_score)
            return fallback_analysis(txn)

        log.info("analysis_completed", threat_level=result.threat_level.value)
        return result
