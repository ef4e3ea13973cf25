"""
Submission workflow: score -> (optional) explain.

Single entrypoint for the API and the demo runner. Scores the submission,
then asks the analysis gateway for an explanation only when the result is
flagged or borderline (needs_analysis). The caller awaits the analysis
before the result is returned; there is no cancellation path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from backend_smpcguard.analysis.gateway import AnalysisGateway
from backend_smpcguard.guard_logging import get_logger
from backend_smpcguard.scoring.engine import ScoreEngine, needs_analysis
from backend_smpcguard.scoring.models import AnalysisResult, Transaction

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    transaction: Transaction
    analysis: AnalysisResult | None
    """None when the transaction did not meet the analysis gate."""

    def to_dict(self) -> dict[str, Any]:
        out = self.transaction.to_dict()
        out["analysis"] = self.analysis.to_dict() if self.analysis is not None else None
        return out


async def submit_transaction(
    identity: str,
    amount: float,
    *,
    engine: ScoreEngine | None = None,
    gateway: AnalysisGateway | None = None,
) -> SubmissionResult:
    """
    Score one submission and explain it when warranted.

    Raises InvalidTransactionInput for invalid input; analysis failures never
    propagate (the gateway falls back).
    """
    engine = engine or ScoreEngine()
    txn = engine.process(identity, amount)

    analysis: AnalysisResult | None = None
    if needs_analysis(txn):
        gateway = gateway or AnalysisGateway()
        analysis = await gateway.analyze(txn)
    else:
        logger.debug("analysis_skipped", transaction_id=txn.id, fraud_score=txn.fraud_score)

    logger.info(
        "submission_complete",
        transaction_id=txn.id,
        status=txn.status.value,
        analyzed=analysis is not None,
    )
    return SubmissionResult(transaction=txn, analysis=analysis)
