"""
Aggregate statistics over a caller-owned list of transactions.

The core keeps no history; the presentation layer passes in whatever it
has accumulated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from backend_smpcguard.scoring.models import FraudStatus, Transaction


@dataclass(frozen=True)
class SecurityStats:
    total_transactions: int
    fraud_detected: int
    normal_processed: int
    """Everything not classified FRAUD."""
    average_risk: float
    """Mean fraud score, rounded to 2 decimals; 0.0 when there are no transactions."""

    def to_dict(self) -> dict[str, float | int]:
        return {
            "totalTransactions": self.total_transactions,
            "fraudDetected": self.fraud_detected,
            "normalProcessed": self.normal_processed,
            "averageRisk": self.average_risk,
        }


def compute_security_stats(transactions: Iterable[Transaction]) -> SecurityStats:
    txns = list(transactions)
    total = len(txns)
    fraud = sum(1 for t in txns if t.status == FraudStatus.FRAUD)
    avg = sum(t.fraud_score for t in txns) / total if total else 0.0
    return SecurityStats(
        total_transactions=total,
        fraud_detected=fraud,
        normal_processed=total - fraud,
        average_risk=round(avg, 2),
    )
