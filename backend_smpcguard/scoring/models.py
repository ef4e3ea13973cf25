"""
Data models for the scoring core.

Transaction and SMPCShares are frozen: a submission produces a new record
and nothing mutates it afterwards. AnalysisResult is ephemeral and never
attached back onto the Transaction. to_dict() returns the camelCase wire
form consumed by the presentation layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from backend_smpcguard.core.exceptions import InvalidTransactionInput


class FraudStatus(str, Enum):
    NORMAL = "NORMAL"
    FRAUD = "FRAUD"
    # Not assigned by the current rules; kept as a legal value.
    PENDING = "PENDING"


class ThreatLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class SMPCShares:
    """Three additive shares; party_a + party_b + party_c equals the split value."""

    party_a: float
    party_b: float
    party_c: float

    @property
    def total(self) -> float:
        return self.party_a + self.party_b + self.party_c

    def to_dict(self) -> dict[str, float]:
        return {"partyA": self.party_a, "partyB": self.party_b, "partyC": self.party_c}


@dataclass(frozen=True)
class Transaction:
    """
    One scored submission together with the shares of its fraud score.

    Invariants (checked on construction): amount >= 0 and finite,
    device_score and fraud_score in [0, 1].
    """

    id: str
    """Random transaction token, e.g. TXN-4F7K2Q9ZA. Uniqueness is best-effort."""
    user_id: str
    """Truncated encoding of the identity; not reversible to the input."""
    amount: float
    device_score: float
    fraud_score: float
    status: FraudStatus
    timestamp: str
    """Creation time, ISO 8601."""
    shares: SMPCShares

    def __post_init__(self) -> None:
        if not math.isfinite(self.amount) or self.amount < 0:
            raise InvalidTransactionInput(f"amount must be finite and >= 0, got {self.amount!r}")
        for name in ("device_score", "fraud_score"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise InvalidTransactionInput(f"{name} must be within [0, 1], got {value!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "amount": self.amount,
            "deviceScore": self.device_score,
            "fraudScore": self.fraud_score,
            "status": self.status.value,
            "timestamp": self.timestamp,
            "shares": self.shares.to_dict(),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Natural-language explanation for a classified transaction."""

    summary: str
    threat_level: ThreatLevel
    recommendation: str

    def to_dict(self) -> dict[str, str]:
        return {
            "summary": self.summary,
            "threatLevel": self.threat_level.value,
            "recommendation": self.recommendation,
        }
