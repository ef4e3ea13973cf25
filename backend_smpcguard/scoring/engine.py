"""
Score engine: device-risk signal, weighted fraud score, classification, shares.

Policy (rule-based, fully explainable):
  normalized_amount = min(amount / 10000, 1)
  amount_weight     = 0.7 if amount > 7000 else 0.3
  fraud_score       = clamp(round(normalized_amount * amount_weight + device_score * 0.5, 3), 0, 1)
  status            = FRAUD if amount > 9500 or (fraud_score > 0.8 and amount > 1000) else NORMAL

Every call draws a fresh token, device signal and shares; process() is not
idempotent. Token collisions are not detected.
"""

from __future__ import annotations

import base64
import math
from datetime import datetime, timezone
from typing import Callable

from backend_smpcguard.core.exceptions import InvalidTransactionInput
from backend_smpcguard.guard_logging import get_logger
from backend_smpcguard.scoring.device_risk import DeviceRiskProvider, RandomDeviceRiskProvider
from backend_smpcguard.scoring.models import FraudStatus, Transaction
from backend_smpcguard.scoring.random_source import (
    RandomSource,
    default_random_source,
    random_token,
)
from backend_smpcguard.scoring.shares import ShareGenerator

logger = get_logger(__name__)

AMOUNT_NORMALIZER = 10_000.0
HIGH_AMOUNT_THRESHOLD = 7_000.0
HIGH_AMOUNT_WEIGHT = 0.7
LOW_AMOUNT_WEIGHT = 0.3
DEVICE_WEIGHT = 0.5
FRAUD_SCORE_DECIMALS = 3

# Classification
FRAUD_AMOUNT_THRESHOLD = 9_500.0
FRAUD_SCORE_THRESHOLD = 0.8
FRAUD_SCORE_MIN_AMOUNT = 1_000.0

# Workflow gate for requesting an explanation
ANALYSIS_SCORE_THRESHOLD = 0.6

TRANSACTION_ID_PREFIX = "TXN-"
TRANSACTION_TOKEN_LENGTH = 9
USER_ID_PREFIX = "USR-"
USER_ID_LENGTH = 8


def normalize_amount(amount: float) -> float:
    return min(amount / AMOUNT_NORMALIZER, 1.0)


def amount_weight(amount: float) -> float:
    return HIGH_AMOUNT_WEIGHT if amount > HIGH_AMOUNT_THRESHOLD else LOW_AMOUNT_WEIGHT


def compute_fraud_score(amount: float, device_score: float) -> float:
    """Weighted score in [0, 1], rounded to 3 decimals."""
    raw = normalize_amount(amount) * amount_weight(amount) + device_score * DEVICE_WEIGHT
    return max(0.0, min(round(raw, FRAUD_SCORE_DECIMALS), 1.0))


def classify(amount: float, fraud_score: float) -> FraudStatus:
    if amount > FRAUD_AMOUNT_THRESHOLD:
        return FraudStatus.FRAUD
    if fraud_score > FRAUD_SCORE_THRESHOLD and amount > FRAUD_SCORE_MIN_AMOUNT:
        return FraudStatus.FRAUD
    return FraudStatus.NORMAL


def needs_analysis(txn: Transaction) -> bool:
    """Gate used by callers before asking the analysis gateway for an explanation."""
    return txn.status == FraudStatus.FRAUD or txn.fraud_score > ANALYSIS_SCORE_THRESHOLD


def make_transaction_id(rng: RandomSource) -> str:
    return TRANSACTION_ID_PREFIX + random_token(rng, TRANSACTION_TOKEN_LENGTH).upper()


def make_user_id(identity: str) -> str:
    """USR- plus the first 8 base64 characters of the identity, upper-cased."""
    encoded = base64.b64encode(identity.encode("utf-8")).decode("ascii")
    return USER_ID_PREFIX + encoded[:USER_ID_LENGTH].upper()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _validate_inputs(identity: str, amount: float) -> tuple[str, float]:
    if not isinstance(identity, str) or not identity.strip():
        raise InvalidTransactionInput("identity must be a non-empty string")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidTransactionInput(f"amount must be a real number, got {amount!r}")
    try:
        amount = float(amount)
    except OverflowError as e:
        raise InvalidTransactionInput(f"amount is too large to score: {e}") from e
    if not math.isfinite(amount):
        raise InvalidTransactionInput(f"amount must be finite, got {amount!r}")
    if amount < 0:
        raise InvalidTransactionInput(f"amount must be >= 0, got {amount!r}")
    return identity, amount


class ScoreEngine:
    """
    Produces a scored, classified Transaction (with shares) per submission.

    Holds no per-transaction state; the only things consumed between calls
    are the injected random source and clock.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        *,
        device_risk: DeviceRiskProvider | None = None,
        share_generator: ShareGenerator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Args:
            rng: Random source for tokens; also used by the default device-risk
                provider and share generator when those are not given.
            device_risk: Provider of the device-risk signal.
            share_generator: Splitter for the fraud score.
            clock: Returns the creation time; defaults to UTC now.
        """
        self._rng = rng if rng is not None else default_random_source()
        self._device_risk = device_risk if device_risk is not None else RandomDeviceRiskProvider(self._rng)
        self._shares = share_generator if share_generator is not None else ShareGenerator(self._rng)
        self._clock = clock or _utc_now

    def _device_score(self, identity: str, amount: float) -> float:
        score = float(self._device_risk.device_score(identity, amount))
        if not math.isfinite(score):
            logger.warning("device_score_non_finite", device_score=str(score))
            score = 1.0
        clamped = max(0.0, min(score, 1.0))
        if clamped != score:
            logger.warning("device_score_clamped", device_score=score, clamped=clamped)
        return clamped

    def process(self, identity: str, amount: float) -> Transaction:
        """
        Score one submission.

        Raises InvalidTransactionInput for an empty identity or a negative or
        non-finite amount. Any other valid input yields a Transaction.
        """
        identity, amount = _validate_inputs(identity, amount)

        txn_id = make_transaction_id(self._rng)
        user_id = make_user_id(identity)
        device_score = self._device_score(identity, amount)
        fraud_score = compute_fraud_score(amount, device_score)
        status = classify(amount, fraud_score)
        shares = self._shares.split(fraud_score)

        txn = Transaction(
            id=txn_id,
            user_id=user_id,
            amount=amount,
            device_score=device_score,
            fraud_score=fraud_score,
            status=status,
            timestamp=self._clock().isoformat(),
            shares=shares,
        )
        logger.info(
            "transaction_scored",
            transaction_id=txn.id,
            user_id=user_id,
            amount=amount,
            device_score=device_score,
            fraud_score=fraud_score,
            status=status.value,
        )
        return txn


def process_transaction(identity: str, amount: float, rng: RandomSource | None = None) -> Transaction:
    """Score one submission with a throwaway ScoreEngine."""
    return ScoreEngine(rng).process(identity, amount)
