"""
Scoring package: fraud score, classification, and additive score shares.

ScoreEngine turns an (identity, amount) submission into a Transaction whose
fraud score is also split into three additive shares by ShareGenerator.
"""

from backend_smpcguard.scoring.cipher import decode_cipher, encrypt_value
from backend_smpcguard.scoring.device_risk import (
    DeviceRiskProvider,
    FixedDeviceRiskProvider,
    RandomDeviceRiskProvider,
)
from backend_smpcguard.scoring.engine import (
    ScoreEngine,
    classify,
    compute_fraud_score,
    needs_analysis,
    process_transaction,
)
from backend_smpcguard.scoring.models import (
    AnalysisResult,
    FraudStatus,
    SMPCShares,
    ThreatLevel,
    Transaction,
)
from backend_smpcguard.scoring.random_source import RandomSource, SequenceRandom
from backend_smpcguard.scoring.shares import ShareGenerator, generate_shares, reconstruct
from backend_smpcguard.scoring.stats import SecurityStats, compute_security_stats

__all__ = [
    "decode_cipher",
    "encrypt_value",
    "DeviceRiskProvider",
    "FixedDeviceRiskProvider",
    "RandomDeviceRiskProvider",
    "ScoreEngine",
    "classify",
    "compute_fraud_score",
    "needs_analysis",
    "process_transaction",
    "AnalysisResult",
    "FraudStatus",
    "SMPCShares",
    "ThreatLevel",
    "Transaction",
    "RandomSource",
    "SequenceRandom",
    "ShareGenerator",
    "generate_shares",
    "reconstruct",
    "SecurityStats",
    "compute_security_stats",
]
