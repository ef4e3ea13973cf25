"""
Core utilities: shared exceptions and cross-cutting concerns.
"""

from backend_smpcguard.core.exceptions import (
    AnalysisUnavailable,
    InvalidShareInput,
    InvalidTransactionInput,
    SMPCGuardError,
)

__all__ = [
    "AnalysisUnavailable",
    "InvalidShareInput",
    "InvalidTransactionInput",
    "SMPCGuardError",
]
