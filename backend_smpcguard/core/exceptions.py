"""
Application-level exceptions.

Validation errors subclass ValueError so callers that already guard numeric
input with `except ValueError` keep working.
"""


class SMPCGuardError(Exception):
    """Base class for all SMPC Guard errors."""


class InvalidTransactionInput(SMPCGuardError, ValueError):
    """Identity or amount rejected before scoring (empty, negative, non-finite)."""


class InvalidShareInput(SMPCGuardError, ValueError):
    """Value cannot be split into shares (negative or non-finite)."""


class AnalysisUnavailable(SMPCGuardError):
    """
    External analysis could not produce usable content.

    Raised by the analysis client; the gateway converts it to a fallback
    result and never lets it reach the caller.
    """
