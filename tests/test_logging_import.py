"""
Test that guard_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from guard_logging and use the logger."""
    from backend_smpcguard.guard_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_bind_transaction_smoke():
    from backend_smpcguard.guard_logging import bind_transaction

    log = bind_transaction("TXN-SMOKE0001")
    log.warning("test_bound_message", fraud_score=0.5)


def test_sensitive_keys_are_redacted():
    from backend_smpcguard.guard_logging.logger import _redact_sensitive

    out = _redact_sensitive(None, "info", {"identity": "a@b.c", "api_key": "AIza***", "amount": 5})
    assert out == {"identity": "***", "api_key": "AIza***", "amount": 5}
