"""
Structured logging for SMPC Guard.

JSON logs with timestamp, event_type, transaction_id where relevant.
Use get_logger() in all modules.
"""

from backend_smpcguard.guard_logging.logger import bind_transaction, get_logger

__all__ = ["bind_transaction", "get_logger"]
