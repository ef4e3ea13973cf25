"""
Main entrypoint: FastAPI server, or a one-shot scoring run.

Serve:    python main.py                (API_HOST, API_PORT, LOG_LEVEL from env)
One-shot: python main.py score alice@example.com 8200

API-only: uvicorn backend_smpcguard.api_server.app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

# Configure structured JSON logging before other imports that may log
from backend_smpcguard.guard_logging import get_logger

logger = get_logger("main")


def _run_server() -> None:
    import uvicorn

    from backend_smpcguard.api_server.app import app
    from backend_smpcguard.config import get_settings

    settings = get_settings()
    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        analysis_credential=settings.has_analysis_credential,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


def _run_score(identity: str, amount: float) -> int:
    from backend_smpcguard.core.exceptions import InvalidTransactionInput
    from backend_smpcguard.pipeline import submit_transaction

    try:
        result = asyncio.run(submit_transaction(identity, amount))
    except InvalidTransactionInput as e:
        logger.error("main_invalid_input", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="SMPC Guard fraud scoring")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", help="Run the HTTP API (default)")
    score = sub.add_parser("score", help="Score one transaction and print the result as JSON")
    score.add_argument("identity", help="Submitter identity, e.g. an email address")
    score.add_argument("amount", type=float, help="Transaction amount")
    args = parser.parse_args(argv)

    if args.command == "score":
        return _run_score(args.identity, args.amount)
    _run_server()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
