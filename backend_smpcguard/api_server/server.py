"""
FastAPI server: scoring and analysis endpoints.

POST /transactions scores a submission (and explains it when gated in),
POST /analysis explains an already-scored transaction, POST /stats
aggregates a caller-supplied history. The server keeps no history itself.
"""

from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from backend_smpcguard import __version__
from backend_smpcguard.analysis.gateway import AnalysisGateway
from backend_smpcguard.core.exceptions import InvalidTransactionInput
from backend_smpcguard.guard_logging import get_logger
from backend_smpcguard.pipeline import submit_transaction
from backend_smpcguard.scoring.engine import ScoreEngine
from backend_smpcguard.scoring.models import FraudStatus, SMPCShares, Transaction
from backend_smpcguard.scoring.stats import compute_security_stats

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Dependencies (overridable in tests via app.dependency_overrides)
# -----------------------------------------------------------------------------

_engine: ScoreEngine | None = None
_gateway: AnalysisGateway | None = None


def get_engine() -> ScoreEngine:
    global _engine
    if _engine is None:
        _engine = ScoreEngine()
    return _engine


def get_gateway() -> AnalysisGateway:
    global _gateway
    if _gateway is None:
        _gateway = AnalysisGateway()
    return _gateway


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------

class SubmitTransactionRequest(BaseModel):
    """POST /transactions body."""

    identity: str = Field(..., description="Submitter identity (e.g. email); never echoed back")
    amount: float = Field(..., description="Transaction amount, >= 0")


class SharesModel(BaseModel):
    party_a: float = Field(..., alias="partyA")
    party_b: float = Field(..., alias="partyB")
    party_c: float = Field(..., alias="partyC")

    model_config = ConfigDict(populate_by_name=True)


class TransactionModel(BaseModel):
    """Wire form of a scored transaction, as returned by POST /transactions."""

    id: str
    user_id: str = Field(..., alias="userId")
    amount: float = Field(..., ge=0)
    device_score: float = Field(..., alias="deviceScore", ge=0, le=1)
    fraud_score: float = Field(..., alias="fraudScore", ge=0, le=1)
    status: FraudStatus
    timestamp: str
    shares: SharesModel

    model_config = ConfigDict(populate_by_name=True)

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.id,
            user_id=self.user_id,
            amount=self.amount,
            device_score=self.device_score,
            fraud_score=self.fraud_score,
            status=self.status,
            timestamp=self.timestamp,
            shares=SMPCShares(self.shares.party_a, self.shares.party_b, self.shares.party_c),
        )


class AnalysisResponse(BaseModel):
    summary: str
    threatLevel: str
    recommendation: str


class StatsRequest(BaseModel):
    transactions: list[TransactionModel] = Field(default_factory=list)


class StatsResponse(BaseModel):
    totalTransactions: int
    fraudDetected: int
    normalProcessed: int
    averageRisk: float


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------

app = FastAPI(title="SMPC Guard API", version=__version__)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/transactions")
async def create_transaction(
    body: SubmitTransactionRequest,
    engine: ScoreEngine = Depends(get_engine),
    gateway: AnalysisGateway = Depends(get_gateway),
) -> dict:
    try:
        result = await submit_transaction(body.identity, body.amount, engine=engine, gateway=gateway)
    except InvalidTransactionInput as e:
        logger.info("transaction_rejected", error=str(e))
        raise HTTPException(status_code=422, detail=str(e)) from e
    return result.to_dict()


@app.post("/analysis", response_model=AnalysisResponse)
async def analyze_transaction(
    body: TransactionModel,
    gateway: AnalysisGateway = Depends(get_gateway),
) -> dict:
    try:
        txn = body.to_transaction()
    except InvalidTransactionInput as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    result = await gateway.analyze(txn)
    return result.to_dict()


@app.post("/stats", response_model=StatsResponse)
def stats(body: StatsRequest) -> dict:
    try:
        txns = [t.to_transaction() for t in body.transactions]
    except InvalidTransactionInput as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return compute_security_stats(txns).to_dict()
