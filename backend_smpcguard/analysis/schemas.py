"""
Wire schema for the analysis service response.

The service is asked for {summary, threatLevel, recommendation}; anything
else (wrong types, unknown threat level, missing keys) fails validation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from backend_smpcguard.scoring.models import AnalysisResult, ThreatLevel


class AnalysisPayload(BaseModel):
    """JSON object returned by the analysis service."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    summary: str = Field(..., min_length=1)
    threat_level: Literal["Low", "Medium", "High"] = Field(..., alias="threatLevel")
    recommendation: str = Field(..., min_length=1)

    def to_result(self) -> AnalysisResult:
        return AnalysisResult(
            summary=self.summary,
            threat_level=ThreatLevel(self.threat_level),
            recommendation=self.recommendation,
        )
