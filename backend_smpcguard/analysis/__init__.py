"""
Analysis package: natural-language explanation of classified transactions.
"""

from backend_smpcguard.analysis.client import AnalysisClient, GeminiClient
from backend_smpcguard.analysis.gateway import (
    FALLBACK_RECOMMENDATION,
    FALLBACK_SUMMARY,
    AnalysisGateway,
    build_analysis_prompt,
    fallback_analysis,
    parse_analysis,
)
from backend_smpcguard.analysis.schemas import AnalysisPayload

__all__ = [
    "AnalysisClient",
    "GeminiClient",
    "FALLBACK_RECOMMENDATION",
    "FALLBACK_SUMMARY",
    "AnalysisGateway",
    "build_analysis_prompt",
    "fallback_analysis",
    "parse_analysis",
    "AnalysisPayload",
]
