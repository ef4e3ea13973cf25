"""
Backend SMPC Guard — simulated privacy-preserving fraud scoring.

Scores a single (identity, amount) submission, splits the resulting fraud
score into three additive shares, and augments flagged results with an
explanation from an external reasoning service (with a local fallback).
"""

__version__ = "0.1.0"
