"""Insightology: trading prediction records (insights) and their adapters."""

from __future__ import annotations

from insightology.framework import InsightFramework
from insightology.models import (
    Insight,
    InsightDirection,
    InsightScore,
    InsightScoreType,
    InsightType,
)

__all__ = [
    "Insight",
    "InsightDirection",
    "InsightFramework",
    "InsightScore",
    "InsightScoreType",
    "InsightType",
]
