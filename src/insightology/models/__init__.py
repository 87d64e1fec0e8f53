from __future__ import annotations

from insightology.models.enums import InsightDirection, InsightScoreType, InsightType
from insightology.models.insight import Insight
from insightology.models.score import InsightScore

__all__ = [
    # enums
    "InsightType",
    "InsightDirection",
    "InsightScoreType",
    # score
    "InsightScore",
    # insight
    "Insight",
]
