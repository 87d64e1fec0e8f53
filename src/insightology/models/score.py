from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from insightology.models.enums import InsightScoreType

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class InsightScore:
    """Most recent scores for an insight.

    Owned by exactly one insight (and any clones of it). The scoring engine
    holds a reference and updates it in place as the outcome becomes known.
    """

    direction: float = 0.0
    magnitude: float = 0.0
    updated_time_utc: datetime | None = None
    is_final_score: bool = False

    def set_score(
        self, score_type: InsightScoreType, value: float, algorithm_utc_time: datetime
    ) -> None:
        """Store a score clamped into [0, 1]. No-op once the score is final."""
        if self.is_final_score:
            logger.debug("Ignoring %s score update on a final score", score_type)
            return

        clamped = max(0.0, min(1.0, value))
        if score_type == InsightScoreType.DIRECTION:
            self.direction = clamped
        elif score_type == InsightScoreType.MAGNITUDE:
            self.magnitude = clamped
        else:
            raise ValueError(f"Unknown score type: {score_type!r}")
        self.updated_time_utc = algorithm_utc_time

    def finalize(self, algorithm_utc_time: datetime) -> None:
        self.is_final_score = True
        self.updated_time_utc = algorithm_utc_time

    def get_score(self, score_type: InsightScoreType) -> float:
        if score_type == InsightScoreType.DIRECTION:
            return self.direction
        if score_type == InsightScoreType.MAGNITUDE:
            return self.magnitude
        raise ValueError(f"Unknown score type: {score_type!r}")

    def __str__(self) -> str:
        return f"Direction: {round(self.direction, 2)} Magnitude: {round(self.magnitude, 2)}"
