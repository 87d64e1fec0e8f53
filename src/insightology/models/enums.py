from __future__ import annotations

import math
from enum import IntEnum, StrEnum


class InsightType(StrEnum):
    PRICE = "price"
    VOLATILITY = "volatility"


class InsightDirection(IntEnum):
    # Values are the sign of the predicted change
    DOWN = -1
    FLAT = 0
    UP = 1

    @classmethod
    def from_sign(cls, value: float) -> InsightDirection:
        if math.isnan(value):
            raise ValueError("Cannot take the sign of NaN")
        if value > 0:
            return cls.UP
        if value < 0:
            return cls.DOWN
        return cls.FLAT


class InsightScoreType(StrEnum):
    DIRECTION = "direction"
    MAGNITUDE = "magnitude"
