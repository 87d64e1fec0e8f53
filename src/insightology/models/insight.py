from __future__ import annotations

import math
import uuid
from collections.abc import Hashable
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from insightology.models.enums import InsightDirection, InsightType
from insightology.models.score import InsightScore


def _format_number(value: float) -> str:
    """Whole numbers without a trailing .0 (2.0 -> "2", 2.5 -> "2.5")."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return str(value)


def _float_key(value: float | None) -> object:
    """Comparison/hash key for an optional float where NaN equals NaN."""
    if value is not None and math.isnan(value):
        return "nan"
    return value


class Insight:
    """A prediction for a single symbol generated by an algorithm.

    The record is read-only to general callers. The fields owned by the
    hosting framework (generated/close time, reference and estimated value)
    are written through ``insightology.framework.InsightFramework``.

    Equality short-circuits on ``id``: two insights with the same id are
    equal whatever their other fields. Otherwise they are equal when symbol,
    type, direction, period, magnitude and confidence all match. The hash
    covers only those six fields and ignores ``id``, so two equal-by-id
    insights with different fields usually hash apart. Keep that in mind
    before using insights with mixed ids as set members or dict keys.
    """

    def __init__(
        self,
        symbol: Hashable,
        type: InsightType,
        direction: InsightDirection,
        period: timedelta,
        magnitude: float | None = None,
        confidence: float | None = None,
    ) -> None:
        self._id = uuid.uuid4()
        self._score = InsightScore()

        self._symbol = symbol
        self._type = type
        self._direction = direction
        self._period = period

        # Optional
        self._magnitude = magnitude
        self._confidence = confidence

        # Framework-assigned
        self._generated_time_utc: datetime | None = None
        self._close_time_utc: datetime | None = None
        self._reference_value = Decimal("0")
        self._estimated_value = Decimal("0")

    @classmethod
    def from_generated_time(
        cls,
        generated_time_utc: datetime,
        symbol: Hashable,
        type: InsightType,
        direction: InsightDirection,
        period: timedelta,
        magnitude: float | None = None,
        confidence: float | None = None,
    ) -> Insight:
        """Create an insight with its generated and close times already set.

        Mostly for tests and offline use. Inside a running algorithm the
        framework stamps these times from the algorithm clock instead.
        """
        insight = cls(symbol, type, direction, period, magnitude, confidence)
        insight._generated_time_utc = generated_time_utc
        insight._close_time_utc = generated_time_utc + period
        return insight

    @classmethod
    def price_magnitude(
        cls,
        symbol: Hashable,
        magnitude: float,
        period: timedelta,
        confidence: float | None = None,
    ) -> Insight:
        """Create a price insight whose direction is the sign of ``magnitude``."""
        direction = InsightDirection.from_sign(magnitude)
        return cls(symbol, InsightType.PRICE, direction, period, magnitude, confidence)

    @classmethod
    def restore(
        cls,
        id: uuid.UUID,
        symbol: Hashable,
        type: InsightType,
        direction: InsightDirection,
        period: timedelta,
        magnitude: float | None = None,
        confidence: float | None = None,
        score: InsightScore | None = None,
    ) -> Insight:
        """Rebuild an insight with a known id, e.g. from a transport model."""
        insight = cls(symbol, type, direction, period, magnitude, confidence)
        insight._id = id
        if score is not None:
            insight._score = score
        return insight

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def generated_time_utc(self) -> datetime | None:
        return self._generated_time_utc

    @property
    def close_time_utc(self) -> datetime | None:
        return self._close_time_utc

    @property
    def symbol(self) -> Hashable:
        return self._symbol

    @property
    def type(self) -> InsightType:
        return self._type

    @property
    def reference_value(self) -> Decimal:
        """Value the prediction is measured against (price or volatility)."""
        return self._reference_value

    @property
    def direction(self) -> InsightDirection:
        return self._direction

    @property
    def period(self) -> timedelta:
        return self._period

    @property
    def magnitude(self) -> float | None:
        """Predicted percent change in price/volatility."""
        return self._magnitude

    @property
    def confidence(self) -> float | None:
        return self._confidence

    @property
    def score(self) -> InsightScore:
        return self._score

    @property
    def estimated_value(self) -> Decimal:
        """Estimated value of this insight in the account currency."""
        return self._estimated_value

    def is_expired(self, utc_time: datetime) -> bool:
        return self._close_time_utc is not None and utc_time >= self._close_time_utc

    def is_active(self, utc_time: datetime) -> bool:
        return not self.is_expired(utc_time)

    # ------------------------------------------------------------------
    # Cloning
    # ------------------------------------------------------------------

    def clone(self) -> Insight:
        """Copy this insight, keeping its id.

        The copy does NOT get its own score: it shares this insight's
        ``InsightScore``, so score updates through either one are seen by both.
        """
        clone = Insight(
            self._symbol,
            self._type,
            self._direction,
            self._period,
            self._magnitude,
            self._confidence,
        )
        clone._generated_time_utc = self._generated_time_utc
        clone._close_time_utc = self._close_time_utc
        clone._score = self._score
        clone._id = self._id
        clone._estimated_value = self._estimated_value
        clone._reference_value = self._reference_value
        return clone

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def equals(self, other: Any) -> bool:
        if other is None:
            return False
        if other is self:
            return True
        if type(other) is not type(self):
            return False

        if self._id == other._id:
            return True

        return (
            self._symbol == other._symbol
            and self._direction == other._direction
            and self._type == other._type
            and _float_key(self._confidence) == _float_key(other._confidence)
            and _float_key(self._magnitude) == _float_key(other._magnitude)
            and self._period == other._period
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Insight):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Insight):
            return NotImplemented
        return not self.equals(other)

    def __hash__(self) -> int:
        return hash((
            self._symbol,
            self._type,
            self._direction,
            _float_key(self._magnitude),
            _float_key(self._confidence),
            self._period,
        ))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        text = (
            f"{self._id}: {self._symbol} {self._type.name.title()} "
            f"{self._direction.name.title()} within {self._period}"
        )
        if self._magnitude is not None:
            text += f" by {_format_number(self._magnitude)}%"
        if self._confidence is not None:
            text += f" with {_format_number(round(100 * self._confidence, 1))}% confidence"
        return text

    def __repr__(self) -> str:
        return (
            f"Insight(id={self._id}, symbol={self._symbol!r}, type={self._type.name}, "
            f"direction={self._direction.name}, period={self._period!r}, "
            f"magnitude={self._magnitude!r}, confidence={self._confidence!r})"
        )
