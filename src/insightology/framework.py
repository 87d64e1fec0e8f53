"""Privileged access to the insight fields owned by the hosting framework.

Algorithms create insights; the framework hosting them stamps the generated
and close times from its clock and fills in the reference and estimated
values. Those writes go through ``InsightFramework`` rather than the public
read-only view of ``Insight``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from insightology.models.insight import Insight

logger = logging.getLogger(__name__)

CloseTimeProvider = Callable[[Insight, datetime], datetime]


def naive_close_time(insight: Insight, generated_time_utc: datetime) -> datetime:
    """Close time as generated time plus period, ignoring market hours."""
    return generated_time_utc + insight.period


def _to_decimal(value: Decimal | float | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # via str so 0.1 becomes Decimal("0.1")
    return Decimal(str(value))


class InsightFramework:
    """Sets generated/close times and reference/estimated values on insights.

    ``close_time_provider`` lets a host plug in market-calendar-aware close
    times. The default adds the period to the generated time.
    """

    def __init__(self, close_time_provider: CloseTimeProvider | None = None) -> None:
        self._close_time_provider = close_time_provider or naive_close_time

    def stamp(
        self,
        insight: Insight,
        generated_time_utc: datetime,
        close_time_utc: datetime | None = None,
    ) -> Insight:
        """Set the generated time and close time of ``insight``.

        An explicit ``close_time_utc`` wins over the close time provider.
        Returns the same insight for chaining.
        """
        if close_time_utc is None:
            close_time_utc = self._close_time_provider(insight, generated_time_utc)

        insight._generated_time_utc = generated_time_utc
        insight._close_time_utc = close_time_utc
        logger.debug(
            "Stamped insight %s: generated=%s close=%s",
            insight.id, generated_time_utc, close_time_utc,
        )
        return insight

    def restore_times(
        self,
        insight: Insight,
        generated_time_utc: datetime | None,
        close_time_utc: datetime | None,
    ) -> Insight:
        """Set both times exactly as given, e.g. when decoding a stored insight.

        Unlike ``stamp`` nothing is derived: a missing close time stays missing.
        """
        insight._generated_time_utc = generated_time_utc
        insight._close_time_utc = close_time_utc
        return insight

    def set_reference_value(
        self, insight: Insight, value: Decimal | float | int | str
    ) -> Insight:
        insight._reference_value = _to_decimal(value)
        return insight

    def set_estimated_value(
        self, insight: Insight, value: Decimal | float | int | str
    ) -> Insight:
        insight._estimated_value = _to_decimal(value)
        return insight
