"""Transport model for insights.

``SerializedInsight`` is the flat, JSON-friendly shape of an ``Insight``:
times are Unix seconds, the period is seconds, the symbol is its string
form and the score is flattened into ``score-*`` keys.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Hashable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from insightology.framework import InsightFramework
from insightology.models.enums import InsightDirection, InsightType
from insightology.models.insight import Insight
from insightology.models.score import InsightScore

logger = logging.getLogger(__name__)


class SerializedInsight(BaseModel):
    # NaN and infinities travel as the NaN/Infinity literals, not null
    model_config = ConfigDict(populate_by_name=True, ser_json_inf_nan="constants")

    id: str
    source_model: str = Field("", alias="source-model")
    generated_time: float | None = Field(None, alias="generated-time")
    close_time: float | None = Field(None, alias="close-time")
    symbol: str
    type: InsightType
    reference_value: Decimal = Field(Decimal("0"), alias="reference")
    direction: Literal["down", "flat", "up"]
    period: float
    magnitude: float | None = None
    confidence: float | None = None
    score_is_final: bool = Field(False, alias="score-final")
    score_magnitude: float = Field(0.0, alias="score-magnitude")
    score_direction: float = Field(0.0, alias="score-direction")
    score_updated_time: float | None = Field(None, alias="score-updated-time")
    estimated_value: Decimal = Field(Decimal("0"), alias="estimated-value")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        return uuid.UUID(hex=v).hex


def _to_unix(value: datetime | None) -> float | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _from_unix(value: float | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)


def serialize_insight(insight: Insight, source_model: str = "") -> SerializedInsight:
    score = insight.score
    return SerializedInsight(
        id=insight.id.hex,
        source_model=source_model,
        generated_time=_to_unix(insight.generated_time_utc),
        close_time=_to_unix(insight.close_time_utc),
        symbol=str(insight.symbol),
        type=insight.type,
        reference_value=insight.reference_value,
        direction=insight.direction.name.lower(),
        period=insight.period.total_seconds(),
        magnitude=insight.magnitude,
        confidence=insight.confidence,
        score_is_final=score.is_final_score,
        score_magnitude=score.magnitude,
        score_direction=score.direction,
        score_updated_time=_to_unix(score.updated_time_utc),
        estimated_value=insight.estimated_value,
    )


def deserialize_insight(
    serialized: SerializedInsight,
    symbol_factory: Callable[[str], Hashable] = str,
) -> Insight:
    """Rebuild an ``Insight`` from its transport model.

    ``symbol_factory`` maps the serialized symbol string back to whatever
    symbol type the caller uses.
    """
    score = InsightScore(
        direction=serialized.score_direction,
        magnitude=serialized.score_magnitude,
        updated_time_utc=_from_unix(serialized.score_updated_time),
        is_final_score=serialized.score_is_final,
    )
    insight = Insight.restore(
        uuid.UUID(hex=serialized.id),
        symbol_factory(serialized.symbol),
        serialized.type,
        InsightDirection[serialized.direction.upper()],
        timedelta(seconds=serialized.period),
        serialized.magnitude,
        serialized.confidence,
        score=score,
    )

    framework = InsightFramework()
    framework.restore_times(
        insight,
        _from_unix(serialized.generated_time),
        _from_unix(serialized.close_time),
    )
    framework.set_reference_value(insight, serialized.reference_value)
    framework.set_estimated_value(insight, serialized.estimated_value)
    logger.debug("Decoded insight %s for %s", insight.id, insight.symbol)
    return insight


def to_json(insight: Insight, source_model: str = "") -> str:
    return serialize_insight(insight, source_model).model_dump_json(by_alias=True)


def from_json(text: str | bytes, symbol_factory: Callable[[str], Hashable] = str) -> Insight:
    return deserialize_insight(SerializedInsight.model_validate_json(text), symbol_factory)
