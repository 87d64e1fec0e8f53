from __future__ import annotations

import json
import math
import uuid
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from insightology.framework import InsightFramework
from insightology.models import Insight, InsightDirection, InsightScoreType, InsightType
from insightology.serialization import (
    SerializedInsight,
    deserialize_insight,
    from_json,
    serialize_insight,
    to_json,
)

GENERATED = datetime(2024, 3, 4, 14, 30, 0)


def _scored_insight() -> Insight:
    insight = Insight.from_generated_time(
        GENERATED, "AAPL", InsightType.PRICE, InsightDirection.DOWN, timedelta(hours=2), -1.5, 0.65
    )
    framework = InsightFramework()
    framework.set_reference_value(insight, Decimal("171.48"))
    framework.set_estimated_value(insight, Decimal("-3.2"))
    insight.score.set_score(InsightScoreType.DIRECTION, 0.8, GENERATED + timedelta(hours=1))
    insight.score.set_score(InsightScoreType.MAGNITUDE, 0.4, GENERATED + timedelta(hours=1))
    insight.score.finalize(GENERATED + timedelta(hours=2))
    return insight


class TestSerializeInsight:
    def test_flattens_fields(self) -> None:
        insight = _scored_insight()
        model = serialize_insight(insight, source_model="momentum")
        assert model.id == insight.id.hex
        assert model.source_model == "momentum"
        assert model.generated_time == 1709562600.0
        assert model.close_time == 1709562600.0 + 7200
        assert model.symbol == "AAPL"
        assert model.type == InsightType.PRICE
        assert model.direction == "down"
        assert model.period == 7200.0
        assert model.magnitude == -1.5
        assert model.confidence == 0.65
        assert model.reference_value == Decimal("171.48")
        assert model.estimated_value == Decimal("-3.2")
        assert model.score_is_final is True
        assert model.score_direction == pytest.approx(0.8)
        assert model.score_magnitude == pytest.approx(0.4)

    def test_unstamped_times_are_null(self) -> None:
        model = serialize_insight(Insight.price_magnitude("AAPL", 1.0, timedelta(days=1)))
        assert model.generated_time is None
        assert model.close_time is None

    def test_json_uses_kebab_case_keys(self) -> None:
        payload = json.loads(to_json(_scored_insight()))
        assert payload["direction"] == "down"
        assert payload["type"] == "price"
        assert "generated-time" in payload
        assert "score-final" in payload
        assert "estimated-value" in payload
        assert payload["reference"] == "171.48"


class TestDeserializeInsight:
    def test_json_preserves_record(self) -> None:
        original = _scored_insight()
        restored = from_json(to_json(original))
        assert restored.id == original.id
        assert restored == original
        assert restored.symbol == "AAPL"
        assert restored.direction == InsightDirection.DOWN
        assert restored.period == timedelta(hours=2)
        assert restored.generated_time_utc == GENERATED
        assert restored.close_time_utc == GENERATED + timedelta(hours=2)
        assert restored.reference_value == Decimal("171.48")
        assert restored.estimated_value == Decimal("-3.2")
        assert restored.score.is_final_score is True
        assert restored.score.direction == pytest.approx(0.8)
        assert restored.score.updated_time_utc == GENERATED + timedelta(hours=2)
        assert restored.score is not original.score

    def test_generated_time_without_close_time(self) -> None:
        model = SerializedInsight(
            id=uuid.uuid4().hex,
            symbol="MSFT",
            type="price",
            direction="up",
            period=86400,
            generated_time=1709562600.0,
        )
        insight = deserialize_insight(model)
        assert insight.generated_time_utc == GENERATED
        assert insight.close_time_utc is None

    def test_close_time_without_generated_time(self) -> None:
        model = SerializedInsight(
            id=uuid.uuid4().hex,
            symbol="MSFT",
            type="price",
            direction="up",
            period=86400,
            close_time=1709562600.0,
        )
        insight = deserialize_insight(model)
        assert insight.generated_time_utc is None
        assert insight.close_time_utc == GENERATED

    def test_unscored_insight_has_no_score_time(self) -> None:
        restored = from_json(to_json(Insight.price_magnitude("AAPL", 1.0, timedelta(days=1))))
        assert restored.score.updated_time_utc is None

    def test_nan_and_infinity_kept(self) -> None:
        insight = Insight(
            "AAPL", InsightType.VOLATILITY, InsightDirection.UP, timedelta(days=1), math.nan, math.inf
        )
        restored = from_json(to_json(insight))
        assert restored.magnitude is not None and math.isnan(restored.magnitude)
        assert restored.confidence == math.inf

    def test_symbol_factory(self) -> None:
        restored = from_json(to_json(_scored_insight()), symbol_factory=str.lower)
        assert restored.symbol == "aapl"

    def test_accepts_field_names(self) -> None:
        model = SerializedInsight(
            id="0f8fad5bd9cb469fa16570867728950e",
            symbol="MSFT",
            type="volatility",
            direction="flat",
            period=60,
        )
        insight = deserialize_insight(model)
        assert insight.type == InsightType.VOLATILITY
        assert insight.direction == InsightDirection.FLAT
        assert insight.period == timedelta(minutes=1)
        assert insight.generated_time_utc is None
        assert insight.magnitude is None

    def test_rejects_bad_id(self) -> None:
        with pytest.raises(ValidationError):
            SerializedInsight(id="nope", symbol="MSFT", type="price", direction="up", period=60)

    def test_rejects_bad_direction(self) -> None:
        with pytest.raises(ValidationError):
            from_json(
                '{"id": "0f8fad5bd9cb469fa16570867728950e", "symbol": "MSFT",'
                ' "type": "price", "direction": "sideways", "period": 60}'
            )
