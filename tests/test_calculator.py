import math
from datetime import time

from moving_estimator.calculator import EstimateCalculator
from moving_estimator.dictionaries import PRICING_ERROR_MESSAGES, PricingConfig
from moving_estimator.models.cargo import CargoItem, TimeBandSurcharge, WorkOption
from moving_estimator.models.estimate import EstimateRequest

REQUEST = EstimateRequest(
    truck_type="2t",
    items=[
        CargoItem(name="テーブル", points=5, weight=20, quantity=1),
        CargoItem(name="椅子", points=2, weight=5, quantity=4),
        CargoItem(name="冷蔵庫", points=10, weight=60, quantity=1),
    ],
    options=[
        WorkOption(name="エレベーター搬入", price=3000, selected=True),
        WorkOption(name="家具組み立て", price=5000, selected=True),
        WorkOption(name="不用品回収", price=2000, selected=False),
    ],
    distance=15,
    time_surcharges=[
        TimeBandSurcharge(id="1", start="18:00", end="21:00", kind="rate", value=1.2),
        TimeBandSurcharge(id="2", start="06:00", end="09:00", kind="fixed", value=5000),
    ],
    tax_rate=0.1,
)


def test_build_produces_breakdown_and_summary():
    bundle = EstimateCalculator().build(REQUEST)

    assert bundle.result.total == 71170
    assert bundle.total_points == 23
    assert bundle.total_weight == 100
    assert bundle.recommended_truck_types == ["軽トラック", "2tショート"]
    assert bundle.warnings == []
    assert "見積サマリ" in bundle.summary_markdown
    assert "合計（税込）: ￥71,170" in bundle.summary_markdown
    assert "- 家具組み立て" in bundle.summary_markdown
    assert "不用品回収" not in bundle.summary_markdown


def test_custom_config_changes_unit_prices():
    config = PricingConfig(point_unit_price=1000, base_distance=0, distance_price_per_km=100, tax_rate=0.08)
    request = EstimateRequest(
        truck_type="軽トラック",
        items=[CargoItem(name="箱", points=1, quantity=3)],
        distance=2.5,
    )
    result = EstimateCalculator(config=config).calculate(request)

    assert result.cargo_price == 3000
    assert result.distance_price == 300
    assert result.subtotal == 18300
    assert result.tax == 1464
    assert result.total == 19764


def test_unknown_truck_type_is_priced_at_zero_with_warning():
    request = REQUEST.model_copy(update={"truck_type": "10t"})
    bundle = EstimateCalculator().build(request)

    assert bundle.result.base_price == 0
    assert PRICING_ERROR_MESSAGES["INVALID_TRUCK_TYPE"] in bundle.warnings


def test_model_dump_is_serialisable():
    dumped = EstimateCalculator().build(REQUEST).model_dump()
    assert dumped["result"]["total"] == 71170
    assert dumped["summary"].startswith("## 見積サマリ")


def test_compare_uses_totals():
    calculator = EstimateCalculator()
    cheap = calculator.calculate(REQUEST.model_copy(update={"truck_type": "軽トラック"}))
    pricey = calculator.calculate(REQUEST.model_copy(update={"truck_type": "4t"}))

    comparison = calculator.compare([pricey, cheap])
    assert comparison.cheapest == cheap
    assert comparison.most_expensive == pricey


def test_build_with_non_finite_points_still_summarises():
    request = EstimateRequest(truck_type="2t", items=[CargoItem(name="不明", points=math.inf, quantity=1)])
    bundle = EstimateCalculator().build(request)

    assert math.isinf(bundle.result.total)
    assert "合計（税込）: ￥∞" in bundle.summary_markdown
    assert PRICING_ERROR_MESSAGES["INVALID_POINTS"] in bundle.warnings


def test_build_applies_only_surcharges_active_at_given_time():
    bundle = EstimateCalculator().build(REQUEST, at=time(7, 15))

    assert [s.id for s in bundle.request.time_surcharges] == ["2"]
    assert bundle.result.time_surcharge == 5000
    assert bundle.result.subtotal == 54750

    unfiltered = EstimateCalculator().build(REQUEST)
    assert unfiltered.result.time_surcharge == 14950
