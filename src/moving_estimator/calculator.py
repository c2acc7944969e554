from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Sequence

from .dictionaries import DEFAULT_PRICING_CONFIG, PricingConfig
from .models.estimate import EstimateComparison, EstimateRequest, EstimateResult
from .pricing import (
    calculate_estimate,
    calculate_total_points,
    calculate_total_weight,
    compare_estimates,
    format_price_jpy,
    format_price_number,
)
from .time_bands import select_applicable_surcharges
from .truck_catalog import TruckTypeCatalog
from .validation import validate_estimate_request

logger = logging.getLogger(__name__)


@dataclass
class EstimateBundle:
    request: EstimateRequest
    result: EstimateResult
    total_points: float
    total_weight: float
    recommended_truck_types: list[str]
    warnings: list[str] = field(default_factory=list)
    summary_markdown: str = ""

    def model_dump(self) -> dict[str, object]:
        return {
            "request": self.request.model_dump(),
            "result": self.result.model_dump(),
            "total_points": self.total_points,
            "total_weight": self.total_weight,
            "recommended_truck_types": list(self.recommended_truck_types),
            "warnings": list(self.warnings),
            "summary": self.summary_markdown,
        }


class EstimateCalculator:
    def __init__(
        self,
        *,
        catalog: TruckTypeCatalog | None = None,
        config: PricingConfig = DEFAULT_PRICING_CONFIG,
    ) -> None:
        self._catalog = catalog or TruckTypeCatalog()
        self._config = config

    @property
    def catalog(self) -> TruckTypeCatalog:
        return self._catalog

    @property
    def config(self) -> PricingConfig:
        return self._config

    def calculate(self, request: EstimateRequest) -> EstimateResult:
        return calculate_estimate(
            truck_type=request.truck_type,
            items=request.items,
            options=request.options,
            distance=request.distance,
            time_surcharges=request.time_surcharges,
            tax_rate=request.tax_rate,
            config=self._config,
            base_prices=self._catalog.base_prices,
        )

    def build(self, request: EstimateRequest, *, at: time | datetime | None = None) -> EstimateBundle:
        """Calculate and summarise ``request``.

        When ``at`` is given, only the time-band surcharges active at that
        moment are applied.
        """
        if at is not None:
            applicable = select_applicable_surcharges(request.time_surcharges, at)
            request = request.model_copy(update={"time_surcharges": applicable})
        result = self.calculate(request)
        total_points = calculate_total_points(request.items)
        total_weight = calculate_total_weight(request.items)
        warnings = validate_estimate_request(request, self._catalog)
        recommended = self._catalog.recommend(total_points, total_weight)
        if warnings:
            logger.warning(
                "Estimate request has validation warnings",
                extra={"truck_type": request.truck_type, "warnings": warnings},
            )
        logger.info(
            "Calculated estimate",
            extra={
                "truck_type": request.truck_type,
                "total_points": total_points,
                "subtotal": result.subtotal,
                "total": result.total,
            },
        )
        summary = self._build_summary(request, result, total_points, recommended)
        return EstimateBundle(
            request=request,
            result=result,
            total_points=total_points,
            total_weight=total_weight,
            recommended_truck_types=recommended,
            warnings=warnings,
            summary_markdown=summary,
        )

    def compare(self, results: Sequence[EstimateResult]) -> EstimateComparison:
        return compare_estimates(results)

    def _build_summary(
        self,
        request: EstimateRequest,
        result: EstimateResult,
        total_points: float,
        recommended: Sequence[str],
    ) -> str:
        tax_rate = self._config.tax_rate if request.tax_rate is None else request.tax_rate
        selected = [option.name for option in request.options if option.selected]
        surcharges = [
            f"- {s.start}〜{s.end} "
            + (f"×{s.value:.2f}" if s.kind == "rate" else f"+{format_price_jpy(s.value)}")
            for s in request.time_surcharges
        ]
        summary_lines = [
            "## 見積サマリ",
            f"- トラック種別: {request.truck_type or '未指定'}",
            f"- 総ポイント: {format_price_number(total_points)}",
            f"- 推奨トラック: {' / '.join(recommended) or 'なし'}",
            f"- 距離: {format_price_number(request.distance)}km",
            "",
            "## 内訳",
            f"- 基本料金: {format_price_jpy(result.base_price)}",
            f"- 荷物料金: {format_price_jpy(result.cargo_price)}",
            f"- オプション料金: {format_price_jpy(result.option_price)}",
            f"- 距離料金: {format_price_jpy(result.distance_price)}",
            f"- 時間帯追加料金: {format_price_jpy(result.time_surcharge)}",
            f"- 小計（税抜）: {format_price_jpy(result.subtotal)}",
            f"- 消費税（{format_price_number(tax_rate * 100)}%）: {format_price_jpy(result.tax)}",
            f"- 合計（税込）: {format_price_jpy(result.total)}",
            "",
            "## オプション",
            "\n".join(f"- {name}" for name in selected) or "- なし",
            "",
            "## 時間帯追加料金",
            "\n".join(surcharges) or "- なし",
        ]
        return "\n".join(summary_lines)


__all__ = ["EstimateCalculator", "EstimateBundle"]
