from __future__ import annotations

from .dictionaries import PRICING_ERROR_MESSAGES, PRICING_VALIDATION
from .models.estimate import EstimateRequest
from .pricing import calculate_total_points
from .truck_catalog import TruckTypeCatalog


def validate_estimate_request(request: EstimateRequest, catalog: TruckTypeCatalog) -> list[str]:
    """Advisory checks for an estimate request.

    Returns user-facing messages; the estimate itself is still computed for
    requests that fail these checks.
    """
    messages: list[str] = []
    if not catalog.contains(request.truck_type):
        messages.append(PRICING_ERROR_MESSAGES["INVALID_TRUCK_TYPE"])
    if not request.items:
        messages.append(PRICING_ERROR_MESSAGES["EMPTY_ITEMS"])
    total_points = calculate_total_points(request.items)
    if not 0 <= total_points <= PRICING_VALIDATION["MAX_POINTS"]:
        messages.append(PRICING_ERROR_MESSAGES["INVALID_POINTS"])
    if not 0 <= request.distance <= PRICING_VALIDATION["MAX_DISTANCE"]:
        messages.append(PRICING_ERROR_MESSAGES["INVALID_DISTANCE"])
    if request.tax_rate is not None and not 0 <= request.tax_rate <= 1:
        messages.append(PRICING_ERROR_MESSAGES["INVALID_TAX_RATE"])
    return messages


__all__ = ["validate_estimate_request"]
