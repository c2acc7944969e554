from fastapi.testclient import TestClient

from moving_estimator.api import create_app
from moving_estimator.calculator import EstimateCalculator
from moving_estimator.truck_catalog import TruckTypeCatalog

client = TestClient(create_app(EstimateCalculator(catalog=TruckTypeCatalog())))

ESTIMATE_PAYLOAD = {
    "truck_type": "2t",
    "items": [
        {"name": "テーブル", "points": 5, "weight": 20, "quantity": 1},
        {"name": "椅子", "points": 2, "weight": 5, "quantity": 4},
        {"name": "冷蔵庫", "points": 10, "weight": 60, "quantity": 1},
    ],
    "options": [
        {"name": "エレベーター搬入", "price": 3000, "selected": True},
        {"name": "家具組み立て", "price": 5000, "selected": True},
        {"name": "不用品回収", "price": 2000, "selected": False},
    ],
    "distance": 15,
    "time_surcharges": [
        {"id": "1", "start": "18:00", "end": "21:00", "kind": "rate", "value": 1.2},
        {"id": "2", "start": "06:00", "end": "09:00", "kind": "fixed", "value": 5000},
    ],
    "tax_rate": 0.1,
}


def test_calculate_endpoint_returns_itemised_result():
    response = client.post("/v1/estimates:calculate", json=ESTIMATE_PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["result"] == {
        "base_price": 30000,
        "cargo_price": 11500,
        "option_price": 8000,
        "distance_price": 250,
        "time_surcharge": 14950,
        "subtotal": 64700,
        "tax": 6470,
        "total": 71170,
    }
    assert body["warnings"] == []
    assert response.headers["x-request-id"]


def test_calculate_endpoint_reports_unknown_truck_as_warning():
    response = client.post("/v1/estimates:calculate", json={**ESTIMATE_PAYLOAD, "truck_type": "10t"})

    assert response.status_code == 200
    assert response.json()["result"]["base_price"] == 0
    assert "トラック種別が無効です" in response.json()["warnings"]


def test_calculate_endpoint_rejects_unknown_surcharge_kind():
    payload = {
        **ESTIMATE_PAYLOAD,
        "time_surcharges": [{"id": "1", "start": "18:00", "end": "21:00", "kind": "percent", "value": 1.2}],
    }
    assert client.post("/v1/estimates:calculate", json=payload).status_code == 422


def test_compare_endpoint():
    estimates = [
        {**dict.fromkeys(["base_price", "cargo_price", "option_price", "distance_price", "time_surcharge", "tax"], 0), "subtotal": total, "total": total}
        for total in (24750, 52800, 40975)
    ]
    response = client.post("/v1/estimates:compare", json={"estimates": estimates})

    assert response.status_code == 200
    body = response.json()
    assert body["cheapest"]["total"] == 24750
    assert body["most_expensive"]["total"] == 52800
    assert body["average_price"] == 39508


def test_compare_endpoint_rejects_empty_list():
    response = client.post("/v1/estimates:compare", json={"estimates": []})

    assert response.status_code == 400
    assert response.json()["detail"] == "見積もりデータが空です"


def test_recommend_endpoint():
    response = client.post("/v1/trucks:recommend", json={"items": ESTIMATE_PAYLOAD["items"]})
    assert response.json()["recommended_truck_types"] == ["軽トラック", "2tショート"]

    response = client.post("/v1/trucks:recommend", json={"total_points": 50, "total_weight": 5000})
    assert response.json()["recommended_truck_types"] == ["軽トラック", "2tショート"]


def test_truck_types_and_health():
    truck_types = client.get("/v1/truck-types").json()
    assert [truck["name"] for truck in truck_types] == ["軽トラック", "2tショート", "2t", "3t", "4t"]
    assert truck_types[0]["basePrice"] == 15000

    assert client.get("/health").json() == {"status": "ok"}


def test_calculate_endpoint_filters_surcharges_by_time():
    response = client.post("/v1/estimates:calculate", params={"at": "19:30"}, json=ESTIMATE_PAYLOAD)

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["time_surcharge"] == 9950
    assert result["subtotal"] == 59700


def test_recommend_endpoint_reports_smallest_truck():
    response = client.post("/v1/trucks:recommend", json={"total_points": 120, "total_weight": 100})
    assert response.json()["smallest_truck_type"] == "2t"
