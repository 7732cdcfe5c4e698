from jsonschema import validate

FLEET_URL = "/api/v1/ai/predictive-maintenance/fleet"


def test_post_fleet_insights_success(client, load_data, load_schema):
    test_data = load_data("fleet_insights/post_fleet_insights.json")

    response = client.post(FLEET_URL, json=test_data)

    assert response.status_code == 200, f"Expected 200, got {response.status_code}. Response: {response.text}"
    response_data = response.json()
    validate(instance=response_data, schema=load_schema("fleet_insights/get_fleet_insights.json"))

    data = response_data["data"]
    assert data["fleet_summary"]["total_equipment"] == len(test_data["equipment"])
    assert data["fleet_summary"]["average_health_score"] == 66.7
    assert data["fleet_summary"]["at_risk_equipment"] == 1
    assert data["health_distribution"] == {"excellent": 1, "good": 1, "fair": 1, "poor": 0}
    assert [u["maintenance_type"] for u in data["upcoming_maintenance"]] == [
        "inspection", "cleaning", "cleaning", "part_replacement"]
    assert data["cost_projections"]["next_30_days"] == 1470.0
    assert data["cost_projections"]["annual_projection"] == data["cost_projections"]["next_90_days"] * 4
    assert [o["opportunity"] for o in data["optimization_opportunities"]] == [
        "Bulk Parts Ordering", "Route Optimization"]
    assert response_data["meta"]["time_horizon"] == "30d"


def test_post_fleet_insights_blank_equipment_id(client, load_data, load_schema):
    test_data = load_data("fleet_insights/post_fleet_insights.json")
    test_data["equipment"][1]["equipment_data"]["equipment_id"] = " "

    response = client.post(FLEET_URL, json=test_data)

    assert response.status_code == 400
    response_data = response.json()
    validate(instance=response_data, schema=load_schema("predictive_maintenance/error_response.json"))
    assert response_data["error"]["code"] == "VALIDATION_ERROR"


def test_post_fleet_insights_missing_equipment_list(client):
    response = client.post(FLEET_URL, json={"time_horizon": "90d"})

    assert response.status_code == 400
    assert [f["field"] for f in response.json()["error"]["fields"]] == ["equipment"]
