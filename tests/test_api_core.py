# tests/test_api_core.py


def test_weight_defaults(client):
    res = client.get("/api/weights/defaults")
    assert res.status_code == 200
    data = res.json()
    assert sum(w["value"] for w in data["weights"]) == 100
    assert len(data["catalog"]) == 6


def test_redistribute_endpoint(client):
    res = client.post(
        "/api/weights/redistribute",
        json={
            "weights": [{"id": "a", "value": 40}, {"id": "b", "value": 30}, {"id": "c", "value": 30}],
            "changedId": "a",
            "newValue": 70,
        },
    )
    assert res.status_code == 200
    data = res.json()
    assert [w["value"] for w in data["weights"]] == [70, 15, 15]
    assert data["total"] == 100
    assert data["weights"][0]["label"] == "a"


def test_redistribute_endpoint_clamps_slider_input(client):
    res = client.post(
        "/api/weights/redistribute",
        json={"weights": [{"id": "crime", "value": 50}, {"id": "poi", "value": 50}], "changedId": "crime", "newValue": 180.4},
    )
    assert [w["value"] for w in res.json()["weights"]] == [100, 0]


def test_remove_and_add_endpoints(client):
    res = client.post(
        "/api/weights/remove",
        json={"weights": [{"id": "crime", "value": 50}, {"id": "poi", "value": 30}, {"id": "rent_score", "value": 20}], "id": "crime"},
    )
    assert [(w["id"], w["value"]) for w in res.json()["weights"]] == [("poi", 60), ("rent_score", 40)]

    res = client.post("/api/weights/add", json={"weights": res.json()["weights"], "layerId": "flood_risk"})
    data = res.json()
    assert data["weights"][-1]["id"] == "flood_risk"
    assert data["weights"][-1]["value"] == 0
    assert data["weights"][-1]["label"] == "Flood Risk"
    assert data["total"] == 100


def test_normalize_endpoint(client):
    res = client.post("/api/weights/normalize", json={"weights": [{"id": "crime", "value": 2}, {"id": "poi", "value": 2}]})
    assert [w["value"] for w in res.json()["weights"]] == [50, 50]


def test_resolve_endpoint(client):
    res = client.post("/api/ethnicities/resolve", json={"labels": ["asian", "korean", "mexican"]})
    assert res.status_code == 200
    data = res.json()
    assert data["codes"] == sorted(["AEA", "ASA", "ASEA", "ACA", "AOth", "HMex"])
    assert data["count"] == 6


def test_validate_endpoint(client):
    data = client.post("/api/ethnicities/validate", json={"labels": ["asian", "korean"]}).json()
    assert data["isValid"] is True
    assert data["warnings"]


def test_tree_endpoint(client):
    tree = client.get("/api/ethnicities/tree").json()
    assert [node["code"] for node in tree] == ["H", "W", "B", "AIANA", "A", "NHPI", "SOR"]
    asian = next(node for node in tree if node["code"] == "A")
    east_asian = next(node for node in asian["children"] if node["code"] == "AEA")
    assert "AEAKrn" in [node["code"] for node in east_asian["children"]]


def test_filter_defaults(client):
    data = client.get("/api/filters/defaults").json()
    assert data["rentRange"] == [26, 160]
    assert data["selectedGenders"] == ["male", "female"]
    assert data["inactiveLayers"] == []


def test_apply_filters_endpoint_drops_repeated_weight_ids(client):
    res = client.post(
        "/api/filters/apply",
        json={"weights": [{"id": "crime", "value": 50}, {"id": "crime", "value": 50}]},
    )
    assert res.status_code == 200
    data = res.json()
    assert [(w["id"], w["value"]) for w in data["weights"]] == [("crime", 100)]
    assert len(data["inactiveLayers"]) == 5


def test_apply_filters_endpoint(client):
    res = client.post(
        "/api/filters/apply",
        json={
            "ageRange": [90, 10],
            "selectedGenders": ["other"],
            "weights": [{"id": "crime", "value": 1}, {"id": "poi", "value": 1}],
        },
    )
    assert res.status_code == 200
    data = res.json()
    assert data["ageRange"] == [10, 90]
    assert data["selectedGenders"] == ["male", "female"]
    assert [w["value"] for w in data["weights"]] == [50, 50]
    assert len(data["inactiveLayers"]) == 4


def test_resilience_request_preview(client):
    res = client.post("/api/resilience/request", json={"filters": {"selectedEthnicities": ["korean"]}, "topN": 50})
    assert res.status_code == 200
    data = res.json()
    assert data["ethnicities"] == ["AEAKrn"]
    assert data["topN"] == 50


def test_resilience_scores_endpoint(client, mock_supabase, supabase_env, make_response):
    mock_supabase.return_value = make_response(
        payload={"zones": [{"geoid": "36047051100", "custom_score": 91.2}], "total_zones_found": 1, "top_zones_returned": 1}
    )
    res = client.post("/api/resilience/scores", json={})
    assert res.status_code == 200
    data = res.json()
    assert data["zones"][0]["geoid"] == "36047051100"
    assert data["total_zones_found"] == 1


def test_resilience_scores_upstream_failure(client, mock_supabase, supabase_env, make_response):
    mock_supabase.return_value = make_response(503, payload={"error": "Function crashed"})
    res = client.post("/api/resilience/scores", json={})
    assert res.status_code == 502
    assert "Function crashed" in res.json()["detail"]


def test_resilience_scores_rejects_bad_top_n(client):
    res = client.post("/api/resilience/scores", json={"topN": 0})
    assert res.status_code == 422
