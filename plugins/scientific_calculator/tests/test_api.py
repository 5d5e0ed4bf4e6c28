from app import create_app


def _client(**settings):
    app = create_app("TestingConfig")
    if settings:
        app.config["PLUGIN_SETTINGS"]["scientific_calculator"] = settings
    return app.test_client()


def test_evaluate_endpoint():
    client = _client()
    resp = client.post("/api/scientific_calculator/evaluate", json={"expression": "2+3*4"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    assert data["data"] == {"expression": "2+3*4", "display": "14.0", "value": 14.0, "finite": True}


def test_evaluate_endpoint_infinite_result():
    client = _client()
    resp = client.post("/api/scientific_calculator/evaluate", json={"expression": "1/0"})
    assert resp.status_code == 200
    payload = resp.get_json()["data"]
    assert payload["display"] == "Infinity"
    assert payload["value"] is None
    assert payload["finite"] is False


def test_evaluate_endpoint_hides_error_detail():
    client = _client()
    resp = client.post("/api/scientific_calculator/evaluate", json={"expression": "foo(1)"})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["success"] is False
    assert data["error"]["code"] == "sci_calc.invalid_expression"
    assert data["error"]["message"] == "Error"
    assert data["error"]["details"] == {}


def test_evaluate_endpoint_empty_expression_fails():
    client = _client()
    resp = client.post("/api/scientific_calculator/evaluate", json={"expression": ""})
    assert resp.status_code == 400
    assert resp.get_json()["error"]["message"] == "Error"


def test_evaluate_endpoint_respects_configured_depth():
    client = _client(max_depth=3)
    resp = client.post("/api/scientific_calculator/evaluate", json={"expression": "((((1))))"})
    assert resp.status_code == 400


def test_invalid_request_returns_error():
    client = _client()
    resp = client.post("/api/scientific_calculator/evaluate", json={"expr": "1"})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["success"] is False
    assert data["error"]["code"] == "sci_calc.invalid_request"
    assert data["error"]["details"]["errors"]


def test_keypad_endpoint():
    client = _client()
    resp = client.post("/api/scientific_calculator/keypad", json={"display": "2^1", "key": "0"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["display"] == "2^10"

    resp = client.post("/api/scientific_calculator/keypad", json={"display": "2^10", "key": "="})
    assert resp.get_json()["data"]["display"] == "1024.0"


def test_keypad_endpoint_unknown_key():
    client = _client()
    resp = client.post("/api/scientific_calculator/keypad", json={"display": "", "key": "mod"})
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "sci_calc.invalid_key"


def test_functions_endpoint():
    client = _client()
    resp = client.get("/api/scientific_calculator/functions")
    assert resp.status_code == 200
    payload = resp.get_json()["data"]
    assert "sqrt" in payload["functions"]
    assert payload["constants"] == ["e", "pi"]
    assert payload["keypad"][0][0] == "7"


def test_non_finite_settings_fall_back_to_defaults():
    client = _client(max_depth=float("inf"), max_expression_length="1e400")
    resp = client.post("/api/scientific_calculator/evaluate", json={"expression": "1+1"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["display"] == "2.0"

    resp = client.post("/api/scientific_calculator/keypad", json={"display": "1+1", "key": "="})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["display"] == "2.0"


def test_configured_length_cap_applies_to_http():
    client = _client(max_expression_length=5)
    resp = client.post("/api/scientific_calculator/evaluate", json={"expression": "1+2+3+4"})
    assert resp.status_code == 400
    assert resp.get_json()["error"]["message"] == "Error"
