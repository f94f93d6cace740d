import pytest

from app.services.errors import ServiceError


def _new_session(client):
    resp = client.post("/sessions")
    assert resp.status_code == 201
    return resp.json()


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "ok", "version": "0.1.0"}
    assert client.get("/").json()["message"] == "Currency Converter API"


def test_currencies_listing(client):
    body = client.get("/currencies").json()
    php = next(c for c in body if c["code"] == "PHP")
    assert php["flag_url"].endswith("/ph.png")


def test_new_session_view(client):
    view = _new_session(client)
    assert view["source_currency"] == "USD"
    assert view["target_currency"] == "PHP"
    assert view["source"]["flag_url"].endswith("/us.png")
    assert view["rate"] is None
    assert view["rate_valid"] is False
    assert view["status"] == "idle"


def test_convert_then_swap(client, mock_provider):
    sid = _new_session(client)["session_id"]
    client.put(f"/sessions/{sid}/amount", json={"amount": "100"})

    view = client.post(f"/sessions/{sid}/convert").json()
    assert view["output_text"] == "5,600.00"
    assert view["display_text"] == "100 USD = 5,600.00 PHP"
    assert view["status"] == "ready"

    view = client.post(f"/sessions/{sid}/swap").json()
    assert view["source_currency"] == "PHP"
    assert view["target_currency"] == "USD"
    assert view["rate"] == pytest.approx(0.017857, rel=1e-4)
    assert view["input_amount"] == 5600.0
    assert mock_provider.get_pair_rate.await_count == 1


def test_amount_update_uses_held_rate(client):
    sid = _new_session(client)["session_id"]
    client.put(f"/sessions/{sid}/amount", json={"amount": 1})
    client.post(f"/sessions/{sid}/convert")
    view = client.put(f"/sessions/{sid}/amount", json={"amount": "2,000"}).json()
    assert view["output_amount"] == 112000.0


def test_negative_amount_reads_as_zero(client):
    sid = _new_session(client)["session_id"]
    view = client.put(f"/sessions/{sid}/amount", json={"amount": -5}).json()
    assert view["input_amount"] == 0.0
    assert view["output_amount"] is None


def test_select_currency_invalidates(client):
    sid = _new_session(client)["session_id"]
    client.put(f"/sessions/{sid}/amount", json={"amount": 10})
    client.post(f"/sessions/{sid}/convert")
    view = client.put(f"/sessions/{sid}/currencies/target", json={"code": "eur"}).json()
    assert view["target_currency"] == "EUR"
    assert view["rate_valid"] is False
    assert view["input_amount"] == 0.0


def test_unknown_currency_is_422(client):
    sid = _new_session(client)["session_id"]
    resp = client.put(f"/sessions/{sid}/currencies/source", json={"code": "XXX"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_unknown_role_is_422(client):
    sid = _new_session(client)["session_id"]
    resp = client.put(f"/sessions/{sid}/currencies/middle", json={"code": "EUR"})
    assert resp.status_code == 422


def test_convert_zero_amount_is_400(client, mock_provider):
    sid = _new_session(client)["session_id"]
    resp = client.post(f"/sessions/{sid}/convert")
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid_amount", "detail": "Please enter a valid amount."}
    mock_provider.get_pair_rate.assert_not_awaited()


def test_convert_offline_is_503(client, online_probe):
    online_probe.is_online.return_value = False
    sid = _new_session(client)["session_id"]
    client.put(f"/sessions/{sid}/amount", json={"amount": 10})
    resp = client.post(f"/sessions/{sid}/convert")
    assert resp.status_code == 503
    assert resp.json()["error"] == "offline"
    assert client.get(f"/sessions/{sid}").json()["display_text"] == "No internet connection!"


def test_convert_service_failure_is_502(client, mock_provider):
    mock_provider.get_pair_rate.side_effect = ServiceError("HTTP 500")
    sid = _new_session(client)["session_id"]
    client.put(f"/sessions/{sid}/amount", json={"amount": 10})
    resp = client.post(f"/sessions/{sid}/convert")
    assert resp.status_code == 502
    assert resp.json()["error"] == "service_error"
    view = client.get(f"/sessions/{sid}").json()
    assert view["status"] == "error"
    assert view["error"]["message"] == "Error fetching exchange rate!"


def test_unknown_session_is_404(client):
    resp = client.get("/sessions/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "not_found", "detail": "session not found"}


def test_delete_session(client):
    sid = _new_session(client)["session_id"]
    assert client.delete(f"/sessions/{sid}").json()["status"] == "deleted"
    assert client.get(f"/sessions/{sid}").status_code == 404


def test_unknown_route_envelope(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"x-request-id": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


def test_huge_amount_renders(client):
    sid = _new_session(client)["session_id"]
    resp = client.put(f"/sessions/{sid}/amount", json={"amount": "1e26"})
    assert resp.status_code == 200
    assert resp.json()["display_text"].startswith("100,000,000,000,000,000,000,000,000 USD")
    view = client.post(f"/sessions/{sid}/convert").json()
    assert view["status"] == "ready"
    assert view["output_text"].endswith(".00")
