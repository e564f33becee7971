"""
API tests for sessions and the public storefront endpoints.
"""


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_start_session(client):
    resp = client.post("/sessions")
    assert resp.status_code == 201
    data = resp.json()
    assert data["sessionId"]
    assert data["outletId"] is None
    assert data["itemCount"] == 0


def test_unknown_session(client):
    resp = client.get("/sessions/missing")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Invalid session_id"


def test_select_outlet(client, session_id):
    resp = client.put(f"/sessions/{session_id}/outlet", json={"outletId": "outlet-1"})
    assert resp.status_code == 200
    assert resp.json()["outletId"] == "outlet-1"

    resp = client.put(f"/sessions/{session_id}/outlet", json={"outletId": None})
    assert resp.json()["outletId"] is None


def test_select_unknown_outlet(client, session_id):
    resp = client.put(f"/sessions/{session_id}/outlet", json={"outletId": "outlet-99"})
    assert resp.status_code == 404


def test_menu_lists_visible_items(client, admin_auth):
    resp = client.get("/menu")
    assert resp.status_code == 200
    ids = [item["id"] for item in resp.json()]
    assert "classic-burger" in ids
    assert "linkedOptionGroupIds" in resp.json()[0]

    client.put("/admin/menu/classic-burger", auth=admin_auth, json={"isHidden": True})
    ids = [item["id"] for item in client.get("/menu").json()]
    assert "classic-burger" not in ids


def test_menu_item(client):
    resp = client.get("/menu/sig-pork-belly")
    assert resp.status_code == 200
    assert resp.json()["comboPrice"] == 28.0
    assert client.get("/menu/nope").status_code == 404


def test_outlets(client):
    resp = client.get("/outlets")
    assert resp.status_code == 200
    outlets = resp.json()
    assert [o["id"] for o in outlets] == ["outlet-1"]
    assert "isOpen" in outlets[0]
    assert outlets[0]["whatsappNumber"] == "+60123456789"


def test_store_config(client):
    resp = client.get("/config")
    assert resp.status_code == 200
    data = resp.json()
    assert data["currencySymbol"] == "RM"
    assert data["flowGroups"][0]["triggers"] == ["Signature Burgers"]


def test_api_v1_prefix(client):
    resp = client.get("/api/v1/menu")
    assert resp.status_code == 200
