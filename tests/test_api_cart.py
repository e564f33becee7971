"""
API tests for the cart and checkout endpoints.
"""

import storefront.routes.cart as cart_routes


def add_water(client, session_id):
    resp = client.post(f"/flow/{session_id}/open", json={"itemId": "mineral-water"})
    return resp.json()["cartItemUuid"]


def add_fries(client, session_id, *options):
    client.post(f"/flow/{session_id}/open", json={"itemId": "loaded-fries"})
    for name in options:
        client.post(f"/flow/{session_id}/select", json={"optionName": name})
    client.post(f"/flow/{session_id}/next", json={})
    return client.post(f"/flow/{session_id}/next", json={}).json()["cartItemUuid"]


def test_empty_cart(client, session_id):
    resp = client.get(f"/cart/{session_id}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["lines"] == []
    assert data["total"] == 0
    assert data["formattedTotal"] == "RM 0.00"


def test_same_item_merges(client, session_id):
    first = add_water(client, session_id)
    second = add_water(client, session_id)
    assert first == second
    data = client.get(f"/cart/{session_id}").json()
    assert len(data["lines"]) == 1
    assert data["lines"][0]["qty"] == 2
    assert data["total"] == 5.0


def test_update_quantity(client, session_id):
    uuid = add_water(client, session_id)
    resp = client.patch(f"/cart/{session_id}/items/{uuid}", json={"delta": 2})
    assert resp.json()["itemCount"] == 3

    resp = client.patch(f"/cart/{session_id}/items/{uuid}", json={"delta": -3})
    assert resp.json()["lines"] == []


def test_update_unknown_line(client, session_id):
    resp = client.patch(f"/cart/{session_id}/items/missing", json={"delta": 1})
    assert resp.status_code == 404


def test_remove_line(client, session_id):
    uuid = add_water(client, session_id)
    resp = client.delete(f"/cart/{session_id}/items/{uuid}")
    assert resp.status_code == 200
    assert resp.json()["lines"] == []
    assert client.delete(f"/cart/{session_id}/items/{uuid}").status_code == 404


def test_edit_line_updates_in_place(client, session_id):
    """Finishing an edit flow updates the line instead of adding one."""
    uuid = add_fries(client, session_id, "Cheese Sauce")
    resp = client.post(f"/cart/{session_id}/items/{uuid}/edit")
    assert resp.status_code == 200
    view = resp.json()
    assert view["step"] == "Addon"
    assert view["editingCartItemUuid"] == uuid

    client.post(f"/flow/{session_id}/select", json={"optionName": "Beef Bits"})
    client.post(f"/flow/{session_id}/next", json={})
    done = client.post(f"/flow/{session_id}/next", json={}).json()
    assert done["cartItemUuid"] == uuid

    data = client.get(f"/cart/{session_id}").json()
    assert len(data["lines"]) == 1
    assert [o["name"] for o in data["lines"][0]["selectedOptions"]] == ["Beef Bits"]
    assert data["total"] == 12.0
    assert data["editingCartItemUuid"] is None


def test_edit_line_of_deleted_item(client, session_id, admin_auth):
    uuid = add_water(client, session_id)
    client.delete("/admin/menu/mineral-water", auth=admin_auth)
    resp = client.post(f"/cart/{session_id}/items/{uuid}/edit")
    assert resp.status_code == 409


def test_edit_unknown_line(client, session_id):
    resp = client.post(f"/cart/{session_id}/items/missing/edit")
    assert resp.status_code == 404


def test_finishing_edit_after_line_removed(client, session_id):
    uuid = add_water(client, session_id)
    client.post(f"/cart/{session_id}/items/{uuid}/edit")
    client.delete(f"/cart/{session_id}/items/{uuid}")
    client.post(f"/flow/{session_id}/next", json={})
    resp = client.post(f"/flow/{session_id}/next", json={})
    assert resp.status_code == 409


# =============================================================================
# Checkout
# =============================================================================

def test_checkout_empty_cart(client, session_id):
    resp = client.post(f"/cart/{session_id}/checkout", json={})
    assert resp.status_code == 409


def test_checkout_requires_outlet(client, session_id):
    add_water(client, session_id)
    resp = client.post(f"/cart/{session_id}/checkout", json={})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "No outlet selected"


def test_checkout_closed_outlet(client, session_id, monkeypatch):
    monkeypatch.setattr(cart_routes, "is_business_open", lambda store, outlet: False)
    add_water(client, session_id)
    client.put(f"/sessions/{session_id}/outlet", json={"outletId": "outlet-1"})
    resp = client.post(f"/cart/{session_id}/checkout", json={})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Outlet is closed"


def test_checkout_builds_whatsapp_link(client, session_id, monkeypatch):
    monkeypatch.setattr(cart_routes, "is_business_open", lambda store, outlet: True)
    add_water(client, session_id)
    add_fries(client, session_id, "Cheese Sauce")
    client.put(f"/sessions/{session_id}/outlet", json={"outletId": "outlet-1"})

    resp = client.post(f"/cart/{session_id}/checkout", json={"needsCutlery": True})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 13.5
    assert data["url"].startswith("https://wa.me/60123456789?text=")
    assert "▪️ 1x Mineral Water" in data["message"]
    assert "▪️ 1x Loaded Fries\n   + Cheese Sauce" in data["message"]
    assert "Total: RM 13.50" in data["message"]
    assert "Need Cutlery: YES" in data["message"]

    session = client.get(f"/sessions/{session_id}").json()
    assert session["needsCutlery"] is True
