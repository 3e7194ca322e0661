from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest
from starlette.websockets import WebSocketDisconnect

from foh.infrastructure.images.cloudinary import CloudinaryImageHost


def _table(client, number: int) -> dict:
    tables = client.get("/api/tables").json()
    return next(table for table in tables if table["tableNumber"] == number)


def _first_available_item(client) -> dict:
    menu = client.get("/api/menu", params={"available_only": True}).json()
    return menu["items"][0]


def test_health_endpoints(client) -> None:
    assert client.get("/health/live").json() == {"status": "ok"}
    ready = client.get("/health/ready")
    assert ready.status_code == 200
    assert ready.json() == {"status": "ok"}


def test_api_requires_a_session(client) -> None:
    response = client.get("/api/orders", headers={"X-Request-Id": "req-abc"})

    assert response.status_code == 401
    body = response.json()
    assert body["error"]["code"] == "NOT_AUTHENTICATED"
    assert body["requestId"] == "req-abc"
    assert response.headers["X-Request-Id"] == "req-abc"


def test_login_sets_session_cookie(client, login) -> None:
    session = login("admin@vinnoswad.com")

    assert session["user"]["role"] == "admin"
    assert "session" in client.cookies
    current = client.get("/api/auth/session").json()
    assert current["user"]["email"] == "admin@vinnoswad.com"


def test_wrong_password_is_rejected(client) -> None:
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@vinnoswad.com", "password": "not-it"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_registered_user_waits_for_approval(client) -> None:
    created = client.post(
        "/api/auth/register",
        json={"name": "New Waiter", "email": "new@vinnoswad.com", "password": "secret1", "role": "waiter"},
    )
    assert created.status_code == 201
    assert created.json()["pending"] is True

    response = client.post(
        "/api/auth/login",
        json={"email": "new@vinnoswad.com", "password": "secret1"},
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCOUNT_PENDING_APPROVAL"


def test_role_is_enforced_on_api(client, login) -> None:
    login("priya@vinnoswad.com")

    response = client.get("/api/bills")

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_validation_errors_use_error_envelope(client, login) -> None:
    login("priya@vinnoswad.com")

    response = client.post("/api/orders", json={"tableId": "tbl_001", "items": []})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_pages_redirect_by_role(client, login) -> None:
    anonymous = client.get("/admin", follow_redirects=False)
    assert anonymous.status_code == 307
    assert anonymous.headers["location"] == "/login"

    login("priya@vinnoswad.com")
    wrong_role = client.get("/admin", follow_redirects=False)
    assert wrong_role.status_code == 307
    assert wrong_role.headers["location"] == "/unauthorized"

    home = client.get("/", follow_redirects=False)
    assert home.headers["location"] == "/waiter"
    bounced = client.get("/unauthorized", follow_redirects=False)
    assert bounced.headers["location"] == "/waiter"

    dashboard = client.get("/waiter")
    assert dashboard.status_code == 200
    assert dashboard.json()["waiter"]["name"] == "Priya Sharma"


def test_order_lifecycle_frees_table_and_bills(client, login) -> None:
    login("priya@vinnoswad.com")
    item = _first_available_item(client)
    created = client.post(
        "/api/orders",
        json={"tableId": "tbl_002", "items": [{"menuItemId": item["itemId"], "quantity": 2}]},
    )
    assert created.status_code == 201, created.text
    order = created.json()
    assert order["status"] == "pending"
    assert order["total"]["amountCents"] == item["price"]["amountCents"] * 2
    assert _table(client, 2)["status"] == "occupied"

    login("manager@vinnoswad.com")
    for status in ("approved", "ready"):
        moved = client.patch(f"/api/orders/{order['orderId']}/status", json={"status": status})
        assert moved.status_code == 200, moved.text
    assert moved.json()["status"] == "prepared"

    login("priya@vinnoswad.com")
    served = client.patch(f"/api/orders/{order['orderId']}/status", json={"status": "served"})
    assert served.json()["status"] == "served"
    assert _table(client, 2)["status"] == "available"

    skipped = client.patch(f"/api/orders/{order['orderId']}/status", json={"status": "approved"})
    assert skipped.status_code == 409
    assert skipped.json()["error"]["code"] == "INVALID_ORDER_TRANSITION"

    bill = client.post("/api/bills", json={"tableNumber": 2})
    assert bill.status_code == 201, bill.text
    assert bill.json()["orderIds"] == [order["orderId"]]
    paid = client.post(f"/api/bills/{bill.json()['billId']}/pay")
    assert paid.json()["status"] == "paid"
    assert client.get(f"/api/orders/{order['orderId']}").json()["status"] == "billed"


def test_cancel_requires_a_real_reason(client, login) -> None:
    login("arjun@vinnoswad.com")
    item = _first_available_item(client)
    order = client.post(
        "/api/orders",
        json={"tableId": "tbl_003", "items": [{"menuItemId": item["itemId"], "quantity": 1}]},
    ).json()

    short = client.post(f"/api/orders/{order['orderId']}/cancel", json={"reason": "no"})
    assert short.status_code == 400

    cancelled = client.post(
        f"/api/orders/{order['orderId']}/cancel",
        json={"reason": "guest changed their mind"},
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert cancelled.json()["cancellationReason"] == "guest changed their mind"


def test_report_export_is_csv(client, login) -> None:
    login("manager@vinnoswad.com")
    today = datetime.now(timezone.utc).date().isoformat()

    response = client.get("/api/reports/export/users", params={"start": today, "end": today})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    assert response.text.splitlines()[0] == "user_id,name,email,role,status"

    unknown = client.get("/api/reports/export/payroll", params={"start": today, "end": today})
    assert unknown.status_code == 400
    assert unknown.json()["error"]["code"] == "INVALID_REPORT_TYPE"


def test_metrics_endpoint(client) -> None:
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "foh_orders_created_total" in response.text


def test_websocket_requires_matching_role(client, login) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws?view=kitchen") as websocket:
            websocket.receive_text()

    login("kitchen@vinnoswad.com")
    with client.websocket_connect("/ws?view=kitchen") as websocket:
        websocket.send_text("ping")


def test_image_host_failure_is_a_gateway_error(client, login) -> None:
    client.app.state.image_host = CloudinaryImageHost(
        cloud_name="demo",
        api_key="key",
        api_secret="secret",
        folder="foh_menu",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )
    login("manager@vinnoswad.com")

    response = client.post(
        "/api/uploads/images",
        files={"file": ("dish.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "IMAGE_HOST_ERROR"


def test_unknown_status_filter_is_a_bad_request(client, login) -> None:
    login("manager@vinnoswad.com")

    response = client.get("/api/orders", params={"status": "eaten"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_STATUS_FILTER"
