from datetime import datetime, timedelta, timezone

from app.database.supabase import RecordStoreError
from app.models.voucher.voucher import VOUCHER_TABLE


def seed_voucher(store, **overrides):
    row = {
        "id": "v1",
        "code": "SAVE10",
        "discount_type": "percentage",
        "discount_value": 10,
        "max_discount": None,
        "min_purchase_amount": 0,
        "max_uses": None,
        "times_used": 0,
        "expires_at": None,
        "active": True,
    }
    row.update(overrides)
    return store.seed(VOUCHER_TABLE, row)[-1]


def test_validate_applies_discount(client, store):
    seed_voucher(store, discount_value=50, max_discount=100)

    response = client.post("/vouchers/validate", json={"code": " save10 ", "cart_total": 1000})

    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is True
    assert body["discount"] == 100
    assert body["reason"] is None
    assert body["voucher"]["code"] == "SAVE10"


def test_validate_rejections_are_still_200(client, store):
    seed_voucher(store, min_purchase_amount=500)

    response = client.post("/vouchers/validate", json={"code": "SAVE10", "cart_total": 100})

    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert body["reason"] == "below_minimum_purchase"
    assert body["discount"] == 0
    assert body["voucher"] is None


def test_validate_unknown_code(client, store):
    response = client.post("/vouchers/validate", json={"code": "GHOST", "cart_total": 100})

    assert response.json()["reason"] == "not_found"
    assert response.json()["message"] == "Invalid voucher code."


def test_validate_store_outage_is_reported_as_lookup_failure(client, store):
    store.fail_with = RecordStoreError("timeout")

    response = client.post("/vouchers/validate", json={"code": "SAVE10", "cart_total": 100})

    assert response.status_code == 200
    assert response.json()["reason"] == "lookup_failed"
    assert response.json()["message"] == "Failed to validate voucher."


def test_validate_does_not_increment_usage(client, store):
    voucher = seed_voucher(store, max_uses=2, times_used=1)

    for _ in range(3):
        assert client.post("/vouchers/validate", json={"code": "SAVE10", "cart_total": 100}).json()["valid"] is True

    assert voucher["times_used"] == 1


def test_validate_rejects_negative_cart_total(client, store):
    assert client.post("/vouchers/validate", json={"code": "SAVE10", "cart_total": -1}).status_code == 422


def test_admin_list_is_newest_first(client, store, admin_headers):
    seed_voucher(store, id="old", code="OLD")
    seed_voucher(store, id="new", code="NEW")

    response = client.get("/admin/vouchers", headers=admin_headers)

    assert response.status_code == 200
    assert [voucher["id"] for voucher in response.json()] == ["new", "old"]


def test_create_normalizes_code_and_starts_unused(client, store, admin_headers):
    expires_at = (datetime.now(timezone.utc) + timedelta(days=30)).isoformat()

    response = client.post(
        "/admin/vouchers",
        json={
            "code": "  welcome5 ",
            "discount_type": "percentage",
            "discount_value": 5,
            "max_discount": 200,
            "min_purchase_amount": 1000,
            "max_uses": 50,
            "expires_at": expires_at,
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["code"] == "WELCOME5"
    assert body["times_used"] == 0
    assert body["max_discount"] == 200
    assert isinstance(store.tables[VOUCHER_TABLE][0]["expires_at"], str)


def test_create_fixed_voucher_drops_max_discount(client, store, admin_headers):
    response = client.post(
        "/admin/vouchers",
        json={"code": "FLAT100", "discount_type": "fixed", "discount_value": 100, "max_discount": 30},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["max_discount"] is None


def test_create_rejects_zero_discount_and_blank_code(client, store, admin_headers):
    zero = client.post("/admin/vouchers", json={"code": "ZERO", "discount_value": 0}, headers=admin_headers)
    blank = client.post("/admin/vouchers", json={"code": "   ", "discount_value": 10}, headers=admin_headers)

    assert zero.status_code == 422
    assert blank.status_code == 422


def test_create_duplicate_code_conflicts(client, store, admin_headers):
    seed_voucher(store)

    response = client.post("/admin/vouchers", json={"code": "save10", "discount_value": 10}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "Voucher code already exists"


def test_update_cannot_touch_usage_counter(client, store, admin_headers):
    seed_voucher(store, times_used=3)

    response = client.put(
        "/admin/vouchers/v1",
        json={"discount_value": 20, "times_used": 0, "code": "save20"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["discount_value"] == 20
    assert body["code"] == "SAVE20"
    assert body["times_used"] == 3


def test_update_to_fixed_clears_max_discount(client, store, admin_headers):
    seed_voucher(store, max_discount=100)

    response = client.put("/admin/vouchers/v1", json={"discount_type": "fixed"}, headers=admin_headers)

    assert response.json()["max_discount"] is None


def test_update_can_clear_expiry(client, store, admin_headers):
    seed_voucher(store, expires_at="2026-12-31T00:00:00+00:00")

    response = client.put("/admin/vouchers/v1", json={"expires_at": None}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["expires_at"] is None


def test_toggle_flips_active(client, store, admin_headers):
    seed_voucher(store, active=True)

    first = client.patch("/admin/vouchers/v1/toggle", headers=admin_headers)
    second = client.patch("/admin/vouchers/v1/toggle", headers=admin_headers)

    assert first.json()["active"] is False
    assert second.json()["active"] is True
    assert client.patch("/admin/vouchers/ghost/toggle", headers=admin_headers).status_code == 404


def test_delete_voucher(client, store, admin_headers, customer_headers):
    seed_voucher(store)

    assert client.delete("/admin/vouchers/v1", headers=customer_headers).status_code == 401
    assert client.delete("/admin/vouchers/v1", headers=admin_headers).status_code == 200
    assert store.tables[VOUCHER_TABLE] == []
