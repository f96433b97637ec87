"""
End-to-end API tests over FastAPI's TestClient.

Each test builds its own app on an in-memory database, registers users over
HTTP and exercises the auth and meal routes the way a client would.
"""

import uuid
from datetime import datetime, timezone

from fastapi.testclient import TestClient
from jwt.utils import base64url_encode

from domain.models import AppUser

from test_fixtures import (
    TEST_PASSWORD,
    WEEK_OF_MEALS,
    client,
    meal_payload,
    meal_time,
    register_and_login,
    app_settings,
    unique_email,
)


def _parse(ts: str) -> datetime:
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))


# =============================================================================
# HEALTH
# =============================================================================


def test_health_check(client: TestClient):
    r = client.get("/health-check")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["database"] == "ok"
    assert "X-Request-ID" in r.headers


# =============================================================================
# AUTH
# =============================================================================


def test_register_login_and_me(client: TestClient):
    session = register_and_login(client)

    assert set(session["user"]) == {"id", "name", "email"}
    assert session["user"]["email"] == session["email"]

    r = client.get("/auth/me", headers=session["headers"])
    assert r.status_code == 200
    assert r.json() == session["user"]


def test_register_duplicate_email_returns_409(client: TestClient):
    email = unique_email("dup")
    body = {"name": "Sarah Martinez", "email": email, "password": TEST_PASSWORD}
    assert client.post("/auth/register", json=body).status_code == 201

    r = client.post("/auth/register", json=body)
    assert r.status_code == 409
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "CONFLICT"


def test_register_validation(client: TestClient):
    r = client.post(
        "/auth/register",
        json={"name": "", "email": "not-an-email", "password": "123"},
    )
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_login_failures_have_same_shape(client: TestClient):
    session = register_and_login(client)

    unknown = client.post(
        "/auth/login", json={"email": unique_email("nobody"), "password": TEST_PASSWORD}
    )
    wrong = client.post(
        "/auth/login", json={"email": session["email"], "password": "wrong-password"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json()["error"] == wrong.json()["error"]
    assert unknown.headers["www-authenticate"] == "Bearer"


def test_routes_require_a_token(client: TestClient):
    for method, path in [
        ("get", "/auth/me"),
        ("get", "/meals"),
        ("get", "/meals/metrics"),
        ("get", f"/meals/{uuid.uuid4()}"),
        ("delete", f"/meals/{uuid.uuid4()}"),
    ]:
        r = getattr(client, method)(path)
        assert r.status_code == 401, path
        assert r.json()["error"]["code"] == "NOT_AUTHENTICATED"


def test_invalid_token_is_rejected(client: TestClient):
    session = register_and_login(client)
    header, _, signature = session["token"].split(".")
    forged = base64url_encode(b'{"sub":"' + str(uuid.uuid4()).encode() + b'"}').decode()
    tampered = f"{header}.{forged}.{signature}"

    r = client.get("/meals", headers={"Authorization": f"Bearer {tampered}"})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "INVALID_TOKEN"


# =============================================================================
# MEALS
# =============================================================================


def test_create_and_get_meal(client: TestClient):
    session = register_and_login(client)

    r = client.post(
        "/meals",
        json=meal_payload(date="05/01/2025 12:30", is_on_diet=True),
        headers=session["headers"],
    )
    assert r.status_code == 201, r.text
    meal = r.json()
    assert meal["name"] == "Oatmeal with berries"
    assert meal["isOnDiet"] is True
    assert meal["userId"] == session["user"]["id"]
    assert _parse(meal["date"]) == datetime(2025, 1, 5, 12, 30, tzinfo=timezone.utc)
    assert {"createdAt", "updatedAt"} <= set(meal)

    r = client.get(f"/meals/{meal['id']}", headers=session["headers"])
    assert r.status_code == 200
    assert r.json()["id"] == meal["id"]


def test_create_meal_with_offset_date_is_stored_as_utc(client: TestClient):
    session = register_and_login(client)
    r = client.post(
        "/meals",
        json=meal_payload(date="2025-03-10T09:00:00-03:00"),
        headers=session["headers"],
    )
    assert r.status_code == 201
    assert _parse(r.json()["date"]) == datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_create_meal_rejects_bad_date(client: TestClient):
    session = register_and_login(client)
    for bad in ["31/02/2025", "yesterday", ""]:
        r = client.post("/meals", json=meal_payload(date=bad), headers=session["headers"])
        assert r.status_code == 422, bad


def test_list_meals_is_chronological_and_private(client: TestClient):
    alice = register_and_login(client, "default")
    bob = register_and_login(client, "athlete")

    for day in (2, 0, 1):
        client.post(
            "/meals",
            json=meal_payload(name=f"Day {day}", date=meal_time(day).isoformat()),
            headers=alice["headers"],
        )
    client.post("/meals", json=meal_payload(name="Bob's lunch"), headers=bob["headers"])

    r = client.get("/meals", headers=alice["headers"])
    assert r.status_code == 200
    assert [m["name"] for m in r.json()] == ["Day 0", "Day 1", "Day 2"]

    r = client.get("/meals", headers=bob["headers"])
    assert [m["name"] for m in r.json()] == ["Bob's lunch"]


def test_replace_and_patch_meal(client: TestClient):
    session = register_and_login(client)
    meal = client.post("/meals", json=meal_payload(), headers=session["headers"]).json()

    r = client.put(
        f"/meals/{meal['id']}",
        json=meal_payload(
            name="Cheeseburger",
            description="Fast food",
            date=meal_time(1).isoformat(),
            is_on_diet=False,
        ),
        headers=session["headers"],
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Cheeseburger"
    assert r.json()["isOnDiet"] is False

    r = client.patch(
        f"/meals/{meal['id']}", json={"isOnDiet": True}, headers=session["headers"]
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Cheeseburger"
    assert r.json()["isOnDiet"] is True


def test_patch_rejects_null_fields(client: TestClient):
    session = register_and_login(client)
    meal = client.post("/meals", json=meal_payload(), headers=session["headers"]).json()

    r = client.patch(
        f"/meals/{meal['id']}", json={"name": None}, headers=session["headers"]
    )
    assert r.status_code == 422


def test_delete_meal(client: TestClient):
    session = register_and_login(client)
    meal = client.post("/meals", json=meal_payload(), headers=session["headers"]).json()

    r = client.delete(f"/meals/{meal['id']}", headers=session["headers"])
    assert r.status_code == 204

    r = client.get(f"/meals/{meal['id']}", headers=session["headers"])
    assert r.status_code == 404


def test_other_users_meal_looks_missing(client: TestClient):
    owner = register_and_login(client, "default")
    intruder = register_and_login(client, "athlete")
    meal = client.post("/meals", json=meal_payload(), headers=owner["headers"]).json()
    missing_id = uuid.uuid4()

    responses = {
        "get": (
            client.get(f"/meals/{meal['id']}", headers=intruder["headers"]),
            client.get(f"/meals/{missing_id}", headers=intruder["headers"]),
        ),
        "put": (
            client.put(
                f"/meals/{meal['id']}",
                json=meal_payload(name="Hijacked"),
                headers=intruder["headers"],
            ),
            client.put(
                f"/meals/{missing_id}",
                json=meal_payload(name="Hijacked"),
                headers=intruder["headers"],
            ),
        ),
        "patch": (
            client.patch(
                f"/meals/{meal['id']}", json={"name": "Hijacked"}, headers=intruder["headers"]
            ),
            client.patch(
                f"/meals/{missing_id}", json={"name": "Hijacked"}, headers=intruder["headers"]
            ),
        ),
        "delete": (
            client.delete(f"/meals/{meal['id']}", headers=intruder["headers"]),
            client.delete(f"/meals/{missing_id}", headers=intruder["headers"]),
        ),
    }

    for method, (foreign, absent) in responses.items():
        assert foreign.status_code == absent.status_code == 404, method
        assert foreign.json()["error"] == absent.json()["error"], method

    # The owner's meal is untouched
    r = client.get(f"/meals/{meal['id']}", headers=owner["headers"])
    assert r.status_code == 200
    assert r.json()["name"] == meal["name"]


# =============================================================================
# METRICS
# =============================================================================


def test_metrics_for_new_user_are_zero(client: TestClient):
    session = register_and_login(client)
    r = client.get("/meals/metrics", headers=session["headers"])
    assert r.status_code == 200
    assert r.json() == {
        "totalMeals": 0,
        "totalOnDiet": 0,
        "totalOffDiet": 0,
        "bestOnDietSequence": 0,
    }


def test_metrics_for_week_of_meals(client: TestClient):
    session = register_and_login(client)
    for day, (name, description, on_diet) in enumerate(WEEK_OF_MEALS):
        r = client.post(
            "/meals",
            json=meal_payload(
                name=name,
                description=description,
                date=meal_time(day).isoformat(),
                is_on_diet=on_diet,
            ),
            headers=session["headers"],
        )
        assert r.status_code == 201

    r = client.get("/meals/metrics", headers=session["headers"])
    assert r.status_code == 200
    assert r.json() == {
        "totalMeals": 7,
        "totalOnDiet": 5,
        "totalOffDiet": 2,
        "bestOnDietSequence": 3,
    }


# =============================================================================
# OWNER REMOVED AFTER LOGIN
# =============================================================================


def test_create_meal_after_account_removed_returns_owner_not_found(client: TestClient):
    session = register_and_login(client)

    db = client.app.state.session_factory()
    try:
        user = db.get(AppUser, uuid.UUID(session["user"]["id"]))
        db.delete(user)
        db.commit()
    finally:
        db.close()

    r = client.post("/meals", json=meal_payload(), headers=session["headers"])
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "OWNER_NOT_FOUND"

    r = client.get("/auth/me", headers=session["headers"])
    assert r.status_code == 404
