"""
Tests for the tour API endpoints.

Exercises the full request path against an in-memory store: routing,
validation, the repository, and the centralized error pipeline in both
deployment modes.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
import pytest

TOURS_URL = "/api/v1/tours"
FORMATTER_LOGGER = "app.shared.errors.formatter"
MISSING_ID = "00000000-0000-0000-0000-000000000000"
SECRET = "test-secret-with-enough-length-for-hs256"


@pytest.fixture
def client(make_client):
    return make_client(app_env="production")


@pytest.fixture
def dev_client(make_client):
    return make_client(app_env="development")


def _create(client, payload) -> dict:
    response = client.post(TOURS_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]["tour"]


def _token(expires_in: timedelta) -> str:
    claims = {"sub": "admin", "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(claims, SECRET, algorithm="HS256")


class TestHealth:
    """Tests for GET /api/v1/health."""

    def test_health(self, client) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": "0.1.0"}


class TestTourCrud:
    """Tests for the happy paths of the tour routes."""

    def test_create_tour(self, client, tour_payload) -> None:
        response = client.post(TOURS_URL, json=tour_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["tour"]["name"] == "The Forest Hiker"
        assert body["data"]["tour"]["ratings_average"] == 4.5

    def test_list_tours_with_filters(self, client, tour_payload) -> None:
        _create(client, tour_payload())
        _create(client, tour_payload(name="The Snow Adventurer", difficulty="difficult"))

        response = client.get(TOURS_URL, params={"duration": 5, "difficulty": "easy"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["results"] == 1
        assert body["data"]["tours"][0]["name"] == "The Forest Hiker"
        assert body["requested_at"]

    def test_get_tour(self, client, tour_payload) -> None:
        tour = _create(client, tour_payload())

        response = client.get(f"{TOURS_URL}/{tour['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["tour"] == tour

    def test_update_tour(self, client, tour_payload) -> None:
        tour = _create(client, tour_payload())

        response = client.patch(f"{TOURS_URL}/{tour['id']}", json={"price": 450})

        assert response.status_code == 200
        assert response.json()["data"]["tour"]["price"] == 450
        assert response.json()["data"]["tour"]["name"] == tour["name"]

    def test_delete_tour(self, client, tour_payload) -> None:
        tour = _create(client, tour_payload())

        response = client.delete(f"{TOURS_URL}/{tour['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"{TOURS_URL}/{tour['id']}").status_code == 404


class TestOperationalErrors:
    """Tests for user-safe rendering of expected failures."""

    def test_malformed_id(self, client) -> None:
        response = client.get(f"{TOURS_URL}/abc")

        assert response.status_code == 400
        assert response.json() == {"status": "fail", "message": "Invalid id: abc"}

    def test_missing_tour(self, client) -> None:
        response = client.get(f"{TOURS_URL}/{MISSING_ID}")

        assert response.status_code == 404
        assert response.json() == {"status": "fail", "message": "No tour found with that ID"}

    def test_duplicate_name(self, client, tour_payload) -> None:
        _create(client, tour_payload())

        response = client.post(TOURS_URL, json=tour_payload(duration=9))

        assert response.status_code == 400
        assert response.json() == {
            "status": "fail",
            "message": 'Duplicate field value: "The Forest Hiker". Please use another value!',
        }

    def test_invalid_body(self, client, tour_payload) -> None:
        payload = tour_payload(name="Short")
        del payload["price"]

        response = client.post(TOURS_URL, json=payload)

        assert response.status_code == 400
        body = response.json()
        assert set(body) == {"status", "message"}
        assert body["status"] == "fail"
        assert body["message"].startswith("Invalid input data. ")
        assert "at least 10 characters" in body["message"]
        assert "Field required" in body["message"]

    def test_unknown_fields_rejected(self, client, tour_payload) -> None:
        response = client.post(TOURS_URL, json=tour_payload(**{"price[$lt]": 1}))

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid input data. ")

    def test_discount_must_stay_below_price(self, client, tour_payload) -> None:
        tour = _create(client, tour_payload())

        response = client.patch(f"{TOURS_URL}/{tour['id']}", json={"price_discount": 500})

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid input data. Discount price (500.0) should be below regular price"
        )

    def test_required_field_cannot_be_nulled(self, client, tour_payload) -> None:
        tour = _create(client, tour_payload())

        response = client.patch(f"{TOURS_URL}/{tour['id']}", json={"name": None})

        assert response.status_code == 400
        assert "Fields cannot be null: name" in response.json()["message"]

    def test_unknown_route(self, client) -> None:
        response = client.get("/api/v1/bookings")

        assert response.status_code == 404
        assert response.json() == {
            "status": "fail",
            "message": "Can't find /api/v1/bookings on this server!",
        }

    def test_method_not_allowed(self, client) -> None:
        response = client.put(TOURS_URL, json={})

        assert response.status_code == 405
        assert response.json()["status"] == "fail"


class TestUnexpectedErrors:
    """Tests for non-operational failures."""

    @pytest.fixture
    def broken_client(self, client, monkeypatch):
        def explode(_filters):
            raise RuntimeError("database connection reset by peer")

        monkeypatch.setattr(client.app.state.tour_repository, "find", explode)
        return client

    def test_production_hides_details_and_logs_once(self, broken_client, caplog) -> None:
        caplog.set_level(logging.ERROR)

        response = broken_client.get(TOURS_URL)

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Something went wrong."}
        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert errors[0].name == FORMATTER_LOGGER
        assert "database connection reset" in str(errors[0].exc_info[1])

    def test_server_error_is_not_reraised(self, broken_client) -> None:
        # make_client builds TestClient with raise_server_exceptions left on,
        # so an error escaping to the server would fail this request.
        response = broken_client.get(TOURS_URL)

        assert response.status_code == 500

    def test_server_error_carries_security_headers(self, broken_client) -> None:
        response = broken_client.get(TOURS_URL)

        assert response.status_code == 500
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Strict-Transport-Security" in response.headers

    def test_development_exposes_details(self, dev_client, monkeypatch) -> None:
        def explode(_filters):
            raise RuntimeError("database connection reset by peer")

        monkeypatch.setattr(dev_client.app.state.tour_repository, "find", explode)

        response = dev_client.get(TOURS_URL)

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "database connection reset by peer"
        assert body["error"]["name"] == "RuntimeError"
        assert "RuntimeError" in body["stack"]


class TestDeploymentModes:
    """Tests for how the configured environment shapes error bodies."""

    def test_development_includes_diagnostics(self, dev_client) -> None:
        response = dev_client.get(f"{TOURS_URL}/abc")

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "fail"
        assert body["message"] == "Invalid id: abc"
        assert body["error"]["name"] == "CastFailure"
        assert body["error"]["value"] == "abc"
        assert "CastFailure" in body["stack"]

    def test_development_preserves_app_error_status(self, dev_client) -> None:
        response = dev_client.get(f"{TOURS_URL}/{MISSING_ID}")

        assert response.status_code == 404
        assert response.json()["error"]["status_code"] == 404
        assert response.json()["error"]["status"] == "fail"

    def test_unknown_environment_behaves_as_production(self, make_client) -> None:
        staging = make_client(app_env="staging")

        response = staging.get(f"{TOURS_URL}/abc")

        assert response.status_code == 400
        assert response.json() == {"status": "fail", "message": "Invalid id: abc"}

    def test_access_log_only_in_development(self, client, dev_client, caplog) -> None:
        caplog.set_level(logging.INFO, logger="app.access")

        dev_client.get("/api/v1/health")
        client.get("/api/v1/health")

        access = [r for r in caplog.records if r.name == "app.access"]
        assert len(access) == 1
        assert "GET /api/v1/health 200" in access[0].getMessage()


class TestTokenProtection:
    """Tests for bearer tokens on DELETE when a JWT secret is configured."""

    @pytest.fixture
    def secured(self, make_client):
        return make_client(jwt_secret=SECRET)

    def test_missing_token(self, secured, tour_payload) -> None:
        tour = _create(secured, tour_payload())

        response = secured.delete(f"{TOURS_URL}/{tour['id']}")

        assert response.status_code == 401
        assert response.json() == {
            "status": "fail",
            "message": "You are not logged in! Please log in to get access.",
        }

    def test_malformed_token(self, secured, tour_payload) -> None:
        tour = _create(secured, tour_payload())

        response = secured.delete(
            f"{TOURS_URL}/{tour['id']}", headers={"Authorization": "Bearer nonsense"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token. Please log in again."

    def test_expired_token(self, secured, tour_payload) -> None:
        tour = _create(secured, tour_payload())
        token = _token(timedelta(minutes=-1))

        response = secured.delete(
            f"{TOURS_URL}/{tour['id']}", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Your token has expired. Please log in again."

    def test_valid_token(self, secured, tour_payload) -> None:
        tour = _create(secured, tour_payload())
        token = _token(timedelta(minutes=5))

        response = secured.delete(
            f"{TOURS_URL}/{tour['id']}", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 204


class TestSecurityHeaders:
    """Tests for security headers on responses."""

    def test_headers_on_success(self, client) -> None:
        response = client.get("/api/v1/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Strict-Transport-Security" in response.headers

    def test_headers_on_error(self, client) -> None:
        response = client.get(f"{TOURS_URL}/abc")

        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_no_hsts_in_development(self, dev_client) -> None:
        response = dev_client.get("/api/v1/health")

        assert "Strict-Transport-Security" not in response.headers


class TestRateLimiting:
    """Tests for rate limiting behavior."""

    def test_rate_limit_returns_429(self, make_client) -> None:
        client = make_client(rate_limit_default="3/minute")

        statuses = [client.get(TOURS_URL).status_code for _ in range(4)]

        assert statuses == [200, 200, 200, 429]
        response = client.get(TOURS_URL)
        assert response.json() == {
            "status": "fail",
            "message": "Too many requests from this IP, please try again later.",
        }
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_limits_are_per_application(self, make_client) -> None:
        strict = make_client(rate_limit_default="2/minute")
        relaxed = make_client(rate_limit_default="10/minute")

        strict_statuses = [strict.get(TOURS_URL).status_code for _ in range(3)]
        relaxed_statuses = [relaxed.get(TOURS_URL).status_code for _ in range(3)]

        assert strict_statuses == [200, 200, 429]
        assert relaxed_statuses == [200, 200, 200]

    def test_rate_limiting_can_be_disabled(self, make_client) -> None:
        client = make_client(rate_limit_default="1/minute", rate_limit_enabled=False)

        statuses = [client.get(TOURS_URL).status_code for _ in range(3)]

        assert statuses == [200, 200, 200]

    def test_health_is_not_limited(self, make_client) -> None:
        client = make_client(rate_limit_default="1/minute")

        statuses = [client.get("/api/v1/health").status_code for _ in range(3)]

        assert statuses == [200, 200, 200]
