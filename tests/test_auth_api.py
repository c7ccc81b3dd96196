# tests/test_auth_api.py
"""Registration, login and token checks through the HTTP API."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import timedelta
from parking_api.services.auth_service import create_access_token
from conftest import PASSWORD, auth_headers

API = "/api/v1"


class TestRegister:
    def test_register_and_login(self, client):
        res = client.post(f"{API}/auth/register",
                          json={"name": "New Driver", "email": "New@Parking.com", "password": "pass1234"})
        assert res.status_code == 201
        body = res.json()
        assert body["email"] == "new@parking.com"
        assert body["role"] == "USER"
        assert "password_hash" not in body

        res = client.post(f"{API}/auth/login", json={"email": "new@parking.com", "password": "pass1234"})
        assert res.status_code == 200
        assert res.json()["token_type"] == "bearer"
        assert res.json()["role"] == "USER"

    def test_duplicate_email(self, client, driver):
        res = client.post(f"{API}/auth/register",
                          json={"name": "Again", "email": driver.email, "password": "pass1234"})
        assert res.status_code == 400
        assert res.json()["detail"] == "Email already registered"

    def test_invalid_body_is_400(self, client):
        res = client.post(f"{API}/auth/register", json={"name": "x", "email": "not-an-email", "password": "1"})
        assert res.status_code == 400
        body = res.json()
        assert body["detail"] == "Validation failed"
        fields = {e["loc"][-1] for e in body["errors"]}
        assert {"email", "password"} <= fields


class TestLogin:
    def test_wrong_password(self, client, driver):
        res = client.post(f"{API}/auth/login", json={"email": driver.email, "password": "wrong"})
        assert res.status_code == 401

    def test_oauth2_form(self, client, driver):
        res = client.post(f"{API}/auth/token", data={"username": driver.email, "password": PASSWORD})
        assert res.status_code == 200
        assert res.json()["access_token"]


class TestCurrentUser:
    def test_me(self, client, driver):
        res = client.get(f"{API}/auth/me", headers=auth_headers(driver))
        assert res.status_code == 200
        assert res.json()["email"] == driver.email

    def test_missing_token(self, client, db_session):
        assert client.get(f"{API}/auth/me").status_code == 401

    def test_garbage_token(self, client, db_session):
        res = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert res.status_code == 401

    def test_expired_token(self, client, driver):
        token = create_access_token(driver, expires_delta=timedelta(minutes=-1))
        res = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 401

    def test_admin_routes_reject_users(self, client, driver):
        res = client.get(f"{API}/admin/dashboard", headers=auth_headers(driver))
        assert res.status_code == 403
        assert res.json()["detail"] == "Not authorized, admin access required"
