"""
Tests for authentication, role checks and the error body shape.
"""

from datetime import timedelta

from pond_ledger.auth import create_access_token


class TestAuthentication:

    def test_missing_token_returns_401(self, client):
        response = client.get("/debts")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication token required"}

    def test_garbage_token_returns_401(self, client):
        response = client.get(
            "/debts", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_expired_token_returns_401(self, client, employee):
        token = create_access_token(employee.id, timedelta(minutes=-5))
        response = client.get(
            "/debts", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    def test_unknown_user_returns_401(self, client):
        token = create_access_token(4242)
        response = client.get(
            "/debts", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "User not found"}

    def test_valid_token_accepted(self, client, employee_headers):
        response = client.get("/debts", headers=employee_headers)
        assert response.status_code == 200
        assert response.json() == []


class TestRoles:

    def test_employee_cannot_create_pond(self, client, employee_headers):
        response = client.post("/ponds", headers=employee_headers, json={
            "name": "Kolam 9", "type": "production",
        })
        assert response.status_code == 403
        assert response.json() == {"error": "Insufficient permissions"}

    def test_admin_can_create_pond(self, client, admin_headers, fish_type):
        response = client.post("/ponds", headers=admin_headers, json={
            "name": "Kolam 9", "type": "production",
        })
        assert response.status_code == 201


class TestErrorShape:

    def test_unknown_route_uses_error_key(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_validation_failure_is_400(self, client, employee_headers):
        response = client.post(
            "/customers", headers=employee_headers, json={}
        )
        assert response.status_code == 400
        assert "name" in response.json()["error"]
