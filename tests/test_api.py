"""
Tests for the HTTP API.
"""

from uuid import uuid4

from fastapi.testclient import TestClient

from keypad_calc.api import SessionRegistry, app


class TestHealth:
    """Test health and config endpoints."""

    def setup_method(self):
        self.client = TestClient(app)

    def test_health(self):
        response = self.client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_config(self):
        body = self.client.get("/api/v1/config").json()
        assert body["precision"] == 12
        assert body["strip_trailing_operator"] is True


class TestEvaluate:
    """Test the stateless evaluate endpoint."""

    def setup_method(self):
        self.client = TestClient(app)

    def test_evaluate(self):
        response = self.client.post("/api/v1/evaluate", json={"expression": "2+3*4"})
        assert response.status_code == 200
        assert response.json() == {
            "expression": "2+3*4",
            "result": "14",
            "error": None,
            "display": "14",
        }

    def test_evaluate_division_by_zero(self):
        body = self.client.post("/api/v1/evaluate", json={"expression": "5/0"}).json()
        assert body["result"] is None
        assert body["error"] == "divide_by_zero"
        assert body["display"] == "Error"

    def test_evaluate_requires_expression(self):
        response = self.client.post("/api/v1/evaluate", json={})
        assert response.status_code == 422


class TestSessions:
    """Test keypad sessions over HTTP."""

    def setup_method(self):
        self.client = TestClient(app)
        response = self.client.post("/api/v1/sessions")
        assert response.status_code == 201
        self.session_id = response.json()["session_id"]

    def press(self, key):
        return self.client.post(f"/api/v1/sessions/{self.session_id}/press", json={"key": key})

    def test_new_session_shows_zero(self):
        state = self.client.get(f"/api/v1/sessions/{self.session_id}").json()
        assert state["display"] == "0"
        assert state["expression"] == ""

    def test_press_and_equals(self):
        for key in "12+3":
            assert self.press(key).status_code == 200
        state = self.press("=").json()
        assert state["display"] == "15"
        assert state["sub_display"] == "12+3"
        assert state["history_size"] == 1

    def test_error_state(self):
        for key in "5/0=":
            state = self.press(key).json()
        assert state["display"] == "Error"
        assert state["last_error"] == "divide_by_zero"

    def test_unknown_key(self):
        response = self.press("z")
        assert response.status_code == 400

    def test_unknown_session(self):
        response = self.client.get(f"/api/v1/sessions/{uuid4()}")
        assert response.status_code == 404
        response = self.client.post(f"/api/v1/sessions/{uuid4()}/press", json={"key": "1"})
        assert response.status_code == 404

    def test_history(self):
        for key in "7*6=":
            self.press(key)
        history = self.client.get(f"/api/v1/sessions/{self.session_id}/history").json()
        assert len(history) == 1
        assert history[0]["expression"] == "7*6"
        assert history[0]["result"] == "42"

        response = self.client.delete(f"/api/v1/sessions/{self.session_id}/history")
        assert response.status_code == 204
        history = self.client.get(f"/api/v1/sessions/{self.session_id}/history").json()
        assert history == []

    def test_delete_session(self):
        response = self.client.delete(f"/api/v1/sessions/{self.session_id}")
        assert response.status_code == 204
        response = self.client.get(f"/api/v1/sessions/{self.session_id}")
        assert response.status_code == 404

    def test_delete_unknown_session(self):
        response = self.client.delete(f"/api/v1/sessions/{uuid4()}")
        assert response.status_code == 404


class TestSessionRegistry:
    """Test the in-memory session registry."""

    def test_evicts_least_recently_used(self):
        registry = SessionRegistry(max_sessions=2)
        first = registry.create()
        second = registry.create()
        registry.get(first.session_id)
        registry.create()
        assert len(registry) == 2
        assert registry.get(first.session_id) is first
        assert registry.get(second.session_id) is None

    def test_remove(self):
        registry = SessionRegistry(max_sessions=2)
        session = registry.create()
        assert registry.remove(session.session_id) is True
        assert registry.remove(session.session_id) is False
