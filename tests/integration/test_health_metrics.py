"""Integration tests for /health, /healthz and /metrics endpoints."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pydantic import SecretStr

from backend.app.api.routes.health import check_llm
from backend.app.config import Settings
from tests.fakes import FakeCompletionClient, sample_plan_completion


class TestHealthEndpoint:
    """Test /health and /healthz endpoints."""

    def test_health_always_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @patch("backend.app.api.routes.health.check_llm")
    def test_healthz_returns_200_when_llm_configured(
        self, mock_check_llm: MagicMock, client: TestClient
    ) -> None:
        """Test /healthz returns 200 when a provider key is present."""
        mock_check_llm.return_value = (True, "configured")

        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"]["llm"] == "configured"
        assert data["components"]["model"] == "gpt-4o"

    @patch("backend.app.api.routes.health.check_llm")
    def test_healthz_returns_503_when_llm_missing(
        self, mock_check_llm: MagicMock, client: TestClient
    ) -> None:
        """Test /healthz returns 503 without a provider key."""
        mock_check_llm.return_value = (False, "not_configured")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["llm"] == "not_configured"

    def test_check_llm(self) -> None:
        assert check_llm(Settings(openai_api_key=None)) == (False, "not_configured")
        assert check_llm(Settings(openai_api_key=SecretStr(""))) == (False, "not_configured")
        assert check_llm(Settings(openai_api_key=SecretStr("sk-test"))) == (True, "configured")


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_returns_prometheus_format(self, client: TestClient) -> None:
        """Test /metrics returns Prometheus text format."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "# HELP" in response.text

    def test_metrics_include_completion_attempts(
        self, client: TestClient, fake_llm: FakeCompletionClient
    ) -> None:
        """Test a plan request shows up in completion metrics."""
        fake_llm.script(sample_plan_completion(), "not json")
        client.post("/api/wedding", json={"location": "Austin"})
        client.post("/api/wedding", json={"location": "Austin"})

        text = client.get("/metrics").text

        assert 'completion_latency_ms_count{operation="wedding_plan",outcome="success"}' in text
        assert 'completion_errors_total{operation="wedding_plan",reason="unparsable"}' in text


class TestRootEndpoint:
    """Test root endpoint."""

    def test_root_returns_api_info(self, client: TestClient) -> None:
        """Test root endpoint returns API information."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "AI Utilities API"
        assert data["version"] == "0.1.0"
