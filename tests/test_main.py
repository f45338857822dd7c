"""Tests for the FastAPI application and its redirect wiring."""

import pytest
from fastapi.testclient import TestClient

from urlshort.config.settings import Settings
from urlshort.exceptions import DecodeError, RedirectConfigNotFound
from urlshort.main import create_app, load_redirects


RULES_YAML = """
- path: /docs-home
  url: https://docs.example.com/
- path: /go
  url: https://example.com/first
- path: /go
  url: https://example.com/second
"""


def _settings(**overrides) -> Settings:
    values = {"log_format": "console", "redirects_strict": True}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "redirects.yaml"
    path.write_text(RULES_YAML)
    return path


@pytest.fixture
def client(rules_file):
    return TestClient(create_app(_settings(redirects_file=str(rules_file))))


class TestRedirectApp:
    """Test redirects served in front of the application routes."""
    
    def test_redirects_configured_path(self, client):
        """Test a configured path returns 302 with Location."""
        response = client.get("/docs-home", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://docs.example.com/"
    
    def test_duplicate_path_last_wins(self, client):
        """Test the last duplicate record is served."""
        response = client.get("/go", follow_redirects=False)
        assert response.headers["location"] == "https://example.com/second"
    
    def test_redirect_carries_trace_headers(self, client):
        """Test request logging wraps redirects too."""
        response = client.get("/go", follow_redirects=False)
        assert "x-trace-id" in response.headers
        assert "x-process-time" in response.headers
    
    def test_unmapped_path_reaches_routes(self, client):
        """Test the root endpoint is served when no redirect matches."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "urlshort"
        assert data["version"] == "0.1.0"
        assert data["status"] == "running"
    
    def test_unknown_path_is_not_found(self, client):
        """Test unmatched, unrouted paths get the standard 404."""
        response = client.get("/nowhere", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}


class TestHealthEndpoints:
    """Test health check endpoints."""
    
    def test_health_check(self, client):
        """Test basic health check endpoint."""
        response = client.get("/health/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "urlshort"
        assert "timestamp" in data
    
    def test_redirects_status(self, client, rules_file):
        """Test the loaded redirect count and source are reported."""
        response = client.get("/health/redirects")
        assert response.status_code == 200
        assert response.json() == {"count": 2, "source": str(rules_file)}
    
    def test_readiness_check(self, client):
        """Test readiness check endpoint."""
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"
    
    def test_liveness_check(self, client):
        """Test liveness check endpoint."""
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"
    
    def test_lifespan_passes_through_redirects(self, rules_file):
        """Test startup and shutdown run with redirect middleware installed."""
        app = create_app(_settings(redirects_file=str(rules_file)))
        
        with TestClient(app) as client:
            assert client.get("/health/live").status_code == 200


class TestStartupPolicy:
    """Test how unreadable rules affect startup."""
    
    def test_strict_decode_error_aborts(self, tmp_path):
        """Test strict mode propagates DecodeError from create_app."""
        broken = tmp_path / "broken.yaml"
        broken.write_text("- path: /a\n  url: 5\n")
        
        with pytest.raises(DecodeError):
            create_app(_settings(redirects_file=str(broken)))
    
    def test_strict_missing_file_aborts(self, tmp_path):
        """Test strict mode propagates a missing configured file."""
        with pytest.raises(RedirectConfigNotFound):
            create_app(_settings(redirects_file=str(tmp_path / "absent.yaml")))
    
    def test_lenient_mode_starts_empty(self, tmp_path):
        """Test non-strict mode falls back to no redirects."""
        broken = tmp_path / "broken.yaml"
        broken.write_text("not: [valid\n")
        
        app = create_app(_settings(redirects_file=str(broken), redirects_strict=False))
        client = TestClient(app)
        
        assert client.get("/health/redirects").json()["count"] == 0
        assert client.get("/").status_code == 200
    
    def test_no_source_means_no_redirects(self):
        """Test a missing source yields an empty map."""
        assert load_redirects(None) == {}
    
    def test_json_source(self, tmp_path):
        """Test JSON rules files are accepted at startup."""
        rules = tmp_path / "redirects.json"
        rules.write_text('[{"path": "/j", "url": "https://json.example"}]')
        
        assert load_redirects(rules) == {"/j": "https://json.example"}
