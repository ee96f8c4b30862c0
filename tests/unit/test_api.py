"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from promptforge.api import create_app
from promptforge.api.dependencies import get_library, get_llm_provider
from promptforge.core.exceptions import ConfigurationError, StoreError
from promptforge.library import MemoryTemplateStore, TemplateLibrary
from conftest import MockLLMProvider, FailingLLMProvider


@pytest.fixture
def library():
    return TemplateLibrary(store=MemoryTemplateStore())


@pytest.fixture
def provider():
    return MockLLMProvider(default="Generated answer.")


@pytest.fixture
def client(library, provider):
    app = create_app()
    app.dependency_overrides[get_library] = lambda: library
    app.dependency_overrides[get_llm_provider] = lambda: provider
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ("healthy", "degraded")
        assert "library" in data["components"]

    def test_health_without_key(self, client, env):
        env()
        data = client.get("/health").json()
        assert data["status"] == "degraded"
        assert data["components"]["provider"] == "unconfigured"

    def test_health_with_key(self, client, env):
        env(GEMINI_API_KEY="k")
        assert client.get("/health").json()["components"]["provider"] == "healthy"

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["endpoints"]["run"] == "/api/v1/run"


class TestTemplateRoutes:
    """Tests for /api/v1/templates."""

    def test_list(self, client):
        response = client.get("/api/v1/templates")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 17
        assert data["templates"][0]["id"] == "t1"

    def test_list_category(self, client):
        data = client.get("/api/v1/templates", params={"category": "Education"}).json()
        assert [t["id"] for t in data["templates"]] == ["t4", "t6"]

    def test_list_search(self, client):
        data = client.get("/api/v1/templates", params={"search": "python"}).json()
        assert "t7" in [t["id"] for t in data["templates"]]

    def test_categories(self, client):
        data = client.get("/api/v1/templates/categories").json()
        assert data["categories"] == ["System", "Education", "Coding", "Creative", "Analysis"]

    def test_get(self, client):
        data = client.get("/api/v1/templates/t7").json()
        assert data["variables"] == ["broken_code", "error_message"]
        assert data["custom"] is False

    def test_get_unknown(self, client):
        response = client.get("/api/v1/templates/nope")
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_create(self, client, library):
        response = client.post("/api/v1/templates", json={
            "content": "Hello {{name}}",
            "name": "Greeting",
            "category": "Writing",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("custom_")
        assert data["tags"] == ["custom"]
        assert data["variables"] == ["name"]
        assert library.exists(data["id"])

    def test_create_blank(self, client):
        response = client.post("/api/v1/templates", json={"content": "  ", "name": "Empty"})
        assert response.status_code == 400

    def test_update(self, client, library):
        template = library.save("v1", "Draft")
        response = client.put(f"/api/v1/templates/{template.id}", json={
            "content": "v2 {{x}}",
            "name": "Final",
        })
        assert response.status_code == 200
        assert response.json()["id"] == template.id
        assert library.get(template.id).content == "v2 {{x}}"

    def test_update_builtin(self, client):
        response = client.put("/api/v1/templates/t1", json={"content": "x", "name": "y"})
        assert response.status_code == 400

    def test_update_unknown(self, client):
        response = client.put("/api/v1/templates/custom_1", json={"content": "x", "name": "y"})
        assert response.status_code == 404

    def test_delete(self, client, library):
        template = library.save("x", "X")
        response = client.delete(f"/api/v1/templates/{template.id}")
        assert response.status_code == 200
        assert response.json() == {"deleted": template.id}
        assert not library.exists(template.id)

    def test_delete_builtin(self, client):
        assert client.delete("/api/v1/templates/t1").status_code == 400

    def test_delete_unknown(self, client):
        assert client.delete("/api/v1/templates/custom_1").status_code == 404


class TestVariableRoutes:
    """Tests for /api/v1/variables."""

    def test_extract(self, client):
        response = client.post("/api/v1/variables/extract", json={
            "text": "Hi {{name}}, your {{name}} is due {{ due }}"
        })
        assert response.json() == {"variables": ["name", "due"]}

    def test_reconcile(self, client):
        response = client.post("/api/v1/variables/reconcile", json={
            "text": "{{x}} {{y}}",
            "previous": [{"name": "x", "value": "7"}],
            "cache": {"y": "42", "x": "old"},
        })
        assert response.json()["variables"] == [
            {"name": "x", "value": "7"},
            {"name": "y", "value": "42"},
        ]

    def test_reconcile_defaults(self, client):
        response = client.post("/api/v1/variables/reconcile", json={"text": "{{z}}"})
        assert response.json()["variables"] == [{"name": "z", "value": ""}]

    def test_interpolate(self, client):
        response = client.post("/api/v1/variables/interpolate", json={
            "text": "A: {{a}}, B: {{b}}",
            "values": {"a": "1"},
        })
        assert response.json() == {"text": "A: 1, B: {{b}}", "unfilled": ["b"]}

    def test_interpolate_special_name(self, client):
        response = client.post("/api/v1/variables/interpolate", json={
            "text": "{{a.b}} {{axb}}",
            "values": {"a.b": "dot"},
        })
        assert response.json()["text"] == "dot {{axb}}"


class TestRunRoutes:
    """Tests for /api/v1/run and /api/v1/optimize."""

    def test_run_prompt(self, client, provider):
        response = client.post("/api/v1/run", json={
            "prompt": "Summarize {{topic}}",
            "values": {"topic": "tides"},
            "tier": "thinking_pro",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["prompt"] == "Summarize tides"
        assert data["text"] == "Generated answer."
        assert data["tier"] == "thinking_pro"
        assert provider.calls[0]["thinking_budget"] == 4096

    def test_run_template(self, client, provider):
        response = client.post("/api/v1/run", json={"template_id": "t4", "values": {"topic": "tides"}})
        assert response.status_code == 200
        assert "learn about: tides" in response.json()["prompt"]

    def test_run_history(self, client, provider):
        client.post("/api/v1/run", json={
            "prompt": "Shorter please",
            "history": [{"role": "user", "text": "Explain tides"}, {"role": "model", "text": "Long answer"}],
        })
        roles = [m["role"] for m in provider.calls[0]["messages"]]
        assert roles == ["user", "assistant", "user"]

    def test_run_default_tier_from_settings(self, client, provider, env):
        env(PF_DEFAULT_TIER="pro")
        response = client.post("/api/v1/run", json={"prompt": "Hi"})
        assert response.json()["tier"] == "pro"
        assert provider.calls[0]["model"] == "gemini-3-pro-preview"

    def test_run_rejects_error_turns(self, client, provider):
        response = client.post("/api/v1/run", json={
            "prompt": "Again",
            "history": [{"role": "error", "text": "Failed to send message."}],
        })
        assert response.status_code == 422
        assert provider.calls == []

    def test_run_unknown_template(self, client):
        assert client.post("/api/v1/run", json={"template_id": "nope"}).status_code == 404

    def test_run_invalid_tier(self, client):
        response = client.post("/api/v1/run", json={"prompt": "Hi", "tier": "ultra"})
        assert response.status_code == 400

    def test_run_blank(self, client):
        assert client.post("/api/v1/run", json={"prompt": "  "}).status_code == 400

    def test_run_provider_failure(self, client):
        client.app.dependency_overrides[get_llm_provider] = lambda: FailingLLMProvider()
        response = client.post("/api/v1/run", json={"prompt": "Hi"})
        assert response.status_code == 502

    def test_optimize(self, client, provider):
        provider.default = '"Explain {{topic}} step by step."'
        response = client.post("/api/v1/optimize", json={"prompt": "Explain {{topic}}"})
        assert response.status_code == 200
        data = response.json()
        assert data["optimized_prompt"] == "Explain {{topic}} step by step."
        assert data["changed"] is True
        assert data["variables"] == ["topic"]

    def test_optimize_failure(self, client):
        client.app.dependency_overrides[get_llm_provider] = lambda: FailingLLMProvider()
        response = client.post("/api/v1/optimize", json={"prompt": "Explain {{topic}}"})
        assert response.status_code == 502

    def test_optimize_blank(self, client):
        assert client.post("/api/v1/optimize", json={"prompt": ""}).status_code == 400


class TestErrorHandlers:
    """Tests for errors that escape a route."""

    def test_store_error_body(self, client, library, monkeypatch):
        def broken():
            raise StoreError("Could not read custom templates", path="/tmp/custom_templates.json")

        monkeypatch.setattr(library, "list_templates", broken)
        response = client.get("/api/v1/templates")

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "StoreError"
        assert data["context"]["path"] == "/tmp/custom_templates.json"

    def test_configuration_error_status(self, client):
        def no_key():
            raise ConfigurationError("API key is required", config_key="GEMINI_API_KEY")

        client.app.dependency_overrides[get_library] = no_key
        assert client.get("/api/v1/templates/categories").status_code == 503
