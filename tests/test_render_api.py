"""
API tests for render endpoints.

Run with: uv run pytest tests/test_render_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from pubmark import main
from pubmark.config import Settings


@pytest.fixture(scope="module")
def client():
    """Create an in-process client for the preview service."""
    return TestClient(main.app)


@pytest.fixture
def small_limit(monkeypatch):
    monkeypatch.setattr(main, "settings", Settings(max_content_chars=10))


class TestRenderPreviewEndpoint:
    """Test /api/render/preview endpoint."""

    def test_render_preview(self, client):
        """Test rendering a full article body."""
        response = client.post(
            "/api/render/preview",
            json={"text": "# Title\n\n- one\n- two"}
        )

        assert response.status_code == 200
        data = response.json()

        assert data["format"] == "html"
        assert data["content"] == "<h1>Title</h1><ul><li>one</li><li>two</li></ul>"

    def test_render_preview_code_block(self, client):
        response = client.post(
            "/api/render/preview",
            json={"text": "```python\nprint('hi')\n```"}
        )

        assert response.status_code == 200
        assert '<code class="language-python">' in response.json()["content"]

    def test_render_preview_escapes_script(self, client):
        response = client.post(
            "/api/render/preview",
            json={"text": "<script>alert(1)</script> [x](javascript:alert(1))"}
        )

        content = response.json()["content"]
        assert "<script>" not in content
        assert "href" not in content

    def test_empty_text(self, client):
        response = client.post("/api/render/preview", json={"text": ""})

        assert response.status_code == 200
        assert response.json()["content"] == ""

    def test_missing_text_field(self, client):
        response = client.post("/api/render/preview", json={})

        assert response.status_code == 422

    def test_content_too_large(self, client, small_limit):
        response = client.post("/api/render/preview", json={"text": "x" * 11})

        assert response.status_code == 413
        assert "exceeds" in response.json()["detail"]

    def test_configured_link_class(self, client, monkeypatch):
        monkeypatch.setattr(main, "settings", Settings(link_class="prose-link"))
        response = client.post("/api/render/preview", json={"text": "[a](/b)"})

        assert '<a href="/b" class="prose-link">a</a>' in response.json()["content"]


class TestRenderInlineEndpoint:
    """Test /api/render/inline endpoint."""

    def test_render_inline(self, client):
        response = client.post("/api/render/inline", json={"text": "**bold** `code`"})

        assert response.status_code == 200
        assert response.json() == {
            "content": "<strong>bold</strong> <code>code</code>",
            "format": "html",
        }

    def test_inline_does_not_build_blocks(self, client):
        response = client.post("/api/render/inline", json={"text": "# not a heading"})

        assert response.json()["content"] == "# not a heading"

    def test_inline_too_large(self, client, small_limit):
        response = client.post("/api/render/inline", json={"text": "y" * 50})

        assert response.status_code == 413


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
