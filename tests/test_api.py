"""Tests for API functionality."""

from fastapi.testclient import TestClient

from inkwell.api.app import create_app, generate_token


def test_health_endpoint(runtime):
    """Test /health endpoint."""
    client = TestClient(create_app(runtime, token=None))

    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"]


def test_render_endpoint(runtime):
    client = TestClient(create_app(runtime))

    response = client.post("/render", json={"text": "```js\nconst a = 1;\n```"})
    assert response.status_code == 200
    assert response.json() == {
        "blocks": [{"kind": "code", "language": "js", "lines": ["const a = 1;"]}]
    }


def test_toc_endpoint(runtime):
    client = TestClient(create_app(runtime))

    response = client.post("/toc", json={"text": "# Title\n\n## Sub Heading\n"})
    assert response.status_code == 200
    assert response.json() == {
        "headings": [
            {"id": "title", "text": "Title", "level": 1},
            {"id": "sub-heading", "text": "Sub Heading", "level": 2},
        ]
    }


def test_html_endpoint(runtime):
    client = TestClient(create_app(runtime))

    response = client.post("/html", json={"text": "**hi** there"})
    assert response.status_code == 200
    assert response.json() == {"html": "<p><strong>hi</strong> there</p>"}


def test_preview_endpoint(runtime, post_text):
    client = TestClient(create_app(runtime))

    response = client.post("/preview", json={"text": post_text})
    assert response.status_code == 200
    data = response.json()
    assert data["meta"]["title"] == "Building AI-native apps"
    assert data["reading_time"] == "1 min read"
    assert data["excerpt"].startswith("# Building AI-native apps")
    assert [h["id"] for h in data["headings"]] == [
        "building-ai-native-apps",
        "why-now",
        "next-steps",
    ]
    # Metadata lines are not rendered as paragraphs
    assert "title:" not in data["html"]
    assert '<h1 id="building-ai-native-apps">' in data["html"]


def test_missing_text_rejected(runtime):
    client = TestClient(create_app(runtime))

    response = client.post("/render", json={})
    assert response.status_code == 422


def test_auth_required(runtime):
    """Test that endpoints require authentication when token is set."""
    token = generate_token()
    client = TestClient(create_app(runtime, token=token))

    response = client.post("/toc", json={"text": "# A"})
    assert response.status_code == 401

    response = client.post(
        "/toc", json={"text": "# A"}, headers={"Authorization": "Bearer wrong"}
    )
    assert response.status_code == 401

    response = client.post(
        "/toc", json={"text": "# A"}, headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    assert response.json()["headings"][0]["id"] == "a"


def test_docs_hidden_with_token(runtime):
    client = TestClient(create_app(runtime, token="t"))
    assert client.get("/docs").status_code == 404


def test_cors_headers(runtime):
    client = TestClient(create_app(runtime, enable_cors=True))

    response = client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers
