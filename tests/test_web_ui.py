from fastapi.testclient import TestClient

from assistant.main import app

client = TestClient(app)


def test_root_redirects_to_web() -> None:
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code in {302, 307}
    assert resp.headers["location"] == "/web/"


def test_web_index_is_served() -> None:
    resp = client.get("/web/")
    assert resp.status_code == 200
    assert "<title>AI Assistant</title>" in resp.text
    assert "Hello! I'm your AI assistant. How can I help you today?" in resp.text
    assert "Sorry, I encountered an error. Please try again." in resp.text
    assert 'fetch("/api/chat"' in resp.text
