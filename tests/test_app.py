from fastapi.testclient import TestClient
from backend.app.api.endpoints import get_relay

ORIGIN = "http://localhost:5173"


def test_unknown_route_is_plain_text_404(client):
    res = client.get("/nonexistent")
    assert res.status_code == 404
    assert res.text == "Ruta no encontrada"
    assert res.headers["content-type"].startswith("text/plain")

def test_wrong_method_is_404(client):
    res = client.get("/upload-video-direct")
    assert res.status_code == 404
    assert res.text == "Ruta no encontrada"

def test_preflight_is_answered_without_handlers(client, upstream):
    res = client.options(
        "/upload-video-direct",
        headers={
            "Origin": ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Tus-Resumable, Upload-Length, Content-Type",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == ORIGIN
    assert res.headers["access-control-allow-credentials"] == "true"
    assert res.headers["access-control-max-age"] == "86400"
    methods = res.headers["access-control-allow-methods"]
    for method in ("POST", "GET", "DELETE", "HEAD", "OPTIONS", "PATCH"):
        assert method in methods
    allowed = res.headers["access-control-allow-headers"].lower()
    assert "tus-resumable" in allowed
    assert "x-proxy-upload" in allowed
    assert upstream.requests == []

def test_preflight_for_delete(client, upstream):
    res = client.options(
        "/delete-video/abc123",
        headers={"Origin": ORIGIN, "Access-Control-Request-Method": "DELETE"},
    )
    assert res.status_code == 200
    assert upstream.requests == []

def test_preflight_from_other_origin_is_refused(client):
    res = client.options(
        "/upload-video-direct",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert res.status_code == 400
    assert "access-control-allow-origin" not in res.headers

def test_cors_headers_on_actual_request(client, upstream):
    upstream.reply(200, json={"success": True})
    res = client.delete("/delete-video/abc123", headers={"Origin": ORIGIN})
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == ORIGIN
    exposed = res.headers["access-control-expose-headers"]
    assert "Tus-Resumable" in exposed
    assert "Upload-Offset" in exposed

def test_unhandled_error_is_plain_text_500(app):
    class BrokenRelay:
        async def delete(self, video_id):
            raise RuntimeError("boom")

    app.dependency_overrides[get_relay] = lambda: BrokenRelay()
    res = TestClient(app).delete("/delete-video/abc123", headers={"Origin": ORIGIN})
    assert res.status_code == 500
    assert res.text == "Error interno"
    assert res.headers["access-control-allow-origin"] == ORIGIN
    assert res.headers["access-control-allow-credentials"] == "true"

def test_serverless_entry_exposes_app():
    from fastapi import FastAPI
    from api.index import app as edge_app

    assert isinstance(edge_app, FastAPI)
    res = TestClient(edge_app).get("/nonexistent")
    assert res.status_code == 404
    assert res.text == "Ruta no encontrada"
