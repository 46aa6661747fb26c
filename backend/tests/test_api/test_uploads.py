"""
Tests for the /api/upload endpoints.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

URL = "/api/upload/images-to-pdf"


def _pdfs(directory: Path) -> list:
    return sorted(p.name for p in directory.iterdir())


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def make_client(upload_dir):
    def make(**overrides) -> TestClient:
        settings = Settings(upload_dir=upload_dir, **overrides)
        return TestClient(create_app(settings))

    return make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.text == "ok"


def test_limits(make_client):
    resp = make_client(max_images=5, max_image_bytes=1024).get("/api/upload/limits")
    assert resp.status_code == 200
    body = resp.json()
    assert body["max_images"] == 5
    assert body["max_image_bytes"] == 1024
    assert "image/webp" in body["allowed_mime_types"]


def test_convert_returns_pdf_and_cleans_up(client, upload_dir, png_bytes, jpeg_bytes, open_pdf):
    files = [
        ("images", ("first.png", png_bytes(300, 300), "image/png")),
        ("images", ("second.jpg", jpeg_bytes(1000, 2000), "image/jpeg")),
    ]
    resp = client.post(URL, files=files)

    assert resp.status_code == 200, resp.text
    assert resp.headers["content-type"] == "application/pdf"
    assert "converted-images-" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")

    doc = open_pdf(resp.content)
    try:
        sizes = [(round(p.rect.width), round(p.rect.height)) for p in doc]
    finally:
        doc.close()
    assert sizes == [(300, 300), (595, 842)]

    # artifact is removed once the response has been sent
    assert _pdfs(upload_dir) == []


def test_keep_artifacts(make_client, upload_dir, png_bytes):
    client = make_client(keep_artifacts=True)
    resp = client.post(URL, files=[("images", ("a.png", png_bytes(10, 10), "image/png"))])
    assert resp.status_code == 200
    assert len(_pdfs(upload_dir)) == 1


def test_webp_is_a_clear_error(client, upload_dir, png_bytes, webp_bytes):
    files = [
        ("images", ("ok.png", png_bytes(10, 10), "image/png")),
        ("images", ("photo.webp", webp_bytes, "image/webp")),
    ]
    resp = client.post(URL, files=files)

    assert resp.status_code == 415
    body = resp.json()
    assert body["code"] == "unsupported_format"
    assert body["message"].startswith("Failed to generate PDF: ")
    assert "Please convert to JPG or PNG first" in body["message"]
    assert body["details"]["source"] == "photo.webp"
    assert _pdfs(upload_dir) == []


def test_corrupt_image_is_422(client, upload_dir):
    files = [("images", ("broken.png", b"\x89PNG\r\n\x1a\nnot really", "image/png"))]
    resp = client.post(URL, files=files)

    assert resp.status_code == 422
    body = resp.json()
    assert body["code"] == "decode_failed"
    assert body["details"] == {"source": "broken.png", "index": 0}
    assert _pdfs(upload_dir) == []


def test_no_files(client):
    resp = client.post(URL)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Please upload at least one image"


def test_too_many_files(make_client, png_bytes):
    client = make_client(max_images=2)
    data = png_bytes(5, 5)
    files = [("images", (f"{i}.png", data, "image/png")) for i in range(3)]
    resp = client.post(URL, files=files)

    assert resp.status_code == 400
    assert resp.json()["code"] == "too_many_files"


def test_file_too_large(make_client, png_bytes):
    client = make_client(max_image_bytes=64)
    resp = client.post(URL, files=[("images", ("big.png", png_bytes(200, 200), "image/png"))])

    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "file_too_large"
    assert body["details"]["source"] == "big.png"


def test_mime_type_is_checked(client, png_bytes):
    resp = client.post(URL, files=[("images", ("anim.gif", b"GIF89a", "image/gif"))])

    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "invalid_mime_type"
    assert body["message"] == "Only JPG, PNG, and WEBP images are allowed."


def test_unexpected_failure_is_500(client, monkeypatch, png_bytes):
    async def boom(images):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(client.app.state.conversion_service, "images_to_pdf", boom)
    resp = client.post(URL, files=[("images", ("a.png", png_bytes(5, 5), "image/png"))])

    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to generate PDF: disk on fire"
