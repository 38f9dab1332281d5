from io import BytesIO

import pytest

from photo_cleaner.api_server import app, parse_extensions

from .helpers import CLEAN_BG, png_bytes, solid


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _upload(client, data, filename):
    return client.post("/api/remove-watermark",
                       data={"image": (BytesIO(data), filename)},
                       content_type="multipart/form-data")


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_remove_watermark(client, white_corner_pixels):
    response = _upload(client, png_bytes(white_corner_pixels), "front.png")
    body = response.get_json()

    assert response.status_code == 200
    assert body["success"]
    assert body["modified"]
    assert body["regions"][0] == {"x": 0, "y": 0, "width": 25, "height": 25}
    assert body["image"].startswith("data:image/png;base64,")


def test_clean_upload_reports_colour_filter(client):
    response = _upload(client, png_bytes(solid(40, 40, CLEAN_BG)), "clean.png")
    body = response.get_json()
    assert body["regions"] == []
    assert body["color_filtered"]


def test_missing_file(client):
    response = client.post("/api/remove-watermark", data={},
                           content_type="multipart/form-data")
    assert response.status_code == 400


def test_disallowed_extension(client):
    response = _upload(client, b"whatever", "notes.txt")
    assert response.status_code == 400
    assert response.get_json()["message"] == "File type not allowed"


def test_undecodable_upload(client):
    response = _upload(client, b"not really a png", "fake.png")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Could not decode image"


def test_allowed_extensions_are_normalised():
    assert parse_extensions("png, .JPG ,jpeg,,") == {"png", "jpg", "jpeg"}
