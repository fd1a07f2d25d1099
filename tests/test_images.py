from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from gametrc_api.exceptions import ImageError
from gametrc_api.utils import images
from gametrc_api.utils.images import process_image, get_extension, is_remote_url


def test_extension_detection():
    assert get_extension("/home/me/Pictures/cover.PNG") == "png"
    assert get_extension("https://cdn.example.com/art/cover.webp?size=big") == "webp"
    assert get_extension("https://cdn.example.com/art/cover") is None
    assert is_remote_url("https://example.com/a.jpg")
    assert not is_remote_url("C:/Users/me/a.jpg")


def test_copy_local_file(tmp_path: Path):
    source = tmp_path / "cover.png"
    source.write_bytes(b"\x89PNG fake")
    images_dir = tmp_path / "images"

    stored = Path(process_image(str(source), images_dir=images_dir))
    assert stored.parent == images_dir.resolve()
    assert stored.suffix == ".png"
    assert stored.read_bytes() == b"\x89PNG fake"

    again = Path(process_image(str(source), images_dir=images_dir))
    assert again != stored


def test_missing_local_file(tmp_path: Path):
    with pytest.raises(ImageError):
        process_image(str(tmp_path / "nope.jpg"), images_dir=tmp_path / "images")


def test_download_remote_image(tmp_path: Path):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/covers/zelda"
        return httpx.Response(200, content=b"jpeg-bytes")

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        stored = Path(process_image("https://img.example.com/covers/zelda", images_dir=tmp_path, client=client))

    assert stored.suffix == ".jpg"
    assert stored.read_bytes() == b"jpeg-bytes"


def test_download_http_error(tmp_path: Path):
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    with httpx.Client(transport=transport) as client:
        with pytest.raises(ImageError) as excinfo:
            process_image("https://img.example.com/missing.png", images_dir=tmp_path, client=client)
    assert "404" in excinfo.value.message
    assert list(tmp_path.iterdir()) == []


def test_blank_source_rejected(tmp_path: Path):
    with pytest.raises(ImageError):
        process_image("   ", images_dir=tmp_path)


def test_images_endpoint(client: TestClient, tmp_path: Path, monkeypatch):
    monkeypatch.setattr(images, "IMAGES_DIR", tmp_path / "images")
    source = tmp_path / "shot.jpeg"
    source.write_bytes(b"data")

    resp = client.post("/images/", json={"source": str(source)})
    assert resp.status_code == 200
    stored = Path(resp.json()["path"])
    assert stored.exists()
    assert stored.suffix == ".jpeg"

    resp = client.post("/images/", json={"source": str(tmp_path / "missing.png")})
    assert resp.status_code == 400
    assert resp.json()["code"] == "IMAGE_ERROR"


def test_failed_copy_leaves_no_partial_file(tmp_path: Path, monkeypatch):
    source = tmp_path / "cover.png"
    source.write_bytes(b"full image")
    images_dir = tmp_path / "images"

    def broken_copy(src, dst):
        Path(dst).write_bytes(b"full")
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(images.shutil, "copyfile", broken_copy)
    with pytest.raises(ImageError):
        process_image(str(source), images_dir=images_dir)
    assert list(images_dir.iterdir()) == []


def test_failed_download_write_leaves_no_partial_file(tmp_path: Path, monkeypatch):
    real_write_bytes = Path.write_bytes

    def broken_write_bytes(self, data):
        real_write_bytes(self, data[:2])
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "write_bytes", broken_write_bytes)
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"jpeg-bytes"))
    with httpx.Client(transport=transport) as client:
        with pytest.raises(ImageError):
            process_image("https://img.example.com/cover.jpg", images_dir=tmp_path, client=client)
    assert list(tmp_path.iterdir()) == []
