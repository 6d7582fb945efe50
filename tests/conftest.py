"""Shared fixtures for updatebot tests."""

import json

import httpx
import pytest

from updatebot.config import Settings

# 8-byte PNG signature followed by two bytes of padding
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00"
GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x00\x00"

IMAGE_URL = "https://images.example.com/a.png"
ACCOUNT = {"id": "42", "username": "newname", "discriminator": "0001", "avatar": "abc"}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real Discord settings out of the tests."""
    for name in (
        "DISCORD_TOKEN",
        "DISCORD_API_BASE_URL",
        "DISCORD_CDN_BASE_URL",
        "AVATAR_FETCH_TIMEOUT",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, DISCORD_TOKEN="T1")


class FakeDiscord:
    """Mock transport serving both Discord and an image host."""

    def __init__(
        self,
        status_code: int = 200,
        account: dict | None = None,
        image: bytes = PNG_BYTES,
        image_status: int = 200,
    ):
        self.status_code = status_code
        self.account = account if account is not None else dict(ACCOUNT)
        self.image = image
        self.image_status = image_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "images.example.com":
            return httpx.Response(self.image_status, content=self.image)
        return httpx.Response(self.status_code, json=self.account)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def patch_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "PATCH"]

    def sent_payload(self) -> dict:
        (request,) = self.patch_requests
        return json.loads(request.content)


@pytest.fixture
def fake_discord() -> FakeDiscord:
    return FakeDiscord()


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "avatar.png"
    path.write_bytes(PNG_BYTES)
    return path
