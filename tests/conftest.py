"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient

from outfit_draw.client.camera import CameraUnavailable
from outfit_draw.config import Settings
from outfit_draw.context import AppContext, build_context
from outfit_draw.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        debug=False,
        database_url=f"sqlite:///{tmp_path / 'outfit_draw.db'}",
    )


@pytest.fixture
def context(settings) -> Iterator[AppContext]:
    ctx = build_context(settings)
    ctx.database.init_db()
    yield ctx
    ctx.database.dispose()


@pytest.fixture
def app(context):
    return create_app(context)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def signup(client: TestClient, username: str, password: str = "pw123"):
    response = client.post(
        "/api/auth/signup", json={"username": username, "password": password}
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


@dataclass
class FakeStream:
    """Camera stream that returns fixed JPEG bytes."""

    frame: bytes = b"\xff\xd8fake-jpeg\xff\xd9"
    stopped: bool = False

    def grab_frame(self) -> bytes:
        return self.frame

    def stop(self) -> None:
        self.stopped = True


@dataclass
class FakeCamera:
    """Camera device that can be told to refuse access."""

    denied: bool = False
    streams: list[FakeStream] = field(default_factory=list)

    async def open(self) -> FakeStream:
        if self.denied:
            raise CameraUnavailable("permission denied")
        stream = FakeStream()
        self.streams.append(stream)
        return stream


@pytest.fixture
def app_caplog(caplog, monkeypatch):
    """caplog that also sees records from the configured application logger."""
    monkeypatch.setattr(logging.getLogger("outfit_draw"), "propagate", True)
    return caplog
