"""Tests for client record backends."""

import asyncio
import json

import httpx

from outfit_draw.client.storage import STORAGE_KEY, ApiRecordBackend, LocalRecordStorage


def test_local_storage_writes_single_json_array(tmp_path) -> None:
    storage = LocalRecordStorage(tmp_path)
    asyncio.run(storage.load())

    asyncio.run(storage.add(date="d1", style="first", image=None, note=""))
    records = asyncio.run(
        storage.add(date="d2", style="second", image="data:image/jpeg;base64,AA==", note="n")
    )

    path = tmp_path / f"{STORAGE_KEY}.json"
    stored = json.loads(path.read_text())
    assert isinstance(stored, list)
    assert [item["style"] for item in stored] == ["second", "first"]
    assert "image" not in stored[1]
    assert set(stored[0]) == {"id", "date", "style", "image", "note"}
    assert [r.style for r in records] == ["second", "first"]
    assert records[0].id != records[1].id


def test_local_storage_remove_persists(tmp_path) -> None:
    storage = LocalRecordStorage(tmp_path)
    first = asyncio.run(storage.add(date="d", style="a", image=None, note=""))[0]
    asyncio.run(storage.add(date="d", style="b", image=None, note=""))

    asyncio.run(storage.remove(first.id))

    reloaded = asyncio.run(LocalRecordStorage(tmp_path).load())
    assert [r.style for r in reloaded] == ["b"]


def test_local_storage_remove_unknown_id_is_noop(tmp_path) -> None:
    storage = LocalRecordStorage(tmp_path)
    asyncio.run(storage.add(date="d", style="a", image=None, note=""))

    records = asyncio.run(storage.remove("missing"))

    assert [r.style for r in records] == ["a"]


def test_corrupt_storage_loads_empty(tmp_path, app_caplog) -> None:
    (tmp_path / f"{STORAGE_KEY}.json").write_text("{not json")

    records = asyncio.run(LocalRecordStorage(tmp_path).load())

    assert records == []
    assert "Failed to parse records" in app_caplog.text


def test_wrong_shape_storage_loads_empty(tmp_path) -> None:
    (tmp_path / f"{STORAGE_KEY}.json").write_text(json.dumps({"records": []}))

    assert asyncio.run(LocalRecordStorage(tmp_path).load()) == []


def test_api_backend_proxies_through_http() -> None:
    server_records: list[dict] = []
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.url.path == "/api/auth/login":
            return httpx.Response(
                200,
                json={"success": True, "user": {"id": 1, "username": "alice"}},
                headers={"set-cookie": "session_id=abc; Path=/; HttpOnly"},
            )
        assert request.headers.get("cookie") == "session_id=abc"
        if request.method == "POST" and request.url.path == "/api/records":
            payload = json.loads(request.content)
            server_records.insert(0, {"id": len(server_records) + 1, "image": None, **payload})
            return httpx.Response(200, json={"success": True})
        if request.method == "GET" and request.url.path == "/api/records":
            return httpx.Response(200, json=server_records)
        if request.method == "DELETE":
            record_id = int(request.url.path.rsplit("/", 1)[1])
            server_records[:] = [r for r in server_records if r["id"] != record_id]
            return httpx.Response(200, json={"success": True})
        return httpx.Response(404)

    backend = ApiRecordBackend(
        http_client=httpx.AsyncClient(
            base_url="http://outfit.test", transport=httpx.MockTransport(handler)
        )
    )

    async def scenario():
        user = await backend.login("alice", "pw123")
        records = await backend.add(date="2024-01-01", style="blue shirt", image=None, note="comfy")
        remaining = await backend.remove(records[0].id)
        await backend.close()
        return user, records, remaining

    user, records, remaining = asyncio.run(scenario())

    assert user == {"id": 1, "username": "alice"}
    assert records[0].id == "1"
    assert records[0].style == "blue shirt"
    assert remaining == []
    assert ("DELETE", "/api/records/1") in seen
