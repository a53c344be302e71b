"""
Record backends for the client.

``LocalRecordStorage`` keeps the whole collection on the device as one JSON
array. ``ApiRecordBackend`` proxies the same operations through the HTTP API.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol
from uuid import uuid4

import httpx
from pydantic import BaseModel, ConfigDict, TypeAdapter

logger = logging.getLogger(__name__)

STORAGE_KEY = "item_records_v1"


class ClientRecord(BaseModel):
    # Server ids are integers, local ids are strings
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    date: str = ""
    style: str = ""
    image: Optional[str] = None
    note: str = ""


_records = TypeAdapter(list[ClientRecord])


class RecordBackend(Protocol):
    """Where the client's records live."""

    async def load(self) -> list[ClientRecord]:
        """Return the current collection, newest first."""

    async def add(
        self, *, date: str, style: str, image: Optional[str], note: str
    ) -> list[ClientRecord]:
        """Save a new record and return the updated collection."""

    async def remove(self, record_id: str) -> list[ClientRecord]:
        """Delete a record by id and return the updated collection."""


class LocalRecordStorage:
    """
    On-device storage: the full collection is rewritten on every change.

    A missing file is an empty collection. So is a file that fails to
    parse; the failure is logged and the next write replaces it.
    """

    def __init__(self, directory: Path):
        self.path = Path(directory) / f"{STORAGE_KEY}.json"
        self.records: list[ClientRecord] = []

    async def load(self) -> list[ClientRecord]:
        self.records = self._read()
        return list(self.records)

    async def add(
        self, *, date: str, style: str, image: Optional[str], note: str
    ) -> list[ClientRecord]:
        record = ClientRecord(id=uuid4().hex, date=date, style=style, image=image, note=note)
        self.records = [record, *self.records]
        self._write()
        return list(self.records)

    async def remove(self, record_id: str) -> list[ClientRecord]:
        self.records = [r for r in self.records if r.id != record_id]
        self._write()
        return list(self.records)

    def _read(self) -> list[ClientRecord]:
        if not self.path.exists():
            return []
        try:
            return _records.validate_json(self.path.read_bytes())
        except ValueError:
            logger.exception("Failed to parse records in %s", self.path)
            return []

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_records.dump_json(self.records, exclude_none=True))


@dataclass
class ApiRecordBackend:
    """Networked variant backed by the password-auth API."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "ApiRecordBackend":
        """Create a backend with a managed httpx session that keeps cookies."""
        return cls(http_client=httpx.AsyncClient(base_url=base_url, timeout=10))

    async def signup(self, username: str, password: str) -> dict:
        response = await self.http_client.post(
            "/api/auth/signup", json={"username": username, "password": password}
        )
        response.raise_for_status()
        return response.json()["user"]

    async def login(self, username: str, password: str) -> dict:
        response = await self.http_client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        response.raise_for_status()
        return response.json()["user"]

    async def logout(self) -> None:
        response = await self.http_client.post("/api/auth/logout")
        response.raise_for_status()

    async def load(self) -> list[ClientRecord]:
        response = await self.http_client.get("/api/records")
        response.raise_for_status()
        return _records.validate_python(response.json())

    async def add(
        self, *, date: str, style: str, image: Optional[str], note: str
    ) -> list[ClientRecord]:
        payload = {"date": date, "style": style, "note": note}
        if image is not None:
            payload["image"] = image
        response = await self.http_client.post("/api/records", json=payload)
        response.raise_for_status()
        return await self.load()

    async def remove(self, record_id: str) -> list[ClientRecord]:
        response = await self.http_client.delete(f"/api/records/{record_id}")
        response.raise_for_status()
        return await self.load()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
