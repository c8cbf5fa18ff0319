import httpx
import pytest
from httpx import ASGITransport

from roster_architect.api import create_app
from roster_architect.config_loader import AppSettings
from roster_architect.identity import StaticIdentityProvider
from roster_architect.models import Player
from roster_architect.persistence import HttpDocumentStore, InMemoryDocumentStore, SqliteDocumentStore
from roster_architect.sharing import SharingService, snapshot_namespace


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "documents.sqlite"
    monkeypatch.setenv("ROSTER_ARCHITECT_DB_PATH", str(path))
    return path


@pytest.mark.anyio
async def test_sqlite_store_round_trip(db_path):
    store = SqliteDocumentStore(db_path)

    await store.put("ns", "key", {"lineup": [1, 2], "createdBy": "me"})

    assert await store.get("ns", "key") == {"lineup": [1, 2], "createdBy": "me"}
    assert await store.get("other", "key") is None
    assert await store.get("ns", "missing") is None
    assert db_path.exists()


@pytest.mark.anyio
async def test_sqlite_store_last_write_wins(db_path):
    store = SqliteDocumentStore(db_path)

    await store.put("ns", "key", {"version": 1})
    await store.put("ns", "key", {"version": 2})

    reopened = SqliteDocumentStore(db_path)
    assert await reopened.get("ns", "key") == {"version": 2}


@pytest.mark.anyio
async def test_in_memory_store_copies_documents():
    store = InMemoryDocumentStore()
    document = {"lineup": [{"name": "A"}]}

    await store.put("ns", "key", document)
    document["lineup"].append({"name": "B"})
    fetched = await store.get("ns", "key")
    fetched["lineup"].clear()

    assert await store.get("ns", "key") == {"lineup": [{"name": "A"}]}


@pytest.mark.anyio
async def test_http_store_against_document_endpoints():
    backing = InMemoryDocumentStore()
    app = create_app(
        AppSettings(),
        store=backing,
        identity_provider=StaticIdentityProvider("user"),
    )
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        store = HttpDocumentStore("http://testserver", client=client)
        sharing = SharingService(store, namespace=snapshot_namespace("remote"), origin="http://testserver")

        result = await sharing.publish([Player(athlete_id="1", name="Remote", salary=5)], "user")
        lineup = await sharing.resolve(result.snapshot_id)
        missing = await sharing.resolve("nope")

    assert [p.name for p in lineup] == ["Remote"]
    assert missing is None
    assert len(backing) == 1


@pytest.mark.anyio
async def test_sqlite_store_uses_explicit_path_under_pytest(tmp_path, monkeypatch):
    monkeypatch.delenv("ROSTER_ARCHITECT_DB_PATH", raising=False)
    path = tmp_path / "explicit" / "store.sqlite"

    store = SqliteDocumentStore(path)
    await store.put("ns", "key", {"v": 1})

    assert store.db_path == path
    assert path.exists()


def test_sqlite_store_without_path_under_pytest_uses_temp_dir(monkeypatch):
    monkeypatch.delenv("ROSTER_ARCHITECT_DB_PATH", raising=False)

    store = SqliteDocumentStore()

    assert store.db_path.parent.name == "roster-architect-test"


@pytest.mark.anyio
@pytest.mark.parametrize("key", ["a?b", "c#d", "e f%20"])
async def test_http_store_keys_with_reserved_characters(key):
    backing = InMemoryDocumentStore()
    app = create_app(AppSettings(), store=backing, identity_provider=StaticIdentityProvider("user"))
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        store = HttpDocumentStore("http://testserver", client=client)
        await store.put("ns", key, {"v": 1})
        fetched = await store.get("ns", key)
        prefix = await store.get("ns", key[0])

    assert fetched == {"v": 1}
    assert prefix is None
    assert await backing.get("ns", key) == {"v": 1}
