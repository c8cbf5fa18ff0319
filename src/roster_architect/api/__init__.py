"""REST API around a single roster session."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Body, FastAPI, File, Form, HTTPException, Query, UploadFile

from roster_architect.api.schemas import (
    ImportResponse,
    PlayerPageResponse,
    PlayerResponse,
    RosterAnalyticsResponse,
    RosterResponse,
    ShareResponse,
    SnapshotResponse,
)
from roster_architect.config import ALL_FILTER
from roster_architect.config_loader import AppSettings
from roster_architect.identity import AnonymousIdentityProvider, IdentityProvider, StaticIdentityProvider
from roster_architect.persistence import DocumentStore, HttpDocumentStore, SqliteDocumentStore
from roster_architect.session import RosterSession
from roster_architect.sharing import (
    PreconditionFailedError,
    PublishInProgressError,
    SharingService,
    StorageError,
    snapshot_namespace,
)


logger = logging.getLogger(__name__)


def _default_store(settings: AppSettings) -> DocumentStore:
    if settings.store_url:
        return HttpDocumentStore(settings.store_url)
    return SqliteDocumentStore(settings.db_path)


def _default_identity_provider(settings: AppSettings) -> IdentityProvider:
    if settings.user_token:
        return StaticIdentityProvider(settings.user_token)
    return AnonymousIdentityProvider()


def roster_to_response(session: RosterSession, *, changed: bool | None = None) -> RosterResponse:
    aggregates = session.aggregates
    return RosterResponse(
        players=[PlayerResponse.from_player(player) for player in session.roster],
        remaining_slots=session.roster.remaining_slots,
        analytics=RosterAnalyticsResponse.from_aggregates(aggregates) if aggregates else None,
        share_url=session.share_url,
        changed=changed,
    )


async def _read_import_text(csv_text: str | None, upload: UploadFile | None) -> str:
    if upload is not None:
        contents = await upload.read()
        if contents:
            try:
                return contents.decode("utf-8-sig")
            except UnicodeDecodeError as exc:
                raise HTTPException(status_code=400, detail=f"File is not UTF-8 text: {exc}") from exc
    return csv_text or ""


def create_app(
    settings: AppSettings | None = None,
    *,
    store: DocumentStore | None = None,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    settings = settings or AppSettings.from_env()
    store = store if store is not None else _default_store(settings)
    identity_provider = identity_provider or _default_identity_provider(settings)
    sharing = SharingService(
        store,
        namespace=snapshot_namespace(settings.app_id),
        origin=settings.origin,
        share_path=settings.share_path,
    )
    session = RosterSession(sharing)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        await session.bootstrap(identity_provider, settings.deep_link)
        logger.info("Session ready (signed in: %s)", session.identity is not None)
        yield
        session.detach()

    app = FastAPI(title="Roster Architect", lifespan=lifespan)
    app.state.settings = settings
    app.state.document_store = store
    app.state.identity_provider = identity_provider
    app.state.session = session

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/import", response_model=ImportResponse)
    async def import_players(
        csv_text: str | None = Form(None),
        file: UploadFile | None = File(None),
    ) -> ImportResponse:
        text = await _read_import_text(csv_text, file)
        report = session.import_csv(text)
        if not report.success:
            raise HTTPException(status_code=400, detail=report.error)
        return ImportResponse(
            success=report.success,
            players_loaded=report.players_loaded,
            dropped_rows=report.dropped_rows,
        )

    @app.get("/teams")
    async def list_teams() -> list[str]:
        return session.teams()

    @app.get("/players", response_model=PlayerPageResponse)
    async def list_players(
        search: str = "",
        position: str = ALL_FILTER,
        team: str = ALL_FILTER,
        page: int = Query(1, ge=1),
    ) -> PlayerPageResponse:
        if (search, position, team) != (
            session.criteria.search_term,
            session.criteria.position,
            session.criteria.team,
        ):
            session.set_search(search)
            session.set_position_filter(position)
            session.set_team_filter(team)
        session.go_to_page(page)
        view = session.current_page()
        return PlayerPageResponse(
            page=view.page,
            total_pages=view.total_pages,
            total_players=view.total_players,
            players=[PlayerResponse.from_player(player) for player in view.players],
        )

    @app.get("/roster", response_model=RosterResponse)
    async def get_roster() -> RosterResponse:
        return roster_to_response(session)

    @app.post("/roster/share", response_model=ShareResponse)
    async def share_roster() -> ShareResponse:
        try:
            result = await session.publish()
        except PublishInProgressError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except PreconditionFailedError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except StorageError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        if result is None:
            raise HTTPException(status_code=409, detail="Roster changed while publishing")
        return ShareResponse(snapshot_id=result.snapshot_id, share_url=result.share_url)

    @app.post("/roster/load/{snapshot_id}", response_model=RosterResponse)
    async def load_roster(snapshot_id: str) -> RosterResponse:
        try:
            loaded = await session.load_shared(snapshot_id)
        except StorageError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        if not loaded:
            raise HTTPException(status_code=404, detail="Roster not found")
        return roster_to_response(session, changed=True)

    @app.post("/roster/{athlete_id}", response_model=RosterResponse)
    async def add_to_roster(athlete_id: str) -> RosterResponse:
        added = session.add_by_id(athlete_id)
        if added is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return roster_to_response(session, changed=added)

    @app.delete("/roster/{athlete_id}", response_model=RosterResponse)
    async def remove_from_roster(athlete_id: str) -> RosterResponse:
        removed = session.remove_player(athlete_id)
        return roster_to_response(session, changed=removed)

    @app.delete("/roster", response_model=RosterResponse)
    async def clear_roster() -> RosterResponse:
        session.clear_roster()
        return roster_to_response(session, changed=True)

    @app.get("/snapshots/{snapshot_id}", response_model=SnapshotResponse)
    async def get_snapshot(snapshot_id: str) -> SnapshotResponse:
        try:
            snapshot = await sharing.fetch(snapshot_id)
        except StorageError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        if snapshot is None:
            raise HTTPException(status_code=404, detail="Roster not found")
        return SnapshotResponse(
            snapshot_id=snapshot.id,
            created_at=snapshot.created_at,
            created_by=snapshot.created_by,
            total_salary=snapshot.total_salary,
            lineup=[PlayerResponse.from_player(player) for player in snapshot.lineup],
        )

    @app.put("/documents/{key}")
    async def put_document(key: str, namespace: str, document: dict[str, Any] = Body(...)) -> dict[str, str]:
        # Documents are write-once; published snapshots never change.
        if await store.get(namespace, key) is not None:
            raise HTTPException(status_code=409, detail="Document already exists")
        await store.put(namespace, key, document)
        return {"status": "ok"}

    @app.get("/documents/{key}")
    async def get_document(key: str, namespace: str) -> dict[str, Any]:
        document = await store.get(namespace, key)
        if document is None:
            raise HTTPException(status_code=404, detail="Document not found")
        return document

    return app
