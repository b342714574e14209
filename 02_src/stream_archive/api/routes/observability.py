"""Observability API routes."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...analysis import analyze
from ...app import Application
from ...errors import ParseError
from ...serializer import deserialize
from ...sink import SqliteSink


class StatsResponse(BaseModel):
    """Response model for live archive stats."""

    enabled: bool
    message_count: int
    total_exported: int
    start_time: int
    duration: int
    estimated_size: int


class TraceEventResponse(BaseModel):
    """Response model for trace event."""

    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime


class ArchiveSummary(BaseModel):
    """Response model for a stored archive."""

    name: str
    message_count: int
    created_at: datetime


class AnalysisResponse(BaseModel):
    """Response model for archive analysis."""

    total_messages: int
    message_types: int
    distribution: list[tuple[str, int]]
    time_span: int


class MethodStatResponse(BaseModel):
    """Response model for debugger stats."""

    method: str
    count: int
    last_seen: int
    processed: bool


def create_observability_router(app: Application) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    def archive_sink() -> SqliteSink:
        sink = app.sink
        if not isinstance(sink, SqliteSink):
            raise HTTPException(
                status_code=501, detail="Archive listing needs the sqlite sink"
            )
        return sink

    @router.get("/stats", response_model=StatsResponse)
    async def get_stats() -> dict:
        """Live archive statistics."""
        stats = app.store.get_stats()
        return {
            "enabled": stats.enabled,
            "message_count": stats.message_count,
            "total_exported": stats.total_exported,
            "start_time": stats.start_time,
            "duration": stats.duration,
            "estimated_size": stats.estimated_size,
        }

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
        actor: str | None = Query(None, description="Filter by actor"),
    ) -> list[dict]:
        """Get trace events with optional filters."""
        after_dt = None
        if after:
            try:
                after_dt = datetime.fromisoformat(after)
            except ValueError:
                raise HTTPException(
                    status_code=400, detail="Invalid after timestamp format"
                )
            if after_dt.tzinfo is None:
                after_dt = after_dt.replace(tzinfo=timezone.utc)

        events = app.tracker.get_events(
            after=after_dt,
            event_types=[event_type] if event_type else None,
            actor=actor,
            limit=limit,
        )
        return [
            {
                "id": e.id,
                "event_type": e.event_type,
                "actor": e.actor,
                "data": e.data,
                "timestamp": e.timestamp.isoformat(),
            }
            for e in events
        ]

    @router.get("/archives", response_model=list[ArchiveSummary])
    async def list_archives(limit: int = Query(100, ge=1, le=1000)) -> list[dict]:
        """Stored export documents, newest first."""
        await app.store.flush()
        archives = await archive_sink().list_archives(limit=limit)
        return [
            {
                "name": a.name,
                "message_count": a.message_count,
                "created_at": a.created_at.isoformat(),
            }
            for a in archives
        ]

    @router.get("/archives/{name}/analysis", response_model=AnalysisResponse)
    async def analyze_archive(name: str) -> dict:
        """Method distribution of one stored archive."""
        await app.store.flush()
        archive = await archive_sink().get_archive(name)
        if not archive:
            raise HTTPException(status_code=404, detail="Archive not found")

        try:
            report = analyze(deserialize(archive.document))
        except ParseError as e:
            raise HTTPException(status_code=422, detail=str(e))

        return {
            "total_messages": report.total_messages,
            "message_types": report.message_types,
            "distribution": report.distribution,
            "time_span": report.time_span,
        }

    @router.get("/debugger/stats", response_model=list[MethodStatResponse])
    async def debugger_stats() -> list[dict]:
        """Per-method counters of the message debugger."""
        return [
            {
                "method": s.method,
                "count": s.count,
                "last_seen": s.last_seen,
                "processed": all(sample.processed for sample in s.samples),
            }
            for s in app.debugger.get_stats()
        ]

    return router
