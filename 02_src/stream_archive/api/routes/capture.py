"""Capture API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...codec import decode
from ...errors import MalformedEncodingError


class CaptureRequest(BaseModel):
    """One live frame from the transport."""

    method: str
    msg_id: str
    payload: str  # base64 of the raw frame
    decoded: dict[str, Any] | None = None
    display_id: str | None = None
    processed: bool = True


class CaptureResponse(BaseModel):
    """Response model for capture."""

    captured: bool
    message_count: int


def create_capture_router(app: Application) -> APIRouter:
    """Create capture router."""
    router = APIRouter(prefix="/api", tags=["capture"])

    @router.post("/capture", response_model=CaptureResponse)
    async def capture(request: CaptureRequest) -> dict:
        """Archive one frame."""
        try:
            raw = decode(request.payload)
        except MalformedEncodingError as e:
            raise HTTPException(status_code=400, detail=str(e))

        captured = app.capture(
            method=request.method,
            msg_id=request.msg_id,
            raw_bytes=raw,
            decoded=request.decoded,
            display_id=request.display_id,
            processed=request.processed,
        )
        return {
            "captured": captured,
            "message_count": app.store.get_stats().message_count,
        }

    return router
