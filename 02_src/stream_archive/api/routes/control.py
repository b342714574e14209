"""Control API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class ExportResponse(BaseModel):
    """Response model for a manual export."""

    status: str
    message_count: int


def create_control_router(app: Application, sim: Any = None) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/enable", response_model=StatusResponse)
    async def enable() -> dict:
        """Start archiving."""
        app.store.enable()
        app.debugger.enable()
        return {"status": "ok"}

    @router.post("/disable", response_model=StatusResponse)
    async def disable() -> dict:
        """Stop archiving."""
        app.store.disable()
        app.debugger.disable()
        return {"status": "ok"}

    @router.post("/export", response_model=ExportResponse)
    async def export() -> dict:
        """Export the live archive to the sink now."""
        document = app.store.export_and_reset(reason="manual")
        return {"status": "ok", "message_count": len(document.messages)}

    @router.post("/clear", response_model=StatusResponse)
    async def clear() -> dict:
        """Discard the live archive."""
        app.store.clear()
        return {"status": "ok"}

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Drop live and stored archive data."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start the simulated live feed."""
        if not sim:
            raise HTTPException(status_code=404, detail="SIM not configured")
        await sim.start()
        return {"status": "ok"}

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop the simulated live feed."""
        if not sim:
            raise HTTPException(status_code=404, detail="SIM not configured")
        await sim.stop()
        return {"status": "ok"}

    return router
