"""
Countdown Routes

Handles mounting, inspecting, rendering and removing flip-clock countdowns.
"""
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from countdown.block import CountdownConfigError
from managers.countdown_manager import DuplicateCountdownError
from models.request_models import CountdownCreateRequest
from utils.route_helpers import config_error_response, require_countdown

if TYPE_CHECKING:
    from managers.countdown_manager import CountdownManager


def setup_countdown_routes(countdown_manager: 'CountdownManager') -> APIRouter:
    """
    Setup countdown routes with dependency injection

    Args:
        countdown_manager: CountdownManager instance owning the mounted countdowns

    Returns:
        Configured APIRouter
    """
    router = APIRouter()

    @router.post("/countdowns")
    async def create_countdown(request: CountdownCreateRequest):
        """Validate a countdown block and mount it"""
        try:
            mounted = countdown_manager.mount(
                request.end_at, request.labels, request.caption, countdown_id=request.id
            )
        except CountdownConfigError as e:
            raise config_error_response(e, request.id)
        except DuplicateCountdownError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except Exception as e:
            logging.error(f"Failed to mount countdown: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return countdown_manager.status(mounted.countdown_id)

    @router.get("/countdowns")
    async def list_countdowns():
        """List mounted countdowns, rejected blocks and expired ids"""
        return countdown_manager.list_status()

    @router.get("/countdowns/{countdown_id}")
    async def get_countdown(countdown_id: str):
        """Get the state of one countdown"""
        require_countdown(countdown_manager, countdown_id)
        return countdown_manager.status(countdown_id)

    @router.get("/countdowns/{countdown_id}/frame.png")
    async def get_countdown_frame(countdown_id: str):
        """Render the current frame of a countdown board"""
        require_countdown(countdown_manager, countdown_id)
        try:
            png = countdown_manager.render_frame(countdown_id)
        except Exception as e:
            logging.error(f"Failed to render countdown {countdown_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return Response(content=png, media_type="image/png")

    @router.delete("/countdowns/{countdown_id}")
    async def delete_countdown(countdown_id: str):
        """Stop and unmount a countdown"""
        require_countdown(countdown_manager, countdown_id)
        countdown_manager.remove(countdown_id)
        return {"status": "success", "id": countdown_id}

    return router
