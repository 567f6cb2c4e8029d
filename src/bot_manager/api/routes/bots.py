"""API routes for bot management.

Thin adapter over BotService: validation failures become 400 through
the application's exception handlers, missing ids become 404.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from bot_manager.api.dependencies import get_bot_service
from bot_manager.api.schemas import BotCreate, BotUpdate, ErrorResponse
from bot_manager.models.bot import BotDTO
from bot_manager.services.bot_service import BotService

router = APIRouter(
    prefix="/bots",
    tags=["bots"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

BOT_NOT_FOUND = "Bot not found"


@router.get("", response_model=list[BotDTO])
async def list_bots(
    active: bool | None = Query(None, description="Filter by active state when given"),
    service: BotService = Depends(get_bot_service),
) -> list[BotDTO]:
    """List all bots, or only those in the requested active state."""
    if active is None:
        return await service.get_all()
    if active:
        return await service.get_active()
    return [bot for bot in await service.get_all() if not bot.is_active]


@router.get("/{bot_id}", response_model=BotDTO)
async def get_bot(bot_id: str, service: BotService = Depends(get_bot_service)) -> BotDTO:
    """Get one bot by ID."""
    bot = await service.get_by_id(bot_id)
    if bot is None:
        raise HTTPException(status_code=404, detail=BOT_NOT_FOUND)
    return bot


@router.post("", response_model=BotDTO, status_code=status.HTTP_201_CREATED)
async def create_bot(
    body: BotCreate,
    response: Response,
    service: BotService = Depends(get_bot_service),
) -> BotDTO:
    """Create a bot."""
    bot = await service.create(body.to_bot())
    response.headers["Location"] = f"/bots/{bot.id}"
    return bot


@router.put("/{bot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_bot(
    bot_id: str,
    body: BotUpdate,
    service: BotService = Depends(get_bot_service),
) -> Response:
    """Replace a bot's name, type, description, configuration and integrations."""
    if body.id is not None and body.id != bot_id:
        raise HTTPException(status_code=400, detail="Bot ID in body does not match the path.")
    if not await service.update(body.to_bot(bot_id)):
        raise HTTPException(status_code=404, detail=BOT_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{bot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bot(bot_id: str, service: BotService = Depends(get_bot_service)) -> Response:
    """Delete a bot."""
    if not await service.delete(bot_id):
        raise HTTPException(status_code=404, detail=BOT_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{bot_id}/toggle-status", status_code=status.HTTP_204_NO_CONTENT)
async def toggle_bot_status(
    bot_id: str,
    is_active: bool = Query(..., alias="isActive"),
    service: BotService = Depends(get_bot_service),
) -> Response:
    """Activate or deactivate a bot."""
    if not await service.toggle_status(bot_id, is_active):
        raise HTTPException(status_code=404, detail=BOT_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
