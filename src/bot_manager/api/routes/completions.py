"""API route for chat completions."""

from fastapi import APIRouter, Depends

from bot_manager.api.dependencies import get_gateway
from bot_manager.api.schemas import CompletionBody, CompletionResponse, ErrorResponse
from bot_manager.services.completion_gateway import ChatCompletionGateway

router = APIRouter(
    prefix="/completions",
    tags=["completions"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.post("", response_model=CompletionResponse)
async def create_completion(
    body: CompletionBody,
    gateway: ChatCompletionGateway = Depends(get_gateway),
) -> CompletionResponse:
    """Complete a single prompt or a conversation history."""
    if body.prompt is not None:
        content = await gateway.complete_from_prompt(body.prompt)
    else:
        content = await gateway.complete_from_history(body.messages)
    return CompletionResponse(content=content)
