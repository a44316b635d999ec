"""
Restaurant assistant endpoints
"""
import asyncio
from fastapi import APIRouter, Query
from config import ASSISTANT_REPLY_DELAY_SECONDS
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.core.language import InMemoryStore, Language, LanguageContext
from pos_backend.schemas.assistant import ChatRequest, ChatResponse, QuickActionResponse
from pos_backend.services.assistant_service import AssistantService, quick_action_prompt

router = APIRouter(tags=["Assistant"])


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, db: DbDependency, current_user: CurrentUser):
    intent, reply = await AssistantService.chat(db, request.message, request.language)
    if ASSISTANT_REPLY_DELAY_SECONDS > 0:
        await asyncio.sleep(ASSISTANT_REPLY_DELAY_SECONDS)
    return ChatResponse(reply=reply, intent=intent, language=request.language)


@router.get("/quick-actions/{action}", response_model=QuickActionResponse)
async def quick_action(
    action: str,
    current_user: CurrentUser,
    language: Language = Query(Language.ENGLISH)
):
    """Prompt text for a quick-action button: low-stock, sales-analysis, staff-summary"""
    ctx = LanguageContext(InMemoryStore())
    ctx.set_language(language)
    return QuickActionResponse(action=action, message=quick_action_prompt(action, ctx))
