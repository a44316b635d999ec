"""
Assistant chat schemas
"""
from pydantic import BaseModel, Field
from pos_backend.core.language import Language


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000)
    language: Language = Language.ENGLISH


class ChatResponse(BaseModel):
    reply: str
    intent: str
    language: Language


class QuickActionResponse(BaseModel):
    action: str
    message: str
