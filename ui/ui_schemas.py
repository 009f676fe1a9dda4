from __future__ import annotations

from pydantic import BaseModel
from typing import List, Optional


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    stream: bool = False


class ChatResponse(BaseModel):
    model: Optional[str] = None
    message: ChatMessage
    done: Optional[bool] = None
    total_duration: Optional[int] = None
    eval_count: Optional[int] = None


class ModelTag(BaseModel):
    name: str
    model: Optional[str] = None
    size: Optional[int] = None
    modified_at: Optional[str] = None
    digest: Optional[str] = None


class TagsResponse(BaseModel):
    models: List[ModelTag] = []


class ErrorResponse(BaseModel):
    error: str
