"""
Pydantic schemas for API request/response validation.
"""
from typing import List, Optional
from pydantic import BaseModel


class TextResponse(BaseModel):
    """Response for text-format extraction."""
    text: str


class ModelsResponse(BaseModel):
    """Response for available models."""
    provider: str
    models: List[str]


class BatchItemError(BaseModel):
    """Failed entry of a batch response."""
    error: str
    image: Optional[str] = None
