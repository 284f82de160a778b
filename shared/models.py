"""Pydantic data models for the audience proxy.

These models define the transient data structures that flow through a
single proxy request: the inbound topic request, the JSON error body
returned to callers, and the outbound ``generateContent`` payload sent to
Gemini. None of them outlive a request.

Outbound models use Gemini's camelCase field names as aliases; serialize
them with ``model_dump(by_alias=True, exclude_none=True)``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class TopicRequest(BaseModel):
    """Inbound request body.

    Attributes:
        topic: Free-text subject for the generated behaviors and audiences.
            Must be a non-empty string; other JSON types are rejected.
    """

    topic: Optional[StrictStr] = None


class ErrorResponse(BaseModel):
    """JSON error body returned to the caller.

    ``details`` is only present for upstream and unexpected failures.
    """

    error: str
    details: Optional[str] = None


class Part(BaseModel):
    text: str


class Content(BaseModel):
    parts: List[Part]
    role: Optional[str] = None


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response_mime_type: str = Field(
        default="application/json", alias="responseMimeType"
    )
    response_schema: Dict[str, Any] = Field(..., alias="responseSchema")


class GenerateContentPayload(BaseModel):
    """Request body for Gemini's ``models/{model}:generateContent`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    system_instruction: Content = Field(..., alias="systemInstruction")
    generation_config: GenerationConfig = Field(..., alias="generationConfig")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
