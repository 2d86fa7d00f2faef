# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Tool result models shared by the pipeline and the MCP tool surface."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TextContent(BaseModel):
    """One text block of a tool result."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Payload returned for a web_search call.

    Frozen so a cached instance can be handed out to any number of callers.

    Attributes:
        content (tuple[TextContent, ...]): Ordered text blocks.
        is_error (Optional[bool]): True for rejections and failures, None on
            success. Serialized as ``isError``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: tuple[TextContent, ...]
    is_error: Optional[bool] = Field(default=None, alias="isError")

    @classmethod
    def from_text(cls, text: str, is_error: Optional[bool] = None) -> "ToolResult":
        """Build a single-block result."""
        return cls(content=(TextContent(text=text),), is_error=is_error)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)
