"""
CopyCart Backend — AI Proxy Schemas
=====================================

Request bodies accept the camelCase keys the storefront sends; missing
values default to an empty string and are embedded into the prompt as-is.
"""

from pydantic import BaseModel, ConfigDict, Field


class GenerateContentRequest(BaseModel):
    """Body of POST /ai/generate-content."""

    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(default="", alias="productName")
    keywords: str = Field(default="", description="Comma-separated SEO keywords")
    tone: str = Field(default="", description="Voice of the copy, e.g. 'playful'")


class GeneratedContent(BaseModel):
    """Expected shape of the object extracted from the model output."""
    title: str = Field(description="Short, catchy product title")
    description: str = Field(description="Two to three line product description")


class ChatRequest(BaseModel):
    """Body of POST /ai/chat."""

    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(default="", alias="productName")
    message: str = Field(default="", description="The user's marketing question")


class ChatReply(BaseModel):
    reply: str
