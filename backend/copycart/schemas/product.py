"""
CopyCart Backend — Product Request/Response Schemas
=====================================================

What:  Pydantic models defining the product API contract.
How:   Fields use snake_case in Python and camelCase on the wire
       (`imageUrl`, `createdAt`); FastAPI serializes by alias.

Design Decision:
    ProductCreate declares every field optional. Required-field checks live
    in the Product ORM model, so a missing field produces the store-layer
    ValidationError (HTTP 500) rather than FastAPI's automatic 422.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """Body of POST /products."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, description="Short product name (trimmed)")
    title: Optional[str] = Field(default=None, description="Listing title, user-written or AI-drafted")
    description: Optional[str] = Field(default=None, description="Listing description")
    image_url: Optional[str] = Field(
        default=None,
        alias="imageUrl",
        description="Optional product image URI",
    )


class ProductResponse(BaseModel):
    """A persisted product as returned by GET and POST /products."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID = Field(description="Identifier assigned by the store")
    name: str
    title: str
    description: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    rating: float = Field(description="Rating in [3.5, 5.0], one decimal place")
    created_at: datetime = Field(alias="createdAt", description="Creation timestamp (UTC)")


class ErrorResponse(BaseModel):
    """
    Error body returned by every global exception handler.

    Example:
        {
            "error": "upstream_error",
            "message": "Failed to communicate with AI.",
            "details": "Model is currently loading",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[str] = Field(default=None, description="Diagnostic text, when available")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    inference: str = Field(description="Inference credential: configured, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
