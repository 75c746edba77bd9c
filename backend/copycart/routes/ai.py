"""
CopyCart Backend — AI Route Handlers
======================================

What:  POST /ai/generate-content and POST /ai/chat.
How:   Delegate to MarketingService (injected so tests can swap the
       inference transport). Failures become JSON error bodies in main.py.

Request Flow:
    1. FastAPI parses the camelCase body into a schema; a missing body
       means every field is empty
    2. MarketingService builds the prompt and makes one inference call
    3. The extracted object or reply is returned with HTTP 200
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from copycart.schemas.ai import ChatReply, ChatRequest, GenerateContentRequest, GeneratedContent
from copycart.schemas.product import ErrorResponse
from copycart.services.marketing_service import MarketingService, get_marketing_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI"])


@router.post(
    "/generate-content",
    # Not enforced: the first JSON object in the output is returned as-is
    response_model=None,
    responses={
        200: {"description": "Drafted title and description", "model": GeneratedContent},
        500: {"description": "Inference or extraction failure", "model": ErrorResponse},
    },
    summary="Draft a product title and description",
)
async def generate_content(
    body: Optional[GenerateContentRequest] = None,
    service: MarketingService = Depends(get_marketing_service),
) -> Dict[str, Any]:
    body = body or GenerateContentRequest()
    logger.info("Content generation requested for product=%r tone=%r", body.product_name, body.tone)
    return await service.generate_content(
        product_name=body.product_name,
        keywords=body.keywords,
        tone=body.tone,
    )


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={
        500: {"description": "Inference failure or empty reply", "model": ErrorResponse},
    },
    summary="Ask the marketing assistant a question",
    description=(
        "Returns a short marketing tip. When the inference API answers with a "
        "non-success status, that status is returned with the raw body in `details`."
    ),
)
async def chat(
    body: Optional[ChatRequest] = None,
    service: MarketingService = Depends(get_marketing_service),
) -> ChatReply:
    body = body or ChatRequest()
    return await service.chat(product_name=body.product_name, message=body.message)
