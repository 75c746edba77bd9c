"""
CopyCart Backend — Marketing AI Service
=========================================

What:  Content generation and marketing chat on top of the inference client.
How:   Fill a prompt template, make exactly one inference call, check the
       payload for upstream errors, then hand the generated text to the
       extraction helpers.
Who:   Called by the /ai route handlers.

Flows:
    generate_content()  prompt → query → JSON? → error field? → first {...} → dict
    chat()              prompt → query → 2xx? → JSON? → error field? → after marker

The two flows differ on purpose: content generation never looks at the HTTP
status (an error payload is detected through its `error` field), while chat
propagates a non-success upstream status to the caller.
"""

import json
import logging
from typing import Any, Dict

import httpx

from copycart.config import Settings, settings
from copycart.exceptions import UpstreamError
from copycart.schemas.ai import ChatReply
from copycart.services.extraction import (
    extract_chat_reply,
    extract_json_object,
    first_generated_text,
    upstream_error_message,
)
from copycart.services.huggingface_service import HuggingFaceService

logger = logging.getLogger(__name__)

CHAT_INSTRUCTION = "Provide a concise, actionable marketing tip."


class MarketingService:
    """
    Drafts product copy and answers marketing questions.

    Args:
        client:        Inference client shared across requests
        reply_marker:  Phrase whose last occurrence separates the echoed
                       prompt from the model's chat answer
    """

    CONTENT_PROMPT = """
    Task: Generate SEO-optimized content for an e-commerce product.
    Product Name: "{product_name}"
    Keywords: "{keywords}"
    Tone: "{tone}"
    Instructions: Your output MUST be a single, valid JSON object with two keys: "title" (a short, catchy title) and "description" (a compelling 2-3 line description). Do not include any text before or after the JSON object.
    """

    CHAT_PROMPT = """You are a helpful marketing expert chatbot. A user needs a marketing strategy for their product: "{product_name}".
    User's question: "{message}"
    """ + CHAT_INSTRUCTION

    def __init__(self, client: HuggingFaceService, reply_marker: str) -> None:
        self.client = client
        self.reply_marker = reply_marker

    @classmethod
    def from_settings(cls, config: Settings) -> "MarketingService":
        return cls(
            client=HuggingFaceService.from_settings(config),
            reply_marker=config.chat_reply_marker,
        )

    def build_content_prompt(self, product_name: str, keywords: str, tone: str) -> str:
        return self.CONTENT_PROMPT.format(
            product_name=product_name,
            keywords=keywords,
            tone=tone,
        )

    def build_chat_prompt(self, product_name: str, message: str) -> str:
        return self.CHAT_PROMPT.format(product_name=product_name, message=message)

    async def generate_content(
        self, product_name: str, keywords: str, tone: str
    ) -> Dict[str, Any]:
        """
        Draft a title and description for a product.

        Returns:
            The first JSON object found in the generated text, normally
            {"title": ..., "description": ...}. Its keys are not checked.

        Raises:
            UpstreamError: endpoint unreachable, non-JSON body, or `error` field
            ExtractionError: no parseable JSON object in the generated text
        """
        prompt = self.build_content_prompt(product_name, keywords, tone)
        logger.info("Sending request to Hugging Face for content generation...")

        try:
            response = await self.client.query(prompt)
        except httpx.HTTPError as e:
            raise UpstreamError(message="Failed to generate AI content.", details=str(e))

        try:
            payload = response.json()
        except ValueError:
            logger.error("Non-JSON response from Hugging Face: %s", response.text)
            raise UpstreamError(message="Failed to generate AI content.", details=response.text)

        logger.info("Hugging Face raw response: %s", json.dumps(payload, indent=2))

        error = upstream_error_message(payload)
        if error:
            raise UpstreamError(message="Failed to generate AI content.", details=error)

        return extract_json_object(first_generated_text(payload))

    async def chat(self, product_name: str, message: str) -> ChatReply:
        """
        Answer a marketing question about a product.

        Raises:
            UpstreamError: endpoint unreachable, non-success status (status
                code propagated), non-JSON body, or `error` field
            EmptyReplyError: nothing left after the marker phrase
        """
        prompt = self.build_chat_prompt(product_name, message)
        logger.info("Sending request to Hugging Face for chat...")

        try:
            response = await self.client.query(prompt)
        except httpx.HTTPError as e:
            raise UpstreamError(message="Chatbot is currently unavailable.", details=str(e))

        if not response.is_success:
            logger.error("API error response (%d): %s", response.status_code, response.text)
            raise UpstreamError(
                message="Failed to communicate with AI.",
                details=response.text,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            logger.error("Failed to parse JSON response. Raw response: %s", response.text)
            raise UpstreamError(message="Invalid response from AI.", details=response.text)

        logger.info("Hugging Face chat raw response: %s", json.dumps(payload, indent=2))

        error = upstream_error_message(payload)
        if error:
            raise UpstreamError(message="Chatbot is currently unavailable.", details=error)

        reply = extract_chat_reply(first_generated_text(payload), self.reply_marker)
        return ChatReply(reply=reply)


# One client (and its connection pool) for the whole process
marketing_service = MarketingService.from_settings(settings)


def get_marketing_service() -> MarketingService:
    """FastAPI dependency; tests override it with a service on a mock transport."""
    return marketing_service
