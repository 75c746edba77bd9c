"""
CopyCart Backend — Hugging Face Inference Client
==================================================

What:  Thin async client for the hosted text-generation endpoint.
How:   POSTs `{"inputs": prompt, "parameters": {"wait_for_model": true}}`
       with a bearer token and hands the raw httpx.Response back, so each
       caller decides how to treat status codes and bodies.
Who:   Owned by MarketingService; one instance shared by all requests.

Resilience:
    None on purpose at this layer: one request per call, no retry, and no
    timeout unless INFERENCE_TIMEOUT is set. Transport failures surface as
    httpx.HTTPError.
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from copycart.config import Settings

logger = logging.getLogger(__name__)


class HuggingFaceService:
    """
    Client for a single Hugging Face Inference API model URL.

    Args:
        api_url:   Full model endpoint, e.g. .../models/HuggingFaceH4/zephyr-7b-beta
        api_key:   Bearer token
        timeout:   Seconds before httpx gives up; None waits indefinitely
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, config: Settings) -> "HuggingFaceService":
        return cls(
            api_url=config.huggingface_api_url,
            api_key=config.huggingface_api_key,
            timeout=config.inference_timeout,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def query(self, prompt: str) -> httpx.Response:
        """
        Send one prompt to the model and return the unread response.

        Raises:
            httpx.HTTPError: connection, DNS, or timeout failure
        """
        payload: Dict[str, Any] = {
            "inputs": prompt,
            # Blocks until a cold model has loaded instead of returning 503
            "parameters": {"wait_for_model": True},
        }

        start_time = time.time()
        try:
            response = await self._get_client().post(
                self.api_url,
                headers=self._get_headers(),
                json=payload,
            )
        except httpx.HTTPError as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "Inference request failed after %.0fms: %s",
                duration_ms,
                str(e),
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Inference request completed in %.0fms with status %d (%d bytes)",
            duration_ms,
            response.status_code,
            len(response.content),
        )
        return response

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
