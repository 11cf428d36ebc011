# newwork-server/newwork/services/polishing.py
import asyncio
import logging
from typing import Optional

import httpx

from newwork.core.config import settings
from newwork.core.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)

FALLBACK_MARKER = "[AI-Polished]"


def fallback_polish(content: str) -> str:
    return f"{FALLBACK_MARKER} {content.strip()}"


class FeedbackPolisher:
    """
    Best-effort rewrite of feedback text by an external text-generation model.
    ``polish`` never raises: any upstream problem falls back to the original
    text with a visible marker.
    """

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str] = None,
        timeout: float = 10.0,
        max_length: int = 200,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_token = api_token
        self.timeout = timeout
        self.max_length = max_length
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "FeedbackPolisher":
        return cls(
            api_url=settings.POLISH_API_URL,
            api_token=settings.POLISH_API_TOKEN,
            timeout=settings.POLISH_TIMEOUT_SECONDS,
            max_length=settings.POLISH_MAX_LENGTH,
        )

    async def polish(self, content: str) -> str:
        if not self.api_url:
            return fallback_polish(content)
        try:
            # httpx times each connect/read/write on its own; this bounds the whole call
            return await asyncio.wait_for(self._generate(content), self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Feedback polishing took longer than %ss, using fallback", self.timeout)
            return fallback_polish(content)
        except UpstreamUnavailable as exc:
            logger.warning("Feedback polishing failed, using fallback: %s", exc.detail)
            return fallback_polish(content)

    async def _generate(self, content: str) -> str:
        headers = {"Content-Type": "application/json"}
        # A missing token is fine; the free tier answers anonymous calls
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        payload = {
            "inputs": (
                "Please polish and improve the following professional feedback "
                f"while maintaining its original meaning: {content}"
            ),
            "parameters": {"max_length": self.max_length, "temperature": 0.7},
        }

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(self.api_url, headers=headers, json=payload)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as http_err:
                raise UpstreamUnavailable(f"HTTP {http_err.response.status_code} from polishing backend")
            except httpx.HTTPError as e:
                raise UpstreamUnavailable(f"Polishing request failed: {e!r}")
            except ValueError:
                raise UpstreamUnavailable("Polishing backend returned invalid JSON")

        try:
            text = data[0]["generated_text"]
        except (KeyError, IndexError, TypeError):
            raise UpstreamUnavailable("Unexpected response shape from polishing backend")
        if not isinstance(text, str) or not text.strip():
            raise UpstreamUnavailable("Polishing backend returned no text")
        return text.strip()
