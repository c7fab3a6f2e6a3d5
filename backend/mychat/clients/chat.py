"""
HTTP client for the chat endpoints.
Front-ends use it to talk to the bot; it never raises on transport errors
or unreadable responses.
"""
from typing import List, Optional

import httpx
from pydantic import ValidationError

from mychat.schemas.chat import ChatResponse, SendMessageRequest
from mychat.services.chat import RESPONSES
from mychat.utils.logger import get_logger

logger = get_logger(__name__)


class ChatApiClient:
    def __init__(self, base_url: str = "", client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def send_message(self, content: str) -> Optional[ChatResponse]:
        """Send a message; None for blank content or any failed call."""
        if not content or not content.strip():
            return None

        payload = SendMessageRequest(content=content).model_dump()
        try:
            r = self.client.post("/api/chat/send", json=payload)
        except httpx.HTTPError:
            logger.exception("Chat send request error")
            return None

        if not r.is_success:
            logger.warning("Chat send failed %s: %s", r.status_code, r.text[:300] if r.text else "")
            return None
        try:
            return ChatResponse.model_validate(r.json())
        except (ValueError, ValidationError):
            logger.warning("Chat send returned an unreadable body: %s", r.text[:300] if r.text else "")
            return None

    def get_responses(self) -> List[str]:
        """Every reply the bot can give; the built-in list if the API is unreachable."""
        try:
            r = self.client.get("/api/chat/responses")
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError):
            logger.warning("Could not fetch chat responses, using fallback list")
            return list(RESPONSES)
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            logger.warning("Chat responses payload is not a list of strings, using fallback list")
            return list(RESPONSES)
        return data

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
