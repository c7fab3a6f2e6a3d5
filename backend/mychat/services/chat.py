"""Mock chat bot: canned replies after a short, fixed thinking delay."""
import random
import time
from datetime import datetime
from typing import List, Optional

from mychat.core.config import settings
from mychat.core.errors import InvalidArgumentError
from mychat.schemas.chat import ChatResponse

RESPONSES = [
    "That's interesting! Can you tell me more?",
    "I understand. Is there anything specific you'd like to know?",
    "Thanks for sharing that with me.",
    "That's a great question! Let me think about that.",
    "I see what you mean. How can I help you with that?",
]


class ChatService:
    def __init__(self, delay_seconds: Optional[float] = None, rng: Optional[random.Random] = None):
        if delay_seconds is None:
            delay_seconds = settings.CHAT_RESPONSE_DELAY_MS / 1000
        self.delay_seconds = delay_seconds
        self.rng = rng or random.Random()

    def send(self, content: Optional[str]) -> ChatResponse:
        if not content or not content.strip():
            raise InvalidArgumentError("Message content cannot be empty.")

        # Simulate processing time; blocking on purpose
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

        return ChatResponse(content=self.rng.choice(RESPONSES), timestamp=datetime.now())

    def responses(self) -> List[str]:
        return list(RESPONSES)
