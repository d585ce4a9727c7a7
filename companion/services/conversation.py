"""
Per-message conversation flow: greeting check, topic match, render.
"""

import random
from datetime import datetime, timezone
from typing import Callable, Optional

from loguru import logger

from companion.models.schemas import ConversationReply
from companion.services import formatter, greeting
from companion.services.knowledge_store import KnowledgeStore
from companion.services.matcher import MatchResult, match

GREETING_TOPIC = "greeting"

Matcher = Callable[[str, KnowledgeStore], Optional[MatchResult]]


class EmptyMessageError(ValueError):
    """Raised when a chat request carries no message text."""

    def __init__(self):
        super().__init__("Missing message")


def _title(topic_id: str) -> str:
    return topic_id.replace("_", " ").title()


class ConversationHandler:
    """
    Stateless reply builder. Holds only read-only collaborators, so a single
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        rng: Optional[random.Random] = None,
        matcher: Matcher = match,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.matcher = matcher

    def reply(self, message: Optional[str], detailed_mode: bool = False) -> ConversationReply:
        if message is None or not message.strip():
            raise EmptyMessageError()

        mode = "detailed" if detailed_mode else "normal"

        if greeting.is_greeting(message):
            return self._build(greeting.greet(self.rng), GREETING_TOPIC, mode, "greeting")

        result = self.matcher(message, self.store)
        if result is not None:
            if detailed_mode:
                text = formatter.format_detailed(result.record, title=_title(result.topic_id))
            else:
                text = formatter.format_normal(result.record, self.rng)
            return self._build(text, result.topic_id, mode, "knowledge_base")

        text = formatter.detailed_fallback() if detailed_mode else formatter.normal_fallback(self.rng)
        return self._build(text, None, mode, "fallback")

    @staticmethod
    def _build(text: str, topic: Optional[str], mode: str, source: str) -> ConversationReply:
        logger.debug(f"Reply source={source} topic={topic} mode={mode}")
        return ConversationReply(
            response=text,
            topic=topic,
            mode=mode,
            source=source,
            timestamp=datetime.now(timezone.utc),
        )
