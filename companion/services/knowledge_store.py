"""
Static knowledge base of mental-health topics.

Loaded once at startup from a JSON document shaped like
``{"knowledge_base": {"<topic_id>": {...}}}`` and read-only afterwards.
A missing or unparsable file gives an empty store, so every message falls
through to the fallback replies instead of the process failing to start.
"""

import json
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from loguru import logger
from pydantic import ValidationError

from companion.models.topic import TopicRecord


class KnowledgeStore:
    """Immutable, ordered mapping of topic id -> TopicRecord."""

    def __init__(self, topics: Optional[Mapping[str, TopicRecord]] = None):
        self._topics: Mapping[str, TopicRecord] = MappingProxyType(dict(topics or {}))

    @classmethod
    def from_document(cls, document: dict) -> "KnowledgeStore":
        raw_topics = document.get("knowledge_base") if isinstance(document, dict) else None
        if not isinstance(raw_topics, dict):
            logger.warning("Knowledge base document has no 'knowledge_base' object — using empty store")
            return cls()

        topics: Dict[str, TopicRecord] = {}
        for topic_id, raw in raw_topics.items():
            try:
                topics[topic_id] = TopicRecord.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Skipping malformed topic '{topic_id}': {e.error_count()} error(s)")
        return cls(topics)

    @classmethod
    def load(cls, path: str) -> "KnowledgeStore":
        """Read the knowledge base file. Never raises."""
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Knowledge base not found at {path} — using empty store")
            return cls()
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read knowledge base {path}: {e} — using empty store")
            return cls()

        store = cls.from_document(document)
        logger.info(f"Loaded {len(store)} knowledge base topics from {path}")
        return store

    def lookup(self, topic_id: str) -> Optional[TopicRecord]:
        return self._topics.get(topic_id)

    def items(self) -> Iterator[Tuple[str, TopicRecord]]:
        return iter(self._topics.items())

    def topic_ids(self) -> list:
        return list(self._topics)

    def __len__(self) -> int:
        return len(self._topics)

    def __iter__(self) -> Iterator[str]:
        return iter(self._topics)

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self._topics
