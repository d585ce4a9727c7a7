"""
Keyword scoring of a message against the knowledge base.
"""

from typing import NamedTuple, Optional

from companion.models.topic import TopicRecord
from companion.services.knowledge_store import KnowledgeStore

PARTIAL_PREFIX_LENGTH = 4


class MatchResult(NamedTuple):
    topic_id: str
    record: TopicRecord


def _keyword_score(text: str, record: TopicRecord) -> int:
    return sum(1 for kw in record.keywords if kw in text)


def _partial_match(text: str, store: KnowledgeStore) -> Optional[MatchResult]:
    """
    First topic with a keyword whose leading four characters appear inside
    any whitespace-separated token of the message ("anxious" ~ "anxiety").
    Keywords shorter than four characters use the whole keyword as prefix.
    """
    tokens = text.split()
    if not tokens:
        return None

    for topic_id, record in store.items():
        for kw in record.keywords:
            prefix = kw[:PARTIAL_PREFIX_LENGTH]
            if prefix and any(prefix in token for token in tokens):
                return MatchResult(topic_id, record)
    return None


def match(text: str, store: KnowledgeStore) -> Optional[MatchResult]:
    """
    Return the topic with the most keywords found in ``text``.

    Keywords match as plain substrings. On a tie the topic that comes first
    in the store wins. With no keyword hit at all, fall back to a prefix
    match on individual words.
    """
    lower = text.lower()

    best: Optional[MatchResult] = None
    best_score = 0
    for topic_id, record in store.items():
        score = _keyword_score(lower, record)
        if score > best_score:
            best, best_score = MatchResult(topic_id, record), score

    if best is not None:
        return best
    return _partial_match(lower, store)

