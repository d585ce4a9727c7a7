"""
In-memory per-user message counters for lightweight analytics.
"""

import threading
from copy import deepcopy
from datetime import datetime, timezone
from typing import Dict, Optional

from loguru import logger

ANONYMOUS_USER = "anonymous"


class UsageTracker:
    def __init__(self):
        self._lock = threading.Lock()
        self._usage: Dict[str, dict] = {}

    def record(self, user_id: Optional[str], topic: Optional[str], source: str) -> None:
        user_id = user_id or ANONYMOUS_USER
        now = datetime.now(timezone.utc)

        with self._lock:
            usage = self._usage.get(user_id)
            if usage is None:
                usage = self._usage[user_id] = {
                    "total_messages": 0,
                    "knowledge_base_messages": 0,
                    "greeting_messages": 0,
                    "fallback_messages": 0,
                    "topics": {},
                    "first_message": now,
                    "last_message": now,
                }

            usage["total_messages"] += 1
            usage["last_message"] = now
            counter = f"{source}_messages"
            if counter in usage:
                usage[counter] += 1
            key = topic or "none"
            usage["topics"][key] = usage["topics"].get(key, 0) + 1

        logger.info(f"[USAGE] User {user_id} - {source} - {topic}")

    def user_stats(self, user_id: str) -> Optional[dict]:
        with self._lock:
            usage = self._usage.get(user_id)
            return deepcopy(usage) if usage is not None else None

    def summary(self) -> dict:
        with self._lock:
            return {
                "total_users": len(self._usage),
                "total_messages": sum(u["total_messages"] for u in self._usage.values()),
                "breakdown": deepcopy(self._usage),
            }
