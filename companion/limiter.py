"""
Shared slowapi limiter, keyed by client IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from companion.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
chat_rate_limit = f"{settings.RATE_LIMIT_PER_MINUTE}/minute"
