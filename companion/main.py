"""
Companion AI support backend — FastAPI entry point.
"""

import random
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from companion.config import settings
from companion.dependencies import get_knowledge_store
from companion.limiter import limiter
from companion.middleware.error_handler import (
    chat_validation_handler,
    empty_message_handler,
    global_exception_handler,
)
from companion.middleware.logging_middleware import logging_middleware
from companion.services.conversation import ConversationHandler, EmptyMessageError
from companion.services.email_service import EmailService
from companion.services.knowledge_store import KnowledgeStore
from companion.services.refund_service import RefundService
from companion.services.usage import UsageTracker

# ── Routes ───────────────────────────────────────────────
from companion.routes.chat import router as chat_router
from companion.routes.email import router as email_router
from companion.routes.refunds import router as refunds_router
from companion.routes.stats import router as stats_router

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)


# ── Lifespan ─────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    store = KnowledgeStore.load(settings.KNOWLEDGE_BASE_PATH)
    email_service = EmailService(settings)
    if not email_service.configured:
        logger.warning("Email service not configured — emails will be logged only")

    app.state.knowledge_store = store
    app.state.conversation_handler = ConversationHandler(store, rng=random.Random(settings.RANDOM_SEED))
    app.state.usage_tracker = UsageTracker()
    app.state.email_service = email_service
    app.state.refund_service = RefundService(email_service)

    logger.info(f"Knowledge base ready with {len(store)} topics")
    yield
    logger.info("Shutting down")


# ── App ──────────────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Mental health companion chat backend with email and refund helpers",
    lifespan=lifespan,
)

# ── Rate Limiter ─────────────────────────────────────────
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(EmptyMessageError, empty_message_handler)
app.add_exception_handler(RequestValidationError, chat_validation_handler)

# ── CORS ─────────────────────────────────────────────────
origins = settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Custom Middleware ────────────────────────────────────
app.middleware("http")(global_exception_handler)
app.middleware("http")(logging_middleware)

# ── Register Routers ────────────────────────────────────
app.include_router(chat_router)
app.include_router(stats_router)
app.include_router(email_router)
app.include_router(refunds_router)


# ── Health Check ─────────────────────────────────────────
@app.get("/health", tags=["health"])
@app.get("/api/health", tags=["health"])
async def health(store: KnowledgeStore = Depends(get_knowledge_store)):
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "topics": len(store),
    }


def run():
    import uvicorn
    uvicorn.run(
        "companion.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info",
    )


# ── Run ──────────────────────────────────────────────────
if __name__ == "__main__":
    run()
