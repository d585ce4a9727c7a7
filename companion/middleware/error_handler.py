"""
Error handlers.

The chat endpoint answers every client error with an ``{"error": ...}`` body.
Other routes keep FastAPI's standard 422 payload for invalid input.
"""

from fastapi import Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from companion.services.conversation import EmptyMessageError

CHAT_PATH = "/api/chat"


async def empty_message_handler(request: Request, exc: EmptyMessageError):
    logger.info(f"Rejected {request.method} {request.url.path}: missing message")
    return JSONResponse(status_code=400, content={"error": "Missing message"})


async def chat_validation_handler(request: Request, exc: RequestValidationError):
    if request.url.path != CHAT_PATH:
        return await request_validation_exception_handler(request, exc)

    problems = "; ".join(err.get("msg", "invalid value") for err in exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {problems}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def global_exception_handler(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "type": type(exc).__name__},
        )
