"""
FastAPI dependencies that hand out the app-wide services built at startup.
"""

from fastapi import Request

from companion.services.conversation import ConversationHandler
from companion.services.email_service import EmailService
from companion.services.knowledge_store import KnowledgeStore
from companion.services.refund_service import RefundService
from companion.services.usage import UsageTracker


def get_knowledge_store(request: Request) -> KnowledgeStore:
    return request.app.state.knowledge_store


def get_conversation_handler(request: Request) -> ConversationHandler:
    return request.app.state.conversation_handler


def get_usage_tracker(request: Request) -> UsageTracker:
    return request.app.state.usage_tracker


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_refund_service(request: Request) -> RefundService:
    return request.app.state.refund_service
