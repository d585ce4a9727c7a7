"""
Text chat endpoint backed by the knowledge base matcher.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from companion.dependencies import get_conversation_handler, get_knowledge_store, get_usage_tracker
from companion.limiter import chat_rate_limit, limiter
from companion.models.schemas import ChatRequest, ConversationReply, TopicListResponse
from companion.services.conversation import ConversationHandler, EmptyMessageError
from companion.services.knowledge_store import KnowledgeStore
from companion.services.usage import UsageTracker

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ConversationReply)
@limiter.limit(chat_rate_limit)
async def chat(
    request: Request,
    req: Optional[ChatRequest] = None,
    handler: ConversationHandler = Depends(get_conversation_handler),
    usage: UsageTracker = Depends(get_usage_tracker),
):
    # Reject before any matching work happens
    if req is None or not req.message or not req.message.strip():
        raise EmptyMessageError()

    reply = handler.reply(req.message, detailed_mode=bool(req.detailed_mode))
    usage.record(req.user_id, reply.topic, reply.source)
    return reply


@router.get("/topics", response_model=TopicListResponse)
async def list_topics(store: KnowledgeStore = Depends(get_knowledge_store)):
    return TopicListResponse(topics=store.topic_ids())
