"""
Pydantic request / response schemas for the API.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ReplyMode = Literal["normal", "detailed"]
ReplySource = Literal["greeting", "knowledge_base", "fallback"]


# ── Chat ─────────────────────────────────────────────────
class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    detailed_mode: Optional[bool] = Field(default=False, alias="detailedMode")
    user_id: Optional[str] = Field(default=None, alias="userId")


class ConversationReply(BaseModel):
    response: str
    topic: Optional[str] = None
    mode: ReplyMode
    source: ReplySource
    timestamp: datetime


class TopicListResponse(BaseModel):
    topics: List[str]


# ── Email ────────────────────────────────────────────────
class DeliveryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    email_id: Optional[str] = Field(default=None, alias="emailId")
    message: Optional[str] = None
    error: Optional[str] = None


class WelcomeEmailRequest(BaseModel):
    email: str
    name: str


class PaymentReceiptEmailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    name: str
    order_id: str = Field(alias="orderId")
    amount: float


class TokenEmailRequest(BaseModel):
    email: str
    name: str
    token: str


# ── Refunds ──────────────────────────────────────────────
class Transaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transaction_id: str = Field(alias="transactionId")
    amount: float
    timestamp: datetime
    status: str = "completed"  # completed / refunded


class Eligibility(BaseModel):
    eligible: bool = False
    reason: Optional[str] = None
    refund_amount: float = 0
    message: Optional[str] = None


class EligibilityRequest(BaseModel):
    transaction: Optional[Transaction] = None
    reason: str


class RefundCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    transaction: Optional[Transaction] = None
    reason: str
    description: str = ""
    email: Optional[str] = None
    name: Optional[str] = None


class RefundRequest(BaseModel):
    refund_id: str
    user_id: str
    transaction_id: str
    amount: float
    reason: str
    description: str = ""
    status: str = "pending"  # pending / approved / rejected / processed
    requested_at: datetime
    approved_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    refund_method: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    notes: str = ""


class RefundDecision(BaseModel):
    approve: bool = True
    rejection_reason: Optional[str] = None


class RefundExecution(BaseModel):
    success: bool
    message: str
    refund_id: str
    amount: float
    processed_date: datetime
    expected_arrival: str


class DisputeCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    transaction: Transaction
    reason: str
    evidence: str = ""


class Dispute(BaseModel):
    dispute_id: str
    user_id: str
    transaction_id: str
    reason: str
    evidence: str = ""
    status: str = "open"  # open / investigating / resolved / closed
    created_at: datetime
    resolved_at: Optional[datetime] = None
    resolution: Optional[str] = None


# ── Usage ────────────────────────────────────────────────
class UsageSummary(BaseModel):
    total_users: int = 0
    total_messages: int = 0
    breakdown: Dict[str, dict] = {}
