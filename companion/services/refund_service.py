"""
Refund and dispute bookkeeping on mocked transactions.

No payment gateway is called: approving and executing a refund only moves
the in-memory request through its states and notifies the user by email.
"""

import threading
import time
from datetime import datetime, timezone
from typing import Dict, Optional

from loguru import logger

from companion.models.schemas import Dispute, Eligibility, RefundExecution, RefundRequest, Transaction
from companion.services.email_service import EmailService

REFUND_RULES = {
    "REFUND_WINDOW_DAYS": 30,
    "MIN_SUBSCRIPTION_DAYS": 0,
    "DISPUTE_WINDOW_DAYS": 90,
    "REFUND_PERCENTAGE": 100,
    "REFUND_REASONS": [
        "not_satisfied",
        "technical_issue",
        "duplicate_charge",
        "accidental_purchase",
        "other",
    ],
}

EXPECTED_ARRIVAL = "3-5 business days"
DEFAULT_REJECTION_REASON = "Does not meet refund criteria"


class InvalidRefundState(Exception):
    """Raised when a refund is processed or executed out of order."""


class DisputeWindowClosed(Exception):
    pass


def _utc(ts: datetime) -> datetime:
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def days_since(ts: datetime, now: Optional[datetime] = None) -> int:
    now = _utc(now or datetime.now(timezone.utc))
    return (now - _utc(ts)).days


def check_refund_eligibility(
    transaction: Optional[Transaction],
    reason: str,
    now: Optional[datetime] = None,
) -> Eligibility:
    if transaction is None:
        return Eligibility(reason="transaction_not_found", message="Transaction not found in our system")

    if transaction.status == "refunded":
        return Eligibility(reason="already_refunded", message="This transaction has already been refunded")

    window = REFUND_RULES["REFUND_WINDOW_DAYS"]
    if days_since(transaction.timestamp, now) > window:
        return Eligibility(
            reason="outside_refund_window",
            message=f"Refund window has passed. You had {window} days to request a refund.",
        )

    if reason not in REFUND_RULES["REFUND_REASONS"]:
        return Eligibility(reason="invalid_reason", message="Please provide a valid refund reason")

    amount = round(transaction.amount * REFUND_RULES["REFUND_PERCENTAGE"] / 100, 2)
    return Eligibility(
        eligible=True,
        reason="eligible",
        refund_amount=amount,
        message=f"Eligible for ₹{amount:g} refund",
    )


class RefundService:
    def __init__(self, email_service: Optional[EmailService] = None):
        self.email_service = email_service or EmailService()
        self._lock = threading.Lock()
        self._refunds: Dict[str, RefundRequest] = {}
        self._disputes: Dict[str, Dispute] = {}

    def _new_id(self, prefix: str, taken: Dict[str, object]) -> str:
        stamp = int(time.time() * 1000)
        while f"{prefix}_{stamp}" in taken:
            stamp += 1
        return f"{prefix}_{stamp}"

    # ── Refunds ──────────────────────────────────────────
    def create_refund_request(
        self,
        user_id: str,
        transaction_id: str,
        amount: float,
        reason: str,
        description: str = "",
        email: Optional[str] = None,
        name: Optional[str] = None,
    ) -> RefundRequest:
        with self._lock:
            refund = RefundRequest(
                refund_id=self._new_id("REF", self._refunds),
                user_id=user_id,
                transaction_id=transaction_id,
                amount=amount,
                reason=reason,
                description=description,
                requested_at=datetime.now(timezone.utc),
                email=email,
                name=name,
            )
            self._refunds[refund.refund_id] = refund

        logger.info(f"Refund requested: {refund.refund_id} user={user_id} amount={amount}")
        return refund

    def get_refund(self, refund_id: str) -> Optional[RefundRequest]:
        return self._refunds.get(refund_id)

    async def process_refund_request(
        self,
        refund_id: str,
        approve: bool = True,
        rejection_reason: Optional[str] = None,
    ) -> Optional[RefundRequest]:
        with self._lock:
            refund = self._refunds.get(refund_id)
            if refund is None:
                return None
            if refund.status != "pending":
                raise InvalidRefundState(f"Refund {refund_id} is already {refund.status}")

            if approve:
                refund.status = "approved"
                refund.approved_at = datetime.now(timezone.utc)
                refund.refund_method = "original_payment_method"
            else:
                refund.status = "rejected"
                refund.rejection_reason = rejection_reason or DEFAULT_REJECTION_REASON

        logger.info(f"Refund {refund_id} {refund.status}")
        await self._notify(refund)
        return refund

    async def _notify(self, refund: RefundRequest) -> None:
        if not refund.email:
            return
        name = refund.name or "there"
        if refund.status == "approved":
            params = {"name": name, "refund_id": refund.refund_id, "amount": refund.amount}
            await self.email_service.send("refund_approved", refund.email, params)
        else:
            params = {"name": name, "refund_id": refund.refund_id, "reason": refund.rejection_reason}
            await self.email_service.send("refund_rejected", refund.email, params)

    def execute_refund(self, refund_id: str) -> Optional[RefundExecution]:
        with self._lock:
            refund = self._refunds.get(refund_id)
            if refund is None:
                return None
            if refund.status != "approved":
                raise InvalidRefundState(f"Refund {refund_id} must be approved before it is executed")

            refund.status = "processed"
            refund.processed_at = datetime.now(timezone.utc)

        logger.info(f"Refund processed: {refund.refund_id} for ₹{refund.amount:g}")
        return RefundExecution(
            success=True,
            message="Refund processed successfully",
            refund_id=refund.refund_id,
            amount=refund.amount,
            processed_date=refund.processed_at,
            expected_arrival=EXPECTED_ARRIVAL,
        )

    # ── Disputes ─────────────────────────────────────────
    def create_dispute(
        self,
        user_id: str,
        transaction: Transaction,
        reason: str,
        evidence: str = "",
        now: Optional[datetime] = None,
    ) -> Dispute:
        window = REFUND_RULES["DISPUTE_WINDOW_DAYS"]
        if days_since(transaction.timestamp, now) > window:
            raise DisputeWindowClosed(f"Disputes must be opened within {window} days of purchase")

        with self._lock:
            dispute = Dispute(
                dispute_id=self._new_id("DSP", self._disputes),
                user_id=user_id,
                transaction_id=transaction.transaction_id,
                reason=reason,
                evidence=evidence,
                created_at=datetime.now(timezone.utc),
            )
            self._disputes[dispute.dispute_id] = dispute

        logger.info(f"Dispute opened: {dispute.dispute_id} transaction={transaction.transaction_id}")
        return dispute

    def get_dispute(self, dispute_id: str) -> Optional[Dispute]:
        return self._disputes.get(dispute_id)
