"""
Refund and dispute endpoints over mocked transactions.
"""

from fastapi import APIRouter, Depends, HTTPException

from companion.dependencies import get_refund_service
from companion.models.schemas import (
    Dispute, DisputeCreateRequest, Eligibility, EligibilityRequest,
    RefundCreateRequest, RefundDecision, RefundExecution, RefundRequest,
)
from companion.services.refund_service import (
    DisputeWindowClosed, InvalidRefundState, RefundService, check_refund_eligibility,
)

router = APIRouter(prefix="/api/refunds", tags=["refunds"])


@router.post("/eligibility", response_model=Eligibility)
async def eligibility(req: EligibilityRequest):
    return check_refund_eligibility(req.transaction, req.reason)


@router.post("/", response_model=RefundRequest, status_code=201)
async def request_refund(req: RefundCreateRequest, refunds: RefundService = Depends(get_refund_service)):
    result = check_refund_eligibility(req.transaction, req.reason)
    if not result.eligible:
        raise HTTPException(status_code=400, detail=result.model_dump())

    return refunds.create_refund_request(
        user_id=req.user_id,
        transaction_id=req.transaction.transaction_id,
        amount=result.refund_amount,
        reason=req.reason,
        description=req.description,
        email=req.email,
        name=req.name,
    )


@router.post("/disputes", response_model=Dispute, status_code=201)
async def open_dispute(req: DisputeCreateRequest, refunds: RefundService = Depends(get_refund_service)):
    try:
        return refunds.create_dispute(req.user_id, req.transaction, req.reason, req.evidence)
    except DisputeWindowClosed as e:
        raise HTTPException(status_code=400, detail={"reason": "outside_dispute_window", "message": str(e)})


@router.get("/disputes/{dispute_id}", response_model=Dispute)
async def get_dispute(dispute_id: str, refunds: RefundService = Depends(get_refund_service)):
    dispute = refunds.get_dispute(dispute_id)
    if dispute is None:
        raise HTTPException(status_code=404, detail="Dispute not found")
    return dispute


@router.get("/{refund_id}", response_model=RefundRequest)
async def get_refund(refund_id: str, refunds: RefundService = Depends(get_refund_service)):
    refund = refunds.get_refund(refund_id)
    if refund is None:
        raise HTTPException(status_code=404, detail="Refund not found")
    return refund


@router.post("/{refund_id}/process", response_model=RefundRequest)
async def process_refund(
    refund_id: str,
    decision: RefundDecision,
    refunds: RefundService = Depends(get_refund_service),
):
    try:
        refund = await refunds.process_refund_request(refund_id, decision.approve, decision.rejection_reason)
    except InvalidRefundState as e:
        raise HTTPException(status_code=409, detail=str(e))
    if refund is None:
        raise HTTPException(status_code=404, detail="Refund not found")
    return refund


@router.post("/{refund_id}/execute", response_model=RefundExecution)
async def execute_refund(refund_id: str, refunds: RefundService = Depends(get_refund_service)):
    try:
        result = refunds.execute_refund(refund_id)
    except InvalidRefundState as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Refund not found")
    return result
