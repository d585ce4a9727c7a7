"""
Transactional email endpoints.
"""

from fastapi import APIRouter, Depends

from companion.dependencies import get_email_service
from companion.models.schemas import (
    DeliveryResult, PaymentReceiptEmailRequest, TokenEmailRequest, WelcomeEmailRequest,
)
from companion.services.email_service import EmailService

router = APIRouter(prefix="/api/email", tags=["email"])


@router.post("/welcome", response_model=DeliveryResult)
async def welcome(req: WelcomeEmailRequest, mailer: EmailService = Depends(get_email_service)):
    return await mailer.send_welcome(req.email, req.name)


@router.post("/payment-receipt", response_model=DeliveryResult)
async def payment_receipt(req: PaymentReceiptEmailRequest, mailer: EmailService = Depends(get_email_service)):
    return await mailer.send_payment_receipt(req.email, req.name, req.order_id, req.amount)


@router.post("/password-reset", response_model=DeliveryResult)
async def password_reset(req: TokenEmailRequest, mailer: EmailService = Depends(get_email_service)):
    return await mailer.send_password_reset(req.email, req.name, req.token)


@router.post("/verification", response_model=DeliveryResult)
async def verification(req: TokenEmailRequest, mailer: EmailService = Depends(get_email_service)):
    return await mailer.send_email_verification(req.email, req.name, req.token)
