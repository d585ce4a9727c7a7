"""
Transactional email over an SMTP relay.

When no SMTP user is configured, emails are only logged and a mock id is
returned, so the rest of the app works the same in local development.
"""

import asyncio
import smtplib
import time
from html import escape
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Callable, Dict, Optional, Tuple

from loguru import logger

from companion.config import Settings, settings as default_settings
from companion.models.schemas import DeliveryResult

_WRAPPER = '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">{body}</div>'
_BUTTON = (
    '<div style="text-align: center; margin: 30px 0;">'
    '<a href="{link}" style="background: #000; color: #fff; padding: 12px 32px; '
    'text-decoration: none; border-radius: 6px; display: inline-block;">{label}</a></div>'
    "<p><strong>Or copy this link:</strong></p>"
    '<p><code style="background: #f5f5f5; padding: 10px; display: block; word-break: break-all;">{link}</code></p>'
)
_SIGNATURE = "<p>Best,<br/><strong>Companion AI Team</strong></p>"


# ── Templates ────────────────────────────────────────────
def welcome(name: str) -> Tuple[str, str]:
    body = f"""
        <h2 style="color: #333;">Welcome, {name}!</h2>
        <p>Your Mental Health Companion account is ready.</p>
        <p><strong>What you can do:</strong></p>
        <ul>
          <li>Chat about anxiety, depression, stress, and more</li>
          <li>Get personalized mental health guidance</li>
          <li>Toggle "Detailed Mode" for in-depth analysis</li>
          <li>Access support 24/7</li>
        </ul>
        <p>Remember: This is a supportive tool. For emergencies, contact a mental health professional or call 988 (Suicide &amp; Crisis Lifeline).</p>
        {_SIGNATURE}
        <p style="color: #999; font-size: 12px;">If you didn't create this account, please ignore this email.</p>
    """
    return "Welcome to Mental Health Companion!", _WRAPPER.format(body=body)


def payment_receipt(name: str, order_id: str, amount: float, email: str) -> Tuple[str, str]:
    body = f"""
        <h2 style="color: #28a745;">Payment Successful!</h2>
        <p>Hi {name},</p>
        <p>Thank you for upgrading to <strong>Premium</strong>. Your payment has been processed.</p>
        <div style="background: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <p><strong>Receipt Details:</strong></p>
          <p>Order ID: <code>{order_id}</code></p>
          <p>Amount: ₹{amount:g}</p>
          <p>Email: {email}</p>
          <p>Date: {time.strftime("%Y-%m-%d")}</p>
        </div>
        <p>Your premium access is active immediately. Questions? Reply to this email or contact support.</p>
        {_SIGNATURE}
        <p style="color: #999; font-size: 12px;">Keep this receipt for your records.</p>
    """
    return "Payment Received - Premium Activated", _WRAPPER.format(body=body)


def password_reset(name: str, reset_link: str) -> Tuple[str, str]:
    body = f"""
        <h2>Reset Your Password</h2>
        <p>Hi {name},</p>
        <p>We received a request to reset your password. Click the button below to create a new password.</p>
        {_BUTTON.format(link=reset_link, label="Reset Password")}
        <p style="color: #666; font-size: 14px;">This link expires in 1 hour.</p>
        <p style="color: #666; font-size: 14px;">If you didn't request this, ignore this email. Your password hasn't changed.</p>
        {_SIGNATURE}
    """
    return "Reset Your Password - Companion AI", _WRAPPER.format(body=body)


def email_verification(name: str, verification_link: str) -> Tuple[str, str]:
    body = f"""
        <h2>Verify Your Email</h2>
        <p>Hi {name},</p>
        <p>Thanks for signing up! Please verify your email address to activate your account.</p>
        {_BUTTON.format(link=verification_link, label="Verify Email")}
        <p style="color: #666; font-size: 14px;">This link expires in 24 hours.</p>
        {_SIGNATURE}
    """
    return "Verify Your Email - Companion AI", _WRAPPER.format(body=body)


def refund_approved(name: str, refund_id: str, amount: float) -> Tuple[str, str]:
    body = f"""
        <h2 style="color: #28a745;">Refund Approved</h2>
        <p>Hi {name},</p>
        <p>Your refund request <code>{refund_id}</code> for ₹{amount:g} has been approved.</p>
        <p>The money goes back to your original payment method, usually within 3-5 business days.</p>
        {_SIGNATURE}
    """
    return "Your Refund Has Been Approved", _WRAPPER.format(body=body)


def refund_rejected(name: str, refund_id: str, reason: str) -> Tuple[str, str]:
    body = f"""
        <h2>Refund Request Update</h2>
        <p>Hi {name},</p>
        <p>We were unable to approve refund request <code>{refund_id}</code>.</p>
        <p><strong>Reason:</strong> {reason}</p>
        <p>If you think this is a mistake, reply to this email and our team will take another look.</p>
        {_SIGNATURE}
    """
    return "Update on Your Refund Request", _WRAPPER.format(body=body)


TEMPLATES: Dict[str, Callable[..., Tuple[str, str]]] = {
    "welcome": welcome,
    "payment_receipt": payment_receipt,
    "password_reset": password_reset,
    "email_verification": email_verification,
    "refund_approved": refund_approved,
    "refund_rejected": refund_rejected,
}


class EmailService:
    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    @property
    def configured(self) -> bool:
        return bool(self.config.EMAIL_USER)

    def reset_link(self, token: str) -> str:
        return f"{self.config.FRONTEND_URL}/reset-password?token={token}"

    def verification_link(self, token: str) -> str:
        return f"{self.config.FRONTEND_URL}/verify-email?token={token}"

    async def send(self, template_kind: str, recipient: str, params: dict) -> DeliveryResult:
        template = TEMPLATES.get(template_kind)
        if template is None:
            logger.warning(f"Unknown email template '{template_kind}'")
            return DeliveryResult(success=False, error="Unknown template")

        safe_params = {k: escape(v) if isinstance(v, str) else v for k, v in params.items()}
        try:
            subject, html = template(**safe_params)
        except (TypeError, ValueError) as e:
            logger.error(f"Bad parameters for '{template_kind}' email: {e}")
            return DeliveryResult(success=False, error=str(e))

        if not self.configured:
            logger.info(f"[MOCK] {template_kind} email to {recipient}: {subject}")
            return DeliveryResult(
                success=True,
                message="Email logged (not configured)",
                email_id=f"mock_{int(time.time() * 1000)}",
            )

        try:
            message_id = await asyncio.to_thread(self._deliver, recipient, subject, html)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send {template_kind} email to {recipient}: {e}")
            return DeliveryResult(success=False, error=str(e))

        logger.info(f"{template_kind} email sent to {recipient} ({message_id})")
        return DeliveryResult(success=True, email_id=message_id)

    def _deliver(self, recipient: str, subject: str, html: str) -> str:
        msg = EmailMessage()
        msg["From"] = self.config.EMAIL_USER
        msg["To"] = recipient
        msg["Subject"] = subject
        msg["Message-ID"] = make_msgid()
        msg.set_content("This email requires an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(
            self.config.EMAIL_HOST,
            self.config.EMAIL_PORT,
            timeout=self.config.EMAIL_TIMEOUT_SECONDS,
        ) as server:
            if self.config.EMAIL_USE_TLS:
                server.starttls()
            server.login(self.config.EMAIL_USER, self.config.EMAIL_PASSWORD)
            server.send_message(msg)

        return msg["Message-ID"]

    # ── Convenience wrappers ─────────────────────────────
    async def send_welcome(self, email: str, name: str) -> DeliveryResult:
        return await self.send("welcome", email, {"name": name})

    async def send_payment_receipt(self, email: str, name: str, order_id: str, amount: float) -> DeliveryResult:
        return await self.send(
            "payment_receipt", email,
            {"name": name, "order_id": order_id, "amount": amount, "email": email},
        )

    async def send_password_reset(self, email: str, name: str, token: str) -> DeliveryResult:
        return await self.send("password_reset", email, {"name": name, "reset_link": self.reset_link(token)})

    async def send_email_verification(self, email: str, name: str, token: str) -> DeliveryResult:
        return await self.send(
            "email_verification", email,
            {"name": name, "verification_link": self.verification_link(token)},
        )
