"""Tests for email service."""

import smtplib
from unittest.mock import patch

import pytest

from companion.config import Settings
from companion.services import email_service as email_module
from companion.services.email_service import EmailService


def _smtp_settings(**overrides):
    values = {
        "EMAIL_USER": "bot@companion.test",
        "EMAIL_PASSWORD": "app-password",
        "EMAIL_HOST": "smtp.companion.test",
        "EMAIL_PORT": 2525,
        "FRONTEND_URL": "https://app.companion.test",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_mock_mode_logs_instead_of_sending():
    service = EmailService(Settings(EMAIL_USER=""))

    with patch.object(email_module.smtplib, "SMTP") as smtp:
        result = await service.send_welcome("user@example.com", "Sam")

    smtp.assert_not_called()
    assert result.success is True
    assert result.email_id.startswith("mock_")
    assert result.message == "Email logged (not configured)"


@pytest.mark.asyncio
async def test_unknown_template():
    result = await EmailService(Settings(EMAIL_USER="")).send("newsletter", "user@example.com", {})
    assert result.success is False
    assert result.error == "Unknown template"


@pytest.mark.asyncio
async def test_missing_template_params():
    result = await EmailService(Settings(EMAIL_USER="")).send("welcome", "user@example.com", {})
    assert result.success is False
    assert result.error


@pytest.mark.asyncio
async def test_wrongly_typed_template_param():
    service = EmailService(Settings(EMAIL_USER=""))
    params = {"name": "Sam", "refund_id": "REF_1", "amount": "12"}

    result = await service.send("refund_approved", "user@example.com", params)

    assert result.success is False
    assert result.error


@pytest.mark.asyncio
async def test_smtp_delivery():
    service = EmailService(_smtp_settings())

    with patch.object(email_module.smtplib, "SMTP") as smtp:
        result = await service.send_payment_receipt("user@example.com", "Sam", "order_42", 499)

    smtp.assert_called_once_with("smtp.companion.test", 2525, timeout=10.0)
    server = smtp.return_value.__enter__.return_value
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("bot@companion.test", "app-password")

    sent = server.send_message.call_args.args[0]
    assert sent["To"] == "user@example.com"
    assert sent["Subject"] == "Payment Received - Premium Activated"
    html = sent.get_body(preferencelist=("html",)).get_content()
    assert "order_42" in html
    assert "₹499" in html

    assert result.success is True
    assert result.email_id == sent["Message-ID"]


@pytest.mark.asyncio
async def test_smtp_failure_is_reported_not_raised():
    service = EmailService(_smtp_settings(EMAIL_USE_TLS=False))

    with patch.object(email_module.smtplib, "SMTP") as smtp:
        server = smtp.return_value.__enter__.return_value
        server.send_message.side_effect = smtplib.SMTPException("relay refused")
        result = await service.send_welcome("user@example.com", "Sam")

    server.starttls.assert_not_called()
    assert result.success is False
    assert result.error == "relay refused"


@pytest.mark.asyncio
async def test_password_reset_link_and_escaping():
    service = EmailService(_smtp_settings())

    with patch.object(email_module.smtplib, "SMTP") as smtp:
        await service.send_password_reset("user@example.com", "<script>", "tok123")

    sent = smtp.return_value.__enter__.return_value.send_message.call_args.args[0]
    html = sent.get_body(preferencelist=("html",)).get_content()
    assert "https://app.companion.test/reset-password?token=tok123" in html
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_links_use_frontend_url():
    service = EmailService(_smtp_settings())
    assert service.verification_link("abc") == "https://app.companion.test/verify-email?token=abc"


def test_every_template_renders():
    samples = {
        "welcome": {"name": "Sam"},
        "payment_receipt": {"name": "Sam", "order_id": "o1", "amount": 10, "email": "s@x.io"},
        "password_reset": {"name": "Sam", "reset_link": "https://x/r"},
        "email_verification": {"name": "Sam", "verification_link": "https://x/v"},
        "refund_approved": {"name": "Sam", "refund_id": "REF_1", "amount": 10},
        "refund_rejected": {"name": "Sam", "refund_id": "REF_1", "reason": "late"},
    }
    assert set(samples) == set(email_module.TEMPLATES)
    for kind, params in samples.items():
        subject, html = email_module.TEMPLATES[kind](**params)
        assert subject
        assert "Sam" in html


def test_email_endpoint(client):
    resp = client.post("/api/email/welcome", json={"email": "user@example.com", "name": "Sam"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["emailId"].startswith("mock_")


def test_email_endpoint_validation(client):
    resp = client.post("/api/email/payment-receipt", json={"email": "user@example.com", "name": "Sam"})
    assert resp.status_code == 422
