"""이메일 발송 테스트 — SMTP 미설정 시 생략, 발송 실패 시 요청은 정상 처리.

Email delivery tests — skipped without SMTP settings, and delivery
failures never fail the request that queued the email.
"""

from httpx import AsyncClient

from gearsync.config import settings
from gearsync.utils.email import send_email


class TestSendEmail:
    """SMTP 발송 유틸리티 테스트."""

    async def test_skipped_when_smtp_not_configured(self, monkeypatch):
        calls: list = []

        async def _fake_send(*args, **kwargs):
            calls.append(kwargs)

        monkeypatch.setattr(settings, "SMTP_USER", "")
        monkeypatch.setattr(settings, "SMTP_FROM_EMAIL", "")
        monkeypatch.setattr("gearsync.utils.email.aiosmtplib.send", _fake_send)

        sent = await send_email(to="cust@test.com", subject="Hello", html="<p>Hi</p>", text="Hi")
        assert sent is False
        assert calls == []

    async def test_sends_when_configured(self, monkeypatch):
        calls: list = []

        async def _fake_send(message, **kwargs):
            calls.append((message, kwargs))

        monkeypatch.setattr(settings, "SMTP_USER", "relay@gearsync.test")
        monkeypatch.setattr(settings, "SMTP_FROM_EMAIL", "no-reply@gearsync.test")
        monkeypatch.setattr("gearsync.utils.email.aiosmtplib.send", _fake_send)

        sent = await send_email(to="cust@test.com", subject="Hello", html="<p>Hi</p>", text="Hi")
        assert sent is True
        message, kwargs = calls[0]
        assert message["To"] == "cust@test.com"
        assert "no-reply@gearsync.test" in message["From"]
        assert kwargs["username"] == "relay@gearsync.test"


class TestDeliveryFailure:
    """발송 실패가 요청 결과에 영향을 주지 않음."""

    async def test_register_succeeds_when_delivery_fails(self, client: AsyncClient, monkeypatch):
        async def _failing_send_email(to: str, subject: str, html: str, text: str | None = None) -> bool:
            raise ConnectionError("SMTP unreachable")

        monkeypatch.setattr("gearsync.services.email_service.send_email", _failing_send_email)

        res = await client.post("/api/auth/register", json={
            "email": "new@test.com",
            "password": "newpass123!",
            "first_name": "Nina",
            "last_name": "New",
        })
        assert res.status_code == 201

        res = await client.post("/api/auth/login", json={"email": "new@test.com", "password": "newpass123!"})
        assert res.status_code == 200
