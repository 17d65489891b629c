"""이메일 발송 유틸리티 — SMTP (aiosmtplib).

SMTP 설정은 config.py의 SMTP_* 환경 변수로 관리.
SMTP_USER 또는 SMTP_FROM_EMAIL이 비어 있으면 발송하지 않음.
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from gearsync.config import settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    """SMTP 발송 가능 여부 — Whether a relay account and sender are configured."""
    return bool(settings.SMTP_USER and settings.SMTP_FROM_EMAIL)


async def send_email(
    to: str,
    subject: str,
    html: str,
    text: str | None = None,
) -> bool:
    """이메일 발송.

    Args:
        to: 수신자 이메일 주소
        subject: 제목
        html: HTML 본문
        text: 플레인텍스트 본문 (없으면 생략)

    Returns:
        bool: 발송했으면 True, SMTP 미설정으로 건너뛰면 False
    """
    if not smtp_configured():
        logger.warning("SMTP is not configured; skipping email %r to %s", subject, to)
        return False

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
    msg["To"] = to

    if text:
        msg.attach(MIMEText(text, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))

    await aiosmtplib.send(
        msg,
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASSWORD or None,
        start_tls=True,
    )
    return True
