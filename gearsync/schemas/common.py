"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions shared across API domains:
generic messages and dashboard scalar results.
"""

from decimal import Decimal
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema for simple confirmations.
    Used for logout, password flows, and other actions that return a
    human-readable confirmation message.

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str  # 응답 메시지 (Human-readable confirmation)


class CountResponse(BaseModel):
    """개수 응답 (Single count result for dashboard widgets)."""

    count: int


class AmountResponse(BaseModel):
    """금액 응답 (Single monetary total for dashboard widgets)."""

    amount: Decimal
