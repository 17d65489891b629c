"""시간 유틸리티 — 도메인 일시 정규화.

Time helpers for domain datetimes.
Scheduled times, work intervals and project dates are stored as naive UTC,
so every incoming value is normalized before it is compared or persisted.
"""

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """현재 UTC 시각 (naive) — Current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """일시를 naive UTC로 변환합니다.

    Convert an aware datetime to naive UTC. Naive values are assumed to be
    UTC already and are returned unchanged.

    Args:
        value: 변환할 일시 (Datetime to normalize)

    Returns:
        datetime: tzinfo가 없는 UTC 일시 (Naive UTC datetime)
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """해당 일자의 시작/다음날 시작 (Start of day and start of next day)."""
    start: datetime = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> int:
    """두 시각 사이의 분 (Whole minutes from start to end, truncated)."""
    return int((end - start).total_seconds() // 60)
