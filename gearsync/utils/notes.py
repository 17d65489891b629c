"""메모 누적 유틸리티 — 타임스탬프가 붙은 메모를 기존 텍스트에 추가.

Note stamping helper. Staff notes on appointments and review notes on
projects are append-only text blocks, each entry prefixed with the UTC
time it was written.
"""

from gearsync.utils.clock import utcnow


def append_note(existing: str | None, author: str, note: str, separator: str = "\n") -> str:
    """기존 메모 뒤에 "[타임스탬프] 작성자: 메모" 형식으로 추가합니다.

    Append "[YYYY-MM-DD HH:MM] Author: note" to an existing text block.

    Args:
        existing: 기존 메모, 없으면 None (Existing text or None)
        author: 작성자 표시 (Author label, e.g. "Admin")
        note: 추가할 메모 (Note to append)
        separator: 기존 메모와의 구분자 (Separator placed before the new entry)

    Returns:
        str: 누적된 메모 (Combined text)
    """
    entry: str = f"[{utcnow().strftime('%Y-%m-%d %H:%M')}] {author}: {note.strip()}"
    if not existing:
        return entry
    return f"{existing}{separator}{entry}"
