"""비밀번호 해싱, 검증 및 임시 비밀번호 생성 유틸리티 모듈.

Password hashing, verification and generation utility module.
Uses bcrypt directly for secure password storage and the secrets module
for temporary passwords and one-time codes.
"""

import secrets
import string

import bcrypt

_UPPERCASE: str = string.ascii_uppercase
_LOWERCASE: str = string.ascii_lowercase
_DIGITS: str = string.digits
_SPECIALS: str = "!@#$%^&*()-_=+"


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt.
    The resulting hash includes a random salt, making each hash unique
    even for identical passwords.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash.

    Args:
        plain_password: 검증할 평문 비밀번호 (Plain text password to verify)
        hashed_password: 저장된 bcrypt 해시 (Stored bcrypt hash to compare against)

    Returns:
        bool: 일치하면 True, 불일치하면 False (True if password matches hash)
    """
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def generate_temporary_password(length: int = 12) -> str:
    """임시 비밀번호를 생성합니다.

    Generate a random temporary password for admin-provisioned accounts.
    Always contains at least one uppercase letter, lowercase letter,
    digit and special character.

    Args:
        length: 비밀번호 길이, 최소 4 (Password length, at least 4)

    Returns:
        str: 임시 비밀번호 (Temporary password)
    """
    alphabet: str = _UPPERCASE + _LOWERCASE + _DIGITS + _SPECIALS
    chars: list[str] = [
        secrets.choice(_UPPERCASE),
        secrets.choice(_LOWERCASE),
        secrets.choice(_DIGITS),
        secrets.choice(_SPECIALS),
    ]
    chars.extend(secrets.choice(alphabet) for _ in range(max(length, 4) - 4))
    # 필수 문자 위치가 고정되지 않도록 섞음 — Shuffle so required classes are not positional
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def generate_otp(digits: int = 6) -> str:
    """숫자 OTP를 생성합니다 (Generate a zero-padded numeric one-time password)."""
    return str(secrets.randbelow(10**digits)).zfill(digits)


def generate_reset_token() -> str:
    """비밀번호 재설정 토큰 (Opaque URL-safe password reset token)."""
    return secrets.token_urlsafe(32)
