"""
JWT 인증 유틸리티
- 비밀번호 해싱 (bcrypt)
- Access Token 생성 / 검증 (HS256 JWT)
- Refresh Token 생성 / 검증 (불투명 랜덤 문자열)
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import secrets

import jwt
import bcrypt

from shared import IdentityRecord, TokenPayload, get_logger


logger = get_logger("auth.jwt")

ISSUER = "chirpy"
ALGORITHM = "HS256"
ACCESS_TOKEN_TTL = timedelta(hours=1)
REFRESH_TOKEN_TTL = timedelta(days=60)
REFRESH_TOKEN_BYTES = 32
DEFAULT_BCRYPT_ROUNDS = 15
MAX_PASSWORD_BYTES = 72      # bcrypt 입력 한계


class InvalidTokenError(Exception):
    """
    Access Token 검증 실패

    만료/위조/형식 오류를 구분하지 않음 (호출자에게는 모두 "미인증")
    """


def _as_utc(now: Optional[datetime]) -> datetime:
    """now가 없으면 현재 UTC, naive datetime은 UTC로 간주"""
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


# ============================================================
# 비밀번호 해싱 (bcrypt)
# ============================================================

def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    비밀번호를 bcrypt로 해싱

    bcrypt 특징:
    - 솔트(salt) 자동 생성 → Rainbow Table 공격 방어
    - 느린 해싱 → 무차별 대입 공격 방어 (rounds=15 → 2^15 반복)
    - 출력 형식: $2b$15$솔트+해시 (60자, 알고리즘/cost/솔트 포함)
    """
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    입력 비밀번호가 저장된 해시와 일치하는지 검증

    해시에 포함된 cost/솔트로 재계산 후 상수 시간 비교
    틀린 비밀번호 → False
    72바이트 초과 비밀번호 → False (bcrypt로 만들 수 없는 값이므로 일치 불가)
    해시 자체가 손상된 경우 → ValueError (저장소 무결성 버그)
    """
    if len(plain_password.encode()) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


# ============================================================
# Access Token (단기 토큰)
# ============================================================

def create_access_token(
    subject: str,
    secret: str,
    now: Optional[datetime] = None,
    expires_in: timedelta = ACCESS_TOKEN_TTL,
    issuer: str = ISSUER,
    algorithm: str = ALGORITHM,
) -> str:
    """
    JWT Access Token 생성

    특징:
    - 짧은 수명: 1시간
    - 매 API 요청마다 Authorization 헤더에 포함
    - Stateless: 서버에 저장 안 함, 폐기 수단 없음 (만료만 존재)

    Payload 구조:
    {
        "iss": "chirpy",          # Issuer: 발급자
        "iat": 1707200000,        # Issued At: 발급 시간
        "exp": 1707203600.0,      # Expiration: 만료 시간 (소수 초 유지)
        "sub": "user@test.com"    # Subject: 사용자 이메일
    }
    """
    now = _as_utc(now)

    payload = {
        "iss": issuer,
        "iat": now,
        # datetime은 PyJWT가 초 단위로 내림 → float로 넣어 정확히 now + expires_in에 만료
        "exp": (now + expires_in).timestamp(),
        "sub": subject,
    }

    # 기본 HS256 알고리즘으로 서명 (프로세스 전역 비밀키)
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret: str,
    now: Optional[datetime] = None,
    issuer: str = ISSUER,
    algorithm: str = ALGORITHM,
) -> TokenPayload:
    """
    JWT 토큰 디코딩 및 검증

    검증 항목:
    1. 서명 유효성 (secret으로 검증)
    2. 발급자 (iss)
    3. 만료 시간 (now < exp)

    exp 비교는 PyJWT 대신 직접 수행 → 호출자가 기준 시각(now)을 지정 가능

    Raises:
        InvalidTokenError: 실패 사유와 무관하게 단일 예외
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            issuer=issuer,
            options={
                "require": ["iss", "iat", "exp", "sub"],
                "verify_exp": False,
                "verify_iat": False,
            },
        )
    except jwt.InvalidTokenError as exc:
        # 사유는 운영자용 로그에만 남김
        logger.info("Access token rejected: %s", exc)
        raise InvalidTokenError("invalid token") from exc

    exp = payload["exp"]
    if not isinstance(exp, (int, float)) or _as_utc(now).timestamp() >= exp:
        logger.info("Access token rejected: expired")
        raise InvalidTokenError("invalid token")

    subject = payload["sub"]
    if not isinstance(subject, str) or not subject:
        logger.info("Access token rejected: empty subject")
        raise InvalidTokenError("invalid token")

    return TokenPayload(
        iss=payload["iss"],
        sub=subject,
        iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        exp=datetime.fromtimestamp(exp, tz=timezone.utc),
    )


def verify_access_token(
    token: str,
    secret: str,
    now: Optional[datetime] = None,
    issuer: str = ISSUER,
    algorithm: str = ALGORITHM,
) -> str:
    """토큰 검증 후 subject(사용자 이메일) 반환"""
    return decode_access_token(token, secret, now=now, issuer=issuer, algorithm=algorithm).sub


# ============================================================
# Refresh Token (장기 토큰)
# ============================================================

def create_refresh_token(
    now: Optional[datetime] = None,
    expires_in: timedelta = REFRESH_TOKEN_TTL,
    nbytes: int = REFRESH_TOKEN_BYTES,
) -> tuple[str, datetime]:
    """
    Refresh Token 생성

    특징:
    - 긴 수명: 60일
    - 클레임 없는 불투명 문자열 (32바이트 CSPRNG → hex 64자)
    - 저장소에 사용자별로 기록, 저장된 값과 정확히 일치해야 유효

    Returns:
        (token, expires_at): 토큰 문자열, 만료 시각
    """
    token = secrets.token_hex(nbytes)
    return token, _as_utc(now) + expires_in


def is_refresh_token_valid(
    record: IdentityRecord,
    token: str,
    now: Optional[datetime] = None,
) -> bool:
    """
    Refresh Token 유효성 확인

    조건:
    1. 저장된 토큰과 정확히 일치 (상수 시간 비교)
    2. now < refresh_token_expires_at
    """
    if not record.refresh_token or record.refresh_token_expires_at is None:
        return False
    if not secrets.compare_digest(record.refresh_token.encode(), token.encode()):
        return False
    return _as_utc(now) < _as_utc(record.refresh_token_expires_at)
