"""
인증 의존성 (Auth Dependencies)
라우트 보호를 위한 FastAPI 의존성 함수들

주요 기능:
- Authorization 헤더에서 Bearer 토큰 추출
- JWT 서명/만료 검증
- 토큰 subject로 저장소 조회
"""
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status

from shared import CredentialStore, IdentityRecord, Settings, get_logger
from app.auth.jwt_handler import InvalidTokenError, verify_access_token


logger = get_logger("auth.dependencies")

BEARER_SCHEME = "bearer"


class MalformedHeaderError(Exception):
    """Authorization 헤더가 없거나 "<scheme> <token>" 형식이 아님"""


# ============================================================
# 앱 상태 의존성
# ============================================================

def get_app_settings(request: Request) -> Settings:
    """create_app에서 app.state에 등록한 설정 반환"""
    return request.app.state.settings


def get_credential_store(request: Request) -> CredentialStore:
    """create_app에서 app.state에 등록한 저장소 반환"""
    return request.app.state.store


# ============================================================
# Bearer 헤더 파싱
# ============================================================

def extract_bearer(header_value: Optional[str]) -> str:
    """
    Authorization 헤더 값에서 토큰 추출

    허용 형식: "Bearer <token>" (scheme 대소문자 무시)

    Raises:
        MalformedHeaderError: 헤더 없음, 빈 값, scheme 불일치,
            scheme/토큰 두 부분으로 나뉘지 않는 경우
    """
    if not header_value or not header_value.strip():
        raise MalformedHeaderError("missing authorization header")

    parts = header_value.split()
    if len(parts) != 2:
        raise MalformedHeaderError("expected '<scheme> <token>'")

    scheme, token = parts
    if scheme.lower() != BEARER_SCHEME:
        raise MalformedHeaderError(f"unsupported scheme: {scheme}")

    return token


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


# ============================================================
# 사용자 인증 의존성
# ============================================================

async def get_current_identity(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> IdentityRecord:
    """
    현재 인증된 사용자 가져오기 (JWT 검증)

    검증 단계:
    1. Authorization 헤더에서 토큰 추출
    2. JWT 서명/만료 검증 → subject(이메일)
    3. 저장소에서 subject로 사용자 조회

    사용법:
        @router.put("/users")
        async def update(user: Annotated[IdentityRecord, Depends(get_current_identity)]):
            return {"id": user.id}

    Raises:
        HTTPException 401: 헤더 오류, 토큰 무효/만료, 알 수 없는 사용자 (사유 구분 없음)
    """
    try:
        token = extract_bearer(request.headers.get("Authorization"))
    except MalformedHeaderError as exc:
        logger.info("Rejected request to %s: %s", request.url.path, exc)
        raise _unauthorized()

    try:
        subject = verify_access_token(
            token,
            settings.jwt_secret,
            issuer=settings.jwt_issuer,
            algorithm=settings.jwt_algorithm,
        )
    except InvalidTokenError:
        logger.info("Rejected request to %s: invalid access token", request.url.path)
        raise _unauthorized()

    identity = store.find_by_subject(subject)
    if identity is None:
        logger.warning("Valid token for unknown subject %s", subject)
        raise _unauthorized()

    return identity
