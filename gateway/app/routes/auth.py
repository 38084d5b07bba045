"""
인증 라우터 (Authentication Routes)
- 로그인: 비밀번호 검증 후 Access Token + Refresh Token 발급
"""
from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from starlette.concurrency import run_in_threadpool

from shared import (
    CredentialStore,
    IdentityNotFoundError,
    LoginRequest,
    LoginResponse,
    Settings,
    get_logger,
)
from app.auth import (
    create_access_token,
    create_refresh_token,
    get_app_settings,
    get_credential_store,
    verify_password,
)


router = APIRouter()
logger = get_logger("routes.auth")


# ============== 로그인 ==============
@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """
    로그인 및 토큰 발급

    1. 이메일로 사용자 조회 (없으면 204)
    2. 비밀번호 검증 (틀리면 401)
    3. Access Token 생성 (1시간)
    4. Refresh Token 생성 (60일) → 저장소에 기록

    존재하지 않는 이메일(204)과 틀린 비밀번호(401)는 서로 다른 상태 코드로 응답
    """
    # 사용자 조회
    user = store.find_by_email(request.email)
    if user is None:
        logger.info("Login for unknown email %s", request.email)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # 비밀번호 검증 (bcrypt, 스레드풀에서 실행 → 이벤트 루프/저장소 Lock 블로킹 없음)
    try:
        matched = await run_in_threadpool(verify_password, request.password, user.password_hash)
    except ValueError:
        logger.exception("Stored password hash for identity %d is malformed", user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

    if not matched:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    now = datetime.now(timezone.utc)

    # Access Token 생성 (짧은 수명, 요청마다 사용)
    access_token = create_access_token(
        subject=user.email,
        secret=settings.jwt_secret,
        now=now,
        expires_in=timedelta(minutes=settings.jwt_access_token_expire_minutes),
        issuer=settings.jwt_issuer,
        algorithm=settings.jwt_algorithm,
    )

    # Refresh Token 생성 (긴 수명, 응답 바디로만 전달)
    refresh_token, refresh_expires_at = create_refresh_token(
        now=now,
        expires_in=timedelta(days=settings.refresh_token_expire_days),
        nbytes=settings.refresh_token_bytes,
    )

    # 토큰과 만료 시간을 한 번에 저장 (이전 로그인의 토큰은 덮어씀)
    try:
        store.set_refresh_token(user.email, refresh_token, refresh_expires_at)
    except IdentityNotFoundError:
        logger.exception("Identity %d vanished during login", user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

    logger.info("Identity %d logged in", user.id)

    return LoginResponse(
        id=user.id,
        email=user.email,
        token=access_token,
        refresh_token=refresh_token,
    )
