"""
사용자 라우터 (User Routes)
- 회원가입 (POST /api/users)
- 인증된 사용자 정보 수정 (PUT /api/users)
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from shared import (
    CredentialStore,
    DuplicateEmailError,
    IdentityRecord,
    Settings,
    UserCreate,
    UserResponse,
    UserUpdate,
    get_logger,
)
from app.auth import (
    MAX_PASSWORD_BYTES,
    get_app_settings,
    get_credential_store,
    get_current_identity,
    hash_password,
)


router = APIRouter()
logger = get_logger("routes.users")


def _conflict(email: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"User with email {email} already exists"
    )


# ============== 회원가입 ==============
@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: UserCreate,
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """
    새 사용자 등록

    1. 이메일 중복 확인 (해싱 비용 절약용 사전 확인)
    2. 비밀번호 해싱 (저장소 Lock 밖에서)
    3. 사용자 저장 (중복 여부는 저장소가 최종 판정)
    """
    if store.find_by_email(request.email) is not None:
        raise _conflict(request.email)

    # bcrypt 입력 한계 초과 → 클라이언트 오류
    if len(request.password.encode()) > MAX_PASSWORD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )

    try:
        password_hash = await run_in_threadpool(
            hash_password, request.password, settings.bcrypt_rounds
        )
    except ValueError:
        logger.exception("Could not hash password for %s", request.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

    # 해싱 중 다른 요청이 같은 이메일로 먼저 가입했을 수 있음
    try:
        user = store.create(request.email, password_hash)
    except DuplicateEmailError:
        raise _conflict(request.email)

    logger.info("Registered identity %d", user.id)

    return UserResponse(id=user.id, email=user.email)


# ============== 사용자 정보 수정 ==============
@router.put("/users", response_model=UserResponse)
async def update_user(
    request: UserUpdate,
    user: Annotated[IdentityRecord, Depends(get_current_identity)],
):
    """
    인증된 사용자 정보 수정

    Authorization: Bearer <token> 필수
    이메일과 비밀번호 해시는 생성 후 불변 → 요청 바디는 검증만 하고
    저장된 사용자 정보를 그대로 반환
    """
    return UserResponse(id=user.id, email=user.email)
