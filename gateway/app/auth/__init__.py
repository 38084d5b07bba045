"""
인증 모듈 (Auth Module)

주요 컴포넌트:
- jwt_handler: 비밀번호 해싱, Access Token 생성/검증, Refresh Token 생성/검증
- dependencies: FastAPI 인증 의존성 (라우트 보호용)
"""
from .jwt_handler import (
    MAX_PASSWORD_BYTES,      # bcrypt 입력 한계
    InvalidTokenError,       # 토큰 검증 실패
    hash_password,           # 비밀번호 해싱
    verify_password,         # 비밀번호 검증
    create_access_token,     # Access Token 생성
    decode_access_token,     # JWT 디코딩
    verify_access_token,     # subject 추출
    create_refresh_token,    # Refresh Token 생성
    is_refresh_token_valid,  # Refresh Token 유효성
)
from .dependencies import (
    MalformedHeaderError,    # Authorization 헤더 형식 오류
    extract_bearer,          # Bearer 토큰 추출
    get_app_settings,        # 앱 설정 의존성
    get_credential_store,    # 저장소 의존성
    get_current_identity,    # 인증 필수 의존성
)

__all__ = [
    "MAX_PASSWORD_BYTES",
    "InvalidTokenError",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
    "verify_access_token",
    "create_refresh_token",
    "is_refresh_token_valid",
    "MalformedHeaderError",
    "extract_bearer",
    "get_app_settings",
    "get_credential_store",
    "get_current_identity",
]
