"""
Shared 패키지
Gateway 라우터와 인증 모듈에서 공통으로 사용하는 유틸리티 모음

주요 모듈:
- config: 환경 설정 관리
- models: Pydantic 데이터 모델
- credential_store: 사용자 인증 레코드 저장소
- logging_config: 로거 설정
"""
from .config import get_settings, Settings
from .models import (
    # User 모델
    UserBase,
    UserCreate,
    UserUpdate,
    UserResponse,
    # Auth 모델
    LoginRequest,
    LoginResponse,
    TokenPayload,
    # 저장소 모델
    IdentityRecord,
    # Chirp 모델
    ChirpRequest,
    ChirpValidResponse,
)
from .credential_store import (
    CredentialStore,
    InMemoryCredentialStore,
    DuplicateEmailError,
    IdentityNotFoundError,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    # 설정
    "get_settings",
    "Settings",
    # User 모델
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    # Auth 모델
    "LoginRequest",
    "LoginResponse",
    "TokenPayload",
    # 저장소 모델
    "IdentityRecord",
    # Chirp 모델
    "ChirpRequest",
    "ChirpValidResponse",
    # 저장소
    "CredentialStore",
    "InMemoryCredentialStore",
    "DuplicateEmailError",
    "IdentityNotFoundError",
    # 로깅
    "setup_logging",
    "get_logger",
]
