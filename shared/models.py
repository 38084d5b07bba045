"""
공유 Pydantic 모델
Gateway 라우터와 인증 모듈에서 공통으로 사용하는 데이터 모델

주요 모델 분류:
1. User Models: 회원가입/수정 요청, 사용자 응답
2. Auth Models: 로그인 요청/응답, 토큰 페이로드
3. Storage Models: 저장소 내부 레코드 (응답으로 절대 직렬화하지 않음)
4. Chirp Models: chirp 길이 검증
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


# ============================================================
# 사용자 모델 (User Models)
# ============================================================

class UserBase(BaseModel):
    """사용자 기본 모델"""
    email: str


class UserCreate(UserBase):
    """사용자 생성 요청 모델 (회원가입)"""
    password: str


class UserUpdate(UserBase):
    """사용자 정보 수정 요청 모델 (PUT /api/users)"""
    password: str


class UserResponse(UserBase):
    """
    사용자 응답 모델

    비밀번호 해시, Refresh Token 제외한 사용자 정보 반환
    """
    id: int


# ============================================================
# 인증 모델 (Auth Models)
# ============================================================

class LoginRequest(BaseModel):
    """로그인 요청 모델"""
    email: str
    password: str


class LoginResponse(UserResponse):
    """
    로그인 응답 모델

    - token: Access Token (1시간, Authorization 헤더로 전송)
    - refresh_token: Refresh Token (60일, 응답 바디로만 전달)
    """
    token: str
    refresh_token: str


class TokenPayload(BaseModel):
    """
    JWT 토큰 페이로드 (디코딩 결과)

    - iss: 발급자 ("chirpy")
    - sub: Subject (사용자 이메일)
    - iat: 발급 시간
    - exp: 만료 시간
    """
    iss: str
    sub: str
    iat: datetime
    exp: datetime


# ============================================================
# 저장소 모델 (Storage Models)
# ============================================================

class IdentityRecord(BaseModel):
    """
    사용자 1명당 1개의 인증 레코드

    - id, email: 생성 시 1회 할당, 이후 불변
    - password_hash: bcrypt 해시 (생성 시 1회 설정)
    - refresh_token / refresh_token_expires_at: 로그인마다 함께 덮어씀

    CredentialStore만 원본을 소유하며, 외부에는 복사본만 전달됨
    """
    id: int
    email: str
    password_hash: str
    refresh_token: Optional[str] = None
    refresh_token_expires_at: Optional[datetime] = None


# ============================================================
# Chirp 모델
# ============================================================

class ChirpRequest(BaseModel):
    """chirp 검증 요청 모델"""
    body: str


class ChirpValidResponse(BaseModel):
    """chirp 검증 성공 응답"""
    valid: bool = True
