"""
공통 설정 모듈 (Shared Config)
환경변수를 로드하고 애플리케이션 설정 제공

Pydantic Settings를 사용하여:
- .env 파일에서 설정 로드
- 기본값 제공
- 타입 검증 자동 수행
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    애플리케이션 설정 클래스

    환경변수에서 값을 로드 (없으면 기본값 사용)
    환경변수 이름은 필드명과 동일 (대소문자 구분 없음)

    예: JWT_SECRET 환경변수 → jwt_secret 필드
    """

    # ============================================================
    # 환경 설정
    # ============================================================
    environment: str = "development"  # development, staging, production

    # ============================================================
    # HTTP 서버
    # ============================================================
    host: str = "0.0.0.0"
    port: int = 8080
    static_root: str = "."            # /app/ 아래로 서빙할 디렉터리

    # ============================================================
    # JWT 인증
    # ============================================================
    jwt_secret: str = Field(..., min_length=1)   # 필수! 시작 시 환경변수로 주입
    jwt_algorithm: str = "HS256"                 # 서명 알고리즘
    jwt_issuer: str = "chirpy"                   # iss 클레임
    jwt_access_token_expire_minutes: int = 60    # Access Token 만료: 1시간

    # ============================================================
    # Refresh Token
    # ============================================================
    refresh_token_expire_days: int = 60   # Refresh Token 만료: 60일
    refresh_token_bytes: int = 32         # 랜덤 바이트 수 (hex 인코딩 시 64자)

    # ============================================================
    # 비밀번호 해싱 (bcrypt)
    # ============================================================
    bcrypt_rounds: int = Field(15, ge=4, le=31)  # cost factor (2^rounds 반복)

    # ============================================================
    # Chirp 검증
    # ============================================================
    max_chirp_length: int = 140

    # ============================================================
    # 로깅
    # ============================================================
    log_level: str = "INFO"

    class Config:
        """Pydantic 설정"""
        env_file = ".env"           # .env 파일에서 로드
        env_file_encoding = "utf-8"


# ============================================================
# 싱글톤 설정 인스턴스
# ============================================================

@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스 반환 (캐시됨)

    lru_cache로 한 번만 로드하고 재사용
    서명 비밀키는 프로세스 수명 동안 변하지 않음
    """
    return Settings()
