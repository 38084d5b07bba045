"""
Chirpy API 메인 애플리케이션
FastAPI 기반 REST API 서버

주요 기능:
- 사용자 API (/api/users, /api/login)
- chirp 검증 API (/api/validate_chirp)
- 정적 파일 서빙 (/app/*) + 방문 횟수 집계
- 관리자 통계 (/admin/metrics)

실행 방법:
    cd gateway
    JWT_SECRET=... uvicorn app.main:app --reload
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from shared import (
    CredentialStore,
    InMemoryCredentialStore,
    Settings,
    get_logger,
    get_settings,
    setup_logging,
)
from app.routes import admin, auth, chirps, users
from app.middleware import HitCounter, HitCounterMiddleware


logger = get_logger("main")


# ============================================================
# 애플리케이션 수명주기 관리
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 수명주기 핸들러

    저장소와 서명 비밀키는 create_app에서 이미 준비됨
    → 여기서는 시작/종료 로그만 남김
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting Chirpy API (environment=%s, port=%d)",
        settings.environment,
        settings.port,
    )

    yield

    logger.info("Shutting down Chirpy API")


# ============================================================
# 예외 핸들러
# ============================================================

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """잘못된 JSON / 누락된 필드 → 400 (클라이언트 오류)"""
    logger.info("Malformed request to %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def internal_exception_handler(request: Request, exc: Exception):
    """처리되지 않은 예외 → 500 (내부 정보 노출 없음)"""
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ============================================================
# 애플리케이션 팩토리
# ============================================================

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[CredentialStore] = None,
) -> FastAPI:
    """
    FastAPI 애플리케이션 생성 및 설정

    설정 항목:
    1. 로깅
    2. 공유 상태 (설정, 저장소, 방문 카운터)
    3. 예외 핸들러
    4. 방문 횟수 미들웨어
    5. 라우터 등록 + 정적 파일 마운트

    테스트에서는 settings(낮은 bcrypt cost)와 새 저장소를 주입
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    # FastAPI 인스턴스 생성
    app = FastAPI(
        title="Chirpy API",
        description="Short-text posting service",
        version="1.0.0",
        lifespan=lifespan,
    )

    # ========== 공유 상태 ==========
    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryCredentialStore()
    app.state.hit_counter = HitCounter()

    # ========== 예외 핸들러 ==========
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, internal_exception_handler)

    # ========== 미들웨어 설정 ==========
    app.add_middleware(HitCounterMiddleware)

    # ========== 라우터 등록 ==========

    # 사용자/인증 라우터: /api/users, /api/login
    app.include_router(users.router, prefix="/api", tags=["Users"])
    app.include_router(auth.router, prefix="/api", tags=["Authentication"])

    # chirp 라우터: /api/validate_chirp
    app.include_router(chirps.router, prefix="/api", tags=["Chirps"])

    # 관리자 라우터: /admin/metrics, /api/reset
    app.include_router(admin.router, tags=["Admin"])

    # ========== 헬스체크 ==========

    @app.get("/api/healthz", response_class=PlainTextResponse)
    async def health_check():
        """
        헬스체크 엔드포인트

        로드밸런서가 서버 상태 확인용으로 사용
        """
        return PlainTextResponse("OK")

    # ========== 정적 파일 ==========
    # 라우트 매칭 순서상 마지막에 마운트
    app.mount("/app", StaticFiles(directory=settings.static_root, html=True), name="app")

    return app


# ============================================================
# 애플리케이션 인스턴스
# ============================================================

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
