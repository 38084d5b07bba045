"""
방문 횟수 미들웨어
/app/ 아래 정적 파일 요청 수 집계

동작 방식:
1. 요청 경로가 /app 으로 시작하는지 확인
2. 공유 카운터 증가 (Lock 보호)
3. 다음 핸들러로 전달
"""
import threading

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


# 집계 대상 경로 접두사 (정적 파일 마운트 위치)
COUNTED_PREFIX = "/app"


class HitCounter:
    """
    요청 간 공유되는 방문 카운터

    요청마다 별도 워커에서 증가시키므로 Lock으로 보호
    """

    def __init__(self) -> None:
        self._hits = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._hits


class HitCounterMiddleware(BaseHTTPMiddleware):
    """
    정적 파일 방문 횟수 집계

    카운터는 app.state.hit_counter (create_app에서 등록)
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path == COUNTED_PREFIX or path.startswith(COUNTED_PREFIX + "/"):
            request.app.state.hit_counter.increment()

        return await call_next(request)
