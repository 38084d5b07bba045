"""
미들웨어 패키지 (Middleware Package)

사용 가능한 미들웨어:
- HitCounterMiddleware: 정적 파일 방문 횟수 집계
"""
from .metrics import HitCounter, HitCounterMiddleware

__all__ = ["HitCounter", "HitCounterMiddleware"]
