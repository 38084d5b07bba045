"""
라우터 패키지 (Routes Package)

API 엔드포인트:
- auth: 로그인 (/api/login)
- users: 회원가입, 정보 수정 (/api/users)
- chirps: chirp 검증 (/api/validate_chirp)
- admin: 방문 통계 (/admin/metrics, /api/reset)
"""
from . import admin, auth, chirps, users

__all__ = ["admin", "auth", "chirps", "users"]
