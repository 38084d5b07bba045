"""
Chirpy API 게이트웨이 패키지

하위 패키지:
- auth: 비밀번호 해싱, 토큰 발급/검증, 인증 의존성
- routes: API 엔드포인트
- middleware: 방문 횟수 집계
"""
