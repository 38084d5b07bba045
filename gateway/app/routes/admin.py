"""
관리자 라우터 (Admin Routes)
- 정적 파일 방문 횟수 조회 / 초기화
"""
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse


router = APIRouter()

METRICS_TEMPLATE = """
<html>
<body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
</body>
</html>
"""


@router.get("/admin/metrics", response_class=HTMLResponse)
async def metrics(request: Request):
    """/app/ 방문 횟수를 HTML로 표시"""
    hits = request.app.state.hit_counter.value
    return HTMLResponse(METRICS_TEMPLATE.format(hits=hits))


@router.get("/api/reset", response_class=PlainTextResponse)
async def reset_metrics(request: Request):
    """방문 횟수 0으로 초기화"""
    request.app.state.hit_counter.reset()
    return PlainTextResponse("Reset hits to 0")
