# resto/api/routers/health.py
from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    request.app.state.database.ping()
    return {"status": "ok"}
