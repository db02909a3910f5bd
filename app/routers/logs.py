from fastapi import APIRouter, Depends, Query, status

from app import config
from app.database import get_log_store
from app.models.log import ErrorResponse, LogCreate, LogReport, MessageResponse
from app.services.log_service import LogService
from app.services.log_store import LogStore

router = APIRouter()

SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Ошибка хранилища"}}


# 📝 POST /api/log
@router.post(
    "/log",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse, "description": "Нет uid, action или date"}, **SERVER_ERROR},
)
async def create_log(payload: LogCreate, store: LogStore = Depends(get_log_store)):
    await LogService.ingest(payload, store)
    return MessageResponse(message="Logged successfully")


# 📊 GET /api/admin/logs?key=...&since=2025-10-05
@router.get(
    "/admin/logs",
    response_model=LogReport,
    responses={401: {"model": ErrorResponse, "description": "Неверный ключ"}, **SERVER_ERROR},
)
async def get_admin_logs(
    key: str | None = Query(None, description="Ключ администратора"),
    since: str | None = Query(None, description=f"Нижняя граница date (YYYY-MM-DD), по умолчанию {config.DEFAULT_SINCE}"),
    store: LogStore = Depends(get_log_store),
):
    return await LogService.admin_report(key, since, store)
