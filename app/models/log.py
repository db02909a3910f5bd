from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# details: произвольный JSON (строки, числа, списки, вложенные объекты)
JSONValue = Any


class LogCreate(BaseModel):
    """Тело POST /api/log. Обязательность полей проверяется в сервисе, чтобы вернуть 400."""
    uid: Optional[str] = None
    action: Optional[str] = None
    details: Optional[Dict[str, JSONValue]] = Field(default=None, description="Доп. данные события")
    date: Optional[str] = Field(default=None, description="YYYY-MM-DD, ключ для выборок по диапазону",
                                examples=["2025-10-06"])


class LogRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    uid: str
    timestamp: datetime
    action: str
    details: Optional[Dict[str, JSONValue]] = Field(default_factory=dict)
    date: str

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # BSON хранит время в UTC; наивная дата из драйвера считается UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class LogReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_users: int = Field(alias="totalUsers")
    new_users: int = Field(alias="newUsers")
    repeat_users: int = Field(alias="repeatUsers")
    one_time_users: int = Field(alias="oneTimeUsers")
    top_actions: List[str] = Field(alias="topActions", examples=[["login (12)", "purchase (4)"]])
    logs: List[LogRecord]
    issues: List[LogRecord]


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
