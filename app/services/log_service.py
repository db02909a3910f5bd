import logging
import secrets
from datetime import datetime, timezone

from app import config
from app.errors import AuthorizationError, ValidationError
from app.models.log import LogCreate, LogReport
from app.services.log_store import LogStore
from app.services.report import build_report
from app.utils.common import is_blank

logger = logging.getLogger(__name__)


class LogService:

    @staticmethod
    async def ingest(payload: LogCreate, store: LogStore) -> str:
        """
        Сохраняет одно событие пользователя.
        Ошибки:
        - ValidationError: нет uid, action или date;
        - StorageError: MongoDB не приняла запись.
        Дубликаты не отсекаются: каждый запрос создаёт новую запись.
        """
        missing = [name for name in ("uid", "action", "date") if is_blank(getattr(payload, name))]
        if missing:
            raise ValidationError(f"missing fields: {', '.join(missing)}")

        record = {
            "uid": payload.uid,
            "timestamp": datetime.now(timezone.utc),
            "action": payload.action,
            "details": payload.details or {},
            "date": payload.date,
        }
        inserted_id = await store.insert(record)
        logger.info("Logged %s for uid=%s (%s)", payload.action, payload.uid, inserted_id)
        return inserted_id

    @staticmethod
    def check_admin_key(key: str | None, admin_key: str | None = None):
        expected = config.ADMIN_API_KEY if admin_key is None else admin_key
        # пустой секрет в конфиге не совпадает ни с чем
        if not expected or key is None:
            raise AuthorizationError("admin key missing or not configured")
        if not secrets.compare_digest(key.encode(), expected.encode()):
            raise AuthorizationError("admin key mismatch")

    @staticmethod
    async def admin_report(key: str | None, since: str | None, store: LogStore) -> LogReport:
        # ключ проверяется до любого запроса к базе
        LogService.check_admin_key(key)
        if since is None:
            since = config.DEFAULT_SINCE
        logs = await store.find_since(since, limit=config.REPORT_LIMIT)
        return build_report(logs)
