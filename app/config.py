from decouple import config, Csv

MONGODB_URI = config("MONGODB_URI", default="mongodb://localhost:27017")
MONGODB_DB = config("MONGODB_DB", default="analytics")
MONGODB_TIMEOUT_MS = config("MONGODB_TIMEOUT_MS", default=5000, cast=int)

ADMIN_API_KEY = config("ADMIN_API_KEY", default="")

HOST = config("HOST", default="0.0.0.0")
PORT = config("PORT", default=3001, cast=int)
CORS_ORIGINS = config("CORS_ORIGINS", default="*", cast=Csv())

# даты хранятся как YYYY-MM-DD, поэтому строковое сравнение = хронологическое
DEFAULT_SINCE = config("DEFAULT_SINCE", default="2025-10-05")

REPORT_LIMIT = 100
TOP_ACTIONS = 3
MAX_ISSUES = 10
ISSUE_ACTIONS = ("failed_transaction", "user_stuck")
