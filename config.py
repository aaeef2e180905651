import os

DATABASE_URL = os.environ.get("DATABASE_URL", "postgresql://tinylink:tinylink@db:5432/tinylink")
DATABASE_URL_ASYNC = DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")
BASE_URL = os.environ.get("BASE_URL", "http://localhost:8000").rstrip("/")

DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", 10))
DB_MAX_OVERFLOW = int(os.environ.get("DB_MAX_OVERFLOW", 0))
DB_POOL_TIMEOUT = int(os.environ.get("DB_POOL_TIMEOUT", 10))
DB_POOL_RECYCLE = int(os.environ.get("DB_POOL_RECYCLE", 1800))
DB_ECHO = os.environ.get("DB_ECHO", "false").lower() in ("1", "true", "yes")

CODE_LENGTH = min(max(int(os.environ.get("CODE_LENGTH", 6)), 6), 8)
MAX_ALLOCATION_ATTEMPTS = int(os.environ.get("MAX_ALLOCATION_ATTEMPTS", 5))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
