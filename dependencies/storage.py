from typing import Iterator, Optional

from config.settings import settings
from database.db import SessionLocal
from services.storage.base import Storage
from services.storage.mem_storage import MemStorage
from services.storage.sql_storage import DatabaseStorage

_memory_storage: Optional[MemStorage] = None


def memory_storage() -> MemStorage:
    """프로세스 단위로 하나만 만든다 (재시작 시 초기화)"""
    global _memory_storage
    if _memory_storage is None:
        _memory_storage = MemStorage()
    return _memory_storage


def get_storage() -> Iterator[Storage]:
    # ✅ 요청마다 저장소 제공 (SQL 이면 세션을 열고 요청 끝에 닫음)
    if settings.STORAGE_BACKEND == "memory":
        yield memory_storage()
        return
    db = SessionLocal()
    try:
        yield DatabaseStorage(db)
    finally:
        db.close()
