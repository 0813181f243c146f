from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker            # 세션 팩토리 함수
from sqlalchemy.pool import StaticPool

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기


def _engine_options(url: str) -> dict:
    # SQLite는 스레드 검사 해제 + 메모리 DB는 단일 커넥션 공유
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return options


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """모든 모델을 import 한 뒤 테이블 생성 (없는 테이블만)"""
    from models import (  # noqa: F401  (import 시 Base.metadata 에 테이블 등록)
        faculty, group, period, physical_state, physical_tests,
        result, sport_results, student, teacher, users,
    )
    Base.metadata.create_all(bind=engine)
