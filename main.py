import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from config.settings import settings
from database.db import SessionLocal, init_db

# ✅ 로깅 설정 (settings.LOG_LEVEL)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("fontTools").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware  # noqa: E402
from middlewares.error_handler import add_error_handlers  # noqa: E402

# ✅ 라우터 임포트
from routers import (  # noqa: E402
    auth, users, faculties, groups, teachers, students, profiles,
    periods, physical_tests, physical_states, sport_results, results, reports,
)
from dependencies.storage import memory_storage  # noqa: E402
from services.bootstrap import seed_default_data  # noqa: E402
from services.storage.sql_storage import DatabaseStorage  # noqa: E402


def _bootstrap():
    if settings.STORAGE_BACKEND == "memory":
        if settings.SEED_DEFAULT_DATA:
            seed_default_data(memory_storage())
        return

    init_db()
    if settings.SEED_DEFAULT_DATA:
        db = SessionLocal()
        try:
            seed_default_data(DatabaseStorage(db))
        finally:
            db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _bootstrap()
    logger.info("%s started (env=%s, storage=%s)", settings.APP_TITLE, settings.ENV, settings.STORAGE_BACKEND)
    yield


app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# ✅ CORS 설정 (세션 쿠키 전달을 위해 allow_credentials)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 서명된 세션 쿠키 (로그인 사용자 ID 보관)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE,
    max_age=settings.SESSION_MAX_AGE,
    https_only=settings.ENV == "prod",
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /api 프리픽스 라우터 등록
app.include_router(auth.router,            prefix="/api")
app.include_router(users.router,           prefix="/api")
app.include_router(faculties.router,       prefix="/api")
app.include_router(groups.router,          prefix="/api")
app.include_router(teachers.router,        prefix="/api")
app.include_router(students.router,        prefix="/api")
app.include_router(profiles.router,        prefix="/api")
app.include_router(periods.router,         prefix="/api")
app.include_router(physical_tests.router,  prefix="/api")
app.include_router(physical_states.router, prefix="/api")
app.include_router(sport_results.router,   prefix="/api")
app.include_router(results.router,         prefix="/api")
app.include_router(reports.router,         prefix="/api")


# ✅ 헬스체크 엔드포인트
@app.get("/api/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}
