import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.storage.base import DuplicateEntityError, EntityInUseError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, errors=None, headers=None) -> JSONResponse:
    content = {"message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def add_error_handlers(app: FastAPI):
    # ✅ HTTPException → {"message": detail}
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _error(exc.status_code, message, headers=getattr(exc, "headers", None))

    # ✅ 요청 본문/쿼리 검증 실패 → 400 + 필드별 상세
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Invalid request data on %s %s", request.method, request.url.path)
        return _error(400, "Invalid request data", errors=jsonable_encoder(exc.errors()))

    # ✅ 참조 중인 레코드 삭제 시도
    @app.exception_handler(EntityInUseError)
    async def entity_in_use_handler(request: Request, exc: EntityInUseError):
        return _error(400, str(exc))

    # ✅ 고유 값 중복 (학부명 등)
    @app.exception_handler(DuplicateEntityError)
    async def duplicate_entity_handler(request: Request, exc: DuplicateEntityError):
        return _error(400, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")
