# app/core/exceptions.py
# 領域錯誤 (Domain Errors) 與對應的 FastAPI Exception Handlers
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """所有領域錯誤的基底類別，帶有實體名稱與鍵值方便診斷"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, entity: str, key: Any = None, message: Optional[str] = None):
        self.entity = entity
        self.key = key
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self) -> str:
        return f"{self.entity} '{self.key}' 發生錯誤"


class EntityNotFoundError(DirectoryError):
    """指定的 ID 不存在 (get / update / archive / delete / rename)"""

    status_code = status.HTTP_404_NOT_FOUND

    def default_message(self) -> str:
        return f"{self.entity} '{self.key}' 不存在"


class DuplicateRecordError(DirectoryError):
    """違反唯一性 (username / email / 技能或興趣名稱)"""

    status_code = status.HTTP_409_CONFLICT

    def default_message(self) -> str:
        return f"{self.entity} '{self.key}' 已存在"


class ValidationError(DirectoryError):
    """呼叫端傳入的資料不合法 (例如空白名稱)"""

    status_code = status.HTTP_400_BAD_REQUEST

    def default_message(self) -> str:
        return f"{self.entity} 的資料不合法: {self.key}"


class InvalidReferenceError(ValidationError):
    """引用了不存在的技能 / 興趣 ID"""

    def default_message(self) -> str:
        return f"包含無效的 {self.entity} ID: {self.key}"


def _error_body(exc: DirectoryError) -> dict:
    return {"detail": exc.message, "entity": exc.entity, "key": jsonable_encoder(exc.key)}


def register_exception_handlers(app: FastAPI) -> None:
    """將領域錯誤轉換成 HTTP 回應 (404 / 409 / 400 / 500)"""

    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError):
        logger.warning(
            "%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message
        )
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # 欄位驗證失敗一律回 400 (而非 FastAPI 預設的 422)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception: %s %s - %s", request.method, request.url.path, exc, exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
        )
