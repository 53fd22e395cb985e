import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import DataError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)

INVALID_FIELD = "Invalid field body"
NULL_FIELDS = "Fields cannot be null values"
MISSING_FIELDS = "Missing fields"
INVALID_INPUT = "Invalid input"
FOREIGN_KEY_VIOLATION = "Value/s violate foreign key restraint"
RESOURCE_NOT_FOUND = "Resource not found"
PATH_NOT_FOUND = "Path not found"


class ValidationError(HTTPException):
    def __init__(self, detail: str = INVALID_INPUT):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = RESOURCE_NOT_FOUND):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


# 401/403은 JSON이 아닌 plain text 본문으로 응답
_PLAIN_TEXT_BODIES = {
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_403_FORBIDDEN: "Forbidden",
}


def custom_exception_handler(_request: Request, exc: StarletteHTTPException):
    if exc.status_code in _PLAIN_TEXT_BODIES:
        return PlainTextResponse(
            _PLAIN_TEXT_BODIES[exc.status_code],
            status_code=exc.status_code,
            headers=exc.headers,
        )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


def invalid_input_handler(request: Request, exc: Exception):
    """path parameter, body 값의 타입이 맞지 않는 경우"""
    logger.info("Invalid input on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"message": INVALID_INPUT}
    )


def integrity_error_handler(request: Request, exc: IntegrityError):
    """
    사전 검증을 통과했지만 DB 제약조건에 걸린 경우.
    드라이버마다 에러 형식이 달라 메시지 내용으로 분류합니다.
    """
    reason = str(exc.orig).lower()
    logger.warning("Integrity error on %s: %s", request.url.path, reason)

    if "foreign key" in reason:
        status_code, message = status.HTTP_400_BAD_REQUEST, FOREIGN_KEY_VIOLATION
    elif "unique" in reason or "duplicate" in reason:
        status_code, message = status.HTTP_409_CONFLICT, "Resource already exists"
    elif "null" in reason:
        status_code, message = status.HTTP_400_BAD_REQUEST, NULL_FIELDS
    else:
        status_code, message = status.HTTP_400_BAD_REQUEST, INVALID_INPUT
    return JSONResponse(status_code=status_code, content={"message": message})


def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, custom_exception_handler)
    app.add_exception_handler(RequestValidationError, invalid_input_handler)
    app.add_exception_handler(PydanticValidationError, invalid_input_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(DataError, invalid_input_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
