from typing import Any

from fastapi import HTTPException
from sqlalchemy import exists as sa_exists
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from news_api.exception_handler import (
    FOREIGN_KEY_VIOLATION,
    NotFoundError,
    ValidationError,
)


async def exists(session: AsyncSession, column: InstrumentedAttribute, value: Any) -> bool:
    """`column`이 속한 테이블에 `column == value`인 row가 있는지 확인합니다."""
    return bool(await session.scalar(select(sa_exists().where(column == value))))


async def ensure_exists(session: AsyncSession, column: InstrumentedAttribute, value: Any) -> None:
    """조회/수정/삭제 대상이 없으면 404"""
    if not await exists(session, column, value):
        raise NotFoundError()


async def ensure_reference(
    session: AsyncSession,
    column: InstrumentedAttribute,
    value: Any,
    error: HTTPException | None = None,
) -> None:
    """insert 전에 참조 값이 유효한지 확인. DB 제약조건 에러 대신 `error`를 발생시킵니다."""
    if not await exists(session, column, value):
        raise error or ValidationError(FOREIGN_KEY_VIOLATION)
