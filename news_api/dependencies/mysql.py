import logging
import sys
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_options(url: str, echo: bool) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        # in-memory DB를 모든 세션이 공유하도록 단일 connection 사용
        return {
            "echo": echo,
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "echo": echo,
        "pool_size": 10,
        "max_overflow": 0,
        "pool_pre_ping": True,
        "pool_timeout": 600,
    }


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    engine(connection pool)과 session factory를 보관합니다.
    create_app()에서 한 번 생성되어 app.state.database로 주입됩니다.
    """

    def __init__(self, url: str, echo: bool = False):
        self.engine = create_async_engine(url, **_engine_options(url, echo))
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    async def startup(self) -> None:
        """서버 시작 시 스키마 검증 및 테이블 초기화를 수행합니다."""
        async with self.engine.begin() as conn:
            errors = await conn.run_sync(_validate_schema)
            if errors:
                logger.error("DB 스키마와 모델 정의가 일치하지 않습니다:")
                for error in errors:
                    logger.error("  - %s", error)
                logger.error("서버를 종료합니다. DB 스키마를 확인해주세요.")
                sys.exit(1)

            await conn.run_sync(Base.metadata.create_all)
            logger.info("DB 테이블 초기화 완료")

    async def shutdown(self) -> None:
        """서버 종료 시 연결 풀을 반환합니다."""
        await self.engine.dispose()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    `session: AsyncSession = Depends(get_session)`로 사용
    생성된 connection pool 중 하나를 할당 받아 사용
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session


def _validate_schema(sync_conn) -> list[str]:
    """
    모델 메타데이터와 실제 DB 스키마를 비교하여 불일치 항목을 반환합니다.
    """
    errors = []
    inspector = sa_inspect(sync_conn)
    existing_tables = inspector.get_table_names()

    for table_name, table in Base.metadata.tables.items():
        if table_name not in existing_tables:
            continue

        db_columns = {col["name"]: col for col in inspector.get_columns(table_name)}
        model_columns = {col.name: col for col in table.columns}

        missing = sorted(set(model_columns) - set(db_columns))
        unknown = sorted(set(db_columns) - set(model_columns))
        errors.extend(f"[{table_name}] 컬럼 '{name}'이 DB에 없습니다." for name in missing)
        errors.extend(f"[{table_name}] 컬럼 '{name}'이 모델에 없습니다." for name in unknown)

        for col_name, model_col in model_columns.items():
            if col_name not in db_columns or model_col.primary_key:
                continue
            if model_col.nullable != db_columns[col_name]["nullable"]:
                errors.append(
                    f"[{table_name}.{col_name}] nullable 불일치: "
                    f"모델={model_col.nullable}, DB={db_columns[col_name]['nullable']}"
                )

    return errors
