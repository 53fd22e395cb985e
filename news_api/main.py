import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from news_api.config.config import Settings, get_settings
from news_api.dependencies.auth import CredentialService
from news_api.dependencies.mysql import Database
from news_api.exception_handler import (
    PATH_NOT_FOUND,
    NotFoundError,
    register_exception_handlers,
)
from news_api.routers import api, article, comment, topic, user

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    앱 팩토리. 설정으로부터 DB 연결 풀과 인증 서비스를 만들어 app.state에 주입합니다.
    `uvicorn news_api.main:create_app --factory`로 실행
    """
    settings = settings or get_settings()

    # logger 전역 설정
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    database = Database(settings.sqlalchemy_url, echo=settings.db_echo)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        await database.startup()
        yield
        await database.shutdown()

    app = FastAPI(title="NC News API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.credentials = CredentialService(settings.jwt, settings.bcrypt_rounds)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api.router, prefix="/api")
    app.include_router(topic.router, prefix="/api")
    app.include_router(article.router, prefix="/api")
    app.include_router(comment.router, prefix="/api")
    app.include_router(user.router, prefix="/api")
    app.include_router(user.login_router, prefix="/api")

    @app.get(
        "/health",
        tags=["Health Check"],
        summary="Health Check용 API",
    )
    async def health_check() -> str:
        return "ok"

    # 반드시 마지막에 등록. 매칭되는 라우트가 없는 모든 요청을 404로 응답
    @app.api_route(
        "/{path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )
    async def path_not_found(path: str):
        raise NotFoundError(PATH_NOT_FOUND)

    return app
