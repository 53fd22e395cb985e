import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.dependencies.auth import (
    CredentialService,
    get_credentials,
    get_current_username,
)
from news_api.dependencies.exists import exists
from news_api.dependencies.mysql import get_session
from news_api.exception_handler import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
)
from news_api.models.user import User
from news_api.schemas import (
    UserEnvelope,
    UserList,
    UserResponse,
    UserTokenEnvelope,
    UserTokenResponse,
)
from news_api.validation import LOGIN, USER_CREATE, USER_UPDATE, validate_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])
login_router = APIRouter(tags=["Users"])


class SignUpRequest(BaseModel):
    username: str
    password: str
    name: str
    avatar_url: str


class EditUserRequest(BaseModel):
    username: str
    name: str | None = None
    avatar_url: str | None = None


class LoginRequest(BaseModel):
    username: str
    password: str


@router.get("", response_model=UserList)
async def get_users(session: AsyncSession = Depends(get_session)) -> UserList:
    result = await session.scalars(select(User).order_by(User.username))
    return UserList(users=[UserResponse.model_validate(u) for u in result.all()])


@router.post("", response_model=UserTokenEnvelope, status_code=201)
async def sign_up(
    payload: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_session),
    credentials: CredentialService = Depends(get_credentials),
) -> UserTokenEnvelope:
    body = SignUpRequest.model_validate(validate_body(USER_CREATE, payload))

    # unique 제약조건 에러에 의존하지 않고 미리 확인
    if await exists(session, User.username, body.username):
        raise ConflictError("User already exists")

    user = User(
        username=body.username,
        name=body.name,
        avatar_url=body.avatar_url,
        password=credentials.hash_password(body.password),
    )
    session.add(user)
    await session.commit()
    logger.info("user signed up: %s", user.username)

    return UserTokenEnvelope(
        user=UserTokenResponse(
            username=user.username, token=credentials.issue_token(user.username)
        )
    )


@router.get("/{username}", response_model=UserEnvelope)
async def get_user(
    username: str,
    session: AsyncSession = Depends(get_session),
) -> UserEnvelope:
    user = await session.get(User, username)
    if user is None:
        raise NotFoundError()
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.patch("/{username}", response_model=UserEnvelope)
async def edit_user(
    username: str,
    payload: dict[str, Any] = Body(...),
    current_username: str = Depends(get_current_username),
    session: AsyncSession = Depends(get_session),
) -> UserEnvelope:
    body = EditUserRequest.model_validate(validate_body(USER_UPDATE, payload))
    if body.username != current_username:
        raise AuthorizationError()

    user = await session.get(User, username)
    if user is None:
        raise NotFoundError()
    if user.username != current_username:
        raise AuthorizationError()

    if body.name is None and body.avatar_url is None:
        return UserEnvelope(user=UserResponse.model_validate(user))

    if body.name is not None:
        user.name = body.name
    if body.avatar_url is not None:
        user.avatar_url = body.avatar_url

    await session.commit()
    await session.refresh(user)
    return UserEnvelope(user=UserResponse.model_validate(user))


@login_router.post("/login", response_model=UserTokenEnvelope)
async def login(
    payload: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_session),
    credentials: CredentialService = Depends(get_credentials),
) -> UserTokenEnvelope:
    body = LoginRequest.model_validate(validate_body(LOGIN, payload))

    user = await session.get(User, body.username)
    if user is None or not credentials.verify_password(body.password, user.password):
        logger.warning("login failed: %s", body.username)
        raise AuthenticationError("Invalid username or password")

    return UserTokenEnvelope(
        user=UserTokenResponse(
            username=user.username, token=credentials.issue_token(user.username)
        )
    )
