import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, Header, Request
from passlib.context import CryptContext

from news_api.config.config import JwtConfig
from news_api.exception_handler import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


class CredentialService:
    """
    비밀번호 해시/검증과 JWT 액세스 토큰 발급/검증을 담당합니다.
    서명 키와 bcrypt cost는 create_app()에서 주입되며 요청 간 공유되는 읽기 전용 값입니다.
    """

    def __init__(self, jwt_config: JwtConfig, bcrypt_rounds: int = 10):
        self._jwt = jwt_config
        self._pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=bcrypt_rounds
        )

    def hash_password(self, plain_password: str) -> str:
        return self._pwd_context.hash(plain_password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        # 입력된 비밀번호가 저장된 해시와 일치하는지 확인
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            # 저장된 값이 bcrypt 해시 형식이 아닌 경우
            return False

    def issue_token(self, username: str) -> str:
        """JWT 액세스 토큰을 생성합니다."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": username,
            "iat": now,
            "exp": now + timedelta(minutes=self._jwt.expire_minutes),
        }
        return jwt.encode(payload, self._jwt.secret_key, algorithm=self._jwt.algorithm)

    def verify_token(self, token: str) -> str:
        """토큰을 검증하고 username(sub)을 반환합니다."""
        try:
            payload = jwt.decode(
                token,
                self._jwt.secret_key,
                algorithms=[self._jwt.algorithm],
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e

        username = payload.get("sub")
        if not isinstance(username, str) or not username:
            raise AuthenticationError("Invalid token payload")
        return username


def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials


async def get_current_username(
    authorization: str | None = Header(default=None),
    credentials: CredentialService = Depends(get_credentials),
) -> str:
    """Authorization 헤더의 Bearer 토큰을 검증하여 요청자 username을 반환합니다."""
    if authorization is None:
        raise AuthenticationError("Missing authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Invalid authorization header format")

    return credentials.verify_token(token)


def authorize_update(author: str, username: str, requested_by: str, body_changed: bool) -> None:
    """
    글/댓글 PATCH 권한 검사.
    body의 username이 토큰과 다르면 403, 본문 수정은 작성자만 가능(투표는 누구나).
    """
    if requested_by != username:
        raise AuthorizationError()
    if body_changed and author != username:
        raise AuthorizationError()


def authorize_delete(author: str, username: str) -> None:
    """삭제는 작성자만 가능. 불일치 시 401"""
    if author != username:
        raise AuthenticationError()
