from dataclasses import dataclass
from typing import Any

from news_api.exception_handler import (
    INVALID_FIELD,
    MISSING_FIELDS,
    NULL_FIELDS,
    ValidationError,
)


# MySQL INT 범위. 벗어나는 정수는 쿼리에 바인딩하지 않음
MIN_INT = -(2**31)
MAX_INT = 2**31 - 1


@dataclass(frozen=True)
class FieldSchema:
    """
    엔드포인트별 request body 허용 필드 정의.

    - allowed: 허용되는 필드 전체
    - required: 반드시 있어야 하는 필드
    - null_as_missing: null 값도 누락으로 취급 (회원가입)
    """

    allowed: frozenset[str]
    required: frozenset[str] = frozenset()
    null_as_missing: bool = False


def _schema(*optional: str, required: tuple[str, ...] = (), null_as_missing=False):
    return FieldSchema(
        allowed=frozenset(optional) | frozenset(required),
        required=frozenset(required),
        null_as_missing=null_as_missing,
    )


TOPIC_CREATE = _schema(required=("slug", "description"))
ARTICLE_CREATE = _schema(required=("author", "title", "body", "topic"))
ARTICLE_UPDATE = _schema("inc_votes", "body", required=("username",))
COMMENT_CREATE = _schema(required=("username", "body"))
COMMENT_UPDATE = _schema("inc_votes", "body", required=("username",))
USER_CREATE = _schema(
    required=("username", "password", "name", "avatar_url"), null_as_missing=True
)
USER_UPDATE = _schema("name", "avatar_url", required=("username",))
LOGIN = _schema(required=("username", "password"))


def validate_body(schema: FieldSchema, body: dict[str, Any]) -> dict[str, Any]:
    """
    쿼리 실행 전에 body를 검사하고, 통과하면 body를 그대로 반환합니다.
    참조 무결성(존재하지 않는 topic 등)은 검사하지 않습니다.
    """
    if any(key not in schema.allowed for key in body):
        raise ValidationError(INVALID_FIELD)

    if schema.null_as_missing:
        if any(body.get(field) is None for field in schema.required):
            raise ValidationError(MISSING_FIELDS)
        return body

    if any(value is None for value in body.values()):
        raise ValidationError(NULL_FIELDS)
    if not schema.required.issubset(body):
        raise ValidationError(MISSING_FIELDS)
    return body
