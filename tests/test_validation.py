import pytest

from news_api.exception_handler import ValidationError
from news_api.validation import (
    ARTICLE_CREATE,
    ARTICLE_UPDATE,
    USER_CREATE,
    validate_body,
)


def test_valid_body_is_returned():
    body = {"author": "a", "title": "t", "body": "b", "topic": "cats"}
    assert validate_body(ARTICLE_CREATE, body) is body


def test_optional_fields_may_be_absent():
    assert validate_body(ARTICLE_UPDATE, {"username": "a"}) == {"username": "a"}


@pytest.mark.parametrize(
    "schema, body, message",
    [
        (ARTICLE_UPDATE, {"username": "a", "votes": 1}, "Invalid field body"),
        # 알 수 없는 키가 null 값보다 먼저 검사됨
        (ARTICLE_UPDATE, {"username": None, "votes": 1}, "Invalid field body"),
        (ARTICLE_UPDATE, {"username": "a", "body": None}, "Fields cannot be null values"),
        (ARTICLE_UPDATE, {"inc_votes": 1}, "Missing fields"),
        (ARTICLE_CREATE, {"author": "a", "title": "t"}, "Missing fields"),
        (USER_CREATE, {"username": None, "password": "p", "name": "n", "avatar_url": "u"}, "Missing fields"),
        (USER_CREATE, {"username": "u", "password": "p"}, "Missing fields"),
    ],
)
def test_invalid_body(schema, body, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_body(schema, body)
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == message
