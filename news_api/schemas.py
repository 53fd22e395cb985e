from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer


def _to_utc_iso(value: datetime) -> str:
    """DB에는 naive UTC로 저장. `2020-07-09T21:11:00.000Z` 형식으로 직렬화"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


Timestamp = Annotated[datetime, PlainSerializer(_to_utc_iso, return_type=str, when_used="json")]


class TopicResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    description: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    name: str
    avatar_url: str


class UserTokenResponse(BaseModel):
    username: str
    token: str


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    article_id: int
    author: str
    title: str
    body: str
    topic: str
    created_at: Timestamp
    votes: int


class ArticleDetailResponse(ArticleResponse):
    comment_count: int


class ArticleSummary(BaseModel):
    """목록 조회용. body 없이 comment_count, total_count 포함"""

    article_id: int
    author: str
    title: str
    topic: str
    created_at: Timestamp
    votes: int
    comment_count: int
    total_count: int


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment_id: int
    author: str
    article_id: int
    votes: int
    created_at: Timestamp
    body: str


class CommentSummary(CommentResponse):
    """목록 조회용. 페이지와 무관한 전체 개수 total_count 포함"""

    total_count: int


class TopicList(BaseModel):
    topics: list[TopicResponse]


class ArticleList(BaseModel):
    articles: list[ArticleSummary]


class ArticleEnvelope(BaseModel):
    article: ArticleResponse


class ArticleDetailEnvelope(BaseModel):
    article: ArticleDetailResponse


class CommentList(BaseModel):
    comments: list[CommentSummary]


class CommentEnvelope(BaseModel):
    comment: CommentResponse


class UserList(BaseModel):
    users: list[UserResponse]


class UserEnvelope(BaseModel):
    user: UserResponse


class UserTokenEnvelope(BaseModel):
    user: UserTokenResponse
