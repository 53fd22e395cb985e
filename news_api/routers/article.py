import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Query
from pydantic import BaseModel, Field
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.dependencies.auth import (
    authorize_delete,
    authorize_update,
    get_current_username,
)
from news_api.dependencies.exists import ensure_exists, ensure_reference
from news_api.dependencies.mysql import get_session
from news_api.exception_handler import AuthorizationError, NotFoundError
from news_api.listing import ListingParams
from news_api.models.article import Article
from news_api.models.comment import Comment
from news_api.models.topic import Topic
from news_api.models.user import User
from news_api.routers.comment import COMMENT_SORTABLE, list_comments
from news_api.schemas import (
    ArticleDetailEnvelope,
    ArticleDetailResponse,
    ArticleEnvelope,
    ArticleList,
    ArticleResponse,
    ArticleSummary,
    CommentEnvelope,
    CommentList,
    CommentResponse,
)
from news_api.validation import (
    ARTICLE_CREATE,
    ARTICLE_UPDATE,
    COMMENT_CREATE,
    MAX_INT,
    MIN_INT,
    validate_body,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])


class WriteArticleRequest(BaseModel):
    author: str
    title: str
    body: str
    topic: str


class EditArticleRequest(BaseModel):
    username: str
    inc_votes: int | None = Field(default=None, ge=MIN_INT, le=MAX_INT)
    body: str | None = None


class WriteCommentRequest(BaseModel):
    username: str
    body: str


def _comment_count():
    return (
        select(func.count(Comment.comment_id))
        .where(Comment.article_id == Article.article_id)
        .correlate(Article)
        .scalar_subquery()
        .label("comment_count")
    )


def _article_sortable(comment_count) -> dict:
    return {
        "article_id": Article.article_id,
        "title": Article.title,
        "topic": Article.topic,
        "author": Article.author,
        "votes": Article.votes,
        "created_at": Article.created_at,
        "comment_count": comment_count,
    }


@router.get("", response_model=ArticleList)
async def get_articles(
    sort_by: str | None = Query(default=None),
    order: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    p: str | None = Query(default=None),
    topic: str | None = Query(default=None),
    search: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> ArticleList:
    comment_count = _comment_count()
    sortable = _article_sortable(comment_count)
    params = ListingParams.parse(sortable, sort_by=sort_by, order=order, limit=limit, p=p)

    filters = []
    if topic is not None:
        # 존재하지 않는 topic은 404, 글이 없는 topic은 빈 목록
        await ensure_exists(session, Topic.slug, topic)
        filters.append(Article.topic == topic)
    if search is not None:
        filters.append(Article.title.icontains(search, autoescape=True))

    total_count = await session.scalar(
        select(func.count()).select_from(Article).where(*filters)
    )
    if search is not None and total_count == 0:
        raise NotFoundError()

    stmt = params.apply(
        select(Article, comment_count).where(*filters), sortable, Article.article_id
    )
    rows = (await session.execute(stmt)).all()

    return ArticleList(
        articles=[
            ArticleSummary(
                article_id=article.article_id,
                author=article.author,
                title=article.title,
                topic=article.topic,
                created_at=article.created_at,
                votes=article.votes,
                comment_count=count,
                total_count=total_count,
            )
            for article, count in rows
        ]
    )


@router.post("", response_model=ArticleDetailEnvelope, status_code=201)
async def write_article(
    payload: dict[str, Any] = Body(...),
    username: str = Depends(get_current_username),
    session: AsyncSession = Depends(get_session),
) -> ArticleDetailEnvelope:
    body = WriteArticleRequest.model_validate(validate_body(ARTICLE_CREATE, payload))
    if body.author != username:
        raise AuthorizationError()

    await ensure_reference(session, User.username, body.author, AuthorizationError())
    await ensure_reference(session, Topic.slug, body.topic)

    article = Article(
        author=body.author,
        title=body.title,
        body=body.body,
        topic=body.topic,
    )
    session.add(article)
    await session.commit()
    await session.refresh(article)
    logger.info("article %s created by %s", article.article_id, username)

    return ArticleDetailEnvelope(
        article=ArticleDetailResponse(
            **ArticleResponse.model_validate(article).model_dump(), comment_count=0
        )
    )


@router.get("/{article_id}", response_model=ArticleDetailEnvelope)
async def get_article(
    article_id: int = Path(ge=MIN_INT, le=MAX_INT),
    session: AsyncSession = Depends(get_session),
) -> ArticleDetailEnvelope:
    row = (
        await session.execute(
            select(Article, _comment_count()).where(Article.article_id == article_id)
        )
    ).first()
    if row is None:
        raise NotFoundError()

    article, comment_count = row
    return ArticleDetailEnvelope(
        article=ArticleDetailResponse(
            **ArticleResponse.model_validate(article).model_dump(),
            comment_count=comment_count,
        )
    )


@router.patch("/{article_id}", response_model=ArticleEnvelope)
async def edit_article(
    article_id: int = Path(ge=MIN_INT, le=MAX_INT),
    payload: dict[str, Any] = Body(...),
    username: str = Depends(get_current_username),
    session: AsyncSession = Depends(get_session),
) -> ArticleEnvelope:
    body = EditArticleRequest.model_validate(validate_body(ARTICLE_UPDATE, payload))

    article = await session.get(Article, article_id)
    if article is None:
        raise NotFoundError()
    authorize_update(article.author, username, body.username, body.body is not None)

    if body.inc_votes is None and body.body is None:
        return ArticleEnvelope(article=ArticleResponse.model_validate(article))

    if body.inc_votes is not None:
        article.add_votes(body.inc_votes)
    if body.body is not None:
        article.body = body.body

    await session.commit()
    await session.refresh(article)
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))


@router.delete("/{article_id}", status_code=204)
async def delete_article(
    article_id: int = Path(ge=MIN_INT, le=MAX_INT),
    username: str = Depends(get_current_username),
    session: AsyncSession = Depends(get_session),
) -> None:
    author = await session.scalar(
        select(Article.author).where(Article.article_id == article_id)
    )
    if author is None:
        raise NotFoundError()
    authorize_delete(author, username)

    # 댓글은 FK ON DELETE CASCADE로 함께 삭제
    await session.execute(delete(Article).where(Article.article_id == article_id))
    await session.commit()
    logger.info("article %s deleted by %s", article_id, username)


@router.get("/{article_id}/comments", response_model=CommentList)
async def get_article_comments(
    article_id: int = Path(ge=MIN_INT, le=MAX_INT),
    sort_by: str | None = Query(default=None),
    order: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    p: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> CommentList:
    params = ListingParams.parse(
        COMMENT_SORTABLE, sort_by=sort_by, order=order, limit=limit, p=p
    )
    await ensure_exists(session, Article.article_id, article_id)

    return await list_comments(session, params, Comment.article_id == article_id)


@router.post("/{article_id}/comments", response_model=CommentEnvelope, status_code=201)
async def write_comment(
    article_id: int = Path(ge=MIN_INT, le=MAX_INT),
    payload: dict[str, Any] = Body(...),
    username: str = Depends(get_current_username),
    session: AsyncSession = Depends(get_session),
) -> CommentEnvelope:
    body = WriteCommentRequest.model_validate(validate_body(COMMENT_CREATE, payload))
    if body.username != username:
        raise AuthorizationError()

    await ensure_exists(session, Article.article_id, article_id)

    comment = Comment(author=body.username, body=body.body, article_id=article_id)
    session.add(comment)
    await session.commit()
    await session.refresh(comment)
    return CommentEnvelope(comment=CommentResponse.model_validate(comment))
