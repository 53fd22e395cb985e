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
from news_api.dependencies.mysql import get_session
from news_api.exception_handler import NotFoundError
from news_api.listing import ListingParams
from news_api.models.comment import Comment
from news_api.schemas import (
    CommentEnvelope,
    CommentList,
    CommentResponse,
    CommentSummary,
)
from news_api.validation import COMMENT_UPDATE, MAX_INT, MIN_INT, validate_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["Comments"])

COMMENT_SORTABLE = {
    "comment_id": Comment.comment_id,
    "article_id": Comment.article_id,
    "author": Comment.author,
    "votes": Comment.votes,
    "created_at": Comment.created_at,
}


class EditCommentRequest(BaseModel):
    username: str
    inc_votes: int | None = Field(default=None, ge=MIN_INT, le=MAX_INT)
    body: str | None = None


async def _get_comment(session: AsyncSession, comment_id: int) -> Comment:
    comment = await session.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError()
    return comment


async def list_comments(session: AsyncSession, params: ListingParams, *filters) -> CommentList:
    """전체 댓글 목록과 글별 댓글 목록이 함께 사용. total_count는 페이지와 무관한 전체 개수"""
    total_count = await session.scalar(
        select(func.count()).select_from(Comment).where(*filters)
    )
    result = await session.scalars(
        params.apply(select(Comment).where(*filters), COMMENT_SORTABLE, Comment.comment_id)
    )
    return CommentList(
        comments=[
            CommentSummary(
                **CommentResponse.model_validate(c).model_dump(), total_count=total_count
            )
            for c in result.all()
        ]
    )


@router.get("", response_model=CommentList)
async def get_comments(
    sort_by: str | None = Query(default=None),
    order: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    p: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> CommentList:
    params = ListingParams.parse(
        COMMENT_SORTABLE, sort_by=sort_by, order=order, limit=limit, p=p
    )
    return await list_comments(session, params)


@router.get("/{comment_id}", response_model=CommentEnvelope)
async def get_comment(
    comment_id: int = Path(ge=MIN_INT, le=MAX_INT),
    session: AsyncSession = Depends(get_session),
) -> CommentEnvelope:
    comment = await _get_comment(session, comment_id)
    return CommentEnvelope(comment=CommentResponse.model_validate(comment))


@router.patch("/{comment_id}", response_model=CommentEnvelope)
async def edit_comment(
    comment_id: int = Path(ge=MIN_INT, le=MAX_INT),
    payload: dict[str, Any] = Body(...),
    username: str = Depends(get_current_username),
    session: AsyncSession = Depends(get_session),
) -> CommentEnvelope:
    body = EditCommentRequest.model_validate(validate_body(COMMENT_UPDATE, payload))

    comment = await _get_comment(session, comment_id)
    authorize_update(comment.author, username, body.username, body.body is not None)

    if body.inc_votes is None and body.body is None:
        return CommentEnvelope(comment=CommentResponse.model_validate(comment))

    if body.inc_votes is not None:
        comment.add_votes(body.inc_votes)
    if body.body is not None:
        comment.body = body.body

    await session.commit()
    await session.refresh(comment)
    return CommentEnvelope(comment=CommentResponse.model_validate(comment))


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: int = Path(ge=MIN_INT, le=MAX_INT),
    username: str = Depends(get_current_username),
    session: AsyncSession = Depends(get_session),
) -> None:
    comment = await _get_comment(session, comment_id)
    authorize_delete(comment.author, username)

    await session.execute(delete(Comment).where(Comment.comment_id == comment_id))
    await session.commit()
    logger.info("comment %s deleted by %s", comment_id, username)
