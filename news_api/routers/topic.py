import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.dependencies.exists import exists
from news_api.dependencies.mysql import get_session
from news_api.exception_handler import ConflictError
from news_api.models.topic import Topic
from news_api.schemas import TopicList, TopicResponse
from news_api.validation import TOPIC_CREATE, validate_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/topics", tags=["Topics"])


class WriteTopicRequest(BaseModel):
    slug: str
    description: str


@router.get("", response_model=TopicList)
async def get_topics(session: AsyncSession = Depends(get_session)) -> TopicList:
    result = await session.scalars(select(Topic).order_by(Topic.slug))
    return TopicList(topics=[TopicResponse.model_validate(t) for t in result.all()])


@router.post("", response_model=TopicResponse, status_code=201)
async def write_topic(
    payload: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_session),
) -> TopicResponse:
    body = WriteTopicRequest.model_validate(validate_body(TOPIC_CREATE, payload))

    if await exists(session, Topic.slug, body.slug):
        raise ConflictError("Topic already exists")

    topic = Topic(slug=body.slug, description=body.description)
    session.add(topic)
    await session.commit()
    logger.info("topic created: %s", topic.slug)
    return TopicResponse.model_validate(topic)
