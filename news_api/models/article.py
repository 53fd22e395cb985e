from sqlalchemy import Column, ForeignKey, Integer, String, Text

from news_api.dependencies.mysql import Base
from news_api.models.mixin import VoteMixin


class Article(Base, VoteMixin):
    __tablename__ = "articles"

    article_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False, comment="글 제목")
    topic = Column(
        String(100), ForeignKey("topics.slug"), nullable=False, index=True, comment="주제 slug"
    )
    author = Column(
        String(100), ForeignKey("users.username"), nullable=False, index=True, comment="작성자"
    )
    body = Column(Text, nullable=False, comment="글 내용")
