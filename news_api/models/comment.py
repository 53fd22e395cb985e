from sqlalchemy import Column, ForeignKey, Integer, String, Text

from news_api.dependencies.mysql import Base
from news_api.models.mixin import VoteMixin


class Comment(Base, VoteMixin):
    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    body = Column(Text, nullable=False, comment="댓글 내용")
    # 글 삭제 시 DB의 ON DELETE CASCADE로 함께 삭제됨
    article_id = Column(
        Integer,
        ForeignKey("articles.article_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="글 ID",
    )
    author = Column(
        String(100), ForeignKey("users.username"), nullable=False, index=True, comment="작성자"
    )
