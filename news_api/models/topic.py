from sqlalchemy import Column, String, Text

from news_api.dependencies.mysql import Base


class Topic(Base):
    __tablename__ = "topics"

    slug = Column(String(100), primary_key=True, comment="주제 식별자(slug)")
    description = Column(Text, nullable=False, comment="주제 설명")
