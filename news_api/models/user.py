from sqlalchemy import Column, String

from news_api.dependencies.mysql import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(100), primary_key=True, comment="사용자명")
    name = Column(String(100), nullable=False, comment="이름")
    avatar_url = Column(String(500), nullable=False, comment="프로필 이미지 URL")
    # bcrypt 해시만 저장. 어떤 API 응답에도 포함되지 않음
    password = Column(String(100), nullable=False, comment="암호화된 비밀번호")
