from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer


def utcnow() -> datetime:
    """DB 서버 timezone과 무관하게 naive UTC로 저장"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class VoteMixin:
    """
    게시글/댓글 공통 컬럼(투표 수, 작성 시각)을 정의
    """

    votes = Column(Integer, nullable=False, default=0, server_default="0", comment="투표 수")
    created_at = Column(
        DateTime, nullable=False, default=utcnow, index=True, comment="작성 시각(UTC)"
    )

    def add_votes(self, inc_votes: int) -> None:
        # 현재 저장된 값 기준으로 DB에서 증감 (commit 후 refresh 필요). 하한 없음
        self.votes = type(self).votes + inc_votes
