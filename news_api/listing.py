from dataclasses import dataclass
from typing import Mapping

from sqlalchemy import Select
from sqlalchemy.sql.elements import ColumnElement

from news_api.exception_handler import ValidationError
from news_api.validation import MAX_INT

DEFAULT_SORT_BY = "created_at"
DEFAULT_ORDER = "desc"
DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1


def _positive_int(value: str | None, default: int) -> int:
    """양의 정수(MAX_INT 이하)로 해석되지 않는 값은 에러 없이 기본값으로 대체"""
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if 0 < parsed <= MAX_INT else default


@dataclass(frozen=True)
class ListingParams:
    sort_by: str
    descending: bool
    limit: int
    page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def parse(
        cls,
        sortable: Mapping[str, ColumnElement],
        sort_by: str | None = None,
        order: str | None = None,
        limit: str | None = None,
        p: str | None = None,
    ) -> "ListingParams":
        sort_by = DEFAULT_SORT_BY if sort_by is None else sort_by
        if sort_by not in sortable:
            raise ValidationError("Invalid sort field")

        order = (DEFAULT_ORDER if order is None else order).lower()
        if order not in ("asc", "desc"):
            raise ValidationError("Invalid order field")

        return cls(
            sort_by=sort_by,
            descending=order == "desc",
            limit=_positive_int(limit, DEFAULT_LIMIT),
            page=_positive_int(p, DEFAULT_PAGE),
        )

    def apply(
        self,
        stmt: Select,
        sortable: Mapping[str, ColumnElement],
        tiebreaker: ColumnElement,
    ) -> Select:
        """정렬 + LIMIT/OFFSET 적용. 동일 값은 primary key로 같은 방향 정렬"""
        columns = [sortable[self.sort_by], tiebreaker]
        ordering = [c.desc() if self.descending else c.asc() for c in columns]
        return stmt.order_by(*ordering).limit(self.limit).offset(self.offset)
