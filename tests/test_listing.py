import pytest
from sqlalchemy import select

from news_api.exception_handler import ValidationError
from news_api.listing import ListingParams
from news_api.routers.comment import COMMENT_SORTABLE
from news_api.models.comment import Comment


def test_defaults():
    params = ListingParams.parse(COMMENT_SORTABLE)
    assert params == ListingParams(sort_by="created_at", descending=True, limit=10, page=1)
    assert params.offset == 0


def test_order_is_case_insensitive():
    assert ListingParams.parse(COMMENT_SORTABLE, order="AsC").descending is False


@pytest.mark.parametrize(
    "value", ["grapefruit", "0", "-1", "1.5", "", "2147483648", "99999999999999999999"]
)
def test_out_of_range_falls_back(value):
    params = ListingParams.parse(COMMENT_SORTABLE, limit=value, p=value)
    assert params.limit == 10
    assert params.page == 1


def test_offset():
    params = ListingParams.parse(COMMENT_SORTABLE, limit="5", p="3")
    assert params.offset == 10


def test_invalid_sort_field():
    with pytest.raises(ValidationError) as exc_info:
        ListingParams.parse(COMMENT_SORTABLE, sort_by="body")
    assert exc_info.value.detail == "Invalid sort field"


def test_invalid_order():
    with pytest.raises(ValidationError) as exc_info:
        ListingParams.parse(COMMENT_SORTABLE, order="sideways")
    assert exc_info.value.detail == "Invalid order field"


def test_apply():
    params = ListingParams.parse(COMMENT_SORTABLE, sort_by="votes", order="asc", limit="2", p="2")
    stmt = params.apply(select(Comment), COMMENT_SORTABLE, Comment.comment_id)
    sql = str(stmt.compile(compile_kwargs={"literal_binds": True}))
    assert "ORDER BY comments.votes ASC, comments.comment_id ASC" in sql
    assert "LIMIT 2" in sql
    assert "OFFSET 2" in sql


def test_max_int_is_accepted():
    params = ListingParams.parse(COMMENT_SORTABLE, limit="2147483647")
    assert params.limit == 2147483647
