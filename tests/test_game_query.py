"""Unit tests for the game listing query builder (no database needed)."""

import pytest

from src.services.game_query import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MAX_PAGE,
    FilterRequest,
    GameQueryBuilder,
    PageInfo,
    QueryBuildError,
    SortOrder,
    normalize_limit,
    normalize_page,
    parse_bound,
)


def compiled_sql(stmt) -> str:
    return str(stmt.compile())


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 1), ("", 1), ("0", 1), ("-3", 1), ("abc", 1), ("1", 1), ("7", 7), ("3abc", 3), (" 2", 2),
        ("99999999999999999999", MAX_PAGE),
    ],
)
def test_normalize_page(raw, expected):
    assert normalize_page(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 20),
        ("", 20),
        ("0", 20),
        ("abc", 20),
        ("-5", 1),
        ("1", 1),
        ("50", 50),
        ("100", 100),
        ("101", 100),
        ("99999999999", 100),
    ],
)
def test_normalize_limit(raw, expected):
    assert normalize_limit(raw) == expected


@pytest.mark.parametrize(
    "raw", [None, "", "-", "0x", "abc", "1e999", "nan", "-inf", "3 dollars", "12,5"]
)
def test_parse_bound_absent(raw):
    assert parse_bound(raw) is None


@pytest.mark.parametrize("raw,expected", [("0", 0.0), ("9.99", 9.99), (" 15 ", 15.0), ("-2", -2.0)])
def test_parse_bound(raw, expected):
    assert parse_bound(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [("DESC", SortOrder.DESC), ("desc", SortOrder.DESC), ("DeSc", SortOrder.DESC)]
    + [(value, SortOrder.ASC) for value in (None, "", "ASC", "asc", "descending", "down")],
)
def test_sort_order_parse(raw, expected):
    assert SortOrder.parse(raw) is expected


def test_from_query_defaults():
    filters = FilterRequest.from_query()
    assert filters == FilterRequest()
    assert filters.sort_by == "name"
    assert filters.order is SortOrder.ASC
    assert filters.page == 1
    assert filters.limit == DEFAULT_LIMIT
    assert filters.offset == 0


def test_from_query_offset():
    filters = FilterRequest.from_query(page="3", limit="25")
    assert filters.offset == 50


@pytest.mark.parametrize(
    "sort_by", ["price_usd", "hours_to_beat", "cost_per_hour", "created_at", "name"]
)
def test_allowed_sort_columns(sort_by):
    filters = FilterRequest.from_query(sort_by=sort_by, order="DESC")
    sql = compiled_sql(GameQueryBuilder(filters).fetch_statement())
    assert f"ORDER BY steam_games.{sort_by} DESC" in sql


@pytest.mark.parametrize(
    "sort_by", ["password_hash", "id; DROP TABLE users", "NAME", "price", "", None]
)
def test_unknown_sort_column_falls_back_to_name(sort_by):
    filters = FilterRequest.from_query(sort_by=sort_by)
    assert filters.sort_by == "name"
    sql = compiled_sql(GameQueryBuilder(filters).fetch_statement())
    assert "ORDER BY steam_games.name ASC, steam_games.id ASC" in sql
    assert "DROP" not in sql


def test_no_filters_means_no_where_clause():
    builder = GameQueryBuilder(FilterRequest())
    assert builder.params == {}
    assert "WHERE" not in compiled_sql(builder.count_statement())


def test_predicates_follow_fixed_order():
    filters = FilterRequest.from_query(
        max_hours="40", min_hours="2", max_price="30", min_price="5", search="portal"
    )
    builder = GameQueryBuilder(filters)

    assert list(builder.params) == ["search", "min_price", "max_price", "min_hours", "max_hours"]
    sql = compiled_sql(builder.count_statement())
    positions = [sql.index(f":{name}") for name in builder.params]
    assert positions == sorted(positions)


def test_filter_values_are_bound_not_inlined():
    filters = FilterRequest.from_query(search="portal' OR 1=1 --", min_price="5")
    builder = GameQueryBuilder(filters)

    for stmt in (builder.count_statement(), builder.fetch_statement()):
        sql = compiled_sql(stmt)
        assert "portal" not in sql
        assert ":search" in sql
        assert ":min_price" in sql

    assert builder.params["search"] == "%portal' OR 1=1 --%"
    assert builder.params["min_price"] == 5.0


def test_search_escapes_like_wildcards():
    builder = GameQueryBuilder(FilterRequest.from_query(search="100%_a/b"))
    assert builder.params["search"] == "%100/%/_a//b%"


def test_count_and_fetch_share_bound_values():
    filters = FilterRequest.from_query(
        search="portal", min_price="1", max_hours="9", page="2", limit="5"
    )
    builder = GameQueryBuilder(filters)

    count_params = builder.count_statement().compile().params
    fetch_params = builder.fetch_statement().compile().params

    assert count_params == builder.params
    assert fetch_params == {**count_params, "limit": 5, "offset": 5}


def test_statements_are_deterministic():
    def build():
        filters = FilterRequest.from_query(search="portal", max_price="20", sort_by="price_usd")
        builder = GameQueryBuilder(filters)
        return compiled_sql(builder.count_statement()), compiled_sql(builder.fetch_statement())

    assert build() == build()


def test_parameter_mismatch_is_fatal():
    """Test a statement whose bound values disagree with the collected ones is refused."""
    builder = GameQueryBuilder(FilterRequest.from_query(search="portal"))
    builder.params["min_price"] = 10.0

    with pytest.raises(QueryBuildError):
        builder.count_statement()
    with pytest.raises(QueryBuildError):
        builder.fetch_statement()


def test_parameter_value_mismatch_is_fatal():
    builder = GameQueryBuilder(FilterRequest.from_query(search="portal"))
    builder.params["search"] = "%other%"

    with pytest.raises(QueryBuildError):
        builder.count_statement()


@pytest.mark.parametrize(
    "total,page,limit,total_pages,has_next,has_prev",
    [
        (12, 1, 5, 3, True, False),
        (12, 3, 5, 3, False, True),
        (10, 2, 5, 2, False, True),
        (0, 1, 20, 0, False, False),
        (1, 1, 1, 1, False, False),
        (5, 9, 5, 1, False, True),
    ],
)
def test_page_info(total, page, limit, total_pages, has_next, has_prev):
    info = PageInfo.compute(total, page, limit)
    assert info.total_pages == total_pages
    assert info.total_games == total
    assert info.games_per_page == limit
    assert info.has_next_page is has_next
    assert info.has_prev_page is has_prev


@pytest.mark.parametrize("page", [None, "-1", "0", "1", "5", "x", "1e3"])
@pytest.mark.parametrize("limit", [None, "-1", "0", "1", "100", "101", "x", "2.5"])
def test_effective_paging_always_in_range(page, limit):
    filters = FilterRequest.from_query(page=page, limit=limit)
    assert filters.page >= 1
    assert 1 <= filters.limit <= MAX_LIMIT
    assert filters.offset >= 0
