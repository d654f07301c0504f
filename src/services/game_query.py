"""Query construction for the game catalog listing.

Turns the raw query-string values of ``GET /api/games`` into a pair of
statements over ``steam_games``: a count statement and a page fetch statement.
Both carry the same filter predicates and the same bound values; the fetch
statement only adds ordering and LIMIT/OFFSET.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import Select, bindparam, func, select
from sqlalchemy.sql.elements import ColumnElement

from src.models.game import Game

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# Keeps (page - 1) * MAX_LIMIT inside a signed 64-bit OFFSET
MAX_PAGE = (2**63 - 1) // MAX_LIMIT

SORTABLE_COLUMNS = {
    "name": Game.name,
    "price_usd": Game.price_usd,
    "hours_to_beat": Game.hours_to_beat,
    "cost_per_hour": Game.cost_per_hour,
    "created_at": Game.created_at,
}
DEFAULT_SORT = "name"

GAME_COLUMNS = (
    Game.id,
    Game.name,
    Game.steam_appid,
    Game.price_usd,
    Game.hours_to_beat,
    Game.cost_per_hour,
    Game.created_at,
    Game.updated_at,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


class QueryBuildError(RuntimeError):
    """Raised when an assembled statement does not carry the expected bound values."""


class SortOrder(str, Enum):
    """Sort direction for the listing."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        """Anything other than a case-insensitive "desc" sorts ascending."""
        if value is not None and value.upper() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


def parse_int(value: str | int | None) -> int | None:
    """Parse the leading integer of a query-string value, or None if there is none."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_bound(value: str | float | None) -> float | None:
    """Parse a numeric filter bound; blanks and non-finite values count as absent."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def normalize_page(value: str | int | None) -> int:
    # 0 is treated like a missing value, then everything is clamped to [1, MAX_PAGE]
    page = parse_int(value) or DEFAULT_PAGE
    return min(MAX_PAGE, max(DEFAULT_PAGE, page))


def normalize_limit(value: str | int | None) -> int:
    limit = parse_int(value) or DEFAULT_LIMIT
    return min(MAX_LIMIT, max(1, limit))


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("/", "//").replace("%", "/%").replace("_", "/_")


@dataclass(frozen=True)
class FilterRequest:
    """Normalized filter/sort/page request for the game listing."""

    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_hours: float | None = None
    max_hours: float | None = None
    sort_by: str = DEFAULT_SORT
    order: SortOrder = SortOrder.ASC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_query(
        cls,
        search: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
        min_hours: str | None = None,
        max_hours: str | None = None,
        sort_by: str | None = None,
        order: str | None = None,
        page: str | None = None,
        limit: str | None = None,
    ) -> "FilterRequest":
        """Build a request from raw query-string values.

        Never raises: malformed values are dropped (filters), replaced
        (sort column and direction) or clamped (page and limit).
        """
        return cls(
            search=search or None,
            min_price=parse_bound(min_price),
            max_price=parse_bound(max_price),
            min_hours=parse_bound(min_hours),
            max_hours=parse_bound(max_hours),
            sort_by=sort_by if sort_by in SORTABLE_COLUMNS else DEFAULT_SORT,
            order=SortOrder.parse(order),
            page=normalize_page(page),
            limit=normalize_limit(limit),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageInfo:
    """Pagination arithmetic for one page of results."""

    current_page: int
    total_pages: int
    total_games: int
    games_per_page: int

    @classmethod
    def compute(cls, total: int, page: int, limit: int) -> "PageInfo":
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_games=total,
            games_per_page=limit,
        )

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1


class GameQueryBuilder:
    """Assemble the count and fetch statements for a ``FilterRequest``.

    Predicates are added in a fixed order (search, min price, max price,
    min hours, max hours) so identical requests yield identical SQL. Every
    filter value is a named bound parameter; the column used in ORDER BY
    only ever comes from ``SORTABLE_COLUMNS``.
    """

    def __init__(self, filters: FilterRequest):
        self.filters = filters
        self.params: dict[str, Any] = {}
        self.predicates: list[ColumnElement[bool]] = []
        self._build_predicates()

    def _add(self, name: str, value: Any, predicate: ColumnElement[bool]) -> None:
        self.params[name] = value
        self.predicates.append(predicate)

    def _build_predicates(self) -> None:
        f = self.filters
        if f.search:
            pattern = f"%{escape_like(f.search)}%"
            self._add(
                "search", pattern, Game.name.ilike(bindparam("search", pattern), escape="/")
            )
        if f.min_price is not None:
            self._add("min_price", f.min_price, Game.price_usd >= bindparam("min_price", f.min_price))
        if f.max_price is not None:
            self._add("max_price", f.max_price, Game.price_usd <= bindparam("max_price", f.max_price))
        if f.min_hours is not None:
            self._add(
                "min_hours", f.min_hours, Game.hours_to_beat >= bindparam("min_hours", f.min_hours)
            )
        if f.max_hours is not None:
            self._add(
                "max_hours", f.max_hours, Game.hours_to_beat <= bindparam("max_hours", f.max_hours)
            )

    @property
    def sort_column(self):
        return SORTABLE_COLUMNS[self.filters.sort_by]

    def count_statement(self) -> Select:
        """Statement returning the number of rows matching the filters."""
        stmt = select(func.count(Game.id).label("total")).where(*self.predicates)
        self._verify(stmt, self.params)
        return stmt

    def fetch_statement(self) -> Select:
        """Statement returning the requested page of matching rows."""
        column = self.sort_column
        ordering = column.desc() if self.filters.order is SortOrder.DESC else column.asc()
        stmt = (
            select(*GAME_COLUMNS)
            .where(*self.predicates)
            .order_by(ordering, Game.id.asc())
            .limit(bindparam("limit", self.filters.limit))
            .offset(bindparam("offset", self.filters.offset))
        )
        self._verify(
            stmt, {**self.params, "limit": self.filters.limit, "offset": self.filters.offset}
        )
        return stmt

    @staticmethod
    def _verify(stmt: Select, expected: dict[str, Any]) -> None:
        """Refuse to hand out a statement whose bound values differ from the collected ones."""
        compiled = stmt.compile()
        bound = dict(compiled.params)
        if bound != expected:
            raise QueryBuildError(
                f"Parameter mismatch: {len(bound)} bound values vs {len(expected)} expected "
                f"({sorted(bound)} != {sorted(expected)})"
            )
        logger.debug(f"Assembled query: {compiled} params={bound}")
