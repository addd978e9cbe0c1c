"""
Page specification parsing and pagination response headers.

Query parameters follow the usual ``?page=0&size=20&sort=id,desc`` form:
``page`` is 0-based and ``sort`` may be repeated.
"""
import math
from dataclasses import dataclass, field
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar

from fastapi import HTTPException, Query
from starlette.datastructures import URL

from myskool.config import settings

T = TypeVar("T")

SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = settings.DEFAULT_PAGE_SIZE
    # (property, direction) pairs, in priority order
    sort: Tuple[Tuple[str, str], ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    content: List[T]
    number: int
    size: int
    total_elements: int
    sort: Tuple[Tuple[str, str], ...] = field(default=())

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return math.ceil(self.total_elements / self.size)


def parse_sort(values: list[str], sortable: Optional[Iterable[str]] = None) -> Tuple[Tuple[str, str], ...]:
    """
    "title" -> (("title", "asc"),)
    "startDate,desc" -> (("startDate", "desc"),)

    When ``sortable`` is given, any other property is a 400.
    """
    allowed = set(sortable) if sortable is not None else None
    orders = []
    for raw in values:
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        if not parts:
            continue
        prop = parts[0]
        if allowed is not None and prop not in allowed:
            raise HTTPException(status_code=400, detail=f"Invalid sort property '{prop}'")
        direction = parts[1].lower() if len(parts) > 1 else "asc"
        if direction not in SORT_DIRECTIONS:
            raise HTTPException(status_code=400, detail=f"Invalid sort direction '{parts[1]}'")
        orders.append((prop, direction))
    return tuple(orders)


class Pageable:
    """
    Dependency that reads page/size/sort from the query string.

        program_pageable = Pageable(["id", "title"])
        def endpoint(page_request: PageRequest = Depends(program_pageable)): ...
    """

    def __init__(self, sortable: Optional[Iterable[str]] = None):
        self.sortable = frozenset(sortable) if sortable is not None else None

    def __call__(
        self,
        page: int = Query(0, ge=0),
        size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        sort: list[str] = Query(default=[]),
    ) -> PageRequest:
        return PageRequest(page=page, size=size, sort=parse_sort(sort, self.sortable))


def _link(url: URL, page: int, size: int, rel: str) -> str:
    target = url.include_query_params(page=page, size=size)
    return f'<{target}>; rel="{rel}"'


def generate_pagination_headers(url: URL, page: Page) -> dict[str, str]:
    """X-Total-Count plus a Link header with next/prev/last/first."""
    number, size = page.number, page.size
    links = []
    if number < page.total_pages - 1:
        links.append(_link(url, number + 1, size, "next"))
    if number > 0:
        links.append(_link(url, number - 1, size, "prev"))
    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(_link(url, last_page, size, "last"))
    links.append(_link(url, 0, size, "first"))
    return {
        "X-Total-Count": str(page.total_elements),
        "Link": ",".join(links),
    }
