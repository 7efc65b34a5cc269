import math
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar('T')


class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    total_pages: int


def paginate(items: Sequence[T], page: int, page_size: int | None) -> Page[T]:
    """Slice ``items`` to a 1-indexed page.

    A ``page_size`` of ``None`` is unbounded and returns everything as a single
    page. Pages past the end come back empty.
    """
    if page < 1:
        raise ValueError('page must be 1 or greater.')

    total = len(items)

    if page_size is None:
        total_pages = 1 if total else 0
        selected = list(items) if page == 1 else []
        return Page(items=selected, total=total, total_pages=total_pages)

    if page_size < 1:
        raise ValueError('page_size must be 1 or greater.')

    total_pages = math.ceil(total / page_size)
    start = (page - 1) * page_size
    return Page(items=list(items[start:start + page_size]), total=total, total_pages=total_pages)
