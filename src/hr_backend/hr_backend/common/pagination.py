from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, Sequence, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .validators import require_int

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @classmethod
    def parse(cls, page: Any = None, per_page: Any = None) -> "PageRequest":
        """Build from raw query-string values; missing values fall back to defaults."""
        page_n = require_int(page, "page", min_value=1) if page not in (None, "") else 1
        per_page_n = (
            require_int(per_page, "per_page", min_value=1, max_value=MAX_PAGE_SIZE)
            if per_page not in (None, "")
            else DEFAULT_PAGE_SIZE
        )
        return cls(page=page_n, per_page=per_page_n)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    request: PageRequest = field(default_factory=PageRequest)

    @property
    def last_page(self) -> int:
        return math.ceil(self.total / self.request.per_page) if self.total else 0

    def meta(self, *, base_url: Optional[str] = None) -> dict:
        page = self.request.page
        out = {
            "current_page": page,
            "per_page": self.request.per_page,
            "total": self.total,
            "last_page": self.last_page,
        }
        if base_url is not None:
            out["from"] = self.request.offset + 1
            out["to"] = min(self.request.offset + self.request.per_page, self.total)
            out["links"] = pagination_links(page, self.last_page, base_url)
        return out


def pagination_links(current_page: int, total_pages: int, base_url: str) -> list[dict]:
    links = [
        {
            "url": f"{base_url}?page={current_page - 1}" if current_page > 1 else None,
            "label": "&laquo; Previous",
            "active": False,
        }
    ]
    for i in range(1, total_pages + 1):
        links.append({"url": f"{base_url}?page={i}", "label": str(i), "active": i == current_page})
    links.append(
        {
            "url": f"{base_url}?page={current_page + 1}" if current_page < total_pages else None,
            "label": "Next &raquo;",
            "active": False,
        }
    )
    return links
