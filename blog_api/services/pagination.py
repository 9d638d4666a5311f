import math
from dataclasses import dataclass
from typing import Any, Optional

from blog_api.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
INVALID_PAGINATION = "Invalid pagination parameters"


@dataclass(frozen=True)
class Page:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_positive_int(value: Any, default: Optional[int], message: str) -> Optional[int]:
    """Parse a query value as an integer >= 1, falling back to ``default`` when absent."""
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return default
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise ValidationError(message)
    if parsed < 1:
        raise ValidationError(message)
    return parsed


def paginate(page: Any = None, limit: Any = None) -> Page:
    return Page(
        page=parse_positive_int(page, DEFAULT_PAGE, INVALID_PAGINATION),
        limit=parse_positive_int(limit, DEFAULT_LIMIT, INVALID_PAGINATION),
    )


def build_pagination(page: Page, total: int) -> dict:
    return {
        "page": page.page,
        "limit": page.limit,
        "totalPosts": total,
        "totalPages": math.ceil(total / page.limit) if total else 0,
    }
