import math
from typing import Tuple


def page_bounds(page: int, limit: int) -> Tuple[int, int]:
    """(skip, limit) for a 1-based page."""
    page = max(page, 1)
    limit = max(limit, 1)
    return (page - 1) * limit, limit


def pagination_meta(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if limit else 0,
    }
