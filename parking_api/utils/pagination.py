# parking_api/utils/pagination.py
"""Offset pagination for list endpoints → {items, page, limit, totalPages, totalCount}."""

import math
from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int, transform=None) -> dict:
    total_count = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return {
        "items": [transform(r) for r in rows] if transform else rows,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total_count / limit) if limit else 0,
        "totalCount": total_count,
    }
