from typing import Any, List, Tuple

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], int]:
    """Return one page of rows from ``query`` together with the unpaged total."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, total
