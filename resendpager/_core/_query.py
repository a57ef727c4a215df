"""Query-string builders for list endpoints."""

from __future__ import annotations

from typing import Dict, Optional, Union

from ._models import PaginationDirection

Query = Dict[str, Union[str, int]]


def build_query(
    limit: int,
    direction: Optional[PaginationDirection] = None,
    cursor: Optional[str] = None,
) -> Query:
    """Return the query for one page request.

    At most one cursor key is present: the one named by ``direction``, and
    only when ``cursor`` is non-empty.
    """
    query: Query = {"limit": limit}
    if direction is not None and cursor:
        query[direction.value] = cursor
    return query
