"""Simple data models shared across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

DEFAULT_PAGE_SIZE = 50


class PaginationDirection(Enum):
    """Direction of a cursor walk; the value is the query parameter name."""

    FORWARD = "after"
    BACKWARD = "before"


@dataclass(frozen=True)
class SinglePage:
    """Fetch one page of at most ``limit`` items."""

    limit: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class FullAggregation:
    """Walk every page and merge the items into one result."""


PaginationMode = Union[SinglePage, FullAggregation]


@dataclass(frozen=True)
class RequestOptions:
    """What the caller wants from a list endpoint.

    Attributes:
        mode: ``SinglePage`` or ``FullAggregation``.
        after: Cursor to start after (forward walk).
        before: Cursor to start before (backward walk).
    """

    mode: PaginationMode = field(default_factory=SinglePage)
    after: Optional[str] = None
    before: Optional[str] = None

    @classmethod
    def from_flags(
        cls,
        return_all: bool = False,
        limit: Optional[int] = None,
        after: Optional[str] = None,
        before: Optional[str] = None,
    ) -> RequestOptions:
        """Build options from the ``return_all``/``limit`` pair workflow hosts use.

        ``limit`` is ignored when ``return_all`` is set. A missing or
        non-positive ``limit`` falls back to the default page size. Empty
        cursor strings count as absent.
        """
        mode: PaginationMode
        if return_all is True:
            mode = FullAggregation()
        elif limit is not None and limit > 0:
            mode = SinglePage(limit=int(limit))
        else:
            mode = SinglePage()
        return cls(mode=mode, after=after or None, before=before or None)

    @property
    def return_all(self) -> bool:
        return isinstance(self.mode, FullAggregation)


@dataclass(frozen=True)
class Page:
    """One decoded response from a list endpoint."""

    items: List[Dict[str, Any]]
    has_more: bool = False
    raw: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, payload: Any) -> Page:
        if not isinstance(payload, Mapping):
            return cls(items=[], has_more=False, raw={})
        data = payload.get("data")
        items = list(data) if isinstance(data, list) else []
        return cls(items=items, has_more=bool(payload.get("has_more")), raw=payload)

    @property
    def next_cursor(self) -> Optional[str]:
        """The last item's ``id``, or None when no usable cursor exists."""
        if not self.items:
            return None
        last = self.items[-1]
        if not isinstance(last, Mapping):
            return None
        cursor = last.get("id")
        if isinstance(cursor, str) and cursor:
            return cursor
        return None


@dataclass
class ListResult:
    """The caller-facing list, identical in shape for one page or many."""

    data: List[Dict[str, Any]] = field(default_factory=list)
    has_more: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)
    object: str = "list"

    @classmethod
    def from_page(
        cls,
        page: Page,
        data: Optional[List[Dict[str, Any]]] = None,
        has_more: Optional[bool] = None,
    ) -> ListResult:
        """Wrap ``page``, optionally replacing its items and ``has_more``.

        Top-level fields other than ``object``, ``data`` and ``has_more`` are
        carried over into ``extra``.
        """
        extra = {
            key: value
            for key, value in page.raw.items()
            if key not in ("object", "data", "has_more")
        }
        return cls(
            data=list(page.items if data is None else data),
            has_more=page.has_more if has_more is None else has_more,
            extra=extra,
        )

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = dict(self.extra)
        result.update(object=self.object, data=list(self.data), has_more=self.has_more)
        return result
