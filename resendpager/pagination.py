"""Cursor pagination over Resend list endpoints.

Resend list endpoints take a ``limit`` and at most one of the ``after`` /
``before`` cursors, and answer ``{"object": "list", "data": [...],
"has_more": bool}``. A cursor is the ``id`` of the last item seen.

``Paginator.fetch_list`` either fetches one page or walks the cursor chain
to the end and merges every page into a single ``ListResult`` shaped like a
one-page response::

    fetcher = PageFetcher(Credentials("re_123"))
    everything = Paginator(fetcher).fetch_list(
        "/emails", RequestOptions(mode=FullAggregation())
    )
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from ._core._models import (
    FullAggregation,
    ListResult,
    Page,
    PaginationDirection,
    RequestOptions,
    SinglePage,
)
from ._core._query import build_query
from ._core._request import RequestConfig, request_json
from ._core._validators import require_single_direction
from .auth import Credentials
from .exceptions import InvalidArgument
from .system import PROD, System

logger = logging.getLogger(__name__)

Transport = Callable[[RequestConfig, Optional[str]], Any]


class PageFetcher:
    """Issues one authenticated GET per call through a transport.

    Parameters:
        credentials: API key sent as a bearer token.
        transport: Callable taking a ``RequestConfig`` and a bearer token and
            returning decoded JSON. Defaults to ``request_json``.
        system: API deployment that relative endpoints resolve against.
        config: Template for timeouts and retries of each request.
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: Transport = request_json,
        system: System = PROD,
        config: Optional[RequestConfig] = None,
    ) -> None:
        self.credentials = credentials
        self.system = system
        self._transport = transport
        self._config = config or RequestConfig()

    @classmethod
    def from_env(cls, transport: Transport = request_json) -> PageFetcher:
        """Build a fetcher from ``RESEND_API_KEY``, ``RESEND_API_URL``,
        ``RESEND_TIMEOUT`` and ``RESEND_MAX_RETRIES``."""
        return cls(
            Credentials.from_env(),
            transport=transport,
            system=System.from_env(),
            config=RequestConfig.from_env(),
        )

    def get_json(self, endpoint: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``endpoint`` and return the decoded document."""
        config = replace(
            self._config,
            method="GET",
            url=self.system.url(endpoint),
            params=dict(query or {}),
        )
        return self._transport(config, self.credentials.api_key)

    def fetch(self, endpoint: str, query: Mapping[str, Any]) -> Page:
        """Fetch one page of ``endpoint``."""
        page = Page.from_json(self.get_json(endpoint, query))
        logger.debug(
            "Fetched %s with %s: %d items, has_more=%s",
            endpoint,
            dict(query),
            len(page.items),
            page.has_more,
        )
        return page


class Paginator:
    """Turns caller pagination intent into one or more page fetches.

    Each call keeps its cursor and accumulator locally, so one paginator may
    serve concurrent callers.
    """

    def __init__(self, fetcher: PageFetcher, system: Optional[System] = None) -> None:
        self.fetcher = fetcher
        self.system = system or fetcher.system

    def fetch_list(
        self, url: str, options: RequestOptions, item_index: int = 0
    ) -> ListResult:
        """Return one page or the whole collection behind ``url``.

        Parameters:
            url: Endpoint path such as ``/emails`` or an absolute URL.
            options: Pagination mode and optional starting cursor.
            item_index: Workflow item being processed, reported on errors.

        Returns:
            With ``SinglePage``, the upstream page truncated to the limit.
            With ``FullAggregation``, every item in fetch order and
            ``has_more`` set to False.

        Raises:
            InvalidArgument: if both ``after`` and ``before`` are given, or
                the mode is neither ``SinglePage`` nor ``FullAggregation``.
            TransportError: if any page fails; nothing is returned then.
        """
        require_single_direction(options.after, options.before, item_index)

        if isinstance(options.mode, SinglePage):
            return self._fetch_single(url, options, options.mode)
        if not isinstance(options.mode, FullAggregation):
            raise InvalidArgument(
                f"Unknown pagination mode: {options.mode!r}",
                item_index=item_index,
                parameter="mode",
            )

        items: List[Dict[str, Any]] = []
        last_page: Optional[Page] = None
        for page in self._walk_from(url, options, self.system.max_pages):
            items.extend(page.items)
            last_page = page

        if last_page is None:
            return ListResult(data=items)
        return ListResult.from_page(last_page, data=items, has_more=False)

    def iter_pages(
        self, url: str, options: RequestOptions, item_index: int = 0
    ) -> Iterator[Page]:
        """Lazily walk every page reachable from the options' cursor.

        The mode of ``options`` is not consulted; the walk always uses the
        largest page size. Cursors are validated before the first fetch.
        """
        require_single_direction(options.after, options.before, item_index)
        return self._walk_from(url, options, self.system.max_pages)

    def walk(
        self,
        url: str,
        direction: PaginationDirection = PaginationDirection.FORWARD,
        cursor: Optional[str] = None,
        max_pages: Optional[int] = None,
    ) -> Iterator[Page]:
        """Yield pages of ``url`` in ``direction`` until the chain ends.

        The walk stops after a page that reports no more data, is empty, or
        whose last item carries no ``id``, and in any case after
        ``max_pages`` fetches.

        Raises:
            InvalidArgument: if ``max_pages`` is less than 1. Raised on call,
                before any fetch.
        """
        if max_pages is None:
            max_pages = self.system.max_pages
        if max_pages < 1:
            raise InvalidArgument(
                f"max_pages must be at least 1, got {max_pages}",
                parameter="max_pages",
            )
        return self._pages(url, direction, cursor, max_pages)

    def _pages(
        self,
        url: str,
        direction: PaginationDirection,
        cursor: Optional[str],
        max_pages: int,
    ) -> Iterator[Page]:
        page_size = self.system.max_page_size
        fetched = 0
        while True:
            page = self.fetcher.fetch(url, build_query(page_size, direction, cursor))
            fetched += 1
            yield page

            if not page.has_more or not page.items:
                return
            if fetched >= max_pages:
                logger.info(
                    "Stopped paginating %s after %d pages with more data pending",
                    url,
                    fetched,
                )
                return
            cursor = page.next_cursor
            if cursor is None:
                logger.debug("Last item on page %d of %s has no id", fetched, url)
                return

    def _walk_from(
        self, url: str, options: RequestOptions, max_pages: int
    ) -> Iterator[Page]:
        if options.before:
            return self.walk(url, PaginationDirection.BACKWARD, options.before, max_pages)
        return self.walk(url, PaginationDirection.FORWARD, options.after, max_pages)

    def _fetch_single(
        self, url: str, options: RequestOptions, mode: SinglePage
    ) -> ListResult:
        limit = mode.limit if mode.limit > 0 else self.system.default_page_size
        if options.before:
            query = build_query(limit, PaginationDirection.BACKWARD, options.before)
        else:
            query = build_query(limit, PaginationDirection.FORWARD, options.after)

        result = ListResult.from_page(self.fetcher.fetch(url, query))
        if len(result.data) > limit:
            result.data = result.data[:limit]
        return result


def fetch_list(
    url: str,
    options: RequestOptions,
    *,
    api_key: str,
    transport: Transport = request_json,
    system: System = PROD,
    item_index: int = 0,
) -> ListResult:
    """Shortcut for ``Paginator(PageFetcher(...)).fetch_list(...)``."""
    fetcher = PageFetcher(Credentials(api_key), transport=transport, system=system)
    return Paginator(fetcher).fetch_list(url, options, item_index=item_index)


__all__ = [
    "FullAggregation",
    "PageFetcher",
    "Paginator",
    "RequestOptions",
    "SinglePage",
    "Transport",
    "fetch_list",
]
