import logging
from concurrent.futures import Executor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import resendpager

from ._core._models import ListResult, RequestOptions
from ._core._request import RequestConfig, request_json
from .auth import Auth
from .exceptions import InvalidArgument
from .options import Option
from .options import get_segments as _get_segments
from .options import get_template_variables as _get_template_variables
from .options import get_templates as _get_templates
from .options import get_topics as _get_topics
from .pagination import PageFetcher, Paginator
from .parallel import execute_all, get_executor
from .system import System

logger = logging.getLogger(__name__)

RESOURCE_ENDPOINTS: Dict[str, str] = {
    "api-keys": "/api-keys",
    "audiences": "/audiences",
    "broadcasts": "/broadcasts",
    "contacts": "/audiences/{audience_id}/contacts",
    "domains": "/domains",
    "emails": "/emails",
    "segments": "/segments",
    "templates": "/templates",
    "topics": "/topics",
    "webhooks": "/webhooks",
}


def login(api_key: Optional[str] = None, strategy: str = "environment") -> Auth:
    """Store the API key used by the module-level functions.

    Parameters:
        api_key: Key to use directly. When omitted, ``RESEND_API_KEY`` is read.
        strategy: ``environment`` or ``direct``.

    Returns:
        The package-wide ``Auth`` instance.
    """
    return resendpager.__auth__.login(api_key=api_key, strategy=strategy)


def _fetcher() -> PageFetcher:
    credentials = resendpager.__auth__.get_credentials()
    return PageFetcher(
        credentials,
        transport=request_json,
        system=System.from_env(),
        config=RequestConfig.from_env(),
    )


def _endpoint(resource: str, audience_id: Optional[str]) -> str:
    try:
        endpoint = RESOURCE_ENDPOINTS[resource]
    except KeyError:
        raise InvalidArgument(
            f"Unknown resource {resource!r}; expected one of "
            f"{', '.join(sorted(RESOURCE_ENDPOINTS))}",
            parameter="resource",
        ) from None
    if "{audience_id}" in endpoint:
        if not audience_id:
            raise InvalidArgument(
                f"Listing {resource} requires an audience_id", parameter="audience_id"
            )
        endpoint = endpoint.format(audience_id=audience_id)
    return endpoint


def list_resource(
    resource: str,
    *,
    return_all: bool = False,
    limit: Optional[int] = None,
    after: Optional[str] = None,
    before: Optional[str] = None,
    audience_id: Optional[str] = None,
    item_index: int = 0,
) -> ListResult:
    """List a Resend resource, one page or all of it.

    Parameters:
        resource: One of the keys of ``RESOURCE_ENDPOINTS``, e.g. ``emails``.
        return_all: Walk every page and merge the results.
        limit: Page size for a single page; ignored with ``return_all``.
        after: Start after this id.
        before: Start before this id.
        audience_id: Required for ``contacts``.
        item_index: Workflow item being processed, reported on errors.

    Returns:
        A ``ListResult``; with ``return_all`` its ``has_more`` is False.

    Raises:
        InvalidArgument: for an unknown resource, both cursors, or no login.
        TransportError: if a request fails.
    """
    options = RequestOptions.from_flags(
        return_all=return_all, limit=limit, after=after, before=before
    )
    endpoint = _endpoint(resource, audience_id)
    return Paginator(_fetcher()).fetch_list(endpoint, options, item_index=item_index)


def list_resources(
    listings: Iterable[Mapping[str, Any]],
    parallel: Union[str, Executor, bool, None] = "threads",
    max_workers: Optional[int] = None,
) -> List[ListResult]:
    """Run several independent ``list_resource`` calls.

    Parameters:
        listings: Keyword arguments for each ``list_resource`` call.
        parallel: Executor choice, as accepted by ``get_executor``.
        max_workers: Thread count for the thread pool.

    Returns:
        One result per listing, in input order. If any listing fails its
        error is raised once all listings have finished.
    """
    executor = get_executor(parallel, max_workers=max_workers)
    try:
        return execute_all(
            executor,
            lambda kwargs: list_resource(**kwargs),
            [(dict(listing),) for listing in listings],
        )
    finally:
        if not isinstance(parallel, Executor):
            executor.shutdown()


def get_templates() -> List[Option]:
    """Template options for a picker, bounded to a few pages."""
    return _get_templates(_fetcher())


def get_segments() -> List[Option]:
    """Segment options for a picker, bounded to a few pages."""
    return _get_segments(_fetcher())


def get_topics() -> List[Option]:
    """Topic options for a picker, bounded to a few pages."""
    return _get_topics(_fetcher())


def get_template_variables(template_id: Optional[str]) -> List[Option]:
    """Variable options declared by ``template_id``."""
    return _get_template_variables(_fetcher(), template_id)
