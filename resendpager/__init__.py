"""resendpager: cursor pagination for the Resend API.

resendpager turns "give me a page" or "give me everything" into the
``limit``/``after``/``before`` queries Resend list endpoints understand, and
merges multi-page walks into a single list shaped like one response.

Quick Start:
    ```python
    import resendpager

    resendpager.login()  # reads RESEND_API_KEY

    page = resendpager.list_resource("emails", limit=10)
    everything = resendpager.list_resource("domains", return_all=True)
    templates = resendpager.get_templates()
    ```

Main Functions:
    - `login()`: Store the API key used by the functions below
    - `list_resource()`: One page, or every page merged
    - `list_resources()`: Several independent listings at once
    - `get_templates()`, `get_segments()`, `get_topics()`: Picker options
    - `fetch_list()`: The pagination engine with explicit credentials
"""

import logging
from importlib.metadata import version

from ._core._models import (
    FullAggregation,
    ListResult,
    Page,
    PaginationDirection,
    RequestOptions,
    SinglePage,
)
from ._core._request import RequestConfig
from .api import (
    get_segments,
    get_template_variables,
    get_templates,
    get_topics,
    list_resource,
    list_resources,
    login,
)
from .auth import Auth, Credentials
from .exceptions import InvalidArgument, ResendPagerError, TransportError
from .fields import (
    build_template_send_variables,
    normalize_email_list,
    parse_template_variables,
)
from .options import Option, load_options
from .pagination import PageFetcher, Paginator, fetch_list
from .system import PROD, System

logger = logging.getLogger(__name__)

__all__ = [
    # api.py
    "login",
    "list_resource",
    "list_resources",
    "get_templates",
    "get_segments",
    "get_topics",
    "get_template_variables",
    # pagination.py
    "PageFetcher",
    "Paginator",
    "fetch_list",
    # models
    "FullAggregation",
    "ListResult",
    "Page",
    "PaginationDirection",
    "RequestOptions",
    "SinglePage",
    "RequestConfig",
    # options.py
    "Option",
    "load_options",
    # fields.py
    "normalize_email_list",
    "parse_template_variables",
    "build_template_send_variables",
    # auth.py
    "Auth",
    "Credentials",
    # exceptions.py
    "ResendPagerError",
    "InvalidArgument",
    "TransportError",
    # system.py
    "PROD",
    "System",
]

__version__ = version("resendpager")

_auth = Auth()


def __getattr__(name):  # type: ignore
    """Module-level getattr exposing the shared ``Auth`` as ``__auth__``.

    Other unhandled attributes raise as `AttributeError` as expected.
    """
    if name != "__auth__":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return _auth
