"""Option lists for selection widgets.

These feed interactive pickers, so every walk is forward-only and bounded to
a handful of pages rather than exhausting the collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from ._core._models import PaginationDirection
from .pagination import PageFetcher, Paginator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Option:
    """A selectable entry: what the user sees and what gets submitted."""

    name: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


def project_option(item: Any) -> Optional[Option]:
    """Project a list item into an ``Option``; None if it has no ``id``."""
    if not isinstance(item, Mapping) or not item.get("id"):
        return None
    item_id = str(item["id"])
    name = item.get("name")
    return Option(name=f"{name} ({item_id})" if name else item_id, value=item_id)


def load_options(
    fetcher: PageFetcher, endpoint: str, max_pages: Optional[int] = None
) -> List[Option]:
    """Collect options from up to ``max_pages`` pages of ``endpoint``.

    Parameters:
        fetcher: Authenticated page fetcher.
        endpoint: List endpoint, e.g. ``/templates``.
        max_pages: Page bound; defaults to the system's option page bound.

    Returns:
        Options in upstream order, skipping items without an ``id``.
    """
    paginator = Paginator(fetcher)
    if max_pages is None:
        max_pages = paginator.system.max_option_pages

    options: List[Option] = []
    for page in paginator.walk(
        endpoint, PaginationDirection.FORWARD, max_pages=max_pages
    ):
        for item in page.items:
            option = project_option(item)
            if option is not None:
                options.append(option)
    return options


def get_templates(fetcher: PageFetcher) -> List[Option]:
    return load_options(fetcher, "/templates")


def get_segments(fetcher: PageFetcher) -> List[Option]:
    return load_options(fetcher, "/segments")


def get_topics(fetcher: PageFetcher) -> List[Option]:
    return load_options(fetcher, "/topics")


def get_template_variables(
    fetcher: PageFetcher, template_id: Optional[str]
) -> List[Option]:
    """List the variables a template declares.

    No request is made when ``template_id`` is blank or is still an
    unresolved ``{{ ... }}`` expression.
    """
    template_id = (template_id or "").strip()
    if not template_id or "{{" in template_id:
        return []

    template = fetcher.get_json(f"/templates/{quote(template_id, safe='')}")
    variables = template.get("variables") if isinstance(template, Mapping) else None
    if not isinstance(variables, list):
        logger.debug("Template %s declares no variables", template_id)
        return []

    options = []
    for variable in variables:
        if not isinstance(variable, Mapping) or not variable.get("key"):
            continue
        key = str(variable["key"])
        type_label = f" ({variable['type']})" if variable.get("type") else ""
        options.append(Option(name=f"{key}{type_label}", value=key))
    return options
